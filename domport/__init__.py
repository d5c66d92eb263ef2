"""DomPort - tienda de figuras y coleccionables de anime."""

__version__ = '0.1.0'
