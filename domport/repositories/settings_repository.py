# ==============================================================================
# REPOSITORIO DE PREFERENCIAS
# ==============================================================================
# Preferencias de interfaz guardadas en el local storage del dispositivo.
# Hoy solo el tema ('dark' / 'light'), bajo la clave 'theme'.
# ==============================================================================

from typing import Optional

from domport.repositories.local_storage import LocalStorage


class SettingsRepository:
    """
    Repositorio para preferencias del dispositivo.
    """

    THEME_KEY = 'theme'
    VALID_THEMES = ('dark', 'light')
    DEFAULT_THEME = 'dark'

    def __init__(self, local_storage: LocalStorage):
        self.local_storage = local_storage

    def get_theme(self, device_id: Optional[str] = None) -> str:
        """
        Obtiene el tema preferido.

        Returns:
            'dark' o 'light' (cualquier otro valor guardado cae a 'dark')
        """
        theme = self.local_storage.get_item(self.THEME_KEY, device_id)
        if theme not in self.VALID_THEMES:
            return self.DEFAULT_THEME
        return theme

    def set_theme(self, theme: str, device_id: Optional[str] = None) -> str:
        """
        Establece el tema preferido.

        Returns:
            El tema efectivamente guardado
        """
        theme = (theme or '').strip().lower()
        if theme not in self.VALID_THEMES:
            theme = self.DEFAULT_THEME
        self.local_storage.set_item(self.THEME_KEY, theme, device_id)
        return theme

    def toggle_theme(self, device_id: Optional[str] = None) -> str:
        current = self.get_theme(device_id)
        return self.set_theme('light' if current == 'dark' else 'dark', device_id)
