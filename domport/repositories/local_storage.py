# ==============================================================================
# LOCAL STORAGE - Almacenamiento persistente por dispositivo
# ==============================================================================
# Equivalente en servidor del localStorage del navegador.
# Cada navegador se identifica con la cookie DEVICE_COOKIE y tiene su propio
# espacio clave → string, que sobrevive al cierre del navegador.
#
# Formato de local_storage.json:
# {
#     "3f2a...": {"access_token": "eyJ...", "role": "admin", "theme": "light"},
#     "default": {...}
# }
# ==============================================================================

import os
from typing import Dict, List, Optional

from flask import g, has_request_context

from domport.repositories.base import DictRepository

DEFAULT_DEVICE = 'default'


def current_device_id() -> str:
    """
    Obtiene el dispositivo de la petición actual.
    Fuera de una petición Flask (scripts, tests de servicio) usa 'default'.
    """
    if has_request_context():
        return getattr(g, 'device_id', None) or DEFAULT_DEVICE
    return DEFAULT_DEVICE


class LocalStorage(DictRepository):
    """
    Repositorio clave/valor por dispositivo.

    Los valores se guardan como strings, igual que en el navegador.
    Si no se indica device_id se usa el de la petición actual.
    """

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Directorio donde vive local_storage.json
        """
        file_path = os.path.join(base_path, 'local_storage.json')
        super().__init__(file_path)

    def _device_data(self, device_id: Optional[str]) -> Dict[str, str]:
        device = device_id or current_device_id()
        return self.get_by_id(device) or {}

    def get_item(self, key: str, device_id: Optional[str] = None) -> Optional[str]:
        """
        Obtiene un valor.

        Returns:
            El string guardado o None si la clave no existe
        """
        return self._device_data(device_id).get(key)

    def set_item(self, key: str, value: str, device_id: Optional[str] = None) -> None:
        device = device_id or current_device_id()
        with self._file_lock:
            data = self._device_data(device)
            data[key] = str(value)
            self.update(device, data)

    def remove_item(self, key: str, device_id: Optional[str] = None) -> None:
        device = device_id or current_device_id()
        with self._file_lock:
            data = self._device_data(device)
            if key not in data:
                return
            del data[key]
            # Un dispositivo sin claves no deja rastro en el archivo
            if data:
                self.update(device, data)
            else:
                self.delete(device)

    def keys(self, device_id: Optional[str] = None) -> List[str]:
        return list(self._device_data(device_id).keys())

    def clear(self, device_id: Optional[str] = None) -> None:
        """Elimina todo el espacio del dispositivo."""
        self.delete(device_id or current_device_id())
