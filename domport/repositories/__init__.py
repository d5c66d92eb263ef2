# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos locales
# ==============================================================================
# Todo lo que el front end guardaba en el navegador vive aquí:
#
# ESTRUCTURA:
# ├── interfaces.py                 → Protocolos (contratos para los servicios)
# ├── base.py                       → Clases base JSON (DictRepository, ListRepository)
# ├── local_storage.py              → local storage por dispositivo
# ├── session_storage.py            → session storage (sesión de Flask)
# ├── settings_repository.py        → Tema del dispositivo
# ├── custom_request_repository.py  → Blob custom_requests
# ├── chat_repository.py            → Salas de chat
# └── staff_repository.py           → Agentes de soporte
#
# Los datos del catálogo, pedidos y usuarios NO viven aquí: se piden al
# backend REST a través de services/api_client.py
# ==============================================================================

from .interfaces import (
    IKeyValueStorage,
    ICustomRequestRepository,
    IChatRepository,
)

from .base import BaseRepository, DictRepository, ListRepository
from .local_storage import LocalStorage, current_device_id
from .session_storage import SessionStorage
from .settings_repository import SettingsRepository
from .custom_request_repository import CustomRequestRepository
from .chat_repository import ChatRepository
from .staff_repository import StaffRepository

__all__ = [
    # Interfaces
    'IKeyValueStorage',
    'ICustomRequestRepository',
    'IChatRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',
    'ListRepository',

    # Implementaciones
    'LocalStorage',
    'current_device_id',
    'SessionStorage',
    'SettingsRepository',
    'CustomRequestRepository',
    'ChatRepository',
    'StaffRepository',
]
