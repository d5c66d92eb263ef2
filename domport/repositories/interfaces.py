# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
# Contratos que usan los servicios. Permiten:
#   - Cambiar JSON por otro almacenamiento sin tocar services/
#   - Pasar dobles de prueba en los tests
# ==============================================================================

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class IKeyValueStorage(Protocol):
    """
    Almacenamiento clave → string al estilo del navegador.
    Implementado por LocalStorage y SessionStorage.
    """

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class ICustomRequestRepository(Protocol):
    """Persistencia del blob de solicitudes personalizadas."""

    def load(self) -> List[Dict[str, Any]]:
        ...

    def save(self, requests: List[Dict[str, Any]]) -> None:
        ...

    def get_request(self, request_id: str) -> Optional[Dict[str, Any]]:
        ...

    def add_request(self, request: Dict[str, Any]) -> None:
        ...

    def update_request(self, request: Dict[str, Any]) -> bool:
        ...

    def exists(self, request_id: str) -> bool:
        ...

    def get_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        ...


@runtime_checkable
class IChatRepository(Protocol):
    """Persistencia de salas de chat."""

    def get_all(self) -> List[Dict[str, Any]]:
        ...

    def get_room(self, room_id: str) -> Optional[Dict[str, Any]]:
        ...

    def get_rooms_by_customer(self, customer_id: str) -> List[Dict[str, Any]]:
        ...

    def save_room(self, room: Dict[str, Any]) -> None:
        ...
