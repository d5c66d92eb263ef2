# ==============================================================================
# REPOSITORIO DE SOLICITUDES PERSONALIZADAS
# ==============================================================================
# Encapsula el blob "custom_requests": una única lista JSON que se lee y se
# reescribe completa en cada cambio (custom_requests.json).
# ==============================================================================

import os
from typing import Any, Dict, List, Optional

from domport.repositories.base import ListRepository


class CustomRequestRepository(ListRepository):
    """
    Repositorio para solicitudes de productos fuera de catálogo.

    Formato de datos en custom_requests.json:
    [
        {"id": "REQ123456", "productName": "...", "status": "pending", ...},
        ...
    ]
    """

    STORAGE_KEY = 'custom_requests'

    def __init__(self, base_path: str):
        file_path = os.path.join(base_path, f'{self.STORAGE_KEY}.json')
        super().__init__(file_path)

    def load(self) -> List[Dict[str, Any]]:
        """
        Carga la lista completa de solicitudes.

        Returns:
            Lista en el orden en que se guardó
        """
        return self.get_all()

    def save(self, requests: List[Dict[str, Any]]) -> None:
        """
        Guarda la lista completa (reemplazo total).
        Guardar dos veces la misma lista deja el mismo contenido.

        Args:
            requests: Lista completa de solicitudes
        """
        self.save_all(list(requests))

    def get_request(self, request_id: str) -> Optional[Dict[str, Any]]:
        return self.find_by('id', request_id)

    def exists(self, request_id: str) -> bool:
        return self.get_request(request_id) is not None

    def add_request(self, request: Dict[str, Any]) -> None:
        self.append(request)

    def update_request(self, request: Dict[str, Any]) -> bool:
        """
        Reemplaza una solicitud existente por su id.

        Returns:
            True si existía y se actualizó
        """
        return self.replace_where('id', request.get('id'), request)

    def get_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        return self.find_all_by('userId', user_id)
