# ==============================================================================
# REPOSITORIO DE CHAT
# ==============================================================================
# Salas de chat de soporte en chat_rooms.json (lista JSON completa).
# ==============================================================================

import os
from typing import Any, Dict, List, Optional

from domport.repositories.base import ListRepository


class ChatRepository(ListRepository):
    """
    Repositorio de salas de chat.

    Formato de datos en chat_rooms.json:
    [
        {"id": "1", "customerId": "...", "status": "active", "messages": [...]},
        ...
    ]
    """

    def __init__(self, base_path: str):
        file_path = os.path.join(base_path, 'chat_rooms.json')
        super().__init__(file_path)

    def get_room(self, room_id: str) -> Optional[Dict[str, Any]]:
        return self.find_by('id', room_id)

    def get_rooms_by_customer(self, customer_id: str) -> List[Dict[str, Any]]:
        return self.find_all_by('customerId', customer_id)

    def save_room(self, room: Dict[str, Any]) -> None:
        """Inserta o reemplaza una sala."""
        with self._file_lock:
            if not self.replace_where('id', room.get('id'), room):
                self.append(room)
