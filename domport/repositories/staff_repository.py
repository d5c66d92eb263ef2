# ==============================================================================
# REPOSITORIO DE STAFF DE SOPORTE
# ==============================================================================
# Plantilla de agentes del call center en staff.json.
# Formato: {"<staff_id>": {"username", "name", "role", "status", "lastSeen"}}
# ==============================================================================

import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from domport.repositories.base import DictRepository


class StaffRepository(DictRepository):
    """Repositorio de agentes de soporte."""

    def __init__(self, base_path: str):
        file_path = os.path.join(base_path, 'staff.json')
        super().__init__(file_path)

    def _initial_data(self) -> Dict[str, Any]:
        # Un agente por defecto para que el chat tenga a quién asignar
        return {
            '1': {
                'username': 'support',
                'name': 'DomPort Support',
                'role': 'support',
                'status': 'online',
                'lastSeen': datetime.now(timezone.utc).isoformat(),
            }
        }

    def list_staff(self) -> List[Dict[str, Any]]:
        return [dict(data, id=staff_id) for staff_id, data in self.get_all().items()]

    def get_staff(self, staff_id: str) -> Optional[Dict[str, Any]]:
        data = self.get_by_id(staff_id)
        return dict(data, id=str(staff_id)) if data else None

    def username_exists(self, username: str) -> bool:
        return any(s.get('username') == username for s in self.get_all().values())

    def next_id(self) -> str:
        ids = [int(k) for k in self.get_all().keys() if str(k).isdigit()]
        return str(max(ids, default=0) + 1)
