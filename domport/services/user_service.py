# ==============================================================================
# SERVICIO DE USUARIOS (ADMIN)
# ==============================================================================
# Administración de cuentas contra /api/users:
#   - Listado separado en activos / bloqueados / eliminados
#   - Bloqueo (blacklist) y desbloqueo
#   - Borrado lógico y restauración
#   - Ficha de usuario con sus pedidos
#
# Un admin no puede bloquearse ni eliminarse a sí mismo.
# ==============================================================================

from typing import Any, Dict, List, Optional

from domport.models import User
from domport.services.api_client import ApiClient, ApiError


class UserService:
    """
    Servicio para gestión de usuarios desde el panel admin.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    @staticmethod
    def partition(users: List[User]) -> Dict[str, List[User]]:
        """
        Separa usuarios por estado.
        Un usuario eliminado cuenta solo como eliminado, aunque esté bloqueado.

        Returns:
            Dict con 'active', 'blacklisted', 'deleted'
        """
        return {
            'active': [u for u in users if not u.is_blacklisted and not u.is_deleted],
            'blacklisted': [u for u in users if u.is_blacklisted and not u.is_deleted],
            'deleted': [u for u in users if u.is_deleted],
        }

    def list_users(self) -> Dict[str, List[Dict[str, Any]]]:
        groups = self.partition(self.api.get_users())
        return {name: [u.to_dict() for u in users] for name, users in groups.items()}

    def get_user_detail(self, user_id: str) -> Dict[str, Any]:
        """
        Ficha del usuario con sus pedidos.

        Returns:
            Dict con ok, user, orders, total_spent
        """
        try:
            user = self.api.get_user(user_id)
            orders = [o for o in self.api.get_orders() if o.user_id == str(user_id)]
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        return {
            'ok': True,
            'user': user.to_dict(),
            'orders': [o.to_dict() for o in orders],
            'total_spent': round(sum(o.total_amount for o in orders), 2),
        }

    def _guard_self(self, user_id: str, acting_user: Optional[User]) -> Optional[Dict[str, Any]]:
        if acting_user is not None and str(user_id) == acting_user.id:
            return {'ok': False, 'error': 'You cannot modify your own account from here'}
        return None

    def toggle_blacklist(self, user_id: str, acting_user: Optional[User] = None) -> Dict[str, Any]:
        """
        Invierte el bloqueo del usuario.

        Returns:
            Dict con ok, user_id, is_blacklisted
        """
        blocked = self._guard_self(user_id, acting_user)
        if blocked:
            return blocked

        try:
            user = self.api.get_user(user_id)
            new_status = not user.is_blacklisted
            self.api.update_user(user_id, {'isBlacklisted': new_status})
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        return {'ok': True, 'user_id': str(user_id), 'is_blacklisted': new_status}

    def delete_user(self, user_id: str, acting_user: Optional[User] = None) -> Dict[str, Any]:
        blocked = self._guard_self(user_id, acting_user)
        if blocked:
            return blocked
        try:
            self.api.delete_user(user_id)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'user_id': str(user_id)}

    def restore_user(self, user_id: str) -> Dict[str, Any]:
        try:
            self.api.restore_user(user_id)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'user_id': str(user_id)}
