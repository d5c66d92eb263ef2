# ==============================================================================
# SERVICIO DE AUTENTICACIÓN
# ==============================================================================
# Login, registro y logout contra /auth del backend.
#
# El token vive donde lo dejaría el navegador:
#   - "Recordarme" activo   → local storage del dispositivo
#   - "Recordarme" inactivo → session storage (sesión de Flask)
# Junto al token se guardan 'role' y 'user' (JSON) para no pedirlos de nuevo.
# ==============================================================================

import json
from typing import Any, Dict, Optional

from domport.models import User, UserRole
from domport.repositories.local_storage import LocalStorage
from domport.repositories.interfaces import IKeyValueStorage
from domport.services.api_client import ApiClient, ApiError


class AuthService:
    """
    Servicio de sesión del usuario.

    Responsabilidades:
    - Resolver el token actual (local storage primero, luego sesión)
    - Login / registro / logout
    - Mantener el usuario cacheado (puntos, dirección)
    """

    TOKEN_KEY = 'access_token'
    ROLE_KEY = 'role'
    USER_KEY = 'user'

    def __init__(
        self,
        api: ApiClient,
        local_storage: LocalStorage,
        session_storage: IKeyValueStorage,
    ):
        self.api = api
        self.local_storage = local_storage
        self.session_storage = session_storage

    # =========================================================================
    # LECTURA DEL ESTADO
    # =========================================================================

    def _read(self, key: str) -> Optional[str]:
        value = self.local_storage.get_item(key)
        if value is None:
            value = self.session_storage.get_item(key)
        return value

    def get_token(self) -> Optional[str]:
        """Token Bearer vigente o None."""
        return self._read(self.TOKEN_KEY) or None

    def get_role(self) -> str:
        return self._read(self.ROLE_KEY) or UserRole.USER.value

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def is_admin(self) -> bool:
        return self.is_authenticated() and self.get_role() == UserRole.ADMIN.value

    def get_current_user(self) -> Optional[User]:
        """
        Usuario cacheado en el almacenamiento.

        Returns:
            User o None si no hay sesión o el JSON está corrupto
        """
        raw = self._read(self.USER_KEY)
        if not raw:
            return None
        try:
            return User.from_dict(json.loads(raw))
        except (TypeError, ValueError):
            return None

    def _storage_in_use(self):
        if self.local_storage.get_item(self.TOKEN_KEY) is not None:
            return self.local_storage
        return self.session_storage

    # =========================================================================
    # OPERACIONES
    # =========================================================================

    def login(self, username: str, password: str, remember_me: bool = False) -> Dict[str, Any]:
        """
        Inicia sesión.

        Args:
            username: Usuario
            password: Contraseña
            remember_me: True para persistir en el dispositivo

        Returns:
            Dict con ok, role, user o error
        """
        username = (username or '').strip()
        if not username or not password:
            return {'ok': False, 'error': 'Username and password are required'}

        try:
            data = self.api.login(username, password)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        token = data.get('access_token') if isinstance(data, dict) else None
        if not token:
            return {'ok': False, 'error': 'Login response did not include a token'}

        user_data = dict(data.get('user') or {})
        # Sin id del backend, el username identifica al dueño de los datos locales
        if not user_data.get('username'):
            user_data['username'] = username
        role = data.get('role') or user_data.get('role') or UserRole.USER.value
        user_data.setdefault('role', role)

        # Un solo almacenamiento activo a la vez
        self.logout()
        storage = self.local_storage if remember_me else self.session_storage
        storage.set_item(self.TOKEN_KEY, token)
        storage.set_item(self.ROLE_KEY, role)
        storage.set_item(self.USER_KEY, json.dumps(user_data))

        return {'ok': True, 'role': role, 'user': User.from_dict(user_data).to_dict()}

    def register(
        self,
        username: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> Dict[str, Any]:
        """
        Registra una cuenta nueva.
        Las contraseñas se comparan ANTES de llamar al backend.
        """
        username = (username or '').strip()
        email = (email or '').strip()
        if not username or not email or not password:
            return {'ok': False, 'error': 'All fields are required'}

        if password != confirm_password:
            return {'ok': False, 'error': 'Passwords do not match'}

        try:
            self.api.register(username, email, password)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        return {'ok': True, 'username': username}

    def logout(self) -> None:
        for storage in (self.local_storage, self.session_storage):
            storage.remove_item(self.TOKEN_KEY)
            storage.remove_item(self.ROLE_KEY)
            storage.remove_item(self.USER_KEY)

    def update_user(self, changes: Dict[str, Any]) -> Optional[User]:
        """
        Mezcla cambios en el usuario cacheado (mismo almacenamiento del token).

        Returns:
            Usuario actualizado o None si no hay sesión
        """
        user = self.get_current_user()
        if user is None:
            return None
        merged = user.to_dict()
        merged.update(changes)
        self._storage_in_use().set_item(self.USER_KEY, json.dumps(merged))
        return User.from_dict(merged)

    def save_profile(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Guarda datos de perfil/dirección en el backend y en la caché local.
        """
        user = self.get_current_user()
        if user is None:
            return {'ok': False, 'error': 'Not logged in'}

        allowed = {k: v for k, v in changes.items() if k in ('name',) + User.ADDRESS_FIELDS}
        if not allowed.get('name', user.name) or not allowed.get('phone', user.phone):
            return {'ok': False, 'error': 'Name and phone are required'}

        try:
            updated = self.api.update_user(user.id, allowed)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        # El backend puede devolver el registro completo o solo un acuse
        returned = updated.to_dict()
        merged = dict(allowed)
        merged.update({k: returned[k] for k in allowed if returned.get(k)})
        user = self.update_user(merged)
        return {'ok': True, 'user': user.to_dict()}
