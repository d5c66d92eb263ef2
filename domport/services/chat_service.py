# ==============================================================================
# SERVICIO DE CHAT DE SOPORTE
# ==============================================================================
# Salas entre un cliente y un agente del call center.
#
# ESTADOS DE SALA:
#   waiting → no hay agente online; el primer agente que responde la toma
#   active  → agente asignado
#   closed  → terminada por el cliente o el agente (no admite mensajes)
#
# La plantilla de agentes vive en staff.json; las contraseñas se guardan
# con hash de werkzeug.
# ==============================================================================

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from werkzeug.security import generate_password_hash

from domport.models import ChatMessage, ChatRoom, ChatStatus, StaffStatus, User
from domport.repositories.interfaces import IChatRepository
from domport.repositories.staff_repository import StaffRepository


class ChatService:
    """
    Servicio para salas de chat y plantilla de staff.
    """

    WELCOME_MESSAGE = 'Hello! Welcome to DomPort support. How can we help you today?'
    VALID_STAFF_STATUSES = frozenset(s.value for s in StaffStatus)

    def __init__(self, chat_repo: IChatRepository, staff_repo: StaffRepository):
        self.chat_repo = chat_repo
        self.staff_repo = staff_repo

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex[:12]

    def _message(self, sender_id: str, sender_name: str, text: str, is_staff: bool) -> ChatMessage:
        return ChatMessage(
            id=self._new_id(),
            sender_id=str(sender_id),
            sender_name=sender_name,
            message=text,
            timestamp=self._now(),
            is_staff=is_staff,
        )

    def _get_room(self, room_id: str) -> Optional[ChatRoom]:
        data = self.chat_repo.get_room(room_id)
        return ChatRoom.from_dict(data) if data else None

    def _save(self, room: ChatRoom) -> None:
        self.chat_repo.save_room(room.to_dict())

    def _available_staff(self) -> Optional[Dict[str, Any]]:
        for member in self.staff_repo.list_staff():
            if member.get('status') == StaffStatus.ONLINE.value:
                return member
        return None

    # =========================================================================
    # CLIENTE
    # =========================================================================

    def open_room(self, user: User) -> Dict[str, Any]:
        """
        Abre (o retoma) la sala del cliente.

        Si hay un agente online se asigna y envía el saludo;
        si no, la sala queda en 'waiting'.
        """
        for data in self.chat_repo.get_rooms_by_customer(user.owner_key):
            if data.get('status') != ChatStatus.CLOSED.value:
                return {'ok': True, 'room': data, 'resumed': True}

        room = ChatRoom(
            id=self._new_id(),
            customer_id=user.owner_key,
            customer_name=user.display_name,
            created_at=self._now(),
        )

        staff = self._available_staff()
        if staff:
            room.staff_id = staff['id']
            room.staff_name = staff.get('name', '')
            room.status = ChatStatus.ACTIVE.value
            room.messages.append(
                self._message(staff['id'], room.staff_name, self.WELCOME_MESSAGE, is_staff=True)
            )

        self._save(room)
        return {'ok': True, 'room': room.to_dict(), 'resumed': False}

    def get_room(self, room_id: str) -> Optional[ChatRoom]:
        return self._get_room(room_id)

    def send_message(self, room_id: str, user: User, text: str) -> Dict[str, Any]:
        """
        Mensaje del cliente. Se rechazan mensajes vacíos y salas cerradas.
        """
        text = (text or '').strip()
        if not text:
            return {'ok': False, 'error': 'Message cannot be empty'}

        room = self._get_room(room_id)
        if room is None:
            return {'ok': False, 'error': 'Chat room not found'}
        if room.customer_id != user.owner_key:
            return {'ok': False, 'error': 'Chat room belongs to another customer'}
        if room.status == ChatStatus.CLOSED.value:
            return {'ok': False, 'error': 'Chat has ended'}

        message = self._message(user.owner_key, user.display_name, text, is_staff=False)
        room.messages.append(message)
        self._save(room)
        return {'ok': True, 'message': message.to_dict(), 'room': room.to_dict()}

    def close_room(self, room_id: str) -> Dict[str, Any]:
        room = self._get_room(room_id)
        if room is None:
            return {'ok': False, 'error': 'Chat room not found'}
        room.status = ChatStatus.CLOSED.value
        self._save(room)
        return {'ok': True, 'room': room.to_dict()}

    # =========================================================================
    # STAFF
    # =========================================================================

    def list_rooms(self, status: str = None) -> List[ChatRoom]:
        rooms = [ChatRoom.from_dict(r) for r in self.chat_repo.get_all()]
        if status and status != 'all':
            rooms = [r for r in rooms if r.status == status]
        return rooms

    def staff_reply(self, room_id: str, staff_id: str, text: str) -> Dict[str, Any]:
        """
        Respuesta de un agente. Si la sala esperaba, el agente la toma.
        """
        text = (text or '').strip()
        if not text:
            return {'ok': False, 'error': 'Message cannot be empty'}

        staff = self.staff_repo.get_staff(staff_id)
        if staff is None:
            return {'ok': False, 'error': 'Staff member not found'}

        room = self._get_room(room_id)
        if room is None:
            return {'ok': False, 'error': 'Chat room not found'}
        if room.status == ChatStatus.CLOSED.value:
            return {'ok': False, 'error': 'Chat has ended'}

        if room.status == ChatStatus.WAITING.value:
            room.status = ChatStatus.ACTIVE.value
            room.staff_id = staff['id']
            room.staff_name = staff.get('name', '')

        message = self._message(staff['id'], staff.get('name', ''), text, is_staff=True)
        room.messages.append(message)
        self._save(room)
        return {'ok': True, 'message': message.to_dict(), 'room': room.to_dict()}

    def list_staff(self) -> List[Dict[str, Any]]:
        """Plantilla sin hashes de contraseña."""
        return [
            {k: v for k, v in member.items() if k != 'password_hash'}
            for member in self.staff_repo.list_staff()
        ]

    def add_staff(self, username: str, password: str, name: str, role: str = 'support') -> Dict[str, Any]:
        """
        Alta de agente. username, password y name son obligatorios.
        """
        username = (username or '').strip()
        name = (name or '').strip()
        if not username or not password or not name:
            return {'ok': False, 'error': 'Username, password and name are required'}

        if self.staff_repo.username_exists(username):
            return {'ok': False, 'error': f'Username {username} already exists'}

        staff_id = self.staff_repo.next_id()
        record = {
            'username': username,
            'name': name,
            'role': role or 'support',
            'status': StaffStatus.ONLINE.value,
            'lastSeen': self._now(),
            'password_hash': generate_password_hash(password),
        }
        self.staff_repo.update(staff_id, record)

        staff = {k: v for k, v in record.items() if k != 'password_hash'}
        staff['id'] = staff_id
        return {'ok': True, 'staff': staff}

    def set_staff_status(self, staff_id: str, status: str) -> Dict[str, Any]:
        if status not in self.VALID_STAFF_STATUSES:
            return {'ok': False, 'error': f'Invalid status: {status}'}
        staff = self.staff_repo.get_by_id(staff_id)
        if staff is None:
            return {'ok': False, 'error': 'Staff member not found'}
        staff['status'] = status
        staff['lastSeen'] = self._now()
        self.staff_repo.update(staff_id, staff)
        return {'ok': True, 'staff_id': str(staff_id), 'status': status}
