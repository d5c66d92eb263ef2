# ==============================================================================
# SERVICIO DE TICKETS DE SOPORTE
# ==============================================================================

from typing import Any, Dict, List, Optional

from domport.models import Ticket, TicketPriority, TicketStatus, User
from domport.services.api_client import ApiClient, ApiError


class TicketService:
    """
    Alta de tickets por el cliente y gestión por el admin.
    Responder un ticket lo pasa a 'in_progress'.
    """

    VALID_STATUSES = frozenset(s.value for s in TicketStatus)
    VALID_PRIORITIES = frozenset(p.value for p in TicketPriority)

    def __init__(self, api: ApiClient):
        self.api = api

    def create_ticket(self, data: Dict[str, Any], user: Optional[User]) -> Dict[str, Any]:
        """
        Args:
            data: subject y message obligatorios; category y priority opcionales
            user: Autor del ticket
        """
        subject = (data.get('subject') or '').strip()
        message = (data.get('message') or '').strip()
        if not subject or not message:
            return {'ok': False, 'error': 'Subject and message are required'}

        priority = data.get('priority') or TicketPriority.MEDIUM.value
        if priority not in self.VALID_PRIORITIES:
            return {'ok': False, 'error': f'Invalid priority: {priority}'}

        payload = {
            'subject': subject,
            'message': message,
            'category': data.get('category') or 'general',
            'priority': priority,
            'status': TicketStatus.OPEN.value,
        }
        if user is not None:
            payload.update({
                'userId': user.id,
                'userName': user.display_name,
                'userEmail': user.email,
            })

        try:
            ticket = self.api.create_ticket(payload)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'ticket': ticket.to_dict()}

    def list_tickets(self, status: str = None, priority: str = None) -> List[Ticket]:
        """Lista con filtros ('all' o None = sin filtro)."""
        tickets = self.api.get_tickets()
        if status and status != 'all':
            tickets = [t for t in tickets if t.status == status]
        if priority and priority != 'all':
            tickets = [t for t in tickets if t.priority == priority]
        return tickets

    def update_status(self, ticket_id: str, status: str) -> Dict[str, Any]:
        if status not in self.VALID_STATUSES:
            return {'ok': False, 'error': f'Invalid status: {status}'}
        try:
            ticket = self.api.update_ticket(ticket_id, {'status': status})
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'ticket': ticket.to_dict()}

    def respond(self, ticket_id: str, response: str) -> Dict[str, Any]:
        response = (response or '').strip()
        if not response:
            return {'ok': False, 'error': 'Response cannot be empty'}
        try:
            ticket = self.api.update_ticket(ticket_id, {
                'adminResponse': response,
                'status': TicketStatus.IN_PROGRESS.value,
            })
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'ticket': ticket.to_dict()}
