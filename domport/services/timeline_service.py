# ==============================================================================
# SERVICIO DE LÍNEA DE TIEMPO
# ==============================================================================
# Eventos de producción (por producto) y de seguimiento (por pedido).
# Siempre se devuelven ordenados por event_date.
# ==============================================================================

from typing import Any, Dict, List

from domport.models import TimelineEvent, TimelineEventType, TimelineStatus
from domport.services.api_client import ApiClient, ApiError


class TimelineService:
    """Consulta y alta de eventos de línea de tiempo."""

    VALID_TYPES = frozenset(t.value for t in TimelineEventType)
    VALID_STATUSES = frozenset(s.value for s in TimelineStatus)

    def __init__(self, api: ApiClient):
        self.api = api

    @staticmethod
    def _sorted(events: List[TimelineEvent]) -> List[TimelineEvent]:
        return sorted(events, key=lambda e: e.event_date or '')

    def get_all(self) -> List[TimelineEvent]:
        return self._sorted(self.api.get_timeline_events())

    def get_product_timeline(self, product_id: str) -> List[TimelineEvent]:
        return self._sorted(self.api.get_timeline_events_by_product(product_id))

    def get_order_timeline(self, order_id: str) -> List[TimelineEvent]:
        return self._sorted(self.api.get_timeline_events_by_order(order_id))

    def create_event(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Crea un evento (staff).

        Args:
            data: title, event_date obligatorios; event_type, status,
                  description, product_id / order_id opcionales

        Returns:
            Dict con ok, event o error
        """
        if not (data.get('title') or '').strip():
            return {'ok': False, 'error': 'Title is required'}
        if not data.get('event_date'):
            return {'ok': False, 'error': 'Event date is required'}
        if not data.get('product_id') and not data.get('order_id'):
            return {'ok': False, 'error': 'Event must reference a product or an order'}

        event_type = data.get('event_type') or TimelineEventType.GENERAL.value
        if event_type not in self.VALID_TYPES:
            return {'ok': False, 'error': f'Invalid event type: {event_type}'}

        status = data.get('status') or TimelineStatus.UPCOMING.value
        if status not in self.VALID_STATUSES:
            return {'ok': False, 'error': f'Invalid status: {status}'}

        payload = dict(data, event_type=event_type, status=status)
        try:
            event = self.api.create_timeline_event(payload)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        return {'ok': True, 'event': event.to_dict()}
