# ==============================================================================
# SERVICIO DE SOLICITUDES PERSONALIZADAS
# ==============================================================================
# Pedidos de artículos fuera del catálogo, gestionados a mano por el admin.
#
# PIPELINE:
#   pending → payment_pending → payment_verification → paid / ordered
#           → arrived_th → shipping → completed
#   'rejected' es una salida terminal desde las etapas previas al pago.
#   Un slip inválido devuelve la solicitud a payment_pending.
#
# Datos: blob 'custom_requests' (lista JSON completa, ver repositorio).
# El estado antiguo 'approved' se lee como 'payment_pending'.
# ==============================================================================

import math
import time
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from domport import config
from domport.models import CustomRequest, CustomRequestStatus, User, parse_price
from domport.repositories.interfaces import ICustomRequestRepository
from domport.services.catalog_service import CatalogService


S = CustomRequestStatus


class InvalidTransitionError(Exception):
    """Cambio de estado no permitido por el pipeline."""

    def __init__(self, current: str, target: str):
        super().__init__(f'Cannot move request from {current} to {target}')
        self.current = current
        self.target = target


class CustomRequestService:
    """
    Servicio para solicitudes personalizadas.

    Responsabilidades:
    - Estimar el costo (tasa por región + envío base)
    - Alta de solicitudes por el cliente
    - Pipeline de estados del admin
    - Pago por slip y confirmación de recepción por el cliente
    """

    # Tasas de conversión a moneda local
    RATES = {
        'US': 35,
        'JP': 0.24,
        'CN': 5.0,
        'KR': 0.027,
    }
    SHIPPING_BASE = 100

    LEGACY_STATUSES = {'approved': S.PAYMENT_PENDING.value}

    TRANSITIONS = {
        S.PENDING.value: {S.PAYMENT_PENDING.value, S.REJECTED.value},
        S.PAYMENT_PENDING.value: {S.PAYMENT_VERIFICATION.value, S.REJECTED.value},
        S.PAYMENT_VERIFICATION.value: {
            S.PAID.value, S.ORDERED.value, S.PAYMENT_PENDING.value, S.REJECTED.value,
        },
        S.PAID.value: {S.ORDERED.value},
        S.ORDERED.value: {S.ARRIVED_TH.value, S.SHIPPING.value},
        S.ARRIVED_TH.value: {S.SHIPPING.value},
        # shipping → shipping: corrección del número de seguimiento
        S.SHIPPING.value: {S.SHIPPING.value, S.COMPLETED.value},
        S.COMPLETED.value: set(),
        S.REJECTED.value: set(),
    }

    # Pre-orden generada desde una solicitud
    PREORDER_DEPOSIT_RATE = 0.2
    PREORDER_RELEASE_DAYS = 90
    PREORDER_FANDOM = 'Custom Request'
    PREORDER_CATEGORY = 'Other'
    PREORDER_IMAGE = '/images/covers/custom-request.webp'

    def __init__(self, repo: ICustomRequestRepository, catalog_service: Optional[CatalogService] = None):
        """
        Args:
            repo: Blob de solicitudes
            catalog_service: Necesario solo para create_preorder
        """
        self.repo = repo
        self.catalog_service = catalog_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def _new_id(self) -> str:
        """REQ + últimos 6 dígitos del timestamp en ms (único en el blob)."""
        stamp = int(time.time() * 1000)
        request_id = f'REQ{str(stamp)[-6:]}'
        while self.repo.exists(request_id):
            stamp += 1
            request_id = f'REQ{str(stamp)[-6:]}'
        return request_id

    def estimate_total(self, price: Any, region: str, quantity: Any = 1) -> Optional[float]:
        """
        Estimado en moneda local: precio × tasa × cantidad + envío base.

        Returns:
            Total estimado o None si la región o el precio no son válidos
        """
        rate = self.RATES.get((region or '').upper())
        if rate is None:
            return None
        try:
            price = float(price)
            quantity = int(quantity)
        except (TypeError, ValueError):
            return None
        return round(price * rate * quantity + self.SHIPPING_BASE, 2)

    @classmethod
    def normalize_status(cls, status: str) -> str:
        return cls.LEGACY_STATUSES.get(status, status)

    @staticmethod
    def is_owner(request: CustomRequest, user: Optional[User]) -> bool:
        """
        True si `user` es el dueño. Con user None (panel admin) no se restringe.
        Las solicitudes 'unknown' no pertenecen a ningún usuario.
        """
        if user is None:
            return True
        return bool(user.owner_key) and request.user_id == user.owner_key

    def _load(self, request_id: str) -> Optional[CustomRequest]:
        data = self.repo.get_request(request_id)
        if data is None:
            return None
        request = CustomRequest.from_dict(data)
        request.status = self.normalize_status(request.status)
        return request

    def _transition(self, request: CustomRequest, target: str) -> None:
        allowed = self.TRANSITIONS.get(request.status, set())
        if target not in allowed:
            raise InvalidTransitionError(request.status, target)
        request.status = target
        request.updated_at = self._now()

    def _apply(self, request_id: str, target: str, notes: str = None, **fields) -> Dict[str, Any]:
        """
        Carga, transiciona, aplica campos extra y persiste.
        Las notas nuevas reemplazan a las anteriores solo si se envían.
        """
        request = self._load(request_id)
        if request is None:
            return {'ok': False, 'error': 'Request not found'}

        try:
            self._transition(request, target)
        except InvalidTransitionError as e:
            return {'ok': False, 'error': str(e)}

        for attr, value in fields.items():
            setattr(request, attr, value)
        if notes:
            request.admin_notes = notes

        self.repo.update_request(request.to_dict())
        return {'ok': True, 'request': request.to_dict()}

    # =========================================================================
    # CLIENTE
    # =========================================================================

    def submit(self, data: Dict[str, Any], user: Optional[User]) -> Dict[str, Any]:
        """
        Registra una solicitud nueva en estado 'pending'.

        Args:
            data: productName, link, region, price, quantity, details
            user: Usuario actual (None → 'Unknown User')

        Returns:
            Dict con ok, request o error
        """
        product_name = (data.get('productName') or '').strip()
        link = (data.get('link') or '').strip()
        region = (data.get('region') or '').strip().upper()

        if not product_name or not link:
            return {'ok': False, 'error': 'Product name and link are required'}

        if region not in self.RATES:
            return {'ok': False, 'error': f'Unsupported region: {region or "-"}'}

        try:
            price = float(data.get('price'))
        except (TypeError, ValueError):
            return {'ok': False, 'error': 'Invalid price'}
        if price <= 0:
            return {'ok': False, 'error': 'Price must be greater than 0'}

        try:
            quantity = int(data.get('quantity', 1))
        except (TypeError, ValueError):
            return {'ok': False, 'error': 'Invalid quantity'}
        if quantity < 1:
            return {'ok': False, 'error': 'Quantity must be at least 1'}

        now = self._now()
        request = CustomRequest(
            id=self._new_id(),
            product_name=product_name,
            link=link,
            details=(data.get('details') or '').strip(),
            region=region,
            price=price,
            quantity=quantity,
            estimated_total=self.estimate_total(price, region, quantity),
            status=S.PENDING.value,
            user_name=(user.name or user.username) if user else 'Unknown User',
            user_email=(user.email or '-') if user else '-',
            user_id=(user.owner_key if user else '') or 'unknown',
            created_at=now,
            updated_at=now,
        )
        if not request.user_name:
            request.user_name = 'Unknown User'

        self.repo.add_request(request.to_dict())
        return {'ok': True, 'request': request.to_dict()}

    def list_requests(
        self,
        status: str = None,
        region: str = None,
        user_id: str = None,
    ) -> List[CustomRequest]:
        """
        Lista solicitudes con filtros ('all' o None = sin filtro).
        """
        if user_id is not None:
            records = self.repo.get_by_user(str(user_id))
        else:
            records = self.repo.load()

        requests = [CustomRequest.from_dict(r) for r in records]
        for request in requests:
            request.status = self.normalize_status(request.status)

        if status and status != 'all':
            requests = [r for r in requests if r.status == self.normalize_status(status)]
        if region and region != 'all':
            requests = [r for r in requests if r.region == region.upper()]
        return requests

    def get_request(self, request_id: str) -> Optional[CustomRequest]:
        return self._load(request_id)

    def submit_payment(
        self,
        request_id: str,
        slip: str,
        payment_date: str,
        payment_time: str,
        user: Optional[User],
    ) -> Dict[str, Any]:
        """
        El cliente adjunta el slip de transferencia.
        Se guarda una copia de la dirección de envío del perfil.
        """
        if not slip or not payment_date or not payment_time:
            return {'ok': False, 'error': 'Please upload the slip and enter payment date and time'}

        request = self._load(request_id)
        if request is None:
            return {'ok': False, 'error': 'Request not found'}
        if not self.is_owner(request, user):
            return {'ok': False, 'error': 'Request belongs to another user'}

        return self._apply(
            request_id,
            S.PAYMENT_VERIFICATION.value,
            payment_slip=slip,
            payment_date=payment_date,
            payment_time=payment_time,
            shipping_address=user.address_line() if user else '',
        )

    def confirm_received(self, request_id: str, user: Optional[User] = None) -> Dict[str, Any]:
        request = self._load(request_id)
        if request is None:
            return {'ok': False, 'error': 'Request not found'}
        if not self.is_owner(request, user):
            return {'ok': False, 'error': 'Request belongs to another user'}
        return self._apply(request_id, S.COMPLETED.value)

    # =========================================================================
    # ADMIN
    # =========================================================================

    def approve(self, request_id: str, shipping_cost: Any) -> Dict[str, Any]:
        """
        Aprueba la solicitud fijando el costo de envío.
        finalTotal = estimatedTotal + shippingCost.
        """
        cost = parse_price(shipping_cost) if shipping_cost not in (None, '') else 0.0
        if cost < 0:
            return {'ok': False, 'error': 'Shipping cost cannot be negative'}

        request = self._load(request_id)
        if request is None:
            return {'ok': False, 'error': 'Request not found'}

        return self._apply(
            request_id,
            S.PAYMENT_PENDING.value,
            shipping_cost=cost,
            final_total=round((request.estimated_total or 0) + cost, 2),
        )

    def reject(self, request_id: str, notes: str = None) -> Dict[str, Any]:
        return self._apply(request_id, S.REJECTED.value, notes=notes)

    def reject_slip(self, request_id: str, notes: str = 'Slip rejected, please re-upload') -> Dict[str, Any]:
        return self._apply(request_id, S.PAYMENT_PENDING.value, notes=notes)

    def mark_paid(self, request_id: str) -> Dict[str, Any]:
        return self._apply(request_id, S.PAID.value)

    def confirm_order(self, request_id: str) -> Dict[str, Any]:
        return self._apply(request_id, S.ORDERED.value, notes='Admin confirmed order.')

    def mark_arrived(self, request_id: str) -> Dict[str, Any]:
        return self._apply(request_id, S.ARRIVED_TH.value)

    def ship(self, request_id: str, tracking_number: str) -> Dict[str, Any]:
        tracking_number = (tracking_number or '').strip()
        if not tracking_number:
            return {'ok': False, 'error': 'Tracking number is required'}
        return self._apply(request_id, S.SHIPPING.value, tracking_number=tracking_number)

    def create_preorder(self, request_id: str) -> Dict[str, Any]:
        """
        Publica la solicitud como producto pre-orden y la pasa a 'ordered'.

        Depósito: 20% del estimado (redondeado). Lanzamiento: hoy + 90 días.
        Solo desde estados que permiten pasar a 'ordered', y una vez por solicitud.

        Returns:
            Dict con ok, request, product o error
        """
        if self.catalog_service is None:
            return {'ok': False, 'error': 'Catalog is not available'}

        request = self._load(request_id)
        if request is None:
            return {'ok': False, 'error': 'Request not found'}
        if request.preorder_id:
            return {'ok': False, 'error': f'Pre-order {request.preorder_id} already created'}
        if S.ORDERED.value not in self.TRANSITIONS.get(request.status, set()):
            return {'ok': False, 'error': str(InvalidTransitionError(request.status, S.ORDERED.value))}

        total = request.estimated_total or 0
        release = date.today() + timedelta(days=self.PREORDER_RELEASE_DAYS)
        created = self.catalog_service.create_product({
            'name': request.product_name,
            'price': total,
            'is_preorder': True,
            'deposit_amount': math.floor(total * self.PREORDER_DEPOSIT_RATE + 0.5),
            'release_date': release.isoformat(),
            'image': config.API_ROOT_URL + self.PREORDER_IMAGE,
            'description': (
                f'Custom request from {request.user_name}. '
                f'Details: {request.details}. Original link: {request.link}'
            ),
            'fandom': self.PREORDER_FANDOM,
            'category': self.PREORDER_CATEGORY,
        })
        if not created['ok']:
            return created

        preorder_id = created['product']['product_id']
        result = self._apply(
            request_id,
            S.ORDERED.value,
            notes=f'Pre-order created: ID {preorder_id}',
            preorder_id=preorder_id,
        )
        if result['ok']:
            result['product'] = created['product']
        return result

    def add_admin_notes(self, request_id: str, notes: str) -> Dict[str, Any]:
        """Notas sin cambio de estado."""
        request = self._load(request_id)
        if request is None:
            return {'ok': False, 'error': 'Request not found'}
        request.admin_notes = notes
        request.updated_at = self._now()
        self.repo.update_request(request.to_dict())
        return {'ok': True, 'request': request.to_dict()}

    def update_status(self, request_id: str, status: str, **kwargs) -> Dict[str, Any]:
        """
        Punto de entrada genérico del panel admin.

        Args:
            status: Estado destino
            kwargs: shipping_cost, tracking_number, notes según el destino
        """
        handlers = {
            S.PAYMENT_PENDING.value: lambda: (
                self.approve(request_id, kwargs.get('shipping_cost'))
                if self._current_status(request_id) == S.PENDING.value
                else self.reject_slip(request_id, kwargs.get('notes') or 'Slip rejected, please re-upload')
            ),
            S.REJECTED.value: lambda: self.reject(request_id, kwargs.get('notes')),
            S.PAID.value: lambda: self.mark_paid(request_id),
            S.ORDERED.value: lambda: self.confirm_order(request_id),
            S.ARRIVED_TH.value: lambda: self.mark_arrived(request_id),
            S.SHIPPING.value: lambda: self.ship(request_id, kwargs.get('tracking_number')),
            S.COMPLETED.value: lambda: self.confirm_received(request_id),
        }
        handler = handlers.get(status)
        if handler is None:
            return {'ok': False, 'error': f'Invalid status: {status}'}
        return handler()

    def _current_status(self, request_id: str) -> Optional[str]:
        request = self._load(request_id)
        return request.status if request else None
