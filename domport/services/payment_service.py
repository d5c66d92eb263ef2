# ==============================================================================
# SERVICIO DE PAGOS
# ==============================================================================
# Centraliza la lógica del checkout:
#   - Totales (envío gratis sobre 1000)
#   - Validación del formulario de envío
#   - Creación del pedido y procesamiento del pago en el backend
#   - Puntos de fidelidad (1 punto por cada 100)
#
# El asistente de pago avanza form → processing → complete de forma
# síncrona dentro de una misma petición. El paso actual queda en la sesión.
# ==============================================================================

from typing import Any, Dict, List, Optional

from flask import session

from domport.models import Order, PaymentMethod, normalize_product_id
from domport.services.api_client import ApiClient, ApiError
from domport.services.auth_service import AuthService
from domport.services.cart_service import CartService


class PaymentService:
    """
    Servicio para checkout y pagos.

    Responsabilidades:
    - Calcular subtotal, envío y total
    - Validar datos de envío y carrito
    - Crear pedido + pago en el backend
    - Limpiar carrito y sumar puntos al terminar
    """

    FREE_SHIPPING_THRESHOLD = 1000
    SHIPPING_FEE = 50
    POINTS_UNIT = 100

    STEP_FORM = 'form'
    STEP_PROCESSING = 'processing'
    STEP_COMPLETE = 'complete'
    PAYMENT_STEPS = (STEP_FORM, STEP_PROCESSING, STEP_COMPLETE)

    SESSION_STEP_KEY = 'payment_step'

    # Método del formulario → método del backend
    METHOD_MAP = {
        'cash': PaymentMethod.CASH_ON_DELIVERY.value,
        'card': PaymentMethod.CREDIT_CARD.value,
        'promptpay': PaymentMethod.PROMPTPAY.value,
    }

    def __init__(
        self,
        api: ApiClient,
        cart_service: CartService,
        auth_service: AuthService,
    ):
        self.api = api
        self.cart_service = cart_service
        self.auth_service = auth_service

    # =========================================================================
    # CÁLCULOS
    # =========================================================================

    def calculate_totals(self, subtotal: float) -> Dict[str, float]:
        """
        Args:
            subtotal: Suma del carrito

        Returns:
            Dict con subtotal, shipping, total
        """
        subtotal = round(float(subtotal or 0), 2)
        shipping = 0 if subtotal > self.FREE_SHIPPING_THRESHOLD else self.SHIPPING_FEE
        return {'subtotal': subtotal, 'shipping': shipping, 'total': round(subtotal + shipping, 2)}

    def calculate_points(self, amount: float) -> int:
        """Un punto por cada 100 gastados (redondeo hacia abajo)."""
        try:
            amount = float(amount or 0)
        except (TypeError, ValueError):
            return 0
        return max(0, int(amount // self.POINTS_UNIT))

    def get_step(self) -> str:
        return session.get(self.SESSION_STEP_KEY, self.STEP_FORM)

    def _set_step(self, step: str) -> None:
        session[self.SESSION_STEP_KEY] = step

    def reset_wizard(self) -> None:
        self._set_step(self.STEP_FORM)

    # =========================================================================
    # VALIDACIÓN
    # =========================================================================

    def validate_form(self, form: Dict[str, Any]) -> Dict[str, Any]:
        """
        Valida el formulario de envío y el carrito.

        Returns:
            Dict {'ok': bool, 'error': str}
        """
        name = (form.get('name') or '').strip()
        phone = (form.get('phone') or '').strip()
        address = (form.get('address') or '').strip()

        if not name or not phone or not address:
            return {'ok': False, 'error': 'Please fill in name, phone and address'}

        method = form.get('payment_method') or 'cash'
        if method not in self.METHOD_MAP:
            return {'ok': False, 'error': f'Unsupported payment method: {method}'}

        if not self.cart_service.get_items():
            return {'ok': False, 'error': 'Cart is empty'}

        return {'ok': True}

    # =========================================================================
    # CHECKOUT
    # =========================================================================

    def _build_order_payload(self, form: Dict[str, Any], totals: Dict[str, float]) -> Dict[str, Any]:
        user = self.auth_service.get_current_user()
        items = []
        for item in self.cart_service.get_items():
            items.append({
                'product_id': normalize_product_id(item.id),
                'quantity': item.quantity,
                'unit_price': item.unit_price,
            })

        return {
            'user_id': user.id if user else None,
            'total_amount': totals['total'],
            'shipping_fee': totals['shipping'],
            'status': 'pending',
            'shipping_address': ' | '.join(
                (form.get(k) or '').strip() for k in ('name', 'phone', 'address')
            ),
            'items': items,
        }

    def checkout(self, form: Dict[str, Any]) -> Dict[str, Any]:
        """
        Ejecuta el asistente completo.

        Args:
            form: name, phone, address, payment_method ('cash', 'card', 'promptpay')

        Returns:
            Dict con ok, order, payment, totals, points_earned, step
            o ok=False con error y step='form'
        """
        validation = self.validate_form(form)
        if not validation['ok']:
            self.reset_wizard()
            return dict(validation, step=self.STEP_FORM)

        cart = self.cart_service.get_cart()
        totals = self.calculate_totals(cart['total_amount'])
        method = self.METHOD_MAP[form.get('payment_method') or 'cash']

        self._set_step(self.STEP_PROCESSING)

        try:
            order = self.api.create_order(self._build_order_payload(form, totals))
            payment = self.api.process_payment(order.order_id, method, totals['total'])
        except ApiError as e:
            self.reset_wizard()
            return {'ok': False, 'error': e.message, 'status': e.status, 'step': self.STEP_FORM}

        self.cart_service.clear_cart()

        points = self.calculate_points(totals['total'])
        user = self.auth_service.get_current_user()
        if user is not None and points > 0:
            self.auth_service.update_user({'points': user.points + points})

        self._set_step(self.STEP_COMPLETE)

        return {
            'ok': True,
            'step': self.STEP_COMPLETE,
            'order': order.to_dict(),
            'payment': payment.to_dict(),
            'totals': totals,
            'points_earned': points,
        }

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_order_payments(self, order_id: str) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.api.get_order_payments(order_id)]

    def get_user_orders(self, user_id: Optional[str] = None) -> List[Order]:
        """
        Pedidos del usuario (el backend devuelve todos; se filtra aquí).
        """
        if user_id is None:
            user = self.auth_service.get_current_user()
            if user is None:
                return []
            user_id = user.id
        return [o for o in self.api.get_orders() if o.user_id == str(user_id)]
