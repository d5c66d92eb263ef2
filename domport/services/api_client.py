# ==============================================================================
# CLIENTE DEL BACKEND REST
# ==============================================================================
# Único punto de salida HTTP de la aplicación. Responsabilidades:
#   - Construir la URL sobre una base fija (recursos en /api, auth en /auth)
#   - Adjuntar el token Bearer leído de local storage o session storage
#   - Serializar el cuerpo a JSON
#   - Normalizar los fallos en ApiError con un mensaje legible
#
# Cada llamada es UN intento: sin reintentos, sin caché, sin deduplicación.
# El error se propaga al llamador, que decide qué mostrar.
# ==============================================================================

from http.cookiejar import DefaultCookiePolicy
from typing import Any, Callable, Dict, List, Optional

import requests

from domport import config
from domport.models import (
    Category,
    Fandom,
    Order,
    Payment,
    Product,
    Ticket,
    TimelineEvent,
    User,
)
from domport.performance_logger import log_api_error, log_unauthorized, profile_function


class ApiError(Exception):
    """
    Error de una llamada al backend.

    Attributes:
        message: Mensaje del backend (campo 'message') o línea de estado
        status: Código HTTP (None si no hubo respuesta)
        payload: Cuerpo JSON de la respuesta de error, si lo hubo
    """

    def __init__(self, message: str, status: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    @property
    def is_unauthorized(self) -> bool:
        return self.status == 401


def stateless_session() -> requests.Session:
    """
    Sesión HTTP sin cookies. El cliente es único por proceso y atiende a todos
    los usuarios, así que un Set-Cookie del backend no debe guardarse.
    """
    session = requests.Session()
    session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
    return session


class ApiClient:
    """
    Cliente delgado sobre requests.

    Uso:
        client = ApiClient(token_provider=auth_service.get_token)
        products = client.get_products()

    Args:
        base_url: Raíz de los recursos (por defecto .../api)
        auth_url: Raíz de autenticación (por defecto .../auth)
        token_provider: Callable que devuelve el token actual o None
        http: Sesión HTTP (None = stateless_session(); en tests, un doble)
        timeout: Segundos; None = sin timeout
    """

    def __init__(
        self,
        base_url: str = None,
        auth_url: str = None,
        token_provider: Callable[[], Optional[str]] = None,
        http: Any = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or config.API_BASE_URL).rstrip('/')
        self.auth_url = (auth_url or config.AUTH_BASE_URL).rstrip('/')
        self.token_provider = token_provider
        self.http = http if http is not None else stateless_session()
        self.timeout = timeout if timeout is not None else config.API_TIMEOUT

    # =========================================================================
    # NÚCLEO
    # =========================================================================

    def _build_headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        token = self.token_provider() if self.token_provider else None
        if token:
            headers['Authorization'] = f'Bearer {token}'
        return headers

    @staticmethod
    def _safe_json(response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _error_message(response, payload: Any) -> str:
        """
        Mensaje de error: 'message' del JSON si existe,
        si no, la línea de estado HTTP.
        """
        if isinstance(payload, dict):
            message = payload.get('message')
            if isinstance(message, list):
                message = ', '.join(str(m) for m in message if m)
            if message:
                return str(message)
        reason = getattr(response, 'reason', '') or ''
        return f'API Error: {response.status_code} {reason}'.strip()

    @profile_function(name='Llamada al backend')
    def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        params: Dict[str, Any] = None,
        auth: bool = False,
    ) -> Any:
        """
        Ejecuta una petición y devuelve el JSON de la respuesta.

        Args:
            method: GET, POST, PUT, PATCH, DELETE
            endpoint: Ruta relativa ('/products/12')
            body: Cuerpo a serializar como JSON (opcional)
            params: Query string (opcional)
            auth: True para usar la raíz /auth en lugar de /api

        Returns:
            JSON parseado; {} si la respuesta es 204 o viene vacía

        Raises:
            ApiError: Respuesta no-2xx o fallo de red
        """
        url = f'{self.auth_url if auth else self.base_url}{endpoint}'
        headers = self._build_headers()

        try:
            response = self.http.request(
                method,
                url,
                headers=headers,
                json=body,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log_api_error(method, url, None, str(e))
            raise ApiError(f'API Error: {e}') from e

        status = response.status_code

        if status == 401:
            log_unauthorized(method, url)

        if not 200 <= status < 300:
            payload = self._safe_json(response)
            message = self._error_message(response, payload)
            log_api_error(method, url, status, message)
            raise ApiError(message, status=status, payload=payload)

        if status == 204 or not response.content:
            return {}

        return response.json()

    @staticmethod
    def _as_list(data: Any) -> List[Dict[str, Any]]:
        """Acepta tanto una lista como {'data': [...]}."""
        if isinstance(data, dict):
            data = data.get('data', [])
        return data if isinstance(data, list) else []

    # =========================================================================
    # AUTENTICACIÓN
    # =========================================================================

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """
        Returns:
            Dict del backend con al menos 'access_token'
        """
        return self.request('POST', '/login', {'username': username, 'password': password}, auth=True)

    def register(self, username: str, email: str, password: str) -> Dict[str, Any]:
        return self.request(
            'POST', '/register',
            {'username': username, 'email': email, 'password': password},
            auth=True,
        )

    # =========================================================================
    # PRODUCTOS Y CATEGORÍAS
    # =========================================================================

    def get_products(self) -> List[Product]:
        return [Product.from_dict(p) for p in self._as_list(self.request('GET', '/products'))]

    def get_product(self, product_id: str) -> Product:
        return Product.from_dict(self.request('GET', f'/products/{product_id}'))

    def create_product(self, product: Dict[str, Any]) -> Product:
        return Product.from_dict(self.request('POST', '/products', product))

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Product:
        return Product.from_dict(self.request('PUT', f'/products/{product_id}', changes))

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        return self.request('DELETE', f'/products/{product_id}')

    def get_categories(self) -> List[Category]:
        return [Category.from_dict(c) for c in self._as_list(self.request('GET', '/categories'))]

    # =========================================================================
    # FANDOMS
    # =========================================================================

    def get_fandoms(self) -> List[Fandom]:
        return [Fandom.from_dict(f) for f in self._as_list(self.request('GET', '/fandoms'))]

    def get_fandom(self, fandom_id: str) -> Fandom:
        return Fandom.from_dict(self.request('GET', f'/fandoms/{fandom_id}'))

    def create_fandom(self, fandom: Dict[str, Any]) -> Fandom:
        return Fandom.from_dict(self.request('POST', '/fandoms', fandom))

    def update_fandom(self, fandom_id: str, changes: Dict[str, Any]) -> Fandom:
        return Fandom.from_dict(self.request('PUT', f'/fandoms/{fandom_id}', changes))

    def delete_fandom(self, fandom_id: str) -> Dict[str, Any]:
        return self.request('DELETE', f'/fandoms/{fandom_id}')

    # =========================================================================
    # PEDIDOS
    # =========================================================================

    def get_orders(self) -> List[Order]:
        return [Order.from_dict(o) for o in self._as_list(self.request('GET', '/orders'))]

    def get_order(self, order_id: str) -> Order:
        return Order.from_dict(self.request('GET', f'/orders/{order_id}'))

    def create_order(self, order: Dict[str, Any]) -> Order:
        return Order.from_dict(self.request('POST', '/orders', order))

    def update_order_status(self, order_id: str, status: str) -> Order:
        return Order.from_dict(self.request('PATCH', f'/orders/{order_id}', {'status': status}))

    # =========================================================================
    # PAGOS
    # =========================================================================

    def process_payment(self, order_id: str, payment_method: str, amount: float) -> Payment:
        payload = {'order_id': order_id, 'payment_method': payment_method, 'amount': amount}
        return Payment.from_dict(self.request('POST', '/payments/process', payload))

    def get_order_payments(self, order_id: str) -> List[Payment]:
        data = self.request('GET', f'/payments/order/{order_id}')
        return [Payment.from_dict(p) for p in self._as_list(data)]

    # =========================================================================
    # LÍNEA DE TIEMPO
    # =========================================================================

    def get_timeline_events(self) -> List[TimelineEvent]:
        return [TimelineEvent.from_dict(e) for e in self._as_list(self.request('GET', '/timeline'))]

    def get_timeline_events_by_product(self, product_id: str) -> List[TimelineEvent]:
        data = self.request('GET', f'/timeline/product/{product_id}')
        return [TimelineEvent.from_dict(e) for e in self._as_list(data)]

    def get_timeline_events_by_order(self, order_id: str) -> List[TimelineEvent]:
        data = self.request('GET', f'/timeline/order/{order_id}')
        return [TimelineEvent.from_dict(e) for e in self._as_list(data)]

    def create_timeline_event(self, event: Dict[str, Any]) -> TimelineEvent:
        return TimelineEvent.from_dict(self.request('POST', '/timeline', event))

    # =========================================================================
    # TICKETS
    # =========================================================================

    def get_tickets(self) -> List[Ticket]:
        return [Ticket.from_dict(t) for t in self._as_list(self.request('GET', '/tickets'))]

    def create_ticket(self, ticket: Dict[str, Any]) -> Ticket:
        return Ticket.from_dict(self.request('POST', '/tickets', ticket))

    def update_ticket(self, ticket_id: str, changes: Dict[str, Any]) -> Ticket:
        return Ticket.from_dict(self.request('PATCH', f'/tickets/{ticket_id}', changes))

    # =========================================================================
    # USUARIOS
    # =========================================================================

    def get_users(self) -> List[User]:
        return [User.from_dict(u) for u in self._as_list(self.request('GET', '/users'))]

    def get_user(self, user_id: str) -> User:
        return User.from_dict(self.request('GET', f'/users/{user_id}'))

    def update_user(self, user_id: str, changes: Dict[str, Any]) -> User:
        return User.from_dict(self.request('PATCH', f'/users/{user_id}', changes))

    def delete_user(self, user_id: str) -> Dict[str, Any]:
        return self.request('DELETE', f'/users/{user_id}')

    def restore_user(self, user_id: str) -> Dict[str, Any]:
        return self.request('PATCH', f'/users/{user_id}/restore')
