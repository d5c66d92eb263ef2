# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Las rutas solo orquestan request → service → response.
#
# ESTRUCTURA:
# ├── api_client.py             → Cliente HTTP del backend (ApiClient, ApiError)
# ├── auth_service.py           → Login, registro, logout, usuario cacheado
# ├── catalog_service.py        → Productos, categorías, fandoms
# ├── cart_service.py           → Carrito en sesión
# ├── payment_service.py        → Checkout, envío, puntos
# ├── preorder_service.py       → Pre-órdenes (límite 1 por cuenta)
# ├── timeline_service.py       → Líneas de tiempo de producción/pedido
# ├── custom_request_service.py → Pipeline de solicitudes personalizadas
# ├── chat_service.py           → Chat de soporte y plantilla de staff
# ├── ticket_service.py         → Tickets de soporte
# └── user_service.py           → Administración de usuarios
# ==============================================================================

from .api_client import ApiClient, ApiError
from .auth_service import AuthService
from .catalog_service import CatalogService
from .cart_service import CartService
from .payment_service import PaymentService
from .preorder_service import PreOrderService
from .timeline_service import TimelineService
from .custom_request_service import CustomRequestService, InvalidTransitionError
from .chat_service import ChatService
from .ticket_service import TicketService
from .user_service import UserService

__all__ = [
    'ApiClient',
    'ApiError',
    'AuthService',
    'CatalogService',
    'CartService',
    'PaymentService',
    'PreOrderService',
    'TimelineService',
    'CustomRequestService',
    'InvalidTransitionError',
    'ChatService',
    'TicketService',
    'UserService',
]
