# ==============================================================================
# CAPA DE MODELOS - Registros intercambiados con el backend
# ==============================================================================
# DTOs planos definidos con dataclasses:
#   - to_dict() / from_dict() para ir y volver del JSON del backend
#   - Sin reglas de negocio: esas viven en services/
# ==============================================================================

from .entities import (
    # Utilidades
    parse_price,
    normalize_product_id,

    # Usuarios
    User,
    UserRole,

    # Catálogo
    Product,
    Fandom,
    Category,

    # Pedidos y pagos
    Order,
    OrderItem,
    OrderStatus,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Shipment,

    # Línea de tiempo
    TimelineEvent,
    TimelineEventType,
    TimelineStatus,

    # Soporte
    Ticket,
    TicketStatus,
    TicketPriority,
    ChatRoom,
    ChatMessage,
    ChatStatus,
    StaffStatus,

    # Solicitudes personalizadas
    CustomRequest,
    CustomRequestStatus,

    # Carrito
    CartItem,
)

__all__ = [
    'parse_price',
    'normalize_product_id',

    'User',
    'UserRole',

    'Product',
    'Fandom',
    'Category',

    'Order',
    'OrderItem',
    'OrderStatus',
    'Payment',
    'PaymentMethod',
    'PaymentStatus',
    'Shipment',

    'TimelineEvent',
    'TimelineEventType',
    'TimelineStatus',

    'Ticket',
    'TicketStatus',
    'TicketPriority',
    'ChatRoom',
    'ChatMessage',
    'ChatStatus',
    'StaffStatus',

    'CustomRequest',
    'CustomRequestStatus',

    'CartItem',
]
