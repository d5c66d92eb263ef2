# ==============================================================================
# ENTIDADES DEL DOMINIO - Registros que viajan con el backend
# ==============================================================================
# Cada entidad es un DTO plano: lo que el backend envía en JSON.
# No hay integridad referencial ni reglas de ciclo de vida en el cliente.
# Los campos tipo "estado" se guardan como string crudo: si el backend
# envía un valor nuevo, se conserva tal cual.
# ==============================================================================

import re
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum


# ==============================================================================
# ENUMERACIONES - Estados y tipos conocidos
# ==============================================================================

class UserRole(str, Enum):
    """Roles de usuario disponibles en el sistema."""
    USER = "user"
    ADMIN = "admin"


class OrderStatus(str, Enum):
    """Estados posibles de un pedido."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    """Métodos de pago aceptados por el backend."""
    CREDIT_CARD = "credit_card"
    PROMPTPAY = "promptpay"
    CASH_ON_DELIVERY = "cash_on_delivery"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class TimelineEventType(str, Enum):
    """Tipos de eventos de la línea de tiempo."""
    PRODUCTION = "production"
    SHIPPING = "shipping"
    QUALITY_CHECK = "quality_check"
    PAYMENT = "payment"
    GENERAL = "general"


class TimelineStatus(str, Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    DELAYED = "delayed"


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class CustomRequestStatus(str, Enum):
    """Etapas del pipeline manual de solicitudes personalizadas."""
    PENDING = "pending"
    PAYMENT_PENDING = "payment_pending"
    PAYMENT_VERIFICATION = "payment_verification"
    PAID = "paid"
    ORDERED = "ordered"
    ARRIVED_TH = "arrived_th"
    SHIPPING = "shipping"
    COMPLETED = "completed"
    REJECTED = "rejected"


class ChatStatus(str, Enum):
    ACTIVE = "active"
    WAITING = "waiting"
    CLOSED = "closed"


class StaffStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    BUSY = "busy"


# ==============================================================================
# UTILIDADES
# ==============================================================================

_PRICE_CLEANUP = re.compile(r'[^0-9.\-]+')


def parse_price(value: Any) -> float:
    """
    Convierte un precio a float.
    Acepta números o strings con símbolo de moneda y separadores ("฿1,290").

    Returns:
        Precio numérico (0.0 si no se puede interpretar)
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return 0.0
    cleaned = _PRICE_CLEANUP.sub('', value)
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


# Los ids del catálogo de demo llevan prefijo 'P'
_ID_PREFIX = re.compile(r'^[Pp](?=\d+$)')


def normalize_product_id(product_id: Any) -> str:
    """'P12' → '12'; cualquier otro id queda igual."""
    return _ID_PREFIX.sub('', str(product_id))


def _opt_float(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    return parse_price(value)


def _to_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _id_str(value: Any) -> str:
    return '' if value is None else str(value)


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


# ==============================================================================
# CATÁLOGO
# ==============================================================================

@dataclass
class Product:
    """
    Producto del catálogo (regular o pre-orden).

    Attributes:
        product_id: Identificador del backend
        price: Precio completo
        stock: Unidades disponibles
        is_preorder: True si se vende antes de terminar la fabricación
        release_date: Fecha estimada de lanzamiento (pre-orden)
        deposit_amount: Depósito parcial requerido (pre-orden)
    """
    product_id: str
    name: str
    description: str = ''
    price: float = 0.0
    category: str = ''
    fandom: str = ''
    image: str = ''
    stock: int = 0
    is_preorder: bool = False
    release_date: Optional[str] = None
    deposit_amount: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'product_id': self.product_id,
            'name': self.name,
            'description': self.description,
            'price': self.price,
            'category': self.category,
            'fandom': self.fandom,
            'image': self.image,
            'stock': self.stock,
            'is_preorder': self.is_preorder,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
        }
        if self.release_date is not None:
            d['release_date'] = self.release_date
        if self.deposit_amount is not None:
            d['deposit_amount'] = self.deposit_amount
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        return cls(
            product_id=_id_str(data.get('product_id', data.get('id'))),
            name=data.get('name', ''),
            description=data.get('description') or '',
            price=parse_price(data.get('price', 0)),
            category=data.get('category') or '',
            fandom=data.get('fandom') or '',
            image=data.get('image') or '',
            stock=_to_int(data.get('stock'), 0),
            is_preorder=bool(data.get('is_preorder', False)),
            release_date=data.get('release_date'),
            deposit_amount=_opt_float(data.get('deposit_amount')),
            created_at=data.get('created_at'),
            updated_at=data.get('updated_at'),
        )


@dataclass
class Fandom:
    """Franquicia/serie a la que pertenecen los productos."""
    fandom_id: str
    name: str
    description: str = ''
    image: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fandom_id': self.fandom_id,
            'name': self.name,
            'description': self.description,
            'image': self.image,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Fandom':
        return cls(
            fandom_id=_id_str(data.get('fandom_id', data.get('id'))),
            name=data.get('name', ''),
            description=data.get('description') or '',
            image=data.get('image') or '',
        )


@dataclass
class Category:
    category_id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {'category_id': self.category_id, 'name': self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        return cls(
            category_id=_id_str(data.get('category_id', data.get('id'))),
            name=data.get('name', ''),
        )


# ==============================================================================
# USUARIOS
# ==============================================================================

@dataclass
class User:
    """
    Cuenta de usuario tal como la devuelve el backend.

    Attributes:
        role: 'user' o 'admin'
        is_blacklisted: Cuenta bloqueada por un admin
        deleted_at: Marca de borrado lógico (None si está activa)
        points: Puntos de fidelidad acumulados
    """
    id: str
    username: str = ''
    email: str = ''
    name: str = ''
    role: str = UserRole.USER.value
    is_blacklisted: bool = False
    deleted_at: Optional[str] = None
    phone: str = ''
    house_number: str = ''
    sub_district: str = ''
    district: str = ''
    province: str = ''
    postal_code: str = ''
    points: int = 0

    ADDRESS_FIELDS = ('phone', 'house_number', 'sub_district', 'district', 'province', 'postal_code')

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_deleted(self) -> bool:
        return bool(self.deleted_at)

    @property
    def owner_key(self) -> str:
        """Clave de dueño para datos locales: id del backend o, sin id, el username."""
        return self.id or self.username

    @property
    def display_name(self) -> str:
        return self.name or self.username or 'Unknown User'

    def address_line(self) -> str:
        """Dirección completa en una sola línea."""
        parts = [self.name, self.phone, self.house_number, self.sub_district,
                 self.district, self.province, self.postal_code]
        return ' '.join(p for p in parts if p)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'isBlacklisted': self.is_blacklisted,
            'deletedAt': self.deleted_at,
            'phone': self.phone,
            'house_number': self.house_number,
            'sub_district': self.sub_district,
            'district': self.district,
            'province': self.province,
            'postal_code': self.postal_code,
            'points': self.points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        return cls(
            id=_id_str(data.get('id', data.get('user_id'))),
            username=data.get('username') or '',
            email=data.get('email') or '',
            name=data.get('name') or '',
            role=_enum_value(data.get('role')) or UserRole.USER.value,
            is_blacklisted=bool(data.get('isBlacklisted', data.get('is_blacklisted', False))),
            deleted_at=data.get('deletedAt', data.get('deleted_at')),
            phone=data.get('phone') or '',
            house_number=data.get('house_number') or '',
            sub_district=data.get('sub_district') or '',
            district=data.get('district') or '',
            province=data.get('province') or '',
            postal_code=data.get('postal_code') or '',
            points=_to_int(data.get('points'), 0),
        )


# ==============================================================================
# PEDIDOS Y PAGOS
# ==============================================================================

@dataclass
class OrderItem:
    item_id: str = ''
    order_id: str = ''
    product_id: str = ''
    quantity: int = 1
    price: float = 0.0
    name: str = ''

    @property
    def subtotal(self) -> float:
        return round(self.quantity * self.price, 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'item_id': self.item_id,
            'order_id': self.order_id,
            'product_id': self.product_id,
            'quantity': self.quantity,
            'price': self.price,
            'name': self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'OrderItem':
        return cls(
            item_id=_id_str(data.get('item_id', data.get('id'))),
            order_id=_id_str(data.get('order_id')),
            product_id=_id_str(data.get('product_id')),
            quantity=_to_int(data.get('quantity'), 1),
            price=parse_price(data.get('price', data.get('unit_price', 0))),
            name=data.get('name') or '',
        )


@dataclass
class Shipment:
    """Datos de envío de un pedido."""
    carrier: str = ''
    tracking_number: str = ''
    status: str = ''
    shipped_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'carrier': self.carrier,
            'tracking_number': self.tracking_number,
            'status': self.status,
            'shipped_at': self.shipped_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Shipment':
        return cls(
            carrier=data.get('carrier') or '',
            tracking_number=data.get('tracking_number', data.get('trackingNumber')) or '',
            status=data.get('status') or '',
            shipped_at=data.get('shipped_at'),
        )


@dataclass
class Order:
    """
    Pedido: agrega items, un estado y una dirección de envío.
    La dirección es de tipo libre (string o dict), como la envía el backend.
    """
    order_id: str
    user_id: str = ''
    total_amount: float = 0.0
    status: str = OrderStatus.PENDING.value
    shipping_address: Any = None
    created_at: Optional[str] = None
    items: List[OrderItem] = field(default_factory=list)
    shipping_fee: float = 0.0
    payment_status: Optional[str] = None
    shipment: Optional[Shipment] = None

    def contains_product(self, product_id: Any) -> bool:
        target = str(product_id)
        return any(item.product_id == target for item in self.items)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'order_id': self.order_id,
            'user_id': self.user_id,
            'total_amount': self.total_amount,
            'status': self.status,
            'shipping_address': self.shipping_address,
            'created_at': self.created_at,
            'items': [item.to_dict() for item in self.items],
            'shipping_fee': self.shipping_fee,
        }
        if self.payment_status is not None:
            d['payment_status'] = self.payment_status
        if self.shipment is not None:
            d['shipment'] = self.shipment.to_dict()
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Order':
        # El dueño puede venir como user_id, userId o user.id
        owner = data.get('user_id', data.get('userId'))
        if owner is None and isinstance(data.get('user'), dict):
            owner = data['user'].get('id')

        shipment = data.get('shipment')
        if shipment is None and (data.get('carrier') or data.get('trackingNumber')):
            shipment = {'carrier': data.get('carrier'), 'trackingNumber': data.get('trackingNumber')}

        return cls(
            order_id=_id_str(data.get('order_id', data.get('id'))),
            user_id=_id_str(owner),
            total_amount=parse_price(data.get('total_amount', data.get('totalAmount', data.get('total', 0)))),
            status=data.get('status') or OrderStatus.PENDING.value,
            shipping_address=data.get('shipping_address'),
            created_at=data.get('created_at', data.get('date')),
            items=[OrderItem.from_dict(i) for i in data.get('items') or []],
            shipping_fee=parse_price(data.get('shipping_fee', 0)),
            payment_status=data.get('payment_status'),
            shipment=Shipment.from_dict(shipment) if isinstance(shipment, dict) else None,
        )


@dataclass
class Payment:
    payment_id: str
    order_id: str
    payment_method: str
    amount: float
    status: str = PaymentStatus.PENDING.value
    transaction_id: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'payment_id': self.payment_id,
            'order_id': self.order_id,
            'payment_method': self.payment_method,
            'amount': self.amount,
            'status': self.status,
            'transaction_id': self.transaction_id,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Payment':
        return cls(
            payment_id=_id_str(data.get('payment_id', data.get('id'))),
            order_id=_id_str(data.get('order_id')),
            payment_method=data.get('payment_method') or '',
            amount=parse_price(data.get('amount', 0)),
            status=data.get('status') or PaymentStatus.PENDING.value,
            transaction_id=data.get('transaction_id'),
            created_at=data.get('created_at'),
        )


# ==============================================================================
# LÍNEA DE TIEMPO
# ==============================================================================

@dataclass
class TimelineEvent:
    """Evento de producción/envío asociado a un producto o a un pedido."""
    event_id: str
    title: str
    event_type: str = TimelineEventType.GENERAL.value
    description: str = ''
    event_date: str = ''
    status: str = TimelineStatus.UPCOMING.value
    product_id: Optional[str] = None
    order_id: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_id': self.event_id,
            'product_id': self.product_id,
            'order_id': self.order_id,
            'event_type': self.event_type,
            'title': self.title,
            'description': self.description,
            'event_date': self.event_date,
            'status': self.status,
            'created_at': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TimelineEvent':
        return cls(
            event_id=_id_str(data.get('event_id', data.get('id'))),
            title=data.get('title', ''),
            event_type=data.get('event_type') or TimelineEventType.GENERAL.value,
            description=data.get('description') or '',
            event_date=data.get('event_date') or '',
            status=data.get('status') or TimelineStatus.UPCOMING.value,
            product_id=data.get('product_id'),
            order_id=data.get('order_id'),
            created_at=data.get('created_at'),
        )


# ==============================================================================
# SOPORTE
# ==============================================================================

@dataclass
class Ticket:
    """Ticket de soporte abierto por un cliente."""
    id: str
    subject: str
    message: str
    category: str = 'general'
    priority: str = TicketPriority.MEDIUM.value
    status: str = TicketStatus.OPEN.value
    user_id: str = ''
    user_name: str = ''
    user_email: str = ''
    admin_response: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'subject': self.subject,
            'message': self.message,
            'category': self.category,
            'priority': self.priority,
            'status': self.status,
            'userId': self.user_id,
            'userName': self.user_name,
            'userEmail': self.user_email,
            'adminResponse': self.admin_response,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Ticket':
        return cls(
            id=_id_str(data.get('id', data.get('ticket_id'))),
            subject=data.get('subject', ''),
            message=data.get('message', ''),
            category=data.get('category') or 'general',
            priority=data.get('priority') or TicketPriority.MEDIUM.value,
            status=data.get('status') or TicketStatus.OPEN.value,
            user_id=_id_str(data.get('userId', data.get('user_id'))),
            user_name=data.get('userName', data.get('user_name')) or '',
            user_email=data.get('userEmail', data.get('user_email')) or '',
            admin_response=data.get('adminResponse', data.get('admin_response')),
            created_at=data.get('createdAt', data.get('created_at')),
            updated_at=data.get('updatedAt', data.get('updated_at')),
        )


@dataclass
class ChatMessage:
    id: str
    sender_id: str
    sender_name: str
    message: str
    timestamp: str
    is_staff: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'senderId': self.sender_id,
            'senderName': self.sender_name,
            'message': self.message,
            'timestamp': self.timestamp,
            'isStaff': self.is_staff,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChatMessage':
        return cls(
            id=_id_str(data.get('id')),
            sender_id=_id_str(data.get('senderId')),
            sender_name=data.get('senderName', ''),
            message=data.get('message', ''),
            timestamp=data.get('timestamp', ''),
            is_staff=bool(data.get('isStaff', False)),
        )


@dataclass
class ChatRoom:
    """
    Sala de chat entre un cliente y el staff.
    Sin staff asignado la sala queda en 'waiting'.
    """
    id: str
    customer_id: str
    customer_name: str
    staff_id: str = ''
    staff_name: str = ''
    messages: List[ChatMessage] = field(default_factory=list)
    status: str = ChatStatus.WAITING.value
    created_at: str = ''

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'customerId': self.customer_id,
            'customerName': self.customer_name,
            'staffId': self.staff_id,
            'staffName': self.staff_name,
            'messages': [m.to_dict() for m in self.messages],
            'status': self.status,
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ChatRoom':
        return cls(
            id=_id_str(data.get('id')),
            customer_id=_id_str(data.get('customerId')),
            customer_name=data.get('customerName', ''),
            staff_id=_id_str(data.get('staffId')),
            staff_name=data.get('staffName', ''),
            messages=[ChatMessage.from_dict(m) for m in data.get('messages') or []],
            status=data.get('status') or ChatStatus.WAITING.value,
            created_at=data.get('createdAt', ''),
        )


# ==============================================================================
# SOLICITUDES PERSONALIZADAS
# ==============================================================================

@dataclass
class CustomRequest:
    """
    Solicitud de un cliente para conseguir un artículo fuera del catálogo.

    Attributes:
        region: Mercado de origen (US, JP, CN, KR)
        price: Precio en la moneda de la región
        estimated_total: Estimado en moneda local (tasa + envío base)
        shipping_cost: Costo de envío fijado por el admin al aprobar
        final_total: estimated_total + shipping_cost
        preorder_id: Producto pre-orden creado a partir de la solicitud
    """
    id: str
    product_name: str
    link: str
    region: str
    price: float
    quantity: int
    estimated_total: float
    status: str = CustomRequestStatus.PENDING.value
    details: str = ''
    user_name: str = 'Unknown User'
    user_email: str = '-'
    user_id: str = 'unknown'
    created_at: str = ''
    updated_at: str = ''
    admin_notes: Optional[str] = None
    shipping_cost: Optional[float] = None
    final_total: Optional[float] = None
    tracking_number: Optional[str] = None
    payment_slip: Optional[str] = None
    payment_date: Optional[str] = None
    payment_time: Optional[str] = None
    shipping_address: Optional[str] = None
    preorder_id: Optional[str] = None

    # Claves opcionales: solo se persisten si tienen valor
    _OPTIONAL = (
        ('adminNotes', 'admin_notes'),
        ('shippingCost', 'shipping_cost'),
        ('finalTotal', 'final_total'),
        ('trackingNumber', 'tracking_number'),
        ('paymentSlip', 'payment_slip'),
        ('paymentDate', 'payment_date'),
        ('paymentTime', 'payment_time'),
        ('shippingAddress', 'shipping_address'),
        ('preorderId', 'preorder_id'),
    )

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'id': self.id,
            'productName': self.product_name,
            'link': self.link,
            'details': self.details,
            'region': self.region,
            'price': self.price,
            'quantity': self.quantity,
            'estimatedTotal': self.estimated_total,
            'status': self.status,
            'userName': self.user_name,
            'userEmail': self.user_email,
            'userId': self.user_id,
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }
        for key, attr in self._OPTIONAL:
            value = getattr(self, attr)
            if value is not None:
                d[key] = value
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CustomRequest':
        return cls(
            id=_id_str(data.get('id')),
            product_name=data.get('productName', ''),
            link=data.get('link', ''),
            details=data.get('details') or '',
            region=data.get('region', ''),
            price=parse_price(data.get('price', 0)),
            quantity=_to_int(data.get('quantity'), 1),
            estimated_total=parse_price(data.get('estimatedTotal', 0)),
            status=data.get('status') or CustomRequestStatus.PENDING.value,
            user_name=data.get('userName') or 'Unknown User',
            user_email=data.get('userEmail') or '-',
            user_id=_id_str(data.get('userId')) or 'unknown',
            created_at=data.get('createdAt', ''),
            updated_at=data.get('updatedAt', ''),
            admin_notes=data.get('adminNotes'),
            shipping_cost=_opt_float(data.get('shippingCost')),
            final_total=_opt_float(data.get('finalTotal')),
            tracking_number=data.get('trackingNumber'),
            payment_slip=data.get('paymentSlip'),
            payment_date=data.get('paymentDate'),
            payment_time=data.get('paymentTime'),
            shipping_address=data.get('shippingAddress'),
            preorder_id=_id_str(data.get('preorderId')) or None,
        )


# ==============================================================================
# CARRITO
# ==============================================================================

@dataclass
class CartItem:
    """
    Item en el carrito (vive en la sesión).
    El precio se guarda tal como lo mostró el catálogo (puede ser "฿1,290").
    """
    id: str
    name: str
    price: Any
    quantity: int = 1
    category: str = ''
    fandom: str = ''
    image: str = ''
    is_preorder: bool = False
    deposit: Optional[float] = None

    @property
    def unit_price(self) -> float:
        return parse_price(self.price)

    @property
    def subtotal(self) -> float:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'quantity': self.quantity,
            'category': self.category,
            'fandom': self.fandom,
            'image': self.image,
            'is_preorder': self.is_preorder,
        }
        if self.deposit is not None:
            d['deposit'] = self.deposit
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartItem':
        return cls(
            id=_id_str(data.get('id')),
            name=data.get('name', ''),
            price=data.get('price', 0),
            quantity=_to_int(data.get('quantity'), 1),
            category=data.get('category') or '',
            fandom=data.get('fandom') or '',
            image=data.get('image') or '',
            is_preorder=bool(data.get('is_preorder', False)),
            deposit=_opt_float(data.get('deposit')),
        )

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> 'CartItem':
        return cls(
            id=product.product_id,
            name=product.name,
            price=product.price,
            quantity=quantity,
            category=product.category,
            fandom=product.fandom,
            image=product.image,
            is_preorder=product.is_preorder,
            deposit=product.deposit_amount,
        )
