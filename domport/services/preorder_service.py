# ==============================================================================
# SERVICIO DE PRE-ÓRDENES
# ==============================================================================
# Reglas de la ficha de pre-orden:
#   - El producto debe estar marcado como pre-orden
#   - Límite de UNA unidad por cuenta: se rechaza si ya está en el carrito
#     o si aparece en un pedido anterior del usuario
# El depósito es informativo; el carrito guarda el precio completo.
# ==============================================================================

from typing import Any, Dict, List

from domport.models import Product, normalize_product_id
from domport.services.api_client import ApiError
from domport.services.cart_service import CartService
from domport.services.catalog_service import CatalogService
from domport.services.payment_service import PaymentService


class PreOrderService:
    """Servicio para la vitrina y compra de pre-órdenes."""

    LIMIT_IN_CART = 'This pre-order is already in your cart (limit 1 per account)'
    LIMIT_PURCHASED = 'You have already pre-ordered this item (limit 1 per account)'

    def __init__(
        self,
        catalog_service: CatalogService,
        cart_service: CartService,
        payment_service: PaymentService,
    ):
        self.catalog_service = catalog_service
        self.cart_service = cart_service
        self.payment_service = payment_service

    def list_preorders(self, query: str = None, fandom: str = None) -> List[Product]:
        return self.catalog_service.search_products(query=query, fandom=fandom, preorder=True)

    def get_detail(self, product_id: str) -> Dict[str, Any]:
        """
        Ficha de pre-orden.

        Returns:
            Dict con ok, product, deposit_amount, release_date
        """
        try:
            product = self.catalog_service.get_product(product_id)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        if not product.is_preorder:
            return {'ok': False, 'error': 'Product is not a pre-order'}

        return {
            'ok': True,
            'product': product.to_dict(),
            'deposit_amount': product.deposit_amount,
            'release_date': product.release_date,
        }

    def already_purchased(self, product_id: Any) -> bool:
        target = normalize_product_id(product_id)
        return any(
            normalize_product_id(item.product_id) == target
            for order in self.payment_service.get_user_orders()
            for item in order.items
        )

    def in_cart(self, product_id: Any) -> bool:
        target = normalize_product_id(product_id)
        return any(normalize_product_id(i.id) == target for i in self.cart_service.get_items())

    def reserve(self, product_id: str) -> Dict[str, Any]:
        """
        Agrega la pre-orden al carrito respetando el límite por cuenta.
        """
        detail = self.get_detail(product_id)
        if not detail['ok']:
            return detail

        product = Product.from_dict(detail['product'])

        try:
            purchased = self.already_purchased(product.product_id)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}

        if purchased:
            return {'ok': False, 'error': self.LIMIT_PURCHASED, 'limit': True}

        if self.in_cart(product.product_id):
            return {'ok': False, 'error': self.LIMIT_IN_CART, 'limit': True}

        return self.cart_service.add_item(product, 1)
