# ==============================================================================
# SERVICIO DE CARRITO
# ==============================================================================
# Centraliza toda la lógica del carrito de compras.
# El carrito se almacena en la sesión de Flask (session['cart']), no se
# sincroniza con el backend hasta el checkout.
# ==============================================================================

from typing import Any, Dict, List

from flask import session

from domport.models import CartItem, Product


class CartService:
    """
    Servicio para gestión del carrito de compras.

    Responsabilidades:
    - Agregar/eliminar items (agregar uno existente suma cantidad)
    - Actualizar cantidades (≤ 0 elimina)
    - Calcular totales con precios que pueden venir como texto ("฿1,290")

    El carrito se almacena en session['cart'].
    """

    SESSION_KEY = 'cart'

    def _get_cart(self) -> List[Dict[str, Any]]:
        return session.get(self.SESSION_KEY, [])

    def _save_cart(self, cart: List[Dict[str, Any]]) -> None:
        session[self.SESSION_KEY] = cart
        session.modified = True

    def get_items(self) -> List[CartItem]:
        return [CartItem.from_dict(item) for item in self._get_cart()]

    def _summary(self, cart: List[Dict[str, Any]]) -> Dict[str, Any]:
        items = [CartItem.from_dict(i) for i in cart]
        return {
            'total_items': sum(i.quantity for i in items),
            'total_amount': round(sum(i.subtotal for i in items), 2),
            'items_count': len(items),
        }

    def get_cart(self) -> Dict[str, Any]:
        """
        Obtiene el carrito con totales calculados.

        Returns:
            Dict con items, total_items, total_amount, items_count
        """
        cart = self._get_cart()
        result = {'items': cart}
        result.update(self._summary(cart))
        return result

    def contains(self, product_id: Any) -> bool:
        target = str(product_id)
        return any(str(item.get('id')) == target for item in self._get_cart())

    def add_item(self, product: Product, quantity: int = 1) -> Dict[str, Any]:
        """
        Agrega un producto al carrito.

        Args:
            product: Producto del catálogo
            quantity: Unidades a sumar

        Returns:
            Dict con resultado (ok, error, cart)
        """
        if product is None:
            return {'ok': False, 'error': 'Product not found'}

        if quantity is None or quantity <= 0:
            return {'ok': False, 'error': 'Quantity must be greater than 0'}

        if not product.is_preorder and not product.in_stock:
            return {'ok': False, 'error': 'Product is out of stock'}

        cart = self._get_cart()

        existing = next((i for i in cart if str(i.get('id')) == product.product_id), None)
        if existing:
            existing['quantity'] = int(existing.get('quantity', 0)) + quantity
        else:
            cart.append(CartItem.from_product(product, quantity).to_dict())

        self._save_cart(cart)

        return {
            'ok': True,
            'message': 'Added to cart',
            'cart': self._summary(cart),
        }

    def remove_item(self, product_id: Any) -> Dict[str, Any]:
        """
        Elimina un item del carrito (no falla si no estaba).
        """
        target = str(product_id)
        new_cart = [i for i in self._get_cart() if str(i.get('id')) != target]
        self._save_cart(new_cart)
        return {'ok': True, 'message': 'Removed from cart', 'cart': self._summary(new_cart)}

    def update_quantity(self, product_id: Any, quantity: int) -> Dict[str, Any]:
        """
        Fija la cantidad de un item.

        Args:
            product_id: ID del producto
            quantity: Nueva cantidad (≤ 0 elimina el item)
        """
        if quantity <= 0:
            return self.remove_item(product_id)

        target = str(product_id)
        cart = self._get_cart()
        for item in cart:
            if str(item.get('id')) == target:
                item['quantity'] = quantity
                break
        else:
            return {'ok': False, 'error': 'Item not in cart'}

        self._save_cart(cart)
        return {'ok': True, 'message': 'Quantity updated', 'cart': self._summary(cart)}

    def clear_cart(self) -> Dict[str, Any]:
        self._save_cart([])
        return {'ok': True, 'message': 'Cart cleared', 'cart': self._summary([])}
