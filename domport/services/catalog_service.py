# ==============================================================================
# SERVICIO DE CATÁLOGO
# ==============================================================================
# Productos, categorías y fandoms. Todo viene del backend: aquí solo se
# filtra, se busca y se validan los formularios de administración.
# ==============================================================================

from typing import Any, Dict, List, Optional

from domport.models import Fandom, Product, parse_price
from domport.services.api_client import ApiClient, ApiError


class CatalogService:
    """
    Servicio para catálogo y administración de productos/fandoms.
    """

    def __init__(self, api: ApiClient):
        self.api = api

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def search_products(
        self,
        query: str = None,
        fandom: str = None,
        category: str = None,
        preorder: Optional[bool] = None,
    ) -> List[Product]:
        """
        Lista productos con filtros opcionales.

        Args:
            query: Texto libre sobre el nombre (sin distinguir mayúsculas)
            fandom: Nombre exacto del fandom
            category: Nombre exacto de la categoría
            preorder: True solo pre-órdenes, False solo regulares, None todos

        Returns:
            Lista de Product
        """
        products = self.api.get_products()

        q = (query or '').strip().lower()
        if q:
            products = [p for p in products if q in p.name.lower()]
        if fandom:
            products = [p for p in products if p.fandom.lower() == fandom.lower()]
        if category:
            products = [p for p in products if p.category.lower() == category.lower()]
        if preorder is not None:
            products = [p for p in products if p.is_preorder == preorder]

        return products

    def get_product(self, product_id: str) -> Product:
        return self.api.get_product(product_id)

    def get_categories(self) -> List[str]:
        """Nombres de categoría ordenados."""
        return sorted(c.name for c in self.api.get_categories() if c.name)

    def get_fandoms(self) -> List[Fandom]:
        return self.api.get_fandoms()

    def get_fandom_detail(self, fandom_id: str) -> Dict[str, Any]:
        """
        Fandom con sus productos.

        Returns:
            Dict con 'fandom' y 'products'
        """
        fandom = self.api.get_fandom(fandom_id)
        products = self.search_products(fandom=fandom.name)
        return {
            'fandom': fandom.to_dict(),
            'products': [p.to_dict() for p in products],
        }

    # =========================================================================
    # ADMINISTRACIÓN
    # =========================================================================

    def _validate_product(self, data: Dict[str, Any], partial: bool = False) -> Optional[str]:
        if not partial or 'name' in data:
            if not (data.get('name') or '').strip():
                return 'Product name is required'
        if not partial or 'price' in data:
            if parse_price(data.get('price')) <= 0:
                return 'Price must be greater than 0'
        if 'stock' in data:
            try:
                if int(data['stock']) < 0:
                    return 'Stock cannot be negative'
            except (TypeError, ValueError):
                return 'Invalid stock'
        if data.get('is_preorder') and data.get('deposit_amount') not in (None, ''):
            if parse_price(data['deposit_amount']) < 0:
                return 'Deposit cannot be negative'
        return None

    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        error = self._validate_product(data)
        if error:
            return {'ok': False, 'error': error}
        try:
            product = self.api.create_product(data)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'product': product.to_dict()}

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        error = self._validate_product(changes, partial=True)
        if error:
            return {'ok': False, 'error': error}
        try:
            product = self.api.update_product(product_id, changes)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'product': product.to_dict()}

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        try:
            self.api.delete_product(product_id)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True}

    def save_fandom(self, data: Dict[str, Any], fandom_id: str = None) -> Dict[str, Any]:
        """Crea (sin fandom_id) o actualiza un fandom."""
        if not (data.get('name') or '').strip():
            return {'ok': False, 'error': 'Fandom name is required'}
        try:
            if fandom_id:
                fandom = self.api.update_fandom(fandom_id, data)
            else:
                fandom = self.api.create_fandom(data)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True, 'fandom': fandom.to_dict()}

    def delete_fandom(self, fandom_id: str) -> Dict[str, Any]:
        try:
            self.api.delete_fandom(fandom_id)
        except ApiError as e:
            return {'ok': False, 'error': e.message, 'status': e.status}
        return {'ok': True}
