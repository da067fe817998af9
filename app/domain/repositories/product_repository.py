"""
Product Repository Interface.
Defines specific data access operations for Products.
"""

from typing import Any, Dict, List

from app.domain.models.product import Product
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.product import ProductFilter


class ProductRepository(BaseRepository[Product]):
    """Interface for Product-specific operations."""

    def get_by_ids(self, ids: List[str]) -> Dict[str, Product]:
        """Get products keyed by id; unknown ids are absent from the result."""
        ...

    def get_with_filters(self, filters: ProductFilter) -> Dict[str, Any]:
        """Get catalog products with filtering and pagination."""
        ...

    def get_filter_options(self) -> Dict[str, List[str]]:
        """Get distinct categorias and marcas of active products."""
        ...
