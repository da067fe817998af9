"""
Order Repository Interface.
Defines specific data access operations for Orders.
"""

from typing import Any, Dict, List, Optional

from app.domain.models.order import Order
from app.domain.repositories.base import BaseRepository


class OrderRepository(BaseRepository[Order]):
    """Interface for Order-specific operations."""

    def get_highest_numero_pedido(self) -> Optional[str]:
        """Highest numero_pedido among active orders."""
        ...

    def get_highest_archived_numero_pedido(self) -> Optional[str]:
        """Highest numero_pedido among archived orders."""
        ...

    def create_with_items(self, order_data: Dict[str, Any], items: List[Dict[str, Any]]) -> Order:
        """Persist an order and its lines in a single transaction."""
        ...
