"""
SQLAlchemy Implementation of Order Repository.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func

from app.domain.models.order import ArchivedOrder, Order, OrderItem
from app.domain.repositories.order_repository import OrderRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


def _highest_numero(query, column) -> Optional[str]:
    # '#NNN' is zero-padded, so a longer string is always the larger number
    highest = query.order_by(func.length(column).desc(), column.desc()).first()
    return highest[0] if highest else None


class SQLAlchemyOrderRepository(SQLAlchemyRepository[Order], OrderRepository):
    """Order repository implementation using SQLAlchemy."""

    def get_highest_numero_pedido(self) -> Optional[str]:
        return _highest_numero(self.db.query(Order.numero_pedido), Order.numero_pedido)

    def get_highest_archived_numero_pedido(self) -> Optional[str]:
        return _highest_numero(self.db.query(ArchivedOrder.numero_pedido), ArchivedOrder.numero_pedido)

    def create_with_items(self, order_data: Dict[str, Any], items: List[Dict[str, Any]]) -> Order:
        order = Order(**order_data)
        order.itens = [OrderItem(**item) for item in items]
        return self._save(order)
