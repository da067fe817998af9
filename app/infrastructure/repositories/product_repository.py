"""
SQLAlchemy Implementation of Product Repository.
"""

from typing import Any, Dict, List

from sqlalchemy import or_

from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductFilter
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyProductRepository(SQLAlchemyRepository[Product], ProductRepository):
    """Product repository implementation using SQLAlchemy."""

    def get_by_ids(self, ids: List[str]) -> Dict[str, Product]:
        if not ids:
            return {}
        products = self.db.query(Product).filter(Product.id.in_(set(ids))).all()
        return {p.id: p for p in products}

    def get_with_filters(self, filters: ProductFilter) -> Dict[str, Any]:
        """Get products with filtering and pagination."""
        query = self.db.query(Product).filter(Product.ativo.is_(True))
        if filters.categoria:
            query = query.filter(Product.categoria == filters.categoria)
        if filters.marca:
            query = query.filter(Product.marca == filters.marca)
        if filters.busca:
            pattern = f"%{filters.busca.strip()}%"
            query = query.filter(or_(Product.nome.ilike(pattern), Product.codigo.ilike(pattern)))

        total = query.count()
        offset = (filters.page - 1) * filters.page_size
        products = (
            query.order_by(Product.nome.asc())
            .offset(offset)
            .limit(filters.page_size)
            .all()
        )

        return {
            "items": products,
            "total": total,
            "page": filters.page,
            "page_size": filters.page_size,
            "total_pages": (total + filters.page_size - 1) // filters.page_size,
        }

    def get_filter_options(self) -> Dict[str, List[str]]:
        """Get distinct categorias and marcas for the storefront filters."""
        active = self.db.query(Product).filter(Product.ativo.is_(True))
        categorias = [r[0] for r in active.with_entities(Product.categoria).distinct().filter(Product.categoria.isnot(None)).all()]
        marcas = [r[0] for r in active.with_entities(Product.marca).distinct().filter(Product.marca.isnot(None)).all()]

        return {
            "categorias": sorted(categorias),
            "marcas": sorted(m for m in marcas if m.strip()),
        }
