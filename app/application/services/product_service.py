"""Product service — storefront catalog queries."""

from typing import Any, Dict, List

from app.core.exceptions import EntityNotFoundException
from app.domain.models.product import Product
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductFilter


def list_catalog_products(repo: ProductRepository, filters: ProductFilter) -> Dict[str, Any]:
    """Get catalog products with filtering and pagination."""
    return repo.get_with_filters(filters)


def get_product(repo: ProductRepository, produto_id: str) -> Product:
    """Storefront product detail; inactive products are hidden like in the listing."""
    produto = repo.get_by_id(produto_id)
    if produto is None or not produto.ativo:
        raise EntityNotFoundException("Produto não encontrado", {"produto_id": produto_id})
    return produto


def get_active_products(repo: ProductRepository, ids: List[str]) -> Dict[str, Product]:
    """Load every requested product; any unknown or inactive id is a 404."""
    produtos = repo.get_by_ids(ids)
    missing = sorted({i for i in ids if i not in produtos or not produtos[i].ativo})
    if missing:
        raise EntityNotFoundException(
            "Produto indisponível no catálogo",
            {"produto_ids": missing},
        )
    return produtos


def get_catalog_filter_options(repo: ProductRepository) -> Dict[str, List[str]]:
    return repo.get_filter_options()
