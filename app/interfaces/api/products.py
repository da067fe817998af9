"""Products API routes — storefront catalog listing and detail."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.application.services.product_service import (
    get_catalog_filter_options,
    get_product,
    list_catalog_products,
)
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.product import ProductFilter, ProductRead
from app.interfaces.deps import get_product_repository

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("")
def list_products(
    categoria: Optional[str] = None,
    marca: Optional[str] = None,
    busca: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: ProductRepository = Depends(get_product_repository),
):
    filters = ProductFilter(
        categoria=categoria,
        marca=marca,
        busca=busca,
        page=page,
        page_size=page_size,
    )
    result = list_catalog_products(repo, filters)
    result["items"] = [ProductRead.model_validate(p) for p in result["items"]]
    return result


@router.get("/filters")
def filter_options(repo: ProductRepository = Depends(get_product_repository)):
    return get_catalog_filter_options(repo)


@router.get("/{produto_id}", response_model=ProductRead)
def product_detail(produto_id: str, repo: ProductRepository = Depends(get_product_repository)):
    return get_product(repo, produto_id)
