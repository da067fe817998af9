"""Orders API routes — storefront checkout and order detail."""

from fastapi import APIRouter, Depends, status

from app.application.services.order_service import create_catalog_order, get_order
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.order import CheckoutRequest, CheckoutResult, OrderRead
from app.domain.schemas.pricing import PricingRules
from app.interfaces.deps import (
    get_client_repository,
    get_order_repository,
    get_pricing_rules,
    get_product_repository,
    require_catalogo_ativo,
)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post(
    "/catalog",
    response_model=CheckoutResult,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_catalogo_ativo)],
)
def checkout(
    payload: CheckoutRequest,
    product_repo: ProductRepository = Depends(get_product_repository),
    client_repo: ClientRepository = Depends(get_client_repository),
    order_repo: OrderRepository = Depends(get_order_repository),
    rules: PricingRules = Depends(get_pricing_rules),
):
    """Finalize a storefront order. The cart is re-validated against current prices."""
    return create_catalog_order(payload, product_repo, client_repo, order_repo, rules)


@router.get("/{pedido_id}", response_model=OrderRead)
def order_detail(pedido_id: str, repo: OrderRepository = Depends(get_order_repository)):
    return get_order(repo, pedido_id)
