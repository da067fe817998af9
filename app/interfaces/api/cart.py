"""Cart API routes — eligibility and pricing of a cart snapshot."""

from fastapi import APIRouter, Depends

from app.application.services.cart_service import build_cart_from_request, quote_cart
from app.application.services.product_service import get_active_products
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.pricing import CartQuote, CartQuoteRequest, PricingRules
from app.interfaces.deps import get_pricing_rules, get_product_repository

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.post("/quote", response_model=CartQuote)
def cart_quote(
    payload: CartQuoteRequest,
    repo: ProductRepository = Depends(get_product_repository),
    rules: PricingRules = Depends(get_pricing_rules),
):
    """Validate every payment modality for the cart and price it.

    The requested modality is kept while the cart qualifies for it; otherwise
    the cheapest available one is returned in its place.
    """
    produtos = get_active_products(repo, [item.produto_id for item in payload.items])
    items = build_cart_from_request(produtos, payload.items)
    return quote_cart(items, payload.modalidade, rules)
