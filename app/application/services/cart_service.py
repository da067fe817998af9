"""Cart service — immutable cart operations and checkout quotes."""

from typing import Mapping, Optional, Sequence

from app.application.services.pricing_service import (
    DEFAULT_RULES,
    ZERO,
    calculate_total,
    max_grouped_quantity,
    reconcile_selection,
    resolve_price,
    validate_pricing_rules,
)
from app.core.exceptions import BusinessRuleViolationException
from app.domain.schemas.pricing import (
    MAX_ITEM_QUANTITY,
    CartItem,
    CartItemRequest,
    CartQuote,
    CartQuoteLine,
    ModalidadePagamento,
    PricingRules,
    ProductPricing,
)


def _as_pricing(produto) -> ProductPricing:
    if isinstance(produto, ProductPricing):
        return produto
    return ProductPricing.model_validate(produto)


def add_item(items: Sequence[CartItem], produto, quantidade: int = 1) -> list[CartItem]:
    """Add units of a product, merging with an existing line for the same product."""
    produto = _as_pricing(produto)
    result = []
    merged = False
    for item in items:
        if item.produto.id == produto.id:
            total = min(item.quantidade + quantidade, MAX_ITEM_QUANTITY)
            result.append(CartItem(produto=produto, quantidade=total))
            merged = True
        else:
            result.append(item)
    if not merged and quantidade > 0:
        result.append(CartItem(produto=produto, quantidade=min(quantidade, MAX_ITEM_QUANTITY)))
    return result


def update_quantity(items: Sequence[CartItem], produto_id: str, quantidade: int) -> list[CartItem]:
    """Set a line's quantity; zero or less removes the line."""
    if quantidade <= 0:
        return remove_item(items, produto_id)
    quantidade = min(quantidade, MAX_ITEM_QUANTITY)
    return [
        CartItem(produto=item.produto, quantidade=quantidade) if item.produto.id == produto_id else item
        for item in items
    ]


def remove_item(items: Sequence[CartItem], produto_id: str) -> list[CartItem]:
    return [item for item in items if item.produto.id != produto_id]


def clear_cart() -> list[CartItem]:
    return []


def build_cart_from_request(produtos: Mapping[str, object], requested: Sequence[CartItemRequest]) -> list[CartItem]:
    """Cart snapshot for requested lines; repeated products are merged.

    A merged quantity above MAX_ITEM_QUANTITY is rejected, not capped.
    """
    quantities: dict[str, int] = {}
    for item in requested:
        quantities[item.produto_id] = quantities.get(item.produto_id, 0) + item.quantidade

    over_limit = sorted(produto_id for produto_id, qty in quantities.items() if qty > MAX_ITEM_QUANTITY)
    if over_limit:
        raise BusinessRuleViolationException(
            f"Quantidade máxima por produto é {MAX_ITEM_QUANTITY}",
            {"produto_ids": over_limit},
        )

    return [
        CartItem(produto=_as_pricing(produtos[produto_id]), quantidade=qty)
        for produto_id, qty in quantities.items()
    ]


def total_items(items: Sequence[CartItem]) -> int:
    return sum(item.quantidade for item in items)


def quote_cart(
    items: Sequence[CartItem],
    modalidade: Optional[ModalidadePagamento] = None,
    rules: PricingRules = DEFAULT_RULES,
) -> CartQuote:
    """Validate the snapshot, reconcile the selected modality, then price it.

    Validation and pricing read the same snapshot, so the quote never shows
    prices for a modality that the current cart does not qualify for.
    """
    availability = validate_pricing_rules(items, rules)
    selected = reconcile_selection(modalidade, availability)

    lines = []
    for item in items:
        unit_price = resolve_price(item.produto, selected)
        lines.append(
            CartQuoteLine(
                produto_id=item.produto.id,
                produto_nome=item.produto.nome,
                quantidade=item.quantidade,
                preco_unitario=unit_price,
                subtotal=unit_price * item.quantidade,
            )
        )

    return CartQuote(
        modalidade=selected,
        availability=availability,
        itens=lines,
        total=sum((line.subtotal for line in lines), ZERO),
        total_varejo=calculate_total(items, ModalidadePagamento.VAREJO),
        max_grouped_quantity=max_grouped_quantity(items),
        total_itens=total_items(items),
    )
