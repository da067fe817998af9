"""
Pricing service — price resolution and payment-method eligibility.

Every function here is pure: it reads a cart snapshot and returns fresh
values, so callers can recompute on every cart mutation without caching.

Eligibility rules (defaults, see PricingRules):
- varejo: always available, no minimum.
- cartao / pix / dinheiro: R$ 300,00 in retail value OR 10 / 15 / 15 units
  of the same product or brand. The value basis is always the retail total.
- oferta: 30 units of one exact product, no brand grouping, no value option.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Iterable, NamedTuple, Optional, Sequence, Union

from app.domain.schemas.pricing import (
    GATED_MODALIDADES,
    CartItem,
    ModalidadePagamento,
    PaymentMethodAvailability,
    PricingRules,
    PricingValidationResult,
)

ZERO = Decimal("0")
EMPTY_CART_REASON = "Carrinho vazio"

DEFAULT_RULES = PricingRules()

# Modality-specific price attribute; None means the retail chain applies directly
_PRICE_FIELDS = {
    ModalidadePagamento.VAREJO: None,
    ModalidadePagamento.CARTAO: "preco_cartao",
    ModalidadePagamento.PIX: "preco_pix",
    ModalidadePagamento.DINHEIRO: "preco_dinheiro",
    ModalidadePagamento.OFERTA: "preco_oferta",
}

# Cheapest for the customer first
_BEST_MODALIDADE_ORDER = (
    ModalidadePagamento.DINHEIRO,
    ModalidadePagamento.PIX,
    ModalidadePagamento.CARTAO,
)

MODALIDADE_LABELS = {
    ModalidadePagamento.VAREJO: "Varejo",
    ModalidadePagamento.CARTAO: "Cartão",
    ModalidadePagamento.PIX: "PIX",
    ModalidadePagamento.DINHEIRO: "TED/Dinheiro",
    ModalidadePagamento.OFERTA: "Oferta",
}


class BrandGroup(NamedTuple):
    name: str


class ProductGroup(NamedTuple):
    product_id: str


GroupKey = Union[BrandGroup, ProductGroup]


def _price_set(value) -> Optional[Decimal]:
    """Return the price as Decimal, or None when absent or zero."""
    if value is None:
        return None
    price = Decimal(str(value)) if not isinstance(value, Decimal) else value
    return price if price > ZERO else None


def _retail_price(produto) -> Decimal:
    return (
        _price_set(getattr(produto, "preco_varejo", None))
        or _price_set(getattr(produto, "preco", None))
        or ZERO
    )


def resolve_price(produto, modalidade: ModalidadePagamento) -> Decimal:
    """Unit price of a product under a payment modality.

    The modality price wins when set; otherwise preco_varejo, then preco,
    then zero. Never raises.
    """
    field = _PRICE_FIELDS[ModalidadePagamento(modalidade)]
    if field is not None:
        price = _price_set(getattr(produto, field, None))
        if price is not None:
            return price
    return _retail_price(produto)


def group_key(item: CartItem) -> GroupKey:
    marca = (item.produto.marca or "").strip()
    if marca:
        return BrandGroup(marca)
    return ProductGroup(item.produto.id)


def grouped_quantities(items: Iterable[CartItem]) -> dict[GroupKey, int]:
    quantities: dict[GroupKey, int] = defaultdict(int)
    for item in items:
        quantities[group_key(item)] += item.quantidade
    return dict(quantities)


def max_grouped_quantity(items: Iterable[CartItem]) -> int:
    """Largest quantity reachable inside a single brand or single product group."""
    return max(grouped_quantities(items).values(), default=0)


def get_product_with_most_quantity(items: Sequence[CartItem]) -> Optional[CartItem]:
    """Line with the highest quantity; the first one wins on ties."""
    best = None
    for item in items:
        if best is None or item.quantidade > best.quantidade:
            best = item
    return best


def calculate_total(items: Iterable[CartItem], modalidade: ModalidadePagamento) -> Decimal:
    return sum(
        (resolve_price(item.produto, modalidade) * item.quantidade for item in items),
        ZERO,
    )


def _validate_gated(
    total_varejo: Decimal,
    max_qty: int,
    min_value: Decimal,
    min_qty: int,
) -> PricingValidationResult:
    if total_varejo >= min_value or max_qty >= min_qty:
        return PricingValidationResult(is_valid=True)

    quantity_needed = max(min_qty - max_qty, 0)
    value_needed = max(min_value - total_varejo, ZERO)
    return PricingValidationResult(
        is_valid=False,
        reason=f"Necessário {min_qty} unidades do mesmo produto/marca ou R$ {min_value:.2f}",
        suggestion=f"Adicione {quantity_needed} unidades ou R$ {value_needed:.2f}",
    )


def validate_oferta_pricing(
    items: Sequence[CartItem],
    rules: PricingRules = DEFAULT_RULES,
) -> PricingValidationResult:
    """Oferta needs min_qty_oferta units of one exact product."""
    if not items:
        return PricingValidationResult(is_valid=False, reason=EMPTY_CART_REASON)

    top = get_product_with_most_quantity(items)
    if top.quantidade >= rules.min_qty_oferta:
        return PricingValidationResult(is_valid=True)

    return PricingValidationResult(
        is_valid=False,
        reason=f"Necessário {rules.min_qty_oferta} unidades do mesmo produto",
        suggestion=(
            f"Adicione {rules.min_qty_oferta - top.quantidade} unidades "
            "ao produto com mais quantidade"
        ),
    )


def validate_pricing_rules(
    items: Sequence[CartItem],
    rules: PricingRules = DEFAULT_RULES,
) -> PaymentMethodAvailability:
    """Eligibility of every payment modality for a cart snapshot."""
    if not items:
        empty = PricingValidationResult(is_valid=False, reason=EMPTY_CART_REASON)
        return PaymentMethodAvailability(
            varejo=PricingValidationResult(is_valid=True),
            cartao=empty,
            pix=empty,
            dinheiro=empty,
            oferta=empty,
        )

    total_varejo = calculate_total(items, ModalidadePagamento.VAREJO)
    max_qty = max_grouped_quantity(items)

    gated = {
        modalidade.value: _validate_gated(
            total_varejo, max_qty, rules.min_value, rules.min_qty_for(modalidade)
        )
        for modalidade in GATED_MODALIDADES
    }
    return PaymentMethodAvailability(
        varejo=PricingValidationResult(is_valid=True),
        oferta=validate_oferta_pricing(items, rules),
        **gated,
    )


def best_available_modality(availability: PaymentMethodAvailability) -> ModalidadePagamento:
    """Cheapest valid modality: dinheiro, then pix, then cartao, else varejo.

    Oferta is never picked automatically; the customer opts into it.
    """
    for modalidade in _BEST_MODALIDADE_ORDER:
        if availability.get(modalidade).is_valid:
            return modalidade
    return ModalidadePagamento.VAREJO


def reconcile_selection(
    previous: Optional[ModalidadePagamento],
    availability: PaymentMethodAvailability,
) -> ModalidadePagamento:
    """Keep the previous selection while it is valid, otherwise pick the best one."""
    if previous is not None and availability.get(previous).is_valid:
        return ModalidadePagamento(previous)
    return best_available_modality(availability)


def modalidade_label(modalidade: ModalidadePagamento) -> str:
    return MODALIDADE_LABELS[ModalidadePagamento(modalidade)]


def rules_from_settings(settings) -> PricingRules:
    return PricingRules(
        min_value=settings.PRICING_MIN_VALUE,
        min_qty_cartao=settings.PRICING_MIN_QTY_CARTAO,
        min_qty_pix=settings.PRICING_MIN_QTY_PIX,
        min_qty_dinheiro=settings.PRICING_MIN_QTY_DINHEIRO,
        min_qty_oferta=settings.PRICING_MIN_QTY_OFERTA,
    )
