"""Pydantic schemas for the pricing engine: modalities, cart lines and eligibility."""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

MAX_ITEM_QUANTITY = 999


class ModalidadePagamento(str, Enum):
    VAREJO = "varejo"
    CARTAO = "cartao"
    PIX = "pix"
    DINHEIRO = "dinheiro"
    OFERTA = "oferta"


# Modalities gated by the value-or-quantity threshold
GATED_MODALIDADES = (
    ModalidadePagamento.CARTAO,
    ModalidadePagamento.PIX,
    ModalidadePagamento.DINHEIRO,
)


class ProductPricing(BaseModel):
    """The slice of a product the pricing engine reads."""

    id: str
    nome: str = ""
    codigo: Optional[str] = None
    marca: Optional[str] = None
    preco: Optional[Decimal] = None
    preco_varejo: Optional[Decimal] = None
    preco_cartao: Optional[Decimal] = None
    preco_pix: Optional[Decimal] = None
    preco_dinheiro: Optional[Decimal] = None
    preco_oferta: Optional[Decimal] = None

    model_config = {"from_attributes": True, "frozen": True}


class CartItem(BaseModel):
    produto: ProductPricing
    quantidade: int = Field(ge=1, le=MAX_ITEM_QUANTITY)

    model_config = {"frozen": True}


class PricingValidationResult(BaseModel):
    is_valid: bool
    reason: Optional[str] = None
    suggestion: Optional[str] = None

    model_config = {"frozen": True}


class PaymentMethodAvailability(BaseModel):
    varejo: PricingValidationResult
    cartao: PricingValidationResult
    pix: PricingValidationResult
    dinheiro: PricingValidationResult
    oferta: PricingValidationResult

    model_config = {"frozen": True}

    def get(self, modalidade: ModalidadePagamento) -> PricingValidationResult:
        return getattr(self, ModalidadePagamento(modalidade).value)


class PricingRules(BaseModel):
    """Eligibility thresholds. Value and quantity are alternatives, not cumulative."""

    min_value: Decimal = Decimal("300.00")
    min_qty_cartao: int = 10
    min_qty_pix: int = 15
    min_qty_dinheiro: int = 15
    min_qty_oferta: int = 30

    model_config = {"frozen": True}

    def min_qty_for(self, modalidade: ModalidadePagamento) -> int:
        return getattr(self, f"min_qty_{ModalidadePagamento(modalidade).value}")


class CartItemRequest(BaseModel):
    produto_id: str
    quantidade: int = Field(ge=1, le=MAX_ITEM_QUANTITY)


class CartQuoteRequest(BaseModel):
    items: list[CartItemRequest]
    modalidade: Optional[ModalidadePagamento] = None


class CartQuoteLine(BaseModel):
    produto_id: str
    produto_nome: str
    quantidade: int
    preco_unitario: Decimal
    subtotal: Decimal


class CartQuote(BaseModel):
    modalidade: ModalidadePagamento
    availability: PaymentMethodAvailability
    itens: list[CartQuoteLine]
    total: Decimal
    total_varejo: Decimal
    max_grouped_quantity: int
    total_itens: int
