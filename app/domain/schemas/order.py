"""Pydantic schemas for catalog orders."""

import re
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.domain.schemas.pricing import CartItemRequest, ModalidadePagamento


class CheckoutRequest(BaseModel):
    """Storefront checkout form."""

    nome: str
    nome_empresa: Optional[str] = None
    cpf_cnpj: Optional[str] = None
    telefone: str
    email: Optional[str] = None
    cep: Optional[str] = None
    endereco: str
    cidade: Optional[str] = None
    estado: Optional[str] = None
    modalidade: ModalidadePagamento
    observacoes: Optional[str] = None
    items: list[CartItemRequest] = Field(min_length=1)

    @field_validator("nome", "endereco")
    @classmethod
    def required_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Campo obrigatório")
        return value

    @field_validator("telefone")
    @classmethod
    def valid_phone(cls, value: str) -> str:
        digits = re.sub(r"\D", "", value)
        if not re.fullmatch(r"\d{10,11}", digits):
            raise ValueError("Telefone inválido")
        return digits

    @field_validator("cpf_cnpj")
    @classmethod
    def only_digits(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return re.sub(r"\D", "", value) or None


class CheckoutResult(BaseModel):
    success: bool
    pedido_id: str
    numero_pedido: str
    cliente_id: str
    modalidade: ModalidadePagamento
    forma_pagamento: str
    valor_total: Decimal


class OrderItemRead(BaseModel):
    id: int
    produto_id: Optional[str] = None
    produto_nome: str
    quantidade: int
    preco_unitario: Decimal

    model_config = {"from_attributes": True}


class OrderRead(BaseModel):
    id: str
    numero_pedido: str
    cliente_id: Optional[str] = None
    cliente: str
    nome_empresa: Optional[str] = None
    telefone: str
    email: Optional[str] = None
    endereco: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    valor_total: Decimal
    status: str
    observacoes: Optional[str] = None
    origem: str
    modalidade_pagamento: Optional[str] = None
    forma_pagamento: Optional[str] = None
    created_at: Optional[datetime] = None
    itens: list[OrderItemRead] = []

    model_config = {"from_attributes": True}
