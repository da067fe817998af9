"""Pydantic schemas for Product domain."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ProductBase(BaseModel):
    codigo: str
    nome: str
    descricao: Optional[str] = None
    marca: Optional[str] = None
    categoria: Optional[str] = None
    imagem_url: Optional[str] = None
    ativo: bool = True
    preco: Decimal = Field(default=Decimal("0"), ge=0)
    preco_varejo: Optional[Decimal] = Field(default=None, ge=0)
    preco_cartao: Optional[Decimal] = Field(default=None, ge=0)
    preco_pix: Optional[Decimal] = Field(default=None, ge=0)
    preco_dinheiro: Optional[Decimal] = Field(default=None, ge=0)
    preco_oferta: Optional[Decimal] = Field(default=None, ge=0)


class ProductRead(ProductBase):
    id: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProductFilter(BaseModel):
    categoria: Optional[str] = None
    marca: Optional[str] = None
    busca: Optional[str] = None
    page: int = 1
    page_size: int = 50
