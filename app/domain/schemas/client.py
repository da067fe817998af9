"""Pydantic schemas for Client domain."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class ClientBase(BaseModel):
    nome: str
    nome_empresa: Optional[str] = None
    cpf_cnpj: Optional[str] = None
    telefone: str
    email: Optional[str] = None
    cep: Optional[str] = None
    endereco: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    observacoes: Optional[str] = None


class ClientContact(ClientBase):
    """Contact data collected at checkout, used to find or create a client."""


class ClientRead(ClientBase):
    id: str
    origem: str
    dados_coletados: bool = False
    total_gasto: Decimal = Decimal("0")
    total_pedidos: int = 0
    ticket_medio: Decimal = Decimal("0")
    primeira_compra: Optional[datetime] = None
    ultima_compra: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ClientFilter(BaseModel):
    cidade: Optional[str] = None
    estado: Optional[str] = None
    origem: Optional[str] = None
    busca: Optional[str] = None
    page: int = 1
    page_size: int = 50
