"""Product domain model — maps to the 'produtos' table."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, Numeric, String, Text
from sqlalchemy.sql import func

from app.infrastructure.database import Base


def new_uuid() -> str:
    return str(uuid.uuid4())


class Product(Base):
    __tablename__ = "produtos"

    id = Column(String(36), primary_key=True, default=new_uuid)

    codigo = Column(String(50), nullable=False, index=True)
    nome = Column(String(300), nullable=False)
    descricao = Column(Text, nullable=True)
    marca = Column(String(150), nullable=True, index=True)
    categoria = Column(String(150), nullable=True, index=True)
    imagem_url = Column(String(500), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)

    # Price table. NULL or 0 means "not priced" and falls back to preco_varejo / preco.
    preco = Column(Numeric(10, 2), nullable=False, default=0)
    preco_varejo = Column(Numeric(10, 2), nullable=True)
    preco_cartao = Column(Numeric(10, 2), nullable=True)
    preco_pix = Column(Numeric(10, 2), nullable=True)
    preco_dinheiro = Column(Numeric(10, 2), nullable=True)
    preco_oferta = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Product {self.codigo} - {self.nome}>"
