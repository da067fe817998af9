"""Order domain models — 'pedidos', 'itens_pedido' and 'pedidos_arquivados'."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.domain.models.product import new_uuid
from app.infrastructure.database import Base


class Order(Base):
    __tablename__ = "pedidos"

    id = Column(String(36), primary_key=True, default=new_uuid)
    numero_pedido = Column(String(20), nullable=False, index=True)

    cliente_id = Column(String(36), ForeignKey("clientes.id"), nullable=True, index=True)
    cliente = Column(String(300), nullable=False)
    nome_empresa = Column(String(300), nullable=True)
    cpf_cnpj = Column(String(20), nullable=True)
    telefone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=True)
    cep = Column(String(10), nullable=True)
    endereco = Column(String(500), nullable=True)
    cidade = Column(String(200), nullable=True)
    estado = Column(String(50), nullable=True)

    valor_total = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(50), nullable=False, default="Novo")
    observacoes = Column(Text, nullable=True)
    origem = Column(String(20), nullable=False, default="manual")
    modalidade_pagamento = Column(String(20), nullable=True)
    forma_pagamento = Column(String(50), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    itens = relationship(
        "OrderItem",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    def __repr__(self):
        return f"<Order {self.numero_pedido} - {self.cliente}>"


class OrderItem(Base):
    __tablename__ = "itens_pedido"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(String(36), ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False, index=True)
    produto_id = Column(String(36), ForeignKey("produtos.id"), nullable=True)
    produto_nome = Column(String(300), nullable=False)
    quantidade = Column(Integer, nullable=False)
    preco_unitario = Column(Numeric(10, 2), nullable=False)

    pedido = relationship("Order", back_populates="itens")


class ArchivedOrder(Base):
    __tablename__ = "pedidos_arquivados"

    id = Column(String(36), primary_key=True, default=new_uuid)
    pedido_id = Column(String(36), nullable=False)
    numero_pedido = Column(String(20), nullable=False, index=True)
    cliente = Column(String(300), nullable=False)
    telefone = Column(String(20), nullable=True)
    valor_total = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(50), nullable=False)
    itens_json = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    archived_at = Column(DateTime(timezone=True), server_default=func.now())
