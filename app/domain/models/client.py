"""Client domain model — maps to the 'clientes' table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.sql import func

from app.domain.models.product import new_uuid
from app.infrastructure.database import Base


class Client(Base):
    __tablename__ = "clientes"

    id = Column(String(36), primary_key=True, default=new_uuid)

    nome = Column(String(300), nullable=False)
    nome_empresa = Column(String(300), nullable=True)
    cpf_cnpj = Column(String(20), nullable=True, index=True)
    telefone = Column(String(20), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    cep = Column(String(10), nullable=True)
    endereco = Column(String(500), nullable=True)
    cidade = Column(String(200), nullable=True, index=True)
    estado = Column(String(50), nullable=True, index=True)
    observacoes = Column(Text, nullable=True)
    origem = Column(String(20), nullable=False, default="manual")  # manual, whatsapp, catalogo, importacao
    dados_coletados = Column(Boolean, nullable=False, default=False)

    # Purchase stats, refreshed after every catalog order
    total_gasto = Column(Numeric(12, 2), nullable=False, default=0)
    total_pedidos = Column(Integer, nullable=False, default=0)
    ticket_medio = Column(Numeric(12, 2), nullable=False, default=0)
    primeira_compra = Column(DateTime(timezone=True), nullable=True)
    ultima_compra = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Client {self.telefone} - {self.nome}>"
