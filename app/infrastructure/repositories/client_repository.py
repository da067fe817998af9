"""
SQLAlchemy Implementation of Client Repository.
"""

from typing import Any, Dict, Optional

from sqlalchemy import or_

from app.domain.models.client import Client
from app.domain.repositories.client_repository import ClientRepository
from app.domain.schemas.client import ClientFilter
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyClientRepository(SQLAlchemyRepository[Client], ClientRepository):
    """Client repository implementation using SQLAlchemy."""

    def get_by_cpf_cnpj(self, cpf_cnpj: str) -> Optional[Client]:
        return self.db.query(Client).filter(Client.cpf_cnpj == cpf_cnpj).first()

    def get_by_telefone(self, telefone: str) -> Optional[Client]:
        return self.db.query(Client).filter(Client.telefone == telefone).first()

    def get_with_filters(self, filters: ClientFilter) -> Dict[str, Any]:
        """Get clients with filtering and pagination."""
        query = self.db.query(Client)

        if filters.cidade:
            query = query.filter(Client.cidade == filters.cidade)
        if filters.estado:
            query = query.filter(Client.estado == filters.estado)
        if filters.origem:
            query = query.filter(Client.origem == filters.origem)
        if filters.busca:
            pattern = f"%{filters.busca.strip()}%"
            query = query.filter(
                or_(
                    Client.nome.ilike(pattern),
                    Client.nome_empresa.ilike(pattern),
                    Client.telefone.ilike(pattern),
                )
            )

        total = query.count()
        offset = (filters.page - 1) * filters.page_size
        clients = (
            query.order_by(Client.nome.asc())
            .offset(offset)
            .limit(filters.page_size)
            .all()
        )

        return {
            "items": clients,
            "total": total,
            "page": filters.page,
            "page_size": filters.page_size,
            "total_pages": (total + filters.page_size - 1) // filters.page_size,
        }
