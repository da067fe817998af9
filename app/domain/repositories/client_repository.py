"""
Client Repository Interface.
Defines specific data access operations for Clients.
"""

from typing import Any, Dict, Optional

from app.domain.models.client import Client
from app.domain.repositories.base import BaseRepository
from app.domain.schemas.client import ClientFilter


class ClientRepository(BaseRepository[Client]):
    """Interface for Client-specific operations."""

    def get_by_cpf_cnpj(self, cpf_cnpj: str) -> Optional[Client]:
        """Get a client by CPF/CNPJ."""
        ...

    def get_by_telefone(self, telefone: str) -> Optional[Client]:
        """Get a client by telephone."""
        ...

    def get_with_filters(self, filters: ClientFilter) -> Dict[str, Any]:
        """Get clients with filtering and pagination."""
        ...
