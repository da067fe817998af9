"""Client API routes — CRM listing and detail."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.application.services.client_service import get_client, list_clients
from app.domain.repositories.client_repository import ClientRepository
from app.domain.schemas.client import ClientFilter, ClientRead
from app.interfaces.deps import get_client_repository

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.get("")
def clients(
    cidade: Optional[str] = None,
    estado: Optional[str] = None,
    origem: Optional[str] = None,
    busca: Optional[str] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    repo: ClientRepository = Depends(get_client_repository),
):
    """List clients with filtering and pagination."""
    filters = ClientFilter(
        cidade=cidade,
        estado=estado,
        origem=origem,
        busca=busca,
        page=page,
        page_size=page_size,
    )
    result = list_clients(repo, filters)
    result["items"] = [ClientRead.model_validate(c) for c in result["items"]]
    return result


@router.get("/{cliente_id}", response_model=ClientRead)
def client_detail(cliente_id: str, repo: ClientRepository = Depends(get_client_repository)):
    return get_client(repo, cliente_id)
