"""Client service — CRM lookups and purchase statistics."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

import pytz
import structlog

from app.config import get_settings
from app.core.exceptions import EntityNotFoundException
from app.domain.models.client import Client
from app.domain.repositories.client_repository import ClientRepository
from app.domain.schemas.client import ClientContact, ClientFilter

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)
logger = structlog.get_logger(__name__)

# Fields refreshed on an existing client from checkout data
_CONTACT_FIELDS = ("nome", "nome_empresa", "telefone", "email", "cep", "endereco", "cidade", "estado")


def now() -> datetime:
    """Current time in the configured timezone."""
    return datetime.now(tz)


def list_clients(repo: ClientRepository, filters: ClientFilter) -> Dict[str, Any]:
    return repo.get_with_filters(filters)


def get_client(repo: ClientRepository, cliente_id: str) -> Client:
    cliente = repo.get_by_id(cliente_id)
    if cliente is None:
        raise EntityNotFoundException("Cliente não encontrado", {"cliente_id": cliente_id})
    return cliente


def find_or_create_client(repo: ClientRepository, dados: ClientContact) -> tuple[Client, bool]:
    """Match by CPF/CNPJ first, then by telephone; otherwise create a catalog client.

    Returns (client, is_new). A matched client has its contact data refreshed.
    """
    cliente = None
    if dados.cpf_cnpj:
        cliente = repo.get_by_cpf_cnpj(dados.cpf_cnpj)
    if cliente is None and dados.telefone:
        cliente = repo.get_by_telefone(dados.telefone)

    if cliente is not None:
        update = {field: getattr(dados, field) or None for field in _CONTACT_FIELDS}
        update["nome"] = dados.nome
        update["telefone"] = dados.telefone
        if dados.cpf_cnpj:
            update["cpf_cnpj"] = dados.cpf_cnpj
        update["dados_coletados"] = True
        cliente = repo.update(cliente, update)
        logger.info("Client matched at checkout", cliente_id=cliente.id)
        return cliente, False

    cliente = repo.create(
        {
            "nome": dados.nome,
            "nome_empresa": dados.nome_empresa or None,
            "cpf_cnpj": dados.cpf_cnpj or None,
            "telefone": dados.telefone,
            "email": dados.email or None,
            "cep": dados.cep or None,
            "endereco": dados.endereco or None,
            "cidade": dados.cidade or None,
            "estado": dados.estado or None,
            "origem": "catalogo",
            "dados_coletados": True,
            "primeira_compra": now(),
        }
    )
    logger.info("Client created from catalog", cliente_id=cliente.id)
    return cliente, True


def register_purchase(repo: ClientRepository, cliente: Client, valor_pedido: Decimal) -> Client:
    """Add an order to the client's totals and recompute the average ticket."""
    total_gasto = Decimal(cliente.total_gasto or 0) + valor_pedido
    total_pedidos = (cliente.total_pedidos or 0) + 1
    ticket_medio = (total_gasto / total_pedidos).quantize(Decimal("0.01"))

    return repo.update(
        cliente,
        {
            "total_gasto": total_gasto,
            "total_pedidos": total_pedidos,
            "ticket_medio": ticket_medio,
            "ultima_compra": now(),
        },
    )
