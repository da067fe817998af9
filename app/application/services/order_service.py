"""Order service — storefront checkout.

The cart is re-validated against the stored products at submission time, and
the unit price persisted on each line is the one resolve_price quotes for the
chosen modality.
"""

import re
from typing import Optional

import structlog

from app.application.services.cart_service import build_cart_from_request
from app.application.services.client_service import find_or_create_client, register_purchase
from app.application.services.pricing_service import (
    DEFAULT_RULES,
    ZERO,
    modalidade_label,
    resolve_price,
    validate_pricing_rules,
)
from app.application.services.product_service import get_active_products
from app.core.exceptions import BusinessRuleViolationException, EntityNotFoundException
from app.domain.models.order import Order
from app.domain.repositories.client_repository import ClientRepository
from app.domain.repositories.order_repository import OrderRepository
from app.domain.repositories.product_repository import ProductRepository
from app.domain.schemas.client import ClientContact
from app.domain.schemas.order import CheckoutRequest, CheckoutResult
from app.domain.schemas.pricing import CartItem, PricingRules

logger = structlog.get_logger(__name__)


def _parse_numero(numero: Optional[str]) -> int:
    digits = re.sub(r"\D", "", numero or "")
    return int(digits) if digits else 0


def generate_order_number(repo: OrderRepository) -> str:
    """Next '#NNN' after the highest active or archived order number."""
    ultimo = max(
        _parse_numero(repo.get_highest_numero_pedido()),
        _parse_numero(repo.get_highest_archived_numero_pedido()),
    )
    return f"#{ultimo + 1:03d}"


def build_cart(dados: CheckoutRequest, product_repo: ProductRepository) -> list[CartItem]:
    """Cart snapshot from the stored products; repeated ids are merged."""
    produtos = get_active_products(product_repo, [item.produto_id for item in dados.items])
    return build_cart_from_request(produtos, dados.items)


def create_catalog_order(
    dados: CheckoutRequest,
    product_repo: ProductRepository,
    client_repo: ClientRepository,
    order_repo: OrderRepository,
    rules: PricingRules = DEFAULT_RULES,
) -> CheckoutResult:
    """Finalize a storefront order for the chosen payment modality."""
    items = build_cart(dados, product_repo)

    availability = validate_pricing_rules(items, rules)
    eligibility = availability.get(dados.modalidade)
    if not eligibility.is_valid:
        logger.info(
            "Checkout rejected",
            modalidade=dados.modalidade.value,
            reason=eligibility.reason,
        )
        raise BusinessRuleViolationException(
            f"Modalidade {modalidade_label(dados.modalidade)} indisponível para este carrinho",
            {
                "modalidade": dados.modalidade.value,
                "reason": eligibility.reason,
                "suggestion": eligibility.suggestion,
            },
        )

    lines = []
    valor_total = ZERO
    for item in items:
        preco_unitario = resolve_price(item.produto, dados.modalidade)
        valor_total += preco_unitario * item.quantidade
        lines.append(
            {
                "produto_id": item.produto.id,
                "produto_nome": item.produto.nome,
                "quantidade": item.quantidade,
                "preco_unitario": preco_unitario,
            }
        )

    numero_pedido = generate_order_number(order_repo)
    cliente, is_new = find_or_create_client(
        client_repo,
        ClientContact.model_validate(dados.model_dump(include=set(ClientContact.model_fields))),
    )

    order = order_repo.create_with_items(
        {
            "numero_pedido": numero_pedido,
            "cliente_id": cliente.id,
            "cliente": dados.nome,
            "nome_empresa": dados.nome_empresa or None,
            "cpf_cnpj": dados.cpf_cnpj or None,
            "telefone": dados.telefone,
            "email": dados.email or "",
            "cep": dados.cep or None,
            "endereco": dados.endereco,
            "cidade": dados.cidade or None,
            "estado": dados.estado or None,
            "valor_total": valor_total,
            "status": "Novo",
            "observacoes": dados.observacoes or "",
            "origem": "catalogo",
            "modalidade_pagamento": dados.modalidade.value,
            "forma_pagamento": modalidade_label(dados.modalidade),
        },
        lines,
    )
    logger.info(
        "Catalog order created",
        pedido_id=order.id,
        numero_pedido=numero_pedido,
        cliente_id=cliente.id,
        novo_cliente=is_new,
        modalidade=dados.modalidade.value,
        valor_total=str(valor_total),
    )

    # Stats are informational; the order stands even if this update fails
    try:
        register_purchase(client_repo, cliente, valor_total)
    except Exception:
        logger.exception("Failed to update client stats", cliente_id=cliente.id)

    return CheckoutResult(
        success=True,
        pedido_id=order.id,
        numero_pedido=numero_pedido,
        cliente_id=cliente.id,
        modalidade=dados.modalidade,
        forma_pagamento=order.forma_pagamento,
        valor_total=valor_total,
    )


def get_order(repo: OrderRepository, pedido_id: str) -> Order:
    order = repo.get_by_id(pedido_id)
    if order is None:
        raise EntityNotFoundException("Pedido não encontrado", {"pedido_id": pedido_id})
    return order
