from decimal import Decimal

import pytest

from app.application.services.cart_service import (
    add_item,
    build_cart_from_request,
    clear_cart,
    quote_cart,
    remove_item,
    total_items,
    update_quantity,
)
from app.core.exceptions import BusinessRuleViolationException
from app.domain.schemas.pricing import CartItemRequest, ModalidadePagamento, ProductPricing

M = ModalidadePagamento

ARROZ = ProductPricing(
    id="arroz",
    nome="Arroz 5kg",
    marca="Tio Joao",
    preco=Decimal("25.00"),
    preco_varejo=Decimal("25.00"),
    preco_cartao=Decimal("24.00"),
    preco_pix=Decimal("23.00"),
    preco_dinheiro=Decimal("22.00"),
)
FEIJAO = ProductPricing(id="feijao", nome="Feijao 1kg", marca="Tio Joao", preco_varejo=Decimal("8.00"))
SAL = ProductPricing(id="sal", nome="Sal 1kg", preco=Decimal("3.00"))


def test_add_item_merges_same_product():
    items = add_item([], ARROZ, 2)
    items = add_item(items, ARROZ, 3)
    items = add_item(items, SAL)
    assert [(i.produto.id, i.quantidade) for i in items] == [("arroz", 5), ("sal", 1)]


def test_add_item_caps_quantity():
    items = add_item([], SAL, 990)
    items = add_item(items, SAL, 20)
    assert items[0].quantidade == 999


def test_update_quantity_to_zero_removes_line():
    items = add_item(add_item([], ARROZ, 2), SAL, 1)
    assert [i.produto.id for i in update_quantity(items, "arroz", 0)] == ["sal"]
    assert update_quantity(items, "sal", 4)[1].quantidade == 4


def test_operations_do_not_mutate_input():
    items = add_item([], ARROZ, 2)
    snapshot = list(items)
    update_quantity(items, "arroz", 9)
    remove_item(items, "arroz")
    assert items == snapshot


def test_clear_and_total_items():
    items = add_item(add_item([], ARROZ, 2), SAL, 3)
    assert total_items(items) == 5
    assert clear_cart() == []


def test_quote_downgrades_invalid_selection():
    items = add_item([], SAL, 2)
    quote = quote_cart(items, M.DINHEIRO)
    assert quote.modalidade == M.VAREJO
    assert quote.total == Decimal("6.00")
    assert not quote.availability.dinheiro.is_valid


def test_quote_brand_group_unlocks_cheapest_modality():
    items = add_item(add_item([], ARROZ, 8), FEIJAO, 8)
    quote = quote_cart(items)

    assert quote.max_grouped_quantity == 16
    assert quote.modalidade == M.DINHEIRO
    assert quote.total_varejo == Decimal("264.00")
    # feijao has no dinheiro price and falls back to varejo
    assert [line.preco_unitario for line in quote.itens] == [Decimal("22.00"), Decimal("8.00")]
    assert quote.total == Decimal("240.00")
    assert quote.total_itens == 16


def test_quote_keeps_valid_selection():
    items = add_item([], ARROZ, 12)
    quote = quote_cart(items, M.CARTAO)
    assert quote.modalidade == M.CARTAO
    assert quote.itens[0].subtotal == Decimal("288.00")


def test_quote_empty_cart():
    quote = quote_cart([], M.PIX)
    assert quote.modalidade == M.VAREJO
    assert quote.total == Decimal("0")
    assert quote.availability.pix.reason == "Carrinho vazio"


def test_build_cart_from_request_merges_repeated_products():
    produtos = {"arroz": ARROZ, "sal": SAL}
    requested = [
        CartItemRequest(produto_id="arroz", quantidade=600),
        CartItemRequest(produto_id="sal", quantidade=1),
        CartItemRequest(produto_id="arroz", quantidade=399),
    ]
    items = build_cart_from_request(produtos, requested)
    assert [(i.produto.id, i.quantidade) for i in items] == [("arroz", 999), ("sal", 1)]


def test_build_cart_from_request_rejects_instead_of_capping():
    requested = [
        CartItemRequest(produto_id="arroz", quantidade=999),
        CartItemRequest(produto_id="arroz", quantidade=999),
    ]
    with pytest.raises(BusinessRuleViolationException) as exc:
        build_cart_from_request({"arroz": ARROZ}, requested)
    assert exc.value.details == {"produto_ids": ["arroz"]}
