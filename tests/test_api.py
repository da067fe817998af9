from decimal import Decimal

from app.config import get_settings
from app.domain.models.order import ArchivedOrder, Order


def checkout_payload(items, modalidade="varejo", **overrides):
    payload = {
        "nome": "Maria Souza",
        "nome_empresa": "Mercadinho Souza",
        "cpf_cnpj": "123.456.789-09",
        "telefone": "(65) 99999-1234",
        "email": "maria@example.com",
        "endereco": "Rua das Flores, 10",
        "cidade": "Cuiabá",
        "estado": "MT",
        "modalidade": modalidade,
        "items": items,
    }
    payload.update(overrides)
    return payload


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


def test_request_id_header_is_returned(client):
    resp = client.get("/health")
    assert "x-request-id" in resp.headers


# --- products ---

def test_list_products_hides_inactive(client, make_product):
    make_product(nome="Arroz", marca="Tio Joao", categoria="Mercearia")
    make_product(nome="Oculto", ativo=False)

    resp = client.get("/api/products")
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] == 1
    assert body["items"][0]["nome"] == "Arroz"


def test_product_filters_and_search(client, make_product):
    make_product(nome="Arroz Branco", marca="Tio Joao", categoria="Mercearia")
    make_product(nome="Sabão", marca="Ype", categoria="Limpeza")

    assert client.get("/api/products", params={"categoria": "Limpeza"}).json()["total"] == 1
    assert client.get("/api/products", params={"busca": "arroz"}).json()["total"] == 1

    options = client.get("/api/products/filters").json()
    assert options == {"categorias": ["Limpeza", "Mercearia"], "marcas": ["Tio Joao", "Ype"]}


def test_product_not_found(client):
    resp = client.get("/api/products/nao-existe")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "EntityNotFoundException"


# --- cart quote ---

def test_cart_quote_brand_mix(client, make_product):
    a = make_product(marca="X", preco_varejo=Decimal("5.00"), preco_cartao=Decimal("4.50"))
    b = make_product(marca="X", preco_varejo=Decimal("5.00"))

    resp = client.post(
        "/api/cart/quote",
        json={"items": [{"produto_id": a.id, "quantidade": 6}, {"produto_id": b.id, "quantidade": 6}], "modalidade": "cartao"},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["modalidade"] == "cartao"
    assert body["max_grouped_quantity"] == 12
    assert body["availability"]["cartao"]["is_valid"] is True
    assert body["availability"]["pix"]["is_valid"] is False
    assert Decimal(body["total"]) == Decimal("57.00")
    assert Decimal(body["total_varejo"]) == Decimal("60.00")


def test_cart_quote_merges_repeated_products(client, make_product):
    a = make_product(preco_varejo=Decimal("1.00"))
    resp = client.post(
        "/api/cart/quote",
        json={"items": [{"produto_id": a.id, "quantidade": 20}, {"produto_id": a.id, "quantidade": 10}]},
    )
    body = resp.json()
    assert len(body["itens"]) == 1
    assert body["availability"]["oferta"]["is_valid"] is True
    assert body["modalidade"] == "dinheiro"


def test_cart_quote_rejects_bad_quantity(client, make_product):
    a = make_product()
    resp = client.post("/api/cart/quote", json={"items": [{"produto_id": a.id, "quantidade": 0}]})
    assert resp.status_code == 422


def test_cart_quote_unknown_product(client):
    resp = client.post("/api/cart/quote", json={"items": [{"produto_id": "x", "quantidade": 1}]})
    assert resp.status_code == 404
    assert resp.json()["error"]["details"] == {"produto_ids": ["x"]}


# --- checkout ---

def test_checkout_persists_quoted_prices(client, make_product):
    a = make_product(nome="Óleo", preco_varejo=Decimal("10.00"), preco_pix=Decimal("8.50"))
    b = make_product(nome="Açúcar", preco=Decimal("4.00"))

    resp = client.post(
        "/api/orders/catalog",
        json=checkout_payload(
            [{"produto_id": a.id, "quantidade": 15}, {"produto_id": b.id, "quantidade": 2}],
            modalidade="pix",
        ),
    )
    assert resp.status_code == 201, resp.text
    result = resp.json()
    assert result["success"] is True
    assert result["numero_pedido"] == "#001"
    assert result["forma_pagamento"] == "PIX"
    assert Decimal(result["valor_total"]) == Decimal("135.50")

    order = client.get(f"/api/orders/{result['pedido_id']}").json()
    assert order["status"] == "Novo"
    assert order["origem"] == "catalogo"
    assert order["modalidade_pagamento"] == "pix"
    assert order["telefone"] == "65999991234"
    prices = {i["produto_nome"]: Decimal(i["preco_unitario"]) for i in order["itens"]}
    assert prices == {"Óleo": Decimal("8.50"), "Açúcar": Decimal("4.00")}


def test_checkout_rejects_ineligible_modality(client, make_product):
    a = make_product(preco_varejo=Decimal("10.00"))
    resp = client.post(
        "/api/orders/catalog",
        json=checkout_payload([{"produto_id": a.id, "quantidade": 3}], modalidade="dinheiro"),
    )
    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "BusinessRuleViolationException"
    assert error["details"]["reason"] == "Necessário 15 unidades do mesmo produto/marca ou R$ 300.00"
    assert error["details"]["suggestion"] == "Adicione 12 unidades ou R$ 270.00"


def test_checkout_validates_form(client, make_product):
    a = make_product()
    resp = client.post(
        "/api/orders/catalog",
        json=checkout_payload([{"produto_id": a.id, "quantidade": 1}], telefone="123", nome="  "),
    )
    assert resp.status_code == 422


def test_checkout_rejects_inactive_product(client, make_product):
    a = make_product(ativo=False)
    resp = client.post("/api/orders/catalog", json=checkout_payload([{"produto_id": a.id, "quantidade": 1}]))
    assert resp.status_code == 404


def test_order_numbers_follow_archived_orders(client, db, make_product):
    db.add(ArchivedOrder(pedido_id="old", numero_pedido="#041", cliente="Antigo", status="Entregue"))
    db.commit()
    a = make_product()

    first = client.post("/api/orders/catalog", json=checkout_payload([{"produto_id": a.id, "quantidade": 1}]))
    second = client.post("/api/orders/catalog", json=checkout_payload([{"produto_id": a.id, "quantidade": 1}]))
    assert first.json()["numero_pedido"] == "#042"
    assert second.json()["numero_pedido"] == "#043"


def test_checkout_reuses_client_and_updates_stats(client, make_product):
    a = make_product(preco_varejo=Decimal("10.00"))
    items = [{"produto_id": a.id, "quantidade": 2}]

    first = client.post("/api/orders/catalog", json=checkout_payload(items)).json()
    # same CPF, new phone: matched by CPF/CNPJ
    second = client.post(
        "/api/orders/catalog",
        json=checkout_payload(items, telefone="65988887777", endereco="Av. Nova, 99"),
    ).json()
    assert first["cliente_id"] == second["cliente_id"]

    cliente = client.get(f"/api/clients/{first['cliente_id']}").json()
    assert cliente["origem"] == "catalogo"
    assert cliente["telefone"] == "65988887777"
    assert cliente["endereco"] == "Av. Nova, 99"
    assert cliente["total_pedidos"] == 2
    assert Decimal(cliente["total_gasto"]) == Decimal("40.00")
    assert Decimal(cliente["ticket_medio"]) == Decimal("20.00")


def test_checkout_matches_client_by_phone(client, make_product):
    a = make_product()
    items = [{"produto_id": a.id, "quantidade": 1}]
    first = client.post("/api/orders/catalog", json=checkout_payload(items, cpf_cnpj=None)).json()
    second = client.post("/api/orders/catalog", json=checkout_payload(items, cpf_cnpj="11.222.333/0001-81")).json()
    assert first["cliente_id"] == second["cliente_id"]

    clients = client.get("/api/clients", params={"origem": "catalogo"}).json()
    assert clients["total"] == 1
    assert clients["items"][0]["cpf_cnpj"] == "11222333000181"


def test_checkout_blocked_when_catalog_disabled(client, make_product, monkeypatch):
    monkeypatch.setattr(get_settings(), "CATALOGO_ATIVO", False)
    a = make_product()
    resp = client.post("/api/orders/catalog", json=checkout_payload([{"produto_id": a.id, "quantidade": 1}]))
    assert resp.status_code == 503


def test_checkout_rejects_merged_quantity_above_limit(client, make_product):
    a = make_product()
    resp = client.post(
        "/api/orders/catalog",
        json=checkout_payload([{"produto_id": a.id, "quantidade": 999}, {"produto_id": a.id, "quantidade": 999}]),
    )
    assert resp.status_code == 422
    error = resp.json()["error"]
    assert error["code"] == "BusinessRuleViolationException"
    assert error["details"] == {"produto_ids": [a.id]}
    assert client.get("/api/clients").json()["total"] == 0


def test_cart_quote_rejects_merged_quantity_above_limit(client, make_product):
    a = make_product()
    resp = client.post(
        "/api/cart/quote",
        json={"items": [{"produto_id": a.id, "quantidade": 500}, {"produto_id": a.id, "quantidade": 500}]},
    )
    assert resp.status_code == 422


def test_checkout_survives_client_stats_failure(client, make_product, monkeypatch):
    def broken_stats(*args, **kwargs):
        raise RuntimeError("stats unavailable")

    monkeypatch.setattr("app.application.services.order_service.register_purchase", broken_stats)
    a = make_product(preco_varejo=Decimal("10.00"))

    resp = client.post("/api/orders/catalog", json=checkout_payload([{"produto_id": a.id, "quantidade": 2}]))
    assert resp.status_code == 201, resp.text

    order = client.get(f"/api/orders/{resp.json()['pedido_id']}")
    assert order.status_code == 200
    assert Decimal(order.json()["valor_total"]) == Decimal("20.00")
    cliente = client.get(f"/api/clients/{resp.json()['cliente_id']}").json()
    assert cliente["total_pedidos"] == 0


def test_inactive_product_detail_is_hidden(client, make_product):
    a = make_product(ativo=False)
    assert client.get(f"/api/products/{a.id}").status_code == 404

    b = make_product()
    assert client.get(f"/api/products/{b.id}").json()["id"] == b.id


def test_order_numbers_past_999(client, db, make_product):
    db.add(Order(numero_pedido="#1000", cliente="A", telefone="6533334444"))
    db.add(Order(numero_pedido="#999", cliente="B", telefone="6533334444"))
    db.add(ArchivedOrder(pedido_id="old", numero_pedido="#998", cliente="C", status="Entregue"))
    db.commit()
    a = make_product()

    resp = client.post("/api/orders/catalog", json=checkout_payload([{"produto_id": a.id, "quantidade": 1}]))
    assert resp.json()["numero_pedido"] == "#1001"
