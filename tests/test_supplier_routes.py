from conftest import place_order, set_status


def test_product_crud(client, market):
    s = market.supplier
    r = client.post(
        "/api/fournisseur/produits",
        json={"name": "Mint tea", "price": 12, "stock": 3, "category_id": market.category_id},
        headers=s.headers,
    )
    assert r.status_code == 201
    pid = r.json()["id"]

    r = client.put(f"/api/fournisseur/produits/{pid}", json={"price": 15, "stock": 30}, headers=s.headers)
    assert r.status_code == 200
    assert r.json()["price"] == 15.0
    assert r.json()["stock"] == 30

    assert len(client.get("/api/fournisseur/produits", headers=s.headers).json()) == 2

    assert client.delete(f"/api/fournisseur/produits/{pid}", headers=s.headers).status_code == 200
    assert client.get(f"/api/produits/{pid}").status_code == 404
    assert len(client.get("/api/fournisseur/produits", headers=s.headers).json()) == 1


def test_create_product_unknown_category(client, market):
    r = client.post(
        "/api/fournisseur/produits",
        json={"name": "Ghost", "price": 1, "category_id": 999},
        headers=market.supplier.headers,
    )
    assert r.status_code == 400


def test_toggle_availability_hides_from_catalog(client, market):
    s = market.supplier
    r = client.patch(f"/api/fournisseur/produits/{market.product_id}", headers=s.headers)
    assert r.json()["is_available"] is False
    assert client.get("/api/produits").json() == []
    r = client.patch(f"/api/fournisseur/produits/{market.product_id}", headers=s.headers)
    assert r.json()["is_available"] is True


def test_promotion_can_be_cleared(client, market):
    s = market.supplier
    client.put(f"/api/fournisseur/produits/{market.product_id}", json={"promotion_percent": 50}, headers=s.headers)
    r = client.put(f"/api/fournisseur/produits/{market.product_id}", json={"promotion_percent": 0}, headers=s.headers)
    assert r.json()["promo_price"] is None
    assert r.json()["promotion_percent"] == 0


def test_price_change_keeps_discount_rate(client, market):
    s = market.supplier
    url = f"/api/fournisseur/produits/{market.product_id}"
    r = client.put(url, json={"promotion_percent": 20}, headers=s.headers).json()
    assert r["promo_price"] == 8.0

    r = client.put(url, json={"price": 5}, headers=s.headers).json()
    assert r["price"] == 5.0
    assert r["promo_price"] == 4.0
    assert r["promotion_percent"] == 20


def test_cannot_edit_another_suppliers_product(client, market, make_user):
    rival = make_user("supplier")
    r = client.put(f"/api/fournisseur/produits/{market.product_id}", json={"price": 1}, headers=rival.headers)
    assert r.status_code == 404


def test_low_stock_alerts(client, market):
    s = market.supplier
    client.put(f"/api/fournisseur/produits/{market.product_id}", json={"stock": 0}, headers=s.headers)
    alerts = client.get("/api/fournisseur/alertes", headers=s.headers).json()
    assert len(alerts) == 1
    assert alerts[0]["product_id"] == market.product_id
    assert alerts[0]["severity"] == "critical"


def test_stats_and_top_products(client, market):
    s = market.supplier
    first = place_order(client, market, quantity=2).json()["id"]
    cancelled = place_order(client, market, quantity=1).json()["id"]
    set_status(client, market.client, cancelled, "cancelled")
    set_status(client, s, first, "preparing")

    stats = client.get("/api/fournisseur/stats", headers=s.headers).json()
    assert stats["orders_today"] == 2
    assert stats["total_orders"] == 2
    assert stats["revenue_today"] == 23.5
    assert stats["revenue_month"] == 23.5

    top = client.get("/api/fournisseur/produits/top", headers=s.headers).json()
    assert top == [{"id": market.product_id, "name": "Tagine", "sales": 2}]


def test_supplier_order_views(client, market):
    oid = place_order(client, market).json()["id"]
    s = market.supplier
    r = client.get("/api/fournisseur/commandes", params={"status": "pending"}, headers=s.headers).json()
    assert [o["id"] for o in r["data"]] == [oid]

    r = client.patch(f"/api/fournisseur/commandes/{oid}", json={"status": "preparing"}, headers=s.headers)
    assert r.status_code == 200
    assert r.json()["status"] == "preparing"


def test_profile_update(client, market):
    s = market.supplier
    r = client.patch("/api/fournisseur/profile", json={"delivery_fee": 4, "company_name": "Renamed"}, headers=s.headers)
    assert r.status_code == 200
    assert r.json()["delivery_fee"] == 4.0
    assert r.json()["company_name"] == "Renamed"
    assert place_order(client, market, quantity=1).json()["delivery_fee"] == 4.0


def test_payment_history(client, market, make_user):
    first = place_order(client, market, quantity=1).json()["id"]
    second = place_order(client, market, quantity=2).json()["id"]
    rival = make_user("supplier")

    r = client.get("/api/paiements/fournisseur", headers=market.supplier.headers)
    assert r.status_code == 200
    assert [p["order_id"] for p in r.json()] == [second, first]
    assert r.json()[0]["amount"] == 23.5

    r = client.get("/api/paiements/fournisseur", params={"limit": 1}, headers=market.supplier.headers)
    assert len(r.json()) == 1
    assert client.get("/api/paiements/fournisseur", headers=rival.headers).json() == []
    assert client.get("/api/paiements/fournisseur", headers=market.client.headers).status_code == 403
