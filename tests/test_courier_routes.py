from conftest import place_order, set_status, events


def test_profile_roundtrip(client, make_user):
    c = make_user("courier", vehicle_type="bike")
    r = client.get("/api/livreur/profile", headers=c.headers).json()
    assert r["vehicle_type"] == "bike"
    assert r["availability"] == "offline"

    r = client.patch(
        "/api/livreur/profile",
        json={"availability": "paused", "delivery_zones": ["Maarif", "Gauthier"], "rate_per_km": 3.5},
        headers=c.headers,
    ).json()
    assert r["availability"] == "paused"
    assert r["delivery_zones"] == ["Maarif", "Gauthier"]
    assert r["rate_per_km"] == 3.5


def test_available_orders_need_availability(client, market):
    oid = place_order(client, market).json()["id"]
    set_status(client, market.supplier, oid, "preparing")

    r = client.get("/api/livreur/commandes/disponibles", headers=market.courier.headers).json()
    assert [o["id"] for o in r["data"]] == [oid]

    client.patch("/api/livreur/profile", json={"availability": "offline"}, headers=market.courier.headers)
    r = client.get("/api/livreur/commandes/disponibles", headers=market.courier.headers).json()
    assert r["data"] == []


def test_pending_orders_are_not_offered(client, market):
    place_order(client, market)
    r = client.get("/api/livreur/commandes/disponibles", headers=market.courier.headers).json()
    assert r["total"] == 0


def test_accept_then_deliver(client, market):
    c = market.courier
    oid = place_order(client, market).json()["id"]
    set_status(client, market.supplier, oid, "preparing")

    r = client.post(f"/api/livreur/commandes/{oid}/accepter", headers=c.headers)
    assert r.status_code == 200
    assert r.json()["courier_id"] == c.profile_id
    assert events(client, market.client) == ["order_confirmed", "courier_assigned"]

    active = client.get("/api/livreur/commandes/actives", headers=c.headers).json()
    assert [o["id"] for o in active["data"]] == [oid]

    set_status(client, market.supplier, oid, "ready_for_pickup")
    assert client.patch(f"/api/livreur/commandes/{oid}/statut", json={"status": "out_for_delivery"},
                        headers=c.headers).status_code == 200
    assert client.patch(f"/api/livreur/commandes/{oid}/statut", json={"status": "delivered"},
                        headers=c.headers).status_code == 200

    assert client.get("/api/livreur/commandes/actives", headers=c.headers).json()["total"] == 0
    history = client.get("/api/livreur/historique", headers=c.headers).json()
    assert [o["id"] for o in history["data"]] == [oid]


def test_accept_requires_pickup_status(client, market):
    oid = place_order(client, market).json()["id"]
    r = client.post(f"/api/livreur/commandes/{oid}/accepter", headers=market.courier.headers)
    assert r.status_code == 400


def test_accept_taken_order(client, market, make_user):
    rival = make_user("courier")
    client.patch("/api/livreur/profile", json={"availability": "available"}, headers=rival.headers)
    oid = place_order(client, market).json()["id"]
    set_status(client, market.supplier, oid, "preparing")
    assert client.post(f"/api/livreur/commandes/{oid}/accepter", headers=market.courier.headers).status_code == 200
    assert client.post(f"/api/livreur/commandes/{oid}/accepter", headers=rival.headers).status_code == 400


def test_courier_routes_require_courier_role(client, market):
    assert client.get("/api/livreur/profile", headers=market.client.headers).status_code == 403
