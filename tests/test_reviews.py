from conftest import place_order, set_status


def _delivered_order(client, market, **kwargs) -> int:
    oid = place_order(client, market, **kwargs).json()["id"]
    for status in ("preparing", "ready_for_pickup", "out_for_delivery", "delivered"):
        assert set_status(client, market.supplier, oid, status).status_code == 200
    return oid


def _review(client, actor, order_id, rating, **extra):
    return client.post("/api/avis", json={"order_id": order_id, "rating": rating, **extra}, headers=actor.headers)


def test_review_updates_supplier_rating(client, market):
    first = _delivered_order(client, market, quantity=1)
    second = _delivered_order(client, market, quantity=1)

    r = _review(client, market.client, first, 5, product_id=market.product_id, comment="Great tagine")
    assert r.status_code == 201
    assert r.json()["author"] == market.client.user["full_name"]
    assert r.json()["supplier_id"] == market.supplier.profile_id
    assert _review(client, market.client, second, 4).status_code == 201

    stats = client.get("/api/fournisseur/stats", headers=market.supplier.headers).json()
    assert stats["rating"] == 4.5

    product = client.get(f"/api/avis/produit/{market.product_id}").json()
    assert [(a["rating"], a["comment"]) for a in product] == [(5, "Great tagine")]

    by_supplier = client.get(f"/api/avis/fournisseur/{market.supplier.profile_id}").json()
    assert sorted(a["rating"] for a in by_supplier) == [4, 5]
    mine = client.get("/api/avis/fournisseur", headers=market.supplier.headers).json()
    assert len(mine) == 2


def test_only_delivered_orders_can_be_reviewed(client, market):
    oid = place_order(client, market).json()["id"]
    r = _review(client, market.client, oid, 3)
    assert r.status_code == 400


def test_rating_must_be_between_zero_and_five(client, market):
    oid = _delivered_order(client, market)
    assert _review(client, market.client, oid, 6).status_code == 422
    assert _review(client, market.client, oid, -1).status_code == 422
    assert _review(client, market.client, oid, 0).status_code == 201


def test_one_review_per_order_and_product(client, market):
    oid = _delivered_order(client, market)
    assert _review(client, market.client, oid, 4).status_code == 201
    assert _review(client, market.client, oid, 2).status_code == 409
    assert _review(client, market.client, oid, 2, product_id=market.product_id).status_code == 201
    assert _review(client, market.client, oid, 2, product_id=market.product_id).status_code == 409


def test_review_product_must_belong_to_order(client, market):
    oid = _delivered_order(client, market)
    r = _review(client, market.client, oid, 4, product_id=999)
    assert r.status_code == 400


def test_cannot_review_someone_elses_order(client, market, make_user):
    other = make_user("client")
    oid = _delivered_order(client, market)
    assert _review(client, other, oid, 1).status_code == 403
    assert _review(client, market.supplier, oid, 1).status_code == 403
