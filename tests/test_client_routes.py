from models.favorite_model import Favorite

from conftest import place_order


def _address(client, c, street="1 Main St", lat=33.5, lng=-7.6):
    return client.post(
        "/api/client/adresses",
        json={"street": street, "city": "Rabat", "postal_code": "10000", "latitude": lat, "longitude": lng},
        headers=c.headers,
    )


def test_profile(client, make_user):
    c = make_user("client")
    r = client.get("/api/client/profile", headers=c.headers)
    assert r.status_code == 200
    assert r.json()["email"] == c.email
    assert r.json()["primary_address_id"] is None


def test_client_routes_require_client_role(client, make_user):
    s = make_user("supplier")
    assert client.get("/api/client/profile", headers=s.headers).status_code == 403
    assert client.get("/api/client/profile").status_code == 401


def test_first_address_is_primary(client, make_user):
    c = make_user("client")
    first = _address(client, c).json()
    second = _address(client, c, street="2 Side St").json()
    assert first["is_primary"] is True
    assert second["is_primary"] is False
    assert client.get("/api/client/profile", headers=c.headers).json()["primary_address_id"] == first["id"]


def test_make_primary_keeps_exactly_one(client, make_user):
    c = make_user("client")
    first = _address(client, c).json()
    second = _address(client, c, street="2 Side St").json()

    r = client.put(f"/api/client/adresses/{second['id']}/principale", headers=c.headers)
    assert r.status_code == 200
    listed = client.get("/api/client/adresses", headers=c.headers).json()
    assert [a["id"] for a in listed if a["is_primary"]] == [second["id"]]
    assert listed[0]["id"] == second["id"]
    assert first["id"] in [a["id"] for a in listed]


def test_deleting_primary_promotes_next(client, make_user):
    c = make_user("client")
    first = _address(client, c).json()
    second = _address(client, c, street="2 Side St").json()
    assert client.delete(f"/api/client/adresses/{first['id']}", headers=c.headers).status_code == 200
    listed = client.get("/api/client/adresses", headers=c.headers).json()
    assert [(a["id"], a["is_primary"]) for a in listed] == [(second["id"], True)]


def test_update_address(client, make_user):
    c = make_user("client")
    a = _address(client, c).json()
    r = client.put(
        f"/api/client/adresses/{a['id']}",
        json={"street": "9 New St", "city": "Fes", "latitude": 34.0, "longitude": -5.0},
        headers=c.headers,
    )
    assert r.status_code == 200
    assert r.json()["city"] == "Fes"


def test_invalid_coordinates(client, make_user):
    c = make_user("client")
    assert _address(client, c, lat=91).status_code == 400
    assert _address(client, c, lng=-181).status_code == 400


def test_addresses_are_private(client, make_user):
    owner = make_user("client")
    stranger = make_user("client")
    a = _address(client, owner).json()
    assert client.delete(f"/api/client/adresses/{a['id']}", headers=stranger.headers).status_code == 404
    assert client.put(f"/api/client/adresses/{a['id']}/principale", headers=stranger.headers).status_code == 404


def test_favorites(client, market):
    c = market.client
    r = client.post("/api/client/favoris", json={"product_id": market.product_id}, headers=c.headers)
    assert r.status_code == 201
    r = client.post("/api/client/favoris", json={"product_id": market.product_id}, headers=c.headers)
    assert r.status_code == 409

    favs = client.get("/api/client/favoris", headers=c.headers).json()
    assert [f["id"] for f in favs] == [market.product_id]

    assert client.delete(f"/api/client/favoris/{market.product_id}", headers=c.headers).status_code == 200
    assert client.get("/api/client/favoris", headers=c.headers).json() == []
    assert client.delete(f"/api/client/favoris/{market.product_id}", headers=c.headers).status_code == 404


def test_favorites_survive_supplier_deletion(client, market, make_user, db):
    admin = make_user("admin")
    c = market.client
    client.post("/api/client/favoris", json={"product_id": market.product_id}, headers=c.headers)

    r = client.delete(f"/api/admin/utilisateurs/{market.supplier.user_id}", headers=admin.headers)
    assert r.status_code == 200
    r = client.get("/api/client/favoris", headers=c.headers)
    assert r.status_code == 200
    assert r.json() == []
    assert db.query(Favorite).count() == 0


def test_favorite_unknown_product(client, make_user):
    c = make_user("client")
    assert client.post("/api/client/favoris", json={"product_id": 999}, headers=c.headers).status_code == 404


def test_my_orders_and_payments(client, market):
    place_order(client, market)
    r = client.get("/api/client/commandes", headers=market.client.headers).json()
    assert r["total"] == 1

    payments = client.get("/api/paiements", headers=market.client.headers).json()
    assert len(payments) == 1
    assert payments[0]["amount"] == 23.5
    assert payments[0]["method"] == "cash"
    assert payments[0]["status"] == "pending"


def test_catalog_is_public(client, market):
    r = client.get("/api/produits", params={"search": "tag"})
    assert [p["id"] for p in r.json()] == [market.product_id]
    assert client.get("/api/produits", params={"category_id": 999}).json() == []
    assert client.get("/api/produits/999").status_code == 404
    names = [c["name"] for c in client.get("/api/categories").json()]
    assert "Restaurant" in names
