import os

# must be set before the app modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["AUTO_CREATE_TABLES"] = "true"

from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from database.session import Base, engine, SessionLocal
from database.demo_data import ensure_default_categories
from main import app
from services.auth_service import create_user

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_categories(db)
    finally:
        db.close()
    yield


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def login(client, email: str, password: str = PASSWORD) -> SimpleNamespace:
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    body = r.json()
    return SimpleNamespace(
        token=body["token"],
        headers=bearer(body["token"]),
        session_id=body["session_id"],
        user=body["user"],
        user_id=body["user"]["id"],
        profile_id=body["user"]["profile_id"],
        email=email,
    )


@pytest.fixture
def make_user(client):
    counter = {"n": 0}

    def _make(role: str, email: str = None, **role_data) -> SimpleNamespace:
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        if role == "admin":
            # admins are never self-registered
            db = SessionLocal()
            try:
                create_user(db, email, PASSWORD, f"Admin {counter['n']}", None, "admin")
                db.commit()
            finally:
                db.close()
        else:
            payload = {
                "email": email,
                "password": PASSWORD,
                "full_name": f"{role.title()} {counter['n']}",
                "phone": "0600000000",
                "role": role,
            }
            if role_data:
                payload["role_data"] = role_data
            r = client.post("/api/auth/register", json=payload)
            assert r.status_code == 201, r.text
        return login(client, email)

    return _make


@pytest.fixture
def market(client, make_user):
    """A client with an address, an open supplier with one product, an available courier."""
    customer = make_user("client")
    supplier = make_user("supplier", company_name="Chez Test", supplier_type="restaurant", delivery_fee=2.5)
    courier = make_user("courier", vehicle_type="scooter", license_number="LIC-1")

    r = client.post(
        "/api/client/adresses",
        json={"street": "12 Rue Atlas", "city": "Casablanca", "latitude": 33.57, "longitude": -7.59},
        headers=customer.headers,
    )
    assert r.status_code == 201, r.text
    address_id = r.json()["id"]

    category_id = client.get("/api/categories").json()[0]["id"]
    r = client.post(
        "/api/fournisseur/produits",
        json={"name": "Tagine", "description": "house special", "price": 10.0, "stock": 10, "category_id": category_id},
        headers=supplier.headers,
    )
    assert r.status_code == 201, r.text
    product_id = r.json()["id"]

    r = client.patch("/api/livreur/profile", json={"availability": "available"}, headers=courier.headers)
    assert r.status_code == 200, r.text

    return SimpleNamespace(
        client=customer,
        supplier=supplier,
        courier=courier,
        address_id=address_id,
        product_id=product_id,
        category_id=category_id,
    )


def place_order(client, market, quantity: int = 2, payment_method: str = "cash", product_id: int = None):
    return client.post(
        "/api/commandes",
        json={
            "supplier_id": market.supplier.profile_id,
            "delivery_address_id": market.address_id,
            "items": [{"product_id": product_id or market.product_id, "quantity": quantity}],
            "payment_method": payment_method,
        },
        headers=market.client.headers,
    )


def set_status(client, actor, order_id: int, status: str):
    return client.put(f"/api/commandes/{order_id}/statut", json={"status": status}, headers=actor.headers)


def events(client, actor) -> list:
    r = client.get("/api/notifications", params={"after": 0, "limit": 200}, headers=actor.headers)
    assert r.status_code == 200, r.text
    return [n["event"] for n in r.json()["notifications"]]
