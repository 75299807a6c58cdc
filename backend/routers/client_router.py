# backend/routers/client_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from database.session import get_db
from models.address_model import Address
from models.favorite_model import Favorite
from models.product_model import Product
from schemas.addresses import AddressIn, AddressOut
from schemas.clients import ClientProfileOut, FavoriteIn
from schemas.orders import OrderList, OrderStatus
from schemas.products import ProductOut
from schemas.sessions import ActionResult
from services import order_service
from services.auth_service import SessionContext
from routers.dependencies import require_roles
from routers.products_router import product_to_out

router = APIRouter(prefix="/client", tags=["client"])

current_client = require_roles("client")


def _check_coordinates(body: AddressIn):
    if not -90 <= body.latitude <= 90 or not -180 <= body.longitude <= 180:
        raise HTTPException(status_code=400, detail="Invalid coordinates")


def _own_address(db: Session, client_id: int, address_id: int) -> Address:
    a = db.query(Address).filter(Address.id == address_id, Address.client_id == client_id).first()
    if not a:
        raise HTTPException(status_code=404, detail="Address not found")
    return a


def _set_primary(db: Session, client_id: int, address: Address):
    db.query(Address).filter(Address.client_id == client_id, Address.id != address.id).update(
        {Address.is_primary: False}, synchronize_session="fetch"
    )
    address.is_primary = True


@router.get("/profile", response_model=ClientProfileOut)
def get_profile(ctx: SessionContext = Depends(current_client)):
    c = ctx.user.client_profile
    primary = c.primary_address
    return ClientProfileOut(
        id=c.id,
        user_id=ctx.user.id,
        email=ctx.user.email,
        full_name=ctx.user.full_name,
        phone=ctx.user.phone,
        primary_address_id=primary.id if primary else None,
        created_at=c.created_at,
    )


@router.get("/commandes", response_model=OrderList)
def my_orders(
    status: Optional[OrderStatus] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_client),
    db: Session = Depends(get_db),
):
    orders, total = order_service.list_orders(db, ctx.user, status, limit, offset)
    return OrderList(data=[order_service.order_to_response(o) for o in orders], total=total)


# ---------- addresses ----------

@router.get("/adresses", response_model=List[AddressOut])
def list_addresses(ctx: SessionContext = Depends(current_client), db: Session = Depends(get_db)):
    return (
        db.query(Address)
        .filter(Address.client_id == ctx.user.profile_id)
        .order_by(Address.is_primary.desc(), Address.id.asc())
        .all()
    )


@router.post("/adresses", response_model=AddressOut, status_code=201)
def add_address(body: AddressIn, ctx: SessionContext = Depends(current_client), db: Session = Depends(get_db)):
    _check_coordinates(body)
    client_id = ctx.user.profile_id
    first = db.query(Address).filter(Address.client_id == client_id).count() == 0
    a = Address(client_id=client_id, is_primary=first, **body.model_dump())
    db.add(a)
    db.commit()
    db.refresh(a)
    return a


@router.put("/adresses/{address_id}", response_model=AddressOut)
def update_address(
    address_id: int,
    body: AddressIn,
    ctx: SessionContext = Depends(current_client),
    db: Session = Depends(get_db),
):
    _check_coordinates(body)
    a = _own_address(db, ctx.user.profile_id, address_id)
    for field, value in body.model_dump().items():
        setattr(a, field, value)
    db.commit()
    db.refresh(a)
    return a


@router.put("/adresses/{address_id}/principale", response_model=AddressOut)
def make_primary(address_id: int, ctx: SessionContext = Depends(current_client), db: Session = Depends(get_db)):
    client_id = ctx.user.profile_id
    a = _own_address(db, client_id, address_id)
    _set_primary(db, client_id, a)
    db.commit()
    db.refresh(a)
    return a


@router.delete("/adresses/{address_id}", response_model=ActionResult)
def delete_address(address_id: int, ctx: SessionContext = Depends(current_client), db: Session = Depends(get_db)):
    client_id = ctx.user.profile_id
    a = _own_address(db, client_id, address_id)
    was_primary = a.is_primary
    db.delete(a)
    db.flush()
    if was_primary:
        # promote the oldest remaining address
        nxt = db.query(Address).filter(Address.client_id == client_id).order_by(Address.id.asc()).first()
        if nxt:
            nxt.is_primary = True
    db.commit()
    return ActionResult(message="Address deleted")


# ---------- favorites ----------

@router.get("/favoris", response_model=List[ProductOut])
def list_favorites(ctx: SessionContext = Depends(current_client), db: Session = Depends(get_db)):
    favs = (
        db.query(Favorite)
        .filter(Favorite.client_id == ctx.user.profile_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        .all()
    )
    return [product_to_out(f.product) for f in favs if f.product is not None and f.product.is_active]


@router.post("/favoris", response_model=ActionResult, status_code=201)
def add_favorite(body: FavoriteIn, ctx: SessionContext = Depends(current_client), db: Session = Depends(get_db)):
    p = db.get(Product, body.product_id)
    if not p or not p.is_active:
        raise HTTPException(status_code=404, detail="Product not found")
    client_id = ctx.user.profile_id
    exists = db.query(Favorite).filter(Favorite.client_id == client_id, Favorite.product_id == p.id).count() > 0
    if exists:
        raise HTTPException(status_code=409, detail="Product already in favorites")
    db.add(Favorite(client_id=client_id, product_id=p.id))
    db.commit()
    return ActionResult(message="Added to favorites")


@router.delete("/favoris/{product_id}", response_model=ActionResult)
def remove_favorite(product_id: int, ctx: SessionContext = Depends(current_client), db: Session = Depends(get_db)):
    f = (
        db.query(Favorite)
        .filter(Favorite.client_id == ctx.user.profile_id, Favorite.product_id == product_id)
        .first()
    )
    if not f:
        raise HTTPException(status_code=404, detail="Favorite not found")
    db.delete(f)
    db.commit()
    return ActionResult(message="Removed from favorites")
