# backend/routers/courier_router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.session import get_db
from models.courier_model import CourierProfile
from models.order_model import Order
from schemas.couriers import CourierProfileOut, CourierProfileUpdate
from schemas.orders import OrderList, OrderResponse, OrderStatusUpdate
from services import order_service
from services.auth_service import SessionContext
from services.order_service import TERMINAL_STATUSES
from routers.dependencies import require_roles

router = APIRouter(prefix="/livreur", tags=["courier"])

current_courier = require_roles("courier")


def _profile_out(ctx: SessionContext) -> CourierProfileOut:
    c: CourierProfile = ctx.user.courier_profile
    return CourierProfileOut(
        id=c.id,
        user_id=ctx.user.id,
        full_name=ctx.user.full_name,
        phone=ctx.user.phone,
        status=ctx.user.status,
        vehicle_type=c.vehicle_type,
        license_number=c.license_number,
        availability=c.availability,
        delivery_zones=c.delivery_zones or [],
        rate_per_km=float(c.rate_per_km) if c.rate_per_km is not None else None,
    )


def _page(q, limit: int, offset: int) -> OrderList:
    total = q.count()
    orders = q.order_by(Order.created_at.desc(), Order.id.desc()).offset(offset).limit(limit).all()
    return OrderList(data=[order_service.order_to_response(o) for o in orders], total=total)


@router.get("/profile", response_model=CourierProfileOut)
def get_profile(ctx: SessionContext = Depends(current_courier)):
    return _profile_out(ctx)


@router.patch("/profile", response_model=CourierProfileOut)
def update_profile(body: CourierProfileUpdate, ctx: SessionContext = Depends(current_courier), db: Session = Depends(get_db)):
    c = ctx.user.courier_profile
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(c, field, value)
    db.commit()
    db.refresh(c)
    return _profile_out(ctx)


@router.get("/commandes/actives", response_model=OrderList)
def active_orders(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_courier),
    db: Session = Depends(get_db),
):
    q = order_service.scoped_orders(db, ctx.user).filter(Order.status.notin_(TERMINAL_STATUSES))
    return _page(q, limit, offset)


@router.get("/commandes/disponibles", response_model=OrderList)
def available_orders(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_courier),
    db: Session = Depends(get_db),
):
    if ctx.user.courier_profile.availability != "available":
        return OrderList(data=[], total=0)
    return _page(order_service.unassigned_orders(db), limit, offset)


@router.get("/historique", response_model=OrderList)
def delivery_history(
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_courier),
    db: Session = Depends(get_db),
):
    q = order_service.scoped_orders(db, ctx.user).filter(Order.status == "delivered")
    return _page(q, limit, offset)


@router.post("/commandes/{order_id}/accepter", response_model=OrderResponse)
def accept_order(order_id: int, ctx: SessionContext = Depends(current_courier), db: Session = Depends(get_db)):
    return order_service.order_to_response(order_service.accept_order(db, order_id, ctx.user))


@router.patch("/commandes/{order_id}/statut", response_model=OrderResponse)
def update_status(
    order_id: int,
    body: OrderStatusUpdate,
    ctx: SessionContext = Depends(current_courier),
    db: Session = Depends(get_db),
):
    return order_service.order_to_response(order_service.change_status(db, order_id, body.status, ctx.user))
