# backend/routers/orders_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.session import get_db
from schemas.orders import (
    OrderCreate, OrderResponse, OrderStatusUpdate, AssignCourier,
    OrderStatus, OrderList, StatusChangeOut,
)
from services import order_service
from services.auth_service import SessionContext
from routers.dependencies import get_session_context, require_roles

router = APIRouter(prefix="/commandes", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=201)
def create_order(
    body: OrderCreate,
    ctx: SessionContext = Depends(require_roles("client")),
    db: Session = Depends(get_db),
):
    o = order_service.create_order(db, ctx.user, body)
    return order_service.order_to_response(o)


@router.get("", response_model=OrderList)
def list_orders(
    status: Optional[OrderStatus] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    orders, total = order_service.list_orders(db, ctx.user, status, limit, offset)
    return OrderList(data=[order_service.order_to_response(o) for o in orders], total=total)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    return order_service.order_to_response(order_service.get_order_for(db, order_id, ctx.user))


@router.get("/{order_id}/historique", response_model=List[StatusChangeOut])
def get_status_history(order_id: int, ctx: SessionContext = Depends(get_session_context), db: Session = Depends(get_db)):
    return order_service.status_history(db, order_id, ctx.user)


@router.put("/{order_id}/statut", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    ctx: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
):
    o = order_service.change_status(db, order_id, body.status, ctx.user)
    return order_service.order_to_response(o)


@router.put("/{order_id}/assigner-livreur", response_model=OrderResponse)
def assign_courier(
    order_id: int,
    body: AssignCourier,
    ctx: SessionContext = Depends(require_roles("supplier", "admin")),
    db: Session = Depends(get_db),
):
    o = order_service.assign_courier(db, order_id, body.courier_id, ctx.user)
    return order_service.order_to_response(o)


@router.put("/{order_id}/confirmer-paiement", response_model=OrderResponse)
def confirm_cash_payment(
    order_id: int,
    ctx: SessionContext = Depends(require_roles("courier")),
    db: Session = Depends(get_db),
):
    o = order_service.confirm_cash_payment(db, order_id, ctx.user)
    return order_service.order_to_response(o)
