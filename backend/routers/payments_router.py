# backend/routers/payments_router.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.session import get_db
from models.order_model import Order
from models.payment_model import Payment
from schemas.payments import PaymentOut
from services.auth_service import SessionContext
from routers.dependencies import require_roles

router = APIRouter(prefix="/paiements", tags=["payments"])


def _list_payments(db: Session, criterion, limit: int):
    return (
        db.query(Payment)
        .join(Order, Payment.order_id == Order.id)
        .filter(criterion)
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .limit(limit)
        .all()
    )


@router.get("", response_model=List[PaymentOut])
def list_my_payments(
    limit: int = Query(default=100, ge=1, le=500),
    ctx: SessionContext = Depends(require_roles("client")),
    db: Session = Depends(get_db),
):
    return _list_payments(db, Order.client_id == ctx.user.profile_id, limit)


@router.get("/fournisseur", response_model=List[PaymentOut])
def list_supplier_payments(
    limit: int = Query(default=100, ge=1, le=500),
    ctx: SessionContext = Depends(require_roles("supplier")),
    db: Session = Depends(get_db),
):
    """Payments collected on the supplier's orders."""
    return _list_payments(db, Order.supplier_id == ctx.user.profile_id, limit)
