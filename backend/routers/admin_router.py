# backend/routers/admin_router.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy import func, or_, true
from sqlalchemy.orm import Session

from database.session import get_db
from models.audit_model import AuditLog
from models.order_model import Order
from models.product_model import Product
from models.session_model import UserSession
from models.user_model import User
from schemas.admin import AdminUserCreate, UserStatusUpdate, UserList, PlatformStats, AuditLogOut
from schemas.orders import OrderList, OrderResponse, OrderStatus
from schemas.sessions import ActionResult, CleanupResult
from schemas.users import Role, UserOut, UserStatus
from services import audit_service, auth_service, order_service
from services.auth_service import SessionContext
from routers.dependencies import require_roles, client_ip

router = APIRouter(prefix="/admin", tags=["admin"])

current_admin = require_roles("admin")


def _get_user(db: Session, user_id: int) -> User:
    u = db.get(User, user_id)
    if not u:
        raise HTTPException(status_code=404, detail="User not found")
    return u


def _has_orders(db: Session, u: User) -> bool:
    pid = u.profile_id
    if pid is None or u.role == "admin":
        return False
    column = {"client": Order.client_id, "supplier": Order.supplier_id, "courier": Order.courier_id}[u.role]
    return db.query(Order).filter(column == pid).count() > 0


# ---------- users ----------

@router.get("/utilisateurs", response_model=UserList)
def list_users(
    role: Optional[Role] = Query(default=None),
    status: Optional[UserStatus] = Query(default=None),
    search: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_admin),
    db: Session = Depends(get_db),
):
    q = db.query(User)
    if role:
        q = q.filter(User.role == role)
    if status:
        q = q.filter(User.status == status)
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(User.email.ilike(pattern), User.full_name.ilike(pattern)))
    total = q.count()
    users = q.order_by(User.created_at.desc(), User.id.desc()).offset(offset).limit(limit).all()
    return UserList(data=[UserOut.model_validate(u) for u in users], total=total)


@router.post("/utilisateurs", response_model=UserOut, status_code=201)
def create_user(
    body: AdminUserCreate,
    request: Request,
    ctx: SessionContext = Depends(current_admin),
    db: Session = Depends(get_db),
):
    try:
        u = auth_service.create_user(
            db, body.email, body.password, body.full_name, body.phone, body.role, body.role_data
        )
        audit_service.record(
            db, ctx.user_id, "admin_create_user", {"user_id": u.id, "role": u.role}, client_ip(request)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(u)
    return UserOut.model_validate(u)


@router.patch("/utilisateurs/{user_id}/statut", response_model=UserOut)
def update_user_status(
    user_id: int,
    body: UserStatusUpdate,
    request: Request,
    ctx: SessionContext = Depends(current_admin),
    db: Session = Depends(get_db),
):
    u = _get_user(db, user_id)
    if u.id == ctx.user_id and body.status != "active":
        raise HTTPException(status_code=400, detail="You cannot deactivate your own account")

    old_status = u.status
    u.status = body.status
    if body.status != "active":
        # a suspended account loses its open sessions
        db.query(UserSession).filter(UserSession.user_id == u.id, UserSession.is_active == true()).update(
            {UserSession.is_active: False}, synchronize_session="fetch"
        )
    audit_service.record(
        db, ctx.user_id, "admin_update_status",
        {"user_id": u.id, "old_status": old_status, "new_status": body.status},
        client_ip(request),
    )
    db.commit()
    db.refresh(u)
    return UserOut.model_validate(u)


@router.delete("/utilisateurs/{user_id}", response_model=ActionResult)
def delete_user(
    user_id: int,
    request: Request,
    ctx: SessionContext = Depends(current_admin),
    db: Session = Depends(get_db),
):
    u = _get_user(db, user_id)
    if u.id == ctx.user_id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    if _has_orders(db, u):
        raise HTTPException(status_code=409, detail="User has orders; suspend the account instead")

    audit_service.record(db, ctx.user_id, "admin_delete_user", {"user_id": u.id, "email": u.email}, client_ip(request))
    db.delete(u)
    db.commit()
    return ActionResult(message="User deleted")


# ---------- orders ----------

@router.get("/commandes", response_model=OrderList)
def list_orders(
    status: Optional[OrderStatus] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_admin),
    db: Session = Depends(get_db),
):
    orders, total = order_service.list_orders(db, ctx.user, status, limit, offset)
    return OrderList(data=[order_service.order_to_response(o) for o in orders], total=total)


@router.get("/commandes/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, ctx: SessionContext = Depends(current_admin), db: Session = Depends(get_db)):
    return order_service.order_to_response(order_service.get_order(db, order_id))


# ---------- platform ----------

@router.get("/statistiques", response_model=PlatformStats)
def platform_stats(ctx: SessionContext = Depends(current_admin), db: Session = Depends(get_db)):
    today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    by_role = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())
    orders_today = db.query(Order).filter(Order.created_at >= today)
    revenue_today = (
        orders_today.filter(Order.status != "cancelled")
        .with_entities(func.coalesce(func.sum(Order.total_amount), 0))
        .scalar()
    )
    return PlatformStats(
        total_users=sum(by_role.values()),
        total_clients=by_role.get("client", 0),
        total_suppliers=by_role.get("supplier", 0),
        total_couriers=by_role.get("courier", 0),
        total_orders=db.query(Order).count(),
        orders_today=orders_today.count(),
        revenue_today=float(revenue_today or 0),
        completed_orders=db.query(Order).filter(Order.status == "delivered").count(),
        cancelled_orders=db.query(Order).filter(Order.status == "cancelled").count(),
        total_products=db.query(Product).filter(Product.is_active == true()).count(),
    )


@router.get("/audit", response_model=List[AuditLogOut])
def audit_trail(
    user_id: Optional[int] = Query(default=None),
    action: Optional[str] = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_admin),
    db: Session = Depends(get_db),
):
    q = db.query(AuditLog)
    if user_id is not None:
        q = q.filter(AuditLog.user_id == user_id)
    if action:
        q = q.filter(AuditLog.action == action)
    return q.order_by(AuditLog.id.desc()).offset(offset).limit(limit).all()


@router.post("/sessions/cleanup", response_model=CleanupResult)
def cleanup_sessions(ctx: SessionContext = Depends(current_admin), db: Session = Depends(get_db)):
    deactivated, deleted = auth_service.cleanup_expired_sessions(db)
    return CleanupResult(deactivated=deactivated, deleted=deleted)
