# backend/routers/supplier_router.py
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, true
from sqlalchemy.orm import Session

from config import settings
from database.session import get_db
from models.category_model import Category
from models.order_item_model import OrderItem
from models.order_model import Order
from models.product_model import Product
from schemas.orders import OrderList, OrderResponse, OrderStatus, OrderStatusUpdate
from schemas.products import ProductCreate, ProductUpdate, ProductOut, TopProductOut
from schemas.sessions import ActionResult
from schemas.suppliers import SupplierStats, SupplierProfileOut, SupplierProfileUpdate, LowStockAlert
from services import order_service
from services.auth_service import SessionContext
from services.order_service import money
from routers.dependencies import require_roles
from routers.products_router import product_to_out

router = APIRouter(prefix="/fournisseur", tags=["supplier"])

current_supplier = require_roles("supplier")


def _own_product(db: Session, supplier_id: int, product_id: int) -> Product:
    p = (
        db.query(Product)
        .filter(Product.id == product_id, Product.supplier_id == supplier_id, Product.is_active == true())
        .first()
    )
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return p


def _check_category(db: Session, category_id: Optional[int]):
    if category_id is not None and not db.get(Category, category_id):
        raise HTTPException(status_code=400, detail="Unknown category")


def _window_stats(db: Session, supplier_id: int, since: datetime):
    base = db.query(Order).filter(Order.supplier_id == supplier_id, Order.created_at >= since)
    count = base.count()
    revenue = (
        base.filter(Order.status != "cancelled")
        .with_entities(func.coalesce(func.sum(Order.total_amount), 0))
        .scalar()
    )
    return count, float(revenue or 0)


@router.get("/stats", response_model=SupplierStats)
def get_stats(ctx: SessionContext = Depends(current_supplier), db: Session = Depends(get_db)):
    supplier = ctx.user.supplier_profile
    today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today - timedelta(days=today.weekday())
    month_start = today.replace(day=1)

    orders_today, revenue_today = _window_stats(db, supplier.id, today)
    orders_week, revenue_week = _window_stats(db, supplier.id, week_start)
    orders_month, revenue_month = _window_stats(db, supplier.id, month_start)
    total_orders = db.query(Order).filter(Order.supplier_id == supplier.id).count()

    return SupplierStats(
        orders_today=orders_today,
        orders_week=orders_week,
        orders_month=orders_month,
        revenue_today=revenue_today,
        revenue_week=revenue_week,
        revenue_month=revenue_month,
        total_orders=total_orders,
        rating=float(supplier.rating or 0),
        avg_prep_minutes=supplier.avg_prep_minutes or 0,
    )


# ---------- products ----------

@router.get("/produits", response_model=List[ProductOut])
def list_my_products(ctx: SessionContext = Depends(current_supplier), db: Session = Depends(get_db)):
    products = (
        db.query(Product)
        .filter(Product.supplier_id == ctx.user.profile_id, Product.is_active == true())
        .order_by(Product.id.desc())
        .all()
    )
    return [product_to_out(p) for p in products]


@router.get("/produits/top", response_model=List[TopProductOut])
def top_products(
    limit: int = Query(default=5, ge=1, le=50),
    ctx: SessionContext = Depends(current_supplier),
    db: Session = Depends(get_db),
):
    sales = func.sum(OrderItem.quantity).label("sales")
    rows = (
        db.query(Product.id, Product.name, sales)
        .join(OrderItem, OrderItem.product_id == Product.id)
        .join(Order, Order.id == OrderItem.order_id)
        .filter(Product.supplier_id == ctx.user.profile_id, Order.status != "cancelled")
        .group_by(Product.id, Product.name)
        .order_by(sales.desc(), Product.id.asc())
        .limit(limit)
        .all()
    )
    return [TopProductOut(id=r.id, name=r.name, sales=int(r.sales or 0)) for r in rows]


@router.post("/produits", response_model=ProductOut, status_code=201)
def create_product(body: ProductCreate, ctx: SessionContext = Depends(current_supplier), db: Session = Depends(get_db)):
    _check_category(db, body.category_id)
    try:
        p = Product(
            supplier_id=ctx.user.profile_id,
            category_id=body.category_id,
            name=body.name,
            description=body.description,
            price=money(body.price),
            stock=body.stock,
            is_available=True,
            is_active=True,
        )
        db.add(p)
        db.commit()
        db.refresh(p)
        return product_to_out(p)
    except Exception:
        db.rollback()
        raise


@router.put("/produits/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    body: ProductUpdate,
    ctx: SessionContext = Depends(current_supplier),
    db: Session = Depends(get_db),
):
    p = _own_product(db, ctx.user.profile_id, product_id)
    _check_category(db, body.category_id)

    data = body.model_dump(exclude_unset=True)
    promotion = data.pop("promotion_percent", None)
    if promotion is None and p.promo_price is not None and data.get("price") is not None:
        # a price change keeps the current discount rate
        promotion = (1 - money(p.promo_price) / money(p.price)) * 100
    if "price" in data and data["price"] is not None:
        data["price"] = money(data["price"])
    for field, value in data.items():
        if value is not None:
            setattr(p, field, value)

    if promotion is not None:
        # 0 clears the promotion
        p.promo_price = money(money(p.price) * (100 - money(promotion)) / 100) if promotion > 0 else None

    db.commit()
    db.refresh(p)
    return product_to_out(p)


@router.patch("/produits/{product_id}", response_model=ProductOut)
def toggle_availability(product_id: int, ctx: SessionContext = Depends(current_supplier), db: Session = Depends(get_db)):
    p = _own_product(db, ctx.user.profile_id, product_id)
    p.is_available = not p.is_available
    db.commit()
    db.refresh(p)
    return product_to_out(p)


@router.delete("/produits/{product_id}", response_model=ActionResult)
def delete_product(product_id: int, ctx: SessionContext = Depends(current_supplier), db: Session = Depends(get_db)):
    p = _own_product(db, ctx.user.profile_id, product_id)
    # soft delete: past order lines keep pointing at it
    p.is_active = False
    p.is_available = False
    db.commit()
    return ActionResult(message="Product deleted")


# ---------- orders ----------

@router.get("/commandes", response_model=OrderList)
def list_my_orders(
    status: Optional[OrderStatus] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    ctx: SessionContext = Depends(current_supplier),
    db: Session = Depends(get_db),
):
    orders, total = order_service.list_orders(db, ctx.user, status, limit, offset)
    return OrderList(data=[order_service.order_to_response(o) for o in orders], total=total)


@router.patch("/commandes/{order_id}", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    ctx: SessionContext = Depends(current_supplier),
    db: Session = Depends(get_db),
):
    o = order_service.change_status(db, order_id, body.status, ctx.user)
    return order_service.order_to_response(o)


@router.get("/alertes", response_model=List[LowStockAlert])
def low_stock_alerts(ctx: SessionContext = Depends(current_supplier), db: Session = Depends(get_db)):
    products = (
        db.query(Product)
        .filter(
            Product.supplier_id == ctx.user.profile_id,
            Product.is_active == true(),
            Product.stock < settings.LOW_STOCK_THRESHOLD,
        )
        .order_by(Product.stock.asc(), Product.id.asc())
        .all()
    )
    now = datetime.utcnow()
    return [
        LowStockAlert(
            product_id=p.id,
            severity="critical" if p.stock == 0 else "warning",
            message=f"{p.name} is out of stock" if p.stock == 0 else f"Low stock for {p.name}: {p.stock} left",
            stock=p.stock,
            timestamp=now,
        )
        for p in products
    ]


# ---------- profile ----------

@router.get("/profile", response_model=SupplierProfileOut)
def get_profile(ctx: SessionContext = Depends(current_supplier)):
    return ctx.user.supplier_profile


@router.patch("/profile", response_model=SupplierProfileOut)
def update_profile(
    body: SupplierProfileUpdate,
    ctx: SessionContext = Depends(current_supplier),
    db: Session = Depends(get_db),
):
    s = ctx.user.supplier_profile
    data = body.model_dump(exclude_unset=True)
    if data.get("delivery_fee") is not None:
        data["delivery_fee"] = money(data["delivery_fee"])
    for field, value in data.items():
        if value is not None:
            setattr(s, field, value)
    db.commit()
    db.refresh(s)
    return s
