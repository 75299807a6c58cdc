# backend/services/order_service.py
"""
Order lifecycle: placement, guarded status transitions, courier assignment
and cash payment confirmation.

Every operation runs in one transaction together with its status history row
and the notifications it triggers.
"""
import logging
from collections import Counter
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import true
from sqlalchemy.orm import Session, joinedload

from config import settings
from models.user_model import User
from models.supplier_model import SupplierProfile
from models.courier_model import CourierProfile
from models.client_model import ClientProfile
from models.address_model import Address
from models.product_model import Product
from models.order_model import Order, OrderStatusHistory
from models.order_item_model import OrderItem
from models.payment_model import Payment
from schemas.orders import OrderCreate, OrderResponse, OrderItemResponse
from services.notification_service import notify

logger = logging.getLogger(__name__)

TRANSITIONS = {
    "pending": {"preparing", "cancelled"},
    "preparing": {"ready_for_pickup", "cancelled"},
    "ready_for_pickup": {"out_for_delivery", "cancelled"},
    "out_for_delivery": {"delivered", "cancelled"},
    "delivered": set(),
    "cancelled": set(),
}
TERMINAL_STATUSES = ("delivered", "cancelled")
PICKUP_STATUSES = ("preparing", "ready_for_pickup")
COURIER_TARGETS = ("out_for_delivery", "delivered", "cancelled")

CENTS = Decimal("0.01")


# ---------- money ----------

def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_totals(lines: Iterable[Tuple[Decimal, int]], delivery_fee) -> dict:
    """lines: (unit_price, quantity) pairs"""
    subtotal = money(sum((money(price) * qty for price, qty in lines), Decimal("0")))
    service_fee = money(subtotal * settings.SERVICE_FEE_RATE)
    delivery_fee = money(delivery_fee or 0)
    return {
        "subtotal": subtotal,
        "service_fee": service_fee,
        "delivery_fee": delivery_fee,
        "total_amount": subtotal + service_fee + delivery_fee,
    }


def can_transition(old_status: str, new_status: str) -> bool:
    return new_status in TRANSITIONS.get(old_status, set())


# ---------- links ----------

def client_link(order_id: int) -> str:
    return f"/commandes/{order_id}"


def supplier_link(order_id: int) -> str:
    return f"/fournisseur/commandes/{order_id}"


def courier_link(order_id: int) -> str:
    return f"/livreur/commandes/{order_id}"


# ---------- loading / access ----------

def _order_query(db: Session):
    return db.query(Order).options(
        joinedload(Order.client).joinedload(ClientProfile.user),
        joinedload(Order.supplier).joinedload(SupplierProfile.user),
        joinedload(Order.courier).joinedload(CourierProfile.user),
        joinedload(Order.address),
        joinedload(Order.items),
    )


def get_order(db: Session, order_id: int) -> Order:
    o = _order_query(db).filter(Order.id == order_id).first()
    if not o:
        raise HTTPException(status_code=404, detail="Order not found")
    return o


def is_party(order: Order, user: User) -> bool:
    if user.role == "admin":
        return True
    if user.role == "client":
        return order.client is not None and order.client.user_id == user.id
    if user.role == "supplier":
        return order.supplier is not None and order.supplier.user_id == user.id
    if user.role == "courier":
        return order.courier is not None and order.courier.user_id == user.id
    return False


def get_order_for(db: Session, order_id: int, user: User) -> Order:
    o = get_order(db, order_id)
    if not is_party(o, user):
        raise HTTPException(status_code=403, detail="You do not have access to this order")
    return o


def scoped_orders(db: Session, user: User):
    """Order query restricted to what `user` may see."""
    q = _order_query(db)
    if user.role == "admin":
        return q
    profile_id = user.profile_id
    if user.role == "client":
        return q.filter(Order.client_id == profile_id)
    if user.role == "supplier":
        return q.filter(Order.supplier_id == profile_id)
    return q.filter(Order.courier_id == profile_id)


def unassigned_orders(db: Session):
    """Orders a courier could pick up."""
    return _order_query(db).filter(Order.courier_id.is_(None), Order.status.in_(PICKUP_STATUSES))


def list_orders(
    db: Session, user: User, status: Optional[str] = None, limit: int = 50, offset: int = 0
) -> Tuple[List[Order], int]:
    q = scoped_orders(db, user)
    if status:
        q = q.filter(Order.status == status)
    total = q.count()
    orders = q.order_by(Order.created_at.desc(), Order.id.desc()).offset(offset).limit(limit).all()
    return orders, total


def status_history(db: Session, order_id: int, user: User) -> List[OrderStatusHistory]:
    o = get_order_for(db, order_id, user)
    return (
        db.query(OrderStatusHistory)
        .filter(OrderStatusHistory.order_id == o.id)
        .order_by(OrderStatusHistory.changed_at.asc(), OrderStatusHistory.id.asc())
        .all()
    )


# ---------- placement ----------

def create_order(db: Session, user: User, body: OrderCreate) -> Order:
    client = user.client_profile
    if client is None:
        raise HTTPException(status_code=403, detail="Only clients can place orders")
    if not body.items:
        raise HTTPException(status_code=400, detail="Order must contain at least one item")
    if any(item.quantity < 1 for item in body.items):
        raise HTTPException(status_code=400, detail="Item quantity must be at least 1")

    supplier = db.get(SupplierProfile, body.supplier_id)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    if not supplier.is_open:
        raise HTTPException(status_code=400, detail="Supplier is currently closed")

    address = db.get(Address, body.delivery_address_id)
    if not address or address.client_id != client.id:
        raise HTTPException(status_code=400, detail="Delivery address does not belong to this client")

    requested = Counter()
    for item in body.items:
        requested[item.product_id] += item.quantity

    try:
        lines = []
        for item in body.items:
            p = (
                db.query(Product)
                .filter(
                    Product.id == item.product_id,
                    Product.supplier_id == supplier.id,
                    Product.is_active == true(),
                )
                .first()
            )
            if not p:
                raise HTTPException(
                    status_code=400,
                    detail=f"Product {item.product_id} not found or does not belong to this supplier",
                )
            if not p.is_available:
                raise HTTPException(status_code=400, detail=f"Product '{p.name}' is not available")
            if p.stock < requested[p.id]:
                raise HTTPException(status_code=400, detail=f"Insufficient stock for '{p.name}'")
            lines.append((p, item.quantity, money(p.effective_price)))

        totals = compute_totals([(price, qty) for _, qty, price in lines], supplier.delivery_fee)

        o = Order(
            client_id=client.id,
            supplier_id=supplier.id,
            delivery_address_id=address.id,
            payment_method=body.payment_method,
            payment_status="pending",
            amount_paid=Decimal("0"),
            special_instructions=body.special_instructions,
            status="pending",
            **totals,
        )
        for p, qty, price in lines:
            o.items.append(OrderItem(product_id=p.id, product_name=p.name, quantity=qty, unit_price=price))
        o.payments.append(Payment(amount=totals["total_amount"], method=body.payment_method, status="pending"))
        o.history.append(OrderStatusHistory(old_status=None, new_status="pending", changed_by=user.id))
        db.add(o)
        db.flush()

        notify(
            db, supplier.user_id, "new_order", supplier_link(o.id),
            order_id=o.id, amount=f"{totals['total_amount']:.2f}",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Order %s created by client %s (total %s)", o.id, client.id, totals["total_amount"])
    return get_order(db, o.id)


# ---------- status changes ----------

def _reserve_stock(o: Order):
    for it in o.items:
        if it.product is not None and it.product.stock < it.quantity:
            raise HTTPException(status_code=400, detail=f"Insufficient stock for '{it.product.name}'")
    for it in o.items:
        if it.product is not None:
            it.product.stock -= it.quantity


def _release_stock(o: Order):
    for it in o.items:
        if it.product is not None:
            it.product.stock += it.quantity


def _fail_pending_payment(o: Order) -> bool:
    """Returns True when a pending payment was failed."""
    failed = False
    for p in o.payments:
        if p.status == "pending":
            p.status = "failed"
            failed = True
    if o.payment_status != "confirmed":
        o.payment_status = "failed"
    return failed


def _notify_status_change(db: Session, o: Order, actor: User):
    client_uid = o.client.user_id
    supplier_name = o.supplier.company_name or o.supplier.user.full_name

    if o.status == "preparing":
        notify(db, client_uid, "order_confirmed", client_link(o.id), order_id=o.id)
    elif o.status == "ready_for_pickup":
        notify(db, client_uid, "order_ready", client_link(o.id), supplier_name=supplier_name)
        if o.courier is not None:
            notify(db, o.courier.user_id, "pickup_ready", courier_link(o.id),
                   order_id=o.id, supplier_name=supplier_name)
    elif o.status == "out_for_delivery":
        notify(db, client_uid, "order_on_the_way", client_link(o.id), order_id=o.id)
    elif o.status == "delivered":
        notify(db, client_uid, "order_delivered", client_link(o.id), order_id=o.id)
    elif o.status == "cancelled":
        by = "administrator" if actor.role == "admin" else actor.role
        if actor.role == "client":
            notify(db, o.supplier.user_id, "order_cancelled", supplier_link(o.id), order_id=o.id, cancelled_by=by)
        else:
            notify(db, client_uid, "order_cancelled", client_link(o.id), order_id=o.id, cancelled_by=by)
        if o.courier is not None and o.courier.user_id != actor.id:
            notify(db, o.courier.user_id, "order_cancelled", courier_link(o.id), order_id=o.id, cancelled_by=by)


def change_status(db: Session, order_id: int, new_status: str, user: User) -> Order:
    o = get_order(db, order_id)
    if not is_party(o, user):
        raise HTTPException(status_code=403, detail="You are not allowed to modify this order")

    old_status = o.status
    if not can_transition(old_status, new_status):
        raise HTTPException(status_code=400, detail=f"Illegal status transition: {old_status} -> {new_status}")
    if user.role == "courier" and new_status not in COURIER_TARGETS:
        raise HTTPException(status_code=403, detail=f"Couriers cannot set status '{new_status}'")
    if user.role == "client" and not (new_status == "cancelled" and old_status == "pending"):
        raise HTTPException(status_code=403, detail="Clients can only cancel pending orders")

    payment_failed = False
    try:
        now = datetime.utcnow()
        o.status = new_status
        o.history.append(
            OrderStatusHistory(old_status=old_status, new_status=new_status, changed_by=user.id, changed_at=now)
        )
        if old_status == "pending" and new_status == "preparing":
            _reserve_stock(o)
        elif new_status == "delivered":
            o.delivered_at = now
        elif new_status == "cancelled":
            if old_status != "pending":
                _release_stock(o)
            payment_failed = _fail_pending_payment(o)

        _notify_status_change(db, o, user)
        if payment_failed and user.role != "client":
            notify(db, o.client.user_id, "payment_failed", client_link(o.id), order_id=o.id)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Order %s: %s -> %s by user %s (%s)", o.id, old_status, new_status, user.id, user.role)
    return get_order(db, o.id)


# ---------- courier assignment ----------

def assign_courier(db: Session, order_id: int, courier_id: int, user: User) -> Order:
    o = get_order(db, order_id)
    if user.role == "supplier":
        if o.supplier.user_id != user.id:
            raise HTTPException(status_code=403, detail="You are not allowed to modify this order")
    elif user.role == "courier":
        if user.profile_id != courier_id:
            raise HTTPException(status_code=403, detail="Couriers can only assign themselves")
    elif user.role != "admin":
        raise HTTPException(status_code=403, detail="Insufficient permissions")

    courier = db.get(CourierProfile, courier_id)
    if not courier:
        raise HTTPException(status_code=404, detail="Courier not found")
    if courier.user.status != "active":
        raise HTTPException(status_code=400, detail="Courier account is not active")
    if o.status in TERMINAL_STATUSES:
        raise HTTPException(status_code=400, detail=f"Order is already {o.status}")
    if o.courier_id == courier.id:
        return o
    if o.courier_id is not None:
        raise HTTPException(status_code=400, detail="Order is already assigned to another courier")

    try:
        o.courier_id = courier.id
        notify(db, o.client.user_id, "courier_assigned", client_link(o.id), courier_name=courier.user.full_name)
        notify(
            db, courier.user_id, "new_delivery", courier_link(o.id),
            address=o.address.one_line() if o.address else "Unknown address",
            amount=f"{money(o.total_amount):.2f}",
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Courier %s assigned to order %s by user %s", courier.id, o.id, user.id)
    return get_order(db, o.id)


def accept_order(db: Session, order_id: int, user: User) -> Order:
    """A courier takes an unassigned order that is being prepared or waiting for pickup."""
    courier = user.courier_profile
    o = get_order(db, order_id)
    if o.courier_id is not None and o.courier_id != courier.id:
        raise HTTPException(status_code=400, detail="Order is already assigned to another courier")
    if o.status not in PICKUP_STATUSES:
        raise HTTPException(status_code=400, detail="Order is not available for pickup")
    if courier.availability != "available":
        raise HTTPException(status_code=400, detail="Set your availability to 'available' to accept orders")
    return assign_courier(db, order_id, courier.id, user)


# ---------- payments ----------

def confirm_cash_payment(db: Session, order_id: int, user: User) -> Order:
    if user.role != "courier":
        raise HTTPException(status_code=403, detail="Only couriers can confirm cash payments")
    o = get_order(db, order_id)
    if o.courier_id is None or o.courier_id != user.profile_id:
        raise HTTPException(status_code=403, detail="Order is not assigned to you")

    payment = o.payment
    if payment is None:
        raise HTTPException(status_code=404, detail="Payment not found")
    if payment.method != "cash":
        raise HTTPException(status_code=400, detail="Only cash payments can be confirmed by the courier")
    if payment.status == "confirmed":
        return o
    if o.status == "cancelled" or payment.status == "failed":
        raise HTTPException(status_code=400, detail="Payment can no longer be confirmed")

    try:
        now = datetime.utcnow()
        payment.status = "confirmed"
        payment.confirmed_by = user.id
        payment.confirmed_at = now
        o.payment_status = "confirmed"
        o.amount_paid = o.total_amount
        o.paid_at = now
        notify(db, o.client.user_id, "payment_confirmed", client_link(o.id), amount=f"{money(payment.amount):.2f}")
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Cash payment for order %s confirmed by courier %s", o.id, user.profile_id)
    return get_order(db, o.id)


# ---------- output ----------

def order_to_response(o: Order) -> OrderResponse:
    items = [
        OrderItemResponse(
            id=it.id,
            product_id=it.product_id,
            product_name=it.product_name,
            quantity=it.quantity,
            unit_price=float(it.unit_price),
            total_price=float(money(it.line_total)),
        )
        for it in o.items
    ]
    return OrderResponse(
        id=o.id,
        tracking_number=o.tracking_number,
        client_id=o.client_id,
        client_name=o.client.user.full_name if o.client else None,
        supplier_id=o.supplier_id,
        supplier_name=(o.supplier.company_name or o.supplier.user.full_name) if o.supplier else None,
        courier_id=o.courier_id,
        courier_name=o.courier.user.full_name if o.courier else None,
        delivery_address_id=o.delivery_address_id,
        delivery_address=o.address.one_line() if o.address else None,
        status=o.status,
        payment_method=o.payment_method,
        payment_status=o.payment_status,
        subtotal=float(o.subtotal),
        service_fee=float(o.service_fee),
        delivery_fee=float(o.delivery_fee),
        total_amount=float(o.total_amount),
        amount_paid=float(o.amount_paid or 0),
        special_instructions=o.special_instructions,
        created_at=o.created_at,
        paid_at=o.paid_at,
        delivered_at=o.delivered_at,
        items=items,
    )
