# backend/services/review_service.py
"""
Client reviews of delivered orders. Each review refreshes the supplier's
average rating in the same transaction.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from models.client_model import ClientProfile
from models.order_model import Order
from models.review_model import Review
from models.supplier_model import SupplierProfile
from models.user_model import User
from schemas.reviews import ReviewIn, ReviewOut

logger = logging.getLogger(__name__)


def review_to_out(r: Review) -> ReviewOut:
    return ReviewOut(
        id=r.id,
        order_id=r.order_id,
        supplier_id=r.supplier_id,
        product_id=r.product_id,
        rating=r.rating,
        comment=r.comment,
        author=r.client.user.full_name if r.client and r.client.user else "",
        created_at=r.created_at,
    )


def _reviews_query(db: Session):
    return (
        db.query(Review)
        .options(joinedload(Review.client).joinedload(ClientProfile.user))
        .order_by(Review.created_at.desc(), Review.id.desc())
    )


def reviews_for_product(db: Session, product_id: int) -> List[Review]:
    return _reviews_query(db).filter(Review.product_id == product_id).all()


def reviews_for_supplier(db: Session, supplier_id: int) -> List[Review]:
    return _reviews_query(db).filter(Review.supplier_id == supplier_id).all()


def refresh_supplier_rating(db: Session, supplier: SupplierProfile):
    avg = db.query(func.avg(Review.rating)).filter(Review.supplier_id == supplier.id).scalar()
    supplier.rating = Decimal(str(avg or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def create_review(db: Session, user: User, body: ReviewIn) -> Review:
    client = user.client_profile
    o = db.get(Order, body.order_id)
    if not o:
        raise HTTPException(status_code=404, detail="Order not found")
    if o.client_id != client.id:
        raise HTTPException(status_code=403, detail="You can only review your own orders")
    if o.status != "delivered":
        raise HTTPException(status_code=400, detail="Only delivered orders can be reviewed")
    if body.product_id is not None and body.product_id not in {it.product_id for it in o.items}:
        raise HTTPException(status_code=400, detail="Product is not part of this order")

    same = db.query(Review).filter(Review.order_id == o.id)
    if body.product_id is None:
        same = same.filter(Review.product_id.is_(None))
    else:
        same = same.filter(Review.product_id == body.product_id)
    if same.count():
        raise HTTPException(status_code=409, detail="You already reviewed this")

    try:
        r = Review(
            order_id=o.id,
            client_id=client.id,
            supplier_id=o.supplier_id,
            product_id=body.product_id,
            rating=body.rating,
            comment=body.comment,
        )
        db.add(r)
        db.flush()
        refresh_supplier_rating(db, o.supplier)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Review %s on order %s by client %s (rating %s)", r.id, o.id, client.id, r.rating)
    return _reviews_query(db).filter(Review.id == r.id).one()
