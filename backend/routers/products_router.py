# backend/routers/products_router.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import true, or_
from sqlalchemy.orm import Session

from database.session import get_db
from schemas.products import ProductOut
from models.product_model import Product

router = APIRouter(prefix="/produits", tags=["products"])


# ORM -> schema
def product_to_out(p: Product) -> ProductOut:
    return ProductOut(
        id=p.id,
        supplier_id=p.supplier_id,
        category_id=p.category_id,
        name=p.name,
        description=p.description or "",
        price=float(p.price),
        promo_price=float(p.promo_price) if p.promo_price is not None else None,
        promotion_percent=p.promotion_percent,
        stock=p.stock,
        is_available=p.is_available,
        created_at=p.created_at,
    )


@router.get("", response_model=List[ProductOut])
def list_products(
    supplier_id: Optional[int] = Query(default=None),
    category_id: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
):
    q = db.query(Product).filter(Product.is_active == true(), Product.is_available == true())
    if supplier_id is not None:
        q = q.filter(Product.supplier_id == supplier_id)
    if category_id is not None:
        q = q.filter(Product.category_id == category_id)
    if search:
        pattern = f"%{search.strip()}%"
        q = q.filter(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))
    products = q.order_by(Product.id.desc()).offset(offset).limit(limit).all()
    return [product_to_out(p) for p in products]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    p = (
        db.query(Product)
        .filter(Product.id == product_id, Product.is_active == true())
        .first()
    )
    if not p:
        raise HTTPException(status_code=404, detail="Product not found")
    return product_to_out(p)
