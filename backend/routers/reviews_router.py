# backend/routers/reviews_router.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.session import get_db
from schemas.reviews import ReviewIn, ReviewOut
from services import review_service
from services.auth_service import SessionContext
from routers.dependencies import require_roles

router = APIRouter(prefix="/avis", tags=["reviews"])


@router.post("", response_model=ReviewOut, status_code=201)
def create_review(
    body: ReviewIn,
    ctx: SessionContext = Depends(require_roles("client")),
    db: Session = Depends(get_db),
):
    return review_service.review_to_out(review_service.create_review(db, ctx.user, body))


@router.get("/produit/{product_id}", response_model=List[ReviewOut])
def product_reviews(product_id: int, db: Session = Depends(get_db)):
    return [review_service.review_to_out(r) for r in review_service.reviews_for_product(db, product_id)]


@router.get("/fournisseur", response_model=List[ReviewOut])
def my_reviews(ctx: SessionContext = Depends(require_roles("supplier")), db: Session = Depends(get_db)):
    return [review_service.review_to_out(r) for r in review_service.reviews_for_supplier(db, ctx.user.profile_id)]


@router.get("/fournisseur/{supplier_id}", response_model=List[ReviewOut])
def supplier_reviews(supplier_id: int, db: Session = Depends(get_db)):
    return [review_service.review_to_out(r) for r in review_service.reviews_for_supplier(db, supplier_id)]
