from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

class ReviewIn(BaseModel):
    order_id: int = Field(gt=0)
    # omitted for a review of the supplier as a whole
    product_id: Optional[int] = Field(default=None, gt=0)
    rating: int = Field(ge=0, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)

class ReviewOut(BaseModel):
    id: int
    order_id: int
    supplier_id: int
    product_id: Optional[int] = None
    rating: int
    comment: Optional[str] = None
    author: str
    created_at: Optional[datetime] = None
