from typing import Optional, NewType
from datetime import datetime
from pydantic import BaseModel, Field, constr

NameStr = NewType("NameStr", constr(strip_whitespace=True, min_length=1, max_length=200))

class ProductCreate(BaseModel):
    name: NameStr
    description: str = ""
    price: float = Field(gt=0)
    stock: int = Field(default=0, ge=0)
    category_id: int = Field(gt=0)

class ProductUpdate(BaseModel):
    name: Optional[NameStr] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    stock: Optional[int] = Field(default=None, ge=0)
    category_id: Optional[int] = Field(default=None, gt=0)
    is_available: Optional[bool] = None
    # 0 clears the promotion
    promotion_percent: Optional[float] = Field(default=None, ge=0, lt=100)

class ProductOut(BaseModel):
    id: int
    supplier_id: int
    category_id: Optional[int] = None
    name: str
    description: str = ""
    price: float
    promo_price: Optional[float] = None
    promotion_percent: int = 0
    stock: int
    is_available: bool
    created_at: Optional[datetime] = None

class TopProductOut(BaseModel):
    id: int
    name: str
    sales: int

class CategoryOut(BaseModel):
    id: int
    name: str
    class Config: from_attributes = True
