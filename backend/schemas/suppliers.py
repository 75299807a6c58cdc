from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

class SupplierStats(BaseModel):
    orders_today: int = 0
    orders_week: int = 0
    orders_month: int = 0
    revenue_today: float = 0.0
    revenue_week: float = 0.0
    revenue_month: float = 0.0
    total_orders: int = 0
    rating: float = 0.0
    avg_prep_minutes: int = 0

class SupplierProfileOut(BaseModel):
    id: int
    user_id: int
    company_name: Optional[str] = None
    supplier_type: Optional[str] = None
    delivery_fee: float
    rating: float
    avg_prep_minutes: int
    is_open: bool
    class Config: from_attributes = True

class SupplierProfileUpdate(BaseModel):
    company_name: Optional[str] = None
    supplier_type: Optional[str] = None
    delivery_fee: Optional[float] = Field(default=None, ge=0)
    avg_prep_minutes: Optional[int] = Field(default=None, ge=0)
    is_open: Optional[bool] = None

class LowStockAlert(BaseModel):
    product_id: int
    type: str = "stock"
    severity: str = "warning"
    message: str
    stock: int
    timestamp: datetime
