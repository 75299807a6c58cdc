from typing import Optional
from datetime import datetime
from pydantic import BaseModel

class PaymentOut(BaseModel):
    id: int
    order_id: int
    amount: float
    method: str
    status: str
    created_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    class Config: from_attributes = True
