from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

class ClientProfileOut(BaseModel):
    id: int
    user_id: int
    email: str
    full_name: str
    phone: Optional[str] = None
    primary_address_id: Optional[int] = None
    created_at: Optional[datetime] = None

class FavoriteIn(BaseModel):
    product_id: int = Field(gt=0)
