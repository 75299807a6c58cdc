from typing import Optional
from datetime import datetime
from pydantic import BaseModel

class AddressIn(BaseModel):
    street: str = ""
    postal_code: str = ""
    city: str = ""
    address_type: str = "home"
    latitude: float
    longitude: float

class AddressOut(BaseModel):
    id: int
    street: str
    postal_code: str
    city: str
    address_type: str
    latitude: float
    longitude: float
    is_primary: bool
    created_at: Optional[datetime] = None
    class Config: from_attributes = True
