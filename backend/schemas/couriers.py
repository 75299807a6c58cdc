from typing import Optional, List, Literal
from pydantic import BaseModel, Field

Availability = Literal["available", "paused", "offline"]

class CourierProfileOut(BaseModel):
    id: int
    user_id: int
    full_name: str
    phone: Optional[str] = None
    status: str
    vehicle_type: Optional[str] = None
    license_number: Optional[str] = None
    availability: Availability
    delivery_zones: List[str] = []
    rate_per_km: Optional[float] = None

class CourierProfileUpdate(BaseModel):
    vehicle_type: Optional[str] = None
    license_number: Optional[str] = None
    availability: Optional[Availability] = None
    delivery_zones: Optional[List[str]] = None
    rate_per_km: Optional[float] = Field(default=None, ge=0)
