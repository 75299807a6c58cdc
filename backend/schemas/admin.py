from typing import Optional, Any, List
from datetime import datetime
from pydantic import BaseModel, EmailStr

from .users import Password, FullName, Phone, Role, UserStatus, RoleSpecificData, UserOut


class AdminUserCreate(BaseModel):
    email: EmailStr
    password: Password
    full_name: FullName
    phone: Optional[Phone] = None
    role: Role = "admin"
    role_data: Optional[RoleSpecificData] = None

class UserStatusUpdate(BaseModel):
    status: UserStatus

class UserList(BaseModel):
    data: List[UserOut]
    total: int

class PlatformStats(BaseModel):
    total_users: int
    total_clients: int
    total_suppliers: int
    total_couriers: int
    total_orders: int
    orders_today: int
    revenue_today: float
    completed_orders: int
    cancelled_orders: int
    total_products: int

class AuditLogOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    details: Optional[Any] = None
    ip_address: Optional[str] = None
    created_at: datetime
    class Config: from_attributes = True
