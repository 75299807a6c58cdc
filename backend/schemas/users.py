from typing import Optional, Literal, NewType
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, constr

# helper types
Password = NewType("Password", constr(min_length=6, max_length=128))
FullName = NewType("FullName", constr(strip_whitespace=True, min_length=2, max_length=255))
Phone = NewType("Phone", constr(strip_whitespace=True, min_length=6, max_length=32))
Role = Literal["client", "supplier", "courier", "admin"]
UserStatus = Literal["active", "inactive", "suspended"]

# ---------- Schemas ----------

class RoleSpecificData(BaseModel):
    # supplier
    company_name: Optional[str] = None
    supplier_type: Optional[str] = None
    delivery_fee: Optional[float] = Field(default=None, ge=0)
    # courier
    vehicle_type: Optional[str] = None
    license_number: Optional[str] = None
    # admin
    access_level: Optional[str] = None

class RegisterPayload(BaseModel):
    email: EmailStr
    password: Password
    full_name: FullName
    phone: Optional[Phone] = None
    role: Role
    role_data: Optional[RoleSpecificData] = None

class RegisterResponse(BaseModel):
    ok: bool = True
    user_id: int

class LoginPayload(BaseModel):
    email: EmailStr
    password: str

class UserOut(BaseModel):
    id: int
    email: str
    full_name: str
    phone: Optional[str] = None
    role: Role
    status: UserStatus
    profile_id: Optional[int] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    class Config: from_attributes = True

class LoginResponse(BaseModel):
    ok: bool = True
    token: str
    token_type: str = "bearer"
    session_id: int
    expires_at: datetime
    user: UserOut
