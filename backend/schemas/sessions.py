from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel

from .users import UserOut


class SessionOut(BaseModel):
    id: int
    token_preview: str
    created_at: Optional[datetime] = None
    expires_at: datetime
    is_active: bool
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    is_current: bool = False

class VerifySessionPayload(BaseModel):
    session_token: Optional[str] = None

class VerifySessionResponse(BaseModel):
    ok: bool = True
    session: SessionOut
    user: UserOut

class ExtendSessionResponse(BaseModel):
    ok: bool = True
    token: str
    expires_at: datetime

class SessionList(BaseModel):
    data: List[SessionOut]
    total: int

class ActionResult(BaseModel):
    ok: bool = True
    message: str
    count: Optional[int] = None

class CleanupResult(BaseModel):
    ok: bool = True
    deactivated: int
    deleted: int
