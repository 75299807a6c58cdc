from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel

class NotificationOut(BaseModel):
    id: int
    event: str
    title: str
    message: str
    type: str
    priority: str
    link: Optional[str] = None
    is_read: bool
    created_at: datetime
    read_at: Optional[datetime] = None
    class Config: from_attributes = True

class NotificationPage(BaseModel):
    notifications: List[NotificationOut]
    unread_count: int
    # pass back as ?after= on the next poll
    next_cursor: Optional[int] = None
