# backend/models/notification_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.types import Unicode, UnicodeText
from sqlalchemy.orm import relationship
from database.session import Base


class Notification(Base):
    __tablename__ = "notifications"
    id         = Column(Integer, primary_key=True, index=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    event      = Column(Unicode(40), nullable=False)     # template key, e.g. "order_delivered"
    title      = Column(Unicode(255), nullable=False)
    message    = Column(UnicodeText, nullable=False)
    type       = Column(Unicode(20), nullable=False)     # order / cancellation / payment
    priority   = Column(Unicode(20), nullable=False, default="normal")
    link       = Column(Unicode(255))
    is_read    = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    read_at    = Column(DateTime)

    user = relationship("User", back_populates="notifications")
