# backend/models/session_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base


class UserSession(Base):
    __tablename__ = "user_sessions"
    id         = Column(Integer, primary_key=True, index=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(Unicode(64), nullable=False, index=True)    # sha256 hex of the issued token
    created_at = Column(DateTime, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=False)
    is_active  = Column(Boolean, nullable=False, default=True)
    ip_address = Column(Unicode(64))
    user_agent = Column(Unicode(512))

    user = relationship("User", back_populates="sessions")

    def is_valid(self, now: datetime = None) -> bool:
        return bool(self.is_active) and self.expires_at > (now or datetime.utcnow())
