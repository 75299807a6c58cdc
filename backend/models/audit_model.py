# backend/models/audit_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, JSON
from sqlalchemy.types import Unicode
from database.session import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"
    id         = Column(Integer, primary_key=True, index=True)
    # no FK: the trail must outlive deleted users
    user_id    = Column(Integer, nullable=True, index=True)
    action     = Column(Unicode(50), nullable=False, index=True)
    details    = Column(JSON)
    ip_address = Column(Unicode(64))
    created_at = Column(DateTime, default=datetime.utcnow)
