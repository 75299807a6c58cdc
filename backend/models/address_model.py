# backend/models/address_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base


class Address(Base):
    __tablename__ = "addresses"
    id           = Column(Integer, primary_key=True, index=True)
    client_id    = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    street       = Column(Unicode(255), nullable=False, default="")
    postal_code  = Column(Unicode(20), nullable=False, default="")
    city         = Column(Unicode(120), nullable=False, default="")
    address_type = Column(Unicode(20), nullable=False, default="home")
    latitude     = Column(Float, nullable=False)
    longitude    = Column(Float, nullable=False)
    is_primary   = Column(Boolean, nullable=False, default=False)
    created_at   = Column(DateTime, default=datetime.utcnow)
    updated_at   = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    client = relationship("ClientProfile", back_populates="addresses")

    def one_line(self) -> str:
        return ", ".join(p for p in (self.street, self.city) if p) or "Unknown address"
