# backend/models/courier_model.py
from sqlalchemy import Column, Integer, Numeric, ForeignKey, JSON
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base

AVAILABILITIES = ("available", "paused", "offline")


class CourierProfile(Base):
    __tablename__ = "couriers"
    id             = Column(Integer, primary_key=True, index=True)
    user_id        = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    vehicle_type   = Column(Unicode(50))
    license_number = Column(Unicode(64))
    availability   = Column(Unicode(20), nullable=False, default="offline")
    delivery_zones = Column(JSON, nullable=False, default=list)
    rate_per_km    = Column(Numeric(10, 2))

    user = relationship("User", back_populates="courier_profile")
