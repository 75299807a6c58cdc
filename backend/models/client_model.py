# backend/models/client_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database.session import Base


class ClientProfile(Base):
    __tablename__ = "clients"
    id         = Column(Integer, primary_key=True, index=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    user      = relationship("User", back_populates="client_profile")
    addresses = relationship("Address", back_populates="client", cascade="all, delete-orphan")
    favorites = relationship("Favorite", back_populates="client", cascade="all, delete-orphan")

    @property
    def primary_address(self):
        return next((a for a in self.addresses if a.is_primary), None)
