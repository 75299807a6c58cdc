# backend/models/favorite_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.session import Base


class Favorite(Base):
    __tablename__ = "favorites"
    id         = Column(Integer, primary_key=True, index=True)
    client_id  = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (UniqueConstraint("client_id", "product_id"),)

    client  = relationship("ClientProfile", back_populates="favorites")
    product = relationship("Product", back_populates="favorites")
