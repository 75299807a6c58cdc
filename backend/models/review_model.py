# backend/models/review_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.types import UnicodeText
from sqlalchemy.orm import relationship
from database.session import Base


class Review(Base):
    __tablename__ = "reviews"
    id          = Column(Integer, primary_key=True, index=True)
    order_id    = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id   = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    product_id  = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True, index=True)
    rating      = Column(Integer, nullable=False)
    comment     = Column(UnicodeText)
    created_at  = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        CheckConstraint("rating between 0 and 5"),
    )

    client = relationship("ClientProfile")
