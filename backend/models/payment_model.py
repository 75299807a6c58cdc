# backend/models/payment_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base


class Payment(Base):
    __tablename__ = "payments"
    id           = Column(Integer, primary_key=True, index=True)
    order_id     = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    amount       = Column(Numeric(10, 2), nullable=False)
    method       = Column(Unicode(20), nullable=False)    # card / cash / wallet
    status       = Column(Unicode(20), nullable=False, default="pending")
    confirmed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    created_at   = Column(DateTime, default=datetime.utcnow)
    confirmed_at = Column(DateTime)

    __table_args__ = (
        CheckConstraint("status in ('pending','confirmed','failed')"),
    )

    order = relationship("Order", back_populates="payments")
