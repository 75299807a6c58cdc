# backend/models/order_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey
from sqlalchemy.types import Unicode, UnicodeText
from sqlalchemy.orm import relationship
from database.session import Base

ORDER_STATUSES = ("pending", "preparing", "ready_for_pickup", "out_for_delivery", "delivered", "cancelled")
PAYMENT_METHODS = ("card", "cash", "wallet")


class Order(Base):
    __tablename__ = "orders"
    id                   = Column(Integer, primary_key=True, index=True)
    client_id            = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    supplier_id          = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)
    courier_id           = Column(Integer, ForeignKey("couriers.id"), nullable=True, index=True)
    delivery_address_id  = Column(Integer, ForeignKey("addresses.id", ondelete="SET NULL"), nullable=True)
    subtotal             = Column(Numeric(10, 2), nullable=False)
    service_fee          = Column(Numeric(10, 2), nullable=False)
    delivery_fee         = Column(Numeric(10, 2), nullable=False)
    total_amount         = Column(Numeric(10, 2), nullable=False)
    payment_method       = Column(Unicode(20), nullable=False)
    payment_status       = Column(Unicode(20), nullable=False, default="pending")
    amount_paid          = Column(Numeric(10, 2), nullable=False, default=0)
    special_instructions = Column(UnicodeText)
    status               = Column(Unicode(20), nullable=False, default="pending", index=True)
    created_at           = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at           = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    paid_at              = Column(DateTime)
    delivered_at         = Column(DateTime)

    client   = relationship("ClientProfile")
    supplier = relationship("SupplierProfile")
    courier  = relationship("CourierProfile")
    address  = relationship("Address")
    items    = relationship("OrderItem", cascade="all, delete-orphan", back_populates="order")
    payments = relationship("Payment", cascade="all, delete-orphan", back_populates="order")
    history  = relationship(
        "OrderStatusHistory",
        cascade="all, delete-orphan",
        back_populates="order",
        order_by="OrderStatusHistory.id",
    )

    @property
    def payment(self):
        return self.payments[0] if self.payments else None

    @property
    def tracking_number(self) -> str:
        return f"ORD-{self.id:08d}"


class OrderStatusHistory(Base):
    __tablename__ = "order_status_history"
    id         = Column(Integer, primary_key=True, index=True)
    order_id   = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    old_status = Column(Unicode(20))
    new_status = Column(Unicode(20), nullable=False)
    changed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    changed_at = Column(DateTime, default=datetime.utcnow)

    order = relationship("Order", back_populates="history")
