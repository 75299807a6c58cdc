# backend/models/order_item_model.py
from sqlalchemy import Column, Integer, Numeric, ForeignKey
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base


class OrderItem(Base):
    """A line of an order. Name and unit price are copied from the product at order time."""
    __tablename__ = "order_items"
    id           = Column(Integer, primary_key=True, index=True)
    order_id     = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id   = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    product_name = Column(Unicode(255), nullable=False)
    quantity     = Column(Integer, nullable=False)
    unit_price   = Column(Numeric(10, 2), nullable=False)

    order   = relationship("Order", back_populates="items")
    product = relationship("Product")

    @property
    def line_total(self):
        return self.unit_price * self.quantity
