# backend/models/product_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, Numeric, Boolean, DateTime, ForeignKey
from sqlalchemy.types import Unicode, UnicodeText
from sqlalchemy.orm import relationship

from database.session import Base


class Product(Base):
    __tablename__ = "products"

    id           = Column(Integer, primary_key=True, index=True)
    supplier_id  = Column(Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id  = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)
    name         = Column(Unicode(255), nullable=False)
    description  = Column(UnicodeText, nullable=False, default="")
    price        = Column(Numeric(10, 2), nullable=False)
    promo_price  = Column(Numeric(10, 2), nullable=True)
    stock        = Column(Integer, nullable=False, default=0)
    is_available = Column(Boolean, nullable=False, default=True)
    is_active    = Column(Boolean, nullable=False, default=True)    # False once deleted by the supplier
    created_at   = Column(DateTime, default=datetime.utcnow)
    updated_at   = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    supplier = relationship("SupplierProfile", back_populates="products")
    category = relationship("Category")
    favorites = relationship("Favorite", back_populates="product", cascade="all, delete-orphan")

    @property
    def effective_price(self):
        """Price charged at checkout: the promotional price when it undercuts the list price."""
        if self.promo_price is not None and self.promo_price < self.price:
            return self.promo_price
        return self.price

    @property
    def promotion_percent(self) -> int:
        if self.promo_price is None or not self.price:
            return 0
        return max(0, int(round((1 - float(self.promo_price) / float(self.price)) * 100)))
