# backend/models/supplier_model.py
from sqlalchemy import Column, Integer, Numeric, Boolean, ForeignKey
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base


class SupplierProfile(Base):
    __tablename__ = "suppliers"
    id               = Column(Integer, primary_key=True, index=True)
    user_id          = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_name     = Column(Unicode(255))
    supplier_type    = Column(Unicode(50))    # restaurant / pharmacy / grocery ...
    delivery_fee     = Column(Numeric(10, 2), nullable=False, default=0)
    rating           = Column(Numeric(3, 2), nullable=False, default=0)
    avg_prep_minutes = Column(Integer, nullable=False, default=0)
    is_open          = Column(Boolean, nullable=False, default=True)

    user     = relationship("User", back_populates="supplier_profile")
    products = relationship("Product", back_populates="supplier", cascade="all, delete-orphan")
