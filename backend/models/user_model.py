# backend/models/user_model.py
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, CheckConstraint
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base

ROLES = ("client", "supplier", "courier", "admin")
USER_STATUSES = ("active", "inactive", "suspended")


class User(Base):
    __tablename__ = "users"
    id            = Column(Integer, primary_key=True, index=True)
    email         = Column(Unicode(255), unique=True, nullable=False, index=True)
    password_hash = Column(Unicode(255), nullable=False)
    full_name     = Column(Unicode(255), nullable=False)
    phone         = Column(Unicode(32))
    role          = Column(Unicode(20), nullable=False)    # client / supplier / courier / admin
    status        = Column(Unicode(20), nullable=False, default="active")
    created_at    = Column(DateTime, default=datetime.utcnow)
    updated_at    = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login_at = Column(DateTime)

    __table_args__ = (
        CheckConstraint("role in ('client','supplier','courier','admin')"),
        CheckConstraint("status in ('active','inactive','suspended')"),
    )

    # exactly one of these is populated, matching `role`
    client_profile   = relationship("ClientProfile", uselist=False, back_populates="user", cascade="all, delete-orphan")
    supplier_profile = relationship("SupplierProfile", uselist=False, back_populates="user", cascade="all, delete-orphan")
    courier_profile  = relationship("CourierProfile", uselist=False, back_populates="user", cascade="all, delete-orphan")
    admin_profile    = relationship("AdminProfile", uselist=False, back_populates="user", cascade="all, delete-orphan")

    sessions      = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship("Notification", back_populates="user", cascade="all, delete-orphan")

    @property
    def profile(self):
        return getattr(self, f"{self.role}_profile", None)

    @property
    def profile_id(self):
        p = self.profile
        return p.id if p else None
