# backend/models/admin_model.py
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.types import Unicode
from sqlalchemy.orm import relationship
from database.session import Base


class AdminProfile(Base):
    __tablename__ = "admins"
    id           = Column(Integer, primary_key=True, index=True)
    user_id      = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    access_level = Column(Unicode(20), nullable=False, default="standard")

    user = relationship("User", back_populates="admin_profile")
