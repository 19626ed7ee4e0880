# pling/models.py
"""SQLAlchemy ORM models for persisted entities.

Defines sellers (`User`), bicycle listings (`Listing`), page-view events
(`Visit`) and admin-managed `FAQ` entries, plus the indexes the listing
filters lean on.
"""
from sqlalchemy import (
    Column, Integer, Text, Boolean, TIMESTAMP, JSON, ForeignKey, func, Index,
    CheckConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from .db import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, nullable=False, unique=True)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    mobile = Column(Text, nullable=False)
    city = Column(Text, nullable=False)
    sub_city = Column(Text, nullable=False)
    type = Column(Text, nullable=False, default="individual")
    is_admin = Column(Boolean, nullable=False, default=False)

    listings = relationship("Listing", back_populates="seller")


class Listing(Base):
    __tablename__ = "bicycles"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_bicycles_price_non_negative"),
    )
    id = Column(Integer, primary_key=True, index=True)
    seller_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(Text, nullable=False)
    brand = Column(Text, nullable=False)
    model = Column(Text, nullable=False)
    purchase_year = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)
    gear_transmission = Column(Text, nullable=False)
    frame_material = Column(Text, nullable=False)
    suspension = Column(Text, nullable=False)
    condition = Column(Text, nullable=False)
    cycle_type = Column(Text, nullable=False)
    wheel_size = Column(Text, nullable=False)
    has_receipt = Column(Boolean, nullable=False, default=False)
    additional_details = Column(Text)
    images = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=list)
    is_premium = Column(Boolean, nullable=False, default=False)
    status = Column(Text, nullable=False, default="available", server_default="available")
    views = Column(Integer, nullable=False, default=0, server_default="0")
    inquiries = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    seller = relationship("User", back_populates="listings")


class Visit(Base):
    __tablename__ = "visits"
    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(TIMESTAMP(timezone=True), server_default=func.now(), index=True)
    path = Column(Text, nullable=False)
    device_type = Column(Text)
    platform = Column(Text)
    browser = Column(Text)
    user_id = Column(Integer, ForeignKey("users.id"))
    session_id = Column(Text, nullable=False)


class FAQ(Base):
    __tablename__ = "faqs"
    id = Column(Integer, primary_key=True, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    order = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

Index("idx_bicycles_price", Listing.price)
Index("idx_bicycles_created_at", Listing.created_at)
Index("idx_bicycles_brand", Listing.brand)
