"""
Account subscription and per-event purchase models
"""

from datetime import datetime
from sqlalchemy import Boolean, Column, Integer, Numeric, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from guestmanager.core.db import Base

class Subscription(Base):
    """Account-level plan; gates how many events an account may create"""
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    account_email = Column(String(255), unique=True, nullable=False, index=True)
    plan = Column(String(20), nullable=False, default="FREE")
    promo_code = Column(String(50), nullable=True)
    is_admin = Column(Boolean, default=False)
    current_period_start = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class EventPurchase(Base):
    """Plan bought for a single event; gates that event's guest count"""
    __tablename__ = "event_purchases"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    plan = Column(String(20), nullable=False)
    payment_status = Column(String(20), nullable=False, default="pending")  # pending, paid, failed, refunded
    amount = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    event = relationship("Event", back_populates="purchases")
