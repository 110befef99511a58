"""
Plan and limit schemas
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr

class Plan(str, Enum):
    FREE = "FREE"
    ESSENTIAL = "ESSENTIAL"
    PREMIUM = "PREMIUM"
    PROFESSIONAL = "PROFESSIONAL"

    @classmethod
    def parse(cls, value) -> "Plan":
        """Coerce a stored plan string; unknown or missing values mean FREE"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.FREE

class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"

class EventPurchaseInfo(BaseModel):
    """Plan purchased for one event"""
    plan: Plan
    payment_status: PaymentStatus = PaymentStatus.PAID

    class Config:
        from_attributes = True

class PlanDecision(BaseModel):
    """Allow/deny answer for a gated action"""
    allowed: bool
    message: str
    plan: Plan
    limit: Optional[int] = None  # None = unlimited
    reason: Optional[str] = None

class SubscriptionUpsert(BaseModel):
    """Schema for setting an account's subscription"""
    account_email: EmailStr
    plan: Plan = Plan.FREE
    promo_code: Optional[str] = None
    is_admin: bool = False

class EventPurchaseCreate(BaseModel):
    """Schema for recording an event plan purchase"""
    plan: Plan
    payment_status: PaymentStatus = PaymentStatus.PENDING
    amount: Optional[float] = None
