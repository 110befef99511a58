"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .guest import *
from .plan import *
from .seating import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "EventCreate",
    "EventResponse",
    "EventDetail",
    "SeatingInfo",
    "GuestCreate",
    "GuestBatchCreate",
    "GuestResponse",
    "CheckInRequest",
    "LookupRequest",
    "Plan",
    "PaymentStatus",
    "EventPurchaseInfo",
    "PlanDecision",
    "SubscriptionUpsert",
    "EventPurchaseCreate",
    "GuestSeat",
    "TableSeat",
    "Distribution",
    "TableOccupancy",
    "AssignmentValidation",
    "TableCreate",
    "GuestMove",
    "DistributionResult",
]
