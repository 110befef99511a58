"""
Database models package
"""

from .event import Event
from .table import Table
from .guest import Guest
from .subscription import Subscription, EventPurchase

__all__ = ["Event", "Table", "Guest", "Subscription", "EventPurchase"]
