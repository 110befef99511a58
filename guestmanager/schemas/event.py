"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, EmailStr

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str
    date: datetime
    organizer_email: EmailStr
    location: Optional[str] = None
    description: Optional[str] = None

class EventResponse(BaseModel):
    """Basic event response"""
    id: int
    name: str
    date: datetime
    location: Optional[str] = None
    organizer_email: str
    public_code: str
    created_at: datetime

    class Config:
        from_attributes = True

class EventDetail(EventResponse):
    """Detailed event response with counts"""
    total_guests: int
    total_tables: int
    checked_in_count: int
    unassigned_count: int
    guest_limit: Optional[int] = None

class SeatingInfo(BaseModel):
    """Seating information for a guest"""
    guest_name: str
    table_number: Optional[int] = None
    checked_in: bool
    table_mates: List[dict]  # List of {name, checked_in}
