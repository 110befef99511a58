"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    name: str = Field(min_length=1)
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    table_number: Optional[int] = Field(default=None, gt=0)

class GuestBatchCreate(BaseModel):
    """Several guests added in one request"""
    guests: List[GuestCreate]

class GuestResponse(BaseModel):
    """Guest response schema"""
    id: int
    name: str
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    table_number: Optional[int] = None
    qr_code: str
    checked_in_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class LookupRequest(BaseModel):
    """Guest lookup request"""
    public_code: str
    name: str = Field(min_length=1)

class CheckInRequest(BaseModel):
    """Guest check-in request"""
    public_code: str
    qr_code: str
