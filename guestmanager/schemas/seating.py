"""
Seating records shared by the allocator and the API
"""

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, Field

GuestId = Union[int, str]
OccupancyStatus = Literal["empty", "partial", "full", "overfull"]

class GuestSeat(BaseModel):
    """Guest as seen by the allocator; table_number None means unassigned"""
    id: GuestId
    name: str = ""
    table_number: Optional[int] = None

    class Config:
        from_attributes = True

class TableSeat(BaseModel):
    """Table as seen by the allocator"""
    id: Optional[GuestId] = None
    table_number: int
    capacity: int = Field(ge=0)

    class Config:
        from_attributes = True

class Distribution(BaseModel):
    """One proposed guest -> table assignment"""
    guest_id: GuestId
    table_number: int

class TableOccupancy(BaseModel):
    table_number: int
    capacity: int
    occupied: int
    available: int
    status: OccupancyStatus

class AssignmentValidation(BaseModel):
    valid: bool
    message: str

class TableCreate(BaseModel):
    """Schema for adding a table to an event"""
    table_number: int = Field(gt=0)
    capacity: int = Field(default=8, ge=0)

class GuestMove(BaseModel):
    """Move a guest to a table, or unassign with table_number None"""
    table_number: Optional[int] = None

class DistributionResult(BaseModel):
    """Outcome of applying an automatic distribution"""
    assigned: List[Distribution]
    assigned_count: int
    unassigned_remaining: int
    suggested_additional_tables: int
