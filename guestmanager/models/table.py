"""
Table model
"""

from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from guestmanager.core.db import Base

class Table(Base):
    __tablename__ = "tables"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    table_number = Column(Integer, nullable=False)
    capacity = Column(Integer, nullable=False, default=8)

    # Relationships
    event = relationship("Event", back_populates="tables")

    # Guests join on table_number, not on the table id
    __table_args__ = (
        UniqueConstraint("event_id", "table_number", name="uq_tables_event_number"),
        CheckConstraint("capacity >= 0", name="ck_tables_capacity_non_negative"),
    )
