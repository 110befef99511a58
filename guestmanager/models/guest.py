"""
Guest model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from guestmanager.core.db import Base

class Guest(Base):
    __tablename__ = "guests"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    whatsapp = Column(String(32), nullable=True)
    table_number = Column(Integer, nullable=True)  # null = unassigned
    qr_code = Column(String(64), unique=True, nullable=False, default=lambda: str(uuid.uuid4()))
    checked_in_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    event = relationship("Event", back_populates="guests")

    @property
    def checked_in(self) -> bool:
        return self.checked_in_at is not None
