"""
Repository layer over the SQLAlchemy session
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from guestmanager.models import Event, EventPurchase, Guest, Subscription, Table


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_by_public_code(db: Session, public_code: str) -> Optional[Event]:
        return db.query(Event).filter(Event.public_code == public_code).first()

    @staticmethod
    def get_by_id(db: Session, event_id: int) -> Optional[Event]:
        return db.query(Event).filter(Event.id == event_id).first()

    @staticmethod
    def public_code_taken(db: Session, public_code: str) -> bool:
        return EventRepo.get_by_public_code(db, public_code) is not None

    @staticmethod
    def count_created_since(db: Session, organizer_email: str, since: datetime) -> int:
        return db.query(func.count(Event.id)).filter(
            func.lower(Event.organizer_email) == organizer_email.lower(),
            Event.created_at >= since
        ).scalar() or 0


# -------- Table repository --------

class TableRepo:
    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[Table]:
        return db.query(Table).filter(Table.event_id == event_id).order_by(Table.table_number).all()

    @staticmethod
    def get_by_number(db: Session, event_id: int, table_number: int) -> Optional[Table]:
        return db.query(Table).filter(
            Table.event_id == event_id,
            Table.table_number == table_number
        ).first()


# -------- Guest repository --------

class GuestRepo:
    @staticmethod
    def list_for_event(db: Session, event_id: int) -> List[Guest]:
        return db.query(Guest).filter(Guest.event_id == event_id).order_by(Guest.id).all()

    @staticmethod
    def count_for_event(db: Session, event_id: int) -> int:
        return db.query(func.count(Guest.id)).filter(Guest.event_id == event_id).scalar() or 0

    @staticmethod
    def get(db: Session, event_id: int, guest_id: int) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.id == guest_id, Guest.event_id == event_id).first()

    @staticmethod
    def find_by_name(db: Session, event_id: int, name_icontains: str) -> Optional[Guest]:
        term = name_icontains.strip().lower()
        if not term:
            return None
        # LIKE wildcards in the search text match literally
        term = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        return db.query(Guest).filter(
            Guest.event_id == event_id,
            func.lower(Guest.name).like(f"%{term}%", escape="\\")
        ).order_by(Guest.id).first()

    @staticmethod
    def find_by_qr_code(db: Session, event_id: int, qr_code: str) -> Optional[Guest]:
        return db.query(Guest).filter(Guest.event_id == event_id, Guest.qr_code == qr_code).first()

    @staticmethod
    def list_table(db: Session, event_id: int, table_number: int) -> List[Guest]:
        return db.query(Guest).filter(
            Guest.event_id == event_id,
            Guest.table_number == table_number
        ).order_by(Guest.name).all()

    @staticmethod
    def set_checked_in(db: Session, guest: Guest) -> None:
        guest.checked_in_at = datetime.utcnow()
        db.commit()


# -------- Plan repositories --------

class SubscriptionRepo:
    @staticmethod
    def get_by_email(db: Session, account_email: str) -> Optional[Subscription]:
        return db.query(Subscription).filter(
            func.lower(Subscription.account_email) == account_email.lower()
        ).first()

    @staticmethod
    def paid_purchase_for_event(db: Session, event_id: int) -> Optional[EventPurchase]:
        return db.query(EventPurchase).filter(
            EventPurchase.event_id == event_id,
            EventPurchase.payment_status == "paid"
        ).order_by(EventPurchase.created_at.desc()).first()
