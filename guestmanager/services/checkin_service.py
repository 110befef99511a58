"""
Guest self check-in by QR code
"""

import logging
from typing import Optional, Dict
from sqlalchemy.orm import Session

from guestmanager.services.repositories import EventRepo, GuestRepo

logger = logging.getLogger(__name__)

class CheckInService:
    """Service for handling guest check-ins"""

    @staticmethod
    def check_in_guest(
        public_code: str,
        qr_code: str,
        db: Session
    ) -> Optional[Dict]:
        """Check in the guest holding qr_code; repeated scans keep the first time"""
        event = EventRepo.get_by_public_code(db, public_code)
        if not event:
            return None

        guest = GuestRepo.find_by_qr_code(db, event.id, qr_code.strip())
        if not guest:
            logger.warning(f"Unknown QR code scanned for event {public_code}")
            return None

        was_checked_in = guest.checked_in
        if not was_checked_in:
            GuestRepo.set_checked_in(db, guest)
            logger.info(f"Guest {guest.id} checked in to event {public_code}")

        return {
            "guest": {
                "id": guest.id,
                "name": guest.name,
                "table_number": guest.table_number,
                "checked_in_at": guest.checked_in_at.isoformat(),
            },
            "was_already_checked_in": was_checked_in
        }

    @staticmethod
    def get_stats(event_id: int, db: Session) -> Dict:
        guests = GuestRepo.list_for_event(db, event_id)
        checked_in = sum(1 for guest in guests if guest.checked_in)
        return {
            "total_guests": len(guests),
            "checked_in": checked_in,
            "pending": len(guests) - checked_in,
        }
