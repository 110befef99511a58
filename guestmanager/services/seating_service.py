"""
Seating arrangement service backed by the database

Loads an event's guest/table snapshot, hands it to the SeatingAllocator and
writes accepted results back. A snapshot is only as fresh as the request that
loaded it: a move validated here can race another request writing the same
table, nothing locks the rows in between.
"""

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from guestmanager.core.messages import translate
from guestmanager.models import Guest, Table
from guestmanager.schemas.event import SeatingInfo
from guestmanager.schemas.seating import (
    AssignmentValidation,
    Distribution,
    DistributionResult,
    GuestSeat,
    TableSeat,
)
from guestmanager.services.repositories import EventRepo, GuestRepo, TableRepo
from guestmanager.services.seating_allocator import SeatingAllocator

logger = logging.getLogger(__name__)

class SeatingService:
    """Service for seating arrangement operations"""

    @staticmethod
    def load_snapshot(event_id: int, db: Session) -> Tuple[List[GuestSeat], List[TableSeat]]:
        """Current guests and tables of an event as allocator records"""
        guests = [GuestSeat.model_validate(guest) for guest in GuestRepo.list_for_event(db, event_id)]
        tables = [TableSeat.model_validate(table) for table in TableRepo.list_for_event(db, event_id)]
        return guests, tables

    @staticmethod
    def get_guest_seating_info(
        public_code: str,
        guest_name: str,
        db: Session
    ) -> Optional[SeatingInfo]:
        """Get seating information for a specific guest"""
        event = EventRepo.get_by_public_code(db, public_code)
        if not event:
            return None

        guest = GuestRepo.find_by_name(db, event.id, guest_name)
        if not guest:
            return None

        table_mates = []
        if guest.table_number is not None:
            table_mates = [
                {"name": mate.name, "checked_in": mate.checked_in}
                for mate in GuestRepo.list_table(db, event.id, guest.table_number)
                if mate.id != guest.id
            ]

        return SeatingInfo(
            guest_name=guest.name,
            table_number=guest.table_number,
            checked_in=guest.checked_in,
            table_mates=table_mates
        )

    @staticmethod
    def get_seating_summary(
        event_id: int,
        db: Session,
        include_names: bool = False
    ) -> Dict:
        """Per-table occupancy plus event-wide capacity figures"""
        guests, tables = SeatingService.load_snapshot(event_id, db)

        table_summaries = []
        for table in sorted(tables, key=lambda t: t.table_number):
            occupancy = SeatingAllocator.get_occupancy(table.table_number, guests, tables)
            table_info = occupancy.model_dump()

            if include_names:
                table_info["guests"] = [
                    {"id": guest.id, "name": guest.name}
                    for guest in guests
                    if guest.table_number == table.table_number
                ]

            table_summaries.append(table_info)

        known_numbers = {table.table_number for table in tables}
        dangling = sorted({
            guest.table_number for guest in guests
            if guest.table_number is not None and guest.table_number not in known_numbers
        })

        return {
            "total_guests": len(guests),
            "unassigned_guests": SeatingAllocator.count_unassigned(guests),
            "total_tables": len(tables),
            "total_capacity": SeatingAllocator.total_capacity(tables),
            "can_accommodate_all": SeatingAllocator.can_accommodate_all(guests, tables),
            "suggested_additional_tables": SeatingAllocator.suggest_additional_tables(guests, tables),
            "unknown_table_numbers": dangling,
            "tables": table_summaries
        }

    @staticmethod
    def apply_distribution(
        event_id: int,
        distributions: List[Distribution],
        db: Session,
        clear_existing: bool = False
    ) -> int:
        """Write proposed table numbers to the guests. Returns rows updated."""
        if clear_existing:
            db.query(Guest).filter(Guest.event_id == event_id).update({Guest.table_number: None})

        targets = {distribution.guest_id: distribution.table_number for distribution in distributions}
        updated = 0
        for guest in GuestRepo.list_for_event(db, event_id):
            if guest.id in targets:
                guest.table_number = targets[guest.id]
                updated += 1

        db.commit()
        logger.info(f"Applied {updated} table assignments to event {event_id}")
        return updated

    @staticmethod
    def auto_distribute(event_id: int, db: Session, count_seated: bool = True) -> DistributionResult:
        """Seat every unassigned guest and persist the result"""
        guests, tables = SeatingService.load_snapshot(event_id, db)
        distributions = SeatingAllocator.auto_distribute(guests, tables, count_seated=count_seated)
        SeatingService.apply_distribution(event_id, distributions, db)

        return DistributionResult(
            assigned=distributions,
            assigned_count=len(distributions),
            unassigned_remaining=SeatingAllocator.count_unassigned(guests) - len(distributions),
            suggested_additional_tables=SeatingAllocator.suggest_additional_tables(guests, tables)
        )

    @staticmethod
    def redistribute(event_id: int, db: Session) -> DistributionResult:
        """Clear every assignment of the event and seat everyone again"""
        guests, tables = SeatingService.load_snapshot(event_id, db)
        distributions = SeatingAllocator.redistribute(guests, tables)
        SeatingService.apply_distribution(event_id, distributions, db, clear_existing=True)

        return DistributionResult(
            assigned=distributions,
            assigned_count=len(distributions),
            unassigned_remaining=len(guests) - len(distributions),
            suggested_additional_tables=SeatingAllocator.suggest_additional_tables(guests, tables)
        )

    @staticmethod
    def move_guest(
        event_id: int,
        guest: Guest,
        table_number: Optional[int],
        db: Session
    ) -> AssignmentValidation:
        """Validate and apply a single manual move; None unassigns the guest"""
        if table_number is None:
            guest.table_number = None
            db.commit()
            return AssignmentValidation(valid=True, message=translate("guest_unassigned"))

        guests, tables = SeatingService.load_snapshot(event_id, db)
        validation = SeatingAllocator.validate_assignment(guest.id, table_number, guests, tables)
        if not validation.valid:
            logger.info(f"Rejected move of guest {guest.id} to table {table_number}: {validation.message}")
            return validation

        guest.table_number = table_number
        db.commit()
        return validation

    @staticmethod
    def remove_table(event_id: int, table: Table, db: Session) -> int:
        """Delete a table and unassign the guests seated at it"""
        unseated = db.query(Guest).filter(
            Guest.event_id == event_id,
            Guest.table_number == table.table_number
        ).update({Guest.table_number: None})
        db.delete(table)
        db.commit()
        return unseated
