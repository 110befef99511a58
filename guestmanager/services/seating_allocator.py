"""
Table seating allocation and occupancy rules

Everything here is a pure function of the guest/table snapshot passed in.
Guests and tables only need ``id``/``table_number`` and
``table_number``/``capacity`` attributes, so ORM rows work as well as the
GuestSeat/TableSeat records.
"""

import logging
import math
from collections import Counter
from typing import List, Optional, Sequence

from guestmanager.core.config import settings
from guestmanager.core.messages import translate
from guestmanager.schemas.seating import (
    AssignmentValidation,
    Distribution,
    GuestId,
    GuestSeat,
    TableOccupancy,
    TableSeat,
)

logger = logging.getLogger(__name__)

class SeatingAllocator:
    """Greedy table filling plus occupancy and move validation"""

    @staticmethod
    def auto_distribute(
        guests: Sequence[GuestSeat],
        tables: Sequence[TableSeat],
        count_seated: bool = True
    ) -> List[Distribution]:
        """Propose tables for every unassigned guest.

        Tables are filled in ascending table_number order, each up to its
        capacity before moving on. Guests already sitting at a table use up
        its seats, so no table is pushed past capacity; tables that are
        already overfull are left as they are. Guests that already have a
        table are not part of the result. When the tables run out the
        remaining guests stay unassigned.

        ``count_seated=False`` ignores seated guests and gives every table up
        to ``capacity`` new guests, which can overfill partly seated tables.
        """
        unassigned = [guest for guest in guests if guest.table_number is None]
        ordered_tables = sorted(tables, key=lambda table: table.table_number)
        seated = Counter(
            guest.table_number for guest in guests if guest.table_number is not None
        ) if count_seated else Counter()

        distributions: List[Distribution] = []
        table_index = 0
        table_count = 0

        for guest in unassigned:
            # Advance past full tables; capacity 0 tables get no iterations
            while table_index < len(ordered_tables):
                table = ordered_tables[table_index]
                if table_count + seated[table.table_number] < table.capacity:
                    break
                table_index += 1
                table_count = 0

            if table_index >= len(ordered_tables):
                break

            distributions.append(Distribution(
                guest_id=guest.id,
                table_number=ordered_tables[table_index].table_number
            ))
            table_count += 1

        logger.debug(
            f"Distributed {len(distributions)} of {len(unassigned)} unassigned guests "
            f"across {len(ordered_tables)} tables"
        )
        return distributions

    @staticmethod
    def redistribute(
        all_guests: Sequence[GuestSeat],
        tables: Sequence[TableSeat]
    ) -> List[Distribution]:
        """Discard every current assignment and distribute the whole guest list"""
        cleared = [
            GuestSeat(id=guest.id, name=getattr(guest, "name", "") or "", table_number=None)
            for guest in all_guests
        ]
        return SeatingAllocator.auto_distribute(cleared, tables)

    @staticmethod
    def get_occupancy(
        table_number: int,
        guests: Sequence[GuestSeat],
        tables: Sequence[TableSeat]
    ) -> TableOccupancy:
        """Occupancy for one table.

        An unknown table_number yields an empty zero-capacity record, even if
        guests reference it.
        """
        table = SeatingAllocator._find_table(table_number, tables)
        if table is None:
            return TableOccupancy(
                table_number=table_number,
                capacity=0,
                occupied=0,
                available=0,
                status="empty"
            )

        occupied = sum(1 for guest in guests if guest.table_number == table_number)

        if occupied == 0:
            status = "empty"
        elif occupied < table.capacity:
            status = "partial"
        elif occupied == table.capacity:
            status = "full"
        else:
            status = "overfull"

        return TableOccupancy(
            table_number=table_number,
            capacity=table.capacity,
            occupied=occupied,
            available=table.capacity - occupied,
            status=status
        )

    @staticmethod
    def validate_assignment(
        guest_id: GuestId,
        table_number: int,
        guests: Sequence[GuestSeat],
        tables: Sequence[TableSeat],
        language: Optional[str] = None
    ) -> AssignmentValidation:
        """Check whether a guest may be moved to a table. Never mutates."""
        table = SeatingAllocator._find_table(table_number, tables)
        if table is None:
            return AssignmentValidation(
                valid=False,
                message=translate("table_missing", language, table_number=table_number)
            )

        current_guest = next((guest for guest in guests if guest.id == guest_id), None)
        if current_guest is not None and current_guest.table_number == table_number:
            return AssignmentValidation(
                valid=True,
                message=translate("guest_already_seated", language)
            )

        occupancy = SeatingAllocator.get_occupancy(table_number, guests, tables)
        if occupancy.occupied >= table.capacity:
            return AssignmentValidation(
                valid=False,
                message=translate(
                    "table_full",
                    language,
                    table_number=table_number,
                    occupied=occupancy.occupied,
                    capacity=table.capacity
                )
            )

        return AssignmentValidation(valid=True, message=translate("table_available", language))

    @staticmethod
    def count_unassigned(guests: Sequence[GuestSeat]) -> int:
        return sum(1 for guest in guests if guest.table_number is None)

    @staticmethod
    def total_capacity(tables: Sequence[TableSeat]) -> int:
        return sum(table.capacity for table in tables)

    @staticmethod
    def can_accommodate_all(guests: Sequence[GuestSeat], tables: Sequence[TableSeat]) -> bool:
        """Global check only; ignores how guests are spread across tables"""
        return len(guests) <= SeatingAllocator.total_capacity(tables)

    @staticmethod
    def suggest_additional_tables(
        guests: Sequence[GuestSeat],
        tables: Sequence[TableSeat],
        default_capacity: Optional[int] = None
    ) -> int:
        """Minimum number of new tables of default_capacity seats to fit everyone"""
        if default_capacity is None:
            default_capacity = settings.DEFAULT_TABLE_CAPACITY
        if default_capacity <= 0:
            raise ValueError("default_capacity must be positive")

        shortfall = len(guests) - SeatingAllocator.total_capacity(tables)
        if shortfall <= 0:
            return 0
        return math.ceil(shortfall / default_capacity)

    @staticmethod
    def _find_table(table_number: int, tables: Sequence[TableSeat]) -> Optional[TableSeat]:
        return next((table for table in tables if table.table_number == table_number), None)
