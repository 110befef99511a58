"""
Tests for guest lookup and check-in functionality
"""

import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from guestmanager.core.db import Base
from guestmanager.models import Event, Guest, Table
from guestmanager.services.checkin_service import CheckInService
from guestmanager.services.seating_service import SeatingService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_lookup.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def sample_event_with_guests(db_session):
    """Create a sample event with guests for testing"""
    event = Event(
        name="Casamento Teste",
        date=datetime(2025, 6, 15),
        organizer_email="test@example.com",
        public_code="TEST123"
    )
    db_session.add(event)
    db_session.flush()

    db_session.add(Table(event_id=event.id, table_number=1, capacity=8))
    db_session.add(Table(event_id=event.id, table_number=2, capacity=8))

    guests = [
        Guest(event_id=event.id, name="John Doe", table_number=1, qr_code="qr-john"),
        Guest(event_id=event.id, name="Jane Smith", table_number=1, qr_code="qr-jane",
              checked_in_at=datetime(2025, 6, 15, 18, 30)),
        Guest(event_id=event.id, name="Bob Johnson", table_number=1, qr_code="qr-bob"),
        Guest(event_id=event.id, name="Alice Brown", table_number=2, qr_code="qr-alice"),
        Guest(event_id=event.id, name="Walk In", qr_code="qr-walkin"),
    ]
    db_session.add_all(guests)

    db_session.commit()
    db_session.refresh(event)
    return event

def test_get_guest_seating_info_exact_match(db_session, sample_event_with_guests):
    """Test guest lookup with exact name match"""
    seating_info = SeatingService.get_guest_seating_info(
        public_code="TEST123",
        guest_name="John Doe",
        db=db_session
    )

    assert seating_info is not None
    assert seating_info.guest_name == "John Doe"
    assert seating_info.table_number == 1
    assert seating_info.checked_in is False

    table_mate_names = [mate["name"] for mate in seating_info.table_mates]
    assert sorted(table_mate_names) == ["Bob Johnson", "Jane Smith"]

def test_get_guest_seating_info_partial_match(db_session, sample_event_with_guests):
    """Test guest lookup with partial name match"""
    seating_info = SeatingService.get_guest_seating_info(
        public_code="TEST123",
        guest_name="jane",
        db=db_session
    )

    assert seating_info is not None
    assert seating_info.guest_name == "Jane Smith"
    assert seating_info.checked_in is True

def test_get_guest_seating_info_unassigned_guest(db_session, sample_event_with_guests):
    """An unassigned guest has no table and no table mates"""
    seating_info = SeatingService.get_guest_seating_info(
        public_code="TEST123",
        guest_name="walk in",
        db=db_session
    )

    assert seating_info.table_number is None
    assert seating_info.table_mates == []

def test_get_guest_seating_info_not_found(db_session, sample_event_with_guests):
    seating_info = SeatingService.get_guest_seating_info(
        public_code="TEST123",
        guest_name="Nonexistent Person",
        db=db_session
    )

    assert seating_info is None

@pytest.mark.parametrize("guest_name", ["%", "_", "%%", "  ", "J_hn"])
def test_get_guest_seating_info_treats_wildcards_literally(db_session, sample_event_with_guests, guest_name):
    seating_info = SeatingService.get_guest_seating_info(
        public_code="TEST123",
        guest_name=guest_name,
        db=db_session
    )

    assert seating_info is None

def test_get_guest_seating_info_matches_literal_percent(db_session, sample_event_with_guests):
    db_session.add(Guest(event_id=sample_event_with_guests.id, name="Convidado 100% VIP", table_number=2))
    db_session.commit()

    seating_info = SeatingService.get_guest_seating_info(
        public_code="TEST123",
        guest_name="100%",
        db=db_session
    )

    assert seating_info.guest_name == "Convidado 100% VIP"

def test_get_guest_seating_info_invalid_event(db_session, sample_event_with_guests):
    seating_info = SeatingService.get_guest_seating_info(
        public_code="INVALID",
        guest_name="John Doe",
        db=db_session
    )

    assert seating_info is None

def test_check_in_guest(db_session, sample_event_with_guests):
    result = CheckInService.check_in_guest("TEST123", "qr-john", db_session)

    assert result is not None
    assert result["was_already_checked_in"] is False
    assert result["guest"]["name"] == "John Doe"
    assert result["guest"]["table_number"] == 1

    john = db_session.query(Guest).filter(Guest.name == "John Doe").one()
    assert john.checked_in_at is not None

def test_check_in_twice_keeps_first_time(db_session, sample_event_with_guests):
    result = CheckInService.check_in_guest("TEST123", "qr-jane", db_session)

    assert result["was_already_checked_in"] is True
    assert result["guest"]["checked_in_at"] == "2025-06-15T18:30:00"

def test_check_in_unknown_code(db_session, sample_event_with_guests):
    assert CheckInService.check_in_guest("TEST123", "qr-nobody", db_session) is None
    assert CheckInService.check_in_guest("INVALID", "qr-john", db_session) is None

def test_check_in_stats(db_session, sample_event_with_guests):
    CheckInService.check_in_guest("TEST123", "qr-bob", db_session)

    stats = CheckInService.get_stats(sample_event_with_guests.id, db_session)

    assert stats == {"total_guests": 5, "checked_in": 2, "pending": 3}

def test_generated_qr_codes_are_unique(db_session, sample_event_with_guests):
    first = Guest(event_id=sample_event_with_guests.id, name="New One")
    second = Guest(event_id=sample_event_with_guests.id, name="New Two")
    db_session.add_all([first, second])
    db_session.commit()

    assert first.qr_code and second.qr_code
    assert first.qr_code != second.qr_code
