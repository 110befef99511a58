"""
Tests for guest list import (CSV and Excel)
"""

import io

import pandas as pd
import pytest
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from guestmanager.core.db import Base
from guestmanager.models import Event, Guest
from guestmanager.services.guest_import_service import GuestImportService

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_import.db"
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
def sample_event(db_session):
    event = Event(
        name="Formatura",
        date=datetime(2025, 12, 10),
        organizer_email="test@example.com",
        public_code="TEST123"
    )
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event

def create_test_excel(data):
    """Helper function to create Excel bytes from data"""
    df = pd.DataFrame(data)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        df.to_excel(writer, index=False)
    return buffer.getvalue()

def test_semicolon_csv_with_header():
    content = "nome;email;whatsapp;mesa\nJoão Silva;joao@email.com;11999999999;1\nAna Lima;;;\n".encode("utf-8")

    guests, errors = GuestImportService.parse_upload(content, "convidados.csv")

    assert errors == []
    assert [g.name for g in guests] == ["João Silva", "Ana Lima"]
    assert guests[0].email == "joao@email.com"
    assert guests[0].whatsapp == "+5511999999999"
    assert guests[0].table_number == 1
    assert guests[1].table_number is None
    assert guests[1].email is None

def test_comma_csv_without_header():
    content = b"Maria Santos,maria@email.com,,2\nPedro Costa,,,\n"

    guests, errors = GuestImportService.parse_upload(content, "guests.csv")

    assert errors == []
    assert [(g.name, g.table_number) for g in guests] == [("Maria Santos", 2), ("Pedro Costa", None)]

def test_name_only_csv():
    guests, errors = GuestImportService.parse_upload(b"Carlos\nBeatriz\n", "guests.csv")

    assert errors == []
    assert [g.name for g in guests] == ["Carlos", "Beatriz"]

def test_cp1252_encoded_csv():
    content = "nome;mesa\nJosé Conceição;3\n".encode("cp1252")

    guests, errors = GuestImportService.parse_upload(content, "guests.csv")

    assert errors == []
    assert guests[0].name == "José Conceição"

def test_utf8_bom_is_ignored():
    content = GuestImportService.create_template()

    guests, errors = GuestImportService.parse_upload(content, "modelo.csv")

    assert errors == []
    assert len(guests) == 5
    assert guests[0].name == "João Silva"

def test_invalid_table_number_reported_with_line():
    content = b"name;table\nAlice;abc\nBob;0\nCarol;2\n"

    guests, errors = GuestImportService.parse_upload(content, "guests.csv")

    assert len(guests) == 3
    assert [g.table_number for g in guests] == [None, None, 2]
    assert len(errors) == 2
    assert "2" in errors[0] and "abc" in errors[0]
    assert "3" in errors[1]

def test_empty_name_reported():
    content = b"name;email\n;someone@email.com\nDaniel;\n"

    guests, errors = GuestImportService.parse_upload(content, "guests.csv")

    assert [g.name for g in guests] == ["Daniel"]
    assert len(errors) == 1

def test_too_many_columns():
    content = b"name;email;whatsapp;table;extra\nA;;;1;x\n"

    guests, errors = GuestImportService.parse_upload(content, "guests.csv")

    assert guests == []
    assert len(errors) == 1

def test_empty_file():
    guests, errors = GuestImportService.parse_upload(b"", "guests.csv")

    assert guests == []
    assert len(errors) == 1

def test_excel_upload():
    content = create_test_excel({
        'Nome': ['Guest 1', 'Guest 2'],
        'Email': ['g1@example.com', ''],
        'Mesa': [1, None],
    })

    guests, errors = GuestImportService.parse_upload(content, "guests.xlsx")

    assert errors == []
    assert [(g.name, g.table_number) for g in guests] == [("Guest 1", 1), ("Guest 2", None)]

def test_excel_without_name_column():
    content = create_test_excel({'Table': [1, 2]})

    guests, errors = GuestImportService.parse_upload(content, "guests.xlsx")

    assert guests == []
    assert len(errors) == 1

@pytest.mark.parametrize("raw, expected", [
    ("11999999999", "+5511999999999"),
    ("(11) 99999-9999", "+5511999999999"),
    ("+1 415 555 0100", "+1 415 555 0100"),
    ("4155550100", "+4155550100"),
    ("12345", None),
    ("", None),
])
def test_normalize_whatsapp(raw, expected):
    assert GuestImportService.normalize_whatsapp(raw) == expected

def test_add_guests_persists(db_session, sample_event):
    guests, _ = GuestImportService.parse_upload(b"nome;mesa\nA;1\nB;\n", "guests.csv")

    created = GuestImportService.add_guests(sample_event, guests, db_session)

    assert len(created) == 2
    stored = db_session.query(Guest).filter(Guest.event_id == sample_event.id).order_by(Guest.id).all()
    assert [(g.name, g.table_number) for g in stored] == [("A", 1), ("B", None)]
    assert all(g.qr_code for g in stored)
