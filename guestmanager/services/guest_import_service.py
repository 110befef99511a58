"""
Guest list import service (CSV and Excel)
"""

import io
import logging
import re
from typing import List, Optional, Tuple

import pandas as pd
from sqlalchemy.orm import Session

from guestmanager.core.messages import translate
from guestmanager.models import Event, Guest
from guestmanager.schemas.guest import GuestCreate

logger = logging.getLogger(__name__)

class GuestImportService:
    """Service for turning uploaded guest lists into guests"""

    COLUMNS = ["name", "email", "whatsapp", "table"]
    COLUMN_ALIASES = {
        "name": "name", "nome": "name",
        "email": "email", "e-mail": "email",
        "whatsapp": "whatsapp", "telefone": "whatsapp", "phone": "whatsapp",
        "table": "table", "mesa": "table",
    }
    HEADER_HINTS = ("nome", "name", "mesa", "table")
    ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")
    EXCEL_EXTENSIONS = (".xlsx", ".xls")

    @staticmethod
    def create_template() -> bytes:
        """CSV template with a UTF-8 BOM so spreadsheet apps pick the right encoding"""
        template = (
            "nome;email;whatsapp;mesa\n"
            "João Silva;joao@email.com;11999999999;1\n"
            "Maria Santos;maria@email.com;11988888888;2\n"
            "Pedro Costa;pedro@email.com;11977777777;1\n"
            "Ana Lima;;11966666666;3\n"
            "Carlos Souza;carlos@email.com;;\n"
        )
        return template.encode("utf-8-sig")

    @staticmethod
    def decode(file_content: bytes) -> str:
        for encoding in GuestImportService.ENCODINGS:
            try:
                return file_content.decode(encoding)
            except UnicodeDecodeError:
                continue
        return file_content.decode("utf-8", errors="replace")

    @staticmethod
    def detect_separator(text: str) -> str:
        first_line = text.split("\n", 1)[0]
        return ";" if first_line.count(";") > first_line.count(",") else ","

    @staticmethod
    def read_frame(file_content: bytes, filename: str = "") -> Tuple[pd.DataFrame, bool]:
        """Load an upload into a string DataFrame. Returns (frame, has_header)."""
        if filename.lower().endswith(GuestImportService.EXCEL_EXTENSIONS):
            df = pd.read_excel(io.BytesIO(file_content), dtype=str)
            return df.fillna(""), True

        text = GuestImportService.decode(file_content).lstrip("\ufeff")
        first_line = text.strip().split("\n", 1)[0].lower()
        has_header = any(hint in first_line for hint in GuestImportService.HEADER_HINTS)

        df = pd.read_csv(
            io.StringIO(text),
            sep=GuestImportService.detect_separator(text),
            header=0 if has_header else None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
        return df.fillna(""), has_header

    @staticmethod
    def normalize_columns(df: pd.DataFrame, has_header: bool) -> Tuple[Optional[pd.DataFrame], List[str]]:
        """Map the frame onto name/email/whatsapp/table columns"""
        if len(df.columns) > len(GuestImportService.COLUMNS):
            return None, [translate("too_many_columns", count=len(df.columns))]

        if not has_header:
            df.columns = GuestImportService.COLUMNS[:len(df.columns)]
            return df, []

        mapping = {}
        for col in df.columns:
            key = GuestImportService.COLUMN_ALIASES.get(str(col).lower().strip())
            if key and key not in mapping.values():
                mapping[col] = key

        if "name" not in mapping.values():
            return None, [translate("missing_name_column")]

        return df[list(mapping)].rename(columns=mapping), []

    @staticmethod
    def parse_table_number(value: str) -> Optional[int]:
        """Positive table number, or None when the cell is not one"""
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if not number.is_integer() or number <= 0:
            return None
        return int(number)

    @staticmethod
    def normalize_whatsapp(phone: str) -> Optional[str]:
        """Numbers with fewer than 10 digits are dropped silently"""
        phone = (phone or "").strip()
        digits = re.sub(r"\D", "", phone)
        if len(digits) < 10:
            return None
        if phone.startswith("+"):
            return phone
        return f"+55{digits}" if len(digits) == 11 else f"+{digits}"

    @staticmethod
    def parse_guest_rows(df: pd.DataFrame, has_header: bool = True) -> Tuple[List[GuestCreate], List[str]]:
        guests: List[GuestCreate] = []
        errors: List[str] = []
        first_line = 2 if has_header else 1

        for offset, row in enumerate(df.to_dict("records")):
            line = first_line + offset
            values = {key: str(value).strip().strip("\"'") for key, value in row.items()}
            if not any(values.values()):
                continue

            name = values.get("name", "")
            if not name:
                errors.append(translate("row_name_empty", line=line))
                continue

            table_number = None
            raw_table = values.get("table", "")
            if raw_table:
                table_number = GuestImportService.parse_table_number(raw_table)
                if table_number is None:
                    errors.append(translate("row_table_invalid", line=line, value=raw_table))

            email = values.get("email", "")
            guests.append(GuestCreate(
                name=name,
                email=email if "@" in email else None,
                whatsapp=GuestImportService.normalize_whatsapp(values.get("whatsapp", "")),
                table_number=table_number
            ))

        if not guests and not errors:
            errors.append(translate("file_empty"))

        return guests, errors

    @staticmethod
    def parse_upload(file_content: bytes, filename: str = "") -> Tuple[List[GuestCreate], List[str]]:
        """Read and validate an uploaded guest list without touching the database"""
        try:
            df, has_header = GuestImportService.read_frame(file_content, filename)
        except pd.errors.EmptyDataError:
            return [], [translate("file_empty")]
        except (ValueError, pd.errors.ParserError) as e:
            return [], [translate("file_unreadable", error=str(e))]

        if df.empty and not has_header:
            return [], [translate("file_empty")]

        df, errors = GuestImportService.normalize_columns(df, has_header)
        if df is None:
            return [], errors

        return GuestImportService.parse_guest_rows(df, has_header)

    @staticmethod
    def add_guests(event: Event, guests: List[GuestCreate], db: Session) -> List[Guest]:
        created = [
            Guest(
                event_id=event.id,
                name=guest.name,
                email=guest.email,
                whatsapp=guest.whatsapp,
                table_number=guest.table_number
            )
            for guest in guests
        ]
        db.add_all(created)
        db.commit()
        for guest in created:
            db.refresh(guest)
        logger.info(f"Added {len(created)} guests to event {event.id}")
        return created
