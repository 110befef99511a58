"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from guestmanager.core.db import get_db
from guestmanager.services.guest_import_service import GuestImportService
from guestmanager.services.qr_service import QRService
from guestmanager.services.repositories import EventRepo
from guestmanager.services.seating_service import SeatingService
from guestmanager.utils.security import rate_limit_check
from guestmanager.utils.responses import success_response, rate_limit_error, not_found_error

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/events/{public_code}/qr.png")
async def get_qr_code(
    public_code: str,
    db: Session = Depends(get_db)
):
    """Get QR code image for the event guest portal"""
    if not EventRepo.get_by_public_code(db, public_code):
        raise not_found_error("Event")

    qr_bytes = QRService.generate_event_qr(public_code)

    return Response(
        content=qr_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=qr_{public_code}.png"}
    )

@router.get("/template/guest_list_template.csv")
async def download_guest_list_template():
    """Download the guest list CSV template"""
    return Response(
        content=GuestImportService.create_template(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": "attachment; filename=modelo_convidados.csv"}
    )

@router.get("/events/{public_code}/seating")
async def get_seating_summary(
    public_code: str,
    request: Request,
    db: Session = Depends(get_db)
):
    """Public table occupancy, without guest names"""
    if not rate_limit_check(request):
        raise rate_limit_error()

    event = EventRepo.get_by_public_code(db, public_code)
    if not event:
        raise not_found_error("Event")

    summary = SeatingService.get_seating_summary(event.id, db, include_names=False)

    return success_response(
        message="Seating summary retrieved successfully",
        data={"event_name": event.name, "event_date": event.date.isoformat(), **summary}
    )
