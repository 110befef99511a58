"""
Guest-facing API routes
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from guestmanager.core.db import get_db
from guestmanager.schemas.guest import LookupRequest, CheckInRequest
from guestmanager.services.checkin_service import CheckInService
from guestmanager.services.seating_service import SeatingService
from guestmanager.utils.security import rate_limit_check
from guestmanager.utils.responses import success_response, error_response, rate_limit_error

router = APIRouter()

@router.post("/lookup")
async def lookup_guest(
    request: Request,
    lookup_data: LookupRequest,
    db: Session = Depends(get_db)
):
    """Look up a guest's table and table mates"""
    if not rate_limit_check(request):
        raise rate_limit_error()

    seating_info = SeatingService.get_guest_seating_info(
        public_code=lookup_data.public_code,
        guest_name=lookup_data.name,
        db=db
    )

    if not seating_info:
        return error_response(
            message="Guest not found. Please check your name spelling or contact the organizer.",
            status_code=404
        )

    return success_response(
        message="Guest information found",
        data=seating_info.model_dump()
    )

@router.post("/checkin")
async def check_in_guest(
    request: Request,
    checkin_data: CheckInRequest,
    db: Session = Depends(get_db)
):
    """Check in a guest from the code on their QR"""
    if not rate_limit_check(request):
        raise rate_limit_error()

    result = CheckInService.check_in_guest(
        public_code=checkin_data.public_code,
        qr_code=checkin_data.qr_code,
        db=db
    )

    if not result:
        return error_response(
            message="Invalid QR code for this event.",
            error_code="unknown_qr_code",
            status_code=404
        )

    message = "You were already checked in!" if result["was_already_checked_in"] else "Successfully checked in!"

    return success_response(message=message, data=result)

@router.get("/portal")
async def guest_portal(event: str = ""):
    """Entry point the event QR code links to"""
    if not event:
        return error_response(
            message="Event code is required",
            status_code=400
        )

    return success_response(
        message="Guest portal access",
        data={
            "event_code": event,
            "instructions": "Use the lookup endpoint to find your table",
            "lookup_url": "/guest/lookup",
            "checkin_url": "/guest/checkin"
        }
    )
