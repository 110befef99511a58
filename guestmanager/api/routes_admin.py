"""
Admin API routes - requires authentication
"""

import secrets
from typing import Optional
from fastapi import APIRouter, Depends, UploadFile, File, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from guestmanager.core.config import settings
from guestmanager.core.db import get_db
from guestmanager.models import Event, Guest, Table
from guestmanager.schemas.event import EventCreate, EventResponse
from guestmanager.schemas.guest import GuestBatchCreate, GuestResponse
from guestmanager.schemas.plan import EventPurchaseCreate, SubscriptionUpsert
from guestmanager.schemas.seating import GuestMove, TableCreate
from guestmanager.services.checkin_service import CheckInService
from guestmanager.services.guest_import_service import GuestImportService
from guestmanager.services.plan_service import PlanService
from guestmanager.services.qr_service import QRService
from guestmanager.services.repositories import EventRepo, GuestRepo, TableRepo
from guestmanager.services.seating_service import SeatingService
from guestmanager.utils.security import verify_admin_token
from guestmanager.utils.responses import (
    success_response,
    error_response,
    plan_denied_response,
    not_found_error,
)

router = APIRouter(dependencies=[Depends(verify_admin_token)])

def get_event_or_404(event_id: int, db: Session) -> Event:
    event = EventRepo.get_by_id(db, event_id)
    if not event:
        raise not_found_error("Event")
    return event

def get_guest_or_404(event_id: int, guest_id: int, db: Session) -> Guest:
    guest = GuestRepo.get(db, event_id, guest_id)
    if not guest:
        raise not_found_error("Guest")
    return guest

# -------- Plans --------

@router.put("/subscriptions")
async def upsert_subscription(
    data: SubscriptionUpsert,
    db: Session = Depends(get_db)
):
    """Set the account-level plan for an organizer"""
    subscription = PlanService.upsert_subscription(data, db)
    return success_response(
        message="Subscription saved",
        data={
            "account_email": subscription.account_email,
            "plan": subscription.plan,
            "promo_code": subscription.promo_code,
            "is_admin": subscription.is_admin,
        }
    )

@router.post("/events/{event_id}/purchases", status_code=201)
async def record_event_purchase(
    event_id: int,
    data: EventPurchaseCreate,
    db: Session = Depends(get_db)
):
    """Record a plan bought for one event"""
    event = get_event_or_404(event_id, db)
    purchase = PlanService.record_purchase(event, data, db)
    return success_response(
        message="Event purchase recorded",
        data={
            "id": purchase.id,
            "event_id": event.id,
            "plan": purchase.plan,
            "payment_status": purchase.payment_status,
            "guest_limit": PlanService.guest_limit_for_event(event, db),
        },
        status_code=201
    )

# -------- Events --------

@router.post("/events")
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db)
):
    """Create a new event if the organizer's plan allows it"""
    decision = PlanService.can_create_event(event_data.organizer_email, db)
    if not decision.allowed:
        return plan_denied_response(decision)

    public_code = secrets.token_urlsafe(8)
    while EventRepo.public_code_taken(db, public_code):
        public_code = secrets.token_urlsafe(8)

    event = Event(
        name=event_data.name,
        date=event_data.date,
        location=event_data.location,
        description=event_data.description,
        organizer_email=event_data.organizer_email,
        public_code=public_code
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    return success_response(
        message="Event created successfully",
        data=EventResponse.model_validate(event).model_dump(mode="json"),
        status_code=201
    )

@router.get("/events/{event_id}")
async def get_event_details(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Get detailed event information"""
    event = get_event_or_404(event_id, db)
    summary = SeatingService.get_seating_summary(event.id, db)
    stats = CheckInService.get_stats(event.id, db)

    return success_response(
        message="Event details retrieved",
        data={
            **EventResponse.model_validate(event).model_dump(mode="json"),
            "total_guests": summary["total_guests"],
            "total_tables": summary["total_tables"],
            "checked_in_count": stats["checked_in"],
            "unassigned_count": summary["unassigned_guests"],
            "guest_limit": PlanService.guest_limit_for_event(event, db),
        }
    )

@router.delete("/events/{event_id}")
async def delete_event(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Delete an event with its tables, guests and purchases"""
    event = get_event_or_404(event_id, db)
    db.delete(event)
    db.commit()

    return success_response(
        message="Event deleted successfully",
        data={"deleted_event_id": event_id}
    )

# -------- Tables --------

@router.post("/events/{event_id}/tables", status_code=201)
async def create_table(
    event_id: int,
    table_data: TableCreate,
    db: Session = Depends(get_db)
):
    """Add a table to an event"""
    event = get_event_or_404(event_id, db)

    if TableRepo.get_by_number(db, event.id, table_data.table_number):
        return error_response(
            message=f"Table {table_data.table_number} already exists",
            error_code="table_exists",
            status_code=409
        )

    table = Table(event_id=event.id, table_number=table_data.table_number, capacity=table_data.capacity)
    db.add(table)
    db.commit()
    db.refresh(table)

    return success_response(
        message="Table created",
        data={"id": table.id, "table_number": table.table_number, "capacity": table.capacity},
        status_code=201
    )

@router.get("/events/{event_id}/tables")
async def list_tables(
    event_id: int,
    include_names: bool = False,
    db: Session = Depends(get_db)
):
    """Tables with their current occupancy"""
    event = get_event_or_404(event_id, db)
    summary = SeatingService.get_seating_summary(event.id, db, include_names=include_names)
    return success_response(message="Tables retrieved", data=summary)

@router.delete("/events/{event_id}/tables/{table_number}")
async def delete_table(
    event_id: int,
    table_number: int,
    db: Session = Depends(get_db)
):
    """Remove a table; its guests become unassigned"""
    event = get_event_or_404(event_id, db)
    table = TableRepo.get_by_number(db, event.id, table_number)
    if not table:
        raise not_found_error("Table")

    unseated = SeatingService.remove_table(event.id, table, db)
    return success_response(
        message="Table deleted",
        data={"table_number": table_number, "unassigned_guests": unseated}
    )

# -------- Guests --------

@router.post("/events/{event_id}/guests", status_code=201)
async def add_guests(
    event_id: int,
    batch: GuestBatchCreate,
    db: Session = Depends(get_db)
):
    """Add guests if the event's effective plan allows the new total"""
    event = get_event_or_404(event_id, db)

    decision = PlanService.can_add_guests(event, len(batch.guests), db)
    if not decision.allowed:
        return plan_denied_response(decision)

    created = GuestImportService.add_guests(event, batch.guests, db)
    return success_response(
        message=f"{len(created)} guests added",
        data=[GuestResponse.model_validate(guest).model_dump(mode="json") for guest in created],
        status_code=201
    )

@router.post("/events/{event_id}/guests/upload")
async def upload_guest_list(
    event_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db)
):
    """Import guests from a CSV or Excel guest list"""
    event = get_event_or_404(event_id, db)

    file_content = await file.read()
    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        return error_response(message="File too large", error_code="file_too_large", status_code=413)

    guests, errors = GuestImportService.parse_upload(file_content, file.filename or "")
    if not guests:
        return error_response(
            message="Guest list validation failed",
            details=errors,
            status_code=422
        )

    decision = PlanService.can_add_guests(event, len(guests), db)
    if not decision.allowed:
        return plan_denied_response(decision)

    created = GuestImportService.add_guests(event, guests, db)
    return success_response(
        message=f"Guest list processed. {len(created)} guests imported.",
        data={
            "processed_count": len(created),
            "errors": errors,
            "filename": file.filename
        }
    )

@router.get("/events/{event_id}/guests")
async def search_guests(
    event_id: int,
    search: Optional[str] = Query(None),
    unassigned_only: bool = False,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Search and list guests for an event"""
    event = get_event_or_404(event_id, db)

    query = db.query(Guest).filter(Guest.event_id == event.id)
    if search:
        query = query.filter(Guest.name.ilike(f"%{search}%"))
    if unassigned_only:
        query = query.filter(Guest.table_number.is_(None))

    total = query.count()
    guests = query.order_by(Guest.id).offset((page - 1) * per_page).limit(per_page).all()

    return success_response(
        message="Guests retrieved successfully",
        data={
            "guests": [GuestResponse.model_validate(guest).model_dump(mode="json") for guest in guests],
            "pagination": {
                "page": page,
                "per_page": per_page,
                "total": total,
                "pages": (total + per_page - 1) // per_page
            }
        }
    )

@router.patch("/events/{event_id}/guests/{guest_id}/table")
async def move_guest(
    event_id: int,
    guest_id: int,
    move: GuestMove,
    db: Session = Depends(get_db)
):
    """Move a guest to another table after checking it has room"""
    event = get_event_or_404(event_id, db)
    guest = get_guest_or_404(event.id, guest_id, db)

    validation = SeatingService.move_guest(event.id, guest, move.table_number, db)
    if not validation.valid:
        return error_response(
            message=validation.message,
            error_code="invalid_assignment",
            status_code=409
        )

    return success_response(
        message=validation.message,
        data=GuestResponse.model_validate(guest).model_dump(mode="json")
    )

@router.get("/events/{event_id}/guests/{guest_id}/qr.png")
async def get_guest_qr_code(
    event_id: int,
    guest_id: int,
    db: Session = Depends(get_db)
):
    """Check-in QR code for one guest"""
    guest = get_guest_or_404(event_id, guest_id, db)
    return Response(
        content=QRService.generate_guest_qr(guest.qr_code),
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=guest_{guest.id}.png"}
    )

# -------- Seating --------

@router.get("/events/{event_id}/seating")
async def get_seating(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Full seating summary including guest names"""
    event = get_event_or_404(event_id, db)
    return success_response(
        message="Seating summary retrieved successfully",
        data=SeatingService.get_seating_summary(event.id, db, include_names=True)
    )

@router.post("/events/{event_id}/seating/distribute")
async def distribute_guests(
    event_id: int,
    count_seated: bool = True,
    db: Session = Depends(get_db)
):
    """Seat unassigned guests automatically, keeping existing assignments"""
    event = get_event_or_404(event_id, db)
    result = SeatingService.auto_distribute(event.id, db, count_seated=count_seated)
    return success_response(
        message=f"{result.assigned_count} guests distributed",
        data=result.model_dump(mode="json")
    )

@router.post("/events/{event_id}/seating/redistribute")
async def redistribute_guests(
    event_id: int,
    db: Session = Depends(get_db)
):
    """Clear every assignment and seat all guests again"""
    event = get_event_or_404(event_id, db)
    result = SeatingService.redistribute(event.id, db)
    return success_response(
        message=f"{result.assigned_count} guests redistributed",
        data=result.model_dump(mode="json")
    )
