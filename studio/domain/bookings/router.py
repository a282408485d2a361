"""Booking router - FastAPI endpoints for bookings"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    BookingCreate,
    BookingDetailResponse,
    BookingDraft,
    BookingListItem,
    BookingPreviewResponse,
)
from .service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.post("/preview", response_model=BookingPreviewResponse)
async def preview_booking(
    data: BookingDraft,
    booking_id: Optional[int] = Query(None, description="Booking being edited, if any"),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Live financial preview for the booking form; nothing is saved"""
    return service.preview_booking(data, current_user, booking_id)


@router.get("", response_model=list[BookingListItem])
async def get_bookings(
    from_date: Optional[str] = Query(None, alias="from", description="YYYY-MM-DD, user's timezone"),
    to_date: Optional[str] = Query(None, alias="to", description="YYYY-MM-DD, user's timezone"),
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Bookings for the calendar, by day range or by month"""
    return service.list_bookings(current_user, from_date, to_date, year, month)


@router.get("/{booking_id}", response_model=BookingDetailResponse)
async def get_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.get_booking_detail(booking_id, current_user)


@router.post("", response_model=BookingDetailResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.create_booking(data, current_user)


@router.put("/{booking_id}", response_model=BookingDetailResponse)
async def update_booking(
    booking_id: int,
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Replace a booking and all of its line items"""
    return service.update_booking(booking_id, data, current_user)


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: int,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.delete_booking(booking_id, current_user)
