"""Booking repository - Database operations for bookings and their line items"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from ...models import (
    Booking,
    BookingBrokenItem,
    BookingProductItem,
    BookingServiceItem,
    Client,
)


def _with_items(query):
    return query.options(
        selectinload(Booking.client),
        selectinload(Booking.service_items).selectinload(BookingServiceItem.service),
        selectinload(Booking.product_items).selectinload(BookingProductItem.product),
        selectinload(Booking.broken_items).selectinload(BookingBrokenItem.product),
    )


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int, user_id: int) -> Optional[Booking]:
        """Get a booking with client and line items loaded"""
        query = db.query(Booking).filter(Booking.id == booking_id, Booking.user_id == user_id)
        return _with_items(query).first()

    @staticmethod
    def get_bookings(
        db: Session,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Booking]:
        """Bookings whose start falls inside [start, end] (naive UTC bounds)"""
        query = db.query(Booking).filter(Booking.user_id == user_id)
        if start is not None:
            query = query.filter(Booking.start_time >= start)
        if end is not None:
            query = query.filter(Booking.start_time <= end)
        return _with_items(query).order_by(Booking.start_time.asc()).all()

    @staticmethod
    def add_client(db: Session, user_id: int, **client_data) -> Client:
        """Stage a client created inline from the booking form (no commit)"""
        client = Client(user_id=user_id, **client_data)
        db.add(client)
        db.flush()
        return client

    @staticmethod
    def save_booking(
        db: Session,
        booking: Booking,
        service_items: list[BookingServiceItem],
        product_items: list[BookingProductItem],
        broken_items: list[BookingBrokenItem],
    ) -> Booking:
        """
        Persist a booking together with its line items in one transaction.

        Existing line items are dropped and the given ones inserted, so an
        edit always leaves exactly the submitted lines behind.
        """
        db.add(booking)
        if booking.id is not None:
            for collection in (booking.service_items, booking.product_items, booking.broken_items):
                for item in list(collection):
                    db.delete(item)
            db.flush()
            db.expire(booking, ["service_items", "product_items", "broken_items"])

        booking.service_items = service_items
        booking.product_items = product_items
        booking.broken_items = broken_items

        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def delete_booking(db: Session, booking: Booking) -> None:
        db.delete(booking)
        db.commit()
