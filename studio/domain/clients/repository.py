"""Client repository - Database operations for clients"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from ...models import Booking, BookingBrokenItem, BookingProductItem, Client


class ClientRepository:
    """Repository for client database operations"""

    @staticmethod
    def get_clients(
        db: Session,
        user_id: int,
        search: Optional[str] = None,
        source: Optional[str] = None,
    ) -> list[Client]:
        """Get all clients for a user, optionally filtered"""
        query = db.query(Client).filter(Client.user_id == user_id)

        if search:
            search_term = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(Client.name.ilike(search_term), Client.phone.ilike(search_term))
            )

        if source and source != "all":
            query = query.filter(Client.source == source)

        return query.order_by(Client.name.asc()).all()

    @staticmethod
    def get_client_by_id(db: Session, client_id: int, user_id: int) -> Optional[Client]:
        """Get a specific client by ID"""
        return (
            db.query(Client)
            .filter(Client.id == client_id, Client.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_client(db: Session, user_id: int, **client_data) -> Client:
        """Create a new client"""
        client = Client(user_id=user_id, **client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def update_client(db: Session, client: Client, **updates) -> Client:
        """Update a client with provided fields"""
        for key, value in updates.items():
            if hasattr(client, key):
                setattr(client, key, value)

        db.commit()
        db.refresh(client)
        return client

    @staticmethod
    def delete_client(db: Session, client: Client) -> None:
        """Delete a client; its bookings stay with client_id set to NULL"""
        db.query(Booking).filter(Booking.client_id == client.id).update(
            {Booking.client_id: None}, synchronize_session=False
        )
        db.delete(client)
        db.commit()

    @staticmethod
    def get_client_bookings(db: Session, client_id: int, user_id: int) -> list[Booking]:
        """Bookings of a client with line items loaded, newest first"""
        return (
            db.query(Booking)
            .filter(Booking.client_id == client_id, Booking.user_id == user_id)
            .options(
                selectinload(Booking.service_items),
                selectinload(Booking.product_items).selectinload(BookingProductItem.product),
                selectinload(Booking.broken_items).selectinload(BookingBrokenItem.product),
            )
            .order_by(Booking.start_time.desc())
            .all()
        )
