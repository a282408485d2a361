"""Client service - Business logic for client operations"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Client, User
from ...shared import finance
from .repository import ClientRepository
from .schemas import ClientBookingRow, ClientCreate, ClientDetailResponse, ClientSummary, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository()

    def get_clients(
        self, user: User, search: Optional[str] = None, source: Optional[str] = None
    ) -> list[Client]:
        """Get all clients for a user"""
        return self.repo.get_clients(self.db, user.id, search, source)

    def get_client(self, client_id: int, user: User) -> Client:
        """Get a specific client"""
        client = self.repo.get_client_by_id(self.db, client_id, user.id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def create_client(self, data: ClientCreate, user: User) -> Client:
        """Create a new client"""
        logger.info(f"📥 Creating client for user_id: {user.id}")
        return self.repo.create_client(self.db, user.id, **data.model_dump())

    def update_client(self, client_id: int, data: ClientUpdate, user: User) -> Client:
        """Update a client"""
        client = self.get_client(client_id, user)
        return self.repo.update_client(self.db, client, **data.model_dump(exclude_unset=True))

    def delete_client(self, client_id: int, user: User) -> dict:
        """Delete a client"""
        client = self.get_client(client_id, user)
        self.repo.delete_client(self.db, client)
        logger.info(f"🗑️ User {user.id} deleted client {client_id}")
        return {"message": "Client deleted"}

    def get_client_detail(self, client_id: int, user: User) -> ClientDetailResponse:
        """Client record with booking history and lifetime totals"""
        client = self.get_client(client_id, user)
        bookings = self.repo.get_client_bookings(self.db, client.id, user.id)

        rows = []
        figures = []
        for booking in bookings:
            result = finance.compute_financials(finance.inputs_from_booking(booking))
            figures.append(result)
            rows.append(
                ClientBookingRow(
                    id=booking.id,
                    start_time=booking.start_time,
                    end_time=booking.end_time,
                    payment_method=booking.payment_method,
                    total_paid=finance.round_money(result.total_paid),
                    profit=finance.round_money(result.real_profit),
                )
            )

        totals = finance.summarize(figures)
        return ClientDetailResponse(
            id=client.id,
            name=client.name,
            phone=client.phone,
            source=client.source,
            notes=client.notes,
            created_at=client.created_at,
            bookings=rows,
            summary=ClientSummary(
                total_bookings=totals.booking_count,
                total_revenue=finance.round_money(totals.total_paid),
                total_profit=finance.round_money(totals.profit),
            ),
        )
