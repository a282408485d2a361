"""Booking service - Business logic for bookings"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...config import DEFAULT_TRAVEL_FEE, TAX_RATE_PERCENT
from ...models import (
    Booking,
    BookingBrokenItem,
    BookingProductItem,
    BookingServiceItem,
    Client,
    Product,
    Service,
    User,
)
from ...shared import finance
from ...shared.dates import booking_range_filter, month_bounds, to_utc_naive
from ..clients.repository import ClientRepository
from ..clients.schemas import ClientResponse
from ..products.repository import ProductRepository
from ..services.repository import ServiceRepository
from .repository import BookingRepository
from .schemas import (
    BookingCreate,
    BookingDetailResponse,
    BookingDraft,
    BookingListItem,
    BookingPreviewResponse,
)

logger = logging.getLogger(__name__)


def _line_rows(
    inputs: finance.BookingInputs,
    services: dict[int, Service],
    products: dict[int, Product],
) -> dict:
    """Typed line items with catalog values and override markers"""
    service_rows = []
    for line in inputs.service_lines:
        service = services.get(line.service_id)
        base_price = service.base_price if service else None
        service_rows.append(
            {
                "service_id": line.service_id,
                "name": service.name if service else None,
                "duration_minutes": service.duration_minutes if service else None,
                "base_price": base_price,
                "price": finance.round_money(line.price),
                "is_overridden": not inputs.is_model and finance.is_overridden(line.price, base_price),
            }
        )

    product_rows = []
    for line in inputs.product_lines:
        product = products.get(line.product_id)
        product_rows.append(
            {
                "product_id": line.product_id,
                "name": product.name if product else None,
                "qty": line.qty,
                "sale_price": line.sale_price,
                "cost": line.cost,
                "price": line.price_override,
                "unit_price": finance.round_money(line.unit_price),
                "is_overridden": finance.is_overridden(line.price_override, line.sale_price),
            }
        )

    broken_rows = []
    for line in inputs.broken_lines:
        product = products.get(line.product_id)
        broken_rows.append(
            {
                "product_id": line.product_id,
                "name": product.name if product else None,
                "qty": line.qty,
                "catalog_cost": line.cost,
                "cost": line.cost_override,
                "unit_cost": finance.round_money(line.unit_cost),
                "is_overridden": finance.is_overridden(line.cost_override, line.cost),
            }
        )

    return {
        "service_items": service_rows,
        "product_items": product_rows,
        "broken_items": broken_rows,
    }


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()
        self.client_repo = ClientRepository()
        self.product_repo = ProductRepository()
        self.service_repo = ServiceRepository()

    # ------------------------------------------------------------------
    # Input resolution
    # ------------------------------------------------------------------

    def _get_client(self, client_id: int, user: User) -> Client:
        client = self.client_repo.get_client_by_id(self.db, client_id, user.id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
        return client

    def _load_catalog(
        self, draft: BookingDraft, user: User
    ) -> tuple[dict[int, Service], dict[int, Product]]:
        """Look up every referenced service and product; all must belong to the user"""
        service_ids = [item.service_id for item in draft.service_items]
        product_ids = [item.product_id for item in draft.product_items]
        product_ids += [item.product_id for item in draft.broken_items]

        services = self.service_repo.get_services_by_ids(self.db, service_ids, user.id)
        products = self.product_repo.get_products_by_ids(self.db, product_ids, user.id)

        missing_services = sorted(set(service_ids) - set(services))
        if missing_services:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown service id(s): {', '.join(str(i) for i in missing_services)}",
            )
        missing_products = sorted(set(product_ids) - set(products))
        if missing_products:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown product id(s): {', '.join(str(i) for i in missing_products)}",
            )
        return services, products

    def _build_inputs(
        self,
        draft: BookingDraft,
        services: dict[int, Service],
        products: dict[int, Product],
        client_source: Optional[str],
        was_model: bool = False,
    ) -> finance.BookingInputs:
        """
        Turn form input into financial model input.

        Service lines without a price take the catalog base price. Model
        sessions drop every service line to 0, and switching a stored model
        booking back to paid restores the catalog base prices.
        """
        base_prices = {service_id: service.base_price for service_id, service in services.items()}
        service_lines = [
            finance.ServiceLine(
                price=item.price if item.price is not None else base_prices[item.service_id],
                service_id=item.service_id,
            )
            for item in draft.service_items
        ]
        if draft.is_model or was_model:
            service_lines = finance.apply_model_pricing(service_lines, draft.is_model, base_prices)

        product_lines = [
            finance.ProductLine(
                qty=item.qty,
                sale_price=products[item.product_id].sale_price,
                cost=products[item.product_id].cost,
                price_override=item.price,
                product_id=item.product_id,
            )
            for item in draft.product_items
        ]
        broken_lines = []
        if draft.broken_enabled:
            broken_lines = [
                finance.BrokenLine(
                    qty=item.qty,
                    cost=products[item.product_id].cost,
                    cost_override=item.cost,
                    product_id=item.product_id,
                )
                for item in draft.broken_items
            ]

        travel_fee = 0.0
        if draft.travel_enabled:
            travel_fee = draft.travel_fee if draft.travel_fee is not None else DEFAULT_TRAVEL_FEE

        tax_enabled = draft.tax_enabled
        if tax_enabled is None:
            tax_enabled = draft.payment_method == "blik"

        booksy_fee_enabled = draft.booksy_fee_enabled
        if booksy_fee_enabled is None:
            booksy_fee_enabled = client_source == "booksy"

        return finance.BookingInputs(
            service_lines=service_lines,
            product_lines=product_lines,
            broken_lines=broken_lines,
            is_model=draft.is_model,
            travel_enabled=draft.travel_enabled,
            travel_fee=travel_fee,
            tax_enabled=tax_enabled,
            booksy_fee_enabled=booksy_fee_enabled,
            broken_enabled=draft.broken_enabled,
            total_paid=draft.total_paid,
        )

    def _resolve_times(
        self, draft: BookingDraft, services: dict[int, Service], user: User
    ) -> tuple[Optional[datetime], Optional[datetime]]:
        start = to_utc_naive(draft.start_time, user.timezone)
        if draft.end_time is not None:
            end = to_utc_naive(draft.end_time, user.timezone)
            if start is not None and end < start:
                raise HTTPException(status_code=422, detail="End time cannot be before start time")
            return start, end
        if start is None:
            return None, None
        durations = [services[item.service_id].duration_minutes for item in draft.service_items]
        return start, finance.compute_end_time(start, durations)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def preview_booking(
        self, draft: BookingDraft, user: User, booking_id: Optional[int] = None
    ) -> BookingPreviewResponse:
        """Run the financial model on an unsaved draft, optionally an edit of booking_id"""
        services, products = self._load_catalog(draft, user)

        client_source = None
        if draft.new_client is not None:
            client_source = draft.new_client.source
        elif draft.client_id is not None:
            client_source = self._get_client(draft.client_id, user).source

        was_model = False
        if booking_id is not None:
            existing = self.get_booking(booking_id, user)
            was_model = bool(existing.is_model)

        inputs = self._build_inputs(draft, services, products, client_source, was_model)
        result = finance.compute_financials(inputs)
        _, end = self._resolve_times(draft, services, user)

        return BookingPreviewResponse(
            **_line_rows(inputs, services, products),
            end_time=end,
            travel_fee=finance.round_money(result.travel_amount),
            tax_enabled=inputs.tax_enabled,
            booksy_fee_enabled=inputs.booksy_fee_enabled,
            financials=result.as_dict(),
        )

    def get_booking(self, booking_id: int, user: User) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id, user.id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def get_booking_detail(self, booking_id: int, user: User) -> BookingDetailResponse:
        """Stored booking with financials recomputed from its line items"""
        booking = self.get_booking(booking_id, user)
        return self._detail(booking)

    def _detail(self, booking: Booking) -> BookingDetailResponse:
        inputs = finance.inputs_from_booking(booking)
        result = finance.compute_financials(inputs)

        services = {item.service_id: item.service for item in booking.service_items if item.service}
        products = {item.product_id: item.product for item in booking.product_items if item.product}
        products.update(
            {item.product_id: item.product for item in booking.broken_items if item.product}
        )

        return BookingDetailResponse(
            id=booking.id,
            client_id=booking.client_id,
            client=ClientResponse.model_validate(booking.client) if booking.client else None,
            start_time=booking.start_time,
            end_time=booking.end_time,
            is_model=booking.is_model,
            travel_fee=booking.travel_fee or 0,
            location=booking.location,
            payment_method=booking.payment_method,
            total_paid=booking.total_paid or 0,
            tax_enabled=booking.tax_enabled,
            tax_rate=booking.tax_rate,
            booksy_fee_enabled=booking.booksy_fee_enabled,
            notes=booking.notes,
            **_line_rows(inputs, services, products),
            financials=result.as_dict(),
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )

    def list_bookings(
        self,
        user: User,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> list[BookingListItem]:
        """Calendar listing; from/to days win over a year/month pair"""
        try:
            start, end = booking_range_filter(from_date, to_date, user.timezone)
            if start is None and year is not None and month is not None:
                start, end = month_bounds(year, month, user.timezone)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid date range")

        bookings = self.repo.get_bookings(self.db, user.id, start, end)
        return [
            BookingListItem(
                id=booking.id,
                start_time=booking.start_time,
                end_time=booking.end_time,
                client_id=booking.client_id,
                client_name=booking.client.name if booking.client else None,
                services=[item.service.name for item in booking.service_items if item.service],
                is_model=booking.is_model,
                payment_method=booking.payment_method,
                total_paid=booking.total_paid or 0,
                profit=booking.profit,
            )
            for booking in bookings
        ]

    def create_booking(self, data: BookingCreate, user: User) -> BookingDetailResponse:
        logger.info(f"📅 Creating booking for user_id: {user.id}")
        booking = self._save(data, user, None)
        logger.info(f"✅ Booking {booking.id} saved (profit {booking.profit})")
        return self._detail(booking)

    def update_booking(self, booking_id: int, data: BookingCreate, user: User) -> BookingDetailResponse:
        existing = self.get_booking(booking_id, user)
        booking = self._save(data, user, existing)
        logger.info(f"✏️ Booking {booking.id} updated by user_id: {user.id}")
        return self._detail(booking)

    def _save(self, data: BookingCreate, user: User, booking: Optional[Booking]) -> Booking:
        services, products = self._load_catalog(data, user)

        client = None
        if data.client_id is not None:
            client = self._get_client(data.client_id, user)
        client_source = client.source if client else data.new_client.source

        was_model = bool(booking.is_model) if booking is not None else False
        inputs = self._build_inputs(data, services, products, client_source, was_model)
        result = finance.compute_financials(inputs)
        start, end = self._resolve_times(data, services, user)

        try:
            if client is None:
                client = self.repo.add_client(self.db, user.id, **data.new_client.model_dump())
                logger.info(f"📥 Client {client.id} created from booking form")

            if booking is None:
                booking = Booking(user_id=user.id)

            booking.client_id = client.id
            booking.start_time = start
            booking.end_time = end
            booking.is_model = inputs.is_model
            booking.location = data.location
            booking.payment_method = data.payment_method
            booking.tax_enabled = inputs.tax_enabled
            booking.tax_rate = TAX_RATE_PERCENT
            booking.booksy_fee_enabled = inputs.booksy_fee_enabled
            booking.notes = data.notes

            booking.travel_fee = finance.round_money(result.travel_amount)
            booking.total_paid = finance.round_money(result.total_paid)
            booking.service_price = finance.round_money(result.service_revenue)
            booking.product_revenue = finance.round_money(result.product_revenue)
            booking.product_cost = finance.round_money(result.product_cost)
            booking.booksy_fee = finance.round_money(result.booksy_fee)
            booking.broken_product_loss = finance.round_money(result.broken_loss)
            booking.tax_amount = finance.round_money(result.tax_amount)
            booking.profit = finance.round_money(result.real_profit)

            saved = self.repo.save_booking(
                self.db,
                booking,
                service_items=[
                    BookingServiceItem(service_id=line.service_id, price=finance.round_money(line.price))
                    for line in inputs.service_lines
                ],
                product_items=[
                    BookingProductItem(
                        product_id=line.product_id,
                        qty=line.qty,
                        price=line.price_override,
                        sale_price=line.sale_price,
                        cost=line.cost,
                    )
                    for line in inputs.product_lines
                ],
                broken_items=[
                    BookingBrokenItem(
                        product_id=line.product_id,
                        qty=line.qty,
                        cost=line.cost_override,
                        catalog_cost=line.cost,
                    )
                    for line in inputs.broken_lines
                ],
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to save booking for user_id {user.id}: {e}")
            reason = getattr(e, "orig", None) or e
            raise HTTPException(status_code=500, detail=f"Failed to save booking: {reason}")

        return self.get_booking(saved.id, user)

    def delete_booking(self, booking_id: int, user: User) -> dict:
        booking = self.get_booking(booking_id, user)
        self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ User {user.id} deleted booking {booking_id}")
        return {"message": "Booking deleted"}
