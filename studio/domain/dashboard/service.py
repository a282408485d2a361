"""
Dashboard service - profitability report over a date range.

Every per-booking number is recomputed with the financial model from the
stored line items, so the dashboard always agrees with the booking detail
view. Operating costs are subtracted from the summed booking profit to get
the net profit.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_COST_CATEGORIES
from ...models import Booking, User
from ...shared import finance
from ...shared.dates import booking_range_filter, parse_calendar_date
from ..additional_costs.repository import AdditionalCostRepository
from ..bookings.repository import BookingRepository
from .schemas import Averages, CostBreakdown, DashboardResponse, TopProduct, TopService

logger = logging.getLogger(__name__)

TOP_LIMIT = 5


def _per_booking(total: float, count: int) -> float:
    return finance.round_money(total / count) if count else 0.0


def top_products(bookings: list[Booking], limit: int = TOP_LIMIT) -> list[TopProduct]:
    """Best sellers by quantity; revenue uses the line override or the sale price"""
    sales: dict[int, dict] = {}
    for booking in bookings:
        for line in finance.inputs_from_booking(booking).product_lines:
            entry = sales.setdefault(line.product_id, {"name": None, "qty": 0, "revenue": 0.0})
            entry["qty"] += line.qty
            entry["revenue"] += line.unit_price * line.qty
        for item in booking.product_items:
            if item.product:
                sales[item.product_id]["name"] = item.product.name

    ranked = sorted(sales.items(), key=lambda pair: (-pair[1]["qty"], -pair[1]["revenue"]))
    return [
        TopProduct(
            product_id=product_id,
            name=entry["name"],
            qty=entry["qty"],
            revenue=finance.round_money(entry["revenue"]),
        )
        for product_id, entry in ranked[:limit]
    ]


def top_services(bookings: list[Booking], limit: int = TOP_LIMIT) -> list[TopService]:
    """Services ranked by the revenue their lines brought in"""
    sales: dict[int, dict] = {}
    for booking in bookings:
        for item in booking.service_items:
            entry = sales.setdefault(
                item.service_id,
                {"name": item.service.name if item.service else None, "count": 0, "revenue": 0.0},
            )
            entry["count"] += 1
            if not booking.is_model:
                entry["revenue"] += item.price or 0

    ranked = sorted(sales.items(), key=lambda pair: (-pair[1]["revenue"], -pair[1]["count"]))
    return [
        TopService(
            service_id=service_id,
            name=entry["name"],
            count=entry["count"],
            revenue=finance.round_money(entry["revenue"]),
        )
        for service_id, entry in ranked[:limit]
    ]


class DashboardService:
    def __init__(self, db: Session):
        self.db = db
        self.booking_repo = BookingRepository()
        self.cost_repo = AdditionalCostRepository()

    def get_dashboard(
        self, user: User, from_date: Optional[str] = None, to_date: Optional[str] = None
    ) -> DashboardResponse:
        try:
            start, end = booking_range_filter(from_date, to_date, user.timezone)
            first_day: Optional[date] = parse_calendar_date(from_date) if start else None
            last_day: Optional[date] = parse_calendar_date(to_date) if end else None
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid date range")

        bookings = self.booking_repo.get_bookings(self.db, user.id, start, end)
        costs = self.cost_repo.get_costs(self.db, user.id, first_day, last_day)

        totals = finance.summarize(
            finance.compute_financials(finance.inputs_from_booking(booking)) for booking in bookings
        )

        by_category = {category: 0.0 for category in DEFAULT_COST_CATEGORIES}
        for cost in costs:
            by_category[cost.type] = by_category.get(cost.type, 0.0) + (cost.amount or 0)
        additional_total = sum(by_category.values())

        net_profit = totals.profit - additional_total
        total_costs = totals.total_costs + additional_total
        count = totals.booking_count

        logger.info(
            f"📊 Dashboard for user_id {user.id}: {count} bookings, {len(costs)} additional costs"
        )

        return DashboardResponse(
            from_date=first_day,
            to_date=last_day,
            total_bookings=count,
            total_revenue=finance.round_money(totals.total_paid),
            booking_profit=finance.round_money(totals.profit),
            net_profit=finance.round_money(net_profit),
            additional_costs_by_category={
                category: finance.round_money(amount) for category, amount in by_category.items()
            },
            costs=CostBreakdown(
                product_cost=finance.round_money(totals.product_cost),
                travel_fees=finance.round_money(totals.travel_fees),
                booksy_fees=finance.round_money(totals.booksy_fees),
                broken_losses=finance.round_money(totals.broken_losses),
                tax=finance.round_money(totals.tax),
                additional_costs=finance.round_money(additional_total),
                total_costs=finance.round_money(total_costs),
            ),
            averages=Averages(
                revenue_per_booking=_per_booking(totals.total_paid, count),
                profit_per_booking=_per_booking(net_profit, count),
                cost_per_booking=_per_booking(total_costs, count),
            ),
            top_products=top_products(bookings),
            top_services=top_services(bookings),
        )
