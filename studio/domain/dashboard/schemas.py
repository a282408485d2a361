"""Dashboard schemas"""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class CostBreakdown(BaseModel):
    """
    Costs over the range.

    travel_fees is shown for reference only. Travel is paid by the client and
    counted as revenue, so total_costs (booking costs plus additional costs)
    does not include it.
    """

    product_cost: float
    travel_fees: float
    booksy_fees: float
    broken_losses: float
    tax: float
    additional_costs: float
    total_costs: float


class Averages(BaseModel):
    revenue_per_booking: float
    profit_per_booking: float
    cost_per_booking: float


class TopProduct(BaseModel):
    product_id: int
    name: Optional[str] = None
    qty: int
    revenue: float


class TopService(BaseModel):
    service_id: int
    name: Optional[str] = None
    count: int
    revenue: float


class DashboardResponse(BaseModel):
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    total_bookings: int
    total_revenue: float
    booking_profit: float
    net_profit: float
    additional_costs_by_category: dict[str, float]
    costs: CostBreakdown
    averages: Averages
    top_products: list[TopProduct]
    top_services: list[TopService]
