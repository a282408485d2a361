"""Booking financial model.

Pure functions deriving revenue, costs and profit from a booking's line
items. Every place that shows or stores money figures for a booking (the
live form preview, the booking detail view, the saved snapshot, client
totals and the dashboard) goes through this module.

    serviceRevenue  = sum of service line prices (0 for model sessions)
    productRevenue  = sum of (price override or sale price) * qty
    productCost     = sum of catalog cost * qty
    brokenLoss      = sum of (cost override or catalog cost) * qty
    booksyFee       = first service line price * BOOKSY_FEE_RATE
    taxAmount       = totalPaid * TAX_RATE_PERCENT / 100
    revenue         = serviceRevenue + productRevenue + travel
    totalCosts      = productCost + booksyFee + brokenLoss + taxAmount
    projectedProfit = revenue - totalCosts
    realProfit      = totalPaid - totalCosts

Tax follows the amount actually paid while the Booksy fee follows the
quoted price of the first service. Both are kept as they are.

Nothing here raises: missing numbers count as zero.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, Optional

from ..config import BOOKSY_FEE_RATE, TAX_RATE_PERCENT

PROFIT_TOLERANCE = 0.01


def _num(value) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _qty(value) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


def round_money(value: float) -> float:
    return round(_num(value), 2)


@dataclass
class ServiceLine:
    price: Optional[float] = None
    service_id: Optional[int] = None


@dataclass
class ProductLine:
    qty: int = 1
    sale_price: Optional[float] = None  # catalog
    cost: Optional[float] = None  # catalog
    price_override: Optional[float] = None
    product_id: Optional[int] = None

    @property
    def unit_price(self) -> float:
        if self.price_override is not None:
            return _num(self.price_override)
        return _num(self.sale_price)


@dataclass
class BrokenLine:
    qty: int = 1
    cost: Optional[float] = None  # catalog
    cost_override: Optional[float] = None
    product_id: Optional[int] = None

    @property
    def unit_cost(self) -> float:
        if self.cost_override is not None:
            return _num(self.cost_override)
        return _num(self.cost)


@dataclass
class BookingInputs:
    service_lines: list[ServiceLine] = field(default_factory=list)
    product_lines: list[ProductLine] = field(default_factory=list)
    broken_lines: list[BrokenLine] = field(default_factory=list)
    is_model: bool = False
    travel_enabled: bool = False
    travel_fee: Optional[float] = None
    tax_enabled: bool = False
    booksy_fee_enabled: bool = False
    broken_enabled: bool = True
    total_paid: Optional[float] = None


@dataclass
class BookingFinancials:
    service_revenue: float = 0.0
    product_revenue: float = 0.0
    product_cost: float = 0.0
    broken_loss: float = 0.0
    travel_amount: float = 0.0
    booksy_fee: float = 0.0
    tax_amount: float = 0.0
    total_paid: float = 0.0
    revenue: float = 0.0
    total_costs: float = 0.0
    projected_profit: float = 0.0
    real_profit: float = 0.0

    @property
    def profits_equal(self) -> bool:
        """Quoted and collected figures collapse into one when within a cent"""
        return abs(self.projected_profit - self.real_profit) < PROFIT_TOLERANCE

    def as_dict(self) -> dict:
        data = {key: round_money(value) for key, value in asdict(self).items()}
        data["profits_equal"] = self.profits_equal
        return data


def service_revenue(lines: Iterable[ServiceLine], is_model: bool = False) -> float:
    if is_model:
        return 0.0
    return sum(_num(line.price) for line in lines)


def product_revenue(lines: Iterable[ProductLine]) -> float:
    return sum(line.unit_price * _qty(line.qty) for line in lines)


def product_cost(lines: Iterable[ProductLine]) -> float:
    # Line-level overrides only change revenue, never the purchase cost
    return sum(_num(line.cost) * _qty(line.qty) for line in lines)


def broken_loss(lines: Iterable[BrokenLine]) -> float:
    return sum(line.unit_cost * _qty(line.qty) for line in lines)


def booksy_fee(lines: list[ServiceLine], enabled: bool, is_model: bool = False) -> float:
    """Referral fee charged on the first service line only, however many there are"""
    if not enabled or not lines or is_model:
        return 0.0
    return _num(lines[0].price) * BOOKSY_FEE_RATE


def tax_amount(total_paid: Optional[float], enabled: bool) -> float:
    paid = _num(total_paid)
    if not enabled or paid <= 0:
        return 0.0
    return paid * TAX_RATE_PERCENT / 100


def compute_financials(inputs: BookingInputs) -> BookingFinancials:
    services = service_revenue(inputs.service_lines, inputs.is_model)
    products = product_revenue(inputs.product_lines)
    cost = product_cost(inputs.product_lines)
    loss = broken_loss(inputs.broken_lines) if inputs.broken_enabled else 0.0
    travel = _num(inputs.travel_fee) if inputs.travel_enabled else 0.0
    fee = booksy_fee(inputs.service_lines, inputs.booksy_fee_enabled, inputs.is_model)
    paid = _num(inputs.total_paid)
    tax = tax_amount(paid, inputs.tax_enabled)

    revenue = services + products + travel
    total_costs = cost + fee + loss + tax

    return BookingFinancials(
        service_revenue=services,
        product_revenue=products,
        product_cost=cost,
        broken_loss=loss,
        travel_amount=travel,
        booksy_fee=fee,
        tax_amount=tax,
        total_paid=paid,
        revenue=revenue,
        total_costs=total_costs,
        projected_profit=revenue - total_costs,
        real_profit=paid - total_costs,
    )


def apply_model_pricing(
    lines: list[ServiceLine], is_model: bool, base_prices: dict[int, float]
) -> list[ServiceLine]:
    """
    Model sessions are free: every service line drops to 0. Switching the
    flag off restores each line to its catalog base price.
    """
    priced = []
    for line in lines:
        if is_model:
            price = 0.0
        elif line.service_id in base_prices:
            price = base_prices[line.service_id]
        else:
            price = line.price
        priced.append(ServiceLine(price=price, service_id=line.service_id))
    return priced


def is_overridden(override: Optional[float], catalog: Optional[float]) -> bool:
    """True when a line carries a value that differs from the catalog default"""
    if override is None:
        return False
    return round_money(override) != round_money(catalog)


def compute_end_time(start: datetime, durations_minutes: Iterable[int]) -> Optional[datetime]:
    total = sum(_qty(minutes) for minutes in durations_minutes)
    if total <= 0:
        return None
    return start + timedelta(minutes=total)


def _saved_or_catalog(saved: Optional[float], product, attr: str) -> Optional[float]:
    """Value captured on the line at save time; rows saved without one fall back to the catalog"""
    if saved is not None:
        return saved
    return getattr(product, attr, None) if product else None


def inputs_from_booking(booking) -> BookingInputs:
    """
    Rebuild model inputs from a stored booking and its joined line items.

    Product prices and costs come from the values stored on each line, so
    later catalog edits do not change the figures of past bookings.
    """
    travel_fee = _num(getattr(booking, "travel_fee", 0))
    return BookingInputs(
        service_lines=[
            ServiceLine(price=item.price, service_id=item.service_id)
            for item in booking.service_items
        ],
        product_lines=[
            ProductLine(
                qty=item.qty,
                sale_price=_saved_or_catalog(item.sale_price, item.product, "sale_price"),
                cost=_saved_or_catalog(item.cost, item.product, "cost"),
                price_override=item.price,
                product_id=item.product_id,
            )
            for item in booking.product_items
        ],
        broken_lines=[
            BrokenLine(
                qty=item.qty,
                cost=_saved_or_catalog(item.catalog_cost, item.product, "cost"),
                cost_override=item.cost,
                product_id=item.product_id,
            )
            for item in booking.broken_items
        ],
        is_model=bool(booking.is_model),
        travel_enabled=travel_fee > 0,
        travel_fee=travel_fee,
        tax_enabled=bool(booking.tax_enabled),
        booksy_fee_enabled=bool(booking.booksy_fee_enabled),
        broken_enabled=bool(booking.broken_items),
        total_paid=booking.total_paid,
    )


@dataclass
class FinancialSummary:
    booking_count: int = 0
    total_paid: float = 0.0
    revenue: float = 0.0
    product_cost: float = 0.0
    travel_fees: float = 0.0
    booksy_fees: float = 0.0
    broken_losses: float = 0.0
    tax: float = 0.0
    total_costs: float = 0.0
    profit: float = 0.0

    def as_dict(self) -> dict:
        data = asdict(self)
        return {
            key: value if key == "booking_count" else round_money(value)
            for key, value in data.items()
        }


def summarize(financials: Iterable[BookingFinancials]) -> FinancialSummary:
    """Aggregate per-booking figures; profit is the realized (paid) profit"""
    summary = FinancialSummary()
    for item in financials:
        summary.booking_count += 1
        summary.total_paid += item.total_paid
        summary.revenue += item.revenue
        summary.product_cost += item.product_cost
        summary.travel_fees += item.travel_amount
        summary.booksy_fees += item.booksy_fee
        summary.broken_losses += item.broken_loss
        summary.tax += item.tax_amount
        summary.total_costs += item.total_costs
        summary.profit += item.real_profit
    return summary
