from datetime import datetime
from types import SimpleNamespace

import pytest

from studio.shared import finance
from studio.shared.finance import (
    BookingInputs,
    BrokenLine,
    ProductLine,
    ServiceLine,
    compute_financials,
)


def studio_example() -> BookingInputs:
    """$80 service, $40 product costing $15, $20 travel, booksy fee and tax, $140 paid"""
    return BookingInputs(
        service_lines=[ServiceLine(price=80, service_id=1)],
        product_lines=[ProductLine(qty=1, sale_price=40, cost=15, product_id=1)],
        travel_enabled=True,
        travel_fee=20,
        booksy_fee_enabled=True,
        tax_enabled=True,
        total_paid=140,
    )


def test_example_booking_figures():
    result = compute_financials(studio_example()).as_dict()

    assert result["revenue"] == 140
    assert result["booksy_fee"] == pytest.approx(34.44)
    assert result["tax_amount"] == pytest.approx(11.90)
    assert result["total_costs"] == pytest.approx(61.34)
    assert result["real_profit"] == pytest.approx(78.66)
    assert result["projected_profit"] == pytest.approx(78.66)
    assert result["profits_equal"] is True


def test_model_session_has_no_service_revenue():
    inputs = studio_example()
    inputs.is_model = True
    inputs.service_lines = [ServiceLine(price=250), ServiceLine(price=120)]

    result = compute_financials(inputs)

    assert result.service_revenue == 0
    assert result.booksy_fee == 0


def test_product_revenue_uses_override_when_present():
    plain = ProductLine(qty=3, sale_price=40, cost=15)
    overridden = ProductLine(qty=3, sale_price=40, cost=15, price_override=30)

    assert finance.product_revenue([plain]) == 120
    assert finance.product_revenue([overridden]) == 90
    # Overrides never touch the purchase cost
    assert finance.product_cost([overridden]) == 45


def test_booksy_fee_only_follows_first_service_line():
    lines = [ServiceLine(price=80), ServiceLine(price=50)]
    changed = [ServiceLine(price=80), ServiceLine(price=500)]

    assert finance.booksy_fee(lines, enabled=True) == pytest.approx(80 * 0.4305)
    assert finance.booksy_fee(changed, enabled=True) == finance.booksy_fee(lines, enabled=True)
    assert finance.booksy_fee(lines, enabled=False) == 0
    assert finance.booksy_fee([], enabled=True) == 0


def test_tax_follows_total_paid_not_revenue():
    inputs = BookingInputs(
        service_lines=[ServiceLine(price=100)],
        tax_enabled=True,
        total_paid=50,
    )

    result = compute_financials(inputs)

    assert result.revenue == 100
    assert result.tax_amount == pytest.approx(4.25)


def test_tax_is_zero_when_disabled_or_unpaid():
    assert finance.tax_amount(200, enabled=False) == 0
    assert finance.tax_amount(None, enabled=True) == 0
    assert finance.tax_amount(0, enabled=True) == 0


def test_broken_loss_prefers_cost_override():
    lines = [BrokenLine(qty=2, cost=15), BrokenLine(qty=1, cost=15, cost_override=4)]
    assert finance.broken_loss(lines) == 34


def test_broken_loss_ignored_when_disabled():
    inputs = BookingInputs(
        broken_lines=[BrokenLine(qty=2, cost=15)],
        broken_enabled=False,
        total_paid=10,
    )
    assert compute_financials(inputs).broken_loss == 0


def test_travel_counts_only_when_enabled():
    inputs = BookingInputs(travel_enabled=False, travel_fee=20)
    assert compute_financials(inputs).travel_amount == 0

    inputs.travel_enabled = True
    assert compute_financials(inputs).revenue == 20


def test_missing_numbers_count_as_zero():
    inputs = BookingInputs(
        service_lines=[ServiceLine(price=None)],
        product_lines=[ProductLine(qty=None, sale_price=None, cost=None)],
        travel_enabled=True,
        travel_fee=None,
        total_paid=None,
    )

    result = compute_financials(inputs)

    assert result.revenue == 0
    assert result.total_costs == 0
    assert result.profits_equal


def test_underpaid_booking_shows_two_profits():
    inputs = studio_example()
    inputs.total_paid = 100

    result = compute_financials(inputs)

    assert result.projected_profit > result.real_profit
    assert not result.profits_equal


def test_apply_model_pricing_zeroes_then_restores():
    lines = [ServiceLine(price=95, service_id=1), ServiceLine(price=50, service_id=2)]
    base_prices = {1: 80, 2: 50}

    free = finance.apply_model_pricing(lines, True, base_prices)
    assert [line.price for line in free] == [0, 0]

    restored = finance.apply_model_pricing(free, False, base_prices)
    assert [line.price for line in restored] == [80, 50]


def test_is_overridden():
    assert not finance.is_overridden(None, 40)
    assert not finance.is_overridden(40.0, 40)
    assert finance.is_overridden(35, 40)


def test_compute_end_time_adds_service_durations():
    start = datetime(2025, 3, 14, 10, 0)
    assert finance.compute_end_time(start, [30, 15]) == datetime(2025, 3, 14, 10, 45)
    assert finance.compute_end_time(start, []) is None


def test_inputs_from_booking_reads_stored_lines():
    # The catalog has moved on since the booking was saved
    product = SimpleNamespace(sale_price=60, cost=30)
    booking = SimpleNamespace(
        service_items=[SimpleNamespace(price=80, service_id=1)],
        product_items=[
            SimpleNamespace(qty=1, price=None, sale_price=40, cost=15, product_id=7, product=product)
        ],
        broken_items=[],
        is_model=False,
        travel_fee=20,
        tax_enabled=True,
        booksy_fee_enabled=True,
        total_paid=140,
    )

    inputs = finance.inputs_from_booking(booking)

    assert inputs.travel_enabled
    assert not inputs.broken_enabled
    assert compute_financials(inputs).as_dict() == compute_financials(studio_example()).as_dict()


def test_inputs_from_booking_falls_back_to_catalog_for_unpriced_lines():
    product = SimpleNamespace(sale_price=40, cost=15)
    booking = SimpleNamespace(
        service_items=[],
        product_items=[SimpleNamespace(qty=2, price=None, sale_price=None, cost=None, product_id=7, product=product)],
        broken_items=[SimpleNamespace(qty=1, cost=None, catalog_cost=None, product_id=7, product=product)],
        is_model=False,
        travel_fee=0,
        tax_enabled=False,
        booksy_fee_enabled=False,
        total_paid=80,
    )

    result = compute_financials(finance.inputs_from_booking(booking))

    assert result.product_revenue == 80
    assert result.product_cost == 30
    assert result.broken_loss == 15


def test_summarize_adds_up_bookings():
    first = compute_financials(studio_example())
    second_inputs = studio_example()
    second_inputs.total_paid = 100
    second = compute_financials(second_inputs)

    summary = finance.summarize([first, second])

    assert summary.booking_count == 2
    assert summary.total_paid == 240
    assert summary.profit == pytest.approx(first.real_profit + second.real_profit)
    assert summary.travel_fees == 40
