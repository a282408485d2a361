import pytest


def booking_payload(catalog, **overrides) -> dict:
    """The studio's reference booking: $80 service, $40 stud, travel, blik, booksy client"""
    payload = {
        "client_id": catalog["client"]["id"],
        "start_time": "2025-03-14T10:00:00",
        "service_items": [{"service_id": catalog["service"]["id"]}],
        "product_items": [{"product_id": catalog["product"]["id"], "qty": 1}],
        "travel_enabled": True,
        "location": "Client's flat",
        "payment_method": "blik",
        "total_paid": 140,
    }
    payload.update(overrides)
    return payload


def test_preview_applies_defaults_and_runs_the_model(api, catalog):
    draft = booking_payload(catalog)

    response = api.post("/bookings/preview", json=draft)

    assert response.status_code == 200
    preview = response.json()
    assert preview["travel_fee"] == 20
    assert preview["tax_enabled"] is True
    assert preview["booksy_fee_enabled"] is True
    # 10:00 in Warsaw is 09:00 UTC, plus a 30 minute service
    assert preview["end_time"] == "2025-03-14T09:30:00Z"

    financials = preview["financials"]
    assert financials["revenue"] == 140
    assert financials["booksy_fee"] == pytest.approx(34.44)
    assert financials["tax_amount"] == pytest.approx(11.9)
    assert financials["total_costs"] == pytest.approx(61.34)
    assert financials["real_profit"] == pytest.approx(78.66)
    assert financials["profits_equal"] is True


def test_preview_accepts_an_empty_draft(api):
    response = api.post("/bookings/preview", json={})

    assert response.status_code == 200
    assert response.json()["financials"]["revenue"] == 0
    assert response.json()["end_time"] is None


def test_preview_marks_overrides(api, catalog):
    draft = booking_payload(
        catalog,
        service_items=[{"service_id": catalog["service"]["id"], "price": 95}],
        product_items=[{"product_id": catalog["product"]["id"], "qty": 2, "price": 35}],
    )

    preview = api.post("/bookings/preview", json=draft).json()

    assert preview["service_items"][0]["is_overridden"] is True
    assert preview["service_items"][0]["base_price"] == 80
    assert preview["product_items"][0]["is_overridden"] is True
    assert preview["product_items"][0]["unit_price"] == 35
    assert preview["financials"]["product_revenue"] == 70


def test_explicit_flags_win_over_defaults(api, catalog):
    draft = booking_payload(catalog, tax_enabled=False, booksy_fee_enabled=False, travel_fee=35)

    preview = api.post("/bookings/preview", json=draft).json()

    assert preview["financials"]["tax_amount"] == 0
    assert preview["financials"]["booksy_fee"] == 0
    assert preview["financials"]["travel_amount"] == 35


def test_saved_booking_reloads_identically(api, catalog):
    created = api.post("/bookings", json=booking_payload(catalog))
    assert created.status_code == 201
    booking = created.json()

    assert booking["start_time"] == "2025-03-14T09:00:00Z"
    assert booking["client"]["name"] == "Anna Nowak"
    assert booking["financials"]["real_profit"] == pytest.approx(78.66)
    assert booking["tax_rate"] == 8.5

    reloaded = api.get(f"/bookings/{booking['id']}").json()
    assert reloaded == booking


def test_update_replaces_every_line_item(api, catalog):
    booking = api.post("/bookings", json=booking_payload(catalog)).json()

    update = booking_payload(
        catalog,
        service_items=[{"service_id": catalog["second_service"]["id"]}],
        product_items=[{"product_id": catalog["second_product"]["id"], "qty": 2, "price": 20}],
        broken_enabled=True,
        broken_items=[{"product_id": catalog["product"]["id"], "qty": 1}],
        travel_enabled=False,
        payment_method="cash",
        booksy_fee_enabled=False,
        total_paid=90,
    )
    response = api.put(f"/bookings/{booking['id']}", json=update)
    assert response.status_code == 200

    detail = api.get(f"/bookings/{booking['id']}").json()
    assert [item["service_id"] for item in detail["service_items"]] == [catalog["second_service"]["id"]]
    assert detail["product_items"] == [
        {
            "product_id": catalog["second_product"]["id"],
            "name": "Silver ring",
            "qty": 2,
            "sale_price": 25,
            "cost": 5,
            "price": 20,
            "unit_price": 20,
            "is_overridden": True,
        }
    ]
    assert len(detail["broken_items"]) == 1
    assert detail["broken_items"][0]["unit_cost"] == 15

    financials = detail["financials"]
    assert financials["revenue"] == 90
    assert financials["total_costs"] == 25
    assert financials["real_profit"] == 65
    assert detail["travel_fee"] == 0
    assert detail["tax_enabled"] is False


def test_model_session_is_free_and_restores_prices(api, catalog):
    payload = booking_payload(
        catalog,
        is_model=True,
        service_items=[{"service_id": catalog["service"]["id"], "price": 200}],
        total_paid=40,
    )
    booking = api.post("/bookings", json=payload).json()

    assert booking["service_items"][0]["price"] == 0
    assert booking["financials"]["service_revenue"] == 0
    assert booking["financials"]["booksy_fee"] == 0

    payload["is_model"] = False
    updated = api.put(f"/bookings/{booking['id']}", json=payload).json()
    assert updated["service_items"][0]["price"] == 80


def test_inline_client_is_created_with_the_booking(api, catalog):
    payload = booking_payload(catalog, client_id=None)
    payload["new_client"] = {"name": "Kasia", "phone": "600 700 800", "source": "instagram"}

    booking = api.post("/bookings", json=payload).json()

    assert booking["client"]["name"] == "Kasia"
    assert booking["booksy_fee_enabled"] is False
    names = [client["name"] for client in api.get("/clients").json()]
    assert "Kasia" in names


@pytest.mark.parametrize(
    "overrides",
    [
        {"service_items": []},
        {"product_items": []},
        {"client_id": None},
        {"product_items": [{"product_id": 1, "qty": 0}]},
        {"total_paid": -5},
        {"payment_method": "paypal"},
    ],
)
def test_invalid_bookings_are_rejected(api, catalog, overrides):
    response = api.post("/bookings", json=booking_payload(catalog, **overrides))
    assert response.status_code == 422


def test_unknown_catalog_items_are_rejected(api, catalog):
    payload = booking_payload(catalog, service_items=[{"service_id": 9999}])
    response = api.post("/bookings", json=payload)

    assert response.status_code == 400
    assert "9999" in response.json()["detail"]
    assert api.get("/bookings").json() == []


def test_list_by_day_range_and_month(api, catalog):
    march = api.post("/bookings", json=booking_payload(catalog)).json()
    api.post("/bookings", json=booking_payload(catalog, start_time="2025-04-02T10:00:00"))

    by_range = api.get("/bookings", params={"from": "2025-03-14", "to": "2025-03-14"}).json()
    assert [b["id"] for b in by_range] == [march["id"]]
    assert by_range[0]["client_name"] == "Anna Nowak"
    assert by_range[0]["services"] == ["Helix"]
    assert by_range[0]["profit"] == pytest.approx(78.66)

    by_month = api.get("/bookings", params={"year": 2025, "month": 3}).json()
    assert [b["id"] for b in by_month] == [march["id"]]

    assert len(api.get("/bookings").json()) == 2
    assert api.get("/bookings", params={"from": "not-a-date", "to": "2025-03-01"}).status_code == 400


def test_after_midnight_booking_lands_on_its_local_day(api, catalog):
    # 00:30 in Warsaw is still the previous day in UTC
    booking = api.post(
        "/bookings", json=booking_payload(catalog, start_time="2025-07-02T00:30:00")
    ).json()
    assert booking["start_time"] == "2025-07-01T22:30:00Z"

    local_day = api.get("/bookings", params={"from": "2025-07-02", "to": "2025-07-02"}).json()
    utc_day = api.get("/bookings", params={"from": "2025-07-01", "to": "2025-07-01"}).json()

    assert [b["id"] for b in local_day] == [booking["id"]]
    assert utc_day == []


def test_delete_booking(api, catalog):
    booking = api.post("/bookings", json=booking_payload(catalog)).json()

    assert api.delete(f"/bookings/{booking['id']}").status_code == 200
    assert api.get(f"/bookings/{booking['id']}").status_code == 404


def test_client_detail_sums_bookings(api, catalog):
    api.post("/bookings", json=booking_payload(catalog))
    api.post("/bookings", json=booking_payload(catalog, start_time="2025-03-20T10:00:00"))

    detail = api.get(f"/clients/{catalog['client']['id']}").json()

    assert detail["summary"]["total_bookings"] == 2
    assert detail["summary"]["total_revenue"] == 280
    assert detail["summary"]["total_profit"] == pytest.approx(157.32)
    # Newest first
    assert detail["bookings"][0]["start_time"].startswith("2025-03-20")


def test_deleting_a_client_keeps_bookings(api, catalog):
    booking = api.post("/bookings", json=booking_payload(catalog)).json()

    assert api.delete(f"/clients/{catalog['client']['id']}").status_code == 200

    detail = api.get(f"/bookings/{booking['id']}").json()
    assert detail["client_id"] is None
    assert detail["client"] is None
    assert detail["financials"]["real_profit"] == pytest.approx(78.66)


def test_catalog_items_in_use_cannot_be_deleted(api, catalog):
    api.post("/bookings", json=booking_payload(catalog))

    assert api.delete(f"/products/{catalog['product']['id']}").status_code == 409
    assert api.delete(f"/services/{catalog['service']['id']}").status_code == 409
    assert api.delete(f"/products/{catalog['second_product']['id']}").status_code == 200


def test_bookings_are_private_to_their_owner(api, catalog, other_owner_id, login):
    booking = api.post("/bookings", json=booking_payload(catalog)).json()

    login(other_owner_id)

    assert api.get("/bookings").json() == []
    assert api.get(f"/bookings/{booking['id']}").status_code == 404
    assert api.delete(f"/bookings/{booking['id']}").status_code == 404
    # Another owner's catalog cannot be booked either
    payload = booking_payload(catalog, client_id=None, new_client={"name": "Intruder"})
    assert api.post("/bookings", json=payload).status_code == 400


def test_catalog_edits_do_not_reprice_saved_bookings(api, catalog):
    booking = api.post(
        "/bookings",
        json=booking_payload(
            catalog,
            broken_enabled=True,
            broken_items=[{"product_id": catalog["second_product"]["id"], "qty": 1}],
        ),
    ).json()
    saved_profit = booking["financials"]["real_profit"]

    api.patch(f"/products/{catalog['product']['id']}", json={"cost": 30, "sale_price": 60})
    api.patch(f"/products/{catalog['second_product']['id']}", json={"cost": 50})

    reloaded = api.get(f"/bookings/{booking['id']}").json()
    assert reloaded["financials"] == booking["financials"]
    assert reloaded["product_items"][0]["sale_price"] == 40
    assert reloaded["product_items"][0]["cost"] == 15
    assert reloaded["broken_items"][0]["catalog_cost"] == 5

    listed = api.get("/bookings").json()
    assert listed[0]["profit"] == pytest.approx(saved_profit)
    client = api.get(f"/clients/{catalog['client']['id']}").json()
    assert client["summary"]["total_profit"] == pytest.approx(saved_profit)
    assert api.get("/dashboard").json()["booking_profit"] == pytest.approx(saved_profit)


def test_resaving_a_booking_picks_up_current_catalog_prices(api, catalog):
    booking = api.post("/bookings", json=booking_payload(catalog)).json()
    api.patch(f"/products/{catalog['product']['id']}", json={"cost": 30})

    updated = api.put(f"/bookings/{booking['id']}", json=booking_payload(catalog)).json()

    assert updated["product_items"][0]["cost"] == 30
    assert updated["financials"]["real_profit"] == pytest.approx(63.66)
    assert api.get("/bookings").json()[0]["profit"] == pytest.approx(63.66)


def test_list_profit_matches_detail(api, catalog):
    api.post("/bookings", json=booking_payload(catalog))
    api.post(
        "/bookings",
        json=booking_payload(
            catalog,
            start_time="2025-03-15T10:00:00",
            product_items=[{"product_id": catalog["second_product"]["id"], "qty": 3, "price": 20}],
            total_paid=110,
        ),
    )

    for row in api.get("/bookings").json():
        detail = api.get(f"/bookings/{row['id']}").json()
        assert row["profit"] == pytest.approx(detail["financials"]["real_profit"])


def test_end_before_start_is_rejected_across_timezones(api, catalog):
    # 10:00 Warsaw is 09:00 UTC, so an end of 08:30 UTC comes first
    payload = booking_payload(catalog, end_time="2025-03-14T08:30:00Z")

    response = api.post("/bookings", json=payload)

    assert response.status_code == 422
    assert api.get("/bookings").json() == []


def test_one_sided_date_range_is_rejected(api, catalog):
    api.post("/bookings", json=booking_payload(catalog))

    assert api.get("/bookings", params={"from": "2025-03-01"}).status_code == 400
    assert api.get("/bookings", params={"to": "2025-03-31"}).status_code == 400
    assert api.get("/dashboard", params={"from": "2025-03-01"}).status_code == 400
