from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from rental_engine.domain.entities.coupon import Discount
from rental_engine.domain.entities.price_breakdown import NotComputable, PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.entities.vehicle import VehicleTariff
from rental_engine.domain.services.pricing import (
    FALLBACK_DAILY_RATE,
    compute_discount,
    compute_price,
    daily_rate_for,
    rental_days,
    verify_breakdown,
)


def _request(base: RentalRequest, days: int, **changes) -> RentalRequest:
    pickup = base.pickup_date
    return replace(base, return_date=date.fromordinal(pickup.toordinal() + days), **changes)


# === Días facturables ===


def test_rental_days_two_full_days():
    assert rental_days(datetime(2024, 1, 10, 0, 0), datetime(2024, 1, 12, 0, 0)) == 2


def test_rental_days_same_date_counts_one_day():
    assert rental_days(datetime(2024, 1, 10, 9, 0), datetime(2024, 1, 10, 17, 0)) == 1


def test_rental_days_partial_day_rounds_up():
    assert rental_days(datetime(2024, 1, 10, 10, 0), datetime(2024, 1, 12, 10, 1)) == 3


def test_rental_days_overnight_short_rental_is_one_day():
    assert rental_days(datetime(2024, 1, 10, 22, 0), datetime(2024, 1, 11, 6, 0)) == 1


# === Bandas de precio ===


@pytest.mark.parametrize("days", range(1, 61))
def test_exactly_one_band_applies(tariff: VehicleTariff, days: int):
    matching = [band for band in tariff.bands if band.contains(days)]
    assert len(matching) == 1
    assert tariff.band_for(days) is matching[0]


@pytest.mark.parametrize(
    "days, expected_rate",
    [(1, "50"), (2, "50"), (3, "45"), (7, "45"), (8, "40"), (45, "35"), (46, "30"), (400, "30")],
)
def test_daily_rate_by_band(tariff: VehicleTariff, days: int, expected_rate: str):
    assert daily_rate_for(tariff, days) == Decimal(expected_rate)


def test_open_ended_band_applies_past_every_closed_band():
    gapped = VehicleTariff.from_price_policy({"1-2": 50, "3-7": 45, "46+": 30})

    assert daily_rate_for(gapped, 10) == Decimal("30")
    assert gapped.band_for(10).label == "46+"
    assert daily_rate_for(gapped, 5) == Decimal("45")


def test_gap_without_open_ended_band_uses_fallback():
    gapped = VehicleTariff.from_price_policy({"1-2": 50, "10-20": 40})

    assert daily_rate_for(gapped, 5) == FALLBACK_DAILY_RATE


def test_base_price_scales_linearly_within_band(tariff, fee_settings, rental_request):
    prices = [
        compute_price(_request(rental_request, days), tariff, fee_settings).base_price
        for days in (3, 4, 5, 6, 7)
    ]
    assert prices == [Decimal("45") * days for days in (3, 4, 5, 6, 7)]


def test_fallback_rate_when_no_band_applies(fee_settings, rental_request):
    breakdown = compute_price(rental_request, VehicleTariff(), fee_settings)
    assert breakdown.per_day_rate == FALLBACK_DAILY_RATE
    assert breakdown.base_price == Decimal("120.00")


# === Cargos ===


def test_location_fee_charged_on_pickup_only(tariff, fee_settings, rental_request):
    airport_pickup = compute_price(
        replace(rental_request, pickup_location="Chisinau Airport"), tariff, fee_settings
    )
    airport_dropoff = compute_price(
        replace(rental_request, dropoff_location="Iasi Airport"), tariff, fee_settings
    )

    assert airport_pickup.location_fee == Decimal("50.00")
    assert airport_dropoff.location_fee == Decimal("0.00")


def test_unknown_location_has_no_fee(tariff, fee_settings, rental_request):
    breakdown = compute_price(replace(rental_request, pickup_location="Bucharest"), tariff, fee_settings)
    assert breakdown.location_fee == Decimal("0.00")


def test_outside_hours_both_ends(tariff, fee_settings, rental_request):
    request = replace(rental_request, pickup_time=time(7, 0), return_time=time(19, 0))
    breakdown = compute_price(request, tariff, fee_settings)
    assert breakdown.outside_hours_fee == Decimal("40.00")


def test_inside_hours_no_surcharge(tariff, fee_settings, rental_request):
    request = replace(rental_request, pickup_time=time(9, 0), return_time=time(17, 0))
    breakdown = compute_price(request, tariff, fee_settings)
    assert breakdown.outside_hours_fee == Decimal("0.00")


def test_working_hours_boundaries(tariff, fee_settings, rental_request):
    # 08:00 está dentro, 18:00 ya está fuera
    request = replace(rental_request, pickup_time=time(8, 0), return_time=time(18, 0))
    breakdown = compute_price(request, tariff, fee_settings)
    assert breakdown.outside_hours_fee == Decimal("20.00")


def test_insurance_cost_per_day(tariff, fee_settings, rental_request):
    breakdown = compute_price(replace(rental_request, insurance_kind="Casco"), tariff, fee_settings)
    assert breakdown.insurance_cost == Decimal("30.00")
    assert any(item.key == "insurance" for item in breakdown.line_items)


def test_unknown_insurance_costs_nothing(tariff, fee_settings, rental_request):
    breakdown = compute_price(replace(rental_request, insurance_kind="Platinum"), tariff, fee_settings)
    assert breakdown.insurance_cost == Decimal("0.00")


# === Descuentos ===


def test_percentage_discount_on_subtotal_200(tariff, fee_settings, rental_request):
    # 2 días a 50 + aeropuerto 50 + Casco 30 + devolución fuera de horario 20 = 200
    request = replace(
        rental_request,
        pickup_location="Chisinau Airport",
        insurance_kind="Casco",
        pickup_time=time(8, 0),
        return_time=time(7, 30),
        discount_code="SAVE10",
    )
    breakdown = compute_price(request, tariff, fee_settings, Discount.percentage("SAVE10", 10))

    assert breakdown.subtotal == Decimal("200.00")
    assert breakdown.discount_amount == Decimal("20.00")
    assert breakdown.final_price == Decimal("180.00")
    assert breakdown.discount_code == "SAVE10"


def test_zero_subtotal_never_goes_negative(fee_settings, rental_request):
    request = replace(rental_request, discount_code="ALL")
    breakdown = compute_price(
        request,
        VehicleTariff(),
        fee_settings,
        Discount(code="ALL", rate=Decimal("1")),
        fallback_daily_rate=Decimal("0"),
    )
    assert breakdown.subtotal == Decimal("0")
    assert breakdown.final_price == Decimal("0")


def test_discount_for_other_code_is_ignored(tariff, fee_settings, rental_request):
    request = replace(rental_request, discount_code="OTHER")
    breakdown = compute_price(request, tariff, fee_settings, Discount.percentage("SAVE10", 10))
    assert breakdown.discount_amount == Decimal("0")
    assert breakdown.discount_code is None


def test_discount_code_match_is_case_insensitive(tariff, fee_settings, rental_request):
    request = replace(rental_request, discount_code=" save10 ")
    breakdown = compute_price(request, tariff, fee_settings, Discount.percentage("SAVE10", 10))
    assert breakdown.discount_amount == Decimal("10.00")


def test_free_days_discount_capped_by_rental_length():
    discount = Discount(code="WHEEL", free_days=5)
    assert compute_discount(discount, Decimal("100"), Decimal("50"), 2) == Decimal("100.00")
    assert compute_discount(discount, Decimal("300"), Decimal("50"), 6) == Decimal("250.00")


def test_discount_rounds_half_up_to_cents():
    discount = Discount.percentage("X", Decimal("12.5"))
    assert compute_discount(discount, Decimal("0.20"), Decimal("0"), 1) == Decimal("0.03")


# === Entradas incompletas y determinismo ===


def test_missing_fields_return_sentinel(tariff, fee_settings):
    result = compute_price(RentalRequest(vehicle_id="car-1", pickup_date=date(2024, 1, 10)), tariff, fee_settings)

    assert isinstance(result, NotComputable)
    assert not result
    assert result.missing == ("pickup_time", "return_date", "return_time")


def test_compute_price_is_idempotent(tariff, fee_settings, rental_request):
    request = replace(rental_request, discount_code="SAVE10", insurance_kind="Casco")
    discount = Discount.percentage("SAVE10", 10)

    first = compute_price(request, tariff, fee_settings, discount)
    second = compute_price(request, tariff, fee_settings, discount)

    assert first == second
    assert verify_breakdown(first, second) == []


def test_verify_breakdown_reports_tampered_fields(tariff, fee_settings, rental_request):
    recomputed = compute_price(rental_request, tariff, fee_settings)
    submitted = replace(recomputed, final_price=Decimal("1.00"), days=1)

    assert verify_breakdown(submitted, recomputed) == ["days", "final_price"]


def test_breakdown_to_dict_serializes_amounts_as_text(tariff, fee_settings, rental_request):
    data = compute_price(rental_request, tariff, fee_settings).to_dict()

    assert data["final_price"] == "100.00"
    assert data["currency_code"] == "EUR"
    assert isinstance(compute_price(rental_request, tariff, fee_settings), PriceBreakdown)
    assert [item["key"] for item in data["line_items"]][:2] == ["base_price", "location_fee"]
