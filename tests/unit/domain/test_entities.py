from datetime import date, time
from decimal import Decimal

import pytest

from rental_engine.domain.entities.coupon import CouponValidation, Discount
from rental_engine.domain.entities.fee_settings import WorkingHours
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.entities.vehicle import InsuranceKind, PriceBand, VehicleTariff
from rental_engine.domain.value_objects.date_window import DateWindow
from rental_engine.domain.value_objects.money import round_money, to_decimal


class TestPriceBand:
    def test_parse_closed_band(self):
        band = PriceBand.parse("3-7", "45")
        assert (band.min_days, band.max_days, band.daily_rate) == (3, 7, Decimal("45"))

    def test_parse_open_band(self):
        band = PriceBand.parse("46+", 30)
        assert band.is_open_ended
        assert band.contains(1000)

    @pytest.mark.parametrize(
        "label, rate",
        [("7-3", 40), ("abc", 40), ("0-2", 40), ("1-2", 0), ("1-2", "free"), ("1-2", None)],
    )
    def test_invalid_bands_are_rejected(self, label, rate):
        assert PriceBand.parse(label, rate) is None

    def test_tariff_ignores_unparseable_entries(self):
        tariff = VehicleTariff.from_price_policy({"21-45": 35, "1-2": 50, "bad": 10})
        assert [band.label for band in tariff.bands] == ["1-2", "21-45"]
        assert tariff.band_for(10) is None

    def test_insurance_rate_lookup(self, tariff):
        assert tariff.insurance_rate(InsuranceKind.CASCO) == Decimal("15")
        assert tariff.insurance_rate("casco") == Decimal("15")
        assert tariff.insurance_rate(None) == Decimal("0")


class TestDateWindow:
    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            DateWindow(date(2024, 2, 5), date(2024, 2, 1))

    def test_same_day_window_occupies_the_day(self):
        window = DateWindow(date(2024, 2, 5), date(2024, 2, 5))
        assert window.is_same_day
        assert window.exclusive_end == date(2024, 2, 6)

    def test_back_to_back_windows_do_not_overlap(self):
        first = DateWindow(date(2024, 2, 1), date(2024, 2, 5))
        second = DateWindow(date(2024, 2, 5), date(2024, 2, 7))
        assert not first.overlaps_with(second)
        assert not second.overlaps_with(first)


class TestRentalRequest:
    def test_blank_discount_code_normalizes_to_none(self):
        assert RentalRequest(discount_code="   ").normalized_discount_code is None
        assert RentalRequest(discount_code=" ab1 ").normalized_discount_code == "ab1"

    def test_datetimes_combine_date_and_time(self):
        request = RentalRequest(pickup_date=date(2024, 2, 5), pickup_time=time(9, 30))
        assert request.pickup_datetime.hour == 9
        assert request.return_datetime is None


class TestCoupon:
    def test_percentage_validation_to_discount(self):
        validation = CouponValidation(
            code="SAVE10", phone="+37369", valid=True, discount_percentage=Decimal("10")
        )
        assert validation.to_discount() == Discount(code="SAVE10", rate=Decimal("0.1"))

    def test_percentage_is_capped_at_100(self):
        validation = CouponValidation(
            code="X", phone=None, valid=True, discount_percentage=Decimal("150")
        )
        assert validation.to_discount().rate == Decimal("1")

    def test_free_days_validation_to_discount(self):
        validation = CouponValidation(code="WHEEL", phone=None, valid=True, free_days=2)
        assert validation.to_discount() == Discount(code="WHEEL", free_days=2)

    def test_invalid_validation_has_no_discount(self):
        validation = CouponValidation(
            code="X", phone=None, valid=False, discount_percentage=Decimal("10")
        )
        assert validation.to_discount() is None

    def test_discount_rate_out_of_range(self):
        with pytest.raises(ValueError):
            Discount(code="X", rate=Decimal("1.5"))


def test_working_hours_validation():
    with pytest.raises(ValueError):
        WorkingHours(start=18, end=8)
    assert WorkingHours().is_outside(time(7, 59))
    assert not WorkingHours().is_outside(time(17, 59))


def test_money_helpers():
    assert to_decimal("60") == Decimal("60")
    assert to_decimal(True) is None
    assert to_decimal("nan", Decimal("1")) == Decimal("1")
    assert round_money(Decimal("2.345")) == Decimal("2.35")
