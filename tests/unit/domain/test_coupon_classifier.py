import pytest

from rental_engine.domain.errors import CouponErrorKind
from rental_engine.domain.services.coupon_classifier import classify_coupon_message


@pytest.mark.parametrize(
    "message, expected",
    [
        ("coupons.invalid_code", CouponErrorKind.INVALID),
        ("coupons.expired", CouponErrorKind.EXPIRED),
        ("coupons.phone_not_authorized", CouponErrorKind.PHONE_NOT_AUTHORIZED),
        ("coupons.not_available_for_phone", CouponErrorKind.PHONE_NOT_AUTHORIZED),
        ("coupons.already_used_with_phone", CouponErrorKind.USED),
        ("Usage limit reached", CouponErrorKind.LIMIT_REACHED),
        ("Cuponul a expirat", CouponErrorKind.EXPIRED),
        ("Купон уже использован", CouponErrorKind.USED),
        ("This coupon has EXPIRED", CouponErrorKind.EXPIRED),
        ("Coupon not found", CouponErrorKind.INVALID),
    ],
)
def test_classify_known_messages(message, expected):
    assert classify_coupon_message(message) == expected


@pytest.mark.parametrize("message", [None, "", "Something went wrong"])
def test_unknown_messages_are_generic(message):
    assert classify_coupon_message(message) == CouponErrorKind.GENERIC


def test_custom_keyword_table():
    table = {CouponErrorKind.EXPIRED: ("abgelaufen",)}
    assert classify_coupon_message("Gutschein abgelaufen", table) == CouponErrorKind.EXPIRED
    assert classify_coupon_message("coupons.expired", table) == CouponErrorKind.GENERIC
