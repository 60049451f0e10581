from dataclasses import dataclass
from decimal import Decimal

from rental_engine.application.interfaces.coupon_gateway import CouponGateway
from rental_engine.domain.entities.coupon import CouponValidation


@dataclass(frozen=True)
class StubCoupon:
    discount_percentage: Decimal | None = None
    free_days: int | None = None
    # Redemption codes are bound to the phone that won them
    phone: str | None = None
    # Server message returned when the code is rejected (e.g. "coupons.expired")
    rejection: str | None = None


class StubCouponGateway(CouponGateway):
    def __init__(self, coupons: dict[str, StubCoupon] | None = None) -> None:
        self.coupons = {code.upper(): coupon for code, coupon in (coupons or {}).items()}
        self.calls: list[tuple[str, str | None]] = []

    async def validate(self, code: str, phone: str | None = None) -> CouponValidation:
        self.calls.append((code, phone))
        coupon = self.coupons.get(code.strip().upper())
        if coupon is None:
            return CouponValidation(code=code, phone=phone, valid=False, message="coupons.invalid_code")
        if coupon.rejection:
            return CouponValidation(code=code, phone=phone, valid=False, message=coupon.rejection)
        if coupon.phone is not None and coupon.phone != phone:
            return CouponValidation(
                code=code, phone=phone, valid=False, message="coupons.phone_not_authorized"
            )
        return CouponValidation(
            code=code,
            phone=phone,
            valid=True,
            discount_percentage=coupon.discount_percentage,
            free_days=coupon.free_days,
        )
