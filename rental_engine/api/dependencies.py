from functools import lru_cache

from fastapi import Depends

from rental_engine.application.interfaces.coupon_store import PendingCouponStore
from rental_engine.application.services.coupon_coordinator import (
    CouponValidationCoordinator,
    ErrorNotifier,
)
from rental_engine.application.services.fee_settings_provider import FeeSettingsProvider
from rental_engine.application.use_cases.check_availability import CheckAvailabilityUseCase
from rental_engine.application.use_cases.quote_price import QuotePriceUseCase
from rental_engine.application.use_cases.submit_booking import SubmitBookingUseCase
from rental_engine.config import Settings, get_settings
from rental_engine.domain.entities.fee_settings import FeeSettings, WorkingHours
from rental_engine.infrastructure.gateways.availability_gateway_http import AvailabilityGatewayHTTP
from rental_engine.infrastructure.gateways.booking_gateway_http import BookingGatewayHTTP
from rental_engine.infrastructure.gateways.coupon_gateway_http import CouponGatewayHTTP
from rental_engine.infrastructure.gateways.fee_settings_gateway_http import FeeSettingsGatewayHTTP
from rental_engine.infrastructure.in_memory.availability_gateway import ResolverAvailabilityGateway
from rental_engine.infrastructure.in_memory.booking_gateway import StubBookingGateway
from rental_engine.infrastructure.in_memory.coupon_gateway import StubCouponGateway
from rental_engine.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from rental_engine.infrastructure.in_memory.vehicle_repo import InMemoryVehicleRepo
from rental_engine.infrastructure.services.clock_impl import ClockImpl


def default_fee_settings(settings: Settings) -> FeeSettings:
    return FeeSettings(
        location_fees=dict(settings.location_fees),
        outside_hours_fee=settings.outside_hours_fee,
        working_hours=WorkingHours(
            start=settings.working_hours_start, end=settings.working_hours_end
        ),
    )


@lru_cache(maxsize=1)
def _bundle():
    settings = get_settings()
    defaults = default_fee_settings(settings)
    reservation_repo = InMemoryReservationRepo()

    if settings.use_in_memory:
        vehicle_repo = InMemoryVehicleRepo.with_demo_tariff()
        coupon_gateway = StubCouponGateway()
        availability_gateway = ResolverAvailabilityGateway(reservation_repo)
        booking_gateway = StubBookingGateway(reservation_repo)
        fee_settings = FeeSettingsProvider(defaults)
    else:
        vehicle_repo = InMemoryVehicleRepo()
        base_url = settings.api_base_url
        timeout = settings.http_timeout_seconds
        coupon_gateway = CouponGatewayHTTP(base_url=base_url, timeout_seconds=timeout)
        availability_gateway = AvailabilityGatewayHTTP(base_url=base_url, timeout_seconds=timeout)
        booking_gateway = BookingGatewayHTTP(base_url=base_url)
        fee_settings = FeeSettingsProvider(
            defaults,
            FeeSettingsGatewayHTTP(base_url=base_url, defaults=defaults, timeout_seconds=timeout),
        )

    return {
        "vehicle_repo": vehicle_repo,
        "reservation_repo": reservation_repo,
        "coupon_gateway": coupon_gateway,
        "availability_gateway": availability_gateway,
        "booking_gateway": booking_gateway,
        "fee_settings": fee_settings,
        "clock": ClockImpl(),
    }


def get_fee_settings_provider() -> FeeSettingsProvider:
    return _bundle()["fee_settings"]


def get_use_cases(settings: Settings = Depends(get_settings)):
    bundle = _bundle()
    return {
        "quote_price": QuotePriceUseCase(
            vehicle_repo=bundle["vehicle_repo"],
            fee_settings=bundle["fee_settings"],
            coupon_gateway=bundle["coupon_gateway"],
            fallback_daily_rate=settings.fallback_daily_rate,
            currency_code=settings.currency_code,
        ),
        "check_availability": CheckAvailabilityUseCase(
            reservation_repo=bundle["reservation_repo"],
            clock=bundle["clock"],
        ),
    }


def build_coupon_coordinator(
    store: PendingCouponStore | None = None,
    notifier: ErrorNotifier | None = None,
) -> CouponValidationCoordinator:
    """One coordinator per booking form; never shared between forms."""
    settings = get_settings()
    bundle = _bundle()
    return CouponValidationCoordinator(
        bundle["coupon_gateway"],
        bundle["clock"],
        store=store,
        notifier=notifier,
        debounce_ms=settings.coupon_debounce_ms,
        cooldown_ms=settings.coupon_cooldown_ms,
        settle_ms=settings.coupon_settle_ms,
        error_display_ms=settings.coupon_error_display_ms,
        revalidate_window_ms=settings.coupon_revalidate_window_ms,
    )


def build_submit_booking(coordinator: CouponValidationCoordinator) -> SubmitBookingUseCase:
    settings = get_settings()
    bundle = _bundle()
    return SubmitBookingUseCase(
        availability_gateway=bundle["availability_gateway"],
        booking_gateway=bundle["booking_gateway"],
        coupon_coordinator=coordinator,
        clock=bundle["clock"],
        min_age=settings.min_customer_age,
        max_age=settings.max_customer_age,
    )
