"""Interfaces (Puertos) de la capa de aplicación."""

from rental_engine.application.interfaces.availability_gateway import (
    AvailabilityGateway,
    AvailabilityResult,
)
from rental_engine.application.interfaces.booking_gateway import (
    BookingConfirmation,
    BookingGateway,
)
from rental_engine.application.interfaces.clock import Clock, FakeClock
from rental_engine.application.interfaces.coupon_gateway import CouponGateway
from rental_engine.application.interfaces.coupon_store import PendingCouponStore
from rental_engine.application.interfaces.fee_settings_gateway import FeeSettingsGateway
from rental_engine.application.interfaces.reservation_repo import ReservationRepo
from rental_engine.application.interfaces.vehicle_repo import VehicleRepo

__all__ = [
    # Repositories
    "ReservationRepo",
    "VehicleRepo",
    "PendingCouponStore",
    # Gateways
    "AvailabilityGateway",
    "AvailabilityResult",
    "BookingConfirmation",
    "BookingGateway",
    "CouponGateway",
    "FeeSettingsGateway",
    # Utilities
    "Clock",
    "FakeClock",
]
