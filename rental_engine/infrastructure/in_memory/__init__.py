"""Implementaciones in-memory para testing."""

from rental_engine.infrastructure.in_memory.availability_gateway import ResolverAvailabilityGateway
from rental_engine.infrastructure.in_memory.booking_gateway import StubBookingGateway
from rental_engine.infrastructure.in_memory.coupon_gateway import StubCoupon, StubCouponGateway
from rental_engine.infrastructure.in_memory.coupon_store import InMemoryPendingCouponStore
from rental_engine.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from rental_engine.infrastructure.in_memory.vehicle_repo import InMemoryVehicleRepo

__all__ = [
    # Repositories
    "InMemoryReservationRepo",
    "InMemoryVehicleRepo",
    "InMemoryPendingCouponStore",
    # Gateways
    "ResolverAvailabilityGateway",
    "StubBookingGateway",
    "StubCoupon",
    "StubCouponGateway",
]
