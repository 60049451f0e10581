"""
Capa de Infraestructura - Motor de precios y reservas.

Esta capa contiene las implementaciones concretas de los puertos (interfaces).

Estructura:
- gateways/: Adaptadores HTTP (httpx) para cupones, disponibilidad, reservas y tarifas
- in_memory/: Implementaciones in-memory para desarrollo y testing
- services/: Servicios de infraestructura (Clock)
- circuit_breaker.py: Circuit breakers (pybreaker) por colaborador remoto
"""

# Gateways
from rental_engine.infrastructure.gateways.availability_gateway_http import AvailabilityGatewayHTTP
from rental_engine.infrastructure.gateways.booking_gateway_http import BookingGatewayHTTP
from rental_engine.infrastructure.gateways.coupon_gateway_http import CouponGatewayHTTP
from rental_engine.infrastructure.gateways.fee_settings_gateway_http import FeeSettingsGatewayHTTP

# In-Memory
from rental_engine.infrastructure.in_memory import (
    InMemoryPendingCouponStore,
    InMemoryReservationRepo,
    InMemoryVehicleRepo,
    ResolverAvailabilityGateway,
    StubBookingGateway,
    StubCoupon,
    StubCouponGateway,
)

# Services
from rental_engine.infrastructure.services.clock_impl import ClockImpl

__all__ = [
    # Gateways
    "AvailabilityGatewayHTTP",
    "BookingGatewayHTTP",
    "CouponGatewayHTTP",
    "FeeSettingsGatewayHTTP",
    # In-Memory Implementations
    "InMemoryPendingCouponStore",
    "InMemoryReservationRepo",
    "InMemoryVehicleRepo",
    "ResolverAvailabilityGateway",
    "StubBookingGateway",
    "StubCoupon",
    "StubCouponGateway",
    # Services
    "ClockImpl",
]
