"""Servicios de infraestructura."""

from rental_engine.infrastructure.services.clock_impl import ClockImpl

__all__ = [
    "ClockImpl",
]
