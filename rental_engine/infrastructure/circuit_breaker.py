"""
Circuit Breaker configuration for the rental backend collaborators.

Each remote concern (coupons, availability, bookings, fee settings) gets its
own breaker so a failing bookings endpoint does not stop coupon validation.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately
- HALF_OPEN: Testing if service recovered, limited requests allowed

Business rejections (4xx answers mapped to domain errors) are excluded and
never count as failures.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

from rental_engine.config import get_settings
from rental_engine.domain.errors import CouponError, SubmissionRejected, TransientError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StateChangeLogger(CircuitBreakerListener):
    """Logs circuit breaker state changes for monitoring and alerting."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": old_state.name if old_state else None,
                "new_state": new_state.name,
            },
        )


def build_breaker(name: str) -> CircuitBreaker:
    settings = get_settings()
    return CircuitBreaker(
        fail_max=settings.breaker_fail_max,
        reset_timeout=settings.breaker_reset_timeout_seconds,
        exclude=[CouponError, SubmissionRejected],
        name=f"{name}_circuit_breaker",
        listeners=[StateChangeLogger(name)],
    )


coupon_breaker = build_breaker("coupons")
availability_breaker = build_breaker("availability")
booking_breaker = build_breaker("bookings")
fee_settings_breaker = build_breaker("fee_settings")

ALL_BREAKERS = (coupon_breaker, availability_breaker, booking_breaker, fee_settings_breaker)


async def call_with_breaker(
    breaker: CircuitBreaker,
    operation: str,
    func: Callable[..., Awaitable[T]],
    *args,
    **kwargs,
) -> T:
    """
    Await ``func`` under ``breaker`` protection.

    pybreaker only tracks synchronous callables through ``call()``, so the
    coroutine is awaited inside the ``calling()`` context to let the breaker
    see its outcome. An open circuit surfaces as ``TransientError``.
    """
    try:
        with breaker.calling():
            return await func(*args, **kwargs)
    except CircuitBreakerError as exc:
        logger.error(
            "Circuit breaker is open - service unavailable",
            extra={"operation": operation, "breaker_name": breaker.name},
        )
        raise TransientError(operation, "service temporarily unavailable") from exc


__all__ = [
    "ALL_BREAKERS",
    "CircuitBreakerError",
    "availability_breaker",
    "booking_breaker",
    "build_breaker",
    "call_with_breaker",
    "coupon_breaker",
    "fee_settings_breaker",
]
