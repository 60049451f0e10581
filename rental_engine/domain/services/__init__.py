"""Servicios de dominio puros: precios, disponibilidad y clasificación de cupones."""

from rental_engine.domain.services.availability import (
    AvailabilityStatus,
    booked_date_ranges,
    check_window_availability,
    resolve_current_availability,
)
from rental_engine.domain.services.booking_rules import validate_rental_request
from rental_engine.domain.services.coupon_classifier import classify_coupon_message
from rental_engine.domain.services.pricing import (
    FALLBACK_DAILY_RATE,
    compute_price,
    rental_days,
    verify_breakdown,
)

__all__ = [
    "AvailabilityStatus",
    "FALLBACK_DAILY_RATE",
    "booked_date_ranges",
    "check_window_availability",
    "classify_coupon_message",
    "compute_price",
    "rental_days",
    "resolve_current_availability",
    "validate_rental_request",
    "verify_breakdown",
]
