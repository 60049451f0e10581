"""Servicios de aplicación con estado (uno por formulario o por proceso)."""

from rental_engine.application.services.coupon_coordinator import (
    CouponOutcome,
    CouponState,
    CouponValidationCoordinator,
    CouponValidationState,
    ErrorNotifier,
)
from rental_engine.application.services.fee_settings_provider import FeeSettingsProvider

__all__ = [
    "CouponOutcome",
    "CouponState",
    "CouponValidationCoordinator",
    "CouponValidationState",
    "ErrorNotifier",
    "FeeSettingsProvider",
]
