"""Entidades del dominio de rentas."""

from rental_engine.domain.entities.coupon import CouponValidation, Discount
from rental_engine.domain.entities.fee_settings import FeeSettings, WorkingHours
from rental_engine.domain.entities.price_breakdown import LineItem, NotComputable, PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.entities.reservation import Reservation, ReservationStatus
from rental_engine.domain.entities.vehicle import InsuranceKind, PriceBand, VehicleTariff

__all__ = [
    # Vehicle
    "InsuranceKind",
    "PriceBand",
    "VehicleTariff",
    # Request
    "RentalRequest",
    # Reservation
    "Reservation",
    "ReservationStatus",
    # Pricing
    "FeeSettings",
    "WorkingHours",
    "LineItem",
    "NotComputable",
    "PriceBreakdown",
    # Coupon
    "CouponValidation",
    "Discount",
]
