"""
Capa de Dominio - Motor de precios, disponibilidad y cupones.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks
ni de I/O.

Estructura:
- entities/: Entidades del dominio (RentalRequest, VehicleTariff, Reservation, ...)
- value_objects/: Objetos de valor inmutables (DateWindow, utilidades monetarias)
- services/: Calculadora de precios, resolución de disponibilidad, clasificador de cupones
- errors.py: Excepciones específicas del dominio
"""

from rental_engine.domain.entities import (
    CouponValidation,
    Discount,
    FeeSettings,
    InsuranceKind,
    LineItem,
    NotComputable,
    PriceBand,
    PriceBreakdown,
    RentalRequest,
    Reservation,
    ReservationStatus,
    VehicleTariff,
    WorkingHours,
)
from rental_engine.domain.errors import (
    AvailabilityConflict,
    CouponError,
    CouponErrorKind,
    DomainError,
    FieldValidationError,
    SubmissionInProgressError,
    SubmissionRejected,
    TransientError,
    VehicleNotFoundError,
)
from rental_engine.domain.value_objects import DateWindow

__all__ = [
    # Entities
    "CouponValidation",
    "Discount",
    "FeeSettings",
    "InsuranceKind",
    "LineItem",
    "NotComputable",
    "PriceBand",
    "PriceBreakdown",
    "RentalRequest",
    "Reservation",
    "ReservationStatus",
    "VehicleTariff",
    "WorkingHours",
    # Value Objects
    "DateWindow",
    # Errors
    "AvailabilityConflict",
    "CouponError",
    "CouponErrorKind",
    "DomainError",
    "FieldValidationError",
    "SubmissionInProgressError",
    "SubmissionRejected",
    "TransientError",
    "VehicleNotFoundError",
]
