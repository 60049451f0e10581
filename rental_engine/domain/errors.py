"""Excepciones de dominio para el motor de precios, disponibilidad y cupones."""

from datetime import date
from enum import Enum


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Validación ===


class FieldValidationError(DomainError):
    """Error de validación local de un campo del formulario (antes de cualquier llamada de red)."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validación fallida en '{field}': {message}",
            code="FIELD_VALIDATION_ERROR",
        )
        self.field = field
        self.reason = message


# === Errores de Cupón ===


class CouponErrorKind(str, Enum):
    """Clasificación cerrada de los rechazos de cupón."""

    INVALID = "invalid"
    EXPIRED = "expired"
    USED = "used"
    LIMIT_REACHED = "limit_reached"
    PHONE_NOT_AUTHORIZED = "phone_not_authorized"
    GENERIC = "generic"


class CouponError(DomainError):
    """El código de descuento fue rechazado o no pudo validarse."""

    def __init__(self, kind: CouponErrorKind, message: str | None = None):
        super().__init__(
            message=message or f"Cupón rechazado: {kind.value}",
            code=f"COUPON_{kind.name}",
        )
        self.kind = kind
        self.server_message = message


# === Errores de Disponibilidad ===


class AvailabilityConflict(DomainError):
    """El vehículo ya tiene una reservación confirmada en la ventana pedida."""

    def __init__(
        self,
        vehicle_id: str,
        next_available_date: date | None = None,
        reason: str | None = None,
    ):
        detail = f"Vehículo {vehicle_id} no disponible para las fechas solicitadas"
        if next_available_date is not None:
            detail += f"; disponible a partir de {next_available_date.isoformat()}"
        super().__init__(message=reason or detail, code="AVAILABILITY_CONFLICT")
        self.vehicle_id = vehicle_id
        self.next_available_date = next_available_date


class VehicleNotFoundError(DomainError):
    """El vehículo no existe."""

    def __init__(self, vehicle_id: str):
        super().__init__(
            message=f"Vehículo no encontrado: {vehicle_id}",
            code="VEHICLE_NOT_FOUND",
        )
        self.vehicle_id = vehicle_id


# === Errores de Red / Envío ===


class TransientError(DomainError):
    """Falla de transporte o del colaborador externo; el reintento lo decide el usuario."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            message=f"Error transitorio en {operation}: {message}",
            code="TRANSIENT_ERROR",
        )
        self.operation = operation


class SubmissionRejected(DomainError):
    """El servicio de reservas rechazó la reservación por una regla de negocio."""

    def __init__(self, message: str):
        # El mensaje del servidor se propaga tal cual
        super().__init__(message=message, code="SUBMISSION_REJECTED")


class SubmissionInProgressError(DomainError):
    """Ya hay un envío en curso para este formulario."""

    def __init__(self) -> None:
        super().__init__(
            message="Ya existe un envío de reservación en curso",
            code="SUBMISSION_IN_PROGRESS",
        )
