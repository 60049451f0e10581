"""Validación local de la solicitud de reserva (antes de cualquier llamada de red)."""

import re
from datetime import date

from email_validator import EmailNotValidError, validate_email

from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.errors import FieldValidationError

PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{8,}$")

MIN_CUSTOMER_AGE = 18
MAX_CUSTOMER_AGE = 100


def validate_rental_request(
    request: RentalRequest,
    today: date,
    *,
    min_age: int = MIN_CUSTOMER_AGE,
    max_age: int = MAX_CUSTOMER_AGE,
) -> None:
    """
    Verifica campos requeridos y reglas de fechas.

    La primera regla que falla gana.

    Raises:
        FieldValidationError: con el campo que falló.
    """
    required = (
        ("vehicle_id", _blank_to_none(request.vehicle_id)),
        ("pickup_date", request.pickup_date),
        ("pickup_time", request.pickup_time),
        ("return_date", request.return_date),
        ("return_time", request.return_time),
        ("pickup_location", _blank_to_none(request.pickup_location)),
        ("dropoff_location", _blank_to_none(request.dropoff_location)),
        ("customer_phone", _blank_to_none(request.customer_phone)),
        ("customer_age", request.customer_age),
    )
    for field_name, value in required:
        if value is None:
            raise FieldValidationError(field_name, "campo requerido")

    if not PHONE_PATTERN.match(request.customer_phone.strip()):
        raise FieldValidationError("customer_phone", "formato de teléfono inválido")

    if not min_age <= request.customer_age <= max_age:
        raise FieldValidationError(
            "customer_age", f"la edad debe estar entre {min_age} y {max_age} años"
        )

    email = _blank_to_none(request.customer_email)
    if email is not None:
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as exc:
            raise FieldValidationError("customer_email", str(exc)) from exc

    if request.pickup_date < today:
        raise FieldValidationError("pickup_date", "la fecha de recogida no puede estar en el pasado")

    if request.pickup_date == request.return_date:
        if request.return_time <= request.pickup_time:
            raise FieldValidationError(
                "return_time", "en rentas del mismo día la devolución debe ser posterior a la recogida"
            )
    elif request.return_date < request.pickup_date:
        raise FieldValidationError(
            "return_date", "la fecha de devolución debe ser posterior a la de recogida"
        )


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value
