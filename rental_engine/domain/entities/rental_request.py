"""Entidad RentalRequest - solicitud de renta capturada por el formulario."""

from dataclasses import dataclass
from datetime import date, datetime, time


@dataclass(frozen=True)
class RentalRequest:
    """
    Solicitud de renta tal como la arma el formulario de reserva.

    Se crea nueva en cada interacción del usuario, por lo que cualquier
    campo puede faltar mientras el cliente todavía está escribiendo. Es
    inmutable una vez entregada al orquestador de envío.
    """

    vehicle_id: str | None = None
    pickup_date: date | None = None
    pickup_time: time | None = None
    return_date: date | None = None
    return_time: time | None = None
    pickup_location: str | None = None
    dropoff_location: str | None = None
    insurance_kind: str | None = None
    discount_code: str | None = None
    customer_phone: str | None = None

    # Datos del cliente usados por la validación local
    customer_name: str | None = None
    customer_email: str | None = None
    customer_age: int | None = None

    @property
    def pickup_datetime(self) -> datetime | None:
        if self.pickup_date is None or self.pickup_time is None:
            return None
        return datetime.combine(self.pickup_date, self.pickup_time)

    @property
    def return_datetime(self) -> datetime | None:
        if self.return_date is None or self.return_time is None:
            return None
        return datetime.combine(self.return_date, self.return_time)

    @property
    def normalized_discount_code(self) -> str | None:
        if self.discount_code is None:
            return None
        code = self.discount_code.strip()
        return code or None

    def missing_pricing_fields(self) -> tuple[str, ...]:
        """Campos requeridos para poder calcular un precio que todavía faltan."""
        required = {
            "pickup_date": self.pickup_date,
            "pickup_time": self.pickup_time,
            "return_date": self.return_date,
            "return_time": self.return_time,
        }
        return tuple(name for name, value in required.items() if value is None)
