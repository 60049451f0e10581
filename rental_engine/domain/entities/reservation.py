"""Entidad Reservation - reservación existente de un vehículo."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from rental_engine.domain.value_objects.date_window import DateWindow


class ReservationStatus(str, Enum):
    """Estados posibles de una reservación."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Reservation:
    """
    Reservación registrada en el almacén de reservas (externo).

    Sólo las reservaciones confirmadas restringen la disponibilidad; las
    pendientes y canceladas nunca bloquean el vehículo.
    """

    vehicle_id: str
    pickup_date: date
    return_date: date
    status: ReservationStatus = ReservationStatus.PENDING
    id: str | None = None

    @property
    def window(self) -> DateWindow:
        return DateWindow(start=self.pickup_date, end=self.return_date)

    @property
    def is_confirmed(self) -> bool:
        return self.status == ReservationStatus.CONFIRMED

    def blocks(self, vehicle_id: str) -> bool:
        """True si esta reservación cuenta para la disponibilidad de ``vehicle_id``."""
        return self.is_confirmed and str(self.vehicle_id) == str(vehicle_id)
