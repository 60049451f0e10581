"""Value Object DateWindow - rango de fechas de una renta (pickup -> return)."""

from dataclasses import dataclass
from datetime import date, timedelta


@dataclass(frozen=True)
class DateWindow:
    """
    Value Object inmutable que representa un rango de fechas de calendario.

    Se usa tanto para la ventana solicitada por el cliente como para las
    reservaciones existentes de un vehículo.

    Attributes:
        start: Fecha de recogida (pickup).
        end: Fecha de devolución (return). Puede ser igual a start (renta del mismo día).
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"end no puede ser anterior a start: {self.end} < {self.start}"
            )

    @property
    def is_same_day(self) -> bool:
        return self.start == self.end

    @property
    def exclusive_end(self) -> date:
        """
        Fin exclusivo del intervalo [start, exclusive_end).

        Una renta del mismo día ocupa el día completo, por lo que su fin
        exclusivo es el día siguiente.
        """
        if self.is_same_day:
            return self.start + timedelta(days=1)
        return self.end

    def overlaps_with(self, other: "DateWindow") -> bool:
        """
        Verifica si este rango se superpone con otro.

        Ambos se tratan como intervalos semiabiertos, de modo que un vehículo
        devuelto el día X puede recogerse de nuevo ese mismo día X.
        """
        return self.start < other.exclusive_end and other.start < self.exclusive_end

    def contains(self, day: date) -> bool:
        """Verifica si una fecha está dentro del rango (ambos extremos inclusive)."""
        return self.start <= day <= self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"

    @classmethod
    def from_dates(cls, pickup: date, dropoff: date) -> "DateWindow":
        """Factory method para crear desde pickup y return."""
        return cls(start=pickup, end=dropoff)
