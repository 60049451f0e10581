"""Entidad FeeSettings - cargos por ubicación y por horario fuera de oficina."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import time
from decimal import Decimal

from rental_engine.domain.value_objects.money import ZERO

DEFAULT_OUTSIDE_HOURS_FEE = Decimal("20")


@dataclass(frozen=True)
class WorkingHours:
    """
    Horario de atención. Una hora está dentro si ``start <= hora < end``.
    """

    start: int = 8
    end: int = 18

    def __post_init__(self) -> None:
        if not 0 <= self.start < self.end <= 24:
            raise ValueError(f"Horario inválido: {self.start}-{self.end}")

    def is_outside(self, moment: time) -> bool:
        return moment.hour < self.start or moment.hour >= self.end


@dataclass(frozen=True)
class FeeSettings:
    """
    Cargos fijos aplicados al precio.

    Attributes:
        location_fees: Ubicación de recogida -> cargo fijo.
        outside_hours_fee: Unidad de recargo por recogida/devolución fuera de horario.
        working_hours: Horario de atención.
    """

    location_fees: Mapping[str, Decimal] = field(default_factory=dict)
    outside_hours_fee: Decimal = DEFAULT_OUTSIDE_HOURS_FEE
    working_hours: WorkingHours = field(default_factory=WorkingHours)

    def location_fee(self, location: str | None) -> Decimal:
        if not location:
            return ZERO
        return self.location_fees.get(location, ZERO)
