"""Entidad VehicleTariff - política de precios de un vehículo."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from rental_engine.domain.value_objects.money import ZERO, to_decimal

_CLOSED_BAND = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")
_OPEN_BAND = re.compile(r"^\s*(\d+)\s*\+\s*$")


class InsuranceKind(str, Enum):
    """Tipos de seguro ofrecidos."""

    RCA = "RCA"
    CASCO = "Casco"


@dataclass(frozen=True)
class PriceBand:
    """
    Rango de días con una tarifa diaria asociada.

    Attributes:
        label: Etiqueta original ("1-2", "46+").
        min_days: Límite inferior inclusive.
        max_days: Límite superior inclusive; None para la banda abierta "N+".
        daily_rate: Tarifa base por día.
    """

    label: str
    min_days: int
    max_days: int | None
    daily_rate: Decimal

    @property
    def is_open_ended(self) -> bool:
        return self.max_days is None

    def contains(self, days: int) -> bool:
        if days < self.min_days:
            return False
        return self.max_days is None or days <= self.max_days

    @classmethod
    def parse(cls, label: str, rate: Any) -> "PriceBand | None":
        """Crea una banda desde una etiqueta "a-b" / "N+"; None si no es válida."""
        daily_rate = to_decimal(rate)
        if daily_rate is None or daily_rate <= ZERO:
            return None

        closed = _CLOSED_BAND.match(label)
        if closed:
            low, high = int(closed.group(1)), int(closed.group(2))
            if low < 1 or high < low:
                return None
            return cls(label=label.strip(), min_days=low, max_days=high, daily_rate=daily_rate)

        open_ended = _OPEN_BAND.match(label)
        if open_ended:
            low = int(open_ended.group(1))
            if low < 1:
                return None
            return cls(label=label.strip(), min_days=low, max_days=None, daily_rate=daily_rate)

        return None


@dataclass(frozen=True)
class VehicleTariff:
    """
    Tarifa de un vehículo: bandas de precio por duración y seguros por día.

    Inmutable durante el cálculo de un precio. Las bandas se mantienen
    ordenadas por límite inferior.
    """

    bands: tuple[PriceBand, ...] = ()
    insurance_rates: Mapping[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.bands, key=lambda band: band.min_days))
        object.__setattr__(self, "bands", ordered)

    def band_for(self, days: int) -> PriceBand | None:
        """
        Retorna la banda que aplica para ``days``.

        Gana la banda de menor límite inferior que contiene a ``days``. Si
        ``days`` supera todas las bandas cerradas aplica la banda abierta,
        aunque ``days`` quede por debajo de su límite inferior ("46+" con 10
        días). Retorna None sólo si ninguna banda cubre ``days``.
        """
        for band in self.bands:
            if band.contains(days):
                return band

        open_ended = [band for band in self.bands if band.is_open_ended]
        closed = [band for band in self.bands if not band.is_open_ended]
        if open_ended and all(days > band.max_days for band in closed):
            return open_ended[0]
        return None

    def insurance_rate(self, kind: str | InsuranceKind | None) -> Decimal:
        """Tarifa diaria del seguro; 0 si el tipo no se reconoce."""
        if kind is None:
            return ZERO
        key = kind.value if isinstance(kind, InsuranceKind) else str(kind)
        rate = self.insurance_rates.get(key)
        if rate is None:
            # Tolerar mayúsculas/minúsculas ("casco", "CASCO")
            for name, value in self.insurance_rates.items():
                if name.lower() == key.lower():
                    rate = value
                    break
        return rate if rate is not None else ZERO

    @classmethod
    def from_price_policy(
        cls,
        price_policy: Mapping[str, Any] | None,
        insurance_rates: Mapping[str, Any] | None = None,
    ) -> "VehicleTariff":
        """
        Construye la tarifa desde el ``price_policy`` crudo del registro del vehículo.

        Las etiquetas o tarifas no parseables (o no positivas) se ignoran.
        """
        bands = []
        for label, rate in (price_policy or {}).items():
            band = PriceBand.parse(str(label), rate)
            if band is not None:
                bands.append(band)

        rates: dict[str, Decimal] = {}
        for kind, rate in (insurance_rates or {}).items():
            value = to_decimal(rate)
            if value is not None and value >= ZERO:
                rates[str(kind)] = value

        return cls(bands=tuple(bands), insurance_rates=rates)
