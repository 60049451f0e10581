"""Entidades del desglose de precio."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class LineItem:
    """
    Línea del desglose para mostrar en pantalla.

    ``key`` es una clave estable; el texto visible lo resuelve el
    colaborador de localización.
    """

    key: str
    amount: Decimal
    detail: str | None = None


@dataclass(frozen=True)
class PriceBreakdown:
    """
    Desglose determinista del precio de una renta.

    Derivado; se recalcula en cada cambio de entrada y nunca se persiste.
    """

    days: int
    per_day_rate: Decimal
    base_price: Decimal
    location_fee: Decimal
    insurance_cost: Decimal
    outside_hours_fee: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    final_price: Decimal
    currency_code: str = "EUR"
    discount_code: str | None = None
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serializa a un dict JSON-safe (importes como texto)."""
        return {
            "days": self.days,
            "per_day_rate": str(self.per_day_rate),
            "base_price": str(self.base_price),
            "location_fee": str(self.location_fee),
            "insurance_cost": str(self.insurance_cost),
            "outside_hours_fee": str(self.outside_hours_fee),
            "subtotal": str(self.subtotal),
            "discount_amount": str(self.discount_amount),
            "final_price": str(self.final_price),
            "currency_code": self.currency_code,
            "discount_code": self.discount_code,
            "line_items": [
                {"key": item.key, "amount": str(item.amount), "detail": item.detail}
                for item in self.line_items
            ],
        }


@dataclass(frozen=True)
class NotComputable:
    """Centinela: la solicitud todavía no tiene los campos necesarios para cotizar."""

    missing: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return False
