"""Value Objects del dominio de rentas."""

from rental_engine.domain.value_objects.date_window import DateWindow
from rental_engine.domain.value_objects.money import CENTS, ZERO, round_money, to_decimal

__all__ = [
    "CENTS",
    "DateWindow",
    "ZERO",
    "round_money",
    "to_decimal",
]
