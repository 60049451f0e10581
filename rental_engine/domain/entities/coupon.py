"""Entidades de cupones: resultado de validación y descuento aplicable."""

from dataclasses import dataclass
from decimal import Decimal

from rental_engine.domain.value_objects.money import ZERO, to_decimal

_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Discount:
    """
    Descuento aplicable al subtotal de una renta.

    Sólo se construye a partir de una validación de cupón exitosa. Es un
    porcentaje (``rate`` entre 0 y 1) o una cantidad de días gratis cobrados
    a la tarifa diaria de la banda.
    """

    code: str
    rate: Decimal = ZERO
    free_days: int = 0

    def __post_init__(self) -> None:
        if not ZERO <= self.rate <= Decimal("1"):
            raise ValueError(f"rate debe estar entre 0 y 1: {self.rate}")
        if self.free_days < 0:
            raise ValueError(f"free_days no puede ser negativo: {self.free_days}")

    @classmethod
    def percentage(cls, code: str, percent: Decimal | int | float | str) -> "Discount":
        """Crea un descuento desde un porcentaje (10 -> 10%)."""
        value = to_decimal(percent, default=ZERO)
        return cls(code=code, rate=value / _HUNDRED)


@dataclass(frozen=True)
class CouponValidation:
    """
    Respuesta del colaborador de validación de cupones.

    Attributes:
        code: Código validado.
        phone: Teléfono con el que se validó (cupones de canje ligados a un teléfono).
        valid: Resultado de la validación.
        message: Mensaje o clave de mensaje del servidor (ej: "coupons.expired").
        discount_percentage: Porcentaje de descuento para cupones de tipo porcentaje.
        free_days: Días gratis para cupones de tipo "free_days".
    """

    code: str
    phone: str | None
    valid: bool
    message: str | None = None
    discount_percentage: Decimal | None = None
    free_days: int | None = None

    def to_discount(self) -> Discount | None:
        """Descuento aplicable o None si el cupón no es válido o no descuenta nada."""
        if not self.valid:
            return None
        if self.discount_percentage is not None and self.discount_percentage > ZERO:
            percent = min(self.discount_percentage, _HUNDRED)
            return Discount.percentage(self.code, percent)
        if self.free_days:
            return Discount(code=self.code, free_days=self.free_days)
        return None
