"""Utilidades monetarias: todos los importes del motor son Decimal redondeado a centavos."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: object, default: Decimal | None = None) -> Decimal | None:
    """
    Convierte un valor crudo (int, float, str, Decimal) a Decimal.

    Los precios vienen de registros de vehículo y de la API de tarifas, donde
    pueden llegar como texto ("60") o como número. Si el valor no es numérico
    se retorna ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default
    if not result.is_finite():
        return default
    return result


def round_money(amount: Decimal) -> Decimal:
    """Redondea un importe a 2 decimales (half-up)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
