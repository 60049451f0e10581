"""
Calculadora de precios de renta.

Funciones puras: convierten una solicitud de renta y la tarifa del vehículo
en un desglose de precio determinista. Sin I/O y sin estado oculto, por lo
que pueden invocarse en cada cambio del formulario.
"""

import math
from datetime import datetime
from decimal import Decimal

from rental_engine.domain.entities.coupon import Discount
from rental_engine.domain.entities.fee_settings import FeeSettings
from rental_engine.domain.entities.price_breakdown import LineItem, NotComputable, PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.entities.vehicle import VehicleTariff
from rental_engine.domain.value_objects.money import ZERO, round_money

# Tarifa diaria usada cuando ninguna banda de la tarifa aplica
FALLBACK_DAILY_RATE = Decimal("60")

_SECONDS_PER_DAY = 24 * 60 * 60

_COMPARED_FIELDS = (
    "days",
    "base_price",
    "location_fee",
    "insurance_cost",
    "outside_hours_fee",
    "subtotal",
    "discount_amount",
    "final_price",
)


def rental_days(pickup: datetime, dropoff: datetime) -> int:
    """
    Calcula los días facturables de una renta.

    Regla de negocio: cualquier fracción de día cuenta como día completo y
    una renta dentro de la misma fecha se cobra como un día de 24 horas.
    Nunca retorna menos de 1.
    """
    if pickup.date() == dropoff.date():
        return 1
    seconds = (dropoff - pickup).total_seconds()
    return max(1, math.ceil(seconds / _SECONDS_PER_DAY))


def daily_rate_for(
    tariff: VehicleTariff, days: int, fallback: Decimal = FALLBACK_DAILY_RATE
) -> Decimal:
    """Tarifa diaria de la banda que contiene ``days``, o la tarifa de respaldo."""
    band = tariff.band_for(days)
    return band.daily_rate if band is not None else fallback


def compute_discount(
    discount: Discount | None, subtotal: Decimal, per_day_rate: Decimal, days: int
) -> Decimal:
    """Monto de descuento, nunca mayor que el subtotal."""
    if discount is None or subtotal <= ZERO:
        return ZERO
    amount = subtotal * discount.rate
    if discount.free_days:
        amount += per_day_rate * min(discount.free_days, days)
    return round_money(min(amount, subtotal))


def compute_price(
    request: RentalRequest,
    tariff: VehicleTariff,
    fee_settings: FeeSettings | None = None,
    discount: Discount | None = None,
    *,
    fallback_daily_rate: Decimal = FALLBACK_DAILY_RATE,
    currency_code: str = "EUR",
) -> PriceBreakdown | NotComputable:
    """
    Calcula el desglose de precio de una solicitud de renta.

    Args:
        request: Solicitud (puede estar incompleta).
        tariff: Tarifa del vehículo.
        fee_settings: Cargos por ubicación y fuera de horario.
        discount: Descuento de un cupón ya validado. Sólo aplica si pertenece
            al código de descuento de la solicitud.
        fallback_daily_rate: Tarifa diaria cuando ninguna banda aplica.
        currency_code: Moneda del desglose.

    Returns:
        PriceBreakdown, o NotComputable si faltan fechas u horas.
    """
    missing = request.missing_pricing_fields()
    if missing:
        return NotComputable(missing=missing)

    fees = fee_settings or FeeSettings()
    pickup = request.pickup_datetime
    dropoff = request.return_datetime

    days = rental_days(pickup, dropoff)
    per_day_rate = daily_rate_for(tariff, days, fallback_daily_rate)
    base_price = round_money(per_day_rate * days)

    # Sólo la ubicación de recogida genera cargo
    location_fee = round_money(fees.location_fee(request.pickup_location))

    insurance_cost = round_money(tariff.insurance_rate(request.insurance_kind) * days)

    pickup_outside = fees.working_hours.is_outside(request.pickup_time)
    return_outside = fees.working_hours.is_outside(request.return_time)
    surcharge = round_money(fees.outside_hours_fee)
    outside_hours_fee = surcharge * (int(pickup_outside) + int(return_outside))

    subtotal = base_price + location_fee + insurance_cost + outside_hours_fee

    applied = _matching_discount(request, discount)
    discount_amount = compute_discount(applied, subtotal, per_day_rate, days)
    final_price = max(ZERO, subtotal - discount_amount)

    line_items = [
        LineItem("base_price", base_price, detail=f"{per_day_rate} x {days}"),
        LineItem("location_fee", location_fee, detail=request.pickup_location),
        LineItem("outside_hours_pickup", surcharge if pickup_outside else ZERO),
        LineItem("outside_hours_return", surcharge if return_outside else ZERO),
    ]
    if insurance_cost > ZERO:
        line_items.append(LineItem("insurance", insurance_cost, detail=request.insurance_kind))
    if applied is not None:
        line_items.append(LineItem("discount", -discount_amount, detail=applied.code))

    return PriceBreakdown(
        days=days,
        per_day_rate=per_day_rate,
        base_price=base_price,
        location_fee=location_fee,
        insurance_cost=insurance_cost,
        outside_hours_fee=outside_hours_fee,
        subtotal=subtotal,
        discount_amount=discount_amount,
        final_price=final_price,
        currency_code=currency_code,
        discount_code=applied.code if applied is not None else None,
        line_items=tuple(line_items),
    )


def verify_breakdown(submitted: PriceBreakdown, recomputed: PriceBreakdown) -> list[str]:
    """
    Compara un desglose enviado por el cliente contra uno recalculado.

    Returns:
        Nombres de los campos que no coinciden (lista vacía si todo coincide).
    """
    return [
        name
        for name in _COMPARED_FIELDS
        if getattr(submitted, name) != getattr(recomputed, name)
    ]


def _matching_discount(request: RentalRequest, discount: Discount | None) -> Discount | None:
    code = request.normalized_discount_code
    if discount is None or code is None:
        return None
    if discount.code.strip().upper() != code.upper():
        return None
    return discount
