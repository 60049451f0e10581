"""
Resolución de disponibilidad de vehículos.

Funciones puras sobre las reservaciones de un vehículo que entrega el
llamador. Expone dos semánticas distintas:

- ``resolve_current_availability``: ¿está libre el vehículo *hoy*? (listado del catálogo)
- ``check_window_availability``: ¿está libre para una ventana concreta? (validación de reserva)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from rental_engine.domain.entities.reservation import Reservation
from rental_engine.domain.value_objects.date_window import DateWindow

_ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class AvailabilityStatus:
    """Resultado de una consulta de disponibilidad."""

    available: bool
    next_available_date: date | None = None
    conflicting: tuple[Reservation, ...] = ()


def _blocking(vehicle_id: str, reservations: Iterable[Reservation]) -> list[Reservation]:
    return [reservation for reservation in reservations if reservation.blocks(vehicle_id)]


def resolve_current_availability(
    vehicle_id: str,
    reservations: Iterable[Reservation],
    today: date,
) -> AvailabilityStatus:
    """
    Disponibilidad "en este momento".

    Considera sólo reservaciones confirmadas vigentes hoy
    (``pickup_date <= today <= return_date``). Si existe alguna, el vehículo
    está ocupado hasta el día siguiente a la devolución más tardía. Las
    reservaciones confirmadas futuras no bloquean la disponibilidad actual.
    """
    in_effect = tuple(
        reservation
        for reservation in _blocking(vehicle_id, reservations)
        if reservation.window.contains(today)
    )
    if not in_effect:
        return AvailabilityStatus(available=True)

    latest_return = max(reservation.return_date for reservation in in_effect)
    return AvailabilityStatus(
        available=False,
        next_available_date=latest_return + _ONE_DAY,
        conflicting=in_effect,
    )


def check_window_availability(
    vehicle_id: str,
    window: DateWindow,
    reservations: Iterable[Reservation],
) -> AvailabilityStatus:
    """
    Disponibilidad para una ventana concreta (solapamiento de intervalos).

    Es la verificación que se usa al momento de reservar: cualquier
    reservación confirmada del vehículo que se solape con ``window`` genera
    conflicto. La fecha sugerida es la primera recogida que este modo acepta:
    el día de devolución de la reservación en conflicto (el día siguiente si
    es una renta del mismo día), saltando reservaciones encadenadas.
    """
    blocking = _blocking(vehicle_id, reservations)
    conflicting = tuple(
        reservation for reservation in blocking if reservation.window.overlaps_with(window)
    )
    if not conflicting:
        return AvailabilityStatus(available=True)

    candidate = max(reservation.window.exclusive_end for reservation in conflicting)
    candidate = _skip_chained(candidate, blocking)
    return AvailabilityStatus(
        available=False,
        next_available_date=candidate,
        conflicting=conflicting,
    )


def booked_date_ranges(
    vehicle_id: str, reservations: Iterable[Reservation]
) -> list[DateWindow]:
    """Rangos confirmados del vehículo ordenados por fecha de recogida (para calendarios)."""
    blocking = sorted(_blocking(vehicle_id, reservations), key=lambda r: r.pickup_date)
    return [reservation.window for reservation in blocking]


def _skip_chained(candidate: date, blocking: list[Reservation]) -> date:
    # Cada iteración avanza la fecha, así que termina en len(blocking) pasos como máximo
    moved = True
    while moved:
        moved = False
        for reservation in blocking:
            window = reservation.window
            if window.start <= candidate < window.exclusive_end:
                candidate = window.exclusive_end
                moved = True
    return candidate
