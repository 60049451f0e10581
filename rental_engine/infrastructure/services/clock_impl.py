"""Implementación real del servicio de reloj."""

import time
from datetime import date, datetime

from rental_engine.application.interfaces.clock import Clock


class ClockImpl(Clock):
    """
    Implementación real del Clock que usa el reloj del sistema.

    Las fechas de renta son locales (sin timezone). Para testing, usar
    FakeClock de application.interfaces.clock.
    """

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()

    def monotonic_ms(self) -> int:
        return int(time.monotonic() * 1000)
