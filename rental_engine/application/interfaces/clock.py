"""Interface Clock - Puerto para abstracción de tiempo."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta


class Clock(ABC):
    """
    Puerto para abstracción del tiempo del sistema.

    Permite inyectar implementaciones fake para testing determinista de los
    cooldowns del coordinador de cupones y de las reglas de fechas.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Retorna la fecha/hora local actual.

        Returns:
            datetime con la hora actual.
        """
        raise NotImplementedError

    @abstractmethod
    def today(self) -> date:
        """
        Retorna la fecha actual (sin hora).

        Returns:
            date de hoy.
        """
        raise NotImplementedError

    @abstractmethod
    def monotonic_ms(self) -> int:
        """
        Retorna un reloj monótono en milisegundos.

        Sólo sirve para medir intervalos (debounce, cooldown), no fechas.
        """
        raise NotImplementedError


class FakeClock(Clock):
    """
    Implementación fake para testing.

    Permite fijar el tiempo para pruebas deterministas.
    """

    def __init__(self, fixed_time: datetime | None = None, monotonic_ms: int = 0):
        """
        Inicializa el clock con un tiempo fijo opcional.

        Args:
            fixed_time: Tiempo fijo a retornar. Si es None, usa el tiempo real inicial.
            monotonic_ms: Valor inicial del reloj monótono.
        """
        self._fixed_time = fixed_time or datetime.now()
        self._monotonic_ms = monotonic_ms

    def now(self) -> datetime:
        return self._fixed_time

    def today(self) -> date:
        return self._fixed_time.date()

    def monotonic_ms(self) -> int:
        return self._monotonic_ms

    def set_time(self, new_time: datetime) -> None:
        """
        Cambia el tiempo fijo.

        Args:
            new_time: Nuevo tiempo a fijar.
        """
        self._fixed_time = new_time

    def advance(self, milliseconds: int = 0, seconds: int = 0, days: int = 0) -> None:
        """
        Avanza el tiempo fijo y el reloj monótono.

        Args:
            milliseconds: Milisegundos a avanzar.
            seconds: Segundos a avanzar.
            days: Días a avanzar.
        """
        delta = timedelta(milliseconds=milliseconds, seconds=seconds, days=days)
        self._fixed_time = self._fixed_time + delta
        self._monotonic_ms += int(delta.total_seconds() * 1000)
