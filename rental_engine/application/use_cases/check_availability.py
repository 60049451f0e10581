from datetime import date

from rental_engine.application.interfaces.clock import Clock
from rental_engine.application.interfaces.reservation_repo import ReservationRepo
from rental_engine.domain.services.availability import (
    AvailabilityStatus,
    booked_date_ranges,
    check_window_availability,
    resolve_current_availability,
)
from rental_engine.domain.value_objects.date_window import DateWindow


class CheckAvailabilityUseCase:
    """
    Disponibilidad de un vehículo sobre las reservaciones del repositorio.

    ``for_window`` es la verificación al momento de reservar; ``right_now``
    responde al listado del catálogo ("¿está libre hoy?").
    """

    def __init__(self, reservation_repo: ReservationRepo, clock: Clock) -> None:
        self._reservation_repo = reservation_repo
        self._clock = clock

    async def for_window(
        self, vehicle_id: str, pickup_date: date, return_date: date
    ) -> AvailabilityStatus:
        window = DateWindow.from_dates(pickup_date, return_date)
        reservations = await self._reservation_repo.list_for_vehicle(vehicle_id)
        return check_window_availability(vehicle_id, window, reservations)

    async def right_now(self, vehicle_id: str) -> AvailabilityStatus:
        reservations = await self._reservation_repo.list_for_vehicle(vehicle_id)
        return resolve_current_availability(vehicle_id, reservations, self._clock.today())

    async def booked_ranges(self, vehicle_id: str) -> list[DateWindow]:
        reservations = await self._reservation_repo.list_for_vehicle(vehicle_id)
        return booked_date_ranges(vehicle_id, reservations)
