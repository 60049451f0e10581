from datetime import date

from rental_engine.application.interfaces.availability_gateway import (
    AvailabilityGateway,
    AvailabilityResult,
)
from rental_engine.application.interfaces.reservation_repo import ReservationRepo
from rental_engine.domain.services.availability import check_window_availability
from rental_engine.domain.value_objects.date_window import DateWindow


class ResolverAvailabilityGateway(AvailabilityGateway):
    """Answers availability locally from a reservation repository."""

    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def check(
        self, vehicle_id: str, pickup_date: date, return_date: date
    ) -> AvailabilityResult:
        reservations = await self._reservation_repo.list_for_vehicle(vehicle_id)
        status = check_window_availability(
            vehicle_id, DateWindow.from_dates(pickup_date, return_date), reservations
        )
        return AvailabilityResult(
            available=status.available,
            reason=None if status.available else "cars.not_available_for_dates",
            next_available_date=status.next_available_date,
        )
