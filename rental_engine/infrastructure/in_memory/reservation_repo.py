from collections import defaultdict
from typing import Sequence

from rental_engine.application.interfaces.reservation_repo import ReservationRepo
from rental_engine.domain.entities.reservation import Reservation


class InMemoryReservationRepo(ReservationRepo):
    def __init__(self, reservations: Sequence[Reservation] = ()) -> None:
        self.reservations: dict[str, list[Reservation]] = defaultdict(list)
        for reservation in reservations:
            self.reservations[reservation.vehicle_id].append(reservation)

    async def list_for_vehicle(self, vehicle_id: str) -> Sequence[Reservation]:
        return list(self.reservations.get(vehicle_id, ()))

    async def add(self, reservation: Reservation) -> None:
        self.reservations[reservation.vehicle_id].append(reservation)
