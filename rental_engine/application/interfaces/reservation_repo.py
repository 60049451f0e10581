from abc import ABC, abstractmethod
from typing import Sequence

from rental_engine.domain.entities.reservation import Reservation


class ReservationRepo(ABC):
    @abstractmethod
    async def list_for_vehicle(self, vehicle_id: str) -> Sequence[Reservation]:
        """All reservations of a vehicle, any status."""
        pass

    @abstractmethod
    async def add(self, reservation: Reservation) -> None:
        pass
