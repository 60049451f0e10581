from abc import ABC, abstractmethod

from rental_engine.domain.entities.vehicle import VehicleTariff


class VehicleRepo(ABC):
    @abstractmethod
    async def get_tariff(self, vehicle_id: str) -> VehicleTariff | None:
        """Tariff of the vehicle, or None when the vehicle does not exist."""
        pass
