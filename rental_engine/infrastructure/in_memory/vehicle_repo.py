from collections.abc import Mapping

from rental_engine.application.interfaces.vehicle_repo import VehicleRepo
from rental_engine.domain.entities.vehicle import VehicleTariff

# Seed for local development so the quote endpoint answers without a catalog
DEMO_VEHICLE_ID = "demo-car"
DEMO_PRICE_POLICY = {"1-2": 50, "3-7": 45, "8-20": 40, "21-45": 35, "46+": 30}
DEMO_INSURANCE_RATES = {"RCA": 0, "Casco": 15}


class InMemoryVehicleRepo(VehicleRepo):
    def __init__(self, tariffs: Mapping[str, VehicleTariff] | None = None) -> None:
        self.tariffs: dict[str, VehicleTariff] = dict(tariffs or {})

    @classmethod
    def with_demo_tariff(cls) -> "InMemoryVehicleRepo":
        return cls(
            {
                DEMO_VEHICLE_ID: VehicleTariff.from_price_policy(
                    DEMO_PRICE_POLICY, insurance_rates=DEMO_INSURANCE_RATES
                )
            }
        )

    async def get_tariff(self, vehicle_id: str) -> VehicleTariff | None:
        return self.tariffs.get(vehicle_id)
