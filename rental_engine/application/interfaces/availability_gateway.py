from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date


@dataclass
class AvailabilityResult:
    available: bool
    reason: str | None = None
    next_available_date: date | None = None


class AvailabilityGateway(ABC):
    @abstractmethod
    async def check(
        self, vehicle_id: str, pickup_date: date, return_date: date
    ) -> AvailabilityResult:
        """
        Asks the availability collaborator whether the vehicle is free for the
        window (window-overlap semantics).

        Raises TransientError when the collaborator cannot be reached.
        """
        pass
