from abc import ABC, abstractmethod

from rental_engine.domain.entities.fee_settings import FeeSettings


class FeeSettingsGateway(ABC):
    @abstractmethod
    async def fetch(self) -> FeeSettings:
        """
        Loads the public fee settings (location fees and outside-hours surcharge).

        Raises TransientError when the collaborator cannot be reached.
        """
        pass
