from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from rental_engine.domain.entities.price_breakdown import PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest


@dataclass
class BookingConfirmation:
    booking_id: str
    message: str | None = None
    payload: dict[str, Any] | None = None


class BookingGateway(ABC):
    @abstractmethod
    async def create_booking(
        self, request: RentalRequest, breakdown: PriceBreakdown
    ) -> BookingConfirmation:
        """
        Creates the booking with the frozen price breakdown.

        Raises SubmissionRejected for business-rule rejections and
        TransientError for transport failures.
        """
        pass
