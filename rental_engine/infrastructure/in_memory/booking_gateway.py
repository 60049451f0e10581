from uuid import uuid4

from rental_engine.application.interfaces.booking_gateway import (
    BookingConfirmation,
    BookingGateway,
)
from rental_engine.application.interfaces.reservation_repo import ReservationRepo
from rental_engine.domain.entities.price_breakdown import PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.entities.reservation import Reservation, ReservationStatus


class StubBookingGateway(BookingGateway):
    def __init__(self, reservation_repo: ReservationRepo | None = None) -> None:
        self._reservation_repo = reservation_repo
        self.submissions: list[tuple[RentalRequest, PriceBreakdown]] = []

    async def create_booking(
        self, request: RentalRequest, breakdown: PriceBreakdown
    ) -> BookingConfirmation:
        self.submissions.append((request, breakdown))
        booking_id = uuid4().hex[:12]
        # New bookings start pending until an operator confirms them
        if self._reservation_repo is not None:
            await self._reservation_repo.add(
                Reservation(
                    vehicle_id=request.vehicle_id,
                    pickup_date=request.pickup_date,
                    return_date=request.return_date,
                    status=ReservationStatus.PENDING,
                    id=booking_id,
                )
            )
        return BookingConfirmation(
            booking_id=booking_id,
            message="Booking request submitted successfully",
            payload={"booking_id": booking_id, "status": ReservationStatus.PENDING.value},
        )
