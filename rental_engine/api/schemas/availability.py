from datetime import date

from pydantic import BaseModel, Field

from rental_engine.domain.entities.reservation import Reservation
from rental_engine.domain.services.availability import AvailabilityStatus
from rental_engine.domain.value_objects.date_window import DateWindow


class DateRange(BaseModel):
    pickup_date: date
    return_date: date

    @classmethod
    def from_window(cls, window: DateWindow) -> "DateRange":
        return cls(pickup_date=window.start, return_date=window.end)

    @classmethod
    def from_reservation(cls, reservation: Reservation) -> "DateRange":
        return cls(pickup_date=reservation.pickup_date, return_date=reservation.return_date)


class AvailabilityResponse(BaseModel):
    vehicle_id: str
    available: bool
    next_available_date: date | None = None
    conflicting: list[DateRange] = Field(default_factory=list)

    @classmethod
    def from_status(cls, vehicle_id: str, status: AvailabilityStatus) -> "AvailabilityResponse":
        return cls(
            vehicle_id=vehicle_id,
            available=status.available,
            next_available_date=status.next_available_date,
            conflicting=[DateRange.from_reservation(r) for r in status.conflicting],
        )


class BookingDatesResponse(BaseModel):
    vehicle_id: str
    booking_dates: list[DateRange]
    total_bookings: int
