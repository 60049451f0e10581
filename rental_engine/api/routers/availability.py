from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from rental_engine.api.dependencies import get_use_cases
from rental_engine.api.schemas.availability import (
    AvailabilityResponse,
    BookingDatesResponse,
    DateRange,
)

router = APIRouter()


@router.get(
    "/vehicles/{vehicle_id}/availability",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_200_OK,
)
async def check_window_availability(
    vehicle_id: str,
    pickup_date: date = Query(...),
    return_date: date = Query(...),
    use_cases=Depends(get_use_cases),
) -> AvailabilityResponse:
    if return_date < pickup_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="return_date must not be before pickup_date",
        )
    result = await use_cases["check_availability"].for_window(vehicle_id, pickup_date, return_date)
    return AvailabilityResponse.from_status(vehicle_id, result)


@router.get(
    "/vehicles/{vehicle_id}/availability/current",
    response_model=AvailabilityResponse,
    status_code=status.HTTP_200_OK,
)
async def current_availability(
    vehicle_id: str,
    use_cases=Depends(get_use_cases),
) -> AvailabilityResponse:
    """Catalog listing answer: is the vehicle free today?"""
    result = await use_cases["check_availability"].right_now(vehicle_id)
    return AvailabilityResponse.from_status(vehicle_id, result)


@router.get(
    "/vehicles/{vehicle_id}/booking-dates",
    response_model=BookingDatesResponse,
    status_code=status.HTTP_200_OK,
)
async def booking_dates(
    vehicle_id: str,
    use_cases=Depends(get_use_cases),
) -> BookingDatesResponse:
    ranges = await use_cases["check_availability"].booked_ranges(vehicle_id)
    return BookingDatesResponse(
        vehicle_id=vehicle_id,
        booking_dates=[DateRange.from_window(window) for window in ranges],
        total_bookings=len(ranges),
    )
