import logging
from datetime import date, time
from typing import Any

import httpx

from rental_engine.application.interfaces.booking_gateway import (
    BookingConfirmation,
    BookingGateway,
)
from rental_engine.domain.entities.price_breakdown import PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.errors import SubmissionRejected, TransientError
from rental_engine.infrastructure.circuit_breaker import booking_breaker, call_with_breaker
from rental_engine.infrastructure.gateways.http_support import (
    raise_for_server_error,
    read_json,
    transport_error,
)

logger = logging.getLogger(__name__)

OPERATION = "booking_submission"


def _date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _time(value: time | None) -> str | None:
    return value.strftime("%H:%M") if value is not None else None


def build_booking_payload(request: RentalRequest, breakdown: PriceBreakdown) -> dict[str, Any]:
    """Booking body with the price frozen at submission time."""
    return {
        "car_id": request.vehicle_id,
        "pickup_date": _date(request.pickup_date),
        "pickup_time": _time(request.pickup_time),
        "return_date": _date(request.return_date),
        "return_time": _time(request.return_time),
        "pickup_location": request.pickup_location,
        "dropoff_location": request.dropoff_location,
        "insurance_type": request.insurance_kind,
        "discount_code": request.normalized_discount_code,
        "customer_name": request.customer_name,
        "customer_email": request.customer_email,
        "customer_phone": request.customer_phone,
        "customer_age": request.customer_age,
        "total_price": str(breakdown.final_price),
        "price_breakdown": breakdown.to_dict(),
    }


class BookingGatewayHTTP(BookingGateway):
    def __init__(self, base_url: str, timeout_seconds: float = 10.0) -> None:
        """
        HTTP booking creation, protected by Circuit Breaker.

        Args:
            base_url: Base URL of the rental API
            timeout_seconds: Request timeout in seconds (default: 10.0 for production safety)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def create_booking(
        self, request: RentalRequest, breakdown: PriceBreakdown
    ) -> BookingConfirmation:
        return await call_with_breaker(
            booking_breaker, OPERATION, self._create, request, breakdown
        )

    async def _create(
        self, request: RentalRequest, breakdown: PriceBreakdown
    ) -> BookingConfirmation:
        url = f"{self._base_url}/bookings"
        payload = build_booking_payload(request, breakdown)
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise transport_error(OPERATION, exc) from exc

        raise_for_server_error(OPERATION, response)
        body = read_json(response)

        if not response.is_success:
            message = (body or {}).get("error") or response.text or f"HTTP {response.status_code}"
            logger.warning(
                "Booking rejected",
                extra={"vehicle_id": request.vehicle_id, "http_status": response.status_code},
            )
            raise SubmissionRejected(message)

        if not body or body.get("booking_id") is None:
            raise TransientError(OPERATION, "invalid server response")

        return BookingConfirmation(
            booking_id=str(body["booking_id"]),
            message=body.get("message"),
            payload=body,
        )
