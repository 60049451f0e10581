import logging
from datetime import date

import httpx

from rental_engine.application.interfaces.availability_gateway import (
    AvailabilityGateway,
    AvailabilityResult,
)
from rental_engine.domain.errors import TransientError
from rental_engine.infrastructure.circuit_breaker import availability_breaker, call_with_breaker
from rental_engine.infrastructure.gateways.http_support import (
    raise_for_server_error,
    read_json,
    transport_error,
)

logger = logging.getLogger(__name__)

OPERATION = "availability_check"


class AvailabilityGatewayHTTP(AvailabilityGateway):
    """Window availability check against ``GET /cars/{id}/availability``."""

    def __init__(self, base_url: str, timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def check(
        self, vehicle_id: str, pickup_date: date, return_date: date
    ) -> AvailabilityResult:
        return await call_with_breaker(
            availability_breaker, OPERATION, self._check, vehicle_id, pickup_date, return_date
        )

    async def _check(
        self, vehicle_id: str, pickup_date: date, return_date: date
    ) -> AvailabilityResult:
        url = f"{self._base_url}/cars/{vehicle_id}/availability"
        params = {"pickup_date": pickup_date.isoformat(), "return_date": return_date.isoformat()}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise transport_error(OPERATION, exc) from exc

        raise_for_server_error(OPERATION, response)
        body = read_json(response)

        # Without a definite answer the check fails closed
        if not response.is_success or body is None or "available" not in body:
            reason = body.get("error") if body else None
            logger.warning(
                "Availability check returned no usable answer",
                extra={"vehicle_id": vehicle_id, "http_status": response.status_code},
            )
            raise TransientError(OPERATION, reason or f"HTTP {response.status_code}")

        next_available = body.get("next_available_date")
        return AvailabilityResult(
            available=bool(body["available"]),
            reason=body.get("reason"),
            next_available_date=date.fromisoformat(next_available) if next_available else None,
        )
