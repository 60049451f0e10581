import logging
from typing import Any

import httpx

from rental_engine.application.interfaces.fee_settings_gateway import FeeSettingsGateway
from rental_engine.domain.entities.fee_settings import FeeSettings
from rental_engine.domain.errors import TransientError
from rental_engine.domain.value_objects.money import to_decimal
from rental_engine.infrastructure.circuit_breaker import call_with_breaker, fee_settings_breaker
from rental_engine.infrastructure.gateways.http_support import (
    raise_for_server_error,
    read_json,
    transport_error,
)

logger = logging.getLogger(__name__)

OPERATION = "fee_settings"

# setting_key of the public fee map -> pickup location name
PICKUP_FEE_KEYS = {
    "office_pickup": "Our Office",
    "chisinau_airport_pickup": "Chisinau Airport",
    "iasi_airport_pickup": "Iasi Airport",
}


class FeeSettingsGatewayHTTP(FeeSettingsGateway):
    """
    Reads ``GET /fee-settings/public``.

    The endpoint answers a flat ``{setting_key: amount}`` map of the active
    settings. Keys missing from the answer keep the value from ``defaults``.
    """

    def __init__(self, base_url: str, defaults: FeeSettings, timeout_seconds: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._defaults = defaults
        self._timeout = timeout_seconds

    async def fetch(self) -> FeeSettings:
        return await call_with_breaker(fee_settings_breaker, OPERATION, self._fetch)

    async def _fetch(self) -> FeeSettings:
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(f"{self._base_url}/fee-settings/public")
        except httpx.HTTPError as exc:
            raise transport_error(OPERATION, exc) from exc

        raise_for_server_error(OPERATION, response)
        body = read_json(response)
        if not response.is_success or body is None:
            raise TransientError(OPERATION, f"HTTP {response.status_code}")
        return self.parse(body)

    def parse(self, body: dict[str, Any]) -> FeeSettings:
        location_fees = dict(self._defaults.location_fees)
        for key, location in PICKUP_FEE_KEYS.items():
            amount = to_decimal(body.get(key))
            if amount is not None and amount >= 0:
                location_fees[location] = amount

        outside_hours_fee = to_decimal(body.get("outside_hours_fee"), self._defaults.outside_hours_fee)
        logger.debug("Fee settings loaded", extra={"keys": sorted(body)})
        return FeeSettings(
            location_fees=location_fees,
            outside_hours_fee=outside_hours_fee,
            working_hours=self._defaults.working_hours,
        )
