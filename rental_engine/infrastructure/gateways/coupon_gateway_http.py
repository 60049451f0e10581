import logging
from typing import Any
from urllib.parse import quote

import httpx

from rental_engine.application.interfaces.coupon_gateway import CouponGateway
from rental_engine.domain.entities.coupon import CouponValidation
from rental_engine.domain.value_objects.money import to_decimal
from rental_engine.infrastructure.circuit_breaker import call_with_breaker, coupon_breaker
from rental_engine.infrastructure.gateways.http_support import (
    raise_for_server_error,
    read_json,
    transport_error,
)

logger = logging.getLogger(__name__)

OPERATION = "coupon_validation"
UNKNOWN_CODE_MESSAGE = "coupons.invalid_code"


class CouponGatewayHTTP(CouponGateway):
    def __init__(self, base_url: str, timeout_seconds: float = 5.0) -> None:
        """
        HTTP coupon validation against the rental backend.

        Individual redemption codes (bound to a phone number) are tried first.
        When the backend does not know the code as a redemption code, the main
        coupon endpoint is asked instead.

        Args:
            base_url: Base URL of the rental API (e.g. http://host/api)
            timeout_seconds: Request timeout in seconds
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds

    async def validate(self, code: str, phone: str | None = None) -> CouponValidation:
        return await call_with_breaker(coupon_breaker, OPERATION, self._validate, code, phone)

    async def _validate(self, code: str, phone: str | None) -> CouponValidation:
        encoded = quote(code.strip(), safe="")
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                params = {"phone": phone} if phone else None
                redemption = await self._fetch(
                    client, f"{self._base_url}/coupons/validate-redemption/{encoded}", params
                )
                if redemption.get("valid") or redemption.get("message") != UNKNOWN_CODE_MESSAGE:
                    return self._parse(code, phone, redemption)

                plain = await self._fetch(client, f"{self._base_url}/coupons/validate/{encoded}")
        except httpx.HTTPError as exc:
            raise transport_error(OPERATION, exc) from exc

        return self._parse(code, phone, plain)

    async def _fetch(
        self, client: httpx.AsyncClient, url: str, params: dict[str, str] | None = None
    ) -> dict[str, Any]:
        response = await client.get(url, params=params)
        raise_for_server_error(OPERATION, response)
        body = read_json(response)
        if body is None:
            return {"valid": False, "message": response.text or None}
        if not response.is_success and "message" not in body:
            # 4xx answers carry {"error": ...}
            body = {"valid": False, "message": body.get("error")}
        return body

    @staticmethod
    def _parse(code: str, phone: str | None, body: dict[str, Any]) -> CouponValidation:
        details = body.get("coupon") if isinstance(body.get("coupon"), dict) else body
        free_days = details.get("free_days")
        try:
            free_days = int(free_days) if free_days is not None else None
        except (TypeError, ValueError):
            free_days = None

        validation = CouponValidation(
            code=code,
            phone=phone,
            valid=bool(body.get("valid")),
            message=body.get("message"),
            discount_percentage=to_decimal(details.get("discount_percentage")),
            free_days=free_days,
        )
        logger.info(
            "Coupon validated",
            extra={"coupon_code": code, "valid": validation.valid, "coupon_message": validation.message},
        )
        return validation
