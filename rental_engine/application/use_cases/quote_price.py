import logging
from dataclasses import dataclass
from decimal import Decimal

from rental_engine.application.interfaces.coupon_gateway import CouponGateway
from rental_engine.application.interfaces.vehicle_repo import VehicleRepo
from rental_engine.application.services.fee_settings_provider import FeeSettingsProvider
from rental_engine.domain.entities.coupon import Discount
from rental_engine.domain.entities.price_breakdown import NotComputable, PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.entities.vehicle import VehicleTariff
from rental_engine.domain.errors import VehicleNotFoundError
from rental_engine.domain.services.pricing import (
    FALLBACK_DAILY_RATE,
    compute_price,
    verify_breakdown,
)

logger = logging.getLogger(__name__)


@dataclass
class PriceVerification:
    matches: bool
    mismatched_fields: list[str]
    recomputed: PriceBreakdown | NotComputable


class QuotePriceUseCase:
    """
    Cotización del lado del servidor con el mismo contrato que la calculadora del cliente.

    Sirve para volver a derivar el precio de una reserva y compararlo con el
    desglose que envió el cliente.
    """

    def __init__(
        self,
        vehicle_repo: VehicleRepo,
        fee_settings: FeeSettingsProvider,
        coupon_gateway: CouponGateway | None = None,
        fallback_daily_rate: Decimal = FALLBACK_DAILY_RATE,
        currency_code: str = "EUR",
    ) -> None:
        self._vehicle_repo = vehicle_repo
        self._fee_settings = fee_settings
        self._coupon_gateway = coupon_gateway
        self._fallback_daily_rate = fallback_daily_rate
        self._currency_code = currency_code

    async def execute(self, request: RentalRequest) -> PriceBreakdown | NotComputable:
        tariff = await self._get_tariff(request.vehicle_id)
        discount = await self._resolve_discount(request)
        return compute_price(
            request,
            tariff,
            self._fee_settings.current,
            discount,
            fallback_daily_rate=self._fallback_daily_rate,
            currency_code=self._currency_code,
        )

    async def verify(self, request: RentalRequest, submitted: PriceBreakdown) -> PriceVerification:
        recomputed = await self.execute(request)
        if isinstance(recomputed, NotComputable):
            return PriceVerification(
                matches=False, mismatched_fields=list(recomputed.missing), recomputed=recomputed
            )
        mismatched = verify_breakdown(submitted, recomputed)
        if mismatched:
            logger.warning(
                "Submitted price does not match recomputed price",
                extra={"vehicle_id": request.vehicle_id, "fields": mismatched},
            )
        return PriceVerification(
            matches=not mismatched, mismatched_fields=mismatched, recomputed=recomputed
        )

    async def _get_tariff(self, vehicle_id: str | None) -> VehicleTariff:
        tariff = await self._vehicle_repo.get_tariff(vehicle_id) if vehicle_id else None
        if tariff is None:
            raise VehicleNotFoundError(str(vehicle_id))
        return tariff

    async def _resolve_discount(self, request: RentalRequest) -> Discount | None:
        code = request.normalized_discount_code
        if code is None or self._coupon_gateway is None:
            return None
        validation = await self._coupon_gateway.validate(code, request.customer_phone)
        return validation.to_discount()
