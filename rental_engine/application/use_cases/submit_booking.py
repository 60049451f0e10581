import logging
from enum import Enum

from rental_engine.application.interfaces.availability_gateway import AvailabilityGateway
from rental_engine.application.interfaces.booking_gateway import (
    BookingConfirmation,
    BookingGateway,
)
from rental_engine.application.interfaces.clock import Clock
from rental_engine.application.services.coupon_coordinator import (
    CouponState,
    CouponValidationCoordinator,
)
from rental_engine.domain.entities.price_breakdown import NotComputable, PriceBreakdown
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.errors import (
    AvailabilityConflict,
    CouponError,
    CouponErrorKind,
    DomainError,
    FieldValidationError,
    SubmissionInProgressError,
)
from rental_engine.domain.services.booking_rules import (
    MAX_CUSTOMER_AGE,
    MIN_CUSTOMER_AGE,
    validate_rental_request,
)

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    IDLE = "idle"
    LOCAL_VALIDATING = "local_validating"
    COUPON_VALIDATING = "coupon_validating"
    AVAILABILITY_CHECKING = "availability_checking"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


ACTIVE_STATES = frozenset(
    {
        SubmissionState.LOCAL_VALIDATING,
        SubmissionState.COUPON_VALIDATING,
        SubmissionState.AVAILABILITY_CHECKING,
        SubmissionState.SUBMITTING,
    }
)


class SubmitBookingUseCase:
    """
    Orquesta el envío de una reserva.

    Etapas: validación local -> cupón (resultado ya asentado del coordinador)
    -> disponibilidad (solapamiento de ventana) -> creación de la reserva.
    Cada etapa falla cerrada: un error detiene todas las siguientes. No hay
    reintentos automáticos; el usuario vuelve a enviar desde IDLE/FAILED.
    """

    def __init__(
        self,
        availability_gateway: AvailabilityGateway,
        booking_gateway: BookingGateway,
        coupon_coordinator: CouponValidationCoordinator,
        clock: Clock,
        min_age: int = MIN_CUSTOMER_AGE,
        max_age: int = MAX_CUSTOMER_AGE,
    ) -> None:
        self._availability_gateway = availability_gateway
        self._booking_gateway = booking_gateway
        self._coupon_coordinator = coupon_coordinator
        self._clock = clock
        self._min_age = min_age
        self._max_age = max_age
        self._state = SubmissionState.IDLE
        self._failure: DomainError | None = None

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def failure(self) -> DomainError | None:
        return self._failure

    async def execute(
        self,
        request: RentalRequest,
        breakdown: PriceBreakdown | NotComputable,
    ) -> BookingConfirmation:
        if self._state in ACTIVE_STATES:
            raise SubmissionInProgressError()

        self._failure = None
        try:
            self._state = SubmissionState.LOCAL_VALIDATING
            validate_rental_request(
                request,
                self._clock.today(),
                min_age=self._min_age,
                max_age=self._max_age,
            )
            if isinstance(breakdown, NotComputable):
                field = breakdown.missing[0] if breakdown.missing else "price"
                raise FieldValidationError(field, "el precio todavía no puede calcularse")

            code = request.normalized_discount_code
            if code is not None:
                self._state = SubmissionState.COUPON_VALIDATING
                await self._check_coupon(code, request.customer_phone)

            self._state = SubmissionState.AVAILABILITY_CHECKING
            availability = await self._availability_gateway.check(
                request.vehicle_id, request.pickup_date, request.return_date
            )
            if not availability.available:
                raise AvailabilityConflict(
                    request.vehicle_id,
                    next_available_date=availability.next_available_date,
                    reason=availability.reason,
                )

            self._state = SubmissionState.SUBMITTING
            # El desglose viaja congelado tal como se mostró al cliente
            confirmation = await self._booking_gateway.create_booking(request, breakdown)
        except DomainError as exc:
            self._state = SubmissionState.FAILED
            self._failure = exc
            logger.warning(
                "Booking submission failed",
                extra={"vehicle_id": request.vehicle_id, "error_code": exc.code},
            )
            raise
        except BaseException:
            self._state = SubmissionState.FAILED
            raise

        self._state = SubmissionState.SUCCEEDED
        self._coupon_coordinator.consume()
        logger.info(
            "Booking submitted",
            extra={
                "vehicle_id": request.vehicle_id,
                "booking_id": confirmation.booking_id,
                "final_price": str(breakdown.final_price),
            },
        )
        return confirmation

    async def _check_coupon(self, code: str, phone: str | None) -> None:
        outcome = await self._coupon_coordinator.settled_result()
        if outcome.state == CouponState.VALID and outcome.matches(code, phone):
            return
        if outcome.error is not None and outcome.matches(code, phone):
            raise outcome.error
        raise CouponError(CouponErrorKind.GENERIC, "coupons.not_validated")
