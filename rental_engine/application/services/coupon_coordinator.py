"""
Coordinador de validación de cupones.

Protege la llamada remota de validación de un código de descuento con:

- debounce: sólo la última entrada estable (1000 ms sin cambios) dispara una validación;
- single-flight: a lo sumo una validación en vuelo; un segundo disparo se descarta;
- cooldown: al menos 3000 ms entre intentos;
- caché: el mismo par (código, teléfono) validado con éxito hace menos de 10 s no se revalida;
- compuerta de errores: el mismo mensaje no se muestra dos veces dentro del cooldown.

Hay una instancia por formulario de reserva; el estado nunca es global.
"""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from rental_engine.application.interfaces.clock import Clock
from rental_engine.application.interfaces.coupon_gateway import CouponGateway
from rental_engine.application.interfaces.coupon_store import PendingCouponStore
from rental_engine.domain.entities.coupon import CouponValidation, Discount
from rental_engine.domain.errors import CouponError, CouponErrorKind, TransientError
from rental_engine.domain.services.coupon_classifier import classify_coupon_message

logger = logging.getLogger(__name__)


class CouponState(str, Enum):
    """Estados del coordinador para la entrada actual."""

    IDLE = "idle"
    DEBOUNCING = "debouncing"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"
    TRANSIENT_ERROR = "transient_error"


SETTLED_STATES = frozenset(
    {CouponState.VALID, CouponState.INVALID, CouponState.TRANSIENT_ERROR}
)


class ErrorNotifier(Protocol):
    """Colaborador de UI que muestra/oculta el error de cupón (ya localizado)."""

    def show_error(self, error: CouponError) -> None:
        ...

    def clear_error(self) -> None:
        ...


@dataclass
class CouponValidationState:
    """Estado mutable compartido del formulario (un solo escritor: el coordinador)."""

    in_progress: bool = False
    last_validation_at_ms: int | None = None
    last_attempt_code: str | None = None
    last_attempt_phone: str | None = None
    last_validated_code: str | None = None
    last_validated_phone: str | None = None
    last_validated_at_ms: int | None = None
    last_error_message: str | None = None
    last_error_shown_at_ms: int | None = None
    # mensaje -> instante (ms) en que deja de considerarse visible
    pending_error_queue: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class CouponOutcome:
    """Último resultado asentado del coordinador."""

    state: CouponState
    code: str | None = None
    phone: str | None = None
    validation: CouponValidation | None = None
    error: CouponError | None = None

    def matches(self, code: str | None, phone: str | None) -> bool:
        return (
            self.code is not None
            and code is not None
            and self.code.upper() == code.strip().upper()
            and (self.phone or "") == (phone or "").strip()
        )


IDLE_OUTCOME = CouponOutcome(state=CouponState.IDLE)


class CouponValidationCoordinator:
    """
    Coordina la validación remota de cupones para un formulario de reserva.

    Los temporizadores de debounce se cancelan de verdad (``asyncio.Task.cancel``)
    cuando llega una entrada nueva. Una validación ya en vuelo no se aborta:
    si su par (código, teléfono) ya no es la entrada actual, su resultado se
    descarta y la entrada actual se vuelve a programar.
    """

    def __init__(
        self,
        gateway: CouponGateway,
        clock: Clock,
        *,
        store: PendingCouponStore | None = None,
        notifier: ErrorNotifier | None = None,
        debounce_ms: int = 1000,
        cooldown_ms: int = 3000,
        settle_ms: int = 500,
        error_display_ms: int = 6000,
        revalidate_window_ms: int = 10000,
    ) -> None:
        self._gateway = gateway
        self._clock = clock
        self._store = store
        self._notifier = notifier
        self._debounce_ms = debounce_ms
        self._cooldown_ms = cooldown_ms
        self._settle_ms = settle_ms
        self._error_display_ms = error_display_ms
        self._revalidate_window_ms = revalidate_window_ms

        self.state = CouponValidationState()
        self._status = CouponState.IDLE
        self._outcome = IDLE_OUTCOME
        self._input: tuple[str, str] | None = None
        self._error_visible = False
        self._pending_restored = False

        self._debounce_task: asyncio.Task | None = None
        self._validation_task: asyncio.Task | None = None
        self._release_task: asyncio.Task | None = None

    @property
    def status(self) -> CouponState:
        return self._status

    @property
    def outcome(self) -> CouponOutcome:
        return self._outcome

    # --- Entrada del usuario ---

    def restore_pending_code(self) -> str | None:
        """
        Lee una sola vez el cupón pendiente persistido en el cliente.

        El formulario lo usa para precargar el campo del código al montarse.
        """
        if self._pending_restored or self._store is None:
            return None
        self._pending_restored = True
        code = self._store.get()
        if code:
            logger.info("Restored pending coupon", extra={"coupon_code": code})
        return code or None

    def on_input(self, code: str | None, phone: str | None) -> None:
        """
        El usuario editó el código o el teléfono.

        Reinicia el debounce; con código o teléfono vacío vuelve a IDLE y
        oculta cualquier error visible.
        """
        code, phone = _normalize(code), _normalize(phone)
        self._cancel_debounce()

        if not code or not phone:
            self._input = None
            self._outcome = IDLE_OUTCOME
            self._status = CouponState.IDLE
            self._dismiss_error()
            return

        self._input = (code, phone)
        if self._outcome.state == CouponState.VALID and self._outcome.matches(code, phone):
            # Misma entrada que el cupón ya válido: nada que hacer
            self._status = CouponState.VALID
            return
        self._schedule(code, phone, self._debounce_ms)

    async def validate(self, code: str | None, phone: str | None) -> CouponOutcome | None:
        """
        Dispara una validación si pasan todas las guardas.

        Returns:
            El resultado de la validación, o None si una guarda descartó el
            disparo sin llamar a la red.
        """
        code, phone = _normalize(code), _normalize(phone)
        if not code or not phone:
            self._dismiss_error()
            return None

        self._input = (code, phone)

        if self.state.in_progress:
            logger.debug("Coupon validation dropped: already in flight", extra={"coupon_code": code})
            return None

        now = self._clock.monotonic_ms()

        elapsed = self._elapsed_since_attempt(now)
        if elapsed is not None and elapsed < self._cooldown_ms:
            if (code, phone) != (self.state.last_attempt_code, self.state.last_attempt_phone):
                # Entrada distinta: se reprograma para cuando termine el cooldown
                self._schedule(code, phone, self._cooldown_ms - elapsed)
            logger.debug("Coupon validation dropped: cooldown", extra={"coupon_code": code})
            return None

        if self._recently_validated(code, phone, now):
            self._status = CouponState.VALID
            return None

        self._validation_task = asyncio.get_running_loop().create_task(
            self._run_validation(code, phone)
        )
        # shield: cancelar el debounce que espera no aborta la llamada en vuelo
        return await asyncio.shield(self._validation_task)

    async def settled_result(self) -> CouponOutcome:
        """
        Espera a que se asiente la entrada actual y retorna el último resultado.

        No emite llamadas propias: sólo espera el debounce pendiente y la
        validación en vuelo del coordinador.
        """
        while True:
            pending = _pending(self._debounce_task) or _pending(self._validation_task)
            if pending is None:
                break
            await asyncio.wait({pending})
        return self._outcome

    def discount_for(self, code: str | None) -> Discount | None:
        """Descuento aplicable si el último cupón válido corresponde a ``code``."""
        outcome = self._outcome
        if outcome.state != CouponState.VALID or outcome.validation is None:
            return None
        if not code or outcome.code is None or outcome.code.upper() != code.strip().upper():
            return None
        return outcome.validation.to_discount()

    # --- Compuerta de errores ---

    def report_error(self, error: CouponError) -> bool:
        """
        Muestra un error de cupón si la compuerta lo permite.

        Un mensaje se suprime si sigue en la cola de mensajes visibles o si es
        igual al último mostrado y no pasó el cooldown.

        Returns:
            True si el error se mostró.
        """
        now = self._clock.monotonic_ms()
        self._prune_error_queue(now)
        message = error.message
        state = self.state

        if message in state.pending_error_queue:
            return False
        if (
            message == state.last_error_message
            and state.last_error_shown_at_ms is not None
            and now - state.last_error_shown_at_ms < self._cooldown_ms
        ):
            return False

        state.last_error_message = message
        state.last_error_shown_at_ms = now
        state.pending_error_queue[message] = now + self._error_display_ms
        self._error_visible = True
        logger.info(
            "Coupon error shown",
            extra={"coupon_error_kind": error.kind.value, "coupon_message": message},
        )
        if self._notifier is not None:
            self._notifier.show_error(error)
        return True

    # --- Ciclo de vida ---

    def consume(self) -> None:
        """
        El cupón se consumió en una reserva exitosa.

        Limpia todo el estado y el cupón pendiente persistido para que no se
        reaplique a una reserva posterior.
        """
        self._reset()
        if self._store is not None:
            self._store.clear()
        logger.info("Coupon consumed; coordinator state cleared")

    async def close(self) -> None:
        """Desmontaje del formulario: cancela temporizadores y validaciones en vuelo."""
        tasks = [
            task
            for task in (self._debounce_task, self._validation_task, self._release_task)
            if task is not None and not task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._reset()

    # --- Internos ---

    async def _run_validation(self, code: str, phone: str) -> CouponOutcome:
        state = self.state
        state.in_progress = True
        state.last_validation_at_ms = self._clock.monotonic_ms()
        state.last_attempt_code, state.last_attempt_phone = code, phone
        self._status = CouponState.VALIDATING
        hold_lock = False

        try:
            try:
                validation = await self._gateway.validate(code, phone)
            except TransientError as exc:
                logger.warning(
                    "Coupon validation transport failure",
                    extra={"coupon_code": code, "error": exc.message},
                )
                if self._is_superseded(code, phone):
                    return self._discard(code)
                return self._settle_error(
                    code,
                    phone,
                    None,
                    CouponError(CouponErrorKind.GENERIC, exc.message),
                    CouponState.TRANSIENT_ERROR,
                )

            if self._is_superseded(code, phone):
                return self._discard(code)

            if validation.valid:
                hold_lock = self._settle_ms > 0
                return self._settle_valid(code, phone, validation)

            kind = classify_coupon_message(validation.message)
            return self._settle_error(
                code,
                phone,
                validation,
                CouponError(kind, validation.message),
                CouponState.INVALID,
            )
        finally:
            if self._status == CouponState.VALIDATING:
                self._status = self._outcome.state
            if hold_lock:
                # Absorbe disparos duplicados que llegan justo después del éxito
                self._release_task = _spawn(self._release_after(self._settle_ms))
            else:
                state.in_progress = False
                self._rearm_if_stale()

    def _settle_valid(self, code: str, phone: str, validation: CouponValidation) -> CouponOutcome:
        state = self.state
        state.last_validated_code = code
        state.last_validated_phone = phone
        state.last_validated_at_ms = self._clock.monotonic_ms()
        self._dismiss_error()
        self._outcome = CouponOutcome(
            state=CouponState.VALID, code=code, phone=phone, validation=validation
        )
        self._status = CouponState.VALID
        logger.info("Coupon validated", extra={"coupon_code": code})
        return self._outcome

    def _settle_error(
        self,
        code: str,
        phone: str,
        validation: CouponValidation | None,
        error: CouponError,
        status: CouponState,
    ) -> CouponOutcome:
        state = self.state
        state.last_validated_code = None
        state.last_validated_phone = None
        state.last_validated_at_ms = None
        self._outcome = CouponOutcome(
            state=status, code=code, phone=phone, validation=validation, error=error
        )
        self._status = status
        self.report_error(error)
        return self._outcome

    def _discard(self, code: str) -> CouponOutcome:
        logger.info("Discarded superseded coupon validation", extra={"coupon_code": code})
        return self._outcome

    async def _release_after(self, delay_ms: int) -> None:
        try:
            await asyncio.sleep(delay_ms / 1000)
        finally:
            self.state.in_progress = False
        self._rearm_if_stale()

    async def _debounced(self, code: str, phone: str, delay_ms: int) -> None:
        await asyncio.sleep(delay_ms / 1000)
        try:
            await self.validate(code, phone)
        except Exception:
            # Nadie espera esta tarea: se registra en lugar de perderse
            logger.exception("Unexpected error in debounced coupon validation")

    def _schedule(self, code: str, phone: str, delay_ms: int) -> None:
        self._cancel_debounce()
        self._status = CouponState.DEBOUNCING
        self._debounce_task = _spawn(self._debounced(code, phone, max(0, delay_ms)))

    def _cancel_debounce(self) -> None:
        task = self._debounce_task
        self._debounce_task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    def _rearm_if_stale(self) -> None:
        """Reprograma la entrada actual si ningún resultado asentado le corresponde."""
        if self._input is None or _pending(self._debounce_task) is not None:
            return
        code, phone = self._input
        if self._outcome.state in SETTLED_STATES and self._outcome.matches(code, phone):
            return
        self._schedule(code, phone, self._debounce_ms)

    def _is_superseded(self, code: str, phone: str) -> bool:
        return self._input != (code, phone)

    def _elapsed_since_attempt(self, now: int) -> int | None:
        if self.state.last_validation_at_ms is None:
            return None
        return now - self.state.last_validation_at_ms

    def _recently_validated(self, code: str, phone: str, now: int) -> bool:
        state = self.state
        return (
            state.last_validated_at_ms is not None
            and state.last_validated_code == code
            and state.last_validated_phone == phone
            and now - state.last_validated_at_ms < self._revalidate_window_ms
        )

    def _prune_error_queue(self, now: int) -> None:
        queue = self.state.pending_error_queue
        for message in [m for m, expires_at in queue.items() if expires_at <= now]:
            del queue[message]

    def _dismiss_error(self) -> None:
        if not self._error_visible:
            return
        self._error_visible = False
        if self._notifier is not None:
            self._notifier.clear_error()

    def _reset(self) -> None:
        self._cancel_debounce()
        if self._release_task is not None and not self._release_task.done():
            self._release_task.cancel()
        self._release_task = None
        self._dismiss_error()
        self.state = CouponValidationState()
        self._outcome = IDLE_OUTCOME
        self._status = CouponState.IDLE
        self._input = None


def _normalize(value: str | None) -> str:
    return (value or "").strip()


def _pending(task: asyncio.Task | None) -> asyncio.Task | None:
    if task is None or task.done():
        return None
    return task


def _spawn(coro: Coroutine[Any, Any, None]) -> asyncio.Task:
    return asyncio.get_running_loop().create_task(coro)
