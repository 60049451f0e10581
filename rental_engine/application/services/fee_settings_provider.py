import logging

from rental_engine.application.interfaces.fee_settings_gateway import FeeSettingsGateway
from rental_engine.domain.entities.fee_settings import FeeSettings
from rental_engine.domain.errors import TransientError

logger = logging.getLogger(__name__)


class FeeSettingsProvider:
    """
    Cargos vigentes para la calculadora de precios.

    Parte de los valores por defecto de configuración y los reemplaza con
    los de la API pública de tarifas cuando ``refresh()`` tiene éxito. Si la
    API no responde se siguen usando los últimos valores conocidos.
    """

    def __init__(self, defaults: FeeSettings, gateway: FeeSettingsGateway | None = None) -> None:
        self._current = defaults
        self._gateway = gateway

    @property
    def current(self) -> FeeSettings:
        return self._current

    async def refresh(self) -> FeeSettings:
        if self._gateway is None:
            return self._current
        try:
            self._current = await self._gateway.fetch()
        except TransientError as exc:
            logger.warning(
                "Fee settings refresh failed; keeping last known values",
                extra={"error": exc.message},
            )
        return self._current
