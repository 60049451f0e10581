from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Colaboradores externos (booking, disponibilidad, cupones, tarifas)
    use_in_memory: bool = Field(default=True, alias="USE_IN_MEMORY")
    api_base_url: str = Field(default="http://localhost:3000/api", alias="API_BASE_URL")
    http_timeout_seconds: float = 5.0
    breaker_fail_max: int = 5
    breaker_reset_timeout_seconds: int = 60

    # Servidor HTTP (comando rental-engine)
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=8000, alias="PORT")
    server_reload: bool = False

    # Coordinador de validación de cupones (milisegundos)
    coupon_debounce_ms: int = 1000
    coupon_cooldown_ms: int = 3000
    coupon_settle_ms: int = 500
    coupon_error_display_ms: int = 6000
    coupon_revalidate_window_ms: int = 10000

    # Política de precios
    currency_code: str = "EUR"
    fallback_daily_rate: Decimal = Decimal("60")
    outside_hours_fee: Decimal = Decimal("20")
    working_hours_start: int = 8
    working_hours_end: int = 18
    location_fees: dict[str, Decimal] = Field(
        default_factory=lambda: {
            "Our Office": Decimal("0"),
            "Chisinau Airport": Decimal("50"),
            "Iasi Airport": Decimal("150"),
        }
    )

    # Validación local del formulario
    min_customer_age: int = 18
    max_customer_age: int = 100

    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
