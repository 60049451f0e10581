"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Tarifas, cargos y solicitudes de renta de prueba
- Reloj fake para cooldowns y reglas de fechas
- Cliente HTTP de prueba (FastAPI TestClient) sobre repositorios in-memory
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from rental_engine.api.dependencies import get_use_cases
from rental_engine.application.interfaces.clock import FakeClock
from rental_engine.application.services.fee_settings_provider import FeeSettingsProvider
from rental_engine.application.use_cases.check_availability import CheckAvailabilityUseCase
from rental_engine.application.use_cases.quote_price import QuotePriceUseCase
from rental_engine.domain.entities.fee_settings import FeeSettings
from rental_engine.domain.entities.rental_request import RentalRequest
from rental_engine.domain.entities.reservation import Reservation, ReservationStatus
from rental_engine.domain.entities.vehicle import VehicleTariff
from rental_engine.infrastructure.circuit_breaker import ALL_BREAKERS
from rental_engine.infrastructure.in_memory.coupon_gateway import StubCoupon, StubCouponGateway
from rental_engine.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from rental_engine.infrastructure.in_memory.vehicle_repo import InMemoryVehicleRepo
from rental_engine.main import app

TODAY = date(2024, 1, 8)

# ============================================================================
# DATOS DE PRUEBA
# ============================================================================


@pytest.fixture
def tariff() -> VehicleTariff:
    return VehicleTariff.from_price_policy(
        {"1-2": 50, "3-7": "45", "8-20": 40, "21-45": 35, "46+": 30},
        insurance_rates={"RCA": 0, "Casco": 15},
    )


@pytest.fixture
def fee_settings() -> FeeSettings:
    return FeeSettings(
        location_fees={
            "Our Office": Decimal("0"),
            "Chisinau Airport": Decimal("50"),
            "Iasi Airport": Decimal("150"),
        },
        outside_hours_fee=Decimal("20"),
    )


@pytest.fixture
def rental_request() -> RentalRequest:
    """Solicitud completa y válida: 2 días en horario de oficina, recogida en oficina."""
    return RentalRequest(
        vehicle_id="car-1",
        pickup_date=date(2024, 1, 10),
        pickup_time=time(10, 0),
        return_date=date(2024, 1, 12),
        return_time=time(10, 0),
        pickup_location="Our Office",
        dropoff_location="Our Office",
        customer_name="Ana Popescu",
        customer_email="ana.popescu@gmail.com",
        customer_phone="+373 69 123 456",
        customer_age=30,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(fixed_time=datetime.combine(TODAY, time(9, 0)))


@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """
    Reset circuit breakers antes de cada test.
    Evita que tests fallen por breakers abiertos de tests anteriores.
    """
    for breaker in ALL_BREAKERS:
        breaker.close()

    yield

    for breaker in ALL_BREAKERS:
        breaker.close()


# ============================================================================
# CLIENTE HTTP
# ============================================================================


@pytest.fixture
def reservation_repo() -> InMemoryReservationRepo:
    return InMemoryReservationRepo(
        [
            Reservation(
                vehicle_id="car-1",
                pickup_date=date(2024, 2, 1),
                return_date=date(2024, 2, 5),
                status=ReservationStatus.CONFIRMED,
                id="b-1",
            ),
            Reservation(
                vehicle_id="car-1",
                pickup_date=date(2024, 1, 6),
                return_date=date(2024, 1, 9),
                status=ReservationStatus.CONFIRMED,
                id="b-2",
            ),
            Reservation(
                vehicle_id="car-1",
                pickup_date=date(2024, 3, 1),
                return_date=date(2024, 3, 4),
                status=ReservationStatus.PENDING,
                id="b-3",
            ),
        ]
    )


@pytest.fixture
def client(
    tariff: VehicleTariff,
    fee_settings: FeeSettings,
    reservation_repo: InMemoryReservationRepo,
    fake_clock: FakeClock,
) -> Generator[TestClient, None, None]:
    """TestClient con casos de uso sobre repositorios in-memory sembrados."""
    coupon_gateway = StubCouponGateway(
        {
            "SAVE10": StubCoupon(discount_percentage=Decimal("10")),
            "WHEEL-2D": StubCoupon(free_days=1, phone="+37369123456"),
            "OLD": StubCoupon(rejection="coupons.expired"),
        }
    )

    def override_get_use_cases():
        return {
            "quote_price": QuotePriceUseCase(
                vehicle_repo=InMemoryVehicleRepo({"car-1": tariff}),
                fee_settings=FeeSettingsProvider(fee_settings),
                coupon_gateway=coupon_gateway,
            ),
            "check_availability": CheckAvailabilityUseCase(
                reservation_repo=reservation_repo,
                clock=fake_clock,
            ),
        }

    app.dependency_overrides[get_use_cases] = override_get_use_cases
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
