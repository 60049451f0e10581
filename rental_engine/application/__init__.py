"""
Capa de Aplicación - Motor de precios, disponibilidad y cupones.

Esta capa contiene los casos de uso, los servicios con estado y las
interfaces (puertos). Orquesta la lógica de dominio y define los contratos
con los colaboradores externos.

Estructura:
- use_cases/: Casos de uso del sistema (cotizar, disponibilidad, envío de reserva)
- services/: Coordinador de validación de cupones y proveedor de tarifas
- interfaces/: Puertos (contratos para adaptadores)
"""

from rental_engine.application.interfaces import (
    AvailabilityGateway,
    AvailabilityResult,
    BookingConfirmation,
    BookingGateway,
    Clock,
    CouponGateway,
    FakeClock,
    FeeSettingsGateway,
    PendingCouponStore,
    ReservationRepo,
    VehicleRepo,
)
from rental_engine.application.services import (
    CouponOutcome,
    CouponState,
    CouponValidationCoordinator,
    FeeSettingsProvider,
)

__all__ = [
    # Services
    "CouponOutcome",
    "CouponState",
    "CouponValidationCoordinator",
    "FeeSettingsProvider",
    # Interfaces - Repositories
    "ReservationRepo",
    "VehicleRepo",
    "PendingCouponStore",
    # Interfaces - Gateways
    "AvailabilityGateway",
    "AvailabilityResult",
    "BookingConfirmation",
    "BookingGateway",
    "CouponGateway",
    "FeeSettingsGateway",
    # Interfaces - Utilities
    "Clock",
    "FakeClock",
]
