"""
Health check endpoints for monitoring and orchestration (K8s, Docker, etc.)

Provides multiple health check endpoints:
- /health: Basic liveness check (always returns 200)
- /health/ready: Readiness check (no collaborator circuit is open)
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from rental_engine.infrastructure.circuit_breaker import ALL_BREAKERS

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "rental-engine"


@router.get("/health")
async def health_check():
    """
    Basic liveness probe.

    Returns 200 OK if the application is running.
    """
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/ready")
async def health_check_ready():
    """
    Readiness probe.

    Reports the circuit state of every remote collaborator and returns 503
    while any of them is open.
    """
    checks = {breaker.name: breaker.current_state for breaker in ALL_BREAKERS}
    if any(state == "open" for state in checks.values()):
        logger.warning("Readiness check: collaborator circuit open", extra={"checks": checks})
        return JSONResponse(status_code=503, content={"status": "not_ready", "checks": checks})
    return {"status": "ready", "checks": checks}
