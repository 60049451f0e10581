import logging
from typing import Any

import httpx

from rental_engine.domain.errors import TransientError

logger = logging.getLogger(__name__)


def read_json(response: httpx.Response) -> dict[str, Any] | None:
    """Response body as a dict, or None when it is not a JSON object."""
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def raise_for_server_error(operation: str, response: httpx.Response) -> None:
    """5xx answers are transient; the caller decides what 4xx means."""
    if response.status_code >= 500:
        logger.warning(
            "Collaborator returned a server error",
            extra={"operation": operation, "http_status": response.status_code},
        )
        raise TransientError(operation, f"HTTP {response.status_code}")


def transport_error(operation: str, exc: httpx.HTTPError) -> TransientError:
    if isinstance(exc, httpx.TimeoutException):
        logger.warning("Collaborator request timeout", extra={"operation": operation})
        return TransientError(operation, "timeout")
    logger.error("Collaborator HTTP error", exc_info=exc, extra={"operation": operation})
    return TransientError(operation, str(exc) or exc.__class__.__name__)
