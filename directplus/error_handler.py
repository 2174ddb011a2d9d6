"""Error types and failure summaries for the Direct Plus adapter."""
from typing import Any, Dict, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class DirectPlusError(Exception):
    """Base class for errors raised by the adapter itself."""


class PreconditionError(DirectPlusError, ValueError):
    """A required caller field is missing; raised before any network call."""

    def __init__(self, message: str, *, missing: Optional[list] = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


class UnsupportedCurrencyError(PreconditionError):
    def __init__(self, currency: Optional[str]) -> None:
        super().__init__(f"Unsupported currency {currency!r}", missing=["currency"])
        self.currency = currency


class ConfigurationError(DirectPlusError):
    pass


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        if isinstance(exc, PreconditionError):
            logger.warning("Rejected Direct Plus call before sending: %s", exc)
            message = f"The request is incomplete: {exc}"
            retryable = False
        elif isinstance(exc, httpx.HTTPError):
            logger.error("Transport failure talking to Direct Plus: %s", exc, exc_info=True)
            message = "The payment processor could not be reached. Please try again later."
            retryable = True
        else:
            logger.error("Unhandled exception in Direct Plus adapter: %s", exc, exc_info=True)
            message = "An internal error occurred while processing the payment."
            retryable = False
        return {
            "success": False,
            "message": message,
            "retryable": retryable,
            "metadata": {"error": str(exc), "error_type": type(exc).__name__, "context": context or {}},
        }
