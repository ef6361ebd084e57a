"""Error handling helpers for quote and lead delivery requests."""
from typing import Any, Dict
import logging

from src.integrations.contracts.leads import LeadErrorKind, LeadSubmissionError

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please complete all required fields and check your details before submitting."
TIMEOUT_MESSAGE = "The request took too long. Please check your connection and try again."
GENERIC_MESSAGE = (
    "We're experiencing technical difficulties sending your request. "
    "Please try again later or call us to speak with an advisor."
)


def user_message_for(kind: LeadErrorKind) -> str:
    if kind is LeadErrorKind.VALIDATION_ERROR:
        return VALIDATION_MESSAGE
    if kind is LeadErrorKind.TIMEOUT:
        return TIMEOUT_MESSAGE
    return GENERIC_MESSAGE


class ErrorHandler:
    def handle_submission_error(self, exc: LeadSubmissionError) -> Dict[str, Any]:
        """User-facing payload for a failed lead submission; provider bodies are never included."""
        logger.warning("Lead submission failed: kind=%s attempts=%s", exc.kind.value, exc.attempts)
        payload: Dict[str, Any] = {
            "message": user_message_for(exc.kind),
            "error_code": exc.kind.value,
            "retryable": exc.retryable,
        }
        if exc.kind is LeadErrorKind.VALIDATION_ERROR:
            payload["field_errors"] = list(exc.details)
        return payload

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled exception while processing request: %s", exc, exc_info=True)
        return {
            "message": "An internal error occurred while processing your request. Please try again later.",
            "error_code": LeadErrorKind.UNKNOWN.value,
            "retryable": False,
            "metadata": {"error": str(exc), "context": context or {}},
        }
