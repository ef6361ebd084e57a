"""
Lead delivery contracts.

Defines the result and error shapes for sending leads to the CRM. These are used by:
- clients/real_http/crm.py (real CRM endpoint)
- clients/mocks/crm.py (in-memory CRM for development/testing)
- the API layer, which maps errors to user-facing messages

Why:
- Callers branch on a closed set of error kinds instead of parsing provider errors
- Provider response bodies stay inside the error for logging and never reach users
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class LeadErrorKind(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TIMEOUT = "TIMEOUT"
    SERVER_ERROR = "SERVER_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    CLIENT_ERROR = "CLIENT_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    UNKNOWN = "UNKNOWN"


RETRYABLE_ERROR_KINDS: FrozenSet[LeadErrorKind] = frozenset(
    {
        LeadErrorKind.TIMEOUT,
        LeadErrorKind.SERVER_ERROR,
        LeadErrorKind.RATE_LIMITED,
        LeadErrorKind.TRANSPORT_ERROR,
    }
)


class DeliveryState(str, Enum):
    VALIDATING = "VALIDATING"
    SANITIZING = "SANITIZING"
    SENDING = "SENDING"
    RETRYING = "RETRYING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


def classify_status(status_code: int) -> LeadErrorKind:
    """Error kind for a non-2xx HTTP status."""
    if status_code == 429:
        return LeadErrorKind.RATE_LIMITED
    if status_code >= 500:
        return LeadErrorKind.SERVER_ERROR
    if 400 <= status_code < 500:
        return LeadErrorKind.CLIENT_ERROR
    return LeadErrorKind.UNKNOWN


# ---------------------------------------------------------------------------
# Errors and results
# ---------------------------------------------------------------------------

class LeadSubmissionError(Exception):
    """Raised when a lead cannot be delivered to the CRM."""

    def __init__(
        self,
        kind: LeadErrorKind,
        message: str,
        *,
        details: Optional[List[str]] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or []
        self.status_code = status_code
        self.response_body = response_body
        self.attempts = attempts

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_ERROR_KINDS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "details": list(self.details),
            "status_code": self.status_code,
            "attempts": self.attempts,
        }


@dataclass
class SubmissionResult:
    success: bool
    message: str
    data: Dict[str, Any] = field(default_factory=dict)
    attempts: int = 0
    error: Optional[LeadSubmissionError] = None

    @classmethod
    def succeeded(cls, data: Dict[str, Any], attempts: int) -> "SubmissionResult":
        return cls(success=True, message="Lead submitted successfully", data=data, attempts=attempts)

    @classmethod
    def failed(cls, error: LeadSubmissionError) -> "SubmissionResult":
        return cls(success=False, message=error.message, attempts=error.attempts, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "attempts": self.attempts,
            "error": self.error.to_dict() if self.error else None,
        }


# ---------------------------------------------------------------------------
# Abstract client interface
# ---------------------------------------------------------------------------

class LeadDeliveryClient(ABC):
    """Every CRM client (real or mock) must implement this interface."""

    @abstractmethod
    async def submit_lead(self, lead: Mapping[str, Any]) -> SubmissionResult:
        """Validate, sanitize and deliver a lead; raise LeadSubmissionError on failure."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True when the CRM endpoint is reachable."""
