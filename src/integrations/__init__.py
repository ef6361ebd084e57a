"""
Integrations layer.
This package contains all code used to communicate with external systems, i.e.
the CRM lead endpoint that receives accepted quotes.

Key rule:
- API routes MUST NOT call external APIs directly.
- Routes should call integration clients (under src/integrations/clients).
- We use the MOCK client during development and swap to the REAL_HTTP client
  when a CRM endpoint is configured.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (src/api/main.py).
"""

from .contracts.leads import (
    DeliveryState,
    LeadDeliveryClient,
    LeadErrorKind,
    LeadSubmissionError,
    RETRYABLE_ERROR_KINDS,
    SubmissionResult,
    classify_status,
)

__all__ = [
    "DeliveryState",
    "LeadDeliveryClient",
    "LeadErrorKind",
    "LeadSubmissionError",
    "RETRYABLE_ERROR_KINDS",
    "SubmissionResult",
    "classify_status",
]
