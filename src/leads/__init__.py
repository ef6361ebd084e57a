"""
Leads package.

A lead is the contact record plus the accepted quote that gets delivered to the
CRM. This package builds, validates and sanitizes lead records; delivery lives in
src/integrations/clients.
"""

from .models import DEFAULT_SOURCE, REQUIRED_FIELDS, build_lead
from .sanitizer import sanitize_lead
from .validation import LeadValidationResult, validate_contact_form, validate_lead

__all__ = [
    "DEFAULT_SOURCE",
    "REQUIRED_FIELDS",
    "LeadValidationResult",
    "build_lead",
    "sanitize_lead",
    "validate_contact_form",
    "validate_lead",
]
