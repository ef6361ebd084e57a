"""Lead and contact-form validation.

Two validators live here:

* ``validate_lead`` checks a complete lead record before it is sent to the CRM.
  Every check runs, so callers get the full list of problems in one pass, in a
  stable order (required fields in declaration order, then format, range and
  enumeration checks).
* ``validate_contact_form`` checks the contact step of the quote wizard and
  returns a mapping of field name -> human-readable error message.

Neither validator raises for bad input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .models import REQUIRED_FIELDS, Gender, LeadHealthStatus, SmokerAnswer

MIN_AGE = 18
MAX_AGE = 150
MIN_COVERAGE = 100_000
MAX_COVERAGE = 5_000_000
MIN_PHONE_DIGITS = 10

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^[\d\s\-+()]+$")

_CONTACT_EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
_CONTACT_PHONE_RE = re.compile(r"^[0-9+\-()\s]{7,}$")


@dataclass
class LeadValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


def _as_str(v: Any) -> str:
    return "" if v is None else str(v)


def _strip(v: Any) -> str:
    return _as_str(v).strip()


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def is_present(value: Any) -> bool:
    """Numeric zero counts as present; None, False and empty values do not."""
    if _is_number(value):
        return True
    return bool(value)


def _to_number(value: Any) -> Optional[float]:
    try:
        number = float(value) if _is_number(value) else float(_strip(value).replace(",", ""))
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def add_error(errors: Dict[str, str], field: str, message: str) -> None:
    if field not in errors:
        errors[field] = message


def require_str(payload: Mapping[str, Any], field: str, errors: Dict[str, str], *, label: Optional[str] = None) -> str:
    value = _strip(payload.get(field))
    if not value:
        add_error(errors, field, f"{label or field} is required")
    return value


def is_valid_email(value: Any) -> bool:
    return bool(_EMAIL_RE.match(_as_str(value)))


def is_valid_phone(value: Any) -> bool:
    raw = _as_str(value)
    if not _PHONE_RE.match(raw):
        return False
    return sum(ch.isdigit() for ch in raw) >= MIN_PHONE_DIGITS


def validate_lead(lead: Mapping[str, Any]) -> LeadValidationResult:
    errors: List[str] = []

    for name in REQUIRED_FIELDS:
        if not is_present(lead.get(name)):
            errors.append(f"Missing required field: {name}")

    email = lead.get("email")
    if is_present(email) and not is_valid_email(email):
        errors.append("Invalid email format")

    phone = lead.get("phone")
    if is_present(phone) and not is_valid_phone(phone):
        errors.append("Invalid phone number format")

    age = lead.get("age")
    if is_present(age):
        age_value = _to_number(age)
        if age_value is None:
            errors.append("Age must be a number")
        elif age_value < MIN_AGE or age_value > MAX_AGE:
            errors.append(f"Age must be between {MIN_AGE} and {MAX_AGE}")

    coverage = lead.get("coverage")
    if is_present(coverage):
        coverage_value = _to_number(coverage)
        if coverage_value is None:
            errors.append("Coverage must be a number")
        elif coverage_value < MIN_COVERAGE or coverage_value > MAX_COVERAGE:
            errors.append("Coverage must be between $100k and $5M")

    gender = lead.get("gender")
    if is_present(gender) and gender not in [g.value for g in Gender]:
        errors.append("Invalid gender value")

    health = lead.get("health_status")
    if is_present(health) and health not in [h.value for h in LeadHealthStatus]:
        errors.append("Invalid health status value")

    smoker = lead.get("smoker")
    if is_present(smoker) and smoker not in [s.value for s in SmokerAnswer]:
        errors.append("Invalid smoker value")

    return LeadValidationResult(is_valid=not errors, errors=errors)


def validate_contact_form(data: Mapping[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    data = {
        **data,
        "first_name": data.get("first_name", data.get("firstName")),
        "last_name": data.get("last_name", data.get("lastName")),
    }

    require_str(data, "first_name", errors, label="First name")
    require_str(data, "last_name", errors, label="Last name")

    email = require_str(data, "email", errors, label="Email")
    if email and not _CONTACT_EMAIL_RE.search(email):
        add_error(errors, "email", "Email is invalid")

    phone = require_str(data, "phone", errors, label="Phone number")
    if phone and not _CONTACT_PHONE_RE.match(phone):
        add_error(errors, "phone", "Phone number is invalid")

    return errors
