"""
Lead record definition.

A lead is the flat dict the CRM receives: contact details, the quote inputs and
the estimated monthly premium, plus submission metadata.

Fields:
    first_name, last_name, email, phone, zip    contact details
    age, gender, health_status, smoker          applicant answers
    coverage, years                             requested cover and term
    estimated_monthly_premium                   premium shown to the applicant
    timestamp                                   ISO-8601 UTC, set when the lead is built
    source                                      origin tag (web_quote_tool)
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from src.quoting.premium import Applicant
from src.quoting.products import HealthClass, TobaccoStatus

DEFAULT_SOURCE = "web_quote_tool"

REQUIRED_FIELDS: Tuple[str, ...] = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "age",
    "zip",
    "gender",
    "health_status",
    "smoker",
    "coverage",
    "years",
    "estimated_monthly_premium",
)


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class LeadHealthStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    FAIR = "Fair"


class SmokerAnswer(str, Enum):
    YES = "Yes"
    NO = "No"


_HEALTH_TO_LEAD: Dict[HealthClass, LeadHealthStatus] = {
    HealthClass.EXCELLENT: LeadHealthStatus.EXCELLENT,
    HealthClass.GOOD: LeadHealthStatus.GOOD,
    HealthClass.AVERAGE: LeadHealthStatus.AVERAGE,
    HealthClass.BELOW_AVERAGE: LeadHealthStatus.FAIR,
}


def lead_health_status(label: Optional[str]) -> Optional[str]:
    """Map a quote-page health label onto the CRM's health enumeration."""
    health = HealthClass.from_label(label)
    if health is not None:
        return _HEALTH_TO_LEAD[health].value
    return label


def lead_smoker_answer(label: Optional[str]) -> Optional[str]:
    status = TobaccoStatus.from_label(label)
    if status is None:
        return label
    return SmokerAnswer.YES.value if status is TobaccoStatus.SMOKER else SmokerAnswer.NO.value


def build_lead(
    applicant: Applicant,
    contact: Mapping[str, Any],
    premium: float,
    *,
    gender: Optional[str] = None,
    source: str = DEFAULT_SOURCE,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Assemble a lead record from quote inputs, contact details and the computed premium."""
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return {
        "first_name": contact.get("first_name", contact.get("firstName")),
        "last_name": contact.get("last_name", contact.get("lastName")),
        "email": contact.get("email"),
        "phone": contact.get("phone"),
        "zip": contact.get("zip"),
        "age": applicant.age,
        "gender": gender if gender is not None else contact.get("gender"),
        "health_status": lead_health_status(applicant.health_status),
        "smoker": lead_smoker_answer(applicant.smoker_status),
        "coverage": applicant.coverage,
        "years": applicant.years,
        "estimated_monthly_premium": f"{premium:.2f}",
        "timestamp": timestamp,
        "source": source,
    }
