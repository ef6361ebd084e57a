"""
Life premium calculation engine.

Formula:
    base rate * term mult * (coverage mult / base amount mult) * health mult * tobacco mult

The calculator never raises on applicant input. Anything missing, unknown or
outside a product's age window yields an ineligible result with a zero premium.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Mapping, Optional

from .interpolation import interpolate
from .products import (
    DEFAULT_RATE_TABLES,
    NEUTRAL_MULTIPLIER,
    HealthClass,
    ProductConfig,
    ProductType,
    RateTables,
    TobaccoStatus,
)

logger = logging.getLogger(__name__)

_MONEY_STEP = Decimal("0.01")


@dataclass(frozen=True)
class Applicant:
    product: Optional[ProductType] = None
    age: Optional[int] = None
    coverage: Optional[float] = None
    years: Optional[int] = None          # term length, only used for term life
    health_status: Optional[str] = None
    smoker_status: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Applicant":
        """Build an applicant from form data, accepting camelCase or snake_case keys."""

        def pick(*keys: str) -> Any:
            for key in keys:
                if data.get(key) not in (None, ""):
                    return data[key]
            return None

        return cls(
            product=ProductType.from_label(pick("product", "category")),
            age=_to_int(pick("age")),
            coverage=_to_float(pick("coverage")),
            years=_to_int(pick("years", "term_years")),
            health_status=_to_label(pick("health_status", "healthStatus")),
            smoker_status=_to_label(pick("smoker_status", "smokerStatus", "smoker")),
        )


@dataclass(frozen=True)
class QuoteResult:
    premium: float
    eligible: bool
    reason: Optional[str] = None
    breakdown: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def ineligible(cls, reason: str) -> "QuoteResult":
        return cls(premium=0.0, eligible=False, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "premium": self.premium,
            "eligible": self.eligible,
            "reason": self.reason,
            "breakdown": dict(self.breakdown),
        }


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    if number is None:
        return None
    return int(number)


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).replace(",", "").replace("$", "").strip())
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _to_label(value: Any) -> Optional[str]:
    if value is None:
        return None
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _round_money(amount: float) -> float:
    try:
        return float(Decimal(str(amount)).quantize(_MONEY_STEP, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return 0.0


def get_base_rate(config: ProductConfig, age: int) -> float:
    """Base rate for the tabulated age nearest ``age``; ties go to the younger age."""
    closest_age = min(config.rate_ages, key=lambda tabulated: abs(tabulated - age))
    return float(config.base_rates[closest_age])


def get_term_multiplier(product: ProductType, years: Optional[int], tables: RateTables) -> float:
    if product is not ProductType.TERM_LIFE or years is None:
        return NEUTRAL_MULTIPLIER
    return tables.multipliers.term_length.get(years, NEUTRAL_MULTIPLIER)


def get_coverage_factor(config: ProductConfig, coverage: float, tables: RateTables) -> float:
    """Coverage multiplier normalised to the product's reference amount."""
    tiers = tables.multipliers.coverage_tiers
    target = interpolate(coverage, tiers)
    reference = interpolate(config.base_amount, tiers)
    return target / reference


def get_health_multiplier(label: Optional[str], tables: RateTables) -> float:
    health = HealthClass.from_label(label)
    if health is None:
        return NEUTRAL_MULTIPLIER
    return tables.multipliers.health[health]


def get_tobacco_multiplier(label: Optional[str], tables: RateTables) -> float:
    status = TobaccoStatus.from_label(label)
    if status is None:
        return NEUTRAL_MULTIPLIER
    return tables.multipliers.tobacco[status]


def quote(applicant: Applicant, tables: RateTables = DEFAULT_RATE_TABLES) -> QuoteResult:
    """Price the monthly premium for an applicant."""
    product = ProductType.from_label(applicant.product)
    config = tables.get_product(product)
    if product is None or config is None:
        return QuoteResult.ineligible("unknown_product")

    if applicant.age is None:
        return QuoteResult.ineligible("missing_age")
    if applicant.coverage is None or not math.isfinite(applicant.coverage) or applicant.coverage <= 0:
        return QuoteResult.ineligible("missing_coverage")

    if not config.is_eligible(applicant.age):
        logger.debug(
            "Age %s outside %s window %s-%s", applicant.age, product.value, config.min_age, config.max_age
        )
        return QuoteResult.ineligible("age_out_of_range")

    base_rate = get_base_rate(config, applicant.age)
    term_mult = get_term_multiplier(product, applicant.years, tables)
    coverage_factor = get_coverage_factor(config, applicant.coverage, tables)
    health_mult = get_health_multiplier(applicant.health_status, tables)
    tobacco_mult = get_tobacco_multiplier(applicant.smoker_status, tables)

    total = base_rate * term_mult * coverage_factor * health_mult * tobacco_mult

    return QuoteResult(
        premium=_round_money(total),
        eligible=True,
        breakdown={
            "base_rate": base_rate,
            "term_multiplier": term_mult,
            "coverage_factor": coverage_factor,
            "health_multiplier": health_mult,
            "tobacco_multiplier": tobacco_mult,
        },
    )


def calculate_monthly_premium(tables: RateTables = DEFAULT_RATE_TABLES, **attributes: Any) -> float:
    """Premium only, 0.0 when the applicant cannot be quoted."""
    return quote(Applicant.from_mapping(attributes), tables).premium


def format_coverage(amount: float) -> str:
    """Short display label, e.g. ``$250k`` or ``$1.5M``."""
    if amount >= 1_000_000:
        millions = f"{amount / 1_000_000:.2f}".rstrip("0").rstrip(".")
        return f"${millions}M"
    return f"${amount / 1000:,.0f}k"
