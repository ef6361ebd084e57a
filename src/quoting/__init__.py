"""
Quoting package.

Table-driven monthly premium pricing for the life products (term life, whole
life, final expense). Everything here is pure and synchronous.
"""

from .interpolation import CoverageTier, interpolate
from .premium import Applicant, QuoteResult, calculate_monthly_premium, format_coverage, quote
from .products import (
    DEFAULT_RATE_TABLES,
    HealthClass,
    MultiplierTables,
    ProductConfig,
    ProductType,
    RateTables,
    TobaccoStatus,
    list_products,
)

__all__ = [
    "Applicant",
    "CoverageTier",
    "DEFAULT_RATE_TABLES",
    "HealthClass",
    "MultiplierTables",
    "ProductConfig",
    "ProductType",
    "QuoteResult",
    "RateTables",
    "TobaccoStatus",
    "calculate_monthly_premium",
    "format_coverage",
    "interpolate",
    "list_products",
    "quote",
]
