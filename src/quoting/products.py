"""
Life insurance product configuration.

Rate tables for every quotable product plus the global multiplier tables shared
across products. Values come from the Maryland life quoting workbook and are
compiled in; nothing here is editable at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple, Type

from .interpolation import CoverageTier


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ProductType(str, Enum):
    TERM_LIFE = "TERM_LIFE"
    WHOLE_LIFE = "WHOLE_LIFE"
    FINAL_EXPENSE = "FINAL_EXPENSE"

    @classmethod
    def from_label(cls, value: object) -> Optional["ProductType"]:
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            return None


class HealthClass(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below Average"

    @classmethod
    def from_label(cls, value: object) -> Optional["HealthClass"]:
        if isinstance(value, cls):
            return value
        label = str(value or "").strip().lower()
        return next((m for m in cls if m.value.lower() == label), None)


class TobaccoStatus(str, Enum):
    NON_SMOKER = "Non-smoker"
    SMOKER = "Smoker"

    @classmethod
    def from_label(cls, value: object) -> Optional["TobaccoStatus"]:
        """Accepts the quote page labels and the Yes/No lead answers."""
        if isinstance(value, cls):
            return value
        label = str(value or "").strip().lower()
        if label in ("smoker", "yes"):
            return cls.SMOKER
        if label in ("non-smoker", "no"):
            return cls.NON_SMOKER
        return None


NEUTRAL_MULTIPLIER = 1.0


# ---------------------------------------------------------------------------
# Config models
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductConfig:
    base_amount: float                   # reference coverage the base rates are quoted at
    min_age: int
    max_age: int
    base_rates: Mapping[int, float]

    def __post_init__(self) -> None:
        if self.min_age > self.max_age:
            raise ValueError(f"min_age {self.min_age} is greater than max_age {self.max_age}")
        if not self.base_rates:
            raise ValueError("base_rates must not be empty")
        ordered = dict(sorted(self.base_rates.items()))
        object.__setattr__(self, "base_rates", MappingProxyType(ordered))

    @property
    def rate_ages(self) -> Tuple[int, ...]:
        return tuple(self.base_rates.keys())

    def is_eligible(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age


def _require_complete(table: Mapping, enum_cls: Type[Enum], name: str) -> None:
    missing = [m.value for m in enum_cls if m not in table]
    if missing:
        raise ValueError(f"{name} multipliers missing for: {', '.join(missing)}")


@dataclass(frozen=True)
class MultiplierTables:
    term_length: Mapping[int, float]
    health: Mapping[HealthClass, float]
    tobacco: Mapping[TobaccoStatus, float]
    coverage_tiers: Tuple[CoverageTier, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _require_complete(self.health, HealthClass, "health")
        _require_complete(self.tobacco, TobaccoStatus, "tobacco")
        if not self.coverage_tiers:
            raise ValueError("coverage_tiers must not be empty")
        amounts = [t.amount for t in self.coverage_tiers]
        if any(b <= a for a, b in zip(amounts, amounts[1:])):
            raise ValueError("coverage_tiers amounts must be strictly increasing")
        object.__setattr__(self, "term_length", MappingProxyType(dict(self.term_length)))
        object.__setattr__(self, "health", MappingProxyType(dict(self.health)))
        object.__setattr__(self, "tobacco", MappingProxyType(dict(self.tobacco)))
        object.__setattr__(self, "coverage_tiers", tuple(self.coverage_tiers))


@dataclass(frozen=True)
class RateTables:
    products: Mapping[ProductType, ProductConfig]
    multipliers: MultiplierTables

    def __post_init__(self) -> None:
        object.__setattr__(self, "products", MappingProxyType(dict(self.products)))

    def get_product(self, product: object) -> Optional[ProductConfig]:
        product_type = ProductType.from_label(product)
        if product_type is None:
            return None
        return self.products.get(product_type)


# ---------------------------------------------------------------------------
# Compiled-in tables
# ---------------------------------------------------------------------------

PRODUCT_CONFIG: Dict[ProductType, ProductConfig] = {
    ProductType.TERM_LIFE: ProductConfig(
        base_amount=100_000,
        min_age=5,
        max_age=70,
        base_rates={
            5: 8, 10: 9, 15: 10, 18: 12, 25: 14, 30: 16, 35: 18,
            40: 22, 45: 30, 50: 42, 55: 60, 59: 75, 65: 115, 68: 130, 70: 175,
        },
    ),
    ProductType.WHOLE_LIFE: ProductConfig(
        base_amount=50_000,
        min_age=1,
        max_age=65,
        base_rates={
            1: 25, 5: 28, 10: 30, 15: 35, 18: 40, 25: 65, 35: 100, 45: 160, 55: 250, 65: 360,
        },
    ),
    ProductType.FINAL_EXPENSE: ProductConfig(
        base_amount=10_000,
        min_age=60,
        max_age=80,
        base_rates={60: 45, 65: 60, 70: 85, 75: 120, 80: 165},
    ),
}

MULTIPLIERS = MultiplierTables(
    term_length={10: 1.0, 20: 1.6, 30: 2.2},
    health={
        HealthClass.EXCELLENT: 0.85,
        HealthClass.GOOD: 1.0,
        HealthClass.AVERAGE: 1.3,
        HealthClass.BELOW_AVERAGE: 1.7,
    },
    tobacco={
        TobaccoStatus.NON_SMOKER: 1.0,
        TobaccoStatus.SMOKER: 2.3,
    },
    coverage_tiers=(
        CoverageTier(10_000, 0.28),  # extrapolated for final expense
        CoverageTier(50_000, 0.60),
        CoverageTier(100_000, 1.00),
        CoverageTier(250_000, 2.20),
        CoverageTier(500_000, 4.10),
    ),
)

DEFAULT_RATE_TABLES = RateTables(products=PRODUCT_CONFIG, multipliers=MULTIPLIERS)


def list_products(tables: RateTables = DEFAULT_RATE_TABLES) -> Iterable[Dict[str, object]]:
    """Summaries of the quotable products for display."""
    return [
        {
            "product": product_type.value,
            "base_amount": config.base_amount,
            "min_age": config.min_age,
            "max_age": config.max_age,
        }
        for product_type, config in tables.products.items()
    ]
