"""Coverage tier interpolation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class CoverageTier:
    amount: float
    multiplier: float


def interpolate(amount: float, tiers: Sequence[CoverageTier]) -> float:
    """
    Piecewise-linear coverage multiplier for ``amount``.

    Amounts outside the configured range clamp to the nearest boundary tier.
    An amount equal to a tier's amount returns that tier's multiplier as-is.

    Args:
        amount: Requested coverage amount
        tiers: Tiers in strictly increasing ``amount`` order

    Returns:
        Coverage multiplier

    Raises:
        ValueError: empty or unordered tiers, or a NaN amount
    """
    if not tiers:
        raise ValueError("tiers must not be empty")
    if math.isnan(amount):
        raise ValueError("amount must be a number")

    first, last = tiers[0], tiers[-1]
    if amount <= first.amount:
        return first.multiplier
    if amount >= last.amount:
        return last.multiplier

    for lower, upper in zip(tiers, tiers[1:]):
        if amount == lower.amount:
            return lower.multiplier
        if amount == upper.amount:
            return upper.multiplier
        if lower.amount < amount < upper.amount:
            ratio = (amount - lower.amount) / (upper.amount - lower.amount)
            return lower.multiplier + (upper.multiplier - lower.multiplier) * ratio

    raise ValueError("tiers must be in strictly increasing amount order")
