"""Project estimates — budget, timeline and complexity.

Pure functions over the canonical tables in ``constants``. No I/O, no
randomness; identical inputs always give identical outputs.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..constants import (
    BASE_BUDGET_BY_TYPE,
    BASE_BUDGET_FALLBACK,
    BASE_WEEKS_BY_TYPE,
    BASE_WEEKS_FALLBACK,
    BUDGET_URGENCY_MULTIPLIERS,
    COMPLEXITY_BY_TYPE,
    COMPLEXITY_FALLBACK,
    COMPLEXITY_PER_FEATURE,
    CONTENT_MULTIPLIER_FALLBACK,
    CONTENT_MULTIPLIERS,
    FEATURE_COSTS,
    FEATURE_WEEKS,
    TIMELINE_URGENCY_MULTIPLIERS,
)


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round half away from zero (``Decimal`` avoids binary float surprises)."""
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def feature_surcharge(feature: str) -> int:
    """Cost added by one feature; unknown features cost nothing."""
    return FEATURE_COSTS.get(feature, 0)


def estimate_budget(
    project_type: Optional[str],
    features: Optional[Iterable[str]] = None,
    urgency: Optional[str] = None,
) -> int:
    """Estimated project budget in whole currency units."""
    total: float = BASE_BUDGET_BY_TYPE.get(project_type or "", BASE_BUDGET_FALLBACK)
    for feature in features or ():
        total += feature_surcharge(feature)
    total *= BUDGET_URGENCY_MULTIPLIERS.get(urgency or "", 1.0)
    return int(round_half_up(total))


def estimate_timeline(
    project_type: Optional[str],
    features: Optional[Iterable[str]] = None,
    has_content: Optional[str] = None,
    urgency: Optional[str] = None,
) -> int:
    """Estimated delivery time in weeks.

    Content readiness scales the base; an unanswered or unknown readiness
    assumes partial content.
    """
    weeks: float = BASE_WEEKS_BY_TYPE.get(project_type or "", BASE_WEEKS_FALLBACK)
    for feature in features or ():
        weeks += FEATURE_WEEKS.get(feature, 0)
    weeks *= CONTENT_MULTIPLIERS.get(has_content or "", CONTENT_MULTIPLIER_FALLBACK)
    weeks *= TIMELINE_URGENCY_MULTIPLIERS.get(urgency or "", 1.0)
    return int(round_half_up(weeks))


def complexity_score(
    project_type: Optional[str],
    features: Optional[Iterable[str]] = None,
) -> float:
    """Relative complexity, one decimal place. Every selected feature counts."""
    score: float = COMPLEXITY_BY_TYPE.get(project_type or "", COMPLEXITY_FALLBACK)
    score += len(list(features or ())) * COMPLEXITY_PER_FEATURE
    return float(round_half_up(score, places=1))
