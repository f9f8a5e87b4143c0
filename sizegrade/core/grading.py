"""
Linear size grading.

For a target size index  s  and base index  b:

    graded[k] = round1( base[k] + increment[k] × (s − b) )

Every key of the category's base measurements is graded, including keys
without an increment (those stay constant across sizes).  ``round1``
rounds half-up to one decimal so displayed and exported values carry no
floating-point noise.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

import numpy as np

from sizegrade.core.categories import (
    CategoryConfig,
    CategoryRegistry,
    get_base_size_num,
    get_size_label,
    resolve_category,
    validate_size,
)
from sizegrade.models.schemas import GradedSize

logger = logging.getLogger(__name__)


# ── Rounding / formatting ──────────────────────────────────────────────

def round1(value: float) -> float:
    """Round half-up to one decimal: round1(0.25) == 0.3, round1(-0.25) == -0.2."""
    scaled = value * 10 + 0.5
    if not math.isfinite(scaled):
        # too large to carry a decimal digit
        return value
    return math.floor(scaled) / 10


def _round1_array(values: np.ndarray) -> np.ndarray:
    return np.floor(values * 10 + 0.5) / 10


def format_number(value: float) -> str:
    """Display form: integral values without a trailing '.0'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


# ── Grading ────────────────────────────────────────────────────────────

def grade_measurements(
    category: CategoryConfig,
    size_num: int,
    base_size_num: int,
) -> dict[str, float]:
    """
    Graded measurement set for one size.

    Does not validate size_num against the category range; callers
    grading user-entered sizes go through ``validate_size`` first.
    """
    size_diff = size_num - base_size_num
    return {
        key: round1(value + category.increment(key) * size_diff)
        for key, value in category.default_base_measurements.items()
    }


def grade_curve(
    category: CategoryConfig,
    base_size_num: int,
) -> tuple[np.ndarray, dict[str, np.ndarray]]:
    """
    Canonical grading curve over the whole size range.

    Returns (sizes, {key: graded values aligned with sizes}), computed
    from the category's default base measurements.
    """
    sizes = np.arange(category.size_range.min, category.size_range.max + 1)
    diffs = (sizes - base_size_num).astype(float)

    curve: dict[str, np.ndarray] = {}
    for key, value in category.default_base_measurements.items():
        curve[key] = _round1_array(value + category.increment(key) * diffs)
    return sizes, curve


def grade_size(
    category: str | CategoryConfig,
    base_size: str,
    size_system: str,
    size_num: int,
    registry: CategoryRegistry | None = None,
) -> GradedSize:
    """Grade one size index into a labelled GradedSize."""
    cat = resolve_category(category, registry)
    base_num = get_base_size_num(cat, base_size)
    return GradedSize(
        size_label=get_size_label(cat, size_num, size_system),
        size_num=size_num,
        measurements=grade_measurements(cat, size_num, base_num),
    )


def grade_sizes(
    category: str | CategoryConfig,
    base_size: str,
    size_system: str,
    sizes: Iterable[int],
    registry: CategoryRegistry | None = None,
) -> list[GradedSize]:
    """
    Grade a set of user-entered sizes.

    Every size is range-checked first (SizeOutOfRangeError on the first
    bad one).  Duplicates collapse; the result is sorted by size index.
    """
    cat = resolve_category(category, registry)
    unique = sorted(set(sizes))
    for size_num in unique:
        validate_size(cat, size_num)

    graded = [grade_size(cat, base_size, size_system, s) for s in unique]
    logger.debug("Graded %d sizes for %s (base %s)", len(graded), cat.key, base_size)
    return graded
