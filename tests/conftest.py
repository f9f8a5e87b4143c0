"""
Shared test fixtures.
"""

import sys
from pathlib import Path

import pytest

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sizegrade.core.categories import (
    CategoryConfig,
    CategoryRegistry,
    MeasurementDef,
    SizeRange,
    build_default_registry,
)
from sizegrade.core.rules import RecommendationRule, linear
from sizegrade.models.schemas import SizeScale


@pytest.fixture
def registry() -> CategoryRegistry:
    return build_default_registry()


@pytest.fixture
def footwear(registry):
    return registry.get("footwear")


@pytest.fixture
def jacket(registry):
    return registry.get("jacket")


@pytest.fixture
def tshirt(registry):
    return registry.get("tshirt")


def make_ruler(prefer_not_smaller: bool = False) -> CategoryConfig:
    """Synthetic numeric category: one 'length' dimension, 100 at size 2, +2 per size."""
    return CategoryConfig(
        key="ruler",
        label="Ruler",
        size_scale=SizeScale.numeric,
        size_range=SizeRange(0, 4),
        default_base_size="2",
        size_systems=("X",),
        measurements=(MeasurementDef("length", "Length", "cm"),),
        default_base_measurements={"length": 100.0},
        grading_increments={"length": 2.0},
        recommendation_rules=(
            RecommendationRule("reach", "length", linear(), 1.0, prefer_not_smaller),
        ),
    )


@pytest.fixture
def ruler() -> CategoryConfig:
    return make_ruler()


@pytest.fixture
def strict_ruler() -> CategoryConfig:
    return make_ruler(prefer_not_smaller=True)


@pytest.fixture
def four_way() -> CategoryConfig:
    """Synthetic category with four identity rules, one per dimension."""
    keys = ("a", "b", "c", "d")
    return CategoryConfig(
        key="four_way",
        label="Four Way",
        size_scale=SizeScale.numeric,
        size_range=SizeRange(0, 2),
        default_base_size="1",
        size_systems=("X",),
        measurements=tuple(MeasurementDef(k, k.upper(), "cm") for k in keys),
        default_base_measurements={"a": 10.0, "b": 20.0, "c": 30.0, "d": 40.0},
        grading_increments={k: 1.0 for k in keys},
        recommendation_rules=tuple(
            RecommendationRule(k, k, linear(), 1.0, False) for k in keys
        ),
    )
