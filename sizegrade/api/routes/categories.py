"""
Category metadata endpoints.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from sizegrade.core.categories import CategoryConfig, default_registry, get_category_config
from sizegrade.models.schemas import (
    AngleInfo,
    CategoryDetail,
    CategorySummary,
    MeasurementInfo,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _summary_fields(cat: CategoryConfig) -> dict:
    return {
        "key": cat.key,
        "label": cat.label,
        "size_scale": cat.size_scale,
        "min_size": cat.size_range.min,
        "max_size": cat.size_range.max,
        "default_base_size": cat.default_base_size,
        "size_systems": list(cat.size_systems),
    }


@router.get("", response_model=list[CategorySummary])
async def list_categories():
    """All built-in categories in display order."""
    return [CategorySummary(**_summary_fields(cat)) for cat in default_registry()]


@router.get("/{key}", response_model=CategoryDetail)
async def get_category(key: str):
    """Full configuration; unknown keys resolve to the default category."""
    cat = get_category_config(key)
    if cat.key != key:
        logger.info("Category '%s' not found, serving '%s'", key, cat.key)

    return CategoryDetail(
        **_summary_fields(cat),
        requested_key=key,
        quick_sizes=list(cat.quick_sizes),
        measurements=[
            MeasurementInfo(
                key=m.key,
                label=m.label,
                unit=m.unit,
                base_value=cat.default_base_measurements.get(m.key, 0.0),
                grading_increment=cat.increment(m.key),
                tolerance=cat.tolerances.get(m.key),
            )
            for m in cat.measurements
        ],
        required_angles=[AngleInfo(key=a.key, label=a.label) for a in cat.required_angles],
        optional_angles=[AngleInfo(key=a.key, label=a.label) for a in cat.optional_angles],
        body_measurement_keys=list(cat.body_measurement_keys),
        suggested_keywords=list(cat.suggested_keywords),
    )
