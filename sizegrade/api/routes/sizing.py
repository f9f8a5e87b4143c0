"""
Size recommendation endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from sizegrade.core.categories import get_category_config
from sizegrade.core.size_recommendation import recommend_size
from sizegrade.models.schemas import SizingRequest, SizingResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=SizingResponse)
async def get_sizing(req: SizingRequest):
    """Best-fit size for the supplied body measurements (null if none)."""
    cat = get_category_config(req.category)

    recommendation = recommend_size(
        cat,
        base_size=req.base_size,
        size_system=req.size_system,
        body=req.body_measurements,
    )
    if recommendation is None:
        logger.info("No recommendation for %s with keys %s", cat.key, sorted(req.body_measurements))

    return SizingResponse(category=cat.key, recommendation=recommendation)
