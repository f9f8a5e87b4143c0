"""
Construction spec endpoint.

Derives manufacturing measurements (and shoe-last specs for footwear)
from body measurements.
"""

from __future__ import annotations

from fastapi import APIRouter

from sizegrade.core.categories import get_category_config
from sizegrade.core.construction import derive_construction_specs, derive_last_specs
from sizegrade.models.schemas import ConstructionRequest, ConstructionResponse

router = APIRouter()


@router.post("", response_model=ConstructionResponse)
async def get_construction_specs(req: ConstructionRequest):
    cat = get_category_config(req.category)
    return ConstructionResponse(
        category=cat.key,
        construction_specs=derive_construction_specs(cat, req.body_measurements),
        last_specs=derive_last_specs(cat, req.body_measurements),
    )
