"""
Size grading endpoints.

Target sizes are range-checked before grading; an out-of-range size is
the one request error the engine reports (422).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from sizegrade.core.categories import get_base_size_num, get_category_config, get_size_label
from sizegrade.core.errors import SizeOutOfRangeError
from sizegrade.core.export import EXPORT_FILENAME, export_graded_csv
from sizegrade.core.grading import grade_sizes
from sizegrade.models.schemas import (
    ErrorResponse,
    GradedSize,
    GradingRequest,
    GradingResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _grade(req: GradingRequest) -> list[GradedSize]:
    try:
        return grade_sizes(req.category, req.base_size, req.size_system, req.sizes)
    except SizeOutOfRangeError as exc:
        logger.info("Rejected size %d for %s", exc.size_num, req.category)
        raise HTTPException(422, str(exc)) from exc


@router.post(
    "",
    response_model=GradingResponse,
    responses={422: {"model": ErrorResponse}},
)
async def grade(req: GradingRequest):
    """Graded measurement sets for the requested sizes."""
    cat = get_category_config(req.category)
    graded = _grade(req)
    base_num = get_base_size_num(cat, req.base_size)

    return GradingResponse(
        category=cat.key,
        base_size_num=base_num,
        base_size_label=get_size_label(cat, base_num, req.size_system),
        graded_sizes=graded,
    )


@router.post(
    "/export",
    response_class=Response,
    responses={200: {"content": {"text/csv": {}}}, 422: {"model": ErrorResponse}},
)
async def export_csv(req: GradingRequest):
    """Graded sizes as a downloadable CSV."""
    graded = _grade(req)
    csv_text = export_graded_csv(req.category, graded)
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
