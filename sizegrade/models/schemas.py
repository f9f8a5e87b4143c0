"""
Pydantic models for API request/response and internal data transfer.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field


# ── Enums ──────────────────────────────────────────────────────────────

class SizeScale(str, Enum):
    numeric = "numeric"  # size index printed as a number (footwear)
    alpha = "alpha"  # size index mapped to XS … 7XL


class FitBand(str, Enum):
    tight = "tight"
    balanced = "balanced"
    roomy = "roomy"


class Confidence(str, Enum):
    high = "High"
    medium = "Medium"
    low = "Low"


BodyValue = Annotated[float, Field(gt=0.0, allow_inf_nan=False, description="Centimetres")]


# ── Grading ────────────────────────────────────────────────────────────

class GradedSize(BaseModel):
    size_label: str
    size_num: int
    measurements: dict[str, float]


# ── Construction ───────────────────────────────────────────────────────

class ConstructionSpec(BaseModel):
    label: str
    value: float
    unit: str
    note: str
    body_source: str
    body_value: float


class LastSpec(BaseModel):
    """One shoe-last dimension, pre-formatted for display."""
    label: str
    foot_value: str
    last_value: str


# ── Size recommendation ────────────────────────────────────────────────

class FitDetail(BaseModel):
    label: str
    fit: FitBand
    delta: float
    unit: str


class SizeRecommendation(BaseModel):
    size_num: int
    size_label: str
    confidence: Confidence
    details: list[FitDetail] = Field(default_factory=list)


# ── Category metadata ──────────────────────────────────────────────────

class MeasurementInfo(BaseModel):
    key: str
    label: str
    unit: str
    base_value: float
    grading_increment: float
    tolerance: str | None = None


class AngleInfo(BaseModel):
    key: str
    label: str


class CategorySummary(BaseModel):
    key: str
    label: str
    size_scale: SizeScale
    min_size: int
    max_size: int
    default_base_size: str
    size_systems: list[str]


class CategoryDetail(CategorySummary):
    requested_key: str
    quick_sizes: list[int]
    measurements: list[MeasurementInfo]
    required_angles: list[AngleInfo]
    optional_angles: list[AngleInfo]
    body_measurement_keys: list[str]
    suggested_keywords: list[str]


# ── API request / response ─────────────────────────────────────────────

class GradingRequest(BaseModel):
    category: str = "footwear"
    base_size: str
    size_system: str = "EU"
    sizes: list[int] = Field(..., min_length=1)


class GradingResponse(BaseModel):
    category: str
    base_size_num: int
    base_size_label: str
    graded_sizes: list[GradedSize]


class SizingRequest(BaseModel):
    category: str = "footwear"
    base_size: str
    size_system: str = "EU"
    body_measurements: dict[str, BodyValue] = Field(default_factory=dict)


class SizingResponse(BaseModel):
    category: str
    recommendation: SizeRecommendation | None = None


class ConstructionRequest(BaseModel):
    category: str = "footwear"
    body_measurements: dict[str, BodyValue] = Field(default_factory=dict)


class ConstructionResponse(BaseModel):
    category: str
    construction_specs: list[ConstructionSpec]
    last_specs: list[LastSpec] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    version: str


class ErrorResponse(BaseModel):
    detail: str
