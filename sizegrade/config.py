"""
SizeGrade configuration.

All tunable parameters live here so the grading and recommendation
engine is fully configurable without touching algorithmic code.
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class RegistryConfig(BaseSettings):
    """Category registry behaviour."""

    # Unknown category keys resolve to this category instead of failing.
    default_category: str = "footwear"


class RecommendationConfig(BaseSettings):
    """Best-fit size search parameters."""

    undersize_penalty: float = 1.6  # multiplier when a prefer-not-smaller dimension comes out small
    fit_band_ratio: float = 0.35  # fraction of one grading step treated as "balanced"
    min_step: float = 0.5  # floor on the normalizing step size
    default_step: float = 1.0  # step used when a target has no grading increment
    high_confidence_max: float = 1.1
    medium_confidence_max: float = 2.0
    max_details: int = 3


class AppConfig(BaseSettings):
    """Top-level application configuration."""

    app_name: str = "SizeGrade"
    version: str = "0.1.0"
    debug: bool = False
    cors_origins: list[str] = ["*"]

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    recommendation: RecommendationConfig = Field(default_factory=RecommendationConfig)


config = AppConfig()
