"""
Category configuration registry.

Architecture
────────────
A **CategoryConfig** holds everything static about one product category:
size range, base measurements at the reference size, per-size grading
increments, measurement metadata and the body → garment rule tables.

A **CategoryRegistry** is an immutable collection of configs with one
designated default.  Looking up an unknown key is not an error: it
resolves to the default category.  The fallback happens once, at
resolution, so labels, base-size parsing and rule tables all follow the
resolved category.

Size index policy
─────────────────
  • numeric scale (footwear): the index *is* the printed size, labelled
    "{system} {n}".  Base size labels are parsed as numbers.
  • alpha scale (apparel):   0=XS, 1=S, 2=M … 10=7XL.  Base size labels
    are reverse-looked-up; anything unknown means "M".
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from sizegrade.config import config
from sizegrade.core.errors import CategoryConfigError, SizeOutOfRangeError
from sizegrade.core.rules import (
    CONSTRUCTION_RULES,
    RECOMMENDATION_RULES,
    ConstructionRule,
    RecommendationRule,
)
from sizegrade.models.schemas import SizeScale

logger = logging.getLogger(__name__)

ALPHA_SIZE_LABELS: dict[int, str] = {
    0: "XS", 1: "S", 2: "M", 3: "L", 4: "XL", 5: "XXL",
    6: "3XL", 7: "4XL", 8: "5XL", 9: "6XL", 10: "7XL",
}
_ALPHA_INDEX = {label: idx for idx, label in ALPHA_SIZE_LABELS.items()}
_ALPHA_DEFAULT_INDEX = _ALPHA_INDEX["M"]

_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+))")


# ── Config data structures ─────────────────────────────────────────────

@dataclass(frozen=True)
class SizeRange:
    """Inclusive integer bounds of a category's size index."""
    min: int
    max: int

    def __contains__(self, size_num: int) -> bool:
        return self.min <= size_num <= self.max

    def sizes(self) -> list[int]:
        return list(range(self.min, self.max + 1))


@dataclass(frozen=True)
class MeasurementDef:
    key: str
    label: str
    unit: str


@dataclass(frozen=True)
class AngleDef:
    key: str
    label: str


@dataclass(frozen=True)
class CategoryConfig:
    """Static sizing data for one product category."""
    key: str
    label: str
    size_scale: SizeScale
    size_range: SizeRange
    default_base_size: str
    size_systems: tuple[str, ...]
    measurements: tuple[MeasurementDef, ...]
    default_base_measurements: Mapping[str, float]
    grading_increments: Mapping[str, float] = field(default_factory=dict)
    tolerances: Mapping[str, str] = field(default_factory=dict)
    quick_sizes: tuple[int, ...] = ()
    required_angles: tuple[AngleDef, ...] = ()
    optional_angles: tuple[AngleDef, ...] = ()
    body_measurement_keys: tuple[str, ...] = ()
    suggested_keywords: tuple[str, ...] = ()
    recommendation_rules: tuple[RecommendationRule, ...] = ()
    construction_rules: tuple[ConstructionRule, ...] = ()

    def __post_init__(self):
        # Read-only views; the dicts passed in may be shared literals.
        for name in ("default_base_measurements", "grading_increments", "tolerances"):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    def increment(self, key: str) -> float:
        """Grading increment per size step; absent keys do not grade."""
        return self.grading_increments.get(key, 0.0)

    def measurement(self, key: str) -> MeasurementDef | None:
        for m in self.measurements:
            if m.key == key:
                return m
        return None

    def validate(self) -> None:
        """Raise CategoryConfigError if the static data is inconsistent."""
        if self.size_range.min > self.size_range.max:
            raise CategoryConfigError(f"{self.key}: empty size range {self.size_range}")

        defined = {m.key for m in self.measurements}
        unlabeled = [k for k in self.default_base_measurements if k not in defined]
        if unlabeled:
            raise CategoryConfigError(
                f"{self.key}: base measurements without a definition: {unlabeled}"
            )

        if self.size_scale == SizeScale.numeric and _parse_size_number(self.default_base_size) is None:
            raise CategoryConfigError(
                f"{self.key}: default base size '{self.default_base_size}' is not numeric"
            )


# ── Registry ───────────────────────────────────────────────────────────

class CategoryRegistry:
    """Immutable, validated set of category configs with a default."""

    def __init__(self, categories: Iterable[CategoryConfig], default_key: str):
        table: dict[str, CategoryConfig] = {}
        for cat in categories:
            if cat.key in table:
                raise CategoryConfigError(f"Duplicate category key '{cat.key}'")
            cat.validate()
            table[cat.key] = cat

        if default_key not in table:
            raise CategoryConfigError(f"Default category '{default_key}' is not registered")

        self._categories = MappingProxyType(table)
        self._default_key = default_key

    @property
    def default(self) -> CategoryConfig:
        return self._categories[self._default_key]

    def get(self, key: str | None) -> CategoryConfig:
        """Config for *key*; unknown keys resolve to the default category."""
        cat = self._categories.get(key) if key is not None else None
        if cat is None:
            logger.debug("Unknown category %r, using default '%s'", key, self._default_key)
            return self.default
        return cat

    def is_known(self, key: str) -> bool:
        return key in self._categories

    def keys(self) -> list[str]:
        return list(self._categories)

    def __iter__(self) -> Iterator[CategoryConfig]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, key: object) -> bool:
        return key in self._categories


# ── Built-in categories ────────────────────────────────────────────────

def _footwear() -> CategoryConfig:
    return CategoryConfig(
        key="footwear",
        label="Footwear",
        size_scale=SizeScale.numeric,
        size_range=SizeRange(20, 50),
        default_base_size="30",
        size_systems=("EU", "US", "UK"),
        quick_sizes=(36, 38, 40, 42, 44, 46),
        measurements=(
            MeasurementDef("outsoleLength", "Outsole Length", "mm"),
            MeasurementDef("outsoleWidthForefoot", "Outsole Width (Forefoot)", "mm"),
            MeasurementDef("outsoleWidthHeel", "Outsole Width (Heel)", "mm"),
            MeasurementDef("heelHeight", "Heel Height", "mm"),
            MeasurementDef("soleThicknessForefoot", "Sole Thickness (Forefoot)", "mm"),
            MeasurementDef("soleThicknessHeel", "Sole Thickness (Heel)", "mm"),
            MeasurementDef("upperVampHeight", "Upper Vamp Height", "mm"),
            MeasurementDef("laceSpacing", "Lace Spacing", "mm"),
        ),
        default_base_measurements={
            "outsoleLength": 195, "outsoleWidthForefoot": 78, "outsoleWidthHeel": 62,
            "heelHeight": 28, "soleThicknessForefoot": 12, "soleThicknessHeel": 22,
            "upperVampHeight": 55, "laceSpacing": 18,
        },
        grading_increments={
            "outsoleLength": 6.67, "outsoleWidthForefoot": 2.0, "outsoleWidthHeel": 1.5,
            "heelHeight": 0.33, "soleThicknessForefoot": 0.2, "soleThicknessHeel": 0.3,
            "upperVampHeight": 1.5, "laceSpacing": 0.4,
        },
        tolerances={
            "outsoleLength": "±1.5 mm", "outsoleWidthForefoot": "±1.0 mm",
            "outsoleWidthHeel": "±1.0 mm", "heelHeight": "±0.5 mm",
            "soleThicknessForefoot": "±0.5 mm", "soleThicknessHeel": "±0.5 mm",
            "upperVampHeight": "±1.0 mm", "laceSpacing": "±0.5 mm",
        },
        required_angles=(
            AngleDef("lateral", "Lateral Side"),
            AngleDef("medial", "Medial Side"),
            AngleDef("top", "Top View"),
            AngleDef("bottom", "Bottom / Sole"),
            AngleDef("heel", "Heel Back"),
            AngleDef("front", "Front Toe"),
        ),
        optional_angles=(
            AngleDef("closeup_stitch", "Stitching Closeup"),
            AngleDef("closeup_logo", "Logo Detail"),
            AngleDef("closeup_outsole", "Outsole Pattern"),
        ),
        body_measurement_keys=("foot_length", "foot_width", "ankle_circumference", "arch_length"),
        suggested_keywords=(
            "Streetwear", "Athletic", "Minimalist", "Retro", "Luxury", "Sustainable",
            "Urban", "Trail", "Casual", "Formal", "Sporty", "Vintage",
        ),
        recommendation_rules=RECOMMENDATION_RULES["footwear"],
        construction_rules=CONSTRUCTION_RULES["footwear"],
    )


def _jacket() -> CategoryConfig:
    return CategoryConfig(
        key="jacket",
        label="Jacket & Outerwear",
        size_scale=SizeScale.alpha,
        size_range=SizeRange(0, 10),
        default_base_size="M",
        size_systems=("US", "EU", "UK"),
        quick_sizes=(0, 1, 2, 3, 4, 5),
        measurements=(
            MeasurementDef("chestWidth", "Chest Width (1/2)", "cm"),
            MeasurementDef("shoulderWidth", "Shoulder Width", "cm"),
            MeasurementDef("sleeveLength", "Sleeve Length", "cm"),
            MeasurementDef("bodyLength", "Body Length (CB)", "cm"),
            MeasurementDef("hemWidth", "Hem Width (1/2)", "cm"),
            MeasurementDef("neckOpening", "Neck Opening", "cm"),
            MeasurementDef("armholeDepth", "Armhole Depth", "cm"),
            MeasurementDef("cuffWidth", "Cuff Width", "cm"),
        ),
        default_base_measurements={
            "chestWidth": 54, "shoulderWidth": 46, "sleeveLength": 64,
            "bodyLength": 70, "hemWidth": 52, "neckOpening": 42,
            "armholeDepth": 24, "cuffWidth": 12,
        },
        grading_increments={
            "chestWidth": 2.0, "shoulderWidth": 1.5, "sleeveLength": 1.0,
            "bodyLength": 1.5, "hemWidth": 2.0, "neckOpening": 0.5,
            "armholeDepth": 0.5, "cuffWidth": 0.3,
        },
        tolerances={
            "chestWidth": "±1.0 cm", "shoulderWidth": "±0.5 cm", "sleeveLength": "±1.0 cm",
            "bodyLength": "±1.0 cm", "hemWidth": "±1.0 cm", "neckOpening": "±0.5 cm",
            "armholeDepth": "±0.5 cm", "cuffWidth": "±0.5 cm",
        },
        required_angles=(
            AngleDef("front", "Front View"),
            AngleDef("back", "Back View"),
            AngleDef("side", "Side View"),
            AngleDef("collar", "Collar Detail"),
            AngleDef("sleeve", "Sleeve Detail"),
            AngleDef("inside", "Inside / Lining"),
        ),
        optional_angles=(
            AngleDef("closeup_zipper", "Zipper / Closure Detail"),
            AngleDef("closeup_pocket", "Pocket Detail"),
            AngleDef("closeup_label", "Brand Label"),
        ),
        body_measurement_keys=(
            "chest_circumference", "shoulder_width", "arm_length",
            "waist_circumference", "neck_circumference", "torso_length",
            "back_width", "bicep_circumference",
        ),
        suggested_keywords=(
            "Streetwear", "Military", "Workwear", "Athleisure", "Puffer", "Bomber",
            "Minimalist", "Techwear", "Vintage", "Luxury", "Sustainable", "Oversized",
        ),
        recommendation_rules=RECOMMENDATION_RULES["jacket"],
        construction_rules=CONSTRUCTION_RULES["jacket"],
    )


def _dress() -> CategoryConfig:
    return CategoryConfig(
        key="dress",
        label="Dress",
        size_scale=SizeScale.alpha,
        size_range=SizeRange(0, 10),
        default_base_size="M",
        size_systems=("US", "EU", "UK"),
        quick_sizes=(0, 1, 2, 3, 4, 5),
        measurements=(
            MeasurementDef("bustWidth", "Bust Width (1/2)", "cm"),
            MeasurementDef("waistWidth", "Waist Width (1/2)", "cm"),
            MeasurementDef("hipWidth", "Hip Width (1/2)", "cm"),
            MeasurementDef("totalLength", "Total Length (CB)", "cm"),
            MeasurementDef("shoulderWidth", "Shoulder Width", "cm"),
            MeasurementDef("skirtLength", "Skirt Length", "cm"),
            MeasurementDef("neckDrop", "Neck Drop (Front)", "cm"),
            MeasurementDef("hemCircumference", "Hem Circumference (1/2)", "cm"),
        ),
        default_base_measurements={
            "bustWidth": 46, "waistWidth": 38, "hipWidth": 50,
            "totalLength": 100, "shoulderWidth": 38, "skirtLength": 60,
            "neckDrop": 12, "hemCircumference": 56,
        },
        grading_increments={
            "bustWidth": 2.0, "waistWidth": 2.0, "hipWidth": 2.0,
            "totalLength": 1.0, "shoulderWidth": 1.0, "skirtLength": 0.5,
            "neckDrop": 0.3, "hemCircumference": 2.0,
        },
        tolerances={
            "bustWidth": "±1.0 cm", "waistWidth": "±1.0 cm", "hipWidth": "±1.0 cm",
            "totalLength": "±1.5 cm", "shoulderWidth": "±0.5 cm", "skirtLength": "±1.0 cm",
            "neckDrop": "±0.5 cm", "hemCircumference": "±1.0 cm",
        },
        required_angles=(
            AngleDef("front", "Front View"),
            AngleDef("back", "Back View"),
            AngleDef("side", "Side View"),
            AngleDef("neckline", "Neckline Detail"),
            AngleDef("hemline", "Hemline Detail"),
            AngleDef("closure", "Closure / Zipper"),
        ),
        optional_angles=(
            AngleDef("closeup_fabric", "Fabric Closeup"),
            AngleDef("closeup_embellishment", "Embellishment Detail"),
            AngleDef("closeup_label", "Brand Label"),
        ),
        body_measurement_keys=(
            "bust_circumference", "waist_circumference", "hip_circumference",
            "shoulder_width", "total_height", "arm_length", "torso_length",
            "back_width", "thigh_circumference",
        ),
        suggested_keywords=(
            "Evening", "Casual", "Cocktail", "Boho", "Minimalist", "A-Line",
            "Wrap", "Maxi", "Midi", "Bridal", "Sustainable", "Avant-Garde",
        ),
        recommendation_rules=RECOMMENDATION_RULES["dress"],
        construction_rules=CONSTRUCTION_RULES["dress"],
    )


def _tshirt() -> CategoryConfig:
    return CategoryConfig(
        key="tshirt",
        label="T-Shirt & Top",
        size_scale=SizeScale.alpha,
        size_range=SizeRange(0, 10),
        default_base_size="M",
        size_systems=("US", "EU", "UK"),
        quick_sizes=(0, 1, 2, 3, 4, 5),
        measurements=(
            MeasurementDef("chestWidth", "Chest Width (1/2)", "cm"),
            MeasurementDef("bodyLength", "Body Length (CB)", "cm"),
            MeasurementDef("shoulderWidth", "Shoulder Width", "cm"),
            MeasurementDef("sleeveLength", "Sleeve Length", "cm"),
            MeasurementDef("hemWidth", "Hem Width (1/2)", "cm"),
            MeasurementDef("neckRibHeight", "Neck Rib Height", "cm"),
            MeasurementDef("armholeWidth", "Armhole Width (Straight)", "cm"),
            MeasurementDef("sleeveOpening", "Sleeve Opening", "cm"),
        ),
        default_base_measurements={
            "chestWidth": 50, "bodyLength": 72, "shoulderWidth": 44,
            "sleeveLength": 20, "hemWidth": 50, "neckRibHeight": 2,
            "armholeWidth": 22, "sleeveOpening": 18,
        },
        grading_increments={
            "chestWidth": 2.0, "bodyLength": 1.5, "shoulderWidth": 1.0,
            "sleeveLength": 0.5, "hemWidth": 2.0, "neckRibHeight": 0,
            "armholeWidth": 0.5, "sleeveOpening": 0.5,
        },
        tolerances={
            "chestWidth": "±1.0 cm", "bodyLength": "±1.0 cm", "shoulderWidth": "±0.5 cm",
            "sleeveLength": "±0.5 cm", "hemWidth": "±1.0 cm", "neckRibHeight": "±0.2 cm",
            "armholeWidth": "±0.5 cm", "sleeveOpening": "±0.5 cm",
        },
        required_angles=(
            AngleDef("front", "Front View"),
            AngleDef("back", "Back View"),
            AngleDef("side", "Side View"),
            AngleDef("collar", "Collar / Neckline"),
            AngleDef("sleeve", "Sleeve Detail"),
            AngleDef("hem", "Hem Detail"),
        ),
        optional_angles=(
            AngleDef("closeup_print", "Print / Graphic Detail"),
            AngleDef("closeup_label", "Brand Label"),
            AngleDef("closeup_stitch", "Stitching Detail"),
        ),
        body_measurement_keys=(
            "chest_circumference", "shoulder_width", "arm_length",
            "torso_length", "waist_circumference", "bicep_circumference",
            "neck_circumference",
        ),
        suggested_keywords=(
            "Streetwear", "Athletic", "Oversized", "Fitted", "Vintage", "Graphic",
            "Minimalist", "Basic", "Sustainable", "Luxury", "Casual", "Layering",
        ),
        recommendation_rules=RECOMMENDATION_RULES["tshirt"],
        construction_rules=CONSTRUCTION_RULES["tshirt"],
    )


def build_default_registry(default_key: str | None = None) -> CategoryRegistry:
    """The four built-in categories, in display order."""
    return CategoryRegistry(
        [_footwear(), _jacket(), _dress(), _tshirt()],
        default_key=default_key or config.registry.default_category,
    )


_DEFAULT_REGISTRY: CategoryRegistry | None = None


def default_registry() -> CategoryRegistry:
    """Process-wide built-in registry, built on first access."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = build_default_registry()
    return _DEFAULT_REGISTRY


# ── Lookups ────────────────────────────────────────────────────────────

def get_category_config(key: str | None, registry: CategoryRegistry | None = None) -> CategoryConfig:
    """Retrieve a category config; falls back to the default category if unknown."""
    return (registry or default_registry()).get(key)


def resolve_category(
    category: str | CategoryConfig,
    registry: CategoryRegistry | None = None,
) -> CategoryConfig:
    """Accept either a resolved config or a category key."""
    if isinstance(category, CategoryConfig):
        return category
    return get_category_config(category, registry)


def _parse_size_number(label: str) -> int | None:
    """Leading number of *label*, truncated to an integer index."""
    match = _LEADING_NUMBER.match(label or "")
    if match is None:
        return None
    value = float(match.group(1))
    if value == 0:
        return None
    return int(value)


def get_base_size_num(category: CategoryConfig, base_size: str) -> int:
    """
    Size index of a base-size label.

    Numeric categories parse the label ("42", "42.5", "38 EU") and fall
    back to the category's default base size.  Alpha categories look the
    exact label up in the XS … 7XL table and fall back to "M".
    """
    if category.size_scale == SizeScale.numeric:
        parsed = _parse_size_number(base_size)
        if parsed is None:
            logger.debug("Unparsable base size %r for %s", base_size, category.key)
            return _parse_size_number(category.default_base_size)
        return parsed

    idx = _ALPHA_INDEX.get(base_size)
    if idx is None:
        logger.debug("Unknown letter size %r for %s, using M", base_size, category.key)
        return _ALPHA_DEFAULT_INDEX
    return idx


def get_size_label(category: CategoryConfig, size_num: int, size_system: str) -> str:
    if category.size_scale == SizeScale.numeric:
        return f"{size_system} {size_num}"
    return ALPHA_SIZE_LABELS.get(size_num, f"Size {size_num}")


def validate_size(category: CategoryConfig, size_num: int) -> None:
    """Raise SizeOutOfRangeError unless size_num lies in the category's range."""
    rng = category.size_range
    if size_num not in rng:
        raise SizeOutOfRangeError(size_num, rng.min, rng.max)
