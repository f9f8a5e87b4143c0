"""
Body → garment rule tables.

Two kinds of rule map a body measurement (cm) onto a garment dimension:

  • RecommendationRule — the *ideal* garment value implied by a body
    measurement, plus how strongly a deviation from it counts when
    scoring candidate sizes.
  • ConstructionRule  — a labelled manufacturing spec derived one-way
    from a body measurement.  Never used for scoring.

Transforms are small pure functions built by the factories below, so each
one can be exercised on its own, away from the scoring loop.

Footwear transforms work in millimetres (garment side) from centimetres
(body side): ``mm_from_cm(offset=10)`` is ``value * 10 + 10``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

Transform = Callable[[float], float]


# ── Transform factories ────────────────────────────────────────────────

def linear(scale: float = 1.0, offset: float = 0.0) -> Transform:
    """value × scale + offset"""

    def transform(value: float) -> float:
        return value * scale + offset

    return transform


def mm_from_cm(scale: float = 1.0, offset: float = 0.0) -> Transform:
    """Centimetres → millimetres, then × scale + offset (offset in mm)."""

    def transform(value: float) -> float:
        return value * 10 * scale + offset

    return transform


def capped(scale: float, cap: float) -> Transform:
    """value × scale, never above cap."""

    def transform(value: float) -> float:
        return min(value * scale, cap)

    return transform


def fixed(result: float) -> Transform:
    """Ignores the body value (standard allowances)."""

    def transform(value: float) -> float:
        return result

    return transform


# ── Rule types ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RecommendationRule:
    source_key: str  # body measurement key
    target_key: str  # garment measurement key
    transform: Transform
    weight: float
    prefer_not_smaller: bool = False


@dataclass(frozen=True)
class ConstructionRule:
    body_key: str
    garment_key: str
    garment_label: str
    transform: Transform
    unit: str
    note: str


# ── Recommendation tables ──────────────────────────────────────────────

RECOMMENDATION_RULES: dict[str, tuple[RecommendationRule, ...]] = {
    "footwear": (
        RecommendationRule("foot_length", "outsoleLength", mm_from_cm(offset=10), 2.0, True),
        RecommendationRule("foot_width", "outsoleWidthForefoot", mm_from_cm(scale=0.88), 0.5, True),
    ),
    "jacket": (
        RecommendationRule("chest_circumference", "chestWidth", linear(0.5, 3), 1.6, True),
        RecommendationRule("waist_circumference", "hemWidth", linear(0.5, 2.5), 1.1, True),
    ),
    "dress": (
        RecommendationRule("bust_circumference", "bustWidth", linear(0.5, 2), 1.5, True),
        RecommendationRule("waist_circumference", "waistWidth", linear(0.5, 2), 1.3, True),
    ),
    "tshirt": (
        RecommendationRule("chest_circumference", "chestWidth", linear(0.5, 2), 1.5, True),
    ),
}


# ── Construction tables ────────────────────────────────────────────────

CONSTRUCTION_RULES: dict[str, tuple[ConstructionRule, ...]] = {
    "footwear": (
        ConstructionRule("foot_length", "insole_length", "Insole Length",
                         mm_from_cm(offset=5), "mm", "Foot length + 5mm toe room"),
        ConstructionRule("foot_length", "outsole_length", "Outsole Length",
                         mm_from_cm(offset=12), "mm", "Foot length + 12mm (toe + heel margin)"),
        ConstructionRule("foot_width", "insole_width", "Insole Width (Forefoot)",
                         mm_from_cm(offset=3), "mm", "Foot width + 3mm ease"),
        ConstructionRule("foot_width", "outsole_width", "Outsole Width (Forefoot)",
                         mm_from_cm(offset=8), "mm", "Foot width + 8mm (midsole overhang)"),
        ConstructionRule("ankle_circumference", "collar_circumference", "Collar Opening Circumference",
                         linear(offset=1.5), "cm", "Ankle circ + 1.5cm ease for entry"),
        ConstructionRule("foot_length", "vamp_height", "Vamp Height",
                         linear(0.35), "cm", "~35% of foot length"),
    ),
    "jacket": (
        ConstructionRule("chest_circumference", "chest_width_half", "Chest Width (1/2)",
                         linear(0.5, 4), "cm", "Body chest/2 + 4cm ease"),
        ConstructionRule("waist_circumference", "hem_width_half", "Hem Width (1/2)",
                         linear(0.5, 3), "cm", "Body waist/2 + 3cm ease"),
        ConstructionRule("shoulder_width", "shoulder_width_garment", "Shoulder Width",
                         linear(offset=1.5), "cm", "Body shoulder + 1.5cm"),
        ConstructionRule("arm_length", "sleeve_length", "Sleeve Length",
                         linear(offset=2), "cm", "Arm length + 2cm"),
        ConstructionRule("torso_length", "body_length_cb", "Body Length (CB)",
                         linear(offset=8), "cm", "Torso + 8cm (hip coverage)"),
        ConstructionRule("neck_circumference", "neck_opening", "Neck Opening",
                         linear(offset=2), "cm", "Neck circ + 2cm ease"),
        ConstructionRule("bicep_circumference", "armhole_depth", "Armhole Width",
                         linear(0.5, 2), "cm", "Bicep/2 + 2cm ease"),
        ConstructionRule("back_width", "across_back", "Across Back",
                         linear(offset=2), "cm", "Back width + 2cm ease"),
        ConstructionRule("chest_circumference", "seam_allowance", "Side Seam Allowance",
                         fixed(1.5), "cm", "Standard seam allowance"),
        ConstructionRule("chest_circumference", "hem_allowance", "Hem Fold Allowance",
                         fixed(3), "cm", "Standard header fold"),
    ),
    "dress": (
        ConstructionRule("bust_circumference", "bust_width_half", "Bust Width (1/2)",
                         linear(0.5, 3), "cm", "Bust/2 + 3cm ease"),
        ConstructionRule("waist_circumference", "waist_width_half", "Waist Width (1/2)",
                         linear(0.5, 2), "cm", "Waist/2 + 2cm ease"),
        ConstructionRule("hip_circumference", "hip_width_half", "Hip Width (1/2)",
                         linear(0.5, 3), "cm", "Hip/2 + 3cm ease"),
        ConstructionRule("shoulder_width", "shoulder_width_garment", "Shoulder Width",
                         linear(offset=1), "cm", "Body shoulder + 1cm"),
        ConstructionRule("torso_length", "bodice_length", "Bodice Length (CB to waist)",
                         linear(offset=1), "cm", "Torso + 1cm"),
        ConstructionRule("total_height", "total_length", "Total Length (CB)",
                         linear(0.58), "cm", "~58% of body height (knee-length)"),
        ConstructionRule("arm_length", "sleeve_length", "Sleeve Length (if applicable)",
                         linear(offset=1), "cm", "Arm length + 1cm"),
        ConstructionRule("thigh_circumference", "skirt_hem_half", "Skirt Hem (1/2)",
                         linear(offset=8), "cm", "Thigh + 8cm flare ease"),
        ConstructionRule("bust_circumference", "dart_intake", "Bust Dart Intake",
                         linear(0.04), "cm", "~4% of bust circ"),
        ConstructionRule("bust_circumference", "seam_allowance", "Seam Allowance",
                         fixed(1.5), "cm", "Standard seam allowance"),
    ),
    "tshirt": (
        ConstructionRule("chest_circumference", "chest_width_half", "Chest Width (1/2)",
                         linear(0.5, 3), "cm", "Chest/2 + 3cm ease"),
        ConstructionRule("waist_circumference", "hem_width_half", "Hem Width (1/2)",
                         linear(0.5, 2), "cm", "Waist/2 + 2cm ease"),
        ConstructionRule("shoulder_width", "shoulder_width_garment", "Shoulder Width",
                         linear(offset=1), "cm", "Body shoulder + 1cm"),
        ConstructionRule("arm_length", "sleeve_length", "Sleeve Length",
                         capped(0.35, 22), "cm", "Short sleeve: ~35% of arm length"),
        ConstructionRule("torso_length", "body_length_cb", "Body Length (CB)",
                         linear(offset=6), "cm", "Torso + 6cm coverage"),
        ConstructionRule("neck_circumference", "neck_rib_opening", "Neck Rib Opening",
                         linear(offset=1), "cm", "Neck circ + 1cm ease"),
        ConstructionRule("bicep_circumference", "armhole_width", "Armhole Width",
                         linear(0.5, 1.5), "cm", "Bicep/2 + 1.5cm ease"),
        ConstructionRule("bicep_circumference", "sleeve_opening", "Sleeve Opening",
                         linear(offset=2), "cm", "Bicep + 2cm ease"),
        ConstructionRule("chest_circumference", "seam_allowance", "Seam Allowance",
                         fixed(1), "cm", "Standard seam allowance"),
    ),
}
