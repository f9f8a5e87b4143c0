"""
Construction measurements derived from body measurements.

Each ConstructionRule of the category is applied to the body value it
names.  Rules whose body key is missing are skipped; there is no partial
or fallback value.  Output keeps rule declaration order, which is also
the order the specs are presented in.

Footwear additionally gets last specs (the form the shoe is built on):

    last length  = foot length + 12 mm
    stick length = last length in barleycorns (1 bc = 25.4 / 3 mm)
    ball width   = foot width + 5 mm
"""

from __future__ import annotations

import math
from typing import Mapping

from sizegrade.core.categories import CategoryConfig, CategoryRegistry, resolve_category
from sizegrade.core.grading import format_number, round1
from sizegrade.models.schemas import ConstructionSpec, LastSpec

BARLEYCORN_MM = 25.4 / 3


def body_value(body: Mapping[str, object], key: str) -> float | None:
    """Numeric body measurement for *key*, or None if absent or not a finite number."""
    value = body.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def finite_or_none(value: float) -> float | None:
    """*value* if finite; huge inputs can overflow a transform to inf."""
    return value if math.isfinite(value) else None


def derive_construction_specs(
    category: str | CategoryConfig,
    body: Mapping[str, float],
    registry: CategoryRegistry | None = None,
) -> list[ConstructionSpec]:
    cat = resolve_category(category, registry)
    specs: list[ConstructionSpec] = []
    for rule in cat.construction_rules:
        value = body_value(body, rule.body_key)
        if value is None:
            continue
        derived = finite_or_none(rule.transform(value))
        if derived is None:
            continue
        specs.append(ConstructionSpec(
            label=rule.garment_label,
            value=round1(derived),
            unit=rule.unit,
            note=rule.note,
            body_source=rule.body_key,
            body_value=value,
        ))
    return specs


def derive_last_specs(
    category: str | CategoryConfig,
    body: Mapping[str, float],
    registry: CategoryRegistry | None = None,
) -> list[LastSpec]:
    """Shoe-last dimensions; empty for non-footwear categories."""
    cat = resolve_category(category, registry)
    if cat.key != "footwear":
        return []

    specs: list[LastSpec] = []
    foot_length = body_value(body, "foot_length")
    foot_width = body_value(body, "foot_width")

    if foot_length is not None and finite_or_none(foot_length * 10 + 12) is not None:
        last_mm = round1(foot_length * 10 + 12)
        last_cm = round1(last_mm / 10)
        specs.append(LastSpec(
            label="Last Length",
            foot_value=f"{format_number(foot_length)} cm",
            last_value=f"{format_number(last_mm)} mm ({format_number(last_cm)} cm)",
        ))
        barleycorns = round1(last_mm / BARLEYCORN_MM)
        specs.append(LastSpec(
            label="Stick Length (bc)",
            foot_value="—",
            last_value=f"{format_number(barleycorns)} bc",
        ))

    if foot_width is not None and finite_or_none(foot_width * 10 + 5) is not None:
        ball_mm = round1(foot_width * 10 + 5)
        specs.append(LastSpec(
            label="Ball Width",
            foot_value=f"{format_number(foot_width)} cm",
            last_value=f"{format_number(ball_mm)} mm",
        ))

    return specs
