"""
Best-fit size recommendation.

Scoring
───────
Every size index in the category's range is a candidate.  Its graded
measurements come from the canonical grading curve (the category's
default base measurements), never from project-specific overrides.

For each RecommendationRule whose body key and garment key are both
available:

    target     = transform(body value)            ideal garment value
    delta      = round1(graded − target)          > 0 means roomier
    step       = max(|increment or 1|, 0.5)       one grading step
    normalized = |delta| / step                   "size steps off"

    × 1.6 if the rule prefers not smaller and delta < 0

A candidate's score is the weight-averaged normalized deviation.  A
candidate no rule applies to is disqualified.

Selection
─────────
Candidates are visited in ascending size order and replaced only on a
strictly lower score, so the smallest size wins ties.

    score ≤ 1.1  → High
    score ≤ 2.0  → Medium
    otherwise    → Low

Reported details are the three dimensions with the smallest |delta|.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from sizegrade.config import config
from sizegrade.core.categories import (
    CategoryConfig,
    CategoryRegistry,
    get_base_size_num,
    get_size_label,
    resolve_category,
)
from sizegrade.core.construction import body_value, finite_or_none
from sizegrade.core.grading import grade_curve, round1
from sizegrade.models.schemas import (
    Confidence,
    FitBand,
    FitDetail,
    SizeRecommendation,
)

logger = logging.getLogger(__name__)

rcfg = config.recommendation


@dataclass(frozen=True)
class CandidateScore:
    """Score of one candidate size; details are in rule order."""
    size_num: int
    score: float
    details: tuple[FitDetail, ...]


# ── Helpers ────────────────────────────────────────────────────────────

def fit_from_delta(delta: float, step: float) -> FitBand:
    if delta < -step * rcfg.fit_band_ratio:
        return FitBand.tight
    if delta > step * rcfg.fit_band_ratio:
        return FitBand.roomy
    return FitBand.balanced


def confidence_from_score(score: float) -> Confidence:
    if score <= rcfg.high_confidence_max:
        return Confidence.high
    if score <= rcfg.medium_confidence_max:
        return Confidence.medium
    return Confidence.low


def _step_for(category: CategoryConfig, target_key: str) -> float:
    increment = category.increment(target_key) or rcfg.default_step
    return max(abs(increment), rcfg.min_step)


# ── Scoring ────────────────────────────────────────────────────────────

def score_candidate(
    category: CategoryConfig,
    size_num: int,
    graded: Mapping[str, float],
    body: Mapping[str, float],
) -> CandidateScore | None:
    """Weighted normalized deviation of one candidate; None if no rule applies."""
    weighted_score = 0.0
    weight_total = 0.0
    details: list[FitDetail] = []

    for rule in category.recommendation_rules:
        body_val = body_value(body, rule.source_key)
        garment_val = graded.get(rule.target_key)
        if body_val is None or garment_val is None:
            continue

        target = finite_or_none(rule.transform(body_val))
        if target is None:
            continue
        delta = round1(garment_val - target)
        step = _step_for(category, rule.target_key)

        normalized = abs(delta) / step
        if rule.prefer_not_smaller and delta < 0:
            normalized *= rcfg.undersize_penalty

        weighted_score += normalized * rule.weight
        weight_total += rule.weight

        meta = category.measurement(rule.target_key)
        details.append(FitDetail(
            label=meta.label if meta else rule.target_key,
            fit=fit_from_delta(delta, step),
            delta=delta,
            unit=meta.unit if meta else "cm",
        ))

    if weight_total == 0:
        return None

    return CandidateScore(
        size_num=size_num,
        score=weighted_score / weight_total,
        details=tuple(details),
    )


# ── Main recommendation function ──────────────────────────────────────

def recommend_size(
    category: str | CategoryConfig,
    base_size: str,
    size_system: str,
    body: Mapping[str, float],
    registry: CategoryRegistry | None = None,
) -> SizeRecommendation | None:
    """
    Recommend the best-fitting size for a set of body measurements.

    Returns None when the category has no recommendation rules or none
    of them can be evaluated with the supplied measurements.
    """
    cat = resolve_category(category, registry)
    if not cat.recommendation_rules:
        logger.debug("No recommendation rules for %s", cat.key)
        return None

    base_num = get_base_size_num(cat, base_size)
    sizes, curve = grade_curve(cat, base_num)

    best: CandidateScore | None = None
    for idx, size in enumerate(sizes):
        graded = {key: float(values[idx]) for key, values in curve.items()}
        candidate = score_candidate(cat, int(size), graded, body)
        if candidate is None:
            continue
        if best is None or candidate.score < best.score:
            best = candidate

    if best is None:
        logger.debug("No rule matched any candidate for %s", cat.key)
        return None

    details = sorted(best.details, key=lambda d: abs(d.delta))[: rcfg.max_details]
    confidence = confidence_from_score(best.score)

    logger.info(
        "Recommended %s size %d (score %.3f, %s)",
        cat.key, best.size_num, best.score, confidence.value,
    )

    return SizeRecommendation(
        size_num=best.size_num,
        size_label=get_size_label(cat, best.size_num, size_system),
        confidence=confidence,
        details=details,
    )
