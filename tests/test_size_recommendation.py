"""
Tests for the best-fit size recommendation engine.
"""

import dataclasses

import pytest

from sizegrade.core.categories import CategoryRegistry
from sizegrade.core.size_recommendation import (
    confidence_from_score,
    fit_from_delta,
    recommend_size,
    score_candidate,
)
from sizegrade.models.schemas import Confidence, FitBand


# ── Helpers ────────────────────────────────────────────────────────────

class TestConfidenceBands:

    @pytest.mark.parametrize("score, expected", [
        (0.0, "High"),
        (1.1, "High"),
        (1.1000001, "Medium"),
        (2.0, "Medium"),
        (2.01, "Low"),
        (9.0, "Low"),
    ])
    def test_boundaries_inclusive(self, score, expected):
        assert confidence_from_score(score) == expected

    def test_returns_enum(self):
        assert confidence_from_score(1.5) is Confidence.medium


class TestFitFromDelta:

    @pytest.mark.parametrize("delta, step, expected", [
        (0.0, 2.0, FitBand.balanced),
        (-0.5, 2.0, FitBand.balanced),
        (0.5, 2.0, FitBand.balanced),
        (-1.0, 2.0, FitBand.tight),
        (1.0, 2.0, FitBand.roomy),
        (12.4, 2.0, FitBand.roomy),
        (-0.2, 0.5, FitBand.tight),
    ])
    def test_bands(self, delta, step, expected):
        assert fit_from_delta(delta, step) == expected


# ── Candidate scoring ──────────────────────────────────────────────────

class TestScoreCandidate:

    def test_symmetric_deltas_score_equal(self, ruler):
        low = score_candidate(ruler, 2, {"length": 100.0}, {"reach": 101.0})
        high = score_candidate(ruler, 3, {"length": 102.0}, {"reach": 101.0})
        assert low.score == high.score == 0.5
        assert low.details[0].delta == -1.0
        assert high.details[0].delta == 1.0

    def test_undersize_penalized_when_preferring_not_smaller(self, strict_ruler):
        small = score_candidate(strict_ruler, 2, {"length": 100.0}, {"reach": 101.0})
        large = score_candidate(strict_ruler, 3, {"length": 102.0}, {"reach": 101.0})
        assert small.score > large.score
        assert small.score == pytest.approx(0.8)
        assert large.score == pytest.approx(0.5)

    def test_no_matching_rule_disqualifies(self, ruler):
        assert score_candidate(ruler, 2, {"length": 100.0}, {}) is None
        assert score_candidate(ruler, 2, {"length": 100.0}, {"height": 170.0}) is None
        assert score_candidate(ruler, 2, {}, {"reach": 101.0}) is None

    @pytest.mark.parametrize("bad", ["101", None, True, float("nan"), float("inf")])
    def test_non_numeric_body_values_are_absent(self, ruler, bad):
        assert score_candidate(ruler, 2, {"length": 100.0}, {"reach": bad}) is None

    def test_details_in_rule_order(self, four_way):
        graded = {"a": 10.0, "b": 20.0, "c": 30.0, "d": 40.0}
        body = {"a": 10.4, "b": 19.9, "c": 31.0, "d": 40.2}
        result = score_candidate(four_way, 1, graded, body)
        assert [d.label for d in result.details] == ["A", "B", "C", "D"]
        assert [d.delta for d in result.details] == [-0.4, 0.1, -1.0, -0.2]
        assert result.score == pytest.approx(1.7 / 4)

    def test_zero_increment_uses_unit_step(self, ruler):
        flat = dataclasses.replace(ruler, grading_increments={})
        result = score_candidate(flat, 2, {"length": 100.0}, {"reach": 103.0})
        assert result.score == pytest.approx(3.0)
        assert result.details[0].fit == FitBand.tight

    def test_small_increment_floored(self, ruler):
        fine = dataclasses.replace(ruler, grading_increments={"length": 0.1})
        result = score_candidate(fine, 2, {"length": 100.0}, {"reach": 101.0})
        # step floors at 0.5
        assert result.score == pytest.approx(2.0)


# ── Recommendation ─────────────────────────────────────────────────────

class TestRecommendSize:

    def test_tie_goes_to_smaller_size(self, ruler):
        rec = recommend_size(ruler, "2", "X", {"reach": 101.0})
        assert rec.size_num == 2
        assert rec.size_label == "X 2"
        assert rec.confidence == "High"
        assert [(d.label, d.fit, d.delta) for d in rec.details] == [("Length", FitBand.tight, -1.0)]

    def test_penalty_breaks_tie_upwards(self, strict_ruler):
        rec = recommend_size(strict_ruler, "2", "X", {"reach": 101.0})
        assert rec.size_num == 3
        assert rec.details[0].fit == FitBand.roomy

    def test_details_truncated_to_closest_three(self, four_way):
        body = {"a": 10.4, "b": 19.9, "c": 31.0, "d": 40.2}
        rec = recommend_size(four_way, "1", "X", body)
        assert rec.size_num == 1
        assert [d.label for d in rec.details] == ["B", "D", "A"]
        assert [d.delta for d in rec.details] == [0.1, -0.2, -0.4]

    def test_footwear_end_to_end(self):
        rec = recommend_size("footwear", "30", "EU", {"foot_length": 24.5, "foot_width": 9.5})
        assert rec.size_num == 39
        assert rec.size_label == "EU 39"
        assert rec.confidence == Confidence.medium
        assert [(d.label, d.fit, d.delta, d.unit) for d in rec.details] == [
            ("Outsole Length", FitBand.balanced, 0.0, "mm"),
            ("Outsole Width (Forefoot)", FitBand.roomy, 12.4, "mm"),
        ]

    def test_footwear_length_only(self):
        rec = recommend_size("footwear", "30", "US", {"foot_length": 24.5})
        assert rec.size_num == 39
        assert rec.size_label == "US 39"
        assert rec.confidence == Confidence.high
        assert len(rec.details) == 1

    def test_jacket(self, jacket):
        body = {"chest_circumference": 100.0, "waist_circumference": 84.0}
        rec = recommend_size(jacket, "M", "US", body)
        assert rec.size_num == 1
        assert rec.size_label == "S"
        assert rec.confidence == Confidence.medium
        assert [(d.label, d.fit, d.delta) for d in rec.details] == [
            ("Chest Width (1/2)", FitBand.tight, -1.0),
            ("Hem Width (1/2)", FitBand.roomy, 5.5),
        ]

    def test_deterministic(self):
        body = {"foot_length": 26.1, "foot_width": 10.2}
        first = recommend_size("footwear", "30", "EU", body)
        second = recommend_size("footwear", "30", "EU", body)
        assert first == second

    def test_base_size_only_shifts_the_curve(self):
        # base size relabels which index the default measurements sit at
        rec = recommend_size("footwear", "32", "EU", {"foot_length": 24.5})
        assert rec.size_num == 41

    def test_unknown_category_uses_footwear_rules(self):
        rec = recommend_size("sandals", "30", "EU", {"foot_length": 24.5})
        assert rec.size_num == 39

    def test_missing_measurements_give_no_recommendation(self):
        assert recommend_size("footwear", "30", "EU", {}) is None
        assert recommend_size("tshirt", "M", "US", {"foot_length": 24.5}) is None

    @pytest.mark.parametrize("foot_length", [float("inf"), 1e308])
    def test_non_finite_or_overflowing_values_give_no_recommendation(self, foot_length):
        assert recommend_size("footwear", "30", "EU", {"foot_length": foot_length}) is None

    def test_infinite_value_ignored_beside_valid_one(self):
        rec = recommend_size("footwear", "30", "EU", {"foot_length": 24.5, "foot_width": float("inf")})
        assert rec.size_num == 39
        assert len(rec.details) == 1

    def test_category_without_rules(self, ruler):
        bare = dataclasses.replace(ruler, recommendation_rules=())
        assert recommend_size(bare, "2", "X", {"reach": 101.0}) is None

    def test_explicit_registry(self, ruler):
        reg = CategoryRegistry([ruler], default_key="ruler")
        rec = recommend_size("footwear", "2", "X", {"reach": 105.0}, registry=reg)
        assert rec.size_num == 4
        assert rec.size_label == "X 4"
