"""Tests for tag / axis vectors reduced to named axis scores."""

import pytest

from tastematch.models.axes import Axis, AxisScores, ObjectAxis
from tastematch.models.vectors import ObjectVector, SwipeDirection, TasteVector, WeightVector
from tastematch.services.profile import AxisMapper, generate_variants


class TestAxisScores:
    def test_zero_vector_gives_zero_scores(self):
        scores = AxisMapper.axis_scores(TasteVector.zero())
        assert all(v == 0.0 for v in scores.to_dict().values())

    def test_single_tag_reproduces_its_row(self):
        scores = AxisMapper.axis_scores(TasteVector(weights={"minimalist": 1.0}))
        assert scores.value(Axis.MINIMAL_ORNATE) == pytest.approx(-0.9)
        assert scores.value(Axis.SOFT_STRUCTURED) == pytest.approx(0.3)
        assert scores.value(Axis.SPARSE_LAYERED) == pytest.approx(-0.8)

    def test_scaling_the_weight_does_not_change_scores(self):
        once = AxisMapper.axis_scores(TasteVector(weights={"industrial": 1.0}))
        twice = AxisMapper.axis_scores(TasteVector(weights={"industrial": 2.0}))
        assert once.to_dict() == pytest.approx(twice.to_dict())

    def test_negative_weight_flips_the_row(self):
        scores = AxisMapper.axis_scores(TasteVector(weights={"minimalist": -1.0}))
        assert scores.value(Axis.MINIMAL_ORNATE) == pytest.approx(0.9)

    def test_two_tags_average(self):
        scores = AxisMapper.axis_scores(TasteVector(weights={"minimalist": 1.0, "artDeco": 1.0}))
        assert scores.value(Axis.MINIMAL_ORNATE) == pytest.approx(0.0)
        assert scores.value(Axis.WARM_COOL) == pytest.approx(0.2)

    def test_unknown_tag_dilutes_but_contributes_nothing(self):
        scores = AxisMapper.axis_scores(TasteVector(weights={"minimalist": 1.0, "vaporwave": 1.0}))
        assert scores.value(Axis.MINIMAL_ORNATE) == pytest.approx(-0.45)

    def test_order_independent(self):
        a = AxisMapper.axis_scores(TasteVector(weights={"rustic": 0.4, "coastal": -0.7, "japandi": 1.3}))
        b = AxisMapper.axis_scores(TasteVector(weights={"japandi": 1.3, "rustic": 0.4, "coastal": -0.7}))
        assert a.to_dict() == pytest.approx(b.to_dict())


class TestObjectAxisScores:
    def test_weights_are_clamped(self):
        scores = AxisMapper.object_axis_scores(ObjectVector(weights={"precision": 2.0, "patina": -0.5}))
        assert scores.value(ObjectAxis.PRECISION) == 1.0
        assert scores.value(ObjectAxis.PATINA) == -0.5
        assert scores.value(ObjectAxis.HERITAGE) == 0.0

    def test_dominant_tie_resolves_in_declaration_order(self):
        scores = AxisMapper.object_axis_scores(ObjectVector(weights={"heritage": 0.6, "patina": -0.6}))
        assert scores.dominant_axis == ObjectAxis.PATINA


class TestDominantAndSecondary:
    def test_dominant_tie_prefers_first_axis(self):
        scores = AxisScores.from_mapping({"warmCool": 0.5, "minimalOrnate": -0.5})
        assert scores.dominant_axis == Axis.MINIMAL_ORNATE

    def test_secondary_requires_magnitude(self):
        scores = AxisScores.from_mapping({"warmCool": 0.8, "lightDark": 0.1})
        assert scores.secondary_axis is None

    def test_secondary_axis(self):
        scores = AxisScores.from_mapping({"warmCool": 0.8, "lightDark": -0.4})
        assert scores.secondary_axis == Axis.LIGHT_DARK


class TestWeightVector:
    def test_swipe_deltas(self):
        vector = WeightVector()
        vector.apply_swipe("a", SwipeDirection.RIGHT)
        vector.apply_swipe("a", SwipeDirection.UP)
        vector.apply_swipe("b", SwipeDirection.LEFT)
        assert vector.get("a") == pytest.approx(3.0)
        assert vector.get("b") == pytest.approx(-0.8)

    def test_influences_and_avoids(self):
        vector = WeightVector(weights={"a": 0.9, "b": 0.4, "c": 0.1, "d": -0.5, "e": -0.3})
        assert vector.influences == ["a", "b"]
        assert vector.avoids == ["d", "e"]

    def test_confidence_levels(self):
        strong = WeightVector(weights={"a": 1.0, "b": 0.2})
        assert strong.confidence_level(14) == "Strong"
        assert strong.confidence_level(8) == "Developing"
        assert WeightVector(weights={"a": 0.0, "b": 0.0}).confidence_level(2) == "Low"

    def test_object_stability_level(self):
        vector = ObjectVector.zero()
        vector.apply_axis_swipe(ObjectAxis.PATINA, SwipeDirection.UP)
        assert vector.get("patina") == pytest.approx(2.0)
        assert vector.stability_level(14) == "Stable"
        assert vector.stability_level(7) == "Developing"
        assert vector.stability_level(3) == "Low"


class TestVariants:
    def test_empty_vector_has_no_variants(self):
        assert generate_variants(TasteVector()) == []

    def test_three_variants(self):
        vector = TasteVector(weights={"minimalist": 0.8, "japandi": 0.5, "bohemian": -0.6})
        more, shift, contrast = generate_variants(vector)

        assert more.label.startswith("More ")
        assert more.vector.get("minimalist") == pytest.approx(0.96)

        assert shift.label.endswith(" Shift")
        assert shift.vector.get("minimalist") == pytest.approx(0.68)
        assert shift.vector.get("japandi") == pytest.approx(0.575)

        assert contrast.label == "Contrast Mix"
        assert contrast.vector.get("bohemian") == pytest.approx(0.3)
        assert contrast.vector.get("minimalist") == pytest.approx(0.8)

    def test_single_tag_skips_shift(self):
        variants = generate_variants(TasteVector(weights={"rustic": 0.9}))
        assert [v.label for v in variants][-1] == "Contrast Mix"
        assert len(variants) == 2
