"""Tests for hashing helpers, basis fingerprints, naming and presentation phrases."""

from datetime import datetime, timezone
from uuid import UUID

import pytest

from tastematch.models.axes import AxisScores, ObjectAxisScores
from tastematch.models.profile import ProfileNaming, TasteDomain
from tastematch.models.vectors import ObjectVector, TasteVector
from tastematch.services.naming.basis import BasisHashBuilder, bucket
from tastematch.services.naming.domain_naming import ObjectNamingEngine, ProfileNamingEngine
from tastematch.services.naming.hashing import (
    deterministic_index,
    pick,
    profile_seed,
    rolling_hash,
    round_half_away,
    seeded_shuffle,
)
from tastematch.services.naming.presentation import MAX_PHRASES, object_vocabulary, space_vocabulary, vocabulary_for
from tastematch.services.naming.profile_naming import DescriptionGenerator, ProfileNameGenerator
from tastematch.services.profile import AxisMapper

NOW = datetime(2026, 2, 14, 10, 0, tzinfo=timezone.utc)
PROFILE_ID = UUID("0b7e8d1a-44f2-4e0b-8c3a-9d6f5e2a1b07")


class TestHashing:
    def test_rolling_hash(self):
        assert rolling_hash("", 31) == 0
        assert rolling_hash("a", 31) == 97 * 31
        assert rolling_hash("ab", 31) == (97 * 31 + 98) * 31

    def test_rolling_hash_wraps_at_64_bits(self):
        assert rolling_hash("wrap" * 50, 2654435761) < 2**64

    def test_deterministic_index_range(self):
        assert 0 <= deterministic_index("anything", 37, 5) < 5
        assert deterministic_index("anything", 37, 0) == 0

    def test_pick_fallback(self):
        assert pick([], "key", 31, fallback="Studio") == "Studio"
        assert pick(["only"], "key", 31, fallback="Studio") == "only"

    @pytest.mark.parametrize("value, expected", [(2.5, 3), (-2.5, -3), (0.4, 0), (-0.6, -1), (1.49, 1)])
    def test_round_half_away(self, value, expected):
        assert round_half_away(value) == expected

    def test_profile_seed_ignores_case(self):
        assert profile_seed(PROFILE_ID) == profile_seed(str(PROFILE_ID).lower())
        assert profile_seed(PROFILE_ID) == rolling_hash(str(PROFILE_ID).upper(), 31)

    def test_seeded_shuffle(self):
        items = list(range(12))
        shuffled = seeded_shuffle(items, 987654321)
        assert sorted(shuffled) == items
        assert shuffled == seeded_shuffle(items, 987654321)
        assert items == list(range(12))


class TestBasisHash:
    def test_bucket(self):
        assert bucket(0.6) == "+H"
        assert bucket(-0.3) == "-M"
        assert bucket(0.1) == "+L"
        assert bucket(0.0) == "+L"

    def test_small_changes_keep_the_fingerprint(self):
        a = TasteVector(weights={"minimalist": 1.0, "japandi": 0.6, "rustic": -0.3})
        b = TasteVector(weights={"minimalist": 1.02, "japandi": 0.61, "rustic": -0.31})
        assert BasisHashBuilder.build(AxisMapper.axis_scores(a), a, 10) == BasisHashBuilder.build(
            AxisMapper.axis_scores(b), b, 10
        )

    def test_fingerprint_lists_top_keys_and_confidence(self):
        vector = TasteVector(weights={"minimalist": 1.0, "japandi": 0.6})
        parts = BasisHashBuilder.build(AxisMapper.axis_scores(vector), vector, 14).split("|")
        assert parts[-3:] == ["japandi", "minimalist", "Strong"]
        assert len(parts) == 7 + 3

    def test_tied_weights_ignore_key_order(self):
        a = TasteVector(weights={"bohemian": 1.0, "industrial": 0.5, "coastal": 0.5})
        b = TasteVector(weights={"coastal": 0.5, "bohemian": 1.0, "industrial": 0.5})
        fingerprint = BasisHashBuilder.build(AxisMapper.axis_scores(a), a, 8)
        assert fingerprint == BasisHashBuilder.build(AxisMapper.axis_scores(b), b, 8)
        assert fingerprint.split("|")[-3:-1] == ["bohemian", "coastal"]


class TestProfileNaming:
    minimal = TasteVector(weights={"minimalist": 1.0, "scandinavian": 0.4})
    ornate = TasteVector(weights={"bohemian": 1.0, "artDeco": 0.3})
    ornate_close = TasteVector(weights={"bohemian": 1.0, "artDeco": 0.95})

    def test_first_name(self):
        result = ProfileNamingEngine.resolve(self.minimal, 10, ProfileNaming(), now=NOW)
        assert result.did_update
        assert result.version == 1
        assert result.name
        assert result.previous_names == []
        assert result.updated_at == NOW

    def test_name_is_deterministic(self):
        a = ProfileNamingEngine.resolve(self.minimal, 10, ProfileNaming())
        b = ProfileNamingEngine.resolve(self.minimal, 10, ProfileNaming())
        assert (a.name, a.description, a.basis_hash) == (b.name, b.description, b.basis_hash)

    def test_same_basis_keeps_name(self):
        first = ProfileNamingEngine.resolve(self.minimal, 10, ProfileNaming(), now=NOW)
        again = ProfileNamingEngine.resolve(self.minimal, 10, first)
        assert not again.did_update
        assert again.name == first.name
        assert again.version == 1

    def test_evolves_on_real_change(self):
        first = ProfileNamingEngine.resolve(self.minimal, 20, ProfileNaming(), now=NOW)
        evolved = ProfileNamingEngine.resolve(self.ornate, 20, first)
        assert evolved.did_update
        assert evolved.version == 2
        assert evolved.previous_names == [first.name]
        assert evolved.basis_hash != first.basis_hash

    def test_holds_name_without_enough_signal(self):
        first = ProfileNamingEngine.resolve(self.minimal, 2, ProfileNaming(), now=NOW)
        held = ProfileNamingEngine.resolve(self.ornate_close, 2, first)
        assert not held.did_update
        assert held.name == first.name

    def test_previous_names_are_capped(self):
        existing = ProfileNaming(name="Current", version=4, basis_hash="old", previous_names=["One", "Two", "Three"])
        evolved = ProfileNamingEngine.resolve(self.ornate, 20, existing)
        assert evolved.previous_names == ["Two", "Three", "Current"]

    def test_space_name_has_two_words(self):
        scores = AxisMapper.axis_scores(self.minimal)
        assert len(ProfileNameGenerator.generate(scores, "basis").split()) >= 2

    def test_description_is_a_sentence(self):
        assert DescriptionGenerator.generate(AxisMapper.axis_scores(self.ornate)).endswith(".")

    @pytest.mark.parametrize("domain", [TasteDomain.ART, TasteDomain.OBJECTS])
    def test_other_domains_get_names(self, domain):
        vector = ObjectVector(weights={"patina": 0.9, "heritage": 0.6}) if domain == TasteDomain.OBJECTS else self.ornate
        result = ProfileNamingEngine.resolve(vector, 12, ProfileNaming(), domain=domain)
        assert result.name
        assert result.description

    def test_object_description(self):
        scores = ObjectAxisScores.from_mapping({"technicality": 0.9, "minimalism": 0.7, "precision": 0.7})
        assert ObjectNamingEngine.describe(scores)


class TestPresentation:
    def test_influence_phrases(self):
        scores = AxisScores.from_mapping({"warmCool": 0.8, "lightDark": 0.5, "minimalOrnate": -0.45, "softStructured": 0.2})
        phrases = space_vocabulary.influence_phrases(scores)
        assert 1 <= len(phrases) <= MAX_PHRASES
        assert phrases == space_vocabulary.influence_phrases(scores)
        assert all(p[0].isupper() for p in phrases)

    def test_avoid_phrases_need_strong_axes(self):
        assert space_vocabulary.avoid_phrases(AxisScores.from_mapping({"warmCool": 0.4})) == []
        assert len(space_vocabulary.avoid_phrases(AxisScores.from_mapping({"warmCool": 0.9, "lightDark": -0.7}))) == 2

    def test_object_vocabulary_covers_all_axes(self):
        scores = ObjectAxisScores.from_mapping({"patina": 0.9, "utility": -0.6})
        assert object_vocabulary.influence_phrases(scores)
        assert len(object_vocabulary.axes) == 9

    def test_one_line_reading_names_the_profile(self):
        scores = AxisScores.from_mapping({"warmCool": 0.8, "lightDark": -0.5})
        assert space_vocabulary.one_line_reading("Kyoto Quiet", scores).startswith("Kyoto Quiet")

    def test_vocabulary_for_picks_by_score_type(self):
        assert vocabulary_for(AxisScores.zero()) is space_vocabulary
        assert vocabulary_for(ObjectAxisScores.zero()) is object_vocabulary
