"""Tests for the fixed random projection from style signals to embeddings."""

import pytest
from loguru import logger
from pydantic import ValidationError

from tastematch.models.embedding import EMBEDDING_SIZE, SIGNAL_COUNT, StyleEmbedding, StyleSignals
from tastematch.services.embedding.projector import EmbeddingProjector, SeededGaussian

from .helpers import unit_embedding


class TestSeededGaussian:
    def test_same_seed_same_sequence(self):
        a = SeededGaussian(42)
        b = SeededGaussian(42)
        assert [a.next_gaussian() for _ in range(10)] == [b.next_gaussian() for _ in range(10)]

    def test_uniform_in_unit_interval(self):
        rng = SeededGaussian()
        values = [rng.next_uniform() for _ in range(200)]
        assert all(0.0 <= v < 1.0 for v in values)


class TestProjector:
    def test_matrix_shape(self):
        matrix = EmbeddingProjector.matrix()
        assert len(matrix) == EMBEDDING_SIZE
        assert all(len(row) == SIGNAL_COUNT for row in matrix)

    def test_matrix_is_built_once(self):
        assert EmbeddingProjector.matrix() is EmbeddingProjector.matrix()

    def test_projection_is_deterministic(self):
        signals = StyleSignals(brightness=0.9, warmth=0.2, clutter=0.7)
        assert EmbeddingProjector.project(signals).dims == EmbeddingProjector.project(signals).dims

    def test_projection_is_normalized(self):
        embedding = EmbeddingProjector.project(StyleSignals(brightness=0.8, symmetry=0.1))
        assert embedding.magnitude() == pytest.approx(1.0)

    def test_different_signals_differ(self):
        a = EmbeddingProjector.project(StyleSignals(brightness=1.0, warmth=0.0))
        b = EmbeddingProjector.project(StyleSignals(brightness=0.0, warmth=1.0))
        assert a.dims != b.dims

    def test_projection_logs_the_leading_signals(self):
        messages: list[str] = []
        sink = logger.add(messages.append, level="TRACE", format="{message}")
        try:
            EmbeddingProjector.project(StyleSignals(brightness=0.9, warmth=0.8, clutter=0.7, symmetry=0.6))
        finally:
            logger.remove(sink)
        assert any("brightness: 0.90, warmth: 0.80" in m for m in messages)

    def test_all_zero_signals_project_to_zero(self):
        zeros = StyleSignals.from_vector([0.0] * SIGNAL_COUNT)
        assert EmbeddingProjector.project(zeros).is_zero

    @pytest.mark.parametrize(
        "vector",
        [None, [0.5] * 5, [0.5] * 10 + [1.5], [0.5] * 10 + [float("nan")], ["x"] * SIGNAL_COUNT],
    )
    def test_malformed_vector_falls_back_to_neutral(self, vector):
        neutral = EmbeddingProjector.project(StyleSignals.neutral())
        assert EmbeddingProjector.project_vector(vector).dims == neutral.dims


class TestStyleEmbedding:
    def test_rejects_wrong_length(self):
        with pytest.raises(ValidationError):
            StyleEmbedding(dims=[0.0] * 3)

    def test_blend_clamps_weight(self):
        start = StyleEmbedding.zero()
        target = unit_embedding(0)
        assert start.blend(target, 2.0).dims == target.dims
        assert start.blend(target, -1.0).dims == start.dims

    def test_cosine_of_zero_is_zero(self):
        assert StyleEmbedding.zero().cosine(unit_embedding(1)) == 0.0

    def test_normalized_zero_stays_zero(self):
        assert StyleEmbedding.zero().normalized().is_zero

    def test_signal_describe_lists_top_four(self):
        signals = StyleSignals(brightness=0.9, warmth=0.8, clutter=0.7, symmetry=0.6)
        assert signals.describe().split(", ")[0] == "brightness: 0.90"
        assert len(signals.describe().split(", ")) == 4
