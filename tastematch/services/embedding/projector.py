import math
import threading

from loguru import logger

from tastematch.models.embedding import EMBEDDING_SIZE, SIGNAL_COUNT, StyleEmbedding, StyleSignals
from tastematch.services.embedding.constants import LCG_INCREMENT, LCG_MULTIPLIER, PROJECTION_SEED

_MASK_64 = (1 << 64) - 1


class SeededGaussian:
    """64-bit LCG (Knuth constants) feeding a Box-Muller transform."""

    def __init__(self, seed: int = PROJECTION_SEED):
        self.state = seed & _MASK_64

    def next_uniform(self) -> float:
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) & _MASK_64
        return (self.state >> 33) / float(1 << 31)

    def next_gaussian(self) -> float:
        # Only the first value of each Box-Muller pair is used
        u1 = max(1e-10, self.next_uniform())
        u2 = self.next_uniform()
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)


class EmbeddingProjector:
    """
    Maps 11 style signals to a 64-dim embedding via a fixed Gaussian random projection.

    The matrix is built lazily on first use and is read-only afterwards, so
    concurrent readers never need the lock once it exists.
    """

    _matrix: list[list[float]] | None = None
    _lock = threading.Lock()

    @classmethod
    def matrix(cls) -> list[list[float]]:
        if cls._matrix is None:
            with cls._lock:
                if cls._matrix is None:
                    rng = SeededGaussian()
                    cls._matrix = [[rng.next_gaussian() for _ in range(SIGNAL_COUNT)] for _ in range(EMBEDDING_SIZE)]
                    logger.debug(f"Built {EMBEDDING_SIZE}x{SIGNAL_COUNT} projection matrix (seed={PROJECTION_SEED})")
        return cls._matrix

    @classmethod
    def project(cls, signals: StyleSignals) -> StyleEmbedding:
        """
        Project signals into embedding space.

        Args:
            signals: Upstream visual signals

        Returns:
            L2-normalized embedding (zero embedding for an all-zero signal vector)
        """
        v = signals.as_vector()
        logger.trace(f"Projecting signals ({signals.describe()})")
        raw = [sum(w * x for w, x in zip(row, v)) for row in cls.matrix()]
        return StyleEmbedding(dims=raw).normalized()

    @classmethod
    def project_vector(cls, vector: list[float] | None) -> StyleEmbedding:
        """Project a raw upstream vector, falling back to neutral signals when malformed."""
        return cls.project(StyleSignals.from_vector(vector))
