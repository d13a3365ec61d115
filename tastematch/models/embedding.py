import math

from loguru import logger
from pydantic import BaseModel, Field, field_validator

EMBEDDING_SIZE = 64
SIGNAL_COUNT = 11

SIGNAL_FIELDS: tuple[str, ...] = (
    "brightness",
    "contrast",
    "saturation",
    "warmth",
    "edge_density",
    "symmetry",
    "clutter",
    "material_hardness",
    "organic_vs_industrial",
    "ornate_vs_minimal",
    "vintage_vs_modern",
)


class StyleSignals(BaseModel):
    """
    Eleven interpretable visual signals produced upstream by image analysis.

    Photometric: brightness, contrast, saturation, warmth.
    Composition: edge density, symmetry, clutter.
    Material / mood: hardness, organic (1) vs industrial, ornate (1) vs minimal,
    vintage (1) vs modern.
    """

    brightness: float = Field(default=0.5, ge=0.0, le=1.0)
    contrast: float = Field(default=0.5, ge=0.0, le=1.0)
    saturation: float = Field(default=0.5, ge=0.0, le=1.0)
    warmth: float = Field(default=0.5, ge=0.0, le=1.0)
    edge_density: float = Field(default=0.5, ge=0.0, le=1.0)
    symmetry: float = Field(default=0.5, ge=0.0, le=1.0)
    clutter: float = Field(default=0.5, ge=0.0, le=1.0)
    material_hardness: float = Field(default=0.5, ge=0.0, le=1.0)
    organic_vs_industrial: float = Field(default=0.5, ge=0.0, le=1.0)
    ornate_vs_minimal: float = Field(default=0.5, ge=0.0, le=1.0)
    vintage_vs_modern: float = Field(default=0.5, ge=0.0, le=1.0)

    @classmethod
    def neutral(cls) -> "StyleSignals":
        """Mid-point signals, used whenever upstream analysis fails."""
        return cls()

    @classmethod
    def from_vector(cls, vector: list[float] | None) -> "StyleSignals":
        """
        Build signals from a raw upstream vector.

        Anything malformed (missing, wrong length, non-finite or out of [0, 1])
        resolves to the neutral default instead of raising.
        """
        if vector is None or len(vector) != SIGNAL_COUNT:
            logger.warning(f"Malformed signal vector (len={None if vector is None else len(vector)}); using neutral")
            return cls.neutral()
        try:
            values = [float(v) for v in vector]
        except (TypeError, ValueError):
            logger.warning("Non-numeric signal vector; using neutral")
            return cls.neutral()
        if any(not math.isfinite(v) or v < 0.0 or v > 1.0 for v in values):
            logger.warning("Signal vector out of range; using neutral")
            return cls.neutral()
        return cls(**dict(zip(SIGNAL_FIELDS, values)))

    def as_vector(self) -> list[float]:
        """All 11 signals in their stable order."""
        return [getattr(self, name) for name in SIGNAL_FIELDS]

    def describe(self) -> str:
        """Top four signals as ``name: value`` pairs."""
        labels = {
            "brightness": "brightness",
            "contrast": "contrast",
            "saturation": "saturation",
            "warmth": "warmth",
            "edge_density": "edges",
            "symmetry": "symmetry",
            "clutter": "clutter",
            "material_hardness": "hardness",
            "organic_vs_industrial": "organic",
            "ornate_vs_minimal": "ornate",
            "vintage_vs_modern": "vintage",
        }
        pairs = sorted(((labels[n], getattr(self, n)) for n in SIGNAL_FIELDS), key=lambda p: p[1], reverse=True)
        return ", ".join(f"{name}: {value:.2f}" for name, value in pairs[:4])


class StyleEmbedding(BaseModel):
    """A 64-dimensional dense embedding of a visual style."""

    dims: list[float] = Field(default_factory=lambda: [0.0] * EMBEDDING_SIZE)

    @field_validator("dims")
    @classmethod
    def _check_length(cls, dims: list[float]) -> list[float]:
        if len(dims) != EMBEDDING_SIZE:
            raise ValueError(f"embedding must have {EMBEDDING_SIZE} dims, got {len(dims)}")
        return dims

    @classmethod
    def zero(cls) -> "StyleEmbedding":
        return cls(dims=[0.0] * EMBEDDING_SIZE)

    @property
    def is_zero(self) -> bool:
        return all(abs(d) < 1e-9 for d in self.dims)

    def magnitude(self) -> float:
        return math.sqrt(sum(d * d for d in self.dims))

    def cosine(self, other: "StyleEmbedding") -> float:
        dot = mag_a = mag_b = 0.0
        for a, b in zip(self.dims, other.dims):
            dot += a * b
            mag_a += a * a
            mag_b += b * b
        denom = math.sqrt(mag_a) * math.sqrt(mag_b)
        return dot / denom if denom > 0 else 0.0

    def normalized(self) -> "StyleEmbedding":
        mag = self.magnitude()
        if mag <= 1e-9:
            return StyleEmbedding.zero()
        return StyleEmbedding(dims=[d / mag for d in self.dims])

    def blend(self, toward: "StyleEmbedding", weight: float) -> "StyleEmbedding":
        """Exponential moving average toward ``toward``; weight is clamped to [0, 1]."""
        w = max(0.0, min(1.0, weight))
        return StyleEmbedding(dims=[d * (1.0 - w) + o * w for d, o in zip(self.dims, toward.dims)])

    def mean_abs_delta(self, other: "StyleEmbedding") -> float:
        return sum(abs(b - a) for a, b in zip(self.dims, other.dims)) / EMBEDDING_SIZE
