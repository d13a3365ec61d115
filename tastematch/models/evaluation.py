from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from tastematch.models.embedding import StyleEmbedding, StyleSignals
from tastematch.models.identity import FurnitureCategory, ReturnReason, TasteVote, utcnow


class EvaluationContext(BaseModel):
    """Optional purchase context used for budget stress and scale fit."""

    item_price: float | None = None
    declared_budget_min: float | None = None
    declared_budget_max: float | None = None
    item_width: float | None = None
    item_depth: float | None = None
    room_width: float | None = None
    room_length: float | None = None


class CandidateSnapshot(BaseModel):
    embedding: StyleEmbedding
    signals: StyleSignals


class IdentitySnapshot(BaseModel):
    version: int
    stability: float
    count_me: int
    count_not_me: int
    count_maybe: int


class ScoreSnapshot(BaseModel):
    alignment_score: int = Field(ge=0, le=100)
    tension_score: int = Field(ge=0, le=100)
    confidence: float = Field(ge=0.0, le=1.0)
    risk_of_regret: float = Field(ge=0.0, le=1.0)
    purchase_confidence: float = Field(ge=0.0, le=1.0)
    budget_stress_score: float
    scale_fit_score: float
    tension_flags: list[str] = Field(default_factory=list)
    reasons: list[str] = Field(default_factory=list)


class TasteEvaluation(BaseModel):
    """A scored candidate object, optionally followed by the user's vote."""

    id: UUID = Field(default_factory=uuid4)
    candidate: CandidateSnapshot
    identity: IdentitySnapshot
    score: ScoreSnapshot
    taste_vote: TasteVote | None = None
    return_reason: ReturnReason | None = None
    furniture_category: FurnitureCategory | None = None
    purchase_context: EvaluationContext | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=utcnow)


class TagScore(BaseModel):
    """Tag-vector comparison between a candidate and an identity vector."""

    alignment: float = Field(ge=0.0, le=100.0)
    confidence: float = Field(ge=0.0, le=1.0)
    risk: float = Field(ge=0.0, le=1.0)
    reasons: list[str] = Field(default_factory=list)
    avoid_hits: list[str] = Field(default_factory=list)
