from datetime import datetime, timedelta, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from tastematch.models.embedding import StyleEmbedding

PENDING_HOLD = timedelta(days=14)
ANCHOR_MULTIPLIER = 1.8


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TasteVote(str, Enum):
    ME = "me"
    NOT_ME = "notMe"
    MAYBE = "maybe"
    RETURNED = "returned"


class ReturnReason(str, Enum):
    TOO_LARGE = "tooLarge"
    TOO_SMALL = "tooSmall"
    COLOR_MISMATCH = "colorMismatch"
    MATERIAL_MISMATCH = "materialMismatch"
    PRICE_DISCOMFORT = "priceDiscomfort"
    SPACE_CONFLICT = "spaceConflict"
    QUALITY_DISAPPOINTMENT = "qualityDisappointment"
    OTHER = "other"

    @property
    def affects_style_learning(self) -> bool:
        return self in STYLE_RETURN_REASONS

    @property
    def display_label(self) -> str:
        return _RETURN_LABELS[self]


STYLE_RETURN_REASONS: frozenset[ReturnReason] = frozenset(
    {
        ReturnReason.COLOR_MISMATCH,
        ReturnReason.MATERIAL_MISMATCH,
        ReturnReason.QUALITY_DISAPPOINTMENT,
        ReturnReason.SPACE_CONFLICT,
    }
)

_RETURN_LABELS: dict[ReturnReason, str] = {
    ReturnReason.TOO_LARGE: "Too large",
    ReturnReason.TOO_SMALL: "Too small",
    ReturnReason.COLOR_MISMATCH: "Color mismatch",
    ReturnReason.MATERIAL_MISMATCH: "Material mismatch",
    ReturnReason.PRICE_DISCOMFORT: "Price discomfort",
    ReturnReason.SPACE_CONFLICT: "Space conflict",
    ReturnReason.QUALITY_DISAPPOINTMENT: "Quality disappointment",
    ReturnReason.OTHER: "Other",
}


class FurnitureCategory(str, Enum):
    SOFA = "sofa"
    SECTIONAL = "sectional"
    COFFEE_TABLE = "coffeeTable"
    LOUNGE_CHAIR = "loungeChair"
    RUG = "rug"
    MEDIA_CONSOLE = "mediaConsole"
    OTHER = "other"

    @property
    def is_anchor(self) -> bool:
        """Anchor pieces are held for 14 days before they reshape the identity."""
        return self in ANCHOR_CATEGORIES

    @property
    def anchor_multiplier(self) -> float:
        return ANCHOR_MULTIPLIER if self.is_anchor else 1.0


ANCHOR_CATEGORIES: frozenset[FurnitureCategory] = frozenset({FurnitureCategory.SOFA, FurnitureCategory.SECTIONAL})


class TasteIdentity(BaseModel):
    """
    Persistent taste identity.

    Holds what the user tends toward (``embedding``) and what they tend to avoid
    (``anti_embedding``). Mutated only through the reinforcement service; every
    mutation bumps ``version`` by exactly one.
    """

    id: UUID = Field(default_factory=uuid4)
    embedding: StyleEmbedding = Field(default_factory=StyleEmbedding.zero)
    anti_embedding: StyleEmbedding = Field(default_factory=StyleEmbedding.zero)
    version: int = 1
    stability: float = Field(default=0.5, ge=0.0, le=1.0)
    count_me: int = 0
    count_not_me: int = 0
    count_maybe: int = 0
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def total_decisions(self) -> int:
        return self.count_me + self.count_not_me + self.count_maybe


class PendingReinforcement(BaseModel):
    """A reinforcement held back for anchor categories until ``unlock_at``."""

    id: UUID = Field(default_factory=uuid4)
    evaluation_id: UUID
    identity_version_at_time: int
    candidate_embedding: StyleEmbedding
    vote: TasteVote
    category: FurnitureCategory
    created_at: datetime = Field(default_factory=utcnow)
    unlock_at: datetime

    @classmethod
    def make(
        cls,
        evaluation_id: UUID,
        identity_version: int,
        candidate_embedding: StyleEmbedding,
        vote: TasteVote,
        category: FurnitureCategory,
        now: datetime | None = None,
    ) -> "PendingReinforcement":
        created = now or utcnow()
        return cls(
            evaluation_id=evaluation_id,
            identity_version_at_time=identity_version,
            candidate_embedding=candidate_embedding,
            vote=vote,
            category=category,
            created_at=created,
            unlock_at=created + PENDING_HOLD,
        )

    def is_ready(self, now: datetime | None = None) -> bool:
        return (now or utcnow()) >= self.unlock_at


class ReinforcementOutcome(BaseModel):
    identity: TasteIdentity
    pending: PendingReinforcement | None = None

    @property
    def deferred(self) -> bool:
        return self.pending is not None
