from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from tastematch.models.embedding import EMBEDDING_SIZE, StyleEmbedding
from tastematch.models.identity import TasteIdentity, utcnow


class RemoteIdentity(BaseModel):
    """Identity row as returned by the remote sync backend (snake_case wire format)."""

    id: str
    version: int
    embedding: list[float] = Field(default_factory=list)
    anti_embedding: list[float] = Field(default_factory=list)
    stability: float = 0.5
    count_me: int = 0
    count_not_me: int = 0
    count_maybe: int = 0

    def to_identity(self) -> TasteIdentity:
        """Convert to a local identity; embeddings of the wrong length become zero."""
        try:
            identity_id = UUID(self.id)
        except ValueError:
            identity_id = uuid4()
        return TasteIdentity(
            id=identity_id,
            embedding=_embedding_or_zero(self.embedding),
            anti_embedding=_embedding_or_zero(self.anti_embedding),
            version=self.version,
            stability=max(0.0, min(1.0, self.stability)),
            count_me=self.count_me,
            count_not_me=self.count_not_me,
            count_maybe=self.count_maybe,
        )


def _embedding_or_zero(dims: list[float]) -> StyleEmbedding:
    if len(dims) != EMBEDDING_SIZE:
        return StyleEmbedding.zero()
    return StyleEmbedding(dims=dims)


class RemoteEvent(BaseModel):
    id: str
    identity_id: str
    vote: str
    return_reason: str | None = None
    category: str
    pending: bool = False
    created_at: str
    scores: dict[str, float] | None = None


class ProfileSnapshot(BaseModel):
    """Shareable summary of a named space profile."""

    id: UUID
    user_id: str | None = None
    profile_name: str
    axis_scores: dict[str, float]
    basis_hash: str
    confidence_level: str
    influences: list[str] = Field(default_factory=list)
    avoids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ShareResponse(BaseModel):
    slug: str
    public_url: str


class LoggedEvent(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    taste_profile_id: UUID | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=utcnow)
