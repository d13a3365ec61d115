from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from tastematch.models.embedding import StyleEmbedding
from tastematch.models.identity import (
    FurnitureCategory,
    PendingReinforcement,
    ReturnReason,
    TasteIdentity,
    TasteVote,
)
from tastematch.services.embedding.projector import EmbeddingProjector
from tastematch.services.reinforcement.session import IdentitySession, identity_sessions

router = APIRouter(prefix="/identity", tags=["identity"])


class BootstrapRequest(BaseModel):
    device_id: str = Field(min_length=1, description="Stable per-install device identifier")


class IdentityResponse(BaseModel):
    identity: TasteIdentity
    pending: list[PendingReinforcement] = Field(default_factory=list)


class VoteRequest(BaseModel):
    vote: TasteVote
    embedding: list[float] | None = Field(default=None, description="Candidate embedding (64 dims)")
    signals: list[float] | None = Field(default=None, description="Raw signal vector, projected when no embedding")
    category: FurnitureCategory | None = None
    return_reason: ReturnReason | None = None
    evaluation_id: UUID | None = None


class VoteResponse(BaseModel):
    identity: TasteIdentity
    pending: PendingReinforcement | None = None
    deferred: bool = False


async def _session_or_404(identity_id: UUID) -> IdentitySession:
    session = await identity_sessions.get(identity_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Identity not found")
    return session


@router.post("/bootstrap", response_model=IdentityResponse)
async def bootstrap_identity(payload: BootstrapRequest) -> IdentityResponse:
    session = await identity_sessions.bootstrap(payload.device_id.strip())
    return IdentityResponse(identity=session.snapshot(), pending=session.pending())


@router.get("/{identity_id}", response_model=IdentityResponse)
async def get_identity(identity_id: UUID) -> IdentityResponse:
    session = await _session_or_404(identity_id)
    return IdentityResponse(identity=session.snapshot(), pending=session.pending())


@router.post("/{identity_id}/votes", response_model=VoteResponse)
async def record_vote(identity_id: UUID, payload: VoteRequest) -> VoteResponse:
    session = await _session_or_404(identity_id)
    if payload.embedding is not None:
        try:
            candidate = StyleEmbedding(dims=payload.embedding)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
    else:
        candidate = EmbeddingProjector.project_vector(payload.signals)

    outcome = await session.apply(
        payload.vote,
        candidate,
        category=payload.category,
        return_reason=payload.return_reason,
        evaluation_id=payload.evaluation_id,
    )
    return VoteResponse(identity=outcome.identity, pending=outcome.pending, deferred=outcome.deferred)


@router.get("/{identity_id}/pending", response_model=list[PendingReinforcement])
async def list_pending(identity_id: UUID) -> list[PendingReinforcement]:
    session = await _session_or_404(identity_id)
    return session.pending()


@router.post("/{identity_id}/pending/{pending_id}/finalize", response_model=TasteIdentity)
async def finalize_pending(identity_id: UUID, pending_id: UUID) -> TasteIdentity:
    session = await _session_or_404(identity_id)
    updated = await session.finalize(pending_id)
    if updated is None:
        raise HTTPException(status_code=404, detail="Pending reinforcement not found")
    return updated


@router.post("/{identity_id}/pending/finalize-ready", response_model=IdentityResponse)
async def finalize_ready(identity_id: UUID) -> IdentityResponse:
    session = await _session_or_404(identity_id)
    await session.finalize_ready()
    return IdentityResponse(identity=session.snapshot(), pending=session.pending())
