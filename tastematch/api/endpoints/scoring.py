from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from tastematch.core.config import settings
from tastematch.models.advisory import AdvisoryAction, AdvisoryDecision, AdvisoryLevel, AdvisorySignal, AdvisoryVerdict
from tastematch.models.embedding import StyleSignals
from tastematch.models.evaluation import EvaluationContext, TagScore, TasteEvaluation
from tastematch.models.identity import FurnitureCategory
from tastematch.models.profile import TasteDomain
from tastematch.models.vectors import WeightVector
from tastematch.services.advisory.object_advisory import ObjectAdvisoryService
from tastematch.services.catalog.loader import catalog_loader
from tastematch.services.embedding.projector import EmbeddingProjector
from tastematch.services.reinforcement.session import identity_sessions
from tastematch.services.scoring.embedding_scorer import ScoringService
from tastematch.services.scoring.tag_scorer import TagVectorScorer

router = APIRouter(prefix="/scoring", tags=["scoring"])

object_advisory_service = ObjectAdvisoryService()


class EvaluateRequest(BaseModel):
    identity_id: UUID
    signals: list[float] = Field(description="Upstream signal vector (11 values in [0, 1])")
    category: FurnitureCategory | None = None
    context: EvaluationContext | None = None


class TagScoreRequest(BaseModel):
    candidate: dict[str, float]
    identity: dict[str, float]


class AdvisoryRequest(BaseModel):
    profile_id: UUID
    sku_id: str
    level: AdvisoryLevel | None = None


class AdvisoryActionRequest(BaseModel):
    profile_id: UUID
    sku_id: str
    action: AdvisoryAction
    verdict: AdvisoryVerdict


def _object_item_or_404(sku_id: str):
    item = next((i for i in catalog_loader.commerce_items(TasteDomain.OBJECTS) if i.sku_id == sku_id), None)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Unknown object item {sku_id}")
    return item


@router.post("/evaluate", response_model=TasteEvaluation)
async def evaluate(payload: EvaluateRequest) -> TasteEvaluation:
    session = await identity_sessions.get(payload.identity_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Identity not found")
    signals = StyleSignals.from_vector(payload.signals)
    candidate = EmbeddingProjector.project(signals)
    return ScoringService.score(candidate, signals, session.snapshot(), payload.category, payload.context)


@router.post("/tags", response_model=TagScore)
async def score_tags(payload: TagScoreRequest) -> TagScore:
    return TagVectorScorer.score(WeightVector(weights=payload.candidate), WeightVector(weights=payload.identity))


@router.post("/objects/advisory", response_model=AdvisoryDecision | None)
async def object_advisory(payload: AdvisoryRequest) -> AdvisoryDecision | None:
    item = _object_item_or_404(payload.sku_id)
    level = payload.level or AdvisoryLevel(settings.DEFAULT_ADVISORY_LEVEL)
    return await object_advisory_service.decide(payload.profile_id, item, level)


@router.post("/objects/advisory/actions")
async def record_advisory_action(payload: AdvisoryActionRequest) -> dict[str, bool]:
    item = _object_item_or_404(payload.sku_id)
    signal = AdvisorySignal(action=payload.action, verdict=payload.verdict, sku_id=payload.sku_id)
    recorded = await object_advisory_service.record_action(payload.profile_id, signal, item)
    return {"recorded": recorded}
