from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from tastematch.core.config import settings
from tastematch.models.profile import ProfileNaming, TasteDomain
from tastematch.models.sync import ProfileSnapshot, ShareResponse
from tastematch.models.tips import DesignGoal, DesignTip, RoomContext
from tastematch.services.naming.domain_naming import ProfileNamingEngine
from tastematch.services.naming.presentation import object_vocabulary, space_vocabulary
from tastematch.services.profile import AxisMapper, TasteVariant, generate_variants
from tastematch.services.stores.calibration_store import CalibrationStore, ObjectCalibrationStore, ProfileNamingStore
from tastematch.services.sync.backend import BackendClient, LocalBackendClient, RemoteBackendClient
from tastematch.services.tips.design_tips import DesignTipsEngine

router = APIRouter(prefix="/profiles", tags=["naming"])

calibration_store = CalibrationStore()
object_calibration_store = ObjectCalibrationStore()
naming_store = ProfileNamingStore()
backend_client: BackendClient = RemoteBackendClient() if settings.REMOTE_SYNC_ENABLED else LocalBackendClient()


class Presentation(BaseModel):
    domain: TasteDomain
    axis_scores: dict[str, float]
    axis_labels: dict[str, str]
    influences: list[str]
    avoids: list[str]
    reading: str | None = None
    variants: list[TasteVariant] = Field(default_factory=list)


async def _vector_and_count(profile_id: UUID, domain: TasteDomain):
    if domain == TasteDomain.OBJECTS:
        record = await object_calibration_store.load(profile_id)
        if record is not None:
            return record.vector, record.interaction_count
    else:
        record = await calibration_store.load(profile_id)
        if record is not None:
            return record.vector, record.swipe_count
    raise HTTPException(status_code=404, detail=f"No {domain.value} calibration for this profile")


@router.get("/{profile_id}/name", response_model=ProfileNaming)
async def profile_name(profile_id: UUID, domain: TasteDomain = TasteDomain.SPACE) -> ProfileNaming:
    """Resolve (and persist) the current name, evolving it when the profile has moved enough."""
    vector, count = await _vector_and_count(profile_id, domain)
    existing = await naming_store.load(profile_id, domain)
    naming = ProfileNamingEngine.resolve(vector, count, existing, domain=domain)
    await naming_store.save(profile_id, domain, naming)
    return ProfileNaming.model_validate(naming.model_dump(include=set(ProfileNaming.model_fields)))


@router.get("/{profile_id}/presentation", response_model=Presentation)
async def presentation(profile_id: UUID, domain: TasteDomain = TasteDomain.SPACE) -> Presentation:
    vector, _ = await _vector_and_count(profile_id, domain)
    if domain == TasteDomain.OBJECTS:
        scores = AxisMapper.object_axis_scores(vector)
        return Presentation(
            domain=domain,
            axis_scores=scores.to_dict(),
            axis_labels={axis.value: object_vocabulary.axis_display_label(axis) for axis in object_vocabulary.axes},
            influences=object_vocabulary.influence_phrases(scores),
            avoids=object_vocabulary.avoid_phrases(scores),
        )

    scores = AxisMapper.axis_scores(vector)
    naming = await naming_store.load(profile_id, domain)
    return Presentation(
        domain=domain,
        axis_scores=scores.to_dict(),
        axis_labels={axis.value: space_vocabulary.axis_display_label(axis) for axis in space_vocabulary.axes},
        influences=space_vocabulary.influence_phrases(scores),
        avoids=space_vocabulary.avoid_phrases(scores),
        reading=space_vocabulary.one_line_reading(naming.name, scores) if naming.name else None,
        variants=generate_variants(vector),
    )


@router.get("/{profile_id}/tips", response_model=list[DesignTip])
async def design_tips(
    profile_id: UUID, room: RoomContext | None = None, goal: DesignGoal | None = None
) -> list[DesignTip]:
    """Up to three practical tips for a calibrated space profile."""
    vector, _ = await _vector_and_count(profile_id, TasteDomain.SPACE)
    return DesignTipsEngine.tips(vector, AxisMapper.axis_scores(vector), context=room, goal=goal)

@router.get("/{profile_id}/snapshot", response_model=ProfileSnapshot)
async def profile_snapshot(profile_id: UUID) -> ProfileSnapshot:
    try:
        snapshot = await backend_client.get_profile(profile_id)
    except NotImplementedError as e:
        raise HTTPException(status_code=501, detail=str(e))
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return snapshot


@router.post("/{profile_id}/share", response_model=ShareResponse)
async def share_profile(profile_id: UUID) -> ShareResponse:
    try:
        snapshot = await backend_client.get_profile(profile_id)
        if snapshot is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        return await backend_client.share_profile(snapshot)
    except NotImplementedError as e:
        raise HTTPException(status_code=501, detail=str(e))
