from typing import Literal
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from tastematch.models.catalog import DiscoveryItem, DiscoverySignals, ItemCategory, RecommendationItem
from tastematch.models.profile import CalibrationRecord, ObjectCalibrationRecord, TasteDomain
from tastematch.services.catalog.loader import catalog_loader
from tastematch.services.profile import AxisMapper
from tastematch.services.ranking.constants import PAGE_SIZE, RADAR_LIMIT
from tastematch.services.ranking.discovery import DiscoveryEngine, DiscoveryPage
from tastematch.services.ranking.engine import RankingEngine
from tastematch.services.stores.calibration_store import CalibrationStore, ObjectCalibrationStore
from tastematch.services.stores.discovery_store import DiscoverySignalStore

router = APIRouter(prefix="/ranking", tags=["ranking"])

calibration_store = CalibrationStore()
object_calibration_store = ObjectCalibrationStore()
discovery_signal_store = DiscoverySignalStore()


class RecommendationPage(BaseModel):
    items: list[RecommendationItem]
    has_more: bool


async def _space_record(profile_id: UUID) -> CalibrationRecord:
    record = await calibration_store.load(profile_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No calibration for this profile")
    return record


async def _object_record(profile_id: UUID) -> ObjectCalibrationRecord:
    record = await object_calibration_store.load(profile_id)
    if record is None:
        raise HTTPException(status_code=404, detail="No object calibration for this profile")
    return record


def _page(items: list[RecommendationItem], offset: int, limit: int) -> RecommendationPage:
    return RecommendationPage(items=items[offset : offset + limit], has_more=offset + limit < len(items))


@router.get("/{profile_id}/objects", response_model=RecommendationPage)
async def rank_objects(
    profile_id: UUID, offset: int = Query(0, ge=0), limit: int = Query(PAGE_SIZE, ge=1, le=100)
) -> RecommendationPage:
    record = await _object_record(profile_id)
    ranked = RankingEngine.rank_objects(
        record.vector,
        AxisMapper.object_axis_scores(record.vector),
        catalog_loader.commerce_items(TasteDomain.OBJECTS),
        record.interaction_count,
    )
    return _page(ranked, offset, limit)


@router.get("/{profile_id}/art", response_model=RecommendationPage)
async def rank_art(
    profile_id: UUID, offset: int = Query(0, ge=0), limit: int = Query(PAGE_SIZE, ge=1, le=100)
) -> RecommendationPage:
    record = await _space_record(profile_id)
    ranked = RankingEngine.rank_art(
        record.vector,
        AxisMapper.axis_scores(record.vector),
        catalog_loader.commerce_items(TasteDomain.ART),
        record.swipe_count,
    )
    return _page(ranked, offset, limit)


@router.get("/{profile_id}/commerce", response_model=RecommendationPage)
async def rank_commerce(
    profile_id: UUID,
    material: str | None = None,
    category: ItemCategory | None = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(PAGE_SIZE, ge=1, le=100),
) -> RecommendationPage:
    record = await _space_record(profile_id)
    ranked = RankingEngine.rank_commerce(
        record.vector,
        AxisMapper.axis_scores(record.vector),
        catalog_loader.commerce_items(TasteDomain.SPACE),
        record.swipe_count,
        material_filter=material,
        category_filter=category,
    )
    return _page(ranked, offset, limit)


@router.get("/{profile_id}/discovery", response_model=DiscoveryPage)
async def discovery_feed(
    profile_id: UUID,
    domain: TasteDomain = TasteDomain.SPACE,
    offset: int = Query(0, ge=0),
    limit: int = Query(PAGE_SIZE, ge=1, le=100),
) -> DiscoveryPage:
    record = await _space_record(profile_id)
    signals = await discovery_signal_store.load(profile_id)
    ranked = DiscoveryEngine.rank(
        catalog_loader.discovery_items(domain), AxisMapper.axis_scores(record.vector), signals, domain=domain
    )
    return DiscoveryEngine.page(ranked, offset, limit)


@router.get("/{profile_id}/radar", response_model=list[DiscoveryItem])
async def daily_radar(
    profile_id: UUID,
    domain: TasteDomain = TasteDomain.SPACE,
    limit: int = Query(RADAR_LIMIT, ge=1, le=50),
    day: int | None = Query(None, ge=0, description="Day index since the epoch; defaults to today"),
) -> list[DiscoveryItem]:
    record = await _space_record(profile_id)
    signals = await discovery_signal_store.load(profile_id)
    return DiscoveryEngine.daily_radar(
        catalog_loader.discovery_items(domain),
        AxisMapper.axis_scores(record.vector),
        profile_id,
        record.vector,
        signals=signals,
        limit=limit,
        day_index=day,
        domain=domain,
    )


@router.post("/{profile_id}/discovery/{item_id}/{action}", response_model=DiscoverySignals)
async def discovery_action(
    profile_id: UUID, item_id: str, action: Literal["save", "unsave", "dismiss", "view"]
) -> DiscoverySignals:
    handlers = {
        "save": discovery_signal_store.save_item,
        "unsave": discovery_signal_store.unsave_item,
        "dismiss": discovery_signal_store.dismiss_item,
        "view": discovery_signal_store.mark_viewed,
    }
    return await handlers[action](profile_id, item_id)
