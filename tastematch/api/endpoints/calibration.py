from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from tastematch.models.catalog import CatalogItem
from tastematch.models.profile import TasteDomain
from tastematch.models.vectors import SwipeDirection
from tastematch.services.calibration.archetypes import ObjectArchetype
from tastematch.services.calibration.service import CalibrationService
from tastematch.services.calibration.state_machine import CalibrationPhase, CalibrationState, DuelPair
from tastematch.services.catalog.loader import catalog_loader

router = APIRouter(prefix="/calibration", tags=["calibration"])

calibration_service = CalibrationService()


class SwipeRequest(BaseModel):
    direction: SwipeDirection


class DuelRequest(BaseModel):
    winner: ObjectArchetype


class CalibrationView(BaseModel):
    profile_id: UUID
    domain: TasteDomain
    phase: CalibrationPhase
    current_item: CatalogItem | None = None
    current_duel: DuelPair | None = None
    remaining_cards: int
    swipe_count: int
    duel_count: int
    weights: dict[str, float]

    @classmethod
    def from_state(cls, state: CalibrationState) -> "CalibrationView":
        return cls(
            profile_id=state.profile_id,
            domain=state.domain,
            phase=state.phase,
            current_item=state.current_item,
            current_duel=state.current_duel,
            remaining_cards=state.remaining_cards,
            swipe_count=state.swipe_count,
            duel_count=state.duel_count,
            weights=state.weights,
        )


async def _open_state(profile_id: UUID, domain: TasteDomain) -> CalibrationState:
    state = await calibration_service.state(profile_id, domain)
    if state is None:
        raise HTTPException(status_code=404, detail="Calibration not started")
    if state.phase == CalibrationPhase.COMPLETE:
        raise HTTPException(status_code=409, detail="Calibration already complete")
    return state


@router.post("/{profile_id}/{domain}/start", response_model=CalibrationView)
async def start_calibration(profile_id: UUID, domain: TasteDomain) -> CalibrationView:
    catalog_domain = TasteDomain.OBJECTS if domain == TasteDomain.OBJECTS else TasteDomain.SPACE
    state = await calibration_service.start(profile_id, catalog_loader.commerce_items(catalog_domain), domain)
    return CalibrationView.from_state(state)


@router.get("/{profile_id}/{domain}", response_model=CalibrationView)
async def get_calibration(profile_id: UUID, domain: TasteDomain) -> CalibrationView:
    state = await calibration_service.state(profile_id, domain)
    if state is None:
        raise HTTPException(status_code=404, detail="Calibration not started")
    return CalibrationView.from_state(state)


@router.post("/{profile_id}/{domain}/swipe", response_model=CalibrationView)
async def swipe(profile_id: UUID, domain: TasteDomain, payload: SwipeRequest) -> CalibrationView:
    state = await _open_state(profile_id, domain)
    try:
        updated = await calibration_service.swipe(state, payload.direction)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return CalibrationView.from_state(updated)


@router.post("/{profile_id}/{domain}/duel", response_model=CalibrationView)
async def duel(profile_id: UUID, domain: TasteDomain, payload: DuelRequest) -> CalibrationView:
    state = await _open_state(profile_id, domain)
    try:
        updated = await calibration_service.choose(state, payload.winner)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return CalibrationView.from_state(updated)


@router.delete("/{profile_id}/{domain}")
async def reset_calibration(profile_id: UUID, domain: TasteDomain) -> dict[str, str]:
    await calibration_service.reset(profile_id, domain)
    return {"status": "reset"}
