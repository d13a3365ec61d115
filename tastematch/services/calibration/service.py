from uuid import UUID

from loguru import logger

from tastematch.models.catalog import CatalogItem
from tastematch.models.profile import ProfileNamingResult, TasteDomain
from tastematch.models.vectors import SwipeDirection
from tastematch.services.calibration.archetypes import ObjectArchetype
from tastematch.services.calibration.state_machine import CalibrationPhase, CalibrationState, CalibrationStateMachine
from tastematch.services.naming.domain_naming import ProfileNamingEngine
from tastematch.services.stores.calibration_store import (
    CalibrationStateStore,
    CalibrationStore,
    ObjectCalibrationStore,
    ProfileNamingStore,
)


class CalibrationService:
    """Drives the calibration state machine against the stores."""

    def __init__(
        self,
        state_store: CalibrationStateStore | None = None,
        calibration_store: CalibrationStore | None = None,
        object_store: ObjectCalibrationStore | None = None,
        naming_store: ProfileNamingStore | None = None,
    ):
        self.state_store = state_store or CalibrationStateStore()
        self.calibration_store = calibration_store or CalibrationStore()
        self.object_store = object_store or ObjectCalibrationStore()
        self.naming_store = naming_store or ProfileNamingStore()

    async def start(self, profile_id: UUID, catalog: list[CatalogItem], domain: TasteDomain) -> CalibrationState:
        state = CalibrationStateMachine.start(profile_id, catalog, domain)
        await self._store(state)
        return state

    async def state(self, profile_id: UUID, domain: TasteDomain) -> CalibrationState | None:
        return await self.state_store.load(profile_id, domain)

    async def swipe(self, state: CalibrationState, direction: SwipeDirection) -> CalibrationState:
        updated = CalibrationStateMachine.swipe(state, direction)
        await self._store(updated)
        return updated

    async def choose(self, state: CalibrationState, winner: ObjectArchetype) -> CalibrationState:
        updated = CalibrationStateMachine.choose(state, winner)
        await self._store(updated)
        return updated

    async def reset(self, profile_id: UUID, domain: TasteDomain) -> None:
        await self.state_store.delete(profile_id, domain)
        if domain == TasteDomain.OBJECTS:
            await self.object_store.delete(profile_id)
        else:
            await self.calibration_store.delete(profile_id)
        logger.info(f"Calibration reset for {profile_id} ({domain.value})")

    async def _store(self, state: CalibrationState) -> None:
        await self.state_store.save(state)
        if state.phase == CalibrationPhase.COMPLETE:
            await self._complete(state)

    async def _complete(self, state: CalibrationState) -> ProfileNamingResult:
        """Persist the normalized vector and counts, then refresh the profile name."""
        if state.domain == TasteDomain.OBJECTS:
            record = CalibrationStateMachine.object_record(state)
            await self.object_store.save(record)
            vector, count = record.vector, record.interaction_count
        else:
            record = CalibrationStateMachine.space_record(state)
            await self.calibration_store.save(record)
            vector, count = record.vector, record.swipe_count

        existing = await self.naming_store.load(state.profile_id, state.domain)
        naming = ProfileNamingEngine.resolve(vector, count, existing, domain=state.domain)
        await self.naming_store.save(state.profile_id, state.domain, naming)
        logger.info(f"Calibration saved for {state.profile_id} ({state.domain.value}): '{naming.name}'")
        return naming
