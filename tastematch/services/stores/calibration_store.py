from uuid import UUID

from tastematch.core.constants import (
    CALIBRATION_KEY,
    CALIBRATION_STATE_KEY,
    OBJECT_CALIBRATION_KEY,
    PROFILE_NAMING_KEY,
)
from tastematch.models.profile import CalibrationRecord, ObjectCalibrationRecord, ProfileNaming, TasteDomain
from tastematch.services.calibration.state_machine import CalibrationState
from tastematch.services.stores.base import JsonStore


class CalibrationStore(JsonStore):
    async def load(self, profile_id: UUID) -> CalibrationRecord | None:
        return await self._load_model(CALIBRATION_KEY.format(profile_id=profile_id), CalibrationRecord)

    async def save(self, record: CalibrationRecord) -> bool:
        return await self._save_model(CALIBRATION_KEY.format(profile_id=record.profile_id), record)

    async def delete(self, profile_id: UUID) -> bool:
        return await self.redis.delete(CALIBRATION_KEY.format(profile_id=profile_id))


class ObjectCalibrationStore(JsonStore):
    async def load(self, profile_id: UUID) -> ObjectCalibrationRecord | None:
        return await self._load_model(OBJECT_CALIBRATION_KEY.format(profile_id=profile_id), ObjectCalibrationRecord)

    async def save(self, record: ObjectCalibrationRecord) -> bool:
        return await self._save_model(OBJECT_CALIBRATION_KEY.format(profile_id=record.profile_id), record)

    async def delete(self, profile_id: UUID) -> bool:
        return await self.redis.delete(OBJECT_CALIBRATION_KEY.format(profile_id=profile_id))


class ProfileNamingStore(JsonStore):
    @staticmethod
    def _key(profile_id: UUID, domain: TasteDomain) -> str:
        return PROFILE_NAMING_KEY.format(profile_id=profile_id, domain=domain.value)

    async def load(self, profile_id: UUID, domain: TasteDomain) -> ProfileNaming:
        """Stored naming, or an empty one (first-run) when nothing is stored."""
        return await self._load_model(self._key(profile_id, domain), ProfileNaming) or ProfileNaming()

    async def save(self, profile_id: UUID, domain: TasteDomain, naming: ProfileNaming) -> bool:
        stored = ProfileNaming.model_validate(naming.model_dump(include=set(ProfileNaming.model_fields)))
        return await self._save_model(self._key(profile_id, domain), stored)


class CalibrationStateStore(JsonStore):
    """In-progress calibrations, one per profile and domain."""

    @staticmethod
    def _key(profile_id: UUID, domain: TasteDomain) -> str:
        return CALIBRATION_STATE_KEY.format(profile_id=profile_id, domain=domain.value)

    async def load(self, profile_id: UUID, domain: TasteDomain) -> CalibrationState | None:
        return await self._load_model(self._key(profile_id, domain), CalibrationState)

    async def save(self, state: CalibrationState) -> bool:
        return await self._save_model(self._key(state.profile_id, state.domain), state)

    async def delete(self, profile_id: UUID, domain: TasteDomain) -> bool:
        return await self.redis.delete(self._key(profile_id, domain))
