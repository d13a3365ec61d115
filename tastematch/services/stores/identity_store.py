from uuid import UUID

from loguru import logger
from pydantic import TypeAdapter

from tastematch.core.constants import IDENTITY_BY_DEVICE_KEY, IDENTITY_KEY, PENDING_KEY
from tastematch.models.identity import PendingReinforcement, TasteIdentity
from tastematch.services.stores.base import JsonStore

_PENDING_LIST = TypeAdapter(list[PendingReinforcement])


class IdentityStore(JsonStore):
    @staticmethod
    def _identity_key(identity_id: UUID) -> str:
        return IDENTITY_KEY.format(identity_id=identity_id)

    @staticmethod
    def _device_key(device_id: str) -> str:
        return IDENTITY_BY_DEVICE_KEY.format(device_id=device_id)

    async def load(self, identity_id: UUID) -> TasteIdentity | None:
        return await self._load_model(self._identity_key(identity_id), TasteIdentity)

    async def save(self, identity: TasteIdentity) -> bool:
        saved = await self._save_model(self._identity_key(identity.id), identity)
        if saved:
            logger.debug(f"Saved identity {identity.id} v{identity.version}")
        return saved

    async def load_for_device(self, device_id: str) -> TasteIdentity | None:
        identity_id = await self.redis.get(self._device_key(device_id))
        if not identity_id:
            return None
        try:
            return await self.load(UUID(identity_id))
        except ValueError:
            logger.warning(f"Corrupt identity pointer for device {device_id}: {identity_id!r}")
            return None

    async def bind_device(self, device_id: str, identity_id: UUID) -> bool:
        return await self.redis.set(self._device_key(device_id), str(identity_id))


class PendingReinforcementStore(JsonStore):
    """Pending anchor reinforcements, one JSON list per identity."""

    @staticmethod
    def _key(identity_id: UUID) -> str:
        return PENDING_KEY.format(identity_id=identity_id)

    async def load_all(self, identity_id: UUID) -> list[PendingReinforcement]:
        return await self._load_list(self._key(identity_id), _PENDING_LIST)

    async def add(self, identity_id: UUID, pending: PendingReinforcement) -> bool:
        records = await self.load_all(identity_id)
        records.append(pending)
        return await self._save_list(self._key(identity_id), _PENDING_LIST, records)

    async def remove(self, identity_id: UUID, pending_id: UUID) -> bool:
        """Drop one record. Returns False when it was not present."""
        records = await self.load_all(identity_id)
        remaining = [r for r in records if r.id != pending_id]
        if len(remaining) == len(records):
            return False
        return await self._save_list(self._key(identity_id), _PENDING_LIST, remaining)

    async def clear(self, identity_id: UUID) -> bool:
        return await self.redis.delete(self._key(identity_id))
