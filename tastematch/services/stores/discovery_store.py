from uuid import UUID

from loguru import logger

from tastematch.core.constants import DISCOVERY_SIGNALS_KEY
from tastematch.models.catalog import DiscoverySignals
from tastematch.services.stores.base import JsonStore


class DiscoverySignalStore(JsonStore):
    """Saved / dismissed / viewed discovery items per profile."""

    @staticmethod
    def _key(profile_id: UUID) -> str:
        return DISCOVERY_SIGNALS_KEY.format(profile_id=profile_id)

    async def load(self, profile_id: UUID) -> DiscoverySignals:
        return await self._load_model(self._key(profile_id), DiscoverySignals) or DiscoverySignals()

    async def _update(self, profile_id: UUID, field: str, item_id: str, add: bool = True) -> DiscoverySignals:
        signals = await self.load(profile_id)
        ids: set[str] = getattr(signals, field)
        if add:
            ids.add(item_id)
        else:
            ids.discard(item_id)
        await self._save_model(self._key(profile_id), signals)
        logger.debug(f"Discovery {field} {'+' if add else '-'}{item_id} for {profile_id}")
        return signals

    async def save_item(self, profile_id: UUID, item_id: str) -> DiscoverySignals:
        return await self._update(profile_id, "saved_ids", item_id)

    async def unsave_item(self, profile_id: UUID, item_id: str) -> DiscoverySignals:
        return await self._update(profile_id, "saved_ids", item_id, add=False)

    async def dismiss_item(self, profile_id: UUID, item_id: str) -> DiscoverySignals:
        return await self._update(profile_id, "dismissed_ids", item_id)

    async def mark_viewed(self, profile_id: UUID, item_id: str) -> DiscoverySignals:
        return await self._update(profile_id, "viewed_ids", item_id)
