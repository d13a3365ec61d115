from datetime import datetime
from uuid import UUID

from loguru import logger
from pydantic import ValidationError

from tastematch.core.constants import FAVORITES_KEY
from tastematch.models.catalog import FavoriteItem, RecommendationItem
from tastematch.models.identity import utcnow
from tastematch.services.stores.base import JsonStore


class FavoritesStore(JsonStore):
    """Kept recommendations per identity, one Redis hash field per sku."""

    @staticmethod
    def _key(identity_id: UUID) -> str:
        return FAVORITES_KEY.format(identity_id=identity_id)

    async def load_all(self, identity_id: UUID) -> list[FavoriteItem]:
        """Oldest first. Entries that no longer decode are skipped."""
        favorites = []
        for sku_id, payload in (await self.redis.hash_get_all(self._key(identity_id))).items():
            try:
                favorites.append(FavoriteItem.model_validate_json(payload))
            except ValidationError as e:
                logger.warning(f"Skipping undecodable favorite {sku_id} for {identity_id}: {e}")
        return sorted(favorites, key=lambda f: (f.added_at, f.item.sku_id))

    async def add(self, identity_id: UUID, item: RecommendationItem, now: datetime | None = None) -> bool:
        """Keep ``item``. Returns False when it is already a favorite or the write failed."""
        key = self._key(identity_id)
        if item.sku_id in await self.redis.hash_get_all(key):
            return False
        favorite = FavoriteItem(item=item, added_at=now or utcnow())
        saved = await self.redis.hash_set(key, item.sku_id, favorite.model_dump_json())
        if saved:
            logger.debug(f"Favorite +{item.sku_id} for {identity_id}")
        return saved

    async def remove(self, identity_id: UUID, sku_id: str) -> bool:
        """Returns False when the sku was not a favorite."""
        return await self.redis.hash_delete(self._key(identity_id), sku_id)

    async def clear(self, identity_id: UUID) -> bool:
        return await self.redis.delete(self._key(identity_id))
