from uuid import UUID

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from tastematch.models.catalog import FavoriteItem, RecommendationItem
from tastematch.services.stores.favorites_store import FavoritesStore
from tastematch.services.stores.identity_store import IdentityStore

router = APIRouter(prefix="/favorites", tags=["favorites"])

favorites_store = FavoritesStore()
identity_store = IdentityStore()


class FavoriteAdded(BaseModel):
    added: bool
    favorites: list[FavoriteItem]


async def _require_identity(identity_id: UUID) -> None:
    if await identity_store.load(identity_id) is None:
        raise HTTPException(status_code=404, detail="Identity not found")


@router.get("/{identity_id}", response_model=list[FavoriteItem])
async def list_favorites(identity_id: UUID) -> list[FavoriteItem]:
    await _require_identity(identity_id)
    return await favorites_store.load_all(identity_id)


@router.post("/{identity_id}", response_model=FavoriteAdded)
async def add_favorite(identity_id: UUID, item: RecommendationItem) -> FavoriteAdded:
    """Keep a ranked item. Adding the same sku twice is a no-op."""
    await _require_identity(identity_id)
    added = await favorites_store.add(identity_id, item)
    return FavoriteAdded(added=added, favorites=await favorites_store.load_all(identity_id))


@router.delete("/{identity_id}/{sku_id}")
async def remove_favorite(identity_id: UUID, sku_id: str):
    await _require_identity(identity_id)
    if not await favorites_store.remove(identity_id, sku_id):
        raise HTTPException(status_code=404, detail="Not a favorite")
    return {"removed": sku_id}


@router.delete("/{identity_id}")
async def clear_favorites(identity_id: UUID):
    await _require_identity(identity_id)
    await favorites_store.clear(identity_id)
    return {"cleared": True}
