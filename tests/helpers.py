"""Builders for embeddings and catalog records used across tests."""

from pathlib import Path

from tastematch.models.catalog import CatalogItem, DiscoveryItem
from tastematch.models.embedding import EMBEDDING_SIZE, StyleEmbedding

CATALOG_DIR = Path(__file__).resolve().parents[1] / "data" / "catalog"


def unit_embedding(index: int = 0, sign: float = 1.0) -> StyleEmbedding:
    dims = [0.0] * EMBEDDING_SIZE
    dims[index] = sign
    return StyleEmbedding(dims=dims)


def uniform_embedding(value: float = 0.125) -> StyleEmbedding:
    return StyleEmbedding(dims=[value] * EMBEDDING_SIZE)


def object_item(sku_id: str, weights: dict[str, float], **extra) -> CatalogItem:
    return CatalogItem(sku_id=sku_id, title=sku_id, object_axis_weights=weights, **extra)


def space_item(sku_id: str, tags: list[str], **extra) -> CatalogItem:
    return CatalogItem(sku_id=sku_id, title=sku_id, tags=tags, **extra)


def discovery_item(item_id: str, type_: str = "designer", clusters: list[str] | None = None, **extra) -> DiscoveryItem:
    return DiscoveryItem(id=item_id, title=item_id, type=type_, clusters=clusters or [], **extra)
