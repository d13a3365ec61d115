from uuid import UUID

from tastematch.models.axes import OBJECT_AXES, ObjectAxis
from tastematch.models.catalog import CatalogItem
from tastematch.models.vectors import StyleTag
from tastematch.services.naming.hashing import profile_seed, seeded_shuffle

OBJECT_CARDS_PER_AXIS = 3
SPACE_CARDS_PER_TAG = 2


def dominant_object_axis(item: CatalogItem) -> ObjectAxis | None:
    """Object axis with the largest |weight| on the item; first in axis order on ties."""
    weights = item.object_axis_weights
    known = [axis for axis in OBJECT_AXES if axis.value in weights]
    if not known:
        return None
    return max(known, key=lambda axis: abs(weights[axis.value]))


def primary_tag(item: CatalogItem) -> str | None:
    return item.tags[0] if item.tags else None


def build_object_deck(catalog: list[CatalogItem], profile_id: UUID) -> list[CatalogItem]:
    """
    Up to three cards per object axis, bucketed by each item's dominant axis
    in catalog order, laid out in axis order and shuffled by profile.
    """
    buckets: dict[ObjectAxis, list[CatalogItem]] = {axis: [] for axis in OBJECT_AXES}
    for item in catalog:
        axis = dominant_object_axis(item)
        if axis is not None and len(buckets[axis]) < OBJECT_CARDS_PER_AXIS:
            buckets[axis].append(item)
    cards = [item for axis in OBJECT_AXES for item in buckets[axis]]
    return seeded_shuffle(cards, profile_seed(profile_id))


def build_space_deck(catalog: list[CatalogItem], profile_id: UUID) -> list[CatalogItem]:
    """Two cards per style tag, keyed on each item's primary tag."""
    buckets: dict[str, list[CatalogItem]] = {tag.value: [] for tag in StyleTag}
    for item in catalog:
        tag = primary_tag(item)
        if tag in buckets and len(buckets[tag]) < SPACE_CARDS_PER_TAG:
            buckets[tag].append(item)
    cards = [item for tag in StyleTag for item in buckets[tag.value]]
    return seeded_shuffle(cards, profile_seed(profile_id))
