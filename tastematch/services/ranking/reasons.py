from tastematch.models.axes import OBJECT_AXES, SPACE_AXES, AxisScores, ObjectAxisScores
from tastematch.models.catalog import CatalogItem
from tastematch.models.vectors import StyleTag
from tastematch.services.naming.presentation import vocabulary_for

SIGNAL_THRESHOLD = 0.1
FALLBACK_SIGNAL = "your selections"
FALLBACK_REASON = "Fits your personal style, based on {signal}."

TAG_REASON_TEMPLATES: dict[StyleTag, list[str]] = {
    StyleTag.MID_CENTURY_MODERN: [
        "Echoes clean mid-century lines, driven by {signal}.",
        "Pairs with a mid-century palette for a cohesive retro feel.",
        "Complements the organic curves {signal} points toward.",
    ],
    StyleTag.SCANDINAVIAN: [
        "Matches a light, functional Scandinavian mood, grounded in {signal}.",
        "Reinforces the airy simplicity {signal} reflects.",
        "Adds quiet warmth in line with your Scandinavian leanings.",
    ],
    StyleTag.INDUSTRIAL: [
        "Brings raw industrial character that fits {signal}.",
        "Pairs with the exposed-material edge your taste reveals.",
        "Anchors the urban texture running through {signal}.",
    ],
    StyleTag.BOHEMIAN: [
        "Layers in bohemian richness that connects to {signal}.",
        "Adds the collected, personal feel your taste calls for.",
        "Deepens the eclectic warmth {signal} suggests.",
    ],
    StyleTag.MINIMALIST: [
        "Keeps things intentional, aligned with {signal}.",
        "Supports the clean, pared-back look your profile favors.",
        "Lets negative space do the work, matching your minimalist eye.",
    ],
    StyleTag.TRADITIONAL: [
        "Brings time-tested elegance that resonates with {signal}.",
        "Adds the craftsmanship and symmetry your taste gravitates toward.",
        "Reinforces the classic warmth woven through {signal}.",
    ],
    StyleTag.COASTAL: [
        "Channels breezy coastal ease, rooted in {signal}.",
        "Lightens the room with the relaxed feel {signal} suggests.",
        "Complements the natural, airy quality in your palette.",
    ],
    StyleTag.RUSTIC: [
        "Grounds the room with rustic warmth tied to {signal}.",
        "Adds the weathered, hearty texture your taste profile highlights.",
        "Brings honest materiality that echoes your rustic leanings.",
    ],
    StyleTag.ART_DECO: [
        "Delivers bold Art Deco drama, driven by {signal}.",
        "Adds geometric impact that matches your taste for contrast.",
        "Pairs luxe materials with the statement style {signal} reveals.",
    ],
    StyleTag.JAPANDI: [
        "Balances serenity and function, connected to {signal}.",
        "Reinforces the wabi-sabi calm your taste profile reflects.",
        "Blends Japanese restraint with the warmth {signal} carries.",
    ],
}

# {trait} is the item's strongest axis pole, lowercased
AXIS_REASON_TEMPLATES: list[str] = [
    "Reads {trait}, in step with {signal}.",
    "Its {trait} character lines up with {signal}.",
    "Something {trait} that sits inside {signal}.",
]

_TAGS_BY_VALUE = {tag.value: tag for tag in StyleTag}


def signal_phrase(scores: AxisScores | ObjectAxisScores) -> str:
    """``your <pole> lean`` for the dominant axis, or a neutral phrase when nothing stands out."""
    axis = scores.dominant_axis
    value = scores.value(axis)
    if abs(value) < SIGNAL_THRESHOLD:
        return FALLBACK_SIGNAL
    word = vocabulary_for(scores).influence_word(axis, value >= 0)
    return f"your {word.lower()} lean"


def _item_trait(item: CatalogItem, scores: AxisScores | ObjectAxisScores) -> str | None:
    if isinstance(scores, ObjectAxisScores):
        axes, weights = OBJECT_AXES, item.object_axis_weights
    else:
        axes, weights = SPACE_AXES, item.commerce_axis_weights
    best = None
    for axis in axes:
        weight = float(weights.get(axis.value, 0.0))
        if abs(weight) >= SIGNAL_THRESHOLD and (best is None or abs(weight) > abs(best[1])):
            best = (axis, weight)
    if best is None:
        return None
    axis, weight = best
    return vocabulary_for(scores).influence_word(axis, weight >= 0).lower()


def build_reason(item: CatalogItem, scores: AxisScores | ObjectAxisScores, index: int) -> str:
    """
    Why a ranked item fits.

    The item's first known style tag picks a template family; items without one
    fall back to their strongest axis pole, then to a generic line. ``index`` is
    the item's rank and rotates through the family so neighbours read differently.
    """
    signal = signal_phrase(scores)
    tag = next((_TAGS_BY_VALUE[t] for t in item.tags if t in _TAGS_BY_VALUE), None)
    if tag is not None:
        templates = TAG_REASON_TEMPLATES[tag]
        return templates[index % len(templates)].format(signal=signal)

    trait = _item_trait(item, scores)
    if trait is not None:
        template = AXIS_REASON_TEMPLATES[index % len(AXIS_REASON_TEMPLATES)]
        return template.format(trait=trait, signal=signal)
    return FALLBACK_REASON.format(signal=signal)
