from tastematch.models.axes import Axis, AxisScores
from tastematch.services.naming.hashing import CONTEXT_MULTIPLIER, DESCRIPTOR_MULTIPLIER, pick
from tastematch.services.ranking.clusters import space_cluster

# (axis, positive) -> descriptor pool
DESCRIPTOR_POOLS: dict[tuple[Axis, bool], list[str]] = {
    (Axis.MINIMAL_ORNATE, False): ["Minimal", "Clean", "Spare", "Quiet"],
    (Axis.MINIMAL_ORNATE, True): ["Ornate", "Adorned", "Rich", "Elaborate"],
    (Axis.WARM_COOL, True): ["Warm", "Earth", "Sunlit"],
    (Axis.WARM_COOL, False): ["Cool", "Frost", "Nordic"],
    (Axis.SOFT_STRUCTURED, True): ["Structured", "Rigid", "Composed"],
    (Axis.SOFT_STRUCTURED, False): ["Soft", "Gentle", "Relaxed"],
    (Axis.ORGANIC_INDUSTRIAL, True): ["Industrial", "Brutal", "Concrete", "Raw"],
    (Axis.ORGANIC_INDUSTRIAL, False): ["Organic", "Natural", "Verdant"],
    (Axis.LIGHT_DARK, False): ["Light", "Airy", "Bright"],
    (Axis.LIGHT_DARK, True): ["Dark", "Noir", "Midnight", "Studio"],
    (Axis.NEUTRAL_SATURATED, False): ["Neutral", "Tonal", "Muted"],
    (Axis.NEUTRAL_SATURATED, True): ["Saturated", "Vivid", "Chromatic"],
    (Axis.SPARSE_LAYERED, False): ["Sparse", "Open", "Reduced"],
    (Axis.SPARSE_LAYERED, True): ["Layered", "Textural", "Expressive"],
}

CONTEXT_POOLS: dict[str, list[str]] = {
    "industrialDark": ["Berlin", "Concrete", "Studio", "Metro", "Bushwick"],
    "warmOrganic": ["Desert", "Lagos", "Garden", "Lisbon", "Nairobi"],
    "minimalNeutral": ["Tokyo", "Milan", "Gallery", "Campus", "Atelier"],
    "layeredSaturated": ["Havana", "Marrakech", "Athens", "Harbor"],
}

_COMBINED_DESCRIPTIONS: dict[tuple[Axis, bool, Axis, bool], str] = {
    (Axis.ORGANIC_INDUSTRIAL, True, Axis.LIGHT_DARK, True): (
        "Structured silhouettes with raw material depth and controlled contrast."
    ),
    (Axis.ORGANIC_INDUSTRIAL, True, Axis.SOFT_STRUCTURED, True): (
        "Raw material and rigid geometry define a space built on industrial logic."
    ),
    (Axis.WARM_COOL, True, Axis.ORGANIC_INDUSTRIAL, False): (
        "Earth-driven texture with layered warmth and relaxed structure."
    ),
    (Axis.MINIMAL_ORNATE, False, Axis.NEUTRAL_SATURATED, False): (
        "Light, balanced form with disciplined negative space."
    ),
    (Axis.MINIMAL_ORNATE, False, Axis.LIGHT_DARK, False): "Restrained composition in an airy, open register.",
    (Axis.MINIMAL_ORNATE, False, Axis.SPARSE_LAYERED, False): (
        "Disciplined emptiness where negative space becomes the primary material."
    ),
    (Axis.MINIMAL_ORNATE, False, Axis.WARM_COOL, False): "Stripped-back clarity under a cool, Nordic register.",
    (Axis.MINIMAL_ORNATE, True, Axis.NEUTRAL_SATURATED, True): (
        "Bold material confidence with chromatic intensity and decorative weight."
    ),
    (Axis.MINIMAL_ORNATE, True, Axis.SPARSE_LAYERED, True): (
        "Ornamental density with layered narrative and deliberate maximalism."
    ),
    (Axis.WARM_COOL, True, Axis.SPARSE_LAYERED, True): (
        "Warm, collected layers that build depth through accumulated texture."
    ),
    (Axis.WARM_COOL, True, Axis.LIGHT_DARK, True): "Grounded warmth deepened by shadow and rich tonal contrast.",
    (Axis.WARM_COOL, False, Axis.SOFT_STRUCTURED, True): "Precise geometry under a cool, controlled palette.",
    (Axis.SOFT_STRUCTURED, False, Axis.SPARSE_LAYERED, False): (
        "Gentle forms in open space, favoring quiet over complexity."
    ),
    (Axis.SOFT_STRUCTURED, False, Axis.LIGHT_DARK, False): "Airy softness with luminous, yielding surfaces.",
    (Axis.LIGHT_DARK, True, Axis.SPARSE_LAYERED, True): "Deep, atmospheric stacking with moody material weight.",
}

_DOMINANT_DESCRIPTIONS: dict[tuple[Axis, bool], str] = {
    (Axis.MINIMAL_ORNATE, False): "Pared-back composition where every element earns its place.",
    (Axis.MINIMAL_ORNATE, True): "Richly detailed surfaces with confident decorative presence.",
    (Axis.WARM_COOL, True): "Grounded warmth that builds from natural material and earth tone.",
    (Axis.WARM_COOL, False): "Cool restraint with a preference for clarity over comfort.",
    (Axis.SOFT_STRUCTURED, True): "Defined edges and deliberate proportion hold the composition taut.",
    (Axis.SOFT_STRUCTURED, False): "Soft contours and relaxed geometry, favoring ease over precision.",
    (Axis.ORGANIC_INDUSTRIAL, True): "Raw industrial character with exposed material and urban edge.",
    (Axis.ORGANIC_INDUSTRIAL, False): "Organic forms drawn from natural growth and handcraft.",
    (Axis.LIGHT_DARK, False): "Open, light-filled planes that give visual breathing room.",
    (Axis.LIGHT_DARK, True): "Deep tonal anchoring with intimate, shadow-rich atmosphere.",
    (Axis.NEUTRAL_SATURATED, False): "A tonal, desaturated palette that lets form lead over color.",
    (Axis.NEUTRAL_SATURATED, True): "Chromatic confidence with saturated, expressive color choices.",
    (Axis.SPARSE_LAYERED, False): "Disciplined restraint, allowing negative space to define the room.",
    (Axis.SPARSE_LAYERED, True): "Accumulated layers that build visual narrative through density.",
}


class StructuralDescriptorResolver:
    @staticmethod
    def resolve(scores: AxisScores, basis_hash: str) -> str:
        dominant = scores.dominant_axis
        pool = DESCRIPTOR_POOLS.get((dominant, scores.value(dominant) >= 0), [])
        return pick(pool, basis_hash, DESCRIPTOR_MULTIPLIER, fallback="Quiet")


class ContextResolver:
    @staticmethod
    def identify_cluster(scores: AxisScores) -> str:
        return space_cluster(scores)

    @staticmethod
    def resolve(scores: AxisScores, basis_hash: str) -> str:
        pool = CONTEXT_POOLS[ContextResolver.identify_cluster(scores)]
        return pick(pool, basis_hash, CONTEXT_MULTIPLIER, fallback="Studio")


class ProfileNameGenerator:
    @staticmethod
    def generate(scores: AxisScores, basis_hash: str) -> str:
        """Space profile name: ``"{context} {descriptor}"``, e.g. "Tokyo Minimal"."""
        context = ContextResolver.resolve(scores, basis_hash)
        descriptor = StructuralDescriptorResolver.resolve(scores, basis_hash)
        return f"{context} {descriptor}"


class DescriptionGenerator:
    @staticmethod
    def generate(scores: AxisScores) -> str:
        """
        One-sentence description of a space profile.

        Uses a combined sentence for the dominant and secondary poles when one
        exists (in either order), else the dominant-only sentence.
        """
        dominant = scores.dominant_axis
        dominant_positive = scores.value(dominant) >= 0

        secondary = scores.secondary_axis
        if secondary is not None:
            secondary_positive = scores.value(secondary) >= 0
            combined = _COMBINED_DESCRIPTIONS.get(
                (dominant, dominant_positive, secondary, secondary_positive)
            ) or _COMBINED_DESCRIPTIONS.get((secondary, secondary_positive, dominant, dominant_positive))
            if combined:
                return combined

        return _DOMINANT_DESCRIPTIONS[(dominant, dominant_positive)]
