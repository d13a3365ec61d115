from datetime import datetime

from loguru import logger

from tastematch.models.axes import Axis, AxisScores, ObjectAxis, ObjectAxisScores
from tastematch.models.identity import utcnow
from tastematch.models.profile import ProfileNaming, ProfileNamingResult, TasteDomain
from tastematch.models.vectors import ObjectVector, TasteVector, WeightVector
from tastematch.services.calibration.archetypes import ArchetypeDuels
from tastematch.services.naming.basis import BasisHashBuilder
from tastematch.services.naming.hashing import (
    ART_GESTURE_MULTIPLIER,
    ART_MOVEMENT_MULTIPLIER,
    OBJECT_SIGNAL_MULTIPLIER,
    OBJECT_TONE_MULTIPLIER,
    pick,
)
from tastematch.services.naming.profile_naming import DescriptionGenerator, ProfileNameGenerator
from tastematch.services.profile.axis_mapping import AxisMapper
from tastematch.services.profile.constants import STRONG_SEPARATION, STRONG_SWIPE_COUNT

MAX_PREVIOUS_NAMES = 3

OBJECT_SIGNAL_POOLS: dict[tuple[ObjectAxis, bool], list[str]] = {
    (ObjectAxis.PRECISION, True): ["Calibrated", "Machined", "Exacting", "Toleranced"],
    (ObjectAxis.PRECISION, False): ["Rough", "Approximate", "Loose", "Unmetered"],
    (ObjectAxis.PATINA, True): ["Weathered", "Worn", "Oxidized", "Seasoned"],
    (ObjectAxis.PATINA, False): ["Pristine", "Factory", "Sealed", "Unworn"],
    (ObjectAxis.UTILITY, True): ["Deployed", "Fielded", "Loaded", "Carried"],
    (ObjectAxis.UTILITY, False): ["Displayed", "Archived", "Mounted", "Cased"],
    (ObjectAxis.FORMALITY, True): ["Ceremonial", "Formal", "Dressed", "Protocol"],
    (ObjectAxis.FORMALITY, False): ["Casual", "Off-Duty", "Undone", "Relaxed"],
    (ObjectAxis.SUBCULTURE, True): ["Underground", "Coded", "Deep-Cut", "Insider"],
    (ObjectAxis.SUBCULTURE, False): ["Standard", "Mainline", "Universal", "Open"],
    (ObjectAxis.ORNAMENT, True): ["Etched", "Guilloché", "Engraved", "Filigreed"],
    (ObjectAxis.ORNAMENT, False): ["Blank", "Bare", "Stripped", "Unmarked"],
    (ObjectAxis.HERITAGE, True): ["Storied", "Lineage", "Legacy", "Archive"],
    (ObjectAxis.HERITAGE, False): ["New-Gen", "First-Run", "Debut", "Zero"],
    (ObjectAxis.TECHNICALITY, True): ["Engineered", "Composite", "Alloy", "Technical"],
    (ObjectAxis.TECHNICALITY, False): ["Analog", "Manual", "Handbuilt", "Lo-Fi"],
    (ObjectAxis.MINIMALISM, True): ["Reduced", "Distilled", "Essential", "Negative"],
    (ObjectAxis.MINIMALISM, False): ["Stacked", "Dense", "Loaded", "Heavy"],
}

OBJECT_TONE_POOLS: dict[tuple[ObjectAxis, bool], list[str]] = {
    (ObjectAxis.PRECISION, True): ["Tolerance", "Grade", "Spec", "Gauge"],
    (ObjectAxis.PRECISION, False): ["Drift", "Scatter", "Blur", "Margin"],
    (ObjectAxis.PATINA, True): ["Relic", "Verdigris", "Tarnish", "Grain"],
    (ObjectAxis.PATINA, False): ["Mint", "Stock", "Fresh", "Uncut"],
    (ObjectAxis.UTILITY, True): ["Kit", "Loadout", "Rig", "Carry"],
    (ObjectAxis.UTILITY, False): ["Vitrine", "Case", "Display", "Shelf"],
    (ObjectAxis.FORMALITY, True): ["Rite", "Occasion", "Order", "Code"],
    (ObjectAxis.FORMALITY, False): ["Break", "Ease", "Rest", "Off-Clock"],
    (ObjectAxis.SUBCULTURE, True): ["Signal", "Cipher", "Frequency", "Channel"],
    (ObjectAxis.SUBCULTURE, False): ["Baseline", "Default", "Norm", "Standard"],
    (ObjectAxis.ORNAMENT, True): ["Motif", "Flourish", "Relief", "Pattern"],
    (ObjectAxis.ORNAMENT, False): ["Void", "Plane", "Flat", "Ground"],
    (ObjectAxis.HERITAGE, True): ["House", "Provenance", "Edition", "Mark"],
    (ObjectAxis.HERITAGE, False): ["Prototype", "Draft", "Origin", "Launch"],
    (ObjectAxis.TECHNICALITY, True): ["Lab", "Module", "System", "Matrix"],
    (ObjectAxis.TECHNICALITY, False): ["Hand", "Loom", "Bench", "Craft"],
    (ObjectAxis.MINIMALISM, True): ["Absence", "Silence", "Clear", "Less"],
    (ObjectAxis.MINIMALISM, False): ["Mass", "Weight", "Layer", "Stack"],
}

ART_MOVEMENT_POOLS: dict[tuple[Axis, bool], list[str]] = {
    (Axis.MINIMAL_ORNATE, False): ["Post-Minimal", "Reductive", "Zero", "Void"],
    (Axis.MINIMAL_ORNATE, True): ["Baroque", "Maximal", "Ornamental", "Decorative"],
    (Axis.WARM_COOL, False): ["Monochrome", "Chromatic", "Spectral", "Glacial"],
    (Axis.WARM_COOL, True): ["Contemporary", "Earthwork", "Vernacular", "Archive"],
    (Axis.SOFT_STRUCTURED, False): ["Gestural", "Lyrical", "Fluid", "Organic"],
    (Axis.SOFT_STRUCTURED, True): ["Constructivist", "Systematic", "Geometric", "Serial"],
    (Axis.ORGANIC_INDUSTRIAL, False): ["Biomorphic", "Natural", "Elemental", "Terrestrial"],
    (Axis.ORGANIC_INDUSTRIAL, True): ["Brutal", "Industrial", "Material", "Concrete"],
    (Axis.LIGHT_DARK, False): ["Luminous", "Light", "Radiant", "Prismatic"],
    (Axis.LIGHT_DARK, True): ["Nocturnal", "Shadow", "Tenebrist", "Crepuscular"],
    (Axis.NEUTRAL_SATURATED, False): ["Tonal", "Achromatic", "Grayscale", "Subdued"],
    (Axis.NEUTRAL_SATURATED, True): ["Chromatic", "Polychrome", "Saturated", "Pigment"],
    (Axis.SPARSE_LAYERED, False): ["Essential", "Distilled", "Sparse", "Singular"],
    (Axis.SPARSE_LAYERED, True): ["Accumulated", "Stratified", "Palimpsest", "Dense"],
}

ART_GESTURE_POOLS: dict[tuple[Axis, bool], list[str]] = {
    (Axis.MINIMAL_ORNATE, False): ["Study", "Notation", "Mark", "Trace"],
    (Axis.MINIMAL_ORNATE, True): ["Tableau", "Scene", "Vista", "Field"],
    (Axis.WARM_COOL, False): ["Strike", "Cut", "Fracture", "Edge"],
    (Axis.WARM_COOL, True): ["Signal", "Pulse", "Breath", "Echo"],
    (Axis.SOFT_STRUCTURED, False): ["Gesture", "Drift", "Sway", "Wave"],
    (Axis.SOFT_STRUCTURED, True): ["Grid", "Structure", "Module", "Unit"],
    (Axis.ORGANIC_INDUSTRIAL, False): ["Growth", "Root", "Bloom", "Spore"],
    (Axis.ORGANIC_INDUSTRIAL, True): ["Force", "Impact", "Pressure", "Mass"],
    (Axis.LIGHT_DARK, False): ["Glow", "Haze", "Aura", "Gleam"],
    (Axis.LIGHT_DARK, True): ["Depth", "Void", "Well", "Pit"],
    (Axis.NEUTRAL_SATURATED, False): ["Silence", "Pause", "Rest", "Lull"],
    (Axis.NEUTRAL_SATURATED, True): ["Burst", "Flare", "Charge", "Surge"],
    (Axis.SPARSE_LAYERED, False): ["Point", "Line", "Dot", "Plane"],
    (Axis.SPARSE_LAYERED, True): ["Layer", "Fold", "Weave", "Band"],
}


def _leading_pair(scores) -> tuple:
    # the second word always comes from the runner-up axis, however weak
    ranked = scores.ranked_axes()
    dominant = ranked[0]
    secondary = ranked[1] if len(ranked) >= 2 else dominant
    return dominant, secondary


class ObjectNamingEngine:
    """Object profile names: ``"{Signal} {Tone}"``."""

    @staticmethod
    def generate(scores: ObjectAxisScores, basis_hash: str) -> str:
        dominant, secondary = _leading_pair(scores)
        signal = pick(
            OBJECT_SIGNAL_POOLS.get((dominant, scores.value(dominant) >= 0), []),
            basis_hash,
            OBJECT_SIGNAL_MULTIPLIER,
            fallback="Quiet",
        )
        tone = pick(
            OBJECT_TONE_POOLS.get((secondary, scores.value(secondary) >= 0), []),
            basis_hash,
            OBJECT_TONE_MULTIPLIER,
            fallback="Quiet",
        )
        return f"{signal} {tone}"

    @staticmethod
    def from_space_scores(scores: AxisScores) -> ObjectAxisScores:
        """Closest object-axis approximation of space axis scores."""
        v = scores.value
        return ObjectAxisScores(
            scores={
                ObjectAxis.PRECISION: v(Axis.SOFT_STRUCTURED),
                ObjectAxis.PATINA: v(Axis.WARM_COOL),
                ObjectAxis.UTILITY: -v(Axis.MINIMAL_ORNATE),
                ObjectAxis.FORMALITY: v(Axis.MINIMAL_ORNATE),
                ObjectAxis.SUBCULTURE: -v(Axis.NEUTRAL_SATURATED),
                ObjectAxis.ORNAMENT: v(Axis.MINIMAL_ORNATE),
                ObjectAxis.HERITAGE: v(Axis.WARM_COOL),
                ObjectAxis.TECHNICALITY: v(Axis.ORGANIC_INDUSTRIAL),
                ObjectAxis.MINIMALISM: -v(Axis.SPARSE_LAYERED),
            }
        )

    @staticmethod
    def describe(scores: ObjectAxisScores) -> str:
        """Tagline of the archetype nearest to the scores."""
        return ArchetypeDuels.nearest(scores.scores).signature.tagline


class ArtNamingEngine:
    """Art profile names: ``"{Movement} {Gesture}"``."""

    @staticmethod
    def generate(scores: AxisScores, basis_hash: str) -> str:
        dominant, secondary = _leading_pair(scores)
        movement = pick(
            ART_MOVEMENT_POOLS.get((dominant, scores.value(dominant) >= 0), []),
            basis_hash,
            ART_MOVEMENT_MULTIPLIER,
            fallback="Study",
        )
        gesture = pick(
            ART_GESTURE_POOLS.get((secondary, scores.value(secondary) >= 0), []),
            basis_hash,
            ART_GESTURE_MULTIPLIER,
            fallback="Study",
        )
        return f"{movement} {gesture}"


class DomainNameDispatcher:
    @staticmethod
    def generate(scores: AxisScores, basis_hash: str, domain: TasteDomain) -> str:
        if domain == TasteDomain.OBJECTS:
            return ObjectNamingEngine.generate(ObjectNamingEngine.from_space_scores(scores), basis_hash)
        if domain == TasteDomain.ART:
            return ArtNamingEngine.generate(scores, basis_hash)
        return ProfileNameGenerator.generate(scores, basis_hash)


class ProfileNamingEngine:
    """
    Resolves the display name for a profile, evolving it only on real change.
    """

    @staticmethod
    def should_evolve(vector: WeightVector, swipe_count: int) -> bool:
        return (
            vector.confidence_level(swipe_count) == "Strong"
            or swipe_count >= STRONG_SWIPE_COUNT
            or vector.separation >= STRONG_SEPARATION
        )

    @staticmethod
    def _name_and_description(vector: WeightVector, swipe_count: int, domain: TasteDomain) -> tuple[str, str, str]:
        if domain == TasteDomain.OBJECTS and isinstance(vector, ObjectVector):
            object_scores = AxisMapper.object_axis_scores(vector)
            basis_hash = BasisHashBuilder.build(object_scores, vector, swipe_count)
            name = ObjectNamingEngine.generate(object_scores, basis_hash)
            return name, ObjectNamingEngine.describe(object_scores), basis_hash

        space_vector = vector if isinstance(vector, TasteVector) else TasteVector(weights=dict(vector.weights))
        scores = AxisMapper.axis_scores(space_vector)
        basis_hash = BasisHashBuilder.build(scores, space_vector, swipe_count)
        name = DomainNameDispatcher.generate(scores, basis_hash, domain)
        return name, DescriptionGenerator.generate(scores), basis_hash

    @staticmethod
    def resolve(
        vector: WeightVector,
        swipe_count: int,
        existing: ProfileNaming,
        domain: TasteDomain = TasteDomain.SPACE,
        now: datetime | None = None,
    ) -> ProfileNamingResult:
        """
        Resolve the name for a profile.

        Args:
            vector: TasteVector for space/art, ObjectVector for objects
            swipe_count: Swipes recorded for the profile
            existing: The currently stored naming (empty name on first run)
            domain: Which naming grammar to use
            now: Timestamp for a new or evolved name

        Returns:
            ProfileNamingResult; ``did_update`` is False when the old name is kept
        """
        now = now or utcnow()
        name, description, basis_hash = ProfileNamingEngine._name_and_description(vector, swipe_count, domain)

        if not existing.name:
            logger.debug(f"Assigned first {domain.value} name '{name}'")
            return ProfileNamingResult(
                name=name,
                description=description,
                version=1,
                basis_hash=basis_hash,
                previous_names=[],
                updated_at=now,
                did_update=True,
            )

        if basis_hash != existing.basis_hash and ProfileNamingEngine.should_evolve(vector, swipe_count):
            previous = list(existing.previous_names)
            if existing.name not in previous:
                previous.append(existing.name)
            previous = previous[-MAX_PREVIOUS_NAMES:]
            logger.info(f"Profile name evolved '{existing.name}' -> '{name}' (v{existing.version + 1})")
            return ProfileNamingResult(
                name=name,
                description=description,
                version=existing.version + 1,
                basis_hash=basis_hash,
                previous_names=previous,
                updated_at=now,
                did_update=True,
            )

        return ProfileNamingResult(
            name=existing.name,
            description=description,
            version=existing.version,
            basis_hash=existing.basis_hash,
            previous_names=list(existing.previous_names),
            updated_at=existing.updated_at or now,
            did_update=False,
        )
