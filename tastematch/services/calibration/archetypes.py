from enum import Enum

from pydantic import BaseModel

from tastematch.models.axes import OBJECT_AXES, ObjectAxis
from tastematch.models.vectors import ObjectVector
from tastematch.services.naming.hashing import profile_seed, seeded_shuffle

DUEL_WEIGHT = 0.15


class ObjectArchetype(str, Enum):
    ARCHIVE_MINIMALIST = "archiveMinimalist"
    INDUSTRIAL_ROMANTIC = "industrialRomantic"
    STREET_COLLECTOR = "streetCollector"
    QUIET_LUXURY = "quietLuxury"
    TOOL_WORSHIP = "toolWorship"
    HERITAGE_MAXIMALIST = "heritageMaximalist"
    TECHNICAL_ASCETIC = "technicalAscetic"
    PATINA_PURIST = "patinaPurist"
    SUBCULTURE_ARCHIVIST = "subcultureArchivist"
    NEW_CEREMONIALIST = "newCeremonialist"

    @property
    def signature(self) -> "ArchetypeSignature":
        return ARCHETYPE_SIGNATURES[self]


class ArchetypeSignature(BaseModel):
    axes: dict[ObjectAxis, float]
    name: str
    tagline: str
    keywords: list[str]

    @property
    def dominant_axis(self) -> ObjectAxis:
        # first maximal axis in declaration order
        return max(OBJECT_AXES, key=lambda axis: abs(self.axes.get(axis, 0.0)))

    def distance_to(self, other: "ArchetypeSignature") -> float:
        """Squared Euclidean distance over the nine axes."""
        return sum((self.axes.get(axis, 0.0) - other.axes.get(axis, 0.0)) ** 2 for axis in OBJECT_AXES)


def _signature(values: tuple[float, ...], name: str, tagline: str, keywords: list[str]) -> ArchetypeSignature:
    # values follow ObjectAxis declaration order
    return ArchetypeSignature(axes=dict(zip(OBJECT_AXES, values)), name=name, tagline=tagline, keywords=keywords)


ARCHETYPE_SIGNATURES: dict[ObjectArchetype, ArchetypeSignature] = {
    ObjectArchetype.ARCHIVE_MINIMALIST: _signature(
        (0.2, 0.1, 0.0, 0.1, 0.0, -0.7, 0.6, 0.0, 0.8),
        "Archive Minimalist",
        "Less, but considered.",
        ["edited", "archive", "restraint"],
    ),
    ObjectArchetype.INDUSTRIAL_ROMANTIC: _signature(
        (-0.2, 0.8, 0.2, -0.6, 0.3, 0.1, 0.3, -0.5, -0.3),
        "Industrial Romantic",
        "Raw finish, warm soul.",
        ["patina", "raw", "lived-in"],
    ),
    ObjectArchetype.STREET_COLLECTOR: _signature(
        (0.0, 0.1, 0.6, -0.7, 0.8, 0.2, 0.1, 0.1, -0.2),
        "Street Collector",
        "Culture over category.",
        ["streetwear", "utility", "coded"],
    ),
    ObjectArchetype.QUIET_LUXURY: _signature(
        (0.7, 0.0, 0.0, 0.6, -0.3, -0.5, 0.5, 0.2, 0.3),
        "Quiet Luxury",
        "Restraint as signal.",
        ["precision", "discreet", "legacy"],
    ),
    ObjectArchetype.TOOL_WORSHIP: _signature(
        (0.8, -0.1, 0.8, -0.2, 0.1, -0.3, 0.0, 0.7, 0.2),
        "Tool Worship",
        "Function is the ornament.",
        ["tool", "function", "engineered"],
    ),
    ObjectArchetype.HERITAGE_MAXIMALIST: _signature(
        (0.2, 0.3, -0.1, 0.3, 0.1, 0.8, 0.7, -0.2, -0.8),
        "Heritage Maximalist",
        "Curated accumulation.",
        ["ornate", "legacy", "layered"],
    ),
    ObjectArchetype.TECHNICAL_ASCETIC: _signature(
        (0.7, -0.4, 0.3, 0.0, 0.0, -0.5, -0.2, 0.8, 0.7),
        "Technical Ascetic",
        "Engineered emptiness.",
        ["technical", "minimal", "precise"],
    ),
    ObjectArchetype.PATINA_PURIST: _signature(
        (-0.1, 0.9, 0.2, -0.2, 0.2, 0.0, 0.6, -0.6, 0.0),
        "Patina Purist",
        "Wear is character.",
        ["worn", "aged", "storied"],
    ),
    ObjectArchetype.SUBCULTURE_ARCHIVIST: _signature(
        (0.0, 0.2, 0.3, -0.5, 0.9, 0.2, 0.5, 0.0, -0.1),
        "Subculture Archivist",
        "Deep cuts only.",
        ["niche", "archive", "insider"],
    ),
    ObjectArchetype.NEW_CEREMONIALIST: _signature(
        (0.3, -0.6, -0.1, 0.8, -0.1, 0.4, 0.0, 0.6, 0.0),
        "New Ceremonialist",
        "Future-facing ritual.",
        ["formal", "technical", "future"],
    ),
}


class ArchetypeDuels:
    @staticmethod
    def natural_pairs() -> list[tuple[ObjectArchetype, ObjectArchetype]]:
        """
        Greedy pairing in archetype order.

        Each unused archetype is paired with the later unused archetype that has
        a different dominant axis and the greatest distance (first wins on ties).
        """
        archetypes = list(ObjectArchetype)
        used: set[int] = set()
        pairs = []
        for i, left in enumerate(archetypes):
            if i in used:
                continue
            best_j, best_distance = -1, -1.0
            for j in range(i + 1, len(archetypes)):
                if j in used:
                    continue
                right = archetypes[j]
                if left.signature.dominant_axis == right.signature.dominant_axis:
                    continue
                distance = left.signature.distance_to(right.signature)
                if distance > best_distance:
                    best_j, best_distance = j, distance
            if best_j >= 0:
                pairs.append((left, archetypes[best_j]))
                used.update((i, best_j))
        return pairs

    @staticmethod
    def generate_pairs(count: int, profile_id) -> list[tuple[ObjectArchetype, ObjectArchetype]]:
        """
        Duel pairs for a profile.

        Args:
            count: Number of pairs wanted
            profile_id: Profile UUID; the shuffle is keyed on it

        Returns:
            Exactly ``count`` pairs (fewer only if no natural pair exists). When
            more are asked for than exist, the shuffled pairs repeat with sides swapped.
        """
        shuffled = seeded_shuffle(ArchetypeDuels.natural_pairs(), profile_seed(profile_id))
        if not shuffled:
            return []
        result = list(shuffled)
        while len(result) < count:
            result.extend((right, left) for left, right in shuffled)
        return result[:count]

    @staticmethod
    def apply_result(
        winner: ObjectArchetype,
        vector: ObjectVector,
        affinities: dict[str, float],
        weight: float = DUEL_WEIGHT,
    ) -> None:
        """Add ``value * weight`` per axis to the vector and ``weight`` to the winner's affinity, in place."""
        for axis, value in winner.signature.axes.items():
            vector.add(axis.value, value * weight)
        affinities[winner.value] = affinities.get(winner.value, 0.0) + weight

    @staticmethod
    def nearest(scores: dict[ObjectAxis, float]) -> ObjectArchetype:
        """Archetype whose signature is closest to the given axis values."""
        return min(
            ObjectArchetype,
            key=lambda a: sum((a.signature.axes.get(axis, 0.0) - scores.get(axis, 0.0)) ** 2 for axis in OBJECT_AXES),
        )
