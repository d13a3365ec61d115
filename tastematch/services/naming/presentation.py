from enum import Enum

from tastematch.models.axes import OBJECT_AXES, SPACE_AXES, Axis, AxisScores, ObjectAxis, ObjectAxisScores
from tastematch.services.naming.hashing import CONTEXT_MULTIPLIER, READING_MULTIPLIER, deterministic_index, round_half_away

STRONG_PHRASE_THRESHOLD = 0.3
WEAK_PHRASE_THRESHOLD = 0.15
EXTRA_PHRASE_THRESHOLD = 0.4
AVOID_PHRASE_THRESHOLD = 0.5
MAX_PHRASES = 4


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


class AxisVocabulary:
    """
    Deterministic wording for one family of axes.

    Every choice is keyed by a score hash (each axis value bucketed to tenths),
    so the same scores always produce the same phrases.
    """

    def __init__(
        self,
        axes: list,
        synonyms: dict[Enum, tuple[list[str], list[str]]],
        primary_words: dict[Enum, tuple[str, str]],
        categories: dict[Enum, str],
        category_order: tuple[str, ...],
    ):
        self.axes = axes
        self.synonyms = synonyms  # axis -> (positive pool, negative pool)
        self.primary_words = primary_words  # axis -> (positive, negative)
        self.categories = categories
        self.category_order = category_order

    def score_hash(self, scores) -> str:
        return "|".join(f"{axis.value}:{round_half_away(scores.value(axis) * 10)}" for axis in self.axes)

    def select_synonym(self, axis: Enum, positive: bool, score_hash: str, salt: str = "") -> str:
        positive_pool, negative_pool = self.synonyms[axis]
        pool = positive_pool if positive else negative_pool
        combined = score_hash + axis.value + ("+" if positive else "-") + salt
        return pool[deterministic_index(combined, CONTEXT_MULTIPLIER, len(pool))]

    def influence_word(self, axis: Enum, positive: bool) -> str:
        positive_word, negative_word = self.primary_words[axis]
        return positive_word if positive else negative_word

    def axis_display_label(self, axis: Enum) -> str:
        positive_word, negative_word = self.primary_words[axis]
        return f"{negative_word} — {positive_word}"

    def _by_magnitude(self, pairs: list[tuple[Enum, float]]) -> list[tuple[Enum, float]]:
        return sorted(pairs, key=lambda pair: abs(pair[1]), reverse=True)

    def influence_phrases(self, scores) -> list[str]:
        """
        Two to four influence phrases mixing axis categories.

        Takes the strongest axis of each category first, tops up to two from the
        remaining strong axes, then adds one more if it clears 0.4. Phrases that
        share a root word with an earlier phrase are dropped.
        """
        score_hash = self.score_hash(scores)
        pairs = [(axis, scores.value(axis)) for axis in self.axes]

        strong = self._by_magnitude([p for p in pairs if abs(p[1]) > STRONG_PHRASE_THRESHOLD])
        if len(strong) < 2:
            strong = self._by_magnitude([p for p in pairs if abs(p[1]) > WEAK_PHRASE_THRESHOLD])
        if len(strong) < 2:
            strong = self._by_magnitude(pairs)[:3]

        selected: list[tuple[Enum, float]] = []
        for category in self.category_order:
            first = next((p for p in strong if self.categories[p[0]] == category), None)
            if first is not None:
                selected.append(first)

        for pair in strong:
            if len(selected) >= 2:
                break
            if all(pair[0] != s[0] for s in selected):
                selected.append(pair)

        if len(selected) < MAX_PHRASES:
            for pair in strong:
                if all(pair[0] != s[0] for s in selected) and abs(pair[1]) > EXTRA_PHRASE_THRESHOLD:
                    selected.append(pair)
                    break

        used_roots: set[str] = set()
        phrases = []
        for axis, value in selected[:MAX_PHRASES]:
            word = self.select_synonym(axis, value >= 0, score_hash)
            root = word.split("-")[0].lower()
            if root in used_roots:
                continue
            used_roots.add(root)
            phrases.append(_capitalize_first(word))
        return phrases

    def avoid_phrases(self, scores) -> list[str]:
        """Up to two phrases for the opposite pole of the strongest (|v| > 0.5) axes."""
        score_hash = self.score_hash(scores)
        pairs = [(axis, scores.value(axis)) for axis in self.axes]
        strong = self._by_magnitude([p for p in pairs if abs(p[1]) > AVOID_PHRASE_THRESHOLD])[:2]
        return [_capitalize_first(self.select_synonym(axis, value < 0, score_hash, salt="avoid")) for axis, value in strong]


class SpaceVocabulary(AxisVocabulary):
    def one_line_reading(self, profile_name: str, scores: AxisScores) -> str:
        """A one-sentence curator reading of the profile."""
        score_hash = self.score_hash(scores)
        dominant = scores.dominant_axis
        d = self.select_synonym(dominant, scores.value(dominant) >= 0, score_hash, salt="reading.dom")

        secondary = scores.secondary_axis
        if secondary is not None:
            s = self.select_synonym(secondary, scores.value(secondary) >= 0, score_hash, salt="reading.sec")
            templates = [
                f"{profile_name} — {d} composition with a {s} counterpoint running through.",
                f"{profile_name} — {d} at its foundation, {s} in the details.",
                f"{profile_name} — {d} instinct holding {s} tension beneath the surface.",
                f"{profile_name} — a {d} register tempered by {s} restraint and conviction.",
                f"{profile_name} — {s} undertone driving a predominantly {d} material position.",
                f"{profile_name} — the register is {d}, the counterweight {s}, both considered.",
                f"{profile_name} — built on {d} ground, inflected with {s} precision and weight.",
            ]
        else:
            templates = [
                f"{profile_name} — {d} instinct from end to end, singular and uncompromised.",
                f"{profile_name} — {d} in every direction, without a competing register.",
            ]
        return templates[deterministic_index(score_hash + "reading", READING_MULTIPLIER, len(templates))]


space_vocabulary = SpaceVocabulary(
    axes=SPACE_AXES,
    synonyms={
        Axis.MINIMAL_ORNATE: (
            ["ornate", "embellished", "elaborate", "articulated", "gilt-edged", "filigree"],
            ["minimal", "pared-back", "reductive", "austere", "distilled", "bare"],
        ),
        Axis.WARM_COOL: (
            ["warm", "amber-toned", "earthen", "sun-warmed", "honeyed", "ochre"],
            ["cool", "lunar", "silvered", "frost-toned", "slate", "graphite"],
        ),
        Axis.SOFT_STRUCTURED: (
            ["structured", "precise", "architectural", "geometric", "exacting", "gridded"],
            ["soft", "yielding", "draped", "fluid", "pliant", "unhurried"],
        ),
        Axis.ORGANIC_INDUSTRIAL: (
            ["raw", "exposed", "unfinished", "forged", "hewn", "smelted"],
            ["organic", "hand-turned", "botanical", "woven", "rooted", "living-edge"],
        ),
        Axis.LIGHT_DARK: (
            ["dark", "shadowed", "inky", "obsidian", "blackened", "nocturnal"],
            ["light", "luminous", "bleached", "translucent", "chalked", "gauze-lit"],
        ),
        Axis.NEUTRAL_SATURATED: (
            ["vivid", "chromatic", "pigment-rich", "saturated", "dyed", "color-forward"],
            ["neutral", "tonal", "undyed", "monochrome", "achromatic", "greyed"],
        ),
        Axis.SPARSE_LAYERED: (
            ["layered", "stacked", "accumulated", "dense", "stratified", "built-up"],
            ["spare", "edited", "void-led", "essentialist", "emptied", "stripped"],
        ),
    },
    primary_words={
        Axis.MINIMAL_ORNATE: ("Ornate", "Minimal"),
        Axis.WARM_COOL: ("Warm", "Cool"),
        Axis.SOFT_STRUCTURED: ("Structured", "Soft"),
        Axis.ORGANIC_INDUSTRIAL: ("Raw", "Organic"),
        Axis.LIGHT_DARK: ("Dark", "Light"),
        Axis.NEUTRAL_SATURATED: ("Vivid", "Neutral"),
        Axis.SPARSE_LAYERED: ("Layered", "Spare"),
    },
    categories={
        Axis.MINIMAL_ORNATE: "structural",
        Axis.SOFT_STRUCTURED: "structural",
        Axis.SPARSE_LAYERED: "structural",
        Axis.WARM_COOL: "atmosphere",
        Axis.LIGHT_DARK: "atmosphere",
        Axis.NEUTRAL_SATURATED: "atmosphere",
        Axis.ORGANIC_INDUSTRIAL: "material",
    },
    category_order=("structural", "atmosphere", "material"),
)

object_vocabulary = AxisVocabulary(
    axes=OBJECT_AXES,
    synonyms={
        ObjectAxis.PRECISION: (
            ["precise", "exacting", "tight-tolerance", "calibrated", "metered", "dialed"],
            ["rough", "imprecise", "loose", "unfinished", "approximate", "raw-cut"],
        ),
        ObjectAxis.PATINA: (
            ["worn", "aged", "oxidized", "weathered", "seasoned", "lived-in"],
            ["factory-new", "pristine", "sealed", "mint", "unworn", "untouched"],
        ),
        ObjectAxis.UTILITY: (
            ["functional", "carried", "deployed", "daily-use", "field-ready", "loaded"],
            ["decorative", "displayed", "mounted", "ceremonial", "vitrine-kept", "shelved"],
        ),
        ObjectAxis.FORMALITY: (
            ["formal", "ceremonial", "dressed", "protocol", "occasion", "black-tie"],
            ["casual", "off-duty", "undone", "street", "relaxed", "weekend"],
        ),
        ObjectAxis.SUBCULTURE: (
            ["niche", "coded", "insider", "deep-cut", "underground", "scene-specific"],
            ["mainstream", "universal", "open", "standard", "broad-market", "general"],
        ),
        ObjectAxis.ORNAMENT: (
            ["embellished", "engraved", "etched", "filigreed", "detailed", "guilloché"],
            ["austere", "blank", "bare", "unmarked", "stripped", "unadorned"],
        ),
        ObjectAxis.HERITAGE: (
            ["legacy", "storied", "lineage", "archive", "house", "provenance"],
            ["new-gen", "first-run", "debut", "contemporary", "fresh-house", "zero"],
        ),
        ObjectAxis.TECHNICALITY: (
            ["engineered", "hi-tech", "composite", "technical", "alloy", "machined"],
            ["analog", "handbuilt", "lo-fi", "manual", "bench-made", "artisanal"],
        ),
        ObjectAxis.MINIMALISM: (
            ["stripped", "essential", "reduced", "distilled", "negative-space", "edited"],
            ["maximal", "layered", "stacked", "dense", "accumulated", "heavy"],
        ),
    },
    primary_words={
        ObjectAxis.PRECISION: ("Precise", "Rough"),
        ObjectAxis.PATINA: ("Worn", "Pristine"),
        ObjectAxis.UTILITY: ("Functional", "Decorative"),
        ObjectAxis.FORMALITY: ("Formal", "Casual"),
        ObjectAxis.SUBCULTURE: ("Niche", "Mainstream"),
        ObjectAxis.ORNAMENT: ("Embellished", "Austere"),
        ObjectAxis.HERITAGE: ("Legacy", "New-Gen"),
        ObjectAxis.TECHNICALITY: ("Engineered", "Analog"),
        ObjectAxis.MINIMALISM: ("Essential", "Maximal"),
    },
    categories={
        ObjectAxis.PRECISION: "material",
        ObjectAxis.PATINA: "material",
        ObjectAxis.TECHNICALITY: "material",
        ObjectAxis.UTILITY: "behavioral",
        ObjectAxis.FORMALITY: "behavioral",
        ObjectAxis.SUBCULTURE: "behavioral",
        ObjectAxis.ORNAMENT: "identity",
        ObjectAxis.HERITAGE: "identity",
        ObjectAxis.MINIMALISM: "identity",
    },
    category_order=("material", "behavioral", "identity"),
)


def vocabulary_for(scores: AxisScores | ObjectAxisScores) -> AxisVocabulary:
    return object_vocabulary if isinstance(scores, ObjectAxisScores) else space_vocabulary
