import math

_MASK_64 = (1 << 64) - 1

DESCRIPTOR_MULTIPLIER = 31
CONTEXT_MULTIPLIER = 37
READING_MULTIPLIER = 41
ART_MOVEMENT_MULTIPLIER = 47
ART_GESTURE_MULTIPLIER = 53
OBJECT_SIGNAL_MULTIPLIER = 59
OBJECT_TONE_MULTIPLIER = 61
RADAR_MULTIPLIER = 2654435761


def rolling_hash(text: str, multiplier: int) -> int:
    """``h = (h + byte) * multiplier`` over the UTF-8 bytes, wrapping at 2^64."""
    h = 0
    for byte in text.encode("utf-8"):
        h = ((h + byte) * multiplier) & _MASK_64
    return h


def deterministic_index(text: str, multiplier: int, count: int) -> int:
    if count <= 0:
        return 0
    return rolling_hash(text, multiplier) % count


def pick(pool: list[str], text: str, multiplier: int, fallback: str) -> str:
    if not pool:
        return fallback
    return pool[deterministic_index(text, multiplier, len(pool))]


def round_half_away(value: float) -> int:
    """Round to nearest, halves away from zero (``round()`` would use banker's rounding)."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def profile_seed(profile_id) -> int:
    """Shuffle seed for a profile: the descriptor hash of its canonical upper-case UUID string."""
    return rolling_hash(str(profile_id).upper(), DESCRIPTOR_MULTIPLIER)


def seeded_shuffle(items: list, seed: int) -> list:
    """Fisher-Yates driven by ``seed * (i + 1)`` so the order depends only on the seed."""
    result = list(items)
    n = len(result)
    for i in range(n - 1, 0, -1):
        j = ((seed * (i + 1)) & _MASK_64) % n
        result[i], result[j] = result[j], result[i]
    return result
