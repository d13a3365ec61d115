from pydantic import BaseModel

from tastematch.models.vectors import AVOID_THRESHOLD, TasteVector
from tastematch.services.naming.presentation import space_vocabulary
from tastematch.services.profile.axis_mapping import AxisMapper

TOP_BOOST = 1.2
SHIFT_TOP_FACTOR = 0.85
SHIFT_SECOND_FACTOR = 1.15
CONTRAST_FLIP = -0.5


class TasteVariant(BaseModel):
    label: str
    subtitle: str
    vector: TasteVector


def _lead_word(weights: dict[str, float]) -> str:
    scores = AxisMapper.axis_scores(TasteVector(weights=weights))
    axis = scores.dominant_axis
    return space_vocabulary.influence_word(axis, scores.value(axis) >= 0)


def generate_variants(vector: TasteVector) -> list[TasteVariant]:
    """
    Three deterministic alternatives to a space vector.

    - "More X": the top tag boosted by 20% (capped at 1)
    - "X Shift": top tag x0.85, second tag x1.15 (only with a second tag)
    - "Contrast Mix": every avoided tag (< -0.2) flipped to half its magnitude
    """
    ranked = sorted(vector.weights.items(), key=lambda kv: kv[1], reverse=True)
    if not ranked:
        return []
    top_key, top_value = ranked[0]

    variants = []

    boosted = dict(vector.weights)
    boosted[top_key] = min(1.0, top_value * TOP_BOOST)
    variants.append(
        TasteVariant(
            label=f"More {_lead_word(boosted)}",
            subtitle="Leaning further into your strongest signal",
            vector=TasteVector(weights=boosted),
        )
    )

    if len(ranked) > 1:
        second_key, second_value = ranked[1]
        shifted = dict(vector.weights)
        shifted[top_key] = top_value * SHIFT_TOP_FACTOR
        shifted[second_key] = min(1.0, second_value * SHIFT_SECOND_FACTOR)
        variants.append(
            TasteVariant(
                label=f"{_lead_word(shifted)} Shift",
                subtitle="Rebalancing toward your secondary thread",
                vector=TasteVector(weights=shifted),
            )
        )

    contrast = {k: (v * CONTRAST_FLIP if v < AVOID_THRESHOLD else v) for k, v in vector.weights.items()}
    variants.append(
        TasteVariant(
            label="Contrast Mix",
            subtitle="Inverting what you usually avoid",
            vector=TasteVector(weights=contrast),
        )
    )
    return variants
