from tastematch.models.axes import Axis, AxisScores
from tastematch.models.tips import DesignGoal, DesignTip, RoomContext
from tastematch.models.vectors import StyleTag, TasteVector

MAX_TIPS = 3
# |axis score| needed before the palette or material reads as a signal
SIGNAL_THRESHOLD = 0.3

TAG_TITLES: dict[StyleTag, str] = {
    StyleTag.MID_CENTURY_MODERN: "Retro Visionary",
    StyleTag.SCANDINAVIAN: "Nordic Soul",
    StyleTag.INDUSTRIAL: "Industrial Edge",
    StyleTag.BOHEMIAN: "Boho Spirit",
    StyleTag.MINIMALIST: "Less Is More",
    StyleTag.TRADITIONAL: "Classic Heart",
    StyleTag.COASTAL: "Coastal Dreamer",
    StyleTag.RUSTIC: "Rustic Roots",
    StyleTag.ART_DECO: "Deco Maximalist",
    StyleTag.JAPANDI: "Zen Minimalist",
}

STYLE_TIPS: dict[StyleTag, DesignTip] = {
    StyleTag.MID_CENTURY_MODERN: DesignTip(
        icon="chair.lounge",
        headline="Anchor with a statement piece",
        body="Your mid-century eye loves clean silhouettes. Try a single iconic chair or credenza as the room's "
        "focal point and let everything else orbit it.",
    ),
    StyleTag.SCANDINAVIAN: DesignTip(
        icon="sun.max",
        headline="Chase the light",
        body="Your Scandinavian taste pairs naturally with daylight. Swap heavy drapes for sheer linen curtains "
        "and watch the room transform.",
    ),
    StyleTag.INDUSTRIAL: DesignTip(
        icon="lightbulb",
        headline="Expose one raw element",
        body="Your industrial instinct thrives on honesty. If you can't expose brick or ductwork, try an "
        "open-frame bookshelf or wire-cage pendant.",
    ),
    StyleTag.BOHEMIAN: DesignTip(
        icon="paintpalette",
        headline="Layer patterns fearlessly",
        body="Your boho spirit lives in texture. Mix a kilim rug with a printed throw and embroidered cushions; "
        "the more personal, the better.",
    ),
    StyleTag.MINIMALIST: DesignTip(
        icon="square.dashed",
        headline="Edit one thing out",
        body="Your minimalist eye values restraint. Walk through the room and remove one object. The breathing "
        "space you create is the design.",
    ),
    StyleTag.TRADITIONAL: DesignTip(
        icon="books.vertical",
        headline="Invest in symmetry",
        body="Your classic taste loves balance. Try matching table lamps flanking a sofa or identical frames on "
        "either side of a mantle.",
    ),
    StyleTag.COASTAL: DesignTip(
        icon="water.waves",
        headline="Bring in natural fiber",
        body="Your coastal soul craves texture from the shore. A jute rug or rattan accent chair instantly "
        "grounds the breezy palette.",
    ),
    StyleTag.RUSTIC: DesignTip(
        icon="tree",
        headline="Let wood tell a story",
        body="Your rustic warmth deepens with character. Look for reclaimed or live-edge pieces; imperfections "
        "are features, not flaws.",
    ),
    StyleTag.ART_DECO: DesignTip(
        icon="diamond",
        headline="Go bold on one surface",
        body="Your Art Deco sensibility loves drama. Try a geometric-patterned wallpaper or a gold-framed mirror "
        "on a single accent wall.",
    ),
    StyleTag.JAPANDI: DesignTip(
        icon="leaf",
        headline="Embrace wabi-sabi",
        body="Your Japandi aesthetic values imperfect beauty. A hand-thrown ceramic vase or an unfinished wood "
        "bowl adds quiet soul.",
    ),
}

# (palette, material) -> tip; a None material matches any material
SIGNAL_TIPS: dict[tuple[str, str | None], DesignTip] = {
    ("warm", "wood"): DesignTip(
        icon="flame",
        headline="Warm it up with amber light",
        body="Your warm wood tones glow under 2700K bulbs. Swap cool-white LEDs for warm ones to amplify the "
        "coziness.",
    ),
    ("warm", "textile"): DesignTip(
        icon="bed.double",
        headline="Double down on softness",
        body="Your warm textile palette loves layering. Add a chunky knit throw or a linen bedspread to deepen "
        "that inviting feel.",
    ),
    ("cool", "metal"): DesignTip(
        icon="sparkle",
        headline="Polish meets patina",
        body="Your cool metallic palette shines with contrast. Mix brushed steel with a matte black accent for "
        "industrial depth.",
    ),
    ("cool", "wood"): DesignTip(
        icon="snowflake",
        headline="Lighten the wood tone",
        body="Your cool palette pairs best with ash or white oak. If your wood runs dark, balance with light "
        "textiles.",
    ),
    ("neutral", None): DesignTip(
        icon="circle.lefthalf.filled",
        headline="Add one accent color",
        body="Your balanced neutrals are a perfect canvas. Introduce a single accent, sage or slate or navy, "
        "through cushions or art.",
    ),
}

ROOM_TIPS: dict[RoomContext, DesignTip] = {
    RoomContext.LIVING_ROOM: DesignTip(
        icon="sofa",
        headline="Create a conversation zone",
        body="Pull furniture slightly away from the walls and angle seats toward each other. It feels more "
        "intimate and intentional.",
    ),
    RoomContext.BEDROOM: DesignTip(
        icon="moon.stars",
        headline="Keep tech out of sight",
        body="Your bedroom is for rest. Hide chargers in a drawer, skip the TV mount, and let the room breathe "
        "calm.",
    ),
    RoomContext.KITCHEN: DesignTip(
        icon="frying.pan",
        headline="Display what you use",
        body="Open shelving with your favorite ceramics and cookbooks turns function into decor. Curate, don't "
        "clutter.",
    ),
    RoomContext.OFFICE: DesignTip(
        icon="desktopcomputer",
        headline="Zone your desk",
        body="Keep your primary work surface clear. Move reference items and supplies to a side table or shelf "
        "within arm's reach.",
    ),
    RoomContext.BATHROOM: DesignTip(
        icon="drop",
        headline="Upgrade the small things",
        body="Swap out the soap dispenser, towel hooks, and bath mat. Small changes make a bathroom feel fully "
        "renovated.",
    ),
    RoomContext.OUTDOOR: DesignTip(
        icon="sun.horizon",
        headline="Layer outdoor lighting",
        body="String lights overhead, lanterns at ground level, and a candle on the table. Layered light turns a "
        "patio into a destination.",
    ),
}

GOAL_TIPS: dict[DesignGoal, DesignTip] = {
    DesignGoal.REFRESH: DesignTip(
        icon="arrow.triangle.2.circlepath",
        headline="Swap, don't shop",
        body="Before buying anything new, try moving pieces between rooms. A lamp from the bedroom might be the "
        "living room's missing accent.",
    ),
    DesignGoal.OVERHAUL: DesignTip(
        icon="rectangle.3.group",
        headline="Start with the floor plan",
        body="Before choosing a single piece, sketch the layout. Where people walk and sit matters more than what "
        "sits on a shelf.",
    ),
    DesignGoal.ACCENT: DesignTip(
        icon="paintbrush.pointed",
        headline="Use the rule of three",
        body="Group accent objects in threes: a vase, a candle and a small sculpture. Odd numbers feel more "
        "natural to the eye.",
    ),
    DesignGoal.ORGANIZE: DesignTip(
        icon="tray.2",
        headline="One in, one out",
        body="For every new piece you bring in, let one go. It keeps the space intentional and prevents "
        "re-cluttering.",
    ),
}


def palette(scores: AxisScores) -> str:
    value = scores.value(Axis.WARM_COOL)
    if value >= SIGNAL_THRESHOLD:
        return "warm"
    if value <= -SIGNAL_THRESHOLD:
        return "cool"
    return "neutral"


def material(scores: AxisScores) -> str | None:
    """Dominant material family read off the organic/industrial and soft/structured axes."""
    if scores.value(Axis.ORGANIC_INDUSTRIAL) >= SIGNAL_THRESHOLD:
        return "metal"
    if scores.value(Axis.SOFT_STRUCTURED) <= -SIGNAL_THRESHOLD:
        return "textile"
    if scores.value(Axis.ORGANIC_INDUSTRIAL) <= -SIGNAL_THRESHOLD:
        return "wood"
    return None


def top_tags(vector: TasteVector) -> list[StyleTag]:
    """Positively weighted known tags, strongest first, ties by name."""
    known = {tag.value: tag for tag in StyleTag}
    ranked = sorted(vector.weights.items(), key=lambda kv: (-kv[1], kv[0]))
    return [known[key] for key, weight in ranked if weight > 0 and key in known]


def blend_tip(primary: StyleTag, secondary: StyleTag) -> DesignTip:
    return DesignTip(
        icon="arrow.triangle.merge",
        headline="Blend your two sides",
        body=f"Your {TAG_TITLES[primary]} and {TAG_TITLES[secondary]} leanings create a unique mix. Use one style "
        "for structure (furniture) and the other for soul (textiles, art).",
    )


class DesignTipsEngine:
    """
    Up to three practical tips for a space profile.

    Order of preference: the top tag's style tip, a palette and material tip,
    a room tip, then a goal tip and a blend of the top two tags when there is
    still room.
    """

    @staticmethod
    def tips(
        vector: TasteVector,
        scores: AxisScores,
        context: RoomContext | None = None,
        goal: DesignGoal | None = None,
    ) -> list[DesignTip]:
        tags = top_tags(vector)
        result: list[DesignTip] = []

        if tags:
            result.append(STYLE_TIPS[tags[0]])

        tone = palette(scores)
        signal = SIGNAL_TIPS.get((tone, material(scores))) or SIGNAL_TIPS.get((tone, None))
        if signal is not None:
            result.append(signal)

        if context is not None:
            result.append(ROOM_TIPS[context])

        if len(result) < MAX_TIPS and goal is not None:
            result.append(GOAL_TIPS[goal])

        if len(result) < MAX_TIPS and len(tags) > 1:
            result.append(blend_tip(tags[0], tags[1]))

        return result[:MAX_TIPS]
