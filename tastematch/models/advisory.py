from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from tastematch.models.identity import utcnow


class AdvisoryLevel(str, Enum):
    SOFT = "soft"
    STANDARD = "standard"
    STRICT = "strict"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def helper_text(self) -> str:
        return {
            AdvisoryLevel.SOFT: "Only warn on big mismatches.",
            AdvisoryLevel.STANDARD: "Balanced guidance.",
            AdvisoryLevel.STRICT: "High sensitivity.",
        }[self]


class AdvisoryVerdict(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def severity(self) -> int:
        return {AdvisoryVerdict.GREEN: 0, AdvisoryVerdict.YELLOW: 1, AdvisoryVerdict.RED: 2}[self]

    @property
    def headline(self) -> str:
        return {
            AdvisoryVerdict.GREEN: "Aligned.",
            AdvisoryVerdict.YELLOW: "Consider.",
            AdvisoryVerdict.RED: "High drift.",
        }[self]

    @property
    def subhead(self) -> str:
        return {
            AdvisoryVerdict.GREEN: "This sits comfortably inside your Objects identity.",
            AdvisoryVerdict.YELLOW: "This nudges you toward a different signal.",
            AdvisoryVerdict.RED: "This may pull your Objects identity off-center.",
        }[self]

    @property
    def cue(self) -> str:
        return {
            AdvisoryVerdict.GREEN: "In your lane",
            AdvisoryVerdict.YELLOW: "Edges you",
            AdvisoryVerdict.RED: "High drift",
        }[self]


class ConflictResult(BaseModel):
    alignment: float = Field(ge=0.0, le=1.0)
    drift: float = Field(ge=0.0, le=1.0)
    conflict_axes: list[str] = Field(default_factory=list)


class AdvisoryDecision(BaseModel):
    verdict: AdvisoryVerdict
    should_intercept: bool
    conflict: ConflictResult

    @property
    def fit_label(self) -> str:
        return f"FIT {int(self.conflict.alignment * 100)}"


class AdvisoryAction(str, Enum):
    SHOWN = "shown"
    PROCEEDED = "proceeded"
    SAVED = "saved"
    INTENTIONAL_SHIFT = "intentionalShift"


class AdvisorySignal(BaseModel):
    timestamp: datetime = Field(default_factory=utcnow)
    action: AdvisoryAction
    verdict: AdvisoryVerdict
    sku_id: str


class AdvisoryWeeklyStats(BaseModel):
    near_misses: int = 0  # red shown but not proceeded
    overrides: int = 0  # red proceeded
    intentional_shifts: int = 0
    non_proceeds: int = 0  # shown(yellow+red) - proceeded(yellow+red)


class ToleranceState(BaseModel):
    tolerance: float = Field(default=0.0, ge=-0.15, le=0.15)
    last_adjusted_at: datetime | None = None
