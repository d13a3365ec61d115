from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field

from tastematch.models.identity import utcnow
from tastematch.models.vectors import ObjectVector, TasteVector


class TasteDomain(str, Enum):
    SPACE = "space"
    OBJECTS = "objects"
    ART = "art"


class CalibrationRecord(BaseModel):
    """Space calibration: accumulated tag vector plus swipe count."""

    profile_id: UUID
    vector: TasteVector = Field(default_factory=TasteVector.zero)
    swipe_count: int = 0
    created_at: datetime = Field(default_factory=utcnow)


class ObjectCalibrationRecord(BaseModel):
    """Objects calibration: accumulated 9-axis vector plus interaction count."""

    profile_id: UUID
    vector: ObjectVector = Field(default_factory=ObjectVector.zero)
    swipe_count: int = 0
    duel_count: int = 0
    affinities: dict[str, float] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def interaction_count(self) -> int:
        return self.swipe_count + self.duel_count


class ProfileNaming(BaseModel):
    """The name currently shown for a profile, with its provenance."""

    name: str = ""
    description: str = ""
    version: int = 0
    basis_hash: str = ""
    previous_names: list[str] = Field(default_factory=list)
    updated_at: datetime | None = None


class ProfileNamingResult(ProfileNaming):
    did_update: bool = False
