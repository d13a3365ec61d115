from enum import Enum

from pydantic import BaseModel


class RoomContext(str, Enum):
    LIVING_ROOM = "livingRoom"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    OFFICE = "office"
    BATHROOM = "bathroom"
    OUTDOOR = "outdoor"


class DesignGoal(str, Enum):
    REFRESH = "refresh"
    OVERHAUL = "overhaul"
    ACCENT = "accent"
    ORGANIZE = "organize"


class DesignTip(BaseModel):
    icon: str
    headline: str
    body: str
