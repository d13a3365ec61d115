from datetime import datetime
from enum import Enum
from uuid import UUID

from loguru import logger
from pydantic import BaseModel, Field

from tastematch.models.catalog import CatalogItem
from tastematch.models.identity import utcnow
from tastematch.models.profile import CalibrationRecord, ObjectCalibrationRecord, TasteDomain
from tastematch.models.vectors import ObjectVector, SwipeDirection, TasteVector
from tastematch.services.calibration.archetypes import ArchetypeDuels, ObjectArchetype
from tastematch.services.calibration.deck import build_object_deck, build_space_deck, dominant_object_axis, primary_tag

MIN_DUELS = 5
MAX_DUELS = 8
DUEL_AFFINITY_THRESHOLD = 0.3


class CalibrationPhase(str, Enum):
    SWIPE = "swipe"
    DUEL = "duel"
    COMPLETE = "complete"


class DuelPair(BaseModel):
    left: ObjectArchetype
    right: ObjectArchetype

    def contains(self, archetype: ObjectArchetype) -> bool:
        return archetype in (self.left, self.right)


class CalibrationState(BaseModel):
    """
    An in-progress calibration.

    Objects run ``swipe -> duel -> complete``; space calibration has no duel
    phase and completes when its deck runs out.
    """

    profile_id: UUID
    domain: TasteDomain = TasteDomain.OBJECTS
    phase: CalibrationPhase = CalibrationPhase.SWIPE
    deck: list[CatalogItem] = Field(default_factory=list)
    position: int = 0
    weights: dict[str, float] = Field(default_factory=dict)
    swipe_count: int = 0
    duel_count: int = 0
    affinities: dict[str, float] = Field(default_factory=dict)
    duels: list[DuelPair] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=utcnow)

    @property
    def current_item(self) -> CatalogItem | None:
        if self.phase != CalibrationPhase.SWIPE or self.position >= len(self.deck):
            return None
        return self.deck[self.position]

    @property
    def current_duel(self) -> DuelPair | None:
        if self.phase != CalibrationPhase.DUEL or self.duel_count >= len(self.duels):
            return None
        return self.duels[self.duel_count]

    @property
    def remaining_cards(self) -> int:
        return max(0, len(self.deck) - self.position)


class CalibrationStateMachine:
    """
    Pure transitions over CalibrationState. Every transition returns a new
    state; ``complete`` is terminal and rejects further input with ValueError.
    """

    @staticmethod
    def start(profile_id: UUID, catalog: list[CatalogItem], domain: TasteDomain = TasteDomain.OBJECTS) -> CalibrationState:
        if domain == TasteDomain.OBJECTS:
            deck = build_object_deck(catalog, profile_id)
            duels = [DuelPair(left=a, right=b) for a, b in ArchetypeDuels.generate_pairs(MAX_DUELS, profile_id)]
            weights = ObjectVector.zero().weights
        else:
            deck = build_space_deck(catalog, profile_id)
            duels = []
            weights = TasteVector.zero().weights
        state = CalibrationState(profile_id=profile_id, domain=domain, deck=deck, weights=weights, duels=duels)
        if not deck:
            state = CalibrationStateMachine._after_deck(state)
        logger.info(f"Calibration started for {profile_id} ({domain.value}): {len(deck)} cards, {len(duels)} duels")
        return state

    @staticmethod
    def _after_deck(state: CalibrationState) -> CalibrationState:
        if state.domain == TasteDomain.OBJECTS and state.duels:
            return state.model_copy(update={"phase": CalibrationPhase.DUEL})
        return state.model_copy(update={"phase": CalibrationPhase.COMPLETE})

    @staticmethod
    def _swipe_key(state: CalibrationState, item: CatalogItem) -> str | None:
        if state.domain == TasteDomain.OBJECTS:
            axis = dominant_object_axis(item)
            return axis.value if axis is not None else None
        return primary_tag(item)

    @staticmethod
    def swipe(state: CalibrationState, direction: SwipeDirection) -> CalibrationState:
        """Apply a swipe to the current card's dominant axis (or primary tag) and advance."""
        if state.phase != CalibrationPhase.SWIPE:
            raise ValueError(f"cannot swipe during {state.phase.value} phase")
        item = state.current_item
        if item is None:
            raise ValueError("no card left to swipe")

        updated = state.model_copy(deep=True)
        key = CalibrationStateMachine._swipe_key(state, item)
        if key is not None:
            vector = ObjectVector(weights=updated.weights)
            vector.apply_swipe(key, direction)
            updated.weights = vector.weights
        updated.swipe_count += 1
        updated.position += 1

        if updated.position >= len(updated.deck):
            updated = CalibrationStateMachine._after_deck(updated)
            logger.info(f"Calibration for {state.profile_id} moved to {updated.phase.value}")
        return updated

    @staticmethod
    def choose(state: CalibrationState, winner: ObjectArchetype) -> CalibrationState:
        """Record a duel winner; completes after 5+ duels with a 0.3 affinity, or after 8."""
        if state.phase != CalibrationPhase.DUEL:
            raise ValueError(f"cannot duel during {state.phase.value} phase")
        pair = state.current_duel
        if pair is None:
            raise ValueError("no duel left to choose")
        if not pair.contains(winner):
            raise ValueError(f"{winner.value} is not part of the current duel")

        updated = state.model_copy(deep=True)
        vector = ObjectVector(weights=updated.weights)
        ArchetypeDuels.apply_result(winner, vector, updated.affinities)
        updated.weights = vector.weights
        updated.duel_count += 1

        if CalibrationStateMachine.should_finish_duels(updated):
            updated.phase = CalibrationPhase.COMPLETE
            logger.info(f"Calibration for {state.profile_id} complete after {updated.duel_count} duels")
        return updated

    @staticmethod
    def should_finish_duels(state: CalibrationState) -> bool:
        top_affinity = max(state.affinities.values(), default=0.0)
        if state.duel_count >= MIN_DUELS and top_affinity >= DUEL_AFFINITY_THRESHOLD:
            return True
        return state.duel_count >= MAX_DUELS or state.duel_count >= len(state.duels)

    @staticmethod
    def object_record(state: CalibrationState) -> ObjectCalibrationRecord:
        return ObjectCalibrationRecord(
            profile_id=state.profile_id,
            vector=ObjectVector(weights=state.weights).normalized(),
            swipe_count=state.swipe_count,
            duel_count=state.duel_count,
            affinities=dict(state.affinities),
        )

    @staticmethod
    def space_record(state: CalibrationState) -> CalibrationRecord:
        return CalibrationRecord(
            profile_id=state.profile_id,
            vector=TasteVector(weights=state.weights).normalized(),
            swipe_count=state.swipe_count,
        )
