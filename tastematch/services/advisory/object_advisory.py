from uuid import UUID

from loguru import logger

from tastematch.models.advisory import AdvisoryAction, AdvisoryDecision, AdvisoryLevel, AdvisorySignal
from tastematch.models.axes import OBJECT_AXES, ObjectAxisScores
from tastematch.models.catalog import CatalogItem
from tastematch.models.profile import ObjectCalibrationRecord
from tastematch.services.advisory.constants import INTENTIONAL_SHIFT_ALPHA
from tastematch.services.advisory.policy import AdvisoryPolicy
from tastematch.services.profile.axis_mapping import AxisMapper
from tastematch.services.scoring.conflict import TasteConflictEngine
from tastematch.services.stores.advisory_store import AdvisoryStore
from tastematch.services.stores.calibration_store import ObjectCalibrationStore


class ObjectAdvisory:
    """
    Per-item advisory for the objects domain.
    """

    @staticmethod
    def decision(
        item: CatalogItem,
        scores: ObjectAxisScores,
        level: AdvisoryLevel,
        tolerance: float = 0.0,
    ) -> AdvisoryDecision | None:
        """Decision for one catalog item, or None when the item carries no object axis weights."""
        if not item.object_axis_weights:
            return None
        conflict = TasteConflictEngine.evaluate_objects(scores, item.object_axis_weights)
        return AdvisoryPolicy.decide(level, conflict, tolerance=tolerance)

    @staticmethod
    def apply_intentional_shift(record: ObjectCalibrationRecord, item: CatalogItem) -> ObjectCalibrationRecord:
        """
        Pull the calibration vector toward an item the user chose despite a warning.

        Every object axis moves by ``0.10 * item weight``. Returns the record
        unchanged when the item has no object axis weights.
        """
        if not item.object_axis_weights:
            return record
        shifted = record.model_copy(deep=True)
        for axis in OBJECT_AXES:
            shifted.vector.add(axis.value, INTENTIONAL_SHIFT_ALPHA * float(item.object_axis_weights.get(axis.value, 0.0)))
        return shifted


class ObjectAdvisoryService:
    """Store-backed wrapper: loads calibration and tolerance, records signals."""

    def __init__(
        self,
        calibration_store: ObjectCalibrationStore | None = None,
        advisory_store: AdvisoryStore | None = None,
    ):
        self.calibration_store = calibration_store or ObjectCalibrationStore()
        self.advisory_store = advisory_store or AdvisoryStore()

    async def decide(self, profile_id: UUID, item: CatalogItem, level: AdvisoryLevel) -> AdvisoryDecision | None:
        record = await self.calibration_store.load(profile_id)
        if record is None:
            return None
        tolerance = await self.advisory_store.adjust_tolerance(profile_id)
        decision = ObjectAdvisory.decision(
            item, AxisMapper.object_axis_scores(record.vector), level, tolerance=tolerance.tolerance
        )
        if decision is not None and decision.should_intercept:
            await self.advisory_store.record(
                profile_id,
                AdvisorySignal(action=AdvisoryAction.SHOWN, verdict=decision.verdict, sku_id=item.sku_id),
            )
        return decision

    async def record_action(self, profile_id: UUID, signal: AdvisorySignal, item: CatalogItem | None = None) -> bool:
        """
        Log a user action on an advisory.

        An intentional shift also blends the item into the stored calibration.
        """
        recorded = await self.advisory_store.record(profile_id, signal)
        if signal.action == AdvisoryAction.INTENTIONAL_SHIFT and item is not None:
            record = await self.calibration_store.load(profile_id)
            if record is None:
                logger.warning(f"Intentional shift for {profile_id} without object calibration; ignored")
                return recorded
            await self.calibration_store.save(ObjectAdvisory.apply_intentional_shift(record, item))
            logger.info(f"Applied intentional shift toward {item.sku_id} for {profile_id}")
        return recorded
