from datetime import datetime
from uuid import UUID

from pydantic import TypeAdapter

from tastematch.core.constants import ADVISORY_SIGNALS_KEY, ADVISORY_TOLERANCE_KEY
from tastematch.models.advisory import AdvisorySignal, AdvisoryWeeklyStats, ToleranceState
from tastematch.services.advisory.tolerance import AdvisorySignalLog, ToleranceAdjuster
from tastematch.services.stores.base import JsonStore

_SIGNAL_LIST = TypeAdapter(list[AdvisorySignal])


class AdvisoryStore(JsonStore):
    """Advisory signal log and tolerance state per profile."""

    async def signals(self, profile_id: UUID) -> list[AdvisorySignal]:
        return await self._load_list(ADVISORY_SIGNALS_KEY.format(profile_id=profile_id), _SIGNAL_LIST)

    async def record(self, profile_id: UUID, signal: AdvisorySignal, now: datetime | None = None) -> bool:
        signals = AdvisorySignalLog.append(await self.signals(profile_id), signal, now=now)
        return await self._save_list(ADVISORY_SIGNALS_KEY.format(profile_id=profile_id), _SIGNAL_LIST, signals)

    async def weekly_stats(self, profile_id: UUID, now: datetime | None = None) -> AdvisoryWeeklyStats:
        return AdvisorySignalLog.weekly_stats(await self.signals(profile_id), now=now)

    async def tolerance(self, profile_id: UUID) -> ToleranceState:
        key = ADVISORY_TOLERANCE_KEY.format(profile_id=profile_id)
        return await self._load_model(key, ToleranceState) or ToleranceState()

    async def adjust_tolerance(self, profile_id: UUID, now: datetime | None = None) -> ToleranceState:
        """Apply the daily tolerance adjustment and persist the result."""
        state = await self.tolerance(profile_id)
        adjusted = ToleranceAdjuster.adjust(state, await self.weekly_stats(profile_id, now=now), now=now)
        if adjusted is not state:
            await self._save_model(ADVISORY_TOLERANCE_KEY.format(profile_id=profile_id), adjusted)
        return adjusted

    async def reset(self, profile_id: UUID) -> None:
        await self.redis.delete(ADVISORY_SIGNALS_KEY.format(profile_id=profile_id))
        await self.redis.delete(ADVISORY_TOLERANCE_KEY.format(profile_id=profile_id))
