from uuid import UUID

from loguru import logger

from tastematch.models.profile import TasteDomain
from tastematch.models.sync import LoggedEvent, ProfileSnapshot, ShareResponse
from tastematch.services.naming.presentation import space_vocabulary
from tastematch.services.profile import AxisMapper
from tastematch.services.stores.calibration_store import CalibrationStore, ProfileNamingStore

SHARE_BASE_URL = "https://tastematch.app/p/"


class BackendClient:
    """Profile backend interface: save, fetch, share and event delivery."""

    async def save_profile(self, snapshot: ProfileSnapshot) -> None:
        raise NotImplementedError

    async def get_profile(self, profile_id: UUID) -> ProfileSnapshot | None:
        raise NotImplementedError

    async def share_profile(self, snapshot: ProfileSnapshot) -> ShareResponse:
        raise NotImplementedError

    async def send_events(self, events: list[LoggedEvent]) -> None:
        raise NotImplementedError


class LocalBackendClient(BackendClient):
    """
    Backend served from the local stores. Saves and event delivery are no-ops
    because the stores already persist everything.
    """

    def __init__(
        self,
        calibration_store: CalibrationStore | None = None,
        naming_store: ProfileNamingStore | None = None,
    ):
        self.calibration_store = calibration_store or CalibrationStore()
        self.naming_store = naming_store or ProfileNamingStore()

    async def save_profile(self, snapshot: ProfileSnapshot) -> None:
        logger.debug(f"Local backend: profile {snapshot.id} already persisted")

    async def get_profile(self, profile_id: UUID) -> ProfileSnapshot | None:
        record = await self.calibration_store.load(profile_id)
        if record is None:
            return None
        naming = await self.naming_store.load(profile_id, TasteDomain.SPACE)
        scores = AxisMapper.axis_scores(record.vector)
        return ProfileSnapshot(
            id=profile_id,
            profile_name=naming.name,
            axis_scores=scores.to_dict(),
            basis_hash=naming.basis_hash,
            confidence_level=record.vector.confidence_level(record.swipe_count),
            influences=space_vocabulary.influence_phrases(scores),
            avoids=space_vocabulary.avoid_phrases(scores),
            created_at=record.created_at,
            updated_at=naming.updated_at or record.created_at,
        )

    async def share_profile(self, snapshot: ProfileSnapshot) -> ShareResponse:
        slug = str(snapshot.id)[:8].lower()
        return ShareResponse(slug=slug, public_url=f"{SHARE_BASE_URL}{slug}")

    async def send_events(self, events: list[LoggedEvent]) -> None:
        logger.debug(f"Local backend: dropping {len(events)} events")


class RemoteBackendClient(BackendClient):
    """Remote profile backend. None of its operations are available yet."""

    def __init__(self, base_url: str = "https://api.tastematch.app/v1"):
        self.base_url = base_url

    async def save_profile(self, snapshot: ProfileSnapshot) -> None:
        raise NotImplementedError("POST /profiles is not available on the remote backend")

    async def get_profile(self, profile_id: UUID) -> ProfileSnapshot | None:
        raise NotImplementedError("GET /profiles/{id} is not available on the remote backend")

    async def share_profile(self, snapshot: ProfileSnapshot) -> ShareResponse:
        raise NotImplementedError("POST /profiles/{id}/share is not available on the remote backend")

    async def send_events(self, events: list[LoggedEvent]) -> None:
        raise NotImplementedError("POST /events is not available on the remote backend")
