from uuid import UUID

import httpx
from loguru import logger

from tastematch.core.base_client import BaseClient
from tastematch.core.config import settings
from tastematch.models.embedding import StyleEmbedding
from tastematch.models.identity import FurnitureCategory, ReturnReason, TasteIdentity, TasteVote
from tastematch.models.sync import RemoteEvent, RemoteIdentity


def adopt_remote(local: TasteIdentity | None, remote: TasteIdentity) -> TasteIdentity:
    """Prefer the remote identity unless the local copy has already moved past it."""
    if local is None or local.version <= remote.version:
        return remote
    return local


class RemoteIdentityClient(BaseClient):
    """
    Client for the remote identity backend (edge functions under /functions/v1).
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        root = (base_url if base_url is not None else settings.REMOTE_SYNC_URL).rstrip("/")
        key = api_key if api_key is not None else settings.REMOTE_SYNC_API_KEY
        headers = {"Content-Type": "application/json"}
        if key:
            headers["apikey"] = key
            headers["Authorization"] = f"Bearer {key}"
        super().__init__(
            base_url=f"{root}/functions/v1" if root else "",
            timeout=timeout or settings.REMOTE_SYNC_TIMEOUT,
            headers=headers,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    async def bootstrap_identity(self, device_id: str) -> TasteIdentity:
        """Fetch (or have the backend create) the identity bound to a device."""
        data = await self.post("identity-bootstrap", json={"device_install_id": device_id})
        identity = RemoteIdentity.model_validate(data["identity"]).to_identity()
        logger.info(f"Bootstrapped remote identity {identity.id} v{identity.version} for device {device_id}")
        return identity

    async def record_event(
        self,
        device_id: str,
        identity: TasteIdentity,
        vote: TasteVote,
        candidate_embedding: StyleEmbedding,
        category: FurnitureCategory | None = None,
        return_reason: ReturnReason | None = None,
        scores: dict[str, float] | None = None,
    ) -> tuple[TasteIdentity, bool]:
        """
        Send a vote to the backend.

        Returns:
            The identity as the backend sees it after the vote, and whether the
            backend held it as a pending anchor reinforcement
        """
        body = {
            "device_install_id": device_id,
            "identity_id": str(identity.id).upper(),
            "vote": vote.value,
            "category": (category or FurnitureCategory.OTHER).value,
            "object_embedding": candidate_embedding.dims,
        }
        if scores:
            body["scores"] = scores
        if return_reason is not None:
            body["return_reason"] = return_reason.value

        data = await self.post("record-event", json=body)
        return RemoteIdentity.model_validate(data["identity"]).to_identity(), bool(data.get("pending", False))

    async def fetch_events(self, device_id: str, identity_id: UUID, limit: int = 50) -> list[RemoteEvent]:
        params = {"identity_id": str(identity_id).upper(), "device_install_id": device_id, "limit": limit}
        data = await self.get("fetch-events", params=params)
        return [RemoteEvent.model_validate(event) for event in data.get("events", [])]


remote_identity_client = RemoteIdentityClient()
