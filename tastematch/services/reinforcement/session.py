import asyncio
import weakref
from datetime import datetime
from uuid import UUID

import httpx
from cachetools import LRUCache
from loguru import logger

from tastematch.core.config import settings
from tastematch.models.embedding import StyleEmbedding
from tastematch.models.identity import (
    FurnitureCategory,
    PendingReinforcement,
    ReinforcementOutcome,
    ReturnReason,
    TasteIdentity,
    TasteVote,
    utcnow,
)
from tastematch.services.reinforcement.service import ReinforcementService
from tastematch.services.stores.identity_store import IdentityStore, PendingReinforcementStore
from tastematch.services.sync.remote import RemoteIdentityClient, adopt_remote, remote_identity_client


class IdentitySession:
    """
    Owns one identity and its pending queue.

    ``apply`` and ``finalize`` are serialized by an asyncio.Lock, so the
    version increments by exactly one per call even under concurrent requests.
    Readers get copies through ``snapshot()`` and ``pending()``.
    """

    def __init__(
        self,
        identity: TasteIdentity,
        pending: list[PendingReinforcement] | None = None,
        device_id: str | None = None,
        identity_store: IdentityStore | None = None,
        pending_store: PendingReinforcementStore | None = None,
        remote: RemoteIdentityClient | None = None,
    ):
        self._identity = identity
        self._pending = list(pending or [])
        self.device_id = device_id
        self.identity_store = identity_store or IdentityStore()
        self.pending_store = pending_store or PendingReinforcementStore()
        self.remote = remote
        self._lock = asyncio.Lock()
        self._background: set[asyncio.Task] = set()

    @property
    def identity_id(self) -> UUID:
        return self._identity.id

    def snapshot(self) -> TasteIdentity:
        return self._identity.model_copy(deep=True)

    def pending(self) -> list[PendingReinforcement]:
        return [p.model_copy(deep=True) for p in self._pending]

    async def adopt(self, identity: TasteIdentity, pending: list[PendingReinforcement]) -> bool:
        """Replace the held identity in place when ``identity`` is newer."""
        async with self._lock:
            if identity.version <= self._identity.version:
                return False
            self._identity = identity
            self._pending = list(pending)
            return True

    async def apply(
        self,
        vote: TasteVote,
        candidate_embedding: StyleEmbedding,
        category: FurnitureCategory | None = None,
        return_reason: ReturnReason | None = None,
        evaluation_id: UUID | None = None,
        scores: dict[str, float] | None = None,
        now: datetime | None = None,
    ) -> ReinforcementOutcome:
        """Apply a vote, persist the result and forward it to the remote backend."""
        async with self._lock:
            outcome = ReinforcementService.apply(
                vote,
                candidate_embedding,
                category,
                self._identity,
                return_reason=return_reason,
                evaluation_id=evaluation_id,
                now=now,
            )
            self._identity = outcome.identity
            await self.identity_store.save(outcome.identity)
            if outcome.pending is not None:
                self._pending.append(outcome.pending)
                await self.pending_store.add(outcome.identity.id, outcome.pending)

        logger.debug(f"Identity {outcome.identity.id} now v{outcome.identity.version} after {vote.value}")
        self._forward_event(vote, candidate_embedding, category, return_reason, scores, outcome.identity)
        return outcome

    async def finalize(self, pending_id: UUID, now: datetime | None = None) -> TasteIdentity | None:
        """Apply one pending record. Returns None when the record is unknown."""
        async with self._lock:
            record = next((p for p in self._pending if p.id == pending_id), None)
            if record is None:
                return None
            updated = ReinforcementService.finalize(record, self._identity, now=now)
            self._identity = updated
            self._pending = [p for p in self._pending if p.id != pending_id]
            await self.identity_store.save(updated)
            await self.pending_store.remove(updated.id, pending_id)
            return updated.model_copy(deep=True)

    async def finalize_ready(self, now: datetime | None = None) -> list[UUID]:
        """Finalize every pending record whose hold has expired, oldest first."""
        now = now or utcnow()
        ready = sorted((p for p in self._pending if p.is_ready(now)), key=lambda p: p.unlock_at)
        finalized = []
        for record in ready:
            if await self.finalize(record.id, now=now) is not None:
                finalized.append(record.id)
        if finalized:
            logger.info(f"Finalized {len(finalized)} matured reinforcements for identity {self.identity_id}")
        return finalized

    def _forward_event(
        self,
        vote: TasteVote,
        candidate_embedding: StyleEmbedding,
        category: FurnitureCategory | None,
        return_reason: ReturnReason | None,
        scores: dict[str, float] | None,
        identity: TasteIdentity,
    ) -> None:
        if self.remote is None or not self.remote.configured or not self.device_id:
            return
        # Fire and forget; local state stays authoritative for this session
        task = asyncio.create_task(
            self._send_event(vote, candidate_embedding, category, return_reason, scores, identity)
        )
        self._background.add(task)
        task.add_done_callback(self._collect)

    def _collect(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Remote event task failed for identity {self.identity_id}: {error!r}")

    async def _send_event(
        self,
        vote: TasteVote,
        candidate_embedding: StyleEmbedding,
        category: FurnitureCategory | None,
        return_reason: ReturnReason | None,
        scores: dict[str, float] | None,
        identity: TasteIdentity,
    ) -> None:
        try:
            await self.remote.record_event(
                self.device_id,
                identity,
                vote,
                candidate_embedding,
                category=category,
                return_reason=return_reason,
                scores=scores,
            )
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.warning(f"Failed to forward {vote.value} for identity {identity.id}: {e}")

    async def drain(self) -> None:
        """Wait for in-flight remote events."""
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)


class IdentitySessionManager:
    """
    Keeps one live IdentitySession per identity so that every request for the
    same identity shares a lock.

    The LRU cache bounds how many idle sessions stay warm. A session evicted
    from it while a request still holds a reference stays reachable through
    ``_live``, so the next lookup returns that same object instead of
    rebuilding a second writer from the store.
    """

    def __init__(
        self,
        identity_store: IdentityStore | None = None,
        pending_store: PendingReinforcementStore | None = None,
        remote: RemoteIdentityClient | None = None,
        maxsize: int = 1024,
    ):
        self.identity_store = identity_store or IdentityStore()
        self.pending_store = pending_store or PendingReinforcementStore()
        if remote is None and settings.REMOTE_SYNC_ENABLED:
            remote = remote_identity_client
        self.remote = remote
        self._sessions: LRUCache = LRUCache(maxsize=maxsize)
        self._live: weakref.WeakValueDictionary = weakref.WeakValueDictionary()
        self._lock = asyncio.Lock()

    def _session(self, identity: TasteIdentity, pending: list[PendingReinforcement], device_id: str | None):
        return IdentitySession(
            identity,
            pending,
            device_id=device_id,
            identity_store=self.identity_store,
            pending_store=self.pending_store,
            remote=self.remote,
        )

    def _cached(self, identity_id: UUID) -> IdentitySession | None:
        session = self._sessions.get(identity_id)
        if session is None:
            session = self._live.get(identity_id)
            if session is not None:
                self._sessions[identity_id] = session
        return session

    def _remember(self, session: IdentitySession) -> None:
        self._sessions[session.identity_id] = session
        self._live[session.identity_id] = session

    async def bootstrap(self, device_id: str) -> IdentitySession:
        """
        Resolve the identity for a device.

        Uses the stored identity when one is bound to the device, otherwise a
        fresh zero identity. When remote sync is configured the remote identity
        replaces the local one unless the local version is already ahead.
        An existing session for the identity is updated in place, never swapped.
        """
        async with self._lock:
            local = await self.identity_store.load_for_device(device_id)
            identity = local or TasteIdentity()

            if self.remote is not None and self.remote.configured:
                try:
                    remote = await self.remote.bootstrap_identity(device_id)
                    identity = adopt_remote(local, remote)
                except (httpx.HTTPError, KeyError, ValueError) as e:
                    logger.warning(f"Remote bootstrap failed for device {device_id}, using local identity: {e}")

            cached = self._cached(identity.id)
            if cached is not None:
                cached.device_id = device_id
                pending = await self.pending_store.load_all(identity.id)
                if await cached.adopt(identity, pending):
                    await self.identity_store.save(identity)
                    logger.info(f"Identity {identity.id} advanced to v{identity.version} for device {device_id}")
                await self.identity_store.bind_device(device_id, identity.id)
                return cached

            await self.identity_store.save(identity)
            await self.identity_store.bind_device(device_id, identity.id)
            pending = await self.pending_store.load_all(identity.id)
            session = self._session(identity, pending, device_id)
            self._remember(session)
            logger.info(f"Identity session ready for device {device_id}: {identity.id} v{identity.version}")
            return session

    async def get(self, identity_id: UUID) -> IdentitySession | None:
        """Live session for a known identity, or None when the identity does not exist."""
        async with self._lock:
            cached = self._cached(identity_id)
            if cached is not None:
                return cached
            identity = await self.identity_store.load(identity_id)
            if identity is None:
                return None
            pending = await self.pending_store.load_all(identity_id)
            session = self._session(identity, pending, None)
            self._remember(session)
            return session

    async def drain(self) -> None:
        for session in list(self._live.values()):
            await session.drain()


identity_sessions = IdentitySessionManager()
