"""Sync and search orchestration.

Composes the scan endpoints with the classifier. The registry controller and
this workflow never call each other; presentation layers combine them.

Concurrency:
- Each call issues one remote request and awaits it; there is no streaming.
- When two syncs overlap, the one that completes last becomes `latest`
  (last-writer-wins). The snapshot records which domain it belongs to.
"""

from __future__ import annotations

from collections import Counter

from core.domain.models import ClassificationView, SyncSnapshot
from core.domain.validation import normalize_domain
from core.errors import RemoteError
from core.interfaces.remote import ScanAPI
from core.logging import get_logger
from core.services.classification import classify

log = get_logger("sync")


class SyncWorkflow:
    """Holds the latest sync result and the domains with syncs still awaiting."""

    def __init__(self, api: ScanAPI) -> None:
        self._api = api
        self._latest: SyncSnapshot | None = None
        # Count per domain: the same domain may be synced twice at once.
        self._in_flight: Counter[str] = Counter()

    @property
    def latest(self) -> SyncSnapshot | None:
        return self._latest

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._in_flight)

    def is_syncing(self, domain: str) -> bool:
        return self._in_flight[normalize_domain(domain)] > 0

    async def sync(self, domain: str) -> SyncSnapshot:
        """Fetch resources and invalid links for `domain`.

        On failure the previous snapshot is kept and `RemoteError` propagates.
        """

        target = normalize_domain(domain)
        self._in_flight[target] += 1
        log.debug("sync.started", domain=target)
        try:
            payload = await self._api.scan(target)
        except RemoteError as exc:
            log.warning("sync.failed", domain=target, error=str(exc))
            raise
        finally:
            self._in_flight[target] -= 1
            if self._in_flight[target] <= 0:
                del self._in_flight[target]

        snapshot = SyncSnapshot(
            domain=target,
            records=list(payload.records),
            view=classify(payload.records),
            invalid_links=list(payload.invalid_links),
        )
        self._latest = snapshot
        log.info(
            "sync.completed",
            domain=target,
            records=len(snapshot.records),
            types=snapshot.view.types,
            invalid_links=len(snapshot.invalid_links),
        )
        return snapshot

    async def scan_url(self, url: str) -> ClassificationView:
        """Scan a single URL without touching `latest`."""

        target = url.strip()
        payload = await self._api.scan(target)
        log.debug("scan.completed", url=target, records=len(payload.records))
        return classify(payload.records)

    async def discover(self, root_url: str) -> list[str]:
        """Candidate domains under `root_url`, in server order, without blanks."""

        target = root_url.strip()
        found = await self._api.discover(target)
        candidates = [normalize_domain(d) for d in found if d and d.strip()]
        log.debug("discover.completed", url=target, candidates=len(candidates))
        return candidates
