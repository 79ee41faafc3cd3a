"""Contracts of the remote crawl service.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The HTTP adapter and the in-memory fakes used in tests are interchangeable
  and the Core never imports httpx.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import DomainEntry, ScanPayload


@runtime_checkable
class DomainRegistryAPI(Protocol):
    """Remote collection of domains keyed by id.

    Design rules:
    - Every method is async because it performs I/O.
    - Failures raise `core.errors.RemoteError`; success returns normally.
    """

    async def list_domains(self) -> list[DomainEntry]:
        ...

    async def create_domain(self, name: str) -> DomainEntry:
        """Create `name` and return the entry with its server-assigned id."""

        ...

    async def update_domain(self, entry_id: int | str, name: str) -> None:
        ...

    async def delete_domain(self, entry_id: int | str) -> None:
        ...


@runtime_checkable
class ScanAPI(Protocol):
    """Scan and discovery endpoints."""

    async def scan(self, url: str) -> ScanPayload:
        """Scan one URL (or a registered domain) and return its resources."""

        ...

    async def discover(self, url: str) -> list[str]:
        """Candidate domains found under a root URL's sitemap."""

        ...
