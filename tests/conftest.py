"""Shared pytest fixtures and fakes for crawldesk tests."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterable

import pytest
from typer.testing import CliRunner

from core.domain.models import DomainEntry, ResourceRecord, ScanPayload
from core.errors import RemoteError


class FakeRegistryAPI:
    """In-memory remote registry.

    `fail` names operations that raise `RemoteError`; `calls` records every
    request so tests can assert that no round trip happened.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self.entries: list[DomainEntry] = []
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self._next_id = 1
        for name in names:
            self._add(name)

    def _add(self, name: str) -> DomainEntry:
        entry = DomainEntry(id=self._next_id, name=name)
        self._next_id += 1
        self.entries.append(entry)
        return entry

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail:
            raise RemoteError(f"{op} rejected", operation=op, status_code=500)

    async def list_domains(self) -> list[DomainEntry]:
        self.calls.append(("list",))
        self._maybe_fail("list")
        return [entry.model_copy() for entry in self.entries]

    async def create_domain(self, name: str) -> DomainEntry:
        self.calls.append(("create", name))
        self._maybe_fail("create")
        return self._add(name).model_copy()

    async def update_domain(self, entry_id: int | str, name: str) -> None:
        self.calls.append(("update", entry_id, name))
        self._maybe_fail("update")
        for position, entry in enumerate(self.entries):
            if entry.id == entry_id:
                self.entries[position] = entry.model_copy(update={"name": name})

    async def delete_domain(self, entry_id: int | str) -> None:
        self.calls.append(("delete", entry_id))
        self._maybe_fail("delete")
        self.entries = [entry for entry in self.entries if entry.id != entry_id]


class FakeScanAPI:
    """Canned `/scan` and `/sitemap-products` answers.

    `gates` lets a test hold a scan open until it sets the event, to model
    overlapping syncs.
    """

    def __init__(self) -> None:
        self.payloads: dict[str, ScanPayload] = {}
        self.discovered: dict[str, list[str]] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.fail: set[str] = set()
        self.calls: list[tuple] = []

    async def scan(self, url: str) -> ScanPayload:
        self.calls.append(("scan", url))
        gate = self.gates.get(url)
        if gate is not None:
            await gate.wait()
        if url in self.fail:
            raise RemoteError(f"scan of {url} failed", operation="scan")
        return self.payloads.get(url, ScanPayload())

    async def discover(self, url: str) -> list[str]:
        self.calls.append(("discover", url))
        if url in self.fail:
            raise RemoteError(f"discover of {url} failed", operation="discover")
        return list(self.discovered.get(url, []))


class FakeCrawlerAPI(FakeRegistryAPI, FakeScanAPI):
    """Both protocols at once, as the HTTP adapter provides them."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        FakeScanAPI.__init__(self)
        FakeRegistryAPI.__init__(self, names)


def record(kind: str | None, url: str, valid: bool = True) -> ResourceRecord:
    return ResourceRecord(type=kind, url=url, is_valid=valid)


@pytest.fixture
def make_registry_api() -> Callable[..., FakeRegistryAPI]:
    return FakeRegistryAPI


@pytest.fixture
def scan_api() -> FakeScanAPI:
    return FakeScanAPI()


@pytest.fixture
def make_crawler_api() -> Callable[..., FakeCrawlerAPI]:
    return FakeCrawlerAPI


@pytest.fixture
def make_record() -> Callable[..., ResourceRecord]:
    return record


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep user config and stray CRAWLDESK_* variables out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    monkeypatch.chdir(tmp_path)
    for var in (
        "CRAWLDESK_API_BASE_URL",
        "CRAWLDESK_HTTP_TIMEOUT_SECONDS",
        "CRAWLDESK_SUCCESS_STATUS",
        "CRAWLDESK_VERBOSE",
        "CRAWLDESK_LOG_JSON",
        "CRAWLDESK_EXPORT_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
