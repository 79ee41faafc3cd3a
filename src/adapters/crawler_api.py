"""HTTP adapter for the crawl service.

Implements `DomainRegistryAPI` and `ScanAPI` over httpx.

Envelope rules:
- Transport errors, timeouts, non-2xx responses and bodies that are not JSON
  objects raise `RemoteError`.
- Registry endpoints must carry `status` equal to `settings.success_status`;
  scan endpoints are checked only when they include one.
- The server's `message`, when present, becomes the error message.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PayloadError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import DomainEntry, ResourceRecord, ScanPayload
from core.errors import RemoteError
from core.logging import get_logger

log = get_logger("api")


class CrawlerApiClient:
    """Talks to `/domains`, `/scan` and `/sitemap-products`.

    An injected `httpx.AsyncClient` is reused for every call (and owned by the
    caller); otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    async def list_domains(self) -> list[DomainEntry]:
        body = await self._call("list_domains", "GET", "/domains", require_status=True)
        data = body.get("data")
        if not isinstance(data, list):
            raise RemoteError("malformed domain list", operation="list_domains")
        try:
            return [DomainEntry.model_validate(item) for item in data]
        except PayloadError as exc:
            raise RemoteError(f"malformed domain entry: {exc}", operation="list_domains") from exc

    async def create_domain(self, name: str) -> DomainEntry:
        body = await self._call(
            "create_domain", "POST", "/domains", json={"domain": name}, require_status=True
        )
        try:
            return DomainEntry.model_validate(body.get("data"))
        except PayloadError as exc:
            raise RemoteError(f"malformed created entry: {exc}", operation="create_domain") from exc

    async def update_domain(self, entry_id: int | str, name: str) -> None:
        await self._call(
            "update_domain",
            "PUT",
            _entry_path(entry_id),
            json={"domain": name},
            require_status=True,
        )

    async def delete_domain(self, entry_id: int | str) -> None:
        await self._call("delete_domain", "DELETE", _entry_path(entry_id), require_status=True)

    # ------------------------------------------------------------------
    # Scan / discovery
    # ------------------------------------------------------------------

    async def scan(self, url: str) -> ScanPayload:
        body = await self._call("scan", "GET", "/scan", params={"url": url})
        return parse_scan_data(body.get("data"))

    async def discover(self, url: str) -> list[str]:
        body = await self._call("discover", "GET", "/sitemap-products", params={"url": url})
        data = body.get("data")
        domains = data.get("domains") if isinstance(data, dict) else None
        if not isinstance(domains, list):
            raise RemoteError("malformed discovery response", operation="discover")
        return [d for d in domains if isinstance(d, str)]

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        if self._client is not None:
            return await self._client.request(method, path, **kwargs)
        async with build_async_client(self._settings) as client:
            return await client.request(method, path, **kwargs)

    async def _call(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        require_status: bool = False,
        **kwargs: Any,
    ) -> dict[str, Any]:
        log.debug("api.request", op=operation, method=method, path=path)
        try:
            response = await self._send(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise RemoteError(f"{operation} timed out", operation=operation) from exc
        except httpx.HTTPError as exc:
            raise RemoteError(f"{operation} failed: {exc}", operation=operation) from exc

        body = _decode(response)
        if response.is_error:
            message = _message(body) or f"{operation} failed with HTTP {response.status_code}"
            raise RemoteError(message, operation=operation, status_code=response.status_code)
        if body is None:
            raise RemoteError(f"{operation} returned a non-JSON body", operation=operation)

        self._check_status(operation, body, required=require_status)
        log.debug("api.response", op=operation, status_code=response.status_code)
        return body

    def _check_status(self, operation: str, body: dict[str, Any], *, required: bool) -> None:
        status = body.get("status")
        if status is None:
            if required:
                raise RemoteError(f"{operation} response has no status", operation=operation)
            return
        if str(status) == self._settings.success_status:
            return

        code: int | None = None
        try:
            code = int(status)
        except (TypeError, ValueError):
            code = None
        message = _message(body) or f"{operation} failed with status {status}"
        raise RemoteError(message, operation=operation, status_code=code)


def parse_scan_data(data: Any) -> ScanPayload:
    """Normalize both `/scan` shapes: a bare record list or `{requests, invalidLinks}`."""

    try:
        if isinstance(data, list):
            return ScanPayload(records=[ResourceRecord.model_validate(item) for item in data])
        if isinstance(data, dict):
            return ScanPayload.model_validate(data)
    except PayloadError as exc:
        raise RemoteError(f"malformed scan response: {exc}", operation="scan") from exc
    raise RemoteError("scan response has no data", operation="scan")


def _decode(response: httpx.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _message(body: dict[str, Any] | None) -> str | None:
    if not body:
        return None
    message = body.get("message")
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


def _entry_path(entry_id: int | str) -> str:
    """`/domains/<id>` with the opaque id quoted as a single path segment."""

    return f"/domains/{quote(str(entry_id), safe='')}"
