"""Error kinds surfaced by the core.

Why a dedicated module:
- Services, adapters and the CLI share one hierarchy without import cycles.
- The CLI only needs to catch `CrawlDeskError` to render any expected failure.

None of these errors is fatal to a controller: after any of them the
instance stays usable and its state is exactly what it was before the call.
"""

from __future__ import annotations


class CrawlDeskError(RuntimeError):
    """Base class for every expected, user-facing failure."""


class ValidationError(CrawlDeskError):
    """Malformed or empty domain string. Never reaches the remote service."""

    def __init__(self, value: str, reason: str = "invalid domain") -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: {value!r}")


class DuplicateError(CrawlDeskError):
    """The domain already exists verbatim in the local registry mirror."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"domain already registered: {name!r}")


class RemoteError(CrawlDeskError):
    """Transport failure or application-level non-success from the API."""

    def __init__(
        self,
        message: str,
        *,
        operation: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        super().__init__(message)


class FetchError(RemoteError):
    """Failure while fetching the full domain list."""


class ConfirmationDeclined(CrawlDeskError):
    """The operator answered "no" to a destructive action.

    Not a failure: it is the normal abort path of `remove`.
    """

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(f"cancelled: {description}")
