"""Domain registry controller.

Keeps a local mirror of the remote domain registry plus a single edit slot.

Rules:
- Remote first, local second: a mutation is applied only after the remote
  call succeeded, never speculatively.
- The edit cursor is either None or a valid index into `domains`. Every
  mutation that removes entries adjusts the cursor in the same synchronous
  step, so no observer ever sees it stale.
- After an await, entries are located again by id. An interleaved removal
  therefore cannot redirect a rename or a delete to the wrong row.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from core.domain.models import DomainEntry
from core.domain.validation import validate_domain
from core.errors import ConfirmationDeclined, DuplicateError, FetchError, RemoteError
from core.interfaces.confirmation import ConfirmationProvider
from core.interfaces.remote import DomainRegistryAPI
from core.logging import get_logger

log = get_logger("registry")


class DomainRegistryController:
    """Owns `domains`, `edit_cursor` and the draft being edited.

    No other component mutates these; presentation layers read them through
    the properties and call the operations below.
    """

    def __init__(self, api: DomainRegistryAPI, confirm: ConfirmationProvider) -> None:
        self._api = api
        self._confirm = confirm
        self._domains: list[DomainEntry] = []
        self._edit_cursor: int | None = None
        self._draft: str | None = None
        self._pending = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def domains(self) -> list[DomainEntry]:
        return list(self._domains)

    @property
    def edit_cursor(self) -> int | None:
        return self._edit_cursor

    @property
    def draft(self) -> str | None:
        return self._draft

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def editing(self) -> DomainEntry | None:
        if self._edit_cursor is None:
            return None
        return self._domains[self._edit_cursor]

    def names(self) -> list[str]:
        return [entry.name for entry in self._domains]

    def index_of(self, entry_id: int | str) -> int | None:
        for position, entry in enumerate(self._domains):
            if entry.id == entry_id:
                return position
        return None

    def find(self, name: str) -> int | None:
        """Index of the entry whose name equals `name` (trimmed, exact match)."""

        wanted = name.strip()
        for position, entry in enumerate(self._domains):
            if entry.name == wanted:
                return position
        return None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def load(self) -> list[DomainEntry]:
        """Replace the mirror with the server's list and clear the edit slot."""

        with self._busy():
            try:
                entries = await self._api.list_domains()
            except RemoteError as exc:
                log.warning("registry.load_failed", error=str(exc))
                if isinstance(exc, FetchError):
                    raise
                raise FetchError(
                    str(exc), operation="list", status_code=exc.status_code
                ) from exc

        self._domains = list(entries)
        self._clear_edit()
        log.debug("registry.loaded", count=len(self._domains))
        return self.domains

    def begin_edit(self, index: int) -> str:
        """Point the edit cursor at `index` and return the draft to edit.

        Editing a different row while one is already open moves the cursor.
        """

        entry = self._entry_at(index)
        self._edit_cursor = index
        self._draft = entry.name
        return entry.name

    def cancel_edit(self) -> None:
        self._clear_edit()

    async def submit(self, draft_name: str) -> DomainEntry:
        """Rename the entry being edited, or create a new one.

        Raises:
            ValidationError: empty or malformed name (no remote call).
            DuplicateError: create path only, exact match already present.
            RemoteError: the service rejected or could not be reached.
        """

        name = validate_domain(draft_name)
        if self._edit_cursor is not None:
            return await self._rename(self._domains[self._edit_cursor], name)
        return await self._create(name)

    async def remove(self, index: int) -> DomainEntry:
        """Delete the entry at `index` after explicit confirmation.

        Raises:
            ConfirmationDeclined: the operator said no; nothing changed.
            RemoteError: the delete failed; nothing changed.
        """

        entry = self._entry_at(index)
        description = f"Delete domain {entry.name}?"
        if not await self._confirm.confirm(description):
            log.debug("registry.delete_declined", id=entry.id, name=entry.name)
            raise ConfirmationDeclined(description)

        with self._busy():
            try:
                await self._api.delete_domain(entry.id)
            except RemoteError as exc:
                log.warning("registry.delete_failed", id=entry.id, error=str(exc))
                raise

        self._drop(entry.id)
        log.info("registry.deleted", id=entry.id, name=entry.name)
        return entry

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _rename(self, entry: DomainEntry, name: str) -> DomainEntry:
        with self._busy():
            try:
                await self._api.update_domain(entry.id, name)
            except RemoteError as exc:
                log.warning("registry.update_failed", id=entry.id, error=str(exc))
                raise

        renamed = entry.model_copy(update={"name": name})
        position = self.index_of(entry.id)
        if position is None:
            # Removed while the update was in flight.
            return renamed

        self._domains[position] = renamed
        if self._edit_cursor == position:
            self._clear_edit()
        log.info("registry.updated", id=entry.id, name=name)
        return renamed

    async def _create(self, name: str) -> DomainEntry:
        if name in self.names():
            raise DuplicateError(name)

        with self._busy():
            try:
                created = await self._api.create_domain(name)
            except RemoteError as exc:
                log.warning("registry.create_failed", name=name, error=str(exc))
                raise

        self._domains.append(created)
        log.info("registry.created", id=created.id, name=created.name)
        return created

    def _drop(self, entry_id: int | str) -> None:
        """Remove an entry and shift the cursor in one step."""

        position = self.index_of(entry_id)
        if position is None:
            return

        del self._domains[position]
        if self._edit_cursor is None:
            return
        if self._edit_cursor == position:
            self._clear_edit()
        elif self._edit_cursor > position:
            self._edit_cursor -= 1

    def _entry_at(self, index: int) -> DomainEntry:
        if not 0 <= index < len(self._domains):
            raise IndexError(f"no domain at index {index} (have {len(self._domains)})")
        return self._domains[index]

    def _clear_edit(self) -> None:
        self._edit_cursor = None
        self._draft = None

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self._pending = True
        try:
            yield
        finally:
            self._pending = False
