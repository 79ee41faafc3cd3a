"""Two-phase confirmation for destructive actions.

The Core asks, awaits the decision, and proceeds only on an explicit "yes".
Interactive surfaces answer with a prompt; tests plug in deterministic
providers.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class ConfirmationProvider(Protocol):
    async def confirm(self, message: str) -> bool:
        """Return True only when the operator explicitly accepts."""

        ...


class AlwaysConfirm:
    """Answers "yes" to everything (`--yes` flags, scripted runs)."""

    def __init__(self) -> None:
        self.asked: list[str] = []

    async def confirm(self, message: str) -> bool:
        self.asked.append(message)
        return True


class AlwaysDecline:
    def __init__(self) -> None:
        self.asked: list[str] = []

    async def confirm(self, message: str) -> bool:
        self.asked.append(message)
        return False


class ScriptedConfirm:
    """Replays a fixed sequence of decisions; an exhausted script means "no"."""

    def __init__(self, decisions: Iterable[bool]) -> None:
        self._decisions = list(decisions)
        self.asked: list[str] = []

    async def confirm(self, message: str) -> bool:
        self.asked.append(message)
        if not self._decisions:
            return False
        return self._decisions.pop(0)
