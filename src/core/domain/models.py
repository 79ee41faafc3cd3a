"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to I/O libraries.
- Wire names (`domain`, `isValid`, `invalidLinks`) are declared once as
  aliases, so adapters never hand-map payload keys.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ResourceType(str, Enum):
    """Resource kinds the crawler knows how to label."""

    IMAGE = "IMAGE"
    JS = "JS"
    CSS = "CSS"
    API = "API"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: str | None) -> "ResourceType | None":
        """Known kind for `value`, or None for missing/unrecognized values."""

        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class DomainEntry(BaseModel):
    """One row of the remote domain registry.

    Identity is `id` (assigned by the service); `name` is the only mutable part.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int | str = Field(
        ...,
        description="Opaque identifier assigned by the remote service.",
    )
    name: str = Field(
        ...,
        alias="domain",
        min_length=1,
        description="Validated domain string.",
    )


class ResourceRecord(BaseModel):
    """One crawled artifact (image, script, stylesheet, API call, other).

    Immutable once received; classification only regroups records.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    type: str | None = Field(
        default=None,
        description="Raw type label; unrecognized values are kept verbatim.",
    )
    url: str = Field(
        ...,
        description="Resource URL as reported by the crawler.",
    )
    is_valid: bool = Field(
        default=False,
        alias="isValid",
        description="Whether the crawler could resolve the resource.",
    )


class DisplayMeta(BaseModel):
    """Icon and title used to present one resource group."""

    model_config = ConfigDict(frozen=True)

    icon: str
    title: str


class ScanPayload(BaseModel):
    """Body of a `/scan` response, normalized to one shape."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    records: list[ResourceRecord] = Field(
        default_factory=list,
        alias="requests",
        description="Scanned resources in crawler order.",
    )
    invalid_links: list[str] = Field(
        default_factory=list,
        alias="invalidLinks",
        description="Raw URLs the crawler could not resolve.",
    )


@dataclass
class ClassificationView:
    """Records grouped by type, derived from one record sequence.

    `types` keeps first-occurrence order; each group keeps input order.
    """

    types: list[str] = field(default_factory=list)
    groups: dict[str, list[ResourceRecord]] = field(default_factory=dict)

    def __len__(self) -> int:
        return sum(len(records) for records in self.groups.values())


@dataclass
class SyncSnapshot:
    """Latest completed sync: which domain it belongs to and what it returned."""

    domain: str
    records: list[ResourceRecord]
    view: ClassificationView
    invalid_links: list[str]
    completed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "domain": self.domain,
            "completed_at": self.completed_at.isoformat(),
            "types": list(self.view.types),
            "groups": {
                key: [record.model_dump(mode="json", by_alias=True) for record in records]
                for key, records in self.view.groups.items()
            },
            "invalid_links": list(self.invalid_links),
        }
