"""Resource classification.

Pure, stateless helpers that turn a flat list of scanned resources into a
per-type view for display. Every function here is total: there is no input
of the right shape for which they raise.
"""

from __future__ import annotations

from typing import Iterable

from core.domain.models import ClassificationView, DisplayMeta, ResourceRecord, ResourceType

UNKNOWN_TYPE = "UNKNOWN"
FALLBACK_ICON = "📄"

DISPLAY_META: dict[ResourceType, DisplayMeta] = {
    ResourceType.IMAGE: DisplayMeta(icon="🖼️", title="Images"),
    ResourceType.JS: DisplayMeta(icon="📜", title="JavaScript Files"),
    ResourceType.CSS: DisplayMeta(icon="🎨", title="CSS Files"),
    ResourceType.API: DisplayMeta(icon="🔌", title="API Calls"),
    ResourceType.OTHER: DisplayMeta(icon="📦", title="Other Resources"),
}


def group_key(record: ResourceRecord) -> str:
    """Grouping key: the raw type, or UNKNOWN when the record carries none."""

    if record.type is None or not record.type.strip():
        return UNKNOWN_TYPE
    return record.type


def classify(records: Iterable[ResourceRecord]) -> ClassificationView:
    """Group records by type.

    - `types` follows first occurrence in the input, not alphabetical order.
    - Each group keeps input order.
    - Unrecognized types keep their own key; they are not folded into OTHER.
    """

    groups: dict[str, list[ResourceRecord]] = {}
    for record in records:
        groups.setdefault(group_key(record), []).append(record)
    return ClassificationView(types=list(groups), groups=groups)


def flatten(view: ClassificationView) -> list[ResourceRecord]:
    """Records of a view concatenated in `types` order."""

    out: list[ResourceRecord] = []
    for key in view.types:
        out.extend(view.groups.get(key, []))
    return out


def display_meta(resource_type: str | None) -> DisplayMeta:
    """Icon and title for a group key; falls back for anything unknown."""

    kind = ResourceType.parse(resource_type)
    if kind is not None:
        return DISPLAY_META[kind]
    label = resource_type if resource_type else UNKNOWN_TYPE
    return DisplayMeta(icon=FALLBACK_ICON, title=f"{label} Data")


def summarize(view: ClassificationView) -> dict[str, tuple[int, int, int]]:
    """Per type: (total, valid, invalid) counts, in `types` order."""

    summary: dict[str, tuple[int, int, int]] = {}
    for key in view.types:
        records = view.groups.get(key, [])
        valid = sum(1 for r in records if r.is_valid)
        summary[key] = (len(records), valid, len(records) - valid)
    return summary
