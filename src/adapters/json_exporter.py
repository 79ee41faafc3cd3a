"""JSON export of sync results.

Why JSON:
- Interoperability with other tooling and pipelines.
- Keeps a record of a sync (groups plus invalid links) without re-querying.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import SyncSnapshot


def export_sync_json(*, snapshot: SyncSnapshot, output_path: Path) -> Path:
    """Export a `SyncSnapshot` as UTF-8 JSON with a stable layout.

    Keys are not sorted so that `types` and `groups` keep first-seen order.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = snapshot.to_dict()
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
    return output_path


def default_export_path(*, export_dir: Path, domain: str) -> Path:
    """`<export_dir>/<slug>.sync.json` for a domain."""

    return export_dir / f"{sanitize_for_filename(domain)}.sync.json"


def sanitize_for_filename(value: str) -> str:
    """Filesystem-friendly slug for export names."""

    out: list[str] = []
    for ch in value.strip():
        if ch.isalnum() or ch in ("-", "_", "."):
            out.append(ch)
        else:
            out.append("-")
    cleaned = "".join(out).strip("-_.")
    return cleaned or "domain"
