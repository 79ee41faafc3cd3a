"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without polluting the CLI.
- Lets adapters (HTTP, export) read configuration consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "crawldesk"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "crawldesk"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "crawldesk"
    return Path.home() / ".config" / "crawldesk"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# crawldesk user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    Why pydantic-settings:
    - Typing and validation at the edge (env vars) without leaking into the Core.
    - One configuration contract shared by CLI and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CRAWLDESK_",
        extra="ignore",
        case_sensitive=False,
        # Project .env first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default="http://localhost:3001/api",
        min_length=8,
        description="Base URL of the crawl service API.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="crawldesk/0.1 (+https://local)",
        min_length=1,
        description="User-Agent sent to the crawl service.",
    )
    success_status: str = Field(
        default="200",
        min_length=1,
        description="Value of the `status` body field that marks a successful response.",
    )

    verbose: bool = Field(
        default=False,
        description="Enable DEBUG logging for the crawldesk logger tree.",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of the console renderer.",
    )

    export_dir: Path = Field(
        default=Path("reports"),
        description="Default directory for JSON exports of sync results.",
    )
