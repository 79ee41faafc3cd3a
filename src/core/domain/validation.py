"""Domain-syntax rule.

A candidate is one or more `label.` segments (alphanumerics and hyphens),
a final label of at least two letters, and an optional `/path` suffix.
Whitespace around the value is trimmed before matching, comparing or storing.
"""

from __future__ import annotations

import re

from core.errors import ValidationError

DOMAIN_PATTERN = re.compile(r"^(?:[A-Za-z0-9-]+\.)+[A-Za-z]{2,}(?:/.*)?$")


def normalize_domain(value: str) -> str:
    return value.strip()


def is_valid_domain(value: str) -> bool:
    candidate = normalize_domain(value)
    if not candidate:
        return False
    return DOMAIN_PATTERN.match(candidate) is not None


def validate_domain(value: str) -> str:
    """Return the trimmed domain or raise `ValidationError`."""

    candidate = normalize_domain(value)
    if not candidate:
        raise ValidationError(value, "domain is required")
    if DOMAIN_PATTERN.match(candidate) is None:
        raise ValidationError(value, "invalid domain")
    return candidate
