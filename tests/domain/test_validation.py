"""Tests for the domain-syntax rule."""

from __future__ import annotations

import pytest

from core.domain.validation import is_valid_domain, normalize_domain, validate_domain
from core.errors import ValidationError


class TestIsValidDomain:
    @pytest.mark.parametrize(
        "value",
        [
            "example.com",
            "sub.example.com",
            "my-shop.co.uk",
            "a1.b2.io",
            "example.com/products",
            "example.com/",
            "  padded.org  ",
            "xn--bcher-kva.example",
        ],
    )
    def test_accepts(self, value: str) -> None:
        assert is_valid_domain(value) is True

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "   ",
            "localhost",
            "example",
            "example.c",
            "example.c0m",
            "example.123",
            ".com",
            "exa mple.com",
            "https://example.com",
            "example..com",
            "under_score.com",
        ],
    )
    def test_rejects(self, value: str) -> None:
        assert is_valid_domain(value) is False


class TestValidateDomain:
    def test_returns_trimmed_value(self) -> None:
        assert validate_domain("  example.com \n") == "example.com"

    def test_empty_is_reported_as_required(self) -> None:
        with pytest.raises(ValidationError) as info:
            validate_domain("   ")
        assert info.value.reason == "domain is required"

    def test_malformed_keeps_original_value(self) -> None:
        with pytest.raises(ValidationError) as info:
            validate_domain(" nodot ")
        assert info.value.value == " nodot "
        assert "invalid domain" in str(info.value)

    def test_case_is_preserved(self) -> None:
        assert validate_domain("Example.COM") == "Example.COM"


def test_normalize_only_trims() -> None:
    assert normalize_domain("\tShop.Example.com/x ") == "Shop.Example.com/x"
