"""Unit tests for field name normalization."""

from __future__ import annotations

import pytest

from envmapper.exceptions import NameNormalizationError
from envmapper.naming import normalize_name, split_words


class TestNormalizeName:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("phpVersion", "PHP_VERSION"),
            ("xdebug_mode", "XDEBUG_MODE"),
            ("PATH", "PATH"),
            ("hostname", "HOSTNAME"),
            ("zipCode", "ZIP_CODE"),
            ("stringBackedEnum", "STRING_BACKED_ENUM"),
            ("HTTPServer", "HTTP_SERVER"),
            ("http2Port", "HTTP2_PORT"),
            ("PHP_VERSION", "PHP_VERSION"),
            ("_private", "PRIVATE"),
        ],
    )
    def test_variants(self, name: str, expected: str) -> None:
        assert normalize_name(name) == expected

    @pytest.mark.parametrize(
        "name",
        ["phpVersion", "xdebug_mode", "PATH", "HTTPServer", "http2Port", "a1B2c3"],
    )
    def test_idempotent(self, name: str) -> None:
        once = normalize_name(name)
        assert normalize_name(once) == once

    def test_deterministic(self) -> None:
        assert normalize_name("zipCode") == normalize_name("zipCode")

    def test_empty_name_is_empty(self) -> None:
        assert normalize_name("") == ""

    def test_name_without_words_raises(self) -> None:
        with pytest.raises(NameNormalizationError, match="Could not normalize"):
            normalize_name("___")


class TestSplitWords:
    def test_keeps_runs_of_capitals_together(self) -> None:
        assert split_words("parseHTTPResponse") == ["parse", "HTTP", "Response"]

    def test_underscores_always_separate(self) -> None:
        assert split_words("db__Host") == ["db", "Host"]
