"""Field name -> source key normalization."""

from __future__ import annotations

import re

from .exceptions import NameNormalizationError

# A word starts at the beginning of the segment, or at an uppercase letter
# followed by non-uppercase characters. The text between matches (runs of
# capitals such as "HTTP" in "HTTPServer") is kept as its own word.
_WORD_BOUNDARY = re.compile(r"(^[^A-Z]+|[A-Z][^A-Z]+)")


def split_words(name: str) -> list[str]:
    """
    Split an identifier into words.

    Underscores always separate words. A segment without lowercase letters
    is a single word, which keeps already upper-cased names intact.

    Args:
        name: A field identifier (camelCase, snake_case or UPPER_CASE)

    Returns:
        The list of words, in order, without empty entries
    """
    words: list[str] = []
    for segment in name.split("_"):
        if not segment:
            continue
        if segment == segment.upper():
            words.append(segment)
            continue
        words.extend(part for part in _WORD_BOUNDARY.split(segment) if part)
    return words


def normalize_name(name: str) -> str:
    """
    Normalize a field name to the UPPER_SNAKE_CASE form used by env vars.

    Examples:
        phpVersion  -> PHP_VERSION
        xdebug_mode -> XDEBUG_MODE
        PATH        -> PATH
        HTTPServer  -> HTTP_SERVER

    Raises:
        NameNormalizationError: If a non-empty name yields no words
    """
    if not name:
        return ""

    words = split_words(name)
    if not words:
        raise NameNormalizationError(name)

    return "_".join(word.upper() for word in words)
