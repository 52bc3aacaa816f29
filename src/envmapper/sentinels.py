"""Marker objects that can never be confused with a real field value."""

from __future__ import annotations

from typing import Final


class _Sentinel:
    """A named singleton without a truth value. Compare it with ``is``."""

    __slots__ = ("_name",)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        raise TypeError(f"{self._name} has no truth value; compare with 'is'")

    def __reduce__(self) -> str:
        return self._name


# No default was declared for a field.
NO_DEFAULT: Final = _Sentinel("NO_DEFAULT")

# No source entry and no default: the field stays unassigned.
UNSET: Final = _Sentinel("UNSET")
