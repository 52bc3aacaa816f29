"""
Type coercion from flat source values to declared field types.

Environment values always arrive as strings (callers may also pass ints or
floats), so each one is converted to the type the field declares:

    str      -> passed through, numeric-looking strings stay strings
    int      -> numeric with no fractional part
    float    -> numeric
    bool     -> True for "1", "true", "yes", "on" (any case), else False
    Enum     -> matched against member values (int- or str-valued enums)
    X | None -> coerced as X
    Any      -> passed through

Everything else (collections, nested records, unions) is rejected.
"""

from __future__ import annotations

import logging
import math
import re
import types
from enum import Enum
from typing import Any, Union, get_args, get_origin

from .exceptions import InvalidEnumValueError, TypeMismatchError, UnsupportedTypeError

logger = logging.getLogger(__name__)

# Decimal or exponent notation with optional sign and surrounding whitespace.
# No nan/inf, hex or digit separators.
_NUMERIC = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")
_INTEGER = re.compile(r"\s*[+-]?\d+\s*")

TRUTHY_TOKENS = frozenset({"1", "true", "yes", "on"})


def type_label(declared_type: Any) -> str:
    """Human readable name of a declared type, as used in error messages."""
    if declared_type is type(None):
        return "None"
    if isinstance(declared_type, type) and get_origin(declared_type) is None:
        return declared_type.__name__
    return repr(declared_type).replace("typing.", "")


def unwrap_optional(declared_type: Any) -> Any:
    """Return X for ``X | None`` / ``Optional[X]``, otherwise the type itself."""
    origin = get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        members = [a for a in get_args(declared_type) if a is not type(None)]
        if len(members) == 1:
            return members[0]
    return declared_type


def parse_number(raw: Any) -> int | float:
    """
    Parse a numeric source value to its most restrictive type.

    Raises:
        ValueError: If the value is not numeric
    """
    if isinstance(raw, bool):
        raise ValueError(f"not numeric: {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            raise ValueError(f"not numeric: {raw!r}")
        return int(raw) if raw.is_integer() else raw
    if not isinstance(raw, str) or not _NUMERIC.fullmatch(raw):
        raise ValueError(f"not numeric: {raw!r}")

    # Keep full precision for plain integers beyond float range
    if _INTEGER.fullmatch(raw):
        return int(raw)
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"not numeric: {raw!r}")
    return int(value) if value.is_integer() else value


def is_truthy(raw: Any) -> bool:
    """
    One-sided boolean test: only the truthy tokens (and the integer 1) are
    True. There is no false-token set, so "0", "no" and "maybe" are all False.
    """
    if isinstance(raw, (bool, int)):
        return raw == 1
    if isinstance(raw, str):
        return raw.lower() in TRUTHY_TOKENS
    return False


def enum_backing(enum_type: type[Enum]) -> type | None:
    """Return int or str when all member values share that type, else None."""
    values = [member.value for member in enum_type]
    if not values:
        return None
    if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        return int
    if all(isinstance(v, str) for v in values):
        return str
    return None


class TypeCoercer:
    """Converts raw source values to declared field types."""

    def __init__(self):
        self._logger = logger.getChild(self.__class__.__name__)

    def coerce(
        self, raw: Any, declared_type: Any, *, type_name: str, field_name: str
    ) -> Any:
        """
        Coerce a raw source value to the declared type of a field.

        Args:
            raw: The value found in the source mapping
            declared_type: The field's annotation
            type_name: Qualified name of the target type, for diagnostics
            field_name: Name of the field, for diagnostics

        Returns:
            The coerced value

        Raises:
            TypeMismatchError: If the value cannot be converted
            InvalidEnumValueError: If no enumeration member matches
            UnsupportedTypeError: If the declared type is not flat
        """
        target = unwrap_optional(declared_type)
        label = type_label(declared_type)

        if target is Any:
            return raw

        if isinstance(target, type) and get_origin(target) is None:
            if issubclass(target, Enum):
                return self._coerce_enum(raw, target, type_name, field_name, label)
            if issubclass(target, bool):
                return is_truthy(raw)
            if issubclass(target, int):
                return self._coerce_int(raw, type_name, field_name, label)
            if issubclass(target, float):
                return self._coerce_float(raw, type_name, field_name, label)
            if issubclass(target, str):
                return self._coerce_str(raw, type_name, field_name, label)

        self._logger.debug(f"Unsupported declared type {label} for '{field_name}'")
        raise UnsupportedTypeError(type_name, field_name, raw, label)

    def _coerce_int(
        self, raw: Any, type_name: str, field_name: str, label: str
    ) -> int:
        try:
            value = parse_number(raw)
        except ValueError:
            raise TypeMismatchError(type_name, field_name, raw, label) from None
        if isinstance(value, float):
            raise TypeMismatchError(type_name, field_name, raw, label)
        return value

    def _coerce_float(
        self, raw: Any, type_name: str, field_name: str, label: str
    ) -> float:
        try:
            return float(parse_number(raw))
        except ValueError:
            raise TypeMismatchError(type_name, field_name, raw, label) from None

    def _coerce_str(
        self, raw: Any, type_name: str, field_name: str, label: str
    ) -> str:
        if isinstance(raw, str):
            return raw
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return str(raw)
        raise TypeMismatchError(type_name, field_name, raw, label)

    def _coerce_enum(
        self,
        raw: Any,
        enum_type: type[Enum],
        type_name: str,
        field_name: str,
        label: str,
    ) -> Enum:
        backing = enum_backing(enum_type)
        if backing is None:
            raise UnsupportedTypeError(type_name, field_name, raw, label)

        if backing is int:
            try:
                key = parse_number(raw)
            except ValueError:
                raise InvalidEnumValueError(
                    type_name, field_name, raw, label
                ) from None
        else:
            key = raw

        for member in enum_type:
            if type(member.value) is type(key) and member.value == key:
                return member

        raise InvalidEnumValueError(type_name, field_name, raw, label)
