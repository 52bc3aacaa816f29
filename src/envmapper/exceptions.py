"""
exceptions.py

Typed exception hierarchy raised while mapping a flat source onto a class.
"""

from __future__ import annotations

from typing import Any

# --------------------------------------------------------------------------- #
#                              Base hierarchy                                 #
# --------------------------------------------------------------------------- #


class EnvMapperError(Exception):
    """
    Root of all errors raised by envmapper.
    """


class DescriptorError(EnvMapperError):
    """
    Raised when a target cannot be described as a record type.

    Examples
    --------
    * The target is an instance instead of a class
    * Annotations reference names that cannot be resolved
    """


class NameNormalizationError(EnvMapperError):
    """
    Raised when a non-empty field name yields no words to join.

    Valid Python identifiers never trigger this.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Could not normalize name: {name!r}")


# --------------------------------------------------------------------------- #
#                              Mapping failures                               #
# --------------------------------------------------------------------------- #


class MissingValueError(EnvMapperError):
    """
    Raised in strict mode when a field has neither a source entry nor a
    default.
    """

    def __init__(self, field_name: str, type_name: str):
        self.field_name = field_name
        self.type_name = type_name
        super().__init__(
            f'No matching environment variable found for property "{field_name}" '
            f"of class {type_name}."
        )


def value_category(value: Any) -> str:
    """Return a short, language-neutral name for the runtime type of a value."""
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, str):
        return "string"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if value is None:
        return "null"
    return type(value).__name__


class TypeMismatchError(EnvMapperError):
    """
    Raised when a source value cannot be coerced to the declared field type.

    Carries everything needed for an actionable diagnostic: the target type,
    the field, the offending raw value and the declared type.
    """

    def __init__(
        self,
        type_name: str,
        field_name: str,
        raw_value: Any,
        declared_type: str,
        message: str | None = None,
    ):
        self.type_name = type_name
        self.field_name = field_name
        self.raw_value = raw_value
        self.declared_type = declared_type
        if message is None:
            message = (
                f'Could not read environment variable for "{field_name}" on '
                f"{type_name}.  A {declared_type} was expected but "
                f"{value_category(raw_value)} provided."
            )
        super().__init__(message)


class InvalidEnumValueError(TypeMismatchError):
    """Raised when a value matches no member of the declared enumeration."""

    def __init__(
        self, type_name: str, field_name: str, raw_value: Any, declared_type: str
    ):
        super().__init__(
            type_name,
            field_name,
            raw_value,
            declared_type,
            message=(
                f'Could not read environment variable for "{field_name}" on '
                f"{type_name}.  {raw_value!r} is not a valid {declared_type} value."
            ),
        )


class UnsupportedTypeError(TypeMismatchError):
    """
    Raised for declared types a flat string source cannot populate
    (collections, nested objects, unions of several types).
    """

    def __init__(
        self, type_name: str, field_name: str, raw_value: Any, declared_type: str
    ):
        super().__init__(
            type_name,
            field_name,
            raw_value,
            declared_type,
            message=(
                f'Could not read environment variable for "{field_name}" on '
                f"{type_name}.  Fields of type {declared_type} cannot be "
                "populated from a flat source."
            ),
        )
