"""Accumulates resolved field values and creates the target instance."""

from __future__ import annotations

from typing import Any

from .descriptors import TargetKind, TypeDescriptor
from .sentinels import UNSET


class InstanceBuilder:
    """
    Collects resolved values for one target type, then builds the instance
    in a single step without running its constructor.

    Fields never given a value stay unassigned on the built object, so
    reading them raises AttributeError.
    """

    def __init__(self, descriptor: TypeDescriptor):
        self.descriptor = descriptor
        self._values: dict[str, Any] = {}
        self._unset: list[str] = []

    def with_value(self, name: str, value: Any) -> "InstanceBuilder":
        """Records the resolved value of a field"""
        if self.descriptor.field(name) is None:
            raise KeyError(
                f"'{name}' is not a field of {self.descriptor.type_name}"
            )
        if value is UNSET:
            return self.without_value(name)
        if name in self._unset:
            self._unset.remove(name)
        self._values[name] = value
        return self

    def without_value(self, name: str) -> "InstanceBuilder":
        """Marks a field as left unassigned"""
        self._values.pop(name, None)
        if name not in self._unset:
            self._unset.append(name)
        return self

    @property
    def values(self) -> dict[str, Any]:
        return dict(self._values)

    @property
    def unset_fields(self) -> list[str]:
        return list(self._unset)

    def build(self) -> Any:
        """
        Creates the instance, bypassing ``__init__``, ``__post_init__`` and
        pydantic validation. Invariants enforced there are not checked.
        """
        target = self.descriptor.target

        if self.descriptor.kind is TargetKind.PYDANTIC:
            return target.model_construct(**self._values)

        instance = object.__new__(target)
        for name, value in self._values.items():
            # object.__setattr__ also works for frozen dataclasses
            object.__setattr__(instance, name, value)
        return instance
