"""
Target Type Descriptors

This module turns a record class (dataclass, pydantic model or plain
annotated class) into an immutable TypeDescriptor: the ordered list of
fields, their declared types and their declared defaults. Descriptors are
built once per class and cached in a process-wide registry.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import logging
import threading
import types
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, get_origin, get_type_hints

from pydantic import BaseModel

from .exceptions import DescriptorError
from .sentinels import NO_DEFAULT

logger = logging.getLogger(__name__)


class TargetKind(str, Enum):
    """How a target class is introspected and instantiated."""

    DATACLASS = "dataclass"
    PYDANTIC = "pydantic"
    PLAIN = "plain"


@dataclass(frozen=True)
class FieldDescriptor:
    """Represents one declared field of a target type."""

    name: str
    annotation: Any = Any
    default: Any = NO_DEFAULT
    default_factory: Callable[[], Any] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT or self.default_factory is not None

    def get_default(self) -> Any:
        """Return the declared default, calling the factory if there is one."""
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


@dataclass(frozen=True)
class TypeDescriptor:
    """Immutable structural description of a target type."""

    target: type
    kind: TargetKind
    fields: tuple[FieldDescriptor, ...]

    @property
    def type_name(self) -> str:
        return qualified_name(self.target)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def field(self, name: str) -> FieldDescriptor | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


def qualified_name(target: type) -> str:
    return f"{target.__module__}.{target.__qualname__}"


def target_kind(target: type) -> TargetKind:
    if dataclasses.is_dataclass(target):
        return TargetKind.DATACLASS
    if issubclass(target, BaseModel):
        return TargetKind.PYDANTIC
    return TargetKind.PLAIN


def describe(target: type) -> TypeDescriptor:
    """
    Introspect a class into a TypeDescriptor.

    Args:
        target: The record class to describe

    Returns:
        TypeDescriptor with fields in declaration order

    Raises:
        DescriptorError: If target is not a class or its annotations
            cannot be resolved
    """
    if not isinstance(target, type):
        raise DescriptorError(
            f"Expected a class to map onto, got {type(target).__name__}"
        )

    kind = target_kind(target)
    try:
        if kind is TargetKind.DATACLASS:
            fields = _dataclass_fields(target)
        elif kind is TargetKind.PYDANTIC:
            fields = _pydantic_fields(target)
        else:
            fields = _plain_fields(target)
    except (NameError, TypeError, ValueError) as e:
        raise DescriptorError(
            f"Could not introspect {qualified_name(target)}: {e}"
        ) from e

    return TypeDescriptor(target=target, kind=kind, fields=tuple(fields))


def _dataclass_fields(target: type) -> list[FieldDescriptor]:
    hints = get_type_hints(target)
    result = []
    for f in dataclasses.fields(target):
        result.append(
            FieldDescriptor(
                name=f.name,
                annotation=hints.get(f.name, f.type),
                default=(
                    NO_DEFAULT if f.default is dataclasses.MISSING else f.default
                ),
                default_factory=(
                    None
                    if f.default_factory is dataclasses.MISSING
                    else f.default_factory
                ),
            )
        )
    return result


def _pydantic_fields(target: type[BaseModel]) -> list[FieldDescriptor]:
    result = []
    for name, info in target.model_fields.items():
        if info.is_required():
            default, factory = NO_DEFAULT, None
        elif info.default_factory is not None:
            default = NO_DEFAULT
            factory = functools.partial(info.get_default, call_default_factory=True)
        else:
            default, factory = info.default, None
        result.append(
            FieldDescriptor(
                name=name,
                annotation=info.annotation,
                default=default,
                default_factory=factory,
            )
        )
    return result


def _plain_fields(target: type) -> list[FieldDescriptor]:
    """
    Annotated class attributes (base classes first), then annotated
    ``__init__`` parameters that are not class attributes.
    """
    result = []
    for name, annotation in get_type_hints(target).items():
        if annotation is ClassVar or get_origin(annotation) is ClassVar:
            continue
        result.append(
            FieldDescriptor(
                name=name,
                annotation=annotation,
                default=_class_attribute(target, name),
            )
        )

    init = target.__init__
    if init is object.__init__:
        return result

    known = {f.name for f in result}
    init_hints = get_type_hints(init)
    for param in list(inspect.signature(init).parameters.values())[1:]:
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.name in known or param.name not in init_hints:
            continue
        result.append(
            FieldDescriptor(name=param.name, annotation=init_hints[param.name])
        )
    return result


def _class_attribute(target: type, name: str) -> Any:
    for klass in target.__mro__:
        if name in vars(klass):
            value = vars(klass)[name]
            # __slots__ entries are descriptors, not defaults
            if isinstance(value, types.MemberDescriptorType):
                return NO_DEFAULT
            return value
    return NO_DEFAULT


class DescriptorRegistry:
    """
    Process-wide cache of TypeDescriptors keyed by class.

    Entries are added on first use and never invalidated, since target
    types are static definitions. Reads are lock-free; builds are
    serialized so each class is introspected once.
    """

    def __init__(self):
        self._descriptors: dict[type, TypeDescriptor] = {}
        self._lock = threading.Lock()
        self._logger = logger.getChild(self.__class__.__name__)

    def get(self, target: type) -> TypeDescriptor:
        """
        Return the descriptor for target, building it on first use.

        Raises:
            DescriptorError: If target is not a class or cannot be introspected
        """
        # Instances may be unhashable, so reject them before the lookup
        if not isinstance(target, type):
            raise DescriptorError(
                f"Expected a class to map onto, got {type(target).__name__}"
            )

        descriptor = self._descriptors.get(target)
        if descriptor is not None:
            return descriptor

        with self._lock:
            descriptor = self._descriptors.get(target)
            if descriptor is None:
                descriptor = describe(target)
                self._descriptors[target] = descriptor
                self._logger.info(
                    f"Built descriptor for '{descriptor.type_name}' "
                    f"({descriptor.kind.value}, {len(descriptor.fields)} fields)"
                )
        return descriptor

    def register(self, descriptor: TypeDescriptor) -> None:
        """Register a hand-built descriptor in place of introspection."""
        with self._lock:
            if descriptor.target in self._descriptors:
                self._logger.warning(
                    f"Overwriting descriptor for '{descriptor.type_name}'"
                )
            self._descriptors[descriptor.target] = descriptor
        self._logger.info(f"Registered descriptor for '{descriptor.type_name}'")

    def clear(self) -> None:
        """Clear all cached descriptors."""
        with self._lock:
            self._descriptors.clear()

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, target: type) -> bool:
        return target in self._descriptors


# Global descriptor registry instance
_global_registry = DescriptorRegistry()


def get_global_registry() -> DescriptorRegistry:
    """Get the global descriptor registry instance."""
    return _global_registry
