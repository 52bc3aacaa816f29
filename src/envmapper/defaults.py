"""
Default value discovery.

A field's default comes from its own declaration (dataclass field, pydantic
field, class attribute) or, failing that, from a parameter of the target's
``__init__`` with the same name. "No default" is the NO_DEFAULT sentinel,
never a falsy value: False, 0, "" and None are all legitimate defaults.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from .descriptors import TargetKind, TypeDescriptor
from .sentinels import NO_DEFAULT

logger = logging.getLogger(__name__)

# Produces the default for one field on every call.
DefaultGetter = Callable[[], Any]


class DefaultResolver:
    """Looks up and caches per-type field defaults."""

    def __init__(self):
        # target -> (descriptor the defaults were collected from, defaults)
        self._defaults: dict[
            type, tuple[TypeDescriptor, dict[str, DefaultGetter]]
        ] = {}
        self._lock = threading.Lock()
        self._logger = logger.getChild(self.__class__.__name__)

    def default_for(self, descriptor: TypeDescriptor, field_name: str) -> Any:
        """
        Return the default value for a field, or NO_DEFAULT.

        Args:
            descriptor: Descriptor of the target type
            field_name: Name of the field, matched exactly

        Returns:
            The default value (a fresh one for factories) or NO_DEFAULT
        """
        getter = self._defaults_for(descriptor).get(field_name)
        if getter is None:
            return NO_DEFAULT
        return getter()

    def _defaults_for(self, descriptor: TypeDescriptor) -> dict[str, DefaultGetter]:
        # A descriptor registered over an earlier one invalidates its entry
        cached = self._defaults.get(descriptor.target)
        if cached is not None and cached[0] is descriptor:
            return cached[1]

        with self._lock:
            cached = self._defaults.get(descriptor.target)
            if cached is None or cached[0] is not descriptor:
                cached = (descriptor, self._collect(descriptor))
                self._defaults[descriptor.target] = cached
                self._logger.debug(
                    f"Cached {len(cached[1])} defaults for '{descriptor.type_name}'"
                )
        return cached[1]

    def _collect(self, descriptor: TypeDescriptor) -> dict[str, DefaultGetter]:
        constructor = constructor_defaults(descriptor)
        defaults: dict[str, DefaultGetter] = {}
        for field in descriptor.fields:
            if field.has_default:
                defaults[field.name] = field.get_default
            elif field.name in constructor:
                value = constructor[field.name]
                defaults[field.name] = lambda value=value: value
        return defaults

    def clear(self) -> None:
        with self._lock:
            self._defaults.clear()


def constructor_defaults(descriptor: TypeDescriptor) -> dict[str, Any]:
    """
    Return ``{parameter name: default}`` for the target's ``__init__``.

    Only plain classes are inspected: dataclass and pydantic constructors are
    generated from the field declarations, which already carry the defaults.
    """
    if descriptor.kind is not TargetKind.PLAIN:
        return {}

    init = descriptor.target.__init__
    if init is object.__init__:
        return {}

    try:
        parameters = inspect.signature(init).parameters.values()
    except (TypeError, ValueError):
        # Builtin constructors without an introspectable signature
        return {}

    return {
        p.name: p.default
        for p in parameters
        if p.default is not inspect.Parameter.empty
        and p.kind not in (p.VAR_POSITIONAL, p.VAR_KEYWORD)
    }
