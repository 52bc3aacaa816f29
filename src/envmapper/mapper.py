"""
Env Mapper

Populates a record class from a flat string-keyed source. For every declared
field, in declaration order:

1. the field name is normalized to the source key (``zipCode`` -> ``ZIP_CODE``);
2. a present value is coerced to the declared type;
3. otherwise the declared or constructor default is used;
4. otherwise the field is left unset, or MissingValueError is raised in
   strict mode.

Any failure aborts the whole call. The instance is built once at the end,
without running the target's constructor.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from .builder import InstanceBuilder
from .coercion import TypeCoercer
from .defaults import DefaultResolver
from .descriptors import (
    DescriptorRegistry,
    FieldDescriptor,
    TypeDescriptor,
    get_global_registry,
)
from .environ import environ_source
from .exceptions import EnvMapperError, MissingValueError
from .naming import normalize_name
from .sentinels import NO_DEFAULT, UNSET

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Source values are strings for os.environ; callers may also pass numbers.
SourceMapping = Mapping[str, Any]


class EnvMapper:
    """
    Maps flat key/value sources onto record classes.

    A mapper owns a default resolver and a coercer; descriptors come from the
    process-wide registry unless another registry is given.
    """

    def __init__(
        self,
        registry: DescriptorRegistry | None = None,
        resolver: DefaultResolver | None = None,
        coercer: TypeCoercer | None = None,
    ):
        self._registry = registry if registry is not None else get_global_registry()
        self._resolver = resolver if resolver is not None else DefaultResolver()
        self._coercer = coercer if coercer is not None else TypeCoercer()
        self._logger = logger.getChild(self.__class__.__name__)

    def map(
        self,
        target: type[T],
        source: SourceMapping | None = None,
        require_values: bool = False,
    ) -> T:
        """
        Create an instance of target populated from source.

        Args:
            target: The record class to populate
            source: Flat key/value mapping; defaults to a snapshot of os.environ
            require_values: Raise for fields with neither a value nor a default
                instead of leaving them unset

        Returns:
            The populated instance

        Raises:
            MissingValueError: In strict mode, for the first field without
                a value or default
            TypeMismatchError: If a present value cannot be coerced
            DescriptorError: If target cannot be introspected
        """
        if source is None:
            source = environ_source()

        descriptor = self._registry.get(target)
        self._logger.debug(
            f"Mapping {len(descriptor.fields)} fields onto "
            f"'{descriptor.type_name}' (strict={require_values})"
        )

        try:
            builder = self._populate(descriptor, source, require_values)
        except EnvMapperError as e:
            # The exception text may hold the raw value, which can be a secret
            field_name = getattr(e, "field_name", None)
            self._logger.error(
                f"Mapping '{descriptor.type_name}' failed on field "
                f"'{field_name}': {e.__class__.__name__}"
            )
            raise

        instance = builder.build()
        self._logger.debug(
            f"Mapped '{descriptor.type_name}' "
            f"({len(builder.values)} set, {len(builder.unset_fields)} unset)"
        )
        return instance

    def _populate(
        self,
        descriptor: TypeDescriptor,
        source: SourceMapping,
        require_values: bool,
    ) -> InstanceBuilder:
        builder = InstanceBuilder(descriptor)
        for field in descriptor.fields:
            value = self.resolve_field(descriptor, field, source)
            if value is UNSET and require_values:
                raise MissingValueError(field.name, descriptor.type_name)
            builder.with_value(field.name, value)
        return builder

    def resolve_field(
        self,
        descriptor: TypeDescriptor,
        field: FieldDescriptor,
        source: SourceMapping,
    ) -> Any:
        """
        Resolve one field: coerced source value, else default, else UNSET.

        Raises:
            TypeMismatchError: If the source value cannot be coerced
        """
        key = normalize_name(field.name)

        if key in source:
            self._logger.debug(f"'{field.name}' read from '{key}'")
            return self._coercer.coerce(
                source[key],
                field.annotation,
                type_name=descriptor.type_name,
                field_name=field.name,
            )

        default = self._resolver.default_for(descriptor, field.name)
        if default is not NO_DEFAULT:
            self._logger.debug(f"'{field.name}' not in source, using default")
            return default

        self._logger.debug(f"'{field.name}' has no source entry '{key}' or default")
        return UNSET


# Process-wide mapper shared by map_env()
_default_mapper = EnvMapper()


def map_env(
    target: type[T],
    source: SourceMapping | None = None,
    require_values: bool = False,
) -> T:
    """Map source (os.environ when omitted) onto target with the shared mapper."""
    return _default_mapper.map(target, source, require_values=require_values)
