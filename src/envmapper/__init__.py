"""
Package façade: populate typed record classes from environment variables.

    from envmapper import map_env

    settings = map_env(Settings)                     # reads os.environ
    settings = map_env(Settings, {"PORT": "8080"})   # explicit source
"""

from __future__ import annotations

from .builder import InstanceBuilder
from .coercion import TypeCoercer
from .defaults import DefaultResolver
from .descriptors import (
    DescriptorRegistry,
    FieldDescriptor,
    TargetKind,
    TypeDescriptor,
    describe,
    get_global_registry,
)
from .environ import environ_source
from .exceptions import (
    DescriptorError,
    EnvMapperError,
    InvalidEnumValueError,
    MissingValueError,
    NameNormalizationError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from .mapper import EnvMapper, map_env
from .naming import normalize_name
from .sentinels import NO_DEFAULT, UNSET

__all__ = [
    "EnvMapper",
    "map_env",
    "environ_source",
    "normalize_name",
    "TypeCoercer",
    "DefaultResolver",
    "InstanceBuilder",
    "DescriptorRegistry",
    "FieldDescriptor",
    "TargetKind",
    "TypeDescriptor",
    "describe",
    "get_global_registry",
    "NO_DEFAULT",
    "UNSET",
    "EnvMapperError",
    "DescriptorError",
    "MissingValueError",
    "NameNormalizationError",
    "TypeMismatchError",
    "InvalidEnumValueError",
    "UnsupportedTypeError",
]
