"""Sample target types shared by the unit tests."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field


class StringBackedEnum(Enum):
    Foo = "FOO"
    Bar = "BAR"
    Baz = "BAZ"


class IntegerBackedEnum(Enum):
    Foo = 1
    Bar = 2
    Baz = 3


class MixedEnum(Enum):
    One = 1
    Two = "two"


@dataclass(frozen=True)
class SampleEnvironment:
    # lowerCamel casing
    phpVersion: str
    # snake_case casing
    xdebug_mode: str
    # CAPITAL casing
    PATH: str
    hostname: str
    shlvl: int
    # numeric string that must stay a string
    zipCode: str
    bool: bool
    stringBackedEnum: StringBackedEnum
    integerBackedEnum: IntegerBackedEnum
    # not in the source, so the defaults apply
    missing: str = "default"
    missingFalse: bool = False
    missingZero: int = 0
    missingEmptyString: str = ""
    missingNull: Optional[str] = None


class EnvWithMissingValue:
    def __init__(self, missing: str):
        self.missing = missing


@dataclass
class EnvWithTypeMismatch:
    # PATH is not numeric, so this must fail
    path: int


class EnvWithDefaults:
    propDefault: str = "beep"
    basic: str

    def __init__(self, promotedDefault: str = "boop", basic: str = "narf"):
        self.promotedDefault = promotedDefault
        self.basic = basic


@dataclass
class EnvWithFactoryDefault:
    name: str = "app"
    tags: list = field(default_factory=list)


@dataclass
class EnvWithCollection:
    hostname: str
    hosts: list[str]


@dataclass
class EnvWithOrderedFailure:
    hostname: str
    path: int
    shlvl: int


@dataclass
class EnvWithPostInit:
    port: int

    def __post_init__(self):
        if self.port < 1:
            raise ValueError("port must be positive")


@dataclass(slots=True)
class SlottedEnvironment:
    hostname: str
    shlvl: int


class PlainWithClassVar:
    registry: ClassVar[dict] = {}
    hostname: str
    anything: Any = None


class PydanticEnvironment(BaseModel):
    hostname: str
    port: int = 8080
    debug: bool = False
    label: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
