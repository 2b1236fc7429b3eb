"""Record shapes for connection-string specification vectors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HostType(str, Enum):
    """Kinds of host entries a vector can describe."""

    NORMAL = "normal"
    HOSTNAME = "hostname"
    IPV4 = "ipv4"
    IP_LITERAL = "ip_literal"
    UNIX = "unix"


@dataclass(frozen=True, slots=True)
class StringValue:
    value: str


@dataclass(frozen=True, slots=True)
class IntegerValue:
    value: int


@dataclass(frozen=True, slots=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True, slots=True)
class MappingValue:
    """Nested option mapping; entry values are kept as their YAML text form."""

    entries: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class OtherValue:
    """Any other shape (null, list, float, nested structure), kept untouched."""

    raw: Any = None


OptionValue = StringValue | IntegerValue | BooleanValue | MappingValue | OtherValue

_TAGGED = (StringValue, IntegerValue, BooleanValue, MappingValue, OtherValue)


def decode_option(value: Any) -> OptionValue:
    """Tag a raw deserialized option value.

    Shapes without a dedicated tag become ``OtherValue``; whether that is
    acceptable depends on the option key and is decided by the emitter.
    """

    if isinstance(value, _TAGGED):
        return value
    # bool is a subclass of int, so it has to be checked first.
    if isinstance(value, bool):
        return BooleanValue(value)
    if isinstance(value, int):
        return IntegerValue(value)
    if isinstance(value, str):
        return StringValue(value)
    if isinstance(value, Mapping) and all(_is_scalar(item) for item in value.values()):
        return MappingValue({str(key): _scalar_text(item) for key, item in value.items()})
    return OtherValue(value)


def _is_scalar(value: Any) -> bool:
    return value is None or isinstance(value, (str, int, float, bool))


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class HostSpec(BaseModel):
    """One expected host entry.

    ``type`` is free text; only ``ip_literal`` changes how the host renders.
    """

    model_config = ConfigDict(frozen=True)

    type: str = HostType.HOSTNAME.value
    host: str = ""
    port: int | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _null_type(cls, value: Any) -> Any:
        return HostType.HOSTNAME.value if value is None else value

    @field_validator("host", mode="before")
    @classmethod
    def _null_host(cls, value: Any) -> Any:
        return "" if value is None else value

    def canonical(self) -> str:
        """Render the host the way the parser reports it, e.g. ``[::1]:27017``."""

        text = self.host
        if self.type == HostType.IP_LITERAL.value:
            text = f"[{text}]"
        if self.port:
            text += f":{self.port}"
        return text


class AuthSpec(BaseModel):
    """Expected credentials and auth database."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    username: str = ""
    password: str = ""
    database: str = Field(default="", alias="db")

    @field_validator("username", "password", "database", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class TestVector(BaseModel):
    """One connection string and the outcome the parser must produce."""

    # Keep pytest from collecting this model when it is imported into test modules.
    __test__ = False

    model_config = ConfigDict(frozen=True)

    description: str = ""
    uri: str = ""
    valid: bool
    warning: bool = False
    hosts: tuple[HostSpec, ...] = ()
    auth: AuthSpec | None = None
    options: dict[str, OptionValue] = Field(default_factory=dict)

    @field_validator("hosts", mode="before")
    @classmethod
    def _null_hosts(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("description", "uri", mode="before")
    @classmethod
    def _null_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("warning", mode="before")
    @classmethod
    def _null_warning(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("options", mode="before")
    @classmethod
    def _decode_options(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("options must be a mapping")
        return {str(key): decode_option(item) for key, item in value.items()}

    @property
    def effective_auth(self) -> AuthSpec:
        """Auth block to read the database from; zero-valued when absent."""

        return self.auth if self.auth is not None else AuthSpec()


class VectorFile(BaseModel):
    """Top-level shape of one specification file."""

    model_config = ConfigDict(frozen=True)

    tests: tuple[TestVector, ...] = ()

    @field_validator("tests", mode="before")
    @classmethod
    def _null_tests(cls, value: Any) -> Any:
        return () if value is None else value


__all__ = [
    "AuthSpec",
    "BooleanValue",
    "HostSpec",
    "HostType",
    "IntegerValue",
    "MappingValue",
    "OtherValue",
    "OptionValue",
    "StringValue",
    "TestVector",
    "VectorFile",
    "decode_option",
]
