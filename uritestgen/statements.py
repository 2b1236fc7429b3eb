"""Assertion statements produced for one vector, independent of output syntax."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParseFails:
    """Parsing ``uri`` must raise."""

    uri: str


@dataclass(frozen=True, slots=True)
class ParseSucceeds:
    """Parsing ``uri`` must succeed; later statements read the parsed value."""

    uri: str


@dataclass(frozen=True, slots=True)
class HostCountEquals:
    count: int


@dataclass(frozen=True, slots=True)
class HostEquals:
    index: int
    expected: str


@dataclass(frozen=True, slots=True)
class FieldEquals:
    """String attribute of the parsed value equals ``expected``."""

    field: str
    expected: str


@dataclass(frozen=True, slots=True)
class PropertyEquals:
    """Auth mechanism property ``key`` equals ``expected``."""

    key: str
    expected: str


@dataclass(frozen=True, slots=True)
class PasswordNotSet:
    pass


@dataclass(frozen=True, slots=True)
class DurationEquals:
    field: str
    milliseconds: int


Statement = (
    ParseFails
    | ParseSucceeds
    | HostCountEquals
    | HostEquals
    | FieldEquals
    | PropertyEquals
    | PasswordNotSet
    | DurationEquals
)


__all__ = [
    "DurationEquals",
    "FieldEquals",
    "HostCountEquals",
    "HostEquals",
    "ParseFails",
    "ParseSucceeds",
    "PasswordNotSet",
    "PropertyEquals",
    "Statement",
]
