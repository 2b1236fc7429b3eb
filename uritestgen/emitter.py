"""Build the ordered assertion statements for a single vector."""

from __future__ import annotations

import logging
from typing import Mapping

from .errors import EmitError
from .models import IntegerValue, MappingValue, OptionValue, StringValue, TestVector
from .statements import (
    DurationEquals,
    FieldEquals,
    HostCountEquals,
    HostEquals,
    ParseFails,
    ParseSucceeds,
    PasswordNotSet,
    PropertyEquals,
    Statement,
)

LOG = logging.getLogger(__name__)

# Attribute names on the parsed value exposed by the parser under test.
USERNAME = "username"
PASSWORD = "password"
DATABASE = "database"
AUTH_MECHANISM = "auth_mechanism"
REPLICA_SET = "replica_set"
WTIMEOUT = "wtimeout"

OPTION_AUTH_MECHANISM = "authmechanism"
OPTION_AUTH_MECHANISM_PROPERTIES = "authmechanismproperties"
OPTION_REPLICA_SET = "replicaset"
OPTION_WTIMEOUT_MS = "wtimeoutms"

KNOWN_OPTIONS = frozenset(
    {
        OPTION_AUTH_MECHANISM,
        OPTION_AUTH_MECHANISM_PROPERTIES,
        OPTION_REPLICA_SET,
        OPTION_WTIMEOUT_MS,
    }
)


class AssertionEmitter:
    """Walks a vector and returns the statements asserting its outcome."""

    def __init__(self, *, warn_unknown_options: bool = True) -> None:
        self._warn_unknown_options = warn_unknown_options

    def emit(self, vector: TestVector) -> list[Statement]:
        if not vector.valid:
            return [ParseFails(vector.uri)]

        statements: list[Statement] = [ParseSucceeds(vector.uri)]
        statements.extend(self._hosts(vector))
        statements.extend(self._credentials(vector))
        statements.append(FieldEquals(DATABASE, vector.effective_auth.database))
        if vector.options:
            statements.extend(self._options(vector))
        return statements

    def _hosts(self, vector: TestVector) -> list[Statement]:
        statements: list[Statement] = [HostCountEquals(len(vector.hosts))]
        for index, host in enumerate(vector.hosts):
            statements.append(HostEquals(index, host.canonical()))
        return statements

    def _credentials(self, vector: TestVector) -> list[Statement]:
        if vector.auth is None:
            return [FieldEquals(USERNAME, ""), PasswordNotSet()]
        return [
            FieldEquals(USERNAME, vector.auth.username),
            FieldEquals(PASSWORD, vector.auth.password),
        ]

    def _options(self, vector: TestVector) -> list[Statement]:
        options = vector.options
        statements: list[Statement] = [
            FieldEquals(AUTH_MECHANISM, _string_option(vector, options, OPTION_AUTH_MECHANISM)),
        ]
        properties = options.get(OPTION_AUTH_MECHANISM_PROPERTIES)
        if properties is not None:
            if not isinstance(properties, MappingValue):
                raise _wrong_shape(vector, OPTION_AUTH_MECHANISM_PROPERTIES, "a mapping", properties)
            for key, value in properties.entries.items():
                statements.append(PropertyEquals(key, value))
        statements.append(FieldEquals(REPLICA_SET, _string_option(vector, options, OPTION_REPLICA_SET)))
        wtimeout = options.get(OPTION_WTIMEOUT_MS)
        if wtimeout is not None:
            if not isinstance(wtimeout, IntegerValue):
                raise _wrong_shape(vector, OPTION_WTIMEOUT_MS, "an integer", wtimeout)
            statements.append(DurationEquals(WTIMEOUT, wtimeout.value))

        if self._warn_unknown_options:
            for key in sorted(set(options) - KNOWN_OPTIONS):
                LOG.warning(
                    "Ignoring unsupported option %r in %r",
                    key,
                    vector.description,
                    extra={"option": key, "vector": vector.description},
                )
        return statements


def emit_assertions(vector: TestVector, *, warn_unknown_options: bool = True) -> list[Statement]:
    """Convenience wrapper around :class:`AssertionEmitter`."""

    return AssertionEmitter(warn_unknown_options=warn_unknown_options).emit(vector)


def _string_option(vector: TestVector, options: Mapping[str, OptionValue], key: str) -> str:
    value = options.get(key)
    if value is None:
        return ""
    if not isinstance(value, StringValue):
        raise _wrong_shape(vector, key, "a string", value)
    return value.value


def _wrong_shape(vector: TestVector, key: str, expected: str, value: OptionValue) -> EmitError:
    return EmitError(
        f"option {key!r} in {vector.description!r} must be {expected}, got {type(value).__name__}"
    )


__all__ = [
    "AssertionEmitter",
    "KNOWN_OPTIONS",
    "emit_assertions",
]
