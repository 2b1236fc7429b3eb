"""Render assertion statements as Python source lines."""

from __future__ import annotations

from typing import Iterable

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

INDENT = "    "
PARSED = "uri"

_SIMPLE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_string(value: str) -> str:
    """Escape ``value`` for embedding in a double-quoted literal.

    Control characters, NUL included, become ``\\xNN`` escapes.
    """

    escaped: list[str] = []
    for char in value:
        simple = _SIMPLE_ESCAPES.get(char)
        if simple is not None:
            escaped.append(simple)
            continue
        code = ord(char)
        if code < 32 or code == 127:
            escaped.append(f"\\x{code:02x}")
        else:
            escaped.append(char)
    return "".join(escaped)


def string_literal(value: str) -> str:
    return f'"{escape_string(value)}"'


class StatementRenderer:
    """Turns statements into the body lines of a pytest function."""

    def __init__(self, parser_function: str = "parse_uri") -> None:
        self._parser = parser_function

    def render(self, statements: Iterable[Statement]) -> list[str]:
        lines: list[str] = []
        for statement in statements:
            lines.extend(self.render_one(statement))
        return lines

    def render_one(self, statement: Statement) -> list[str]:
        if isinstance(statement, ParseFails):
            return [
                "with pytest.raises(Exception):",
                f"{INDENT}{self._parser}({string_literal(statement.uri)})",
            ]
        if isinstance(statement, ParseSucceeds):
            uri = string_literal(statement.uri)
            return [
                "try:",
                f"{INDENT}{PARSED} = {self._parser}({uri})",
                "except Exception as exc:",
                f'{INDENT}pytest.fail("error parsing %r: %s" % ({uri}, exc))',
            ]
        if isinstance(statement, HostCountEquals):
            hosts = f"{PARSED}.hosts"
            return [
                f"assert len({hosts}) == {statement.count}, "
                f'"expected {statement.count} hosts, but had %d: %r" % (len({hosts}), {hosts})'
            ]
        if isinstance(statement, HostEquals):
            return [_equality(f"{PARSED}.hosts[{statement.index}]", string_literal(statement.expected))]
        if isinstance(statement, FieldEquals):
            return [_equality(f"{PARSED}.{statement.field}", string_literal(statement.expected))]
        if isinstance(statement, PropertyEquals):
            observed = f"{PARSED}.auth_mechanism_properties[{string_literal(statement.key)}]"
            return [_equality(observed, string_literal(statement.expected))]
        if isinstance(statement, PasswordNotSet):
            return [f'assert not {PARSED}.password_set, "expected password to not be set"']
        if isinstance(statement, DurationEquals):
            expected = f"timedelta(milliseconds={statement.milliseconds})"
            return [_equality(f"{PARSED}.{statement.field}", expected)]
        raise TypeError(f"unknown statement {statement!r}")


def _equality(observed: str, expected: str) -> str:
    message = '"expected %s to be %s, but got %r"'
    return (
        f"assert {observed} == {expected}, "
        f"{message} % ({string_literal(observed)}, {string_literal(expected)}, {observed})"
    )


__all__ = [
    "INDENT",
    "PARSED",
    "StatementRenderer",
    "escape_string",
    "string_literal",
]
