"""Turn free-text vector descriptions into test function names."""

from __future__ import annotations

DISALLOWED_CHARACTERS = " '-,()"
REPLACEMENT_CHARACTERS = "_"
TEST_PREFIX = "test_parse_uri_"


def replace_characters(target: str, old: str, new: str) -> str:
    """Replace each character of ``old`` with the character at the same index in ``new``.

    Once ``new`` is exhausted its last character is reused for the remaining
    characters of ``old``.
    """

    if not new:
        raise ValueError("replacement alphabet must not be empty")
    j = 0
    for char in old:
        target = target.replace(char, new[j])
        if j < len(new) - 1:
            j += 1
    return target


def sanitize(
    description: str,
    *,
    disallowed: str = DISALLOWED_CHARACTERS,
    replacements: str = REPLACEMENT_CHARACTERS,
) -> str:
    return replace_characters(description, disallowed, replacements)


def function_name(description: str, *, prefix: str = TEST_PREFIX, **kwargs: str) -> str:
    """Return the test function name for a vector description."""

    return prefix + sanitize(description, **kwargs)


__all__ = [
    "DISALLOWED_CHARACTERS",
    "REPLACEMENT_CHARACTERS",
    "TEST_PREFIX",
    "function_name",
    "replace_characters",
    "sanitize",
]
