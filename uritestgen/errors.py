"""Error types raised by the generator pipeline."""

from __future__ import annotations


class GeneratorError(RuntimeError):
    """Base error for fatal generation failures."""


class ConfigError(GeneratorError):
    """Raised when the generator configuration cannot be loaded."""


class VectorLoadError(GeneratorError):
    """Raised when a specification directory or file cannot be loaded."""


class EmitError(GeneratorError):
    """Raised when a vector carries an option value of the wrong shape."""


class OutputError(GeneratorError):
    """Raised when the generated unit cannot be written."""


__all__ = [
    "ConfigError",
    "EmitError",
    "GeneratorError",
    "OutputError",
    "VectorLoadError",
]
