"""Generator configuration loading helpers."""

from __future__ import annotations

from pathlib import Path

import tomllib

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigError
from .loader import DEFAULT_EXTENSION
from .naming import DISALLOWED_CHARACTERS, REPLACEMENT_CHARACTERS, TEST_PREFIX

CONFIG_FILE = Path("uritestgen.toml")
GENERATOR_NAME = "spec_uri_test_generator"


class GeneratorConfig(BaseModel):
    """Settings owned by a single generator run."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = GENERATOR_NAME
    tests_dir: Path = Path("specifications/source/connection-string/tests")
    output_path: Path | None = None
    extension: str = DEFAULT_EXTENSION
    test_prefix: str = TEST_PREFIX
    disallowed_characters: str = DISALLOWED_CHARACTERS
    replacement_characters: str = REPLACEMENT_CHARACTERS
    parser_module: str = "mongo_uri"
    parser_function: str = "parse_uri"
    warn_unknown_options: bool = True

    @field_validator("replacement_characters")
    @classmethod
    def _non_empty_replacements(cls, value: str) -> str:
        if not value:
            raise ValueError("replacement_characters must not be empty")
        return value

    @field_validator("extension")
    @classmethod
    def _dotted_extension(cls, value: str) -> str:
        return value if value.startswith(".") else f".{value}"

    @property
    def resolved_output_path(self) -> Path:
        """Output file, derived from the generator name unless set explicitly."""

        if self.output_path is not None:
            return self.output_path
        return Path(f"{self.name.removesuffix('_generator')}.py")

    def with_overrides(self, **updates: object) -> GeneratorConfig:
        """Return a copy with the non-``None`` updates applied and validated."""

        values = self.model_dump()
        values.update({key: value for key, value in updates.items() if value is not None})
        try:
            return GeneratorConfig(**values)
        except ValidationError as exc:
            raise ConfigError(f"invalid configuration: {exc}") from exc


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load configuration from ``path``.

    Without an explicit path a missing default file means defaults; an explicit
    path must exist.
    """

    target = path or CONFIG_FILE
    try:
        with target.open("rb") as handle:
            raw = tomllib.load(handle)
    except FileNotFoundError as exc:
        if path is None:
            return GeneratorConfig()
        raise ConfigError(f"config file {str(target)!r} not found") from exc
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(f"error reading config file {str(target)!r}: {exc}") from exc

    try:
        return GeneratorConfig(**raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid config file {str(target)!r}: {exc}") from exc


__all__ = ["CONFIG_FILE", "GENERATOR_NAME", "GeneratorConfig", "load_config"]
