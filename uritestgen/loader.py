"""Load specification vectors from a directory of YAML files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import yaml
from pydantic import ValidationError

from .errors import VectorLoadError
from .models import TestVector, VectorFile

LOG = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".yml"


def spec_files(directory: Path, extension: str = DEFAULT_EXTENSION) -> list[Path]:
    """Return specification files in ``directory``, sorted by name.

    Subdirectories and entries with any other extension are skipped.
    """

    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise VectorLoadError(f"error reading directory {str(directory)!r}: {exc}") from exc
    return [entry for entry in entries if entry.suffix == extension and not entry.is_dir()]


def load_vector_file(path: Path) -> tuple[TestVector, ...]:
    """Deserialize one specification file into its vectors, in file order."""

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VectorLoadError(f"error reading file {str(path)!r}: {exc}") from exc
    try:
        raw = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise VectorLoadError(f"error unmarshalling file {str(path)!r}: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise VectorLoadError(f"error unmarshalling file {str(path)!r}: expected a mapping at the top level")
    try:
        container = VectorFile.model_validate(raw)
    except ValidationError as exc:
        raise VectorLoadError(f"error unmarshalling file {str(path)!r}: {exc}") from exc
    LOG.debug("Loaded specification file", extra={"path": str(path), "vectors": len(container.tests)})
    return container.tests


def iter_vectors(directory: Path, extension: str = DEFAULT_EXTENSION) -> Iterator[TestVector]:
    """Yield every vector under ``directory`` in listing, then in-file, order."""

    for path in spec_files(directory, extension):
        yield from load_vector_file(path)


def load_vectors(directory: Path, extension: str = DEFAULT_EXTENSION) -> list[TestVector]:
    """Eagerly load every vector; any failure aborts before output is built."""

    return list(iter_vectors(directory, extension))


__all__ = [
    "DEFAULT_EXTENSION",
    "iter_vectors",
    "load_vector_file",
    "load_vectors",
    "spec_files",
]
