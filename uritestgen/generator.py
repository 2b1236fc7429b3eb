"""Assemble the generated pytest module and write it to disk."""

from __future__ import annotations

import ast
import io
import logging
import os
from pathlib import Path
from typing import Iterable

from .config import GeneratorConfig
from .emitter import AssertionEmitter
from .errors import OutputError
from .loader import iter_vectors
from .models import TestVector
from .naming import function_name
from .render import INDENT, StatementRenderer

LOG = logging.getLogger(__name__)


def format_source(source: str) -> str:
    """Re-emit ``source`` in canonical layout.

    Consecutive imports stay together; every other top-level statement is
    separated by two blank lines. Raises ``SyntaxError`` for invalid input.
    """

    module = ast.parse(source)
    blocks: list[list[str]] = []
    previous_import = False
    for node in module.body:
        is_import = isinstance(node, (ast.Import, ast.ImportFrom))
        text = ast.unparse(node)
        if blocks and is_import and previous_import:
            blocks[-1].append(text)
        else:
            blocks.append([text])
        previous_import = is_import
    return "\n\n\n".join("\n".join(block) for block in blocks) + "\n"


class Generator:
    """Holds the output buffer for one compilation run."""

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        emitter: AssertionEmitter | None = None,
        renderer: StatementRenderer | None = None,
    ) -> None:
        self._config = config or GeneratorConfig()
        self._emitter = emitter or AssertionEmitter(warn_unknown_options=self._config.warn_unknown_options)
        self._renderer = renderer or StatementRenderer(self._config.parser_function)
        self._buf = io.StringIO()
        self._vector_count = 0
        self._names: set[str] = set()

    @property
    def vector_count(self) -> int:
        return self._vector_count

    def generate(self) -> str:
        """Compile every vector under the configured directory into module source."""

        vectors = iter_vectors(self._config.tests_dir, self._config.extension)
        return self.generate_from(vectors)

    def generate_from(self, vectors: Iterable[TestVector]) -> str:
        """Build a fresh unit from ``vectors``, discarding any earlier output."""

        self._buf = io.StringIO()
        self._vector_count = 0
        self._names = set()
        self._preamble()
        for vector in vectors:
            self.add_vector(vector)
        return self.format()

    def add_vector(self, vector: TestVector) -> None:
        config = self._config
        name = function_name(
            vector.description,
            prefix=config.test_prefix,
            disallowed=config.disallowed_characters,
            replacements=config.replacement_characters,
        )
        if name in self._names:
            # The later def replaces the earlier one in the generated module.
            LOG.warning(
                "Duplicate test name %s for %r",
                name,
                vector.description,
                extra={"test": name, "vector": vector.description},
            )
        self._names.add(name)
        statements = self._emitter.emit(vector)
        self._println()
        self._println()
        self._println(f"def {name}():")
        for line in self._renderer.render(statements):
            self._println(INDENT + line)
        self._vector_count += 1

    def header(self) -> str:
        return f'# Code generated by "{self._config.name}"; DO NOT EDIT.\n\n'

    def format(self) -> str:
        """Return the formatted buffer, or the raw buffer if it does not parse."""

        source = self._buf.getvalue()
        try:
            body = format_source(source)
        except SyntaxError as exc:
            # Should never happen, but can arise while developing the emitter.
            LOG.warning("internal error: invalid Python generated: %s", exc)
            LOG.warning("import the generated module to analyze the error")
            body = source
        return self.header() + body

    def _preamble(self) -> None:
        config = self._config
        self._println("from datetime import timedelta")
        self._println()
        self._println("import pytest")
        self._println()
        self._println(f"from {config.parser_module} import {config.parser_function}")

    def _println(self, text: str = "") -> None:
        self._buf.write(text + "\n")


def write_output(path: Path, source: str) -> None:
    """Replace ``path`` with ``source`` in a single move."""

    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(source, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError as exc:
        raise OutputError(f"writing output {str(path)!r}: {exc}") from exc


def run(config: GeneratorConfig) -> Path:
    """Generate the unit for ``config`` and write it; return the output path."""

    generator = Generator(config)
    source = generator.generate()
    output = config.resolved_output_path
    write_output(output, source)
    LOG.info("Wrote %d tests to %s", generator.vector_count, output)
    return output


__all__ = ["Generator", "format_source", "run", "write_output"]
