"""Command-line entry point for the test generator."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from . import __version__
from .config import GENERATOR_NAME, load_config
from .errors import GeneratorError
from .generator import run

LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uritestgen",
        description="Generate pytest tests from connection-string specification files.",
    )
    parser.add_argument("--config", type=Path, help="TOML file with generator settings")
    parser.add_argument("--tests-dir", type=Path, help="directory containing specification files")
    parser.add_argument("--output", type=Path, help="file to write the generated tests to")
    parser.add_argument("-v", "--verbose", action="store_true", help="log each file as it is loaded")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=f"{GENERATOR_NAME}: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run one compilation; return the process exit status."""

    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        config = load_config(args.config).with_overrides(
            tests_dir=args.tests_dir,
            output_path=args.output,
        )
        run(config)
    except GeneratorError as exc:
        LOG.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
