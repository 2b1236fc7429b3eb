"""Tests for the command-line entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from uritestgen.cli import build_parser, main

SPEC = """
tests:
    -
        description: "Valid host, no auth"
        uri: "mongodb://localhost"
        valid: true
        hosts:
            -
                type: "hostname"
                host: "localhost"
                port: ~
        auth: ~
        options: ~
"""


def test_main_writes_generated_module(tmp_path: Path) -> None:
    tests_dir = tmp_path / "specs"
    tests_dir.mkdir()
    (tests_dir / "valid.yml").write_text(SPEC)
    output = tmp_path / "out" / "spec_uri_test.py"

    status = main(["--tests-dir", str(tests_dir), "--output", str(output)])

    assert status == 0
    content = output.read_text()
    assert content.startswith('# Code generated by "spec_uri_test_generator"; DO NOT EDIT.')
    assert "def test_parse_uri_Valid_host__no_auth():" in content
    assert "uri.hosts[0] == 'localhost'" in content


def test_main_reads_config_file(tmp_path: Path) -> None:
    tests_dir = tmp_path / "specs"
    tests_dir.mkdir()
    (tests_dir / "valid.yml").write_text(SPEC)
    output = tmp_path / "generated.py"
    config_path = tmp_path / "uritestgen.toml"
    config_path.write_text(
        f'tests_dir = "{tests_dir.as_posix()}"\n'
        f'output_path = "{output.as_posix()}"\n'
        'parser_module = "driver.uri"\n'
        'test_prefix = "test_uri_"\n'
    )

    status = main(["--config", str(config_path)])

    assert status == 0
    content = output.read_text()
    assert "from driver.uri import parse_uri" in content
    assert "def test_uri_Valid_host__no_auth():" in content


def test_main_fails_on_missing_directory(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    output = tmp_path / "spec_uri_test.py"

    with caplog.at_level(logging.ERROR, logger="uritestgen.cli"):
        status = main(["--tests-dir", str(tmp_path / "missing"), "--output", str(output)])

    assert status == 1
    assert not output.exists()
    assert any("error reading directory" in record.getMessage() for record in caplog.records)


def test_main_fails_on_malformed_spec(tmp_path: Path) -> None:
    (tmp_path / "broken.yml").write_text("tests:\n    - description: [\n")

    status = main(["--tests-dir", str(tmp_path), "--output", str(tmp_path / "out.py")])

    assert status == 1


def test_parser_defaults_leave_config_untouched() -> None:
    args = build_parser().parse_args([])

    assert args.config is None
    assert args.tests_dir is None
    assert args.output is None
    assert args.verbose is False


def test_version_flag_prints_package_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--version"])

    assert "uritestgen 0.1.0" in capsys.readouterr().out
