"""Tests for the main CLI entry point."""

import json
import logging
import unittest
from argparse import Namespace
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from codedispatch.__main__ import _parse_args, _run, main
from codedispatch.config import DispatchOptions
from codedispatch.logging_utils import close_dispatch_log
from codedispatch.translators import MockTranslator, OllamaTranslator


class TestParseArgs(unittest.TestCase):
    """Test suite for CLI argument parsing."""

    def test_parse_args_defaults(self) -> None:
        """1. Defaults: Unset options are None so YAML values can fill them."""
        args = _parse_args(["--directory", "src"])
        assert isinstance(args, Namespace)
        assert args.directory == "src"
        assert args.source_lang is None
        assert args.target_lang is None
        assert args.overwrite is None
        assert args.dry_run is None
        assert args.verbose is None
        assert args.debug is False

    def test_parse_args_all_options(self) -> None:
        """2. Options: Parses every value option and flag."""
        args = _parse_args(
            [
                "-d", "in", "--source", "Kotlin", "--target", "Rust", "--model", "m", "--provider", "mock",
                "--api-url", "http://h/api/generate", "--output", "out", "--log", "run.log", "--prompt", "p.prompt",
                "--extensions", "ext.json", "--ctx", "2048", "--timeout", "90", "--overwrite", "--dry-run", "--verbose",
            ],
        )
        assert args.source_lang == "Kotlin"
        assert args.target_lang == "Rust"
        assert args.provider == "mock"
        assert args.output_dir == Path("out")
        assert args.log_file == Path("run.log")
        assert args.extensions_file == Path("ext.json")
        assert args.context == 2048
        assert args.timeout == 90.0
        assert args.overwrite is True
        assert args.dry_run is True
        assert args.verbose is True

    def test_parse_args_version_flag(self) -> None:
        """3. Version Flag: --version triggers SystemExit with code 0."""
        with pytest.raises(SystemExit) as exc_info:
            _parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_parse_args_invalid_value_exits_with_one(self) -> None:
        """4. Invalid Value: A malformed number exits with code 1."""
        with pytest.raises(SystemExit) as exc_info:
            _parse_args(["-d", "x", "--ctx", "lots"])
        assert exc_info.value.code == 1


@pytest.fixture
def cli_project(tmp_path: Path) -> Path:
    """Create a project with one Java file and a local extension table."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "Main.java").write_text("class Main {}", encoding="utf-8")
    return project


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    close_dispatch_log()
    root.handlers[:] = handlers
    root.setLevel(level)


def _base_args(project: Path, tmp_path: Path) -> list[str]:
    return ["-d", str(project), "--extensions", str(tmp_path / "extensions.json"), "--provider", "mock", "--target", "Python"]


def test_missing_directory_argument_returns_one(capsys: pytest.CaptureFixture[str]) -> None:
    """Verify a missing --directory prints usage and returns 1."""
    assert _run([]) == 1
    assert "usage:" in capsys.readouterr().err


def test_nonexistent_directory_returns_two(tmp_path: Path) -> None:
    """Verify a missing input directory returns 2."""
    assert _run(["-d", str(tmp_path / "nope")]) == 2


def test_missing_prompt_returns_two(cli_project: Path, tmp_path: Path) -> None:
    """Verify a missing explicit prompt file returns 2 and writes nothing."""
    assert _run([*_base_args(cli_project, tmp_path), "--prompt", "absent.prompt"]) == 2
    assert not (cli_project / "converted_Python").exists()


def test_invalid_extension_table_returns_two(cli_project: Path, tmp_path: Path) -> None:
    """Verify a malformed extension table aborts the run."""
    (tmp_path / "extensions.json").write_text("[]", encoding="utf-8")
    assert _run(_base_args(cli_project, tmp_path)) == 2


def test_unwritable_extension_table_returns_two(cli_project: Path, tmp_path: Path) -> None:
    """Verify an extension table path that cannot be written returns 2."""
    (tmp_path / "extensions.json").mkdir()
    assert _run(_base_args(cli_project, tmp_path)) == 2
    assert not (cli_project / "converted_Python").exists()


def test_invalid_option_value_returns_one(cli_project: Path, tmp_path: Path) -> None:
    """Verify an out-of-range option value returns 1."""
    assert _run([*_base_args(cli_project, tmp_path), "--ctx", "0"]) == 1


def test_successful_run_with_mock_provider(cli_project: Path, tmp_path: Path) -> None:
    """Verify a full CLI run translates, logs and creates the extension table."""
    assert _run(_base_args(cli_project, tmp_path)) == 0

    assert (cli_project / "converted_Python" / "Main.py").is_file()
    assert json.loads((tmp_path / "extensions.json").read_text(encoding="utf-8"))["java"] == [".java"]
    assert (cli_project / "Java-to-Python.prompt").is_file()
    log_text = (cli_project / "translation_dispatch.log").read_text(encoding="utf-8")
    assert " OPTIONS " in log_text
    assert " SUCCESS Main.java -> " in log_text


def test_yaml_defaults_are_applied_and_cli_wins(cli_project: Path, tmp_path: Path) -> None:
    """Verify codedispatch.yaml supplies defaults that explicit flags override."""
    (cli_project / "codedispatch.yaml").write_text(
        "target_lang: 'Kotlin'\noutput_dir: 'from_yaml'\ndry_run: true\n",
        encoding="utf-8",
    )
    captured: dict[str, DispatchOptions] = {}

    def fake_run_dispatch(options: DispatchOptions, *_: object) -> int:
        captured["options"] = options
        return 0

    with patch("codedispatch.__main__.run_dispatch", side_effect=fake_run_dispatch):
        assert _run(["-d", str(cli_project), "--extensions", str(tmp_path / "extensions.json"), "--target", "Python"]) == 0

    options = captured["options"]
    assert options.target_lang == "Python"
    assert options.output_dir == Path("from_yaml")
    assert options.dry_run is True
    assert options.overwrite is False


def test_invalid_yaml_returns_one(cli_project: Path, tmp_path: Path) -> None:
    """Verify unknown keys in the YAML defaults file are rejected."""
    (cli_project / "codedispatch.yaml").write_text("colour: 'blue'\n", encoding="utf-8")
    assert _run(_base_args(cli_project, tmp_path)) == 1


def test_missing_explicit_config_returns_two(cli_project: Path, tmp_path: Path) -> None:
    """Verify an explicit --config file that does not exist returns 2."""
    assert _run([*_base_args(cli_project, tmp_path), "--config", str(tmp_path / "missing.yaml")]) == 2


def test_provider_selects_translator(cli_project: Path, tmp_path: Path) -> None:
    """Verify --provider picks the translator class handed to the workflow."""
    with patch("codedispatch.__main__.run_dispatch", return_value=0) as mock_run:
        _run(_base_args(cli_project, tmp_path))
        assert isinstance(mock_run.call_args.args[2], MockTranslator)

        _run(["-d", str(cli_project), "--extensions", str(tmp_path / "extensions.json"), "--timeout", "5"])
        translator = mock_run.call_args.args[2]
        assert isinstance(translator, OllamaTranslator)
        assert translator.settings.timeout == 5.0


def test_unexpected_error_returns_three(cli_project: Path, tmp_path: Path) -> None:
    """Verify an unexpected exception is logged and mapped to exit code 3."""
    with patch("codedispatch.__main__.run_dispatch", side_effect=RuntimeError("boom")):
        assert _run(_base_args(cli_project, tmp_path)) == 3


@patch("codedispatch.__main__._run", return_value=2)
def test_main_exits_with_run_status(mock_run: MagicMock) -> None:
    """Verify main() exits the process with the status of the run."""
    with pytest.raises(SystemExit) as exc_info:
        main(["-d", "x"])
    assert exc_info.value.code == 2
    mock_run.assert_called_once_with(["-d", "x"])
