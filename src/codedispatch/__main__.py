"""Main entry point for the CodeDispatch command-line interface."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

from . import __version__, paths
from .config import (
    DEFAULT_API_URL,
    DEFAULT_CONTEXT,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    DEFAULT_SOURCE_LANG,
    DEFAULT_TARGET_LANG,
    DEFAULT_TIMEOUT_SECONDS,
    DispatchOptions,
    build_options,
    load_config,
)
from .extensions import ExtensionRegistry, ExtensionTableError
from .logging_utils import close_dispatch_log, setup_dispatch_log, setup_logging
from .translators import TRANSLATOR_MAPPING, BaseTranslator
from .workflow import (
    EXIT_INVALID_ARGUMENTS,
    EXIT_MISSING_INPUT,
    EXIT_UNEXPECTED_ERROR,
    run_dispatch,
)

logger = logging.getLogger(__name__)

# Argparse destinations that map one-to-one onto DispatchOptions fields.
_OPTION_FIELDS = (
    "directory",
    "source_lang",
    "target_lang",
    "model",
    "provider",
    "api_url",
    "output_dir",
    "prompt_file",
    "log_file",
    "extensions_file",
    "context",
    "timeout",
    "overwrite",
    "dry_run",
    "verbose",
)


class _ArgumentParser(argparse.ArgumentParser):
    """An argument parser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_INVALID_ARGUMENTS, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CodeDispatch CLI."""
    parser = _ArgumentParser(
        prog="codedispatch",
        description="Translate every source file of one language in a directory tree through a text-generation backend.",
        epilog=f"Language extensions are configured in '{paths.EXTENSIONS_FILE_NAME}'.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"CodeDispatch {__version__}",
        help="Show the version number and exit.",
    )
    parser.add_argument("-d", "--directory", help="Source directory (required).")
    parser.add_argument("--source", dest="source_lang", help=f"Source language (default: {DEFAULT_SOURCE_LANG}).")
    parser.add_argument("--target", dest="target_lang", help=f"Target language (default: {DEFAULT_TARGET_LANG}).")
    parser.add_argument("--model", help=f"Model name (default: {DEFAULT_MODEL}).")
    parser.add_argument(
        "--provider",
        choices=sorted(TRANSLATOR_MAPPING),
        help=f"Translation backend (default: {DEFAULT_PROVIDER}).",
    )
    parser.add_argument("--api-url", dest="api_url", help=f"API endpoint (default: {DEFAULT_API_URL}).")
    parser.add_argument("--output", dest="output_dir", type=Path, help="Output directory (default: <directory>/converted_<target>).")
    parser.add_argument("--log", dest="log_file", type=Path, help=f"Log file path (default: <directory>/{paths.LOG_FILE_NAME}).")
    parser.add_argument("--prompt", dest="prompt_file", help="Custom prompt file, relative to the source directory unless absolute.")
    parser.add_argument("--extensions", dest="extensions_file", type=Path, help=f"Extension table (default: ./{paths.EXTENSIONS_FILE_NAME}).")
    parser.add_argument("--config", type=Path, help=f"YAML file with option defaults (default: <directory>/{paths.CONFIG_FILE_NAMES[0]} if present).")
    parser.add_argument("--ctx", dest="context", type=int, help=f"Context size (default: {DEFAULT_CONTEXT}).")
    parser.add_argument("--timeout", type=float, help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_SECONDS:g}).")
    # Flags default to None so an absent flag does not override the YAML file.
    parser.add_argument("--overwrite", action="store_true", default=None, help="Overwrite existing output files.")
    parser.add_argument("--dry-run", dest="dry_run", action="store_true", default=None, help="Show what would be done.")
    parser.add_argument("--verbose", action="store_true", default=None, help="Mirror dispatch log entries to the console.")
    parser.add_argument("--debug", action="store_true", help="Enable debug level logging.")
    return parser


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the CodeDispatch CLI.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    return _build_parser().parse_args(argv)


def _load_file_values(args: argparse.Namespace, directory: Path) -> dict[str, Any]:
    """
    Load option defaults from the explicit or discovered YAML file.

    Raises:
        FileNotFoundError: If an explicit --config file does not exist.
        ValueError: If the file is invalid.

    """
    config_path = args.config or paths.find_config_file(directory)
    if config_path is None:
        return {}
    logger.info("Loading configuration from: %s", config_path)
    return load_config(config_path)


def _create_translator(options: DispatchOptions) -> BaseTranslator:
    """Instantiate the translator selected by `options.provider`."""
    translator_class = TRANSLATOR_MAPPING[options.provider]
    return translator_class(options.provider_settings())


def _run(argv: list[str] | None = None) -> int:
    """
    Execute the CLI and return the process exit code.

    Exit codes:
        0: The run completed (individual files may still have failed).
        1: A required argument is missing or an option value is invalid.
        2: The input directory, an explicit prompt or config file is missing,
           or the prompt template or extension table is invalid.
        3: An unexpected error occurred.
    """
    args = _parse_args(argv)

    if not args.directory:
        _build_parser().print_help(sys.stderr)
        return EXIT_INVALID_ARGUMENTS

    directory = Path(args.directory)
    setup_logging(__version__, debug=args.debug, debug_log_dir=directory if directory.is_dir() else None)

    if not directory.is_dir():
        logger.error("Directory '%s' does not exist.", directory)
        return EXIT_MISSING_INPUT

    try:
        file_values = _load_file_values(args, directory)
        options = build_options({name: getattr(args, name) for name in _OPTION_FIELDS}, file_values)
    except FileNotFoundError:
        logger.exception("Could not find the configuration file.")
        return EXIT_MISSING_INPUT
    except ValueError as e:
        logger.error("%s", e)  # noqa: TRY400
        return EXIT_INVALID_ARGUMENTS

    if options.provider not in TRANSLATOR_MAPPING:
        logger.error("Unknown provider '%s'. Available: %s", options.provider, ", ".join(sorted(TRANSLATOR_MAPPING)))
        return EXIT_INVALID_ARGUMENTS

    try:
        registry = ExtensionRegistry.load(options.extensions_path())
    except ExtensionTableError as e:
        logger.error("%s", e)  # noqa: TRY400
        return EXIT_MISSING_INPUT

    try:
        setup_dispatch_log(options.log_path(), verbose=options.verbose)
        return run_dispatch(options, registry, _create_translator(options))
    except Exception:
        logger.exception("An unexpected error occurred")
        return EXIT_UNEXPECTED_ERROR
    finally:
        close_dispatch_log()


def main(argv: list[str] | None = None) -> None:
    """Run the CodeDispatch command-line interface and exit with its status."""
    sys.exit(_run(argv))


if __name__ == "__main__":
    main()
