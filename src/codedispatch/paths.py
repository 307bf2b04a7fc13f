"""Provides the fixed file names and path computations used by CodeDispatch."""
# src/codedispatch/paths.py

import os
from pathlib import Path
from typing import Final

EXTENSIONS_FILE_NAME: Final[str] = "extensions.json"
LOG_FILE_NAME: Final[str] = "translation_dispatch.log"
CONFIG_FILE_NAMES: Final[list[str]] = ["codedispatch.yaml", "codedispatch.yml"]
PROMPT_SUFFIX: Final[str] = ".prompt"


def get_extensions_file() -> Path:
    """Return the default location of the persisted extension table (the working directory)."""
    return Path.cwd() / EXTENSIONS_FILE_NAME


def get_default_output_dir(directory: Path, target_lang: str) -> Path:
    """Return the default output root for a run: '<directory>/converted_<target_lang>'."""
    return directory / f"converted_{target_lang}"


def get_default_log_path(directory: Path) -> Path:
    """Return the default dispatch log path inside the input directory."""
    return directory / LOG_FILE_NAME


def find_config_file(directory: Path) -> Path | None:
    """Return the first optional YAML defaults file found in `directory`, if any."""
    for name in CONFIG_FILE_NAMES:
        path = directory / name
        if path.is_file():
            return path
    return None


def change_extension(relative_path: Path, extension: str) -> Path:
    """
    Swap the extension of `relative_path` for `extension`.

    Suffix patterns ('.py') replace the existing suffix. Exact filename patterns
    ('Dockerfile') are appended as a new suffix, so 'build.gradle' becomes
    'build.Dockerfile'.
    """
    if not extension.startswith("."):
        extension = f".{extension}"
    return relative_path.with_suffix(extension)


def compute_target_path(source_file: Path, directory: Path, output_root: Path, extension: str) -> tuple[Path, Path]:
    """
    Compute the relative source path and the mirrored target path for a file.

    Args:
        source_file: The discovered source file.
        directory: The input root the file was discovered under.
        output_root: The output root mirroring the input tree.
        extension: The target extension or exact filename pattern.

    Returns:
        A tuple of (relative_path, target_path).

    """
    relative_path = source_file.relative_to(directory)
    return relative_path, output_root / change_extension(relative_path, extension)


def display_path(path: Path, start: Path) -> str:
    """Return `path` relative to `start` for log lines, falling back to the absolute path."""
    try:
        return os.path.relpath(path, start)
    except ValueError:
        # Different drives on Windows
        return str(path)


def is_within(path: Path, parent: Path) -> bool:
    """Check whether `path` lies inside `parent` once both are resolved."""
    try:
        path.resolve().relative_to(parent.resolve())
    except ValueError:
        return False
    return True


def ensure_dir_exists(path: Path) -> None:
    """Ensure a directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
