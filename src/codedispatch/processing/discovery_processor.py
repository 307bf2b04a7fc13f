"""Source file discovery processor."""

import glob
import logging
from pathlib import Path

from codedispatch import paths
from codedispatch.models import ExecutionContext, TranslationJob

from .base import Processor

__all__ = [
    "DiscoveryProcessor",
    "_build_jobs",
    "_find_source_files",
]

logger = logging.getLogger(__name__)


def _find_source_files(directory: Path, patterns: list[str], exclude_dir: Path | None = None) -> list[Path]:
    """
    Find every file under `directory` matching one of `patterns`.

    A pattern starting with a dot is a suffix; any other pattern is an exact
    file name such as 'Dockerfile'.

    Patterns are searched in order and each pattern's hits are sorted, so the
    result is deterministic. A file matching several patterns is listed once.
    Files inside `exclude_dir` (the output tree) are left out.
    """
    seen: set[Path] = set()
    found: list[Path] = []
    for pattern in patterns:
        name_glob = f"*{glob.escape(pattern)}" if pattern.startswith(".") else glob.escape(pattern)
        for file_path in sorted(directory.rglob(name_glob)):
            if not file_path.is_file():
                continue
            resolved = file_path.resolve()
            if resolved in seen:
                continue
            if exclude_dir is not None and paths.is_within(resolved, exclude_dir):
                logger.debug("Ignoring %s inside the output directory.", file_path)
                continue
            seen.add(resolved)
            found.append(file_path)
    return found


def _build_jobs(files: list[Path], directory: Path, output_root: Path, extension: str) -> list[TranslationJob]:
    """Create one translation job per discovered file."""
    jobs = []
    for file_path in files:
        relative_path, target_path = paths.compute_target_path(file_path, directory, output_root, extension)
        jobs.append(TranslationJob(source_path=file_path, relative_path=relative_path, target_path=target_path))
    return jobs


class DiscoveryProcessor(Processor):
    """Phase 1: Find source files and derive their translation jobs."""

    def process(self, context: ExecutionContext) -> None:
        """Populate `context.jobs` from the input directory."""
        directory = context.options.directory
        logger.debug("Source patterns: %s", ", ".join(context.source_patterns))
        logger.debug("Target extension: %s", context.target_extension)

        files = _find_source_files(directory, context.source_patterns, exclude_dir=context.output_root)
        context.jobs = _build_jobs(files, directory, context.output_root, context.target_extension)

        if context.jobs:
            logger.info(
                "Found %d '%s' files. Output: '%s'",
                len(context.jobs),
                context.options.source_lang,
                context.output_root,
            )
        else:
            logger.info("No %s files found in '%s'.", context.options.source_lang, directory)
