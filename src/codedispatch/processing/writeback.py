"""Output file writing."""

import logging
from pathlib import Path

from codedispatch import paths

__all__ = ["write_output"]

logger = logging.getLogger(__name__)


def write_output(target_path: Path, content: str) -> None:
    """
    Write `content` as the full content of `target_path`.

    Missing parent directories are created. Newlines are written exactly as
    the backend returned them.
    """
    if target_path.parent.is_file():
        msg = f"Output directory path {target_path.parent} exists as a file."
        raise FileExistsError(msg)
    paths.ensure_dir_exists(target_path.parent)
    target_path.write_text(content, encoding="utf-8", newline="")
    logger.debug("Wrote %d characters to %s", len(content), target_path)
