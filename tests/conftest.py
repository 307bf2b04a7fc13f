"""Shared fixtures for the CodeDispatch test suite."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from codedispatch.config import DispatchOptions
from codedispatch.extensions import DEFAULT_EXTENSIONS, ExtensionRegistry
from codedispatch.logging_utils import close_dispatch_log, setup_dispatch_log


@pytest.fixture
def registry() -> ExtensionRegistry:
    """Return a registry holding the built-in extension table."""
    return ExtensionRegistry(DEFAULT_EXTENSIONS)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a small Java source tree."""
    project = tmp_path / "project"
    (project / "src" / "util").mkdir(parents=True)
    (project / "src" / "A.java").write_text("class A {}\n", encoding="utf-8")
    (project / "src" / "util" / "B.java").write_text("class B {}\n", encoding="utf-8")
    (project / "README.md").write_text("# readme\n", encoding="utf-8")
    return project


@pytest.fixture
def dispatch_log(tmp_path: Path) -> Iterator[Path]:
    """Attach the dispatch log to a temporary file for the duration of a test."""
    log_path = tmp_path / "dispatch.log"
    setup_dispatch_log(log_path)
    yield log_path
    close_dispatch_log()


@pytest.fixture
def options(project_dir: Path, tmp_path: Path) -> DispatchOptions:
    """Return Java-to-Python options writing to a temporary output root."""
    return DispatchOptions(
        directory=project_dir,
        source_lang="Java",
        target_lang="Python",
        output_dir=tmp_path / "out",
        provider="mock",
    )
