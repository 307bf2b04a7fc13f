"""Defines the data models used throughout CodeDispatch."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Final

from codedispatch.config import DispatchOptions

if TYPE_CHECKING:
    from codedispatch.translators.base import BaseTranslator

INCOMPLETE_MARKERS: Final[tuple[str, ...]] = ("incomplete", "provide more details")


class JobStatus(str, Enum):
    """The outcome of a single translation job."""

    TRANSLATED = "translated"
    SKIPPED = "skipped"
    DRY_RUN = "dry_run"
    INCOMPLETE = "incomplete"
    FAILED = "failed"


@dataclass(frozen=True)
class TranslationJob:
    """One discovered source file and where its translation goes."""

    source_path: Path
    relative_path: Path
    target_path: Path


@dataclass(frozen=True)
class TranslationResult:
    """
    A backend response for one job.

    Attributes:
        text: The raw response text.
        is_complete: The backend's own completion flag.
        model: The model that produced the response, if reported.
        done_reason: The backend's stop reason, if reported.

    """

    text: str
    is_complete: bool = True
    model: str | None = None
    done_reason: str | None = None

    @property
    def needs_more_context(self) -> bool:
        """Check whether the backend answered that it needs more context instead of translating."""
        lowered = self.text.lower()
        return any(marker in lowered for marker in INCOMPLETE_MARKERS)


@dataclass
class JobRecord:
    """The recorded outcome of a processed job."""

    job: TranslationJob
    status: JobStatus
    detail: str | None = None


@dataclass
class ExecutionContext:
    """A data class to hold the context for a single dispatch run."""

    options: DispatchOptions
    prompt_template: str
    source_patterns: list[str]
    target_extension: str
    translator: "BaseTranslator | None" = None
    jobs: list[TranslationJob] = field(default_factory=list)
    records: list[JobRecord] = field(default_factory=list)

    @property
    def output_root(self) -> Path:
        """The output root of the run."""
        return self.options.output_path()

    def record(self, job: TranslationJob, status: JobStatus, detail: str | None = None) -> None:
        """Append the outcome of `job`."""
        self.records.append(JobRecord(job=job, status=status, detail=detail))

    def count(self, status: JobStatus) -> int:
        """Return how many jobs ended with `status`."""
        return sum(1 for record in self.records if record.status == status)
