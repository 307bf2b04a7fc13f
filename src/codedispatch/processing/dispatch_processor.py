"""Per-file translation dispatch processor."""

import logging

from codedispatch import paths
from codedispatch.extraction import extract_code
from codedispatch.logging_utils import get_dispatch_logger
from codedispatch.models import ExecutionContext, JobStatus, TranslationJob
from codedispatch.prompts import render_prompt
from codedispatch.translators.base import TranslatorError

from .base import Processor
from .writeback import write_output

__all__ = ["DispatchProcessor"]

logger = logging.getLogger(__name__)


class DispatchProcessor(Processor):
    """
    Phase 2: Translate each job in turn and write its output.

    Jobs run strictly one after another. A failure in one job is logged and
    recorded, never propagated, so the rest of the batch still runs.
    """

    def process(self, context: ExecutionContext) -> None:
        """Dispatch every job of the context."""
        if not context.jobs:
            return
        if context.translator is None and not context.options.dry_run:
            msg = "A translator is required unless running in dry-run mode."
            raise ValueError(msg)

        for job in context.jobs:
            status, detail = self._dispatch_job(job, context)
            context.record(job, status, detail)

    def _dispatch_job(self, job: TranslationJob, context: ExecutionContext) -> tuple[JobStatus, str | None]:
        """Run the skip, dry-run, translate and write steps for one job."""
        dispatch_log = get_dispatch_logger()
        options = context.options
        source_display = str(job.relative_path)
        target_display = paths.display_path(job.target_path, options.directory)

        if job.target_path.exists() and not options.overwrite:
            dispatch_log.info("SKIP %s (already exists)", source_display)
            logger.info("[SKIP] %s (already exists)", source_display)
            return JobStatus.SKIPPED, "already exists"

        dispatch_log.info("PROCESSING %s -> %s", source_display, target_display)
        logger.info("[PROCESSING] %s -> %s", source_display, target_display)

        if options.dry_run:
            dispatch_log.info("DRYRUN %s -> %s", source_display, target_display)
            logger.warning("[DRY RUN] Would translate %s to %s", source_display, target_display)
            return JobStatus.DRY_RUN, None

        try:
            return self._translate_and_write(job, context, source_display, target_display)
        except TranslatorError as e:
            detail = str(e)
            logger.error("Error processing %s: %s", source_display, detail)  # noqa: TRY400
        except (OSError, ValueError) as e:
            detail = f"{type(e).__name__}: {e}"
            logger.error("Error processing %s: %s", source_display, detail)  # noqa: TRY400
        except Exception as e:
            detail = f"{type(e).__name__}: {e}"
            logger.exception("An unexpected error occurred while processing %s", source_display)

        dispatch_log.info("ERROR %s: %s", source_display, detail)
        return JobStatus.FAILED, detail

    def _translate_and_write(
        self,
        job: TranslationJob,
        context: ExecutionContext,
        source_display: str,
        target_display: str,
    ) -> tuple[JobStatus, str | None]:
        options = context.options
        dispatch_log = get_dispatch_logger()

        # Undecodable bytes become U+FFFD; a leading BOM is dropped.
        code = job.source_path.read_text(encoding="utf-8-sig", errors="replace")
        prompt = render_prompt(context.prompt_template, options.source_lang, options.target_lang, code)

        translator = context.translator
        if translator is None:
            msg = "No translator configured."
            raise ValueError(msg)
        result = translator.translate(options.model, prompt)

        if result.needs_more_context:
            answer = result.text.strip()
            logger.warning("Translation of '%s' needs more context: %s", source_display, answer)
            dispatch_log.info("INCOMPLETE %s (no output written)", source_display)
            return JobStatus.INCOMPLETE, answer

        if not result.is_complete:
            logger.warning(
                "Backend did not report '%s' as complete (done_reason=%s); writing the response as received.",
                source_display,
                result.done_reason,
            )

        write_output(job.target_path, extract_code(result.text))

        dispatch_log.info("SUCCESS %s -> %s", source_display, target_display)
        logger.info("[SUCCESS] %s -> %s", source_display, target_display)
        return JobStatus.TRANSLATED, None
