"""A reporter for generating concise execution summaries."""

import logging

from codedispatch.models import ExecutionContext, JobStatus

logger = logging.getLogger(__name__)


class SummaryReporter:
    """Generates a concise summary of a dispatch run and logs it."""

    def generate(self, context: ExecutionContext) -> None:
        """Log a summary of the execution to the console."""
        logger.info(
            "--- Dispatch Summary: %s -> %s ---",
            context.options.source_lang,
            context.options.target_lang,
        )
        logger.info("Total files processed: %d", len(context.records))
        logger.info("  - Translated: %d", context.count(JobStatus.TRANSLATED))
        logger.info("  - Skipped (already exists): %d", context.count(JobStatus.SKIPPED))
        logger.info("  - Incomplete (no output written): %d", context.count(JobStatus.INCOMPLETE))
        logger.info("  - Failed: %d", context.count(JobStatus.FAILED))

        failed = [record for record in context.records if record.status == JobStatus.FAILED]
        for record in failed:
            logger.info("    %s: %s", record.job.relative_path, record.detail)

        logger.info("-------------------------------------------------")
