"""A reporter for summarizing what a dry run would have done."""

import logging

from codedispatch.models import ExecutionContext, JobStatus

logger = logging.getLogger(__name__)


class DryRunReporter:
    """Logs the translation plan of a dry run without touching the filesystem."""

    def generate(self, context: ExecutionContext) -> None:
        """
        Log the planned translations and skips.

        Args:
            context: The execution context containing all run information.

        """
        planned = [record for record in context.records if record.status == JobStatus.DRY_RUN]
        skipped = context.count(JobStatus.SKIPPED)

        logger.info("--- Dry Run Plan: %s -> %s ---", context.options.source_lang, context.options.target_lang)
        logger.info("Model: %s", context.options.model)
        logger.info("Output directory: %s", context.output_root)
        logger.info("Files that would be translated: %d", len(planned))
        for record in planned:
            logger.info("  - %s -> %s", record.job.relative_path, record.job.target_path)
        logger.info("Files that would be skipped (already exist): %d", skipped)
        logger.info("-------------------------------------------------")
