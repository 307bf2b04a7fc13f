"""Manages the overall CodeDispatch translation workflow."""

import logging
from collections.abc import Sequence
from typing import Final

from .config import DispatchOptions
from .extensions import ExtensionRegistry
from .logging_utils import get_dispatch_logger
from .models import ExecutionContext
from .processing import DiscoveryProcessor, DispatchProcessor, Processor
from .prompts import MissingPromptFileError, PromptResolver, PromptTemplateError
from .reporters import DryRunReporter, SummaryReporter
from .translators.base import BaseTranslator

logger = logging.getLogger(__name__)

EXIT_OK: Final[int] = 0
EXIT_INVALID_ARGUMENTS: Final[int] = 1
EXIT_MISSING_INPUT: Final[int] = 2
EXIT_UNEXPECTED_ERROR: Final[int] = 3


class DirectoryNotFoundError(FileNotFoundError):
    """Raised when the input directory of a run does not exist."""


def _prepare_context(
    options: DispatchOptions,
    registry: ExtensionRegistry,
    translator: BaseTranslator | None,
    prompt_resolver: PromptResolver,
) -> ExecutionContext:
    """
    Run the pre-flight steps and build the execution context.

    Raises:
        DirectoryNotFoundError: If the input directory does not exist.
        MissingPromptFileError: If an explicit prompt file does not exist.
        PromptTemplateError: If the resolved template is invalid.

    """
    directory = options.directory
    if not directory.is_dir():
        msg = f"Directory '{directory}' does not exist."
        raise DirectoryNotFoundError(msg)

    get_dispatch_logger().info("OPTIONS %s", options.summary())
    logger.debug("Run options: %s", options.model_dump_json(indent=2))

    prompt_template = prompt_resolver.resolve(
        directory,
        options.prompt_file,
        options.source_lang,
        options.target_lang,
        persist=not options.dry_run,
    )

    return ExecutionContext(
        options=options,
        prompt_template=prompt_template,
        source_patterns=registry.extensions_for(options.source_lang),
        target_extension=registry.target_extension(options.target_lang),
        translator=translator,
    )


def run_dispatch(
    options: DispatchOptions,
    registry: ExtensionRegistry,
    translator: BaseTranslator | None,
    prompt_resolver: PromptResolver | None = None,
) -> int:
    """
    Run a full dispatch over the input directory.

    The extension table and prompt template are resolved once; every
    discovered file is then translated sequentially. Per-file failures are
    contained, so a completed run returns 0 regardless of individual results.

    Args:
        options: The validated run options.
        registry: The loaded extension registry.
        translator: The backend client; may be None for a dry run.
        prompt_resolver: The prompt resolver to use (a default one if None).

    Returns:
        The exit status: 0 on a completed run, 2 when pre-flight checks fail.

    """
    try:
        context = _prepare_context(options, registry, translator, prompt_resolver or PromptResolver())
    except DirectoryNotFoundError as e:
        logger.error("%s", e)  # noqa: TRY400
        return EXIT_MISSING_INPUT
    except (MissingPromptFileError, PromptTemplateError) as e:
        logger.error("%s", e)  # noqa: TRY400
        return EXIT_MISSING_INPUT

    pipeline: Sequence[Processor] = [
        DiscoveryProcessor(),
        DispatchProcessor(),
    ]
    for processor in pipeline:
        logger.debug("Executing processor: %s", processor.__class__.__name__)
        processor.process(context)

    if context.jobs:
        reporter = DryRunReporter() if options.dry_run else SummaryReporter()
        reporter.generate(context)

    logger.info("All files processed.")
    return EXIT_OK
