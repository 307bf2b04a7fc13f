"""A mock translator for testing purposes."""

import logging

from codedispatch.config import ProviderSettings
from codedispatch.models import TranslationResult

from .base import BaseTranslator, TranslatorError

logger = logging.getLogger(__name__)


class MockTranslatorError(TranslatorError):
    """Custom exception for mock translator errors."""


class MockTranslator(BaseTranslator):
    """
    A mock translator that answers without contacting any backend.

    By default it echoes the prompt inside a fenced block prefixed with
    '[MOCK]'. It can also return a fixed response or raise, for exercising
    the pipeline's handling of incomplete answers and failures.
    """

    def __init__(
        self,
        settings: ProviderSettings | None = None,
        *,
        return_error: bool = False,
        response_text: str | None = None,
    ) -> None:
        """
        Initialize the Mock Translator.

        Args:
            settings: Backend settings (ignored).
            return_error: If True, the translate method will raise an exception.
            response_text: If given, returned verbatim instead of the echo.

        """
        super().__init__(settings)
        self.return_error = return_error
        self.response_text = response_text
        self.calls: list[tuple[str, str]] = []

    def translate(self, model: str, prompt: str) -> TranslationResult:
        """
        Return a canned response for `prompt`.

        Raises:
            MockTranslatorError: If `return_error` was set to True during initialization.

        """
        self.calls.append((model, prompt))

        if self.return_error:
            msg = "Mock translator was configured to fail."
            raise MockTranslatorError(msg)

        text = self.response_text if self.response_text is not None else f"```\n[MOCK] {prompt}\n```"
        logger.debug("MockTranslator answered %d prompt characters for model '%s'.", len(prompt), model)
        return TranslationResult(text=text, model=model)
