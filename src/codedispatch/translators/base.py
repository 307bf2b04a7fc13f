"""Defines the base class for all translators."""

from abc import ABC, abstractmethod

from codedispatch.config import ProviderSettings
from codedispatch.models import TranslationResult


class TranslatorError(Exception):
    """Raised when a backend request fails or returns an unusable response."""


class BaseTranslator(ABC):
    """Abstract base class for all translator implementations."""

    def __init__(self, settings: ProviderSettings | None = None) -> None:
        """
        Initialize the translator with backend settings.

        Args:
            settings: A Pydantic model containing backend configuration.

        """
        self.settings = settings or ProviderSettings()

    @abstractmethod
    def translate(self, model: str, prompt: str) -> TranslationResult:
        """
        Send one fully rendered prompt and return the backend's answer.

        Exactly one request is made per call; implementations never retry.

        Args:
            model: The model identifier to request.
            prompt: The rendered prompt text.

        Returns:
            The backend response.

        Raises:
            TranslatorError: On transport failure, timeout, non-success status
                or an unparseable response body.

        """
        raise NotImplementedError
