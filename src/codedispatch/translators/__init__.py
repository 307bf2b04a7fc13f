"""
Translation backend implementations.

Each translator adheres to the `BaseTranslator` interface and is selected by
provider name from the user's options.
"""

from .base import BaseTranslator, TranslatorError
from .mock_translator import MockTranslator, MockTranslatorError
from .ollama_translator import OllamaTranslator

# Central mapping from provider name to translator class.
TRANSLATOR_MAPPING: dict[str, type[BaseTranslator]] = {
    "ollama": OllamaTranslator,
    "mock": MockTranslator,
}

__all__ = [
    "TRANSLATOR_MAPPING",
    "BaseTranslator",
    "MockTranslator",
    "MockTranslatorError",
    "OllamaTranslator",
    "TranslatorError",
]
