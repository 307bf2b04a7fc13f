"""A translator that sends prompts to an Ollama '/api/generate' endpoint."""

import logging

import requests
from pydantic import BaseModel, ValidationError

from codedispatch.models import TranslationResult

from .base import BaseTranslator, TranslatorError

logger = logging.getLogger(__name__)


class GenerateResponse(BaseModel):
    """Defines the expected JSON structure of a non-streamed generate response."""

    model: str | None = None
    created_at: str | None = None
    response: str
    done: bool = True
    done_reason: str | None = None


class OllamaTranslator(BaseTranslator):
    """
    A translator for models served through the Ollama HTTP API.

    Each call issues a single blocking POST with streaming disabled and the
    configured context size. The request timeout comes from the settings and
    defaults to thirty minutes to accommodate slow, large-context generations.
    """

    def _build_payload(self, model: str, prompt: str) -> dict:
        return {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {"num_ctx": self.settings.context},
        }

    def translate(self, model: str, prompt: str) -> TranslationResult:
        """
        Post the prompt and parse the generate response.

        Raises:
            TranslatorError: If the request fails or the body cannot be parsed.

        """
        payload = self._build_payload(model, prompt)
        logger.debug("Sending %d prompt characters to %s (model=%s)", len(prompt), self.settings.api_url, model)

        try:
            response = requests.post(self.settings.api_url, json=payload, timeout=self.settings.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            msg = f"Request to {self.settings.api_url} timed out after {self.settings.timeout}s"
            raise TranslatorError(msg) from e
        except requests.RequestException as e:
            msg = f"Request to {self.settings.api_url} failed: {e}"
            raise TranslatorError(msg) from e

        try:
            data = GenerateResponse.model_validate_json(response.text)
        except ValidationError as e:
            msg = f"Failed to parse API response. Details: {e}"
            raise TranslatorError(msg) from e

        return TranslationResult(
            text=data.response,
            is_complete=data.done,
            model=data.model,
            done_reason=data.done_reason,
        )
