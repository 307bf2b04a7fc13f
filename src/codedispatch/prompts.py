"""Locates, synthesizes and renders the prompt template for a run."""

import logging
from pathlib import Path
from typing import Final

from . import paths

logger = logging.getLogger(__name__)

SOURCE_LANG_TOKEN: Final[str] = "{sourceLang}"
TARGET_LANG_TOKEN: Final[str] = "{targetLang}"
CODE_TOKEN: Final[str] = "{code}"
REQUIRED_TOKENS: Final[tuple[str, ...]] = (CODE_TOKEN,)

DEFAULT_PROMPT_TEMPLATE: Final[str] = """You are a code translation assistant.
Convert exactly this one file from {sourceLang} to {targetLang}, preserving its structure, comments and functionality.
Show me the source code only, full source code, and nothing but the source code.

--- FILE TO TRANSLATE ---
{code}
--- END FILE ---"""


class MissingPromptFileError(FileNotFoundError):
    """Raised when an explicitly requested prompt file does not exist."""


class PromptTemplateError(ValueError):
    """Raised when a prompt template lacks a required substitution token."""


def prompt_candidates(directory: Path, source_lang: str, target_lang: str) -> list[Path]:
    """Return the prompt files probed for a language pair, most specific first."""
    return [
        directory / f"{source_lang}-to-{target_lang}{paths.PROMPT_SUFFIX}",
        directory / f"{target_lang}{paths.PROMPT_SUFFIX}",
        directory / f"{source_lang}{paths.PROMPT_SUFFIX}",
    ]


def validate_template(template: str, origin: str) -> None:
    """
    Ensure `template` contains every required token.

    Raises:
        PromptTemplateError: If a required token is missing.

    """
    missing = [token for token in REQUIRED_TOKENS if token not in template]
    if missing:
        msg = f"Prompt template '{origin}' is missing required token(s): {', '.join(missing)}"
        raise PromptTemplateError(msg)


def render_prompt(template: str, source_lang: str, target_lang: str, code: str) -> str:
    """
    Substitute the three tokens of `template` with literal values.

    Plain replacement is used rather than `str.format` so braces in the
    template or the source code need no escaping. The code token is replaced
    last so token-like text inside the source is never substituted.
    """
    return template.replace(SOURCE_LANG_TOKEN, source_lang).replace(TARGET_LANG_TOKEN, target_lang).replace(CODE_TOKEN, code)


class PromptResolver:
    """Resolves the prompt template for a (directory, source, target) triple."""

    def resolve(
        self,
        directory: Path,
        prompt_option: str | None,
        source_lang: str,
        target_lang: str,
        *,
        persist: bool = True,
    ) -> str:
        """
        Resolve and validate the prompt template text.

        Resolution order:
        1. An explicit prompt path, relative to `directory` unless absolute.
        2. '<src>-to-<tgt>.prompt', '<tgt>.prompt', '<src>.prompt' in `directory`.
        3. A synthesized default, written to '<src>-to-<tgt>.prompt' so later
           runs reuse and can edit it.

        Args:
            directory: The input directory of the run.
            prompt_option: The user-supplied prompt path, if any.
            source_lang: The source language name.
            target_lang: The target language name.
            persist: If False, a synthesized default is returned without being written.

        Returns:
            The template text.

        Raises:
            MissingPromptFileError: If `prompt_option` points to a missing file.
            PromptTemplateError: If the template lacks a required token.

        """
        if prompt_option:
            prompt_file = Path(prompt_option)
            if not prompt_file.is_absolute():
                prompt_file = directory / prompt_file
            if not prompt_file.is_file():
                msg = f"Specified prompt file '{prompt_file}' does not exist."
                raise MissingPromptFileError(msg)
            return self._read_template(prompt_file)

        for candidate in prompt_candidates(directory, source_lang, target_lang):
            if candidate.is_file():
                logger.debug("Using prompt file: %s", candidate)
                return self._read_template(candidate)

        return self._create_default(directory, source_lang, target_lang, persist=persist)

    def _read_template(self, prompt_file: Path) -> str:
        template = prompt_file.read_text(encoding="utf-8")
        validate_template(template, str(prompt_file))
        logger.info("Using prompt file: %s", prompt_file)
        return template

    def _create_default(self, directory: Path, source_lang: str, target_lang: str, *, persist: bool) -> str:
        prompt_file = prompt_candidates(directory, source_lang, target_lang)[0]
        if not persist:
            logger.info("[DRY RUN] Would create default prompt file: %s", prompt_file)
            return DEFAULT_PROMPT_TEMPLATE

        prompt_file.write_text(DEFAULT_PROMPT_TEMPLATE, encoding="utf-8")
        logger.info("Default prompt file created: %s", prompt_file)
        return DEFAULT_PROMPT_TEMPLATE
