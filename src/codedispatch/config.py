"""Handles the run options and the optional YAML defaults file."""

import logging
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from . import paths

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_LANG: Final[str] = "Java"
DEFAULT_TARGET_LANG: Final[str] = "CSharp"
DEFAULT_MODEL: Final[str] = "qwen2.5-coder:3b"
DEFAULT_API_URL: Final[str] = "http://localhost:11434/api/generate"
DEFAULT_PROVIDER: Final[str] = "ollama"
DEFAULT_CONTEXT: Final[int] = 4096
DEFAULT_TIMEOUT_SECONDS: Final[float] = 1800.0


class ProviderSettings(BaseModel):
    """Settings for the translation backend."""

    api_url: str = DEFAULT_API_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    context: int = Field(default=DEFAULT_CONTEXT, gt=0)


class DispatchOptions(BaseModel):
    """The validated options for a single dispatch run."""

    model_config = ConfigDict(extra="forbid")

    directory: Path
    source_lang: str = DEFAULT_SOURCE_LANG
    target_lang: str = DEFAULT_TARGET_LANG
    model: str = DEFAULT_MODEL
    provider: str = DEFAULT_PROVIDER
    api_url: str = DEFAULT_API_URL
    output_dir: Path | None = None
    prompt_file: str | None = None
    log_file: Path | None = None
    extensions_file: Path | None = None
    context: int = Field(default=DEFAULT_CONTEXT, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    overwrite: bool = False
    dry_run: bool = False
    verbose: bool = False

    def output_path(self) -> Path:
        """Return the output root, defaulting to '<directory>/converted_<target>'."""
        return self.output_dir or paths.get_default_output_dir(self.directory, self.target_lang)

    def log_path(self) -> Path:
        """Return the dispatch log path, defaulting to '<directory>/translation_dispatch.log'."""
        return self.log_file or paths.get_default_log_path(self.directory)

    def extensions_path(self) -> Path:
        """Return the extension table location, defaulting to the working directory."""
        return self.extensions_file or paths.get_extensions_file()

    def provider_settings(self) -> ProviderSettings:
        """Build the backend settings carried by these options."""
        return ProviderSettings(api_url=self.api_url, timeout=self.timeout, context=self.context)

    def summary(self) -> str:
        """Return a single-line description of the options for the dispatch log."""
        return (
            f"directory={self.directory} source={self.source_lang} target={self.target_lang} "
            f"model={self.model} provider={self.provider} api_url={self.api_url} "
            f"output={self.output_path()} context={self.context} timeout={self.timeout}s "
            f"overwrite={self.overwrite} dry_run={self.dry_run}"
        )


def load_config(config_path: Path) -> dict[str, Any]:
    """
    Load the optional YAML defaults file.

    The file holds a mapping of option names (as in `DispatchOptions`) to values.

    Args:
        config_path: The path to the YAML file.

    Returns:
        The raw mapping of option defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid YAML or not a mapping.

    """
    if not config_path.is_file():
        msg = f"Configuration file not found at: {config_path}"
        raise FileNotFoundError(msg)

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Invalid or missing configuration: error parsing YAML config file: {e}"
        raise ValueError(msg) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = "Invalid or missing configuration: config file must be a YAML mapping (dictionary)."
        raise ValueError(msg)
    return data


def build_options(cli_values: dict[str, Any], file_values: dict[str, Any] | None = None) -> DispatchOptions:
    """
    Merge built-in defaults, YAML file values and explicit CLI values into options.

    CLI values of None are treated as "not given" and do not override the file.

    Raises:
        ValueError: If the merged values do not validate.

    """
    merged: dict[str, Any] = dict(file_values or {})
    merged.update({key: value for key, value in cli_values.items() if value is not None})
    try:
        return DispatchOptions(**merged)
    except ValidationError as e:
        msg = f"Invalid or missing configuration: {e}"
        raise ValueError(msg) from e
