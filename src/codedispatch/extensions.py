"""Handles the persisted language-to-extension table."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Final

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

FALLBACK_EXTENSION: Final[str] = ".txt"

DEFAULT_EXTENSIONS: Final[dict[str, list[str]]] = {
    "csharp": [".cs"],
    "c#": [".cs"],
    "vbnet": [".vb"],
    "vb": [".vb"],
    "vb6": [".vb", ".frm", ".bas"],
    "fsharp": [".fs"],
    "fs": [".fs"],
    "f#": [".fs"],
    "java": [".java"],
    "kotlin": [".kt"],
    "scala": [".scala"],
    "groovy": [".groovy"],
    "c": [".c"],
    "cpp": [".cpp", ".cc", ".cxx"],
    "c++": [".cpp", ".cc", ".cxx"],
    "objc": [".m", ".mm"],
    "objective-c": [".m", ".mm"],
    "rust": [".rs"],
    "go": [".go"],
    "javascript": [".js", ".mjs", ".cjs"],
    "js": [".js", ".mjs", ".cjs"],
    "typescript": [".ts", ".tsx"],
    "ts": [".ts", ".tsx"],
    "python": [".py", ".pyw"],
    "py": [".py", ".pyw"],
    "ruby": [".rb", ".erb"],
    "rb": [".rb", ".erb"],
    "php": [".php", ".phtml"],
    "perl": [".pl", ".pm"],
    "pl": [".pl", ".pm"],
    "dart": [".dart"],
    "lua": [".lua"],
    "coffeescript": [".coffee"],
    "coffee": [".coffee"],
    "r": [".r", ".R"],
    "shell": [".sh"],
    "bash": [".sh"],
    "powershell": [".ps1", ".psm1"],
    "haskell": [".hs", ".lhs"],
    "hs": [".hs", ".lhs"],
    "clojure": [".clj", ".cljs", ".cljc"],
    "clj": [".clj", ".cljs", ".cljc"],
    "elixir": [".ex", ".exs"],
    "ex": [".ex", ".exs"],
    "erlang": [".erl", ".hrl"],
    "erl": [".erl", ".hrl"],
    "lisp": [".lisp", ".lsp"],
    "scheme": [".scm", ".ss"],
    "html": [".html", ".htm"],
    "xml": [".xml", ".xsl", ".xsd"],
    "css": [".css"],
    "json": [".json"],
    "yaml": [".yaml", ".yml"],
    "yml": [".yaml", ".yml"],
    "markdown": [".md", ".markdown"],
    "md": [".md", ".markdown"],
    "toml": [".toml"],
    "ini": [".ini"],
    "csv": [".csv"],
    "sql": [".sql"],
    "matlab": [".m", ".mlx"],
    "m": [".m", ".mlx"],
    "racket": [".rkt"],
    "elm": [".elm"],
    "graphql": [".graphql", ".gql"],
    "dockerfile": ["Dockerfile"],
    "makefile": ["Makefile"],
    "cmake": ["CMakeLists.txt"],
    "lingo": [".ls"],
    "shockwave": [".ls"],
}

_TABLE_ADAPTER: Final[TypeAdapter[dict[str, list[str]]]] = TypeAdapter(dict[str, list[str]])


class ExtensionTableError(Exception):
    """Raised when the persisted extension table cannot be read or is malformed."""


def _normalize_language(language: str | None) -> str:
    return (language or "").strip().lower()


class ExtensionRegistry:
    """
    Read-only mapping from language names and aliases to extension patterns.

    A pattern is either a filename suffix ('.cs') or an exact filename
    ('Dockerfile'). Lookups are case-insensitive and never fail: unknown
    languages resolve to the '.txt' fallback so user-defined language names
    keep the pipeline usable.
    """

    def __init__(self, table: Mapping[str, list[str]]) -> None:
        """
        Initialize the registry from an already loaded table.

        Args:
            table: Language names mapped to ordered extension patterns.

        """
        # Blank patterns would match every file.
        normalized = {
            _normalize_language(name): tuple(pattern for pattern in patterns if pattern.strip()) for name, patterns in table.items()
        }
        self._table: Mapping[str, tuple[str, ...]] = MappingProxyType(normalized)

    @property
    def table(self) -> Mapping[str, tuple[str, ...]]:
        """The loaded table, read-only."""
        return self._table

    @classmethod
    def load(cls, path: Path) -> "ExtensionRegistry":
        """
        Load the table from `path`, materializing the defaults first if the file is missing.

        Args:
            path: Location of the JSON extension table.

        Returns:
            A registry holding the persisted table.

        Raises:
            ExtensionTableError: If the file cannot be created or read, is not valid JSON,
                or is not an object of string arrays.

        """
        if not path.is_file():
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(json.dumps(DEFAULT_EXTENSIONS, indent=2), encoding="utf-8")
            except OSError as e:
                msg = f"Could not create extension table '{path}': {e}"
                raise ExtensionTableError(msg) from e
            logger.info("Default extension table created: %s", path)

        try:
            table = _TABLE_ADAPTER.validate_json(path.read_text(encoding="utf-8"))
        except OSError as e:
            msg = f"Could not read extension table '{path}': {e}"
            raise ExtensionTableError(msg) from e
        except ValidationError as e:
            msg = f"Invalid extension table '{path}': {e}"
            raise ExtensionTableError(msg) from e

        logger.debug("Loaded %d language entries from %s", len(table), path)
        return cls(table)

    def extensions_for(self, language: str | None) -> list[str]:
        """Return the ordered extension patterns for `language`, or ['.txt'] if unknown."""
        patterns = self._table.get(_normalize_language(language))
        if not patterns:
            return [FALLBACK_EXTENSION]
        return list(patterns)

    def target_extension(self, language: str | None) -> str:
        """Return the extension used for output files of `language` (its first pattern)."""
        return self.extensions_for(language)[0]
