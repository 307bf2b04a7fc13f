"""Extracts the code payload from a backend response."""

import re

# The delimiters are distinct and the body is non-greedy, so the first closing fence wins.
_FENCED_BLOCK = re.compile(r"```[\w+#.-]*\r?\n(.*?)\r?\n```", re.DOTALL)


def extract_code(response_text: str) -> str:
    """
    Return the inner content of the first fenced code block in `response_text`.

    Backends often wrap code in Markdown fences or surround it with prose.
    Extraction is best effort: when no fenced block is found the response is
    returned unchanged.
    """
    match = _FENCED_BLOCK.search(response_text)
    return match.group(1) if match else response_text
