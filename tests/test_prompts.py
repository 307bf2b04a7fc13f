"""Tests for prompt resolution and rendering."""

from pathlib import Path

import pytest

from codedispatch.prompts import (
    DEFAULT_PROMPT_TEMPLATE,
    MissingPromptFileError,
    PromptResolver,
    PromptTemplateError,
    render_prompt,
)


@pytest.fixture
def resolver() -> PromptResolver:
    """Return a prompt resolver."""
    return PromptResolver()


def test_explicit_relative_prompt_is_resolved_against_directory(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify a relative --prompt path is looked up inside the input directory."""
    (tmp_path / "prompts").mkdir()
    (tmp_path / "prompts" / "custom.prompt").write_text("Custom: {code}", encoding="utf-8")

    assert resolver.resolve(tmp_path, "prompts/custom.prompt", "Java", "Python") == "Custom: {code}"


def test_explicit_absolute_prompt(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify an absolute --prompt path is used as-is."""
    prompt_file = tmp_path / "elsewhere.prompt"
    prompt_file.write_text("Absolute {code}", encoding="utf-8")

    assert resolver.resolve(tmp_path / "project", str(prompt_file), "Java", "Python") == "Absolute {code}"


def test_missing_explicit_prompt_raises(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify a missing explicit prompt file is fatal."""
    with pytest.raises(MissingPromptFileError, match="does not exist"):
        resolver.resolve(tmp_path, "nope.prompt", "Java", "Python")


def test_pair_prompt_wins_over_target_prompt(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify '<src>-to-<tgt>.prompt' is chosen over '<tgt>.prompt'."""
    (tmp_path / "Java-to-Python.prompt").write_text("pair {code}", encoding="utf-8")
    (tmp_path / "Python.prompt").write_text("target {code}", encoding="utf-8")

    assert resolver.resolve(tmp_path, None, "Java", "Python") == "pair {code}"


def test_target_prompt_wins_over_source_prompt(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify '<tgt>.prompt' is chosen over '<src>.prompt'."""
    (tmp_path / "Python.prompt").write_text("target {code}", encoding="utf-8")
    (tmp_path / "Java.prompt").write_text("source {code}", encoding="utf-8")

    assert resolver.resolve(tmp_path, None, "Java", "Python") == "target {code}"


def test_source_prompt_is_last_probe(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify '<src>.prompt' is used when it is the only candidate."""
    (tmp_path / "Java.prompt").write_text("source {code}", encoding="utf-8")

    assert resolver.resolve(tmp_path, None, "Java", "Python") == "source {code}"


def test_default_prompt_is_created_and_reused(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify the default template is persisted so the next run picks it up."""
    template = resolver.resolve(tmp_path, None, "Java", "Python")
    prompt_file = tmp_path / "Java-to-Python.prompt"

    assert template == DEFAULT_PROMPT_TEMPLATE
    assert prompt_file.read_text(encoding="utf-8") == DEFAULT_PROMPT_TEMPLATE

    prompt_file.write_text("edited {code}", encoding="utf-8")
    assert resolver.resolve(tmp_path, None, "Java", "Python") == "edited {code}"


def test_default_prompt_not_persisted_when_disabled(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify persist=False returns the default without writing it."""
    template = resolver.resolve(tmp_path, None, "Java", "Python", persist=False)

    assert template == DEFAULT_PROMPT_TEMPLATE
    assert not (tmp_path / "Java-to-Python.prompt").exists()


def test_template_without_code_token_is_rejected(tmp_path: Path, resolver: PromptResolver) -> None:
    """Verify a template missing the code token fails at resolution time."""
    (tmp_path / "Python.prompt").write_text("Translate {sourceLang} to {targetLang}.", encoding="utf-8")

    with pytest.raises(PromptTemplateError, match=r"\{code\}"):
        resolver.resolve(tmp_path, None, "Java", "Python")


def test_render_prompt_substitutes_all_tokens() -> None:
    """Verify all three tokens are replaced literally."""
    rendered = render_prompt("{sourceLang} -> {targetLang}:\n{code}", "Java", "Python", "int x = 1;")
    assert rendered == "Java -> Python:\nint x = 1;"


def test_render_prompt_leaves_braces_in_code_untouched() -> None:
    """Verify source code containing braces or token-like text is inserted verbatim."""
    code = 'String s = "{targetLang}"; Map<String, Object> m = new HashMap<>() {{ put("a", 1); }};'
    rendered = render_prompt("[{code}]", "Java", "Python", code)
    assert rendered == f"[{code}]"


def test_default_template_renders_languages() -> None:
    """Verify the default template names both languages once rendered."""
    rendered = render_prompt(DEFAULT_PROMPT_TEMPLATE, "Java", "CSharp", "class A {}")
    assert "from Java to CSharp" in rendered
    assert "--- FILE TO TRANSLATE ---\nclass A {}\n--- END FILE ---" in rendered
