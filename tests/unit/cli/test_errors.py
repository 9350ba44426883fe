"""Tests for collectiv rich error messages."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from collectiv.cli.errors import (
    err_article_not_found,
    err_config_invalid,
    err_corpus_invalid,
    err_generation_failed,
    err_no_api_key,
    err_no_corpus,
    err_query_invalid,
    warn_no_matches,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _has_action(msg: str) -> bool:
    """Every message must tell the user what to do next."""
    lower = msg.lower()
    return any(
        kw in lower
        for kw in ["run:", "set:", "point ", "use ", "fix ", "check ", "try ", "collectiv "]
    )


# ---------------------------------------------------------------------------
# Every message: cause + action
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "msg",
    [
        err_no_corpus("articles"),
        err_corpus_invalid("Duplicate article id: 'a'"),
        err_article_not_found("nope", ["a", "b"]),
        err_query_invalid("Query must be at least 2 characters"),
        err_config_invalid("chunking.chunk_size must be >= 1"),
        err_no_api_key("openai"),
        err_generation_failed("timeout"),
        warn_no_matches("xylophone"),
    ],
)
def test_message_has_action(msg: str) -> None:
    assert _has_action(msg)


@pytest.mark.parametrize(
    "msg",
    [
        err_no_corpus("articles"),
        err_corpus_invalid("x"),
        err_article_not_found("nope", []),
        err_query_invalid("x"),
        err_config_invalid("x"),
        err_no_api_key("openai"),
        err_generation_failed("x"),
    ],
)
def test_errors_start_with_red_error(msg: str) -> None:
    assert msg.startswith("[red]Error:[/]")


# ---------------------------------------------------------------------------
# Individual messages
# ---------------------------------------------------------------------------


def test_err_no_corpus_names_path() -> None:
    assert "'content/wiki'" in err_no_corpus("content/wiki")


def test_err_article_not_found_lists_known_ids() -> None:
    msg = err_article_not_found("nope", ["a", "b", "c"])
    assert "'nope'" in msg
    assert "a, b, c" in msg


def test_err_article_not_found_truncates_long_list() -> None:
    msg = err_article_not_found("nope", [str(i) for i in range(8)])
    assert "0, 1, 2, 3, 4" in msg
    assert "+3 more" in msg


def test_err_article_not_found_empty_corpus() -> None:
    assert "(none)" in err_article_not_found("nope", [])


@pytest.mark.parametrize(
    "provider, env_var",
    [
        ("openai", "OPENAI_API_KEY"),
        ("anthropic", "ANTHROPIC_API_KEY"),
        ("groq", "GROQ_API_KEY"),
    ],
)
def test_err_no_api_key_names_env_var(provider: str, env_var: str) -> None:
    msg = err_no_api_key(provider)
    assert env_var in msg
    assert "--dry-run" in msg


def test_err_query_invalid_includes_detail() -> None:
    assert "at least 2 characters" in err_query_invalid("Query must be at least 2 characters")


def test_warn_no_matches_is_not_an_error() -> None:
    msg = warn_no_matches("xylophone")
    assert "Error" not in msg
    assert "'xylophone'" in msg


def _render(msg: str) -> str:
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(msg)
    return console.file.getvalue()


def test_err_article_not_found_prints_key_literally() -> None:
    out = _render(err_article_not_found("[bold]x", ["[a]"]))
    assert "'[bold]x'" in out
    assert "Known ids: [a]" in out


def test_err_corpus_invalid_prints_detail_literally() -> None:
    out = _render(err_corpus_invalid("Duplicate article id: '[[Qubit]]'"))
    assert "'[[Qubit]]'" in out
    assert out.startswith("Error:")
