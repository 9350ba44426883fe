"""Tests for the LiteLLM client wrapper."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from collectiv.rag.llm_client import complete, provider_of, validate_api_key


# ------------------------------------------------------------------
# provider_of / validate_api_key
# ------------------------------------------------------------------


@pytest.mark.parametrize(
    "model, provider",
    [
        ("openai/gpt-4o-mini", "openai"),
        ("Anthropic/claude-sonnet", "anthropic"),
        ("gpt-4o", "openai"),
        ("ollama/llama3", "ollama"),
    ],
)
def test_provider_of(model: str, provider: str):
    assert provider_of(model) == provider


def test_validate_api_key_raises_if_missing(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(EnvironmentError, match="OPENAI_API_KEY"):
        validate_api_key("openai/gpt-4o-mini")


def test_validate_api_key_passes_if_set(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key")
    validate_api_key("openai/gpt-4o-mini")


def test_validate_api_key_anthropic(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(EnvironmentError, match="ANTHROPIC_API_KEY"):
        validate_api_key("anthropic/claude-sonnet")


def test_validate_api_key_ollama_no_key_required():
    validate_api_key("ollama/llama3")


def test_validate_api_key_unlisted_provider_uses_convention(monkeypatch):
    monkeypatch.delenv("TOGETHER_API_KEY", raising=False)
    with pytest.raises(EnvironmentError, match="TOGETHER_API_KEY"):
        validate_api_key("together/mixtral")


# ------------------------------------------------------------------
# complete()
# ------------------------------------------------------------------


def test_complete_returns_content():
    mock_response = MagicMock()
    mock_response.choices[0].message.content = "A qubit is a two-state system."
    with patch("litellm.completion", return_value=mock_response) as mock_completion:
        result = complete("openai/gpt-4o-mini", "What is a qubit?")

    assert result == "A qubit is a two-state system."
    kwargs = mock_completion.call_args.kwargs
    assert kwargs["model"] == "openai/gpt-4o-mini"
    assert kwargs["messages"] == [{"role": "user", "content": "What is a qubit?"}]
    assert kwargs["num_retries"] == 3
    assert kwargs["temperature"] == 0.0


def test_complete_none_content_becomes_empty_string():
    mock_response = MagicMock()
    mock_response.choices[0].message.content = None
    with patch("litellm.completion", return_value=mock_response):
        assert complete("openai/gpt-4o-mini", "hi") == ""


def test_complete_passes_max_tokens():
    mock_response = MagicMock()
    mock_response.choices[0].message.content = "ok"
    with patch("litellm.completion", return_value=mock_response) as mock_completion:
        complete("openai/gpt-4o-mini", "hi", max_tokens=64)
    assert mock_completion.call_args.kwargs["max_tokens"] == 64
