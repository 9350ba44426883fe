"""Context assembly for LLM prompts: token budget, context block, prompt, summary.

Pipeline (as used by ``collectiv ask``):
  1. Rank chunks for the query (``rag.scoring``).
  2. Apply a token budget: keep chunks best-first until the next one would
     overflow ``max_tokens``.
  3. Render the kept chunks as ``[title]`` blocks and wrap them in a prompt.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from collectiv.models import Chunk
from collectiv.text.analysis import sentence_spans

_DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant answering questions based on the provided "
    "context from the {site} encyclopedia.\n"
    "Answer only based on the provided context and be specific with citations."
)


@dataclass
class TokenBudget:
    available: int
    usage: int
    percentage: float


def apply_token_budget(chunks: Iterable[Chunk], budget: int) -> tuple[list[Chunk], int]:
    """Select chunks in order while they fit in *budget* tokens.

    Stops at the first chunk that would overflow. Returns (selected, total_tokens).
    """
    selected: list[Chunk] = []
    total = 0
    for chunk in chunks:
        tokens = chunk.metadata.token_count
        if total + tokens > budget:
            break
        selected.append(chunk)
        total += tokens
    return selected, total


def format_context_for_llm(chunks: Iterable[Chunk], max_tokens: int = 4_000) -> str:
    """Render chunks as ``[title]\\ncontent`` blocks within *max_tokens*."""
    selected, _ = apply_token_budget(chunks, max_tokens)
    return "".join(f"[{c.metadata.title}]\n{c.content}\n\n" for c in selected)


def generate_rag_prompt(
    query: str,
    context: str,
    system_prompt: str | None = None,
    site_name: str = "Collectiv",
) -> str:
    """Build the full prompt: system instructions, context block, question."""
    system = system_prompt or _DEFAULT_SYSTEM_PROMPT.format(site=site_name)
    return (
        f"{system}\n\n"
        f"Context from {site_name}:\n"
        f"{context}\n\n"
        f"Question: {query}\n\n"
        "Answer:"
    )


def extract_key_summary(content: str, max_length: int = 500) -> str:
    """Leading whole sentences of *content* totalling at most *max_length* characters."""
    summary = ""
    for start, end in sentence_spans(content):
        sentence = content[start:end].strip()
        if len(summary) + len(sentence) > max_length:
            break
        summary = f"{summary} {sentence}" if summary else sentence
    return summary


def calculate_token_budget(
    query_tokens: int,
    context_tokens: int,
    system_tokens: int = 100,
    max_tokens: int = 4_096,
) -> TokenBudget:
    """How much of a *max_tokens* context window a prompt uses."""
    used = query_tokens + context_tokens + system_tokens
    percentage = (used / max_tokens) * 100 if max_tokens > 0 else 100.0
    return TokenBudget(
        available=max(0, max_tokens - used),
        usage=used,
        percentage=percentage,
    )
