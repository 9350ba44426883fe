"""Collectiv rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from collectiv.cli.errors import err_no_corpus
    console.print(err_no_corpus("articles"))
    raise typer.Exit(1)
"""

from __future__ import annotations

from rich.markup import escape


def err_no_corpus(path: str) -> str:
    """Corpus path does not exist."""
    return (
        f"[red]Error:[/] No corpus found at '{escape(path)}'.\n"
        "  Point --corpus at a directory of Markdown articles or a .json/.yaml article list.\n"
        "  Example:  collectiv status --corpus content/articles"
    )


def err_corpus_invalid(detail: str) -> str:
    """Corpus exists but could not be parsed."""
    return (
        f"[red]Error:[/] Could not load the corpus.\n"
        f"  {escape(detail)}\n"
        "  Fix the file above and re-run the command."
    )


def err_article_not_found(key: str, known: list[str]) -> str:
    """No article matches the given id, slug or title."""
    sample = ", ".join(known[:5]) if known else "(none)"
    more = f" … (+{len(known) - 5} more)" if len(known) > 5 else ""
    return (
        f"[red]Error:[/] Article '{escape(key)}' not found (matched by id, slug, then title).\n"
        f"  Known ids: {escape(sample)}{more}\n"
        "  Run:  collectiv status  to list the corpus."
    )


def err_query_invalid(detail: str) -> str:
    """Query failed input validation."""
    return (
        f"[red]Error:[/] {escape(detail)}.\n"
        "  Use a longer query, e.g.  collectiv retrieve \"quantum entanglement\""
    )


def err_config_invalid(detail: str) -> str:
    """collectiv.yaml / global config / COLLECTIV_* env var is invalid."""
    return (
        f"[red]Error:[/] Invalid configuration.\n"
        f"  {escape(detail)}\n"
        "  Check collectiv.yaml, ~/.collectiv/config.yaml and COLLECTIV_* environment variables."
    )


def err_no_api_key(provider: str) -> str:
    """No API key for *provider*."""
    env_map = {
        "openai": "OPENAI_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
        "cohere": "COHERE_API_KEY",
        "mistral": "MISTRAL_API_KEY",
        "azure": "AZURE_API_KEY",
    }
    env_var = env_map.get(provider.lower(), f"{provider.upper()}_API_KEY")
    return (
        f"[red]Error:[/] No API key for '{provider}'.\n"
        f"  Set:  export {env_var}=sk-...\n"
        "  Or preview the prompt without an LLM:  collectiv ask --dry-run QUESTION"
    )


def err_generation_failed(detail: str) -> str:
    """LLM call failed after retries."""
    return (
        f"[red]Error:[/] Answer generation failed: {escape(detail)}\n"
        "  Check the generation.model setting and your network, or use --dry-run."
    )


def warn_no_matches(query: str) -> str:
    """Retrieval found nothing — not an error, but worth saying."""
    return (
        f"[yellow]No chunks matched[/] '{escape(query)}'.\n"
        "  Try different terms; scoring matches whole words only."
    )
