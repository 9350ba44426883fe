"""collectiv ask — answer a question from the corpus via RAG + LLM.

Pipeline:
  1. Retrieve ranked chunks for the question within the context token budget.
  2. Render them as a context block and wrap it in the RAG prompt.
  3. --dry-run: print the prompt and token budget, no LLM call.
     Otherwise: validate the provider API key and call generation.model.
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel

from collectiv.cli.common import (
    DEFAULT_CORPUS,
    CorpusOption,
    build_index,
    console,
    load_articles,
    load_cfg,
)
from collectiv.cli.errors import (
    err_generation_failed,
    err_no_api_key,
    err_query_invalid,
    warn_no_matches,
)
from collectiv.errors import QueryError
from collectiv.ingest.tokens import count_tokens
from collectiv.rag.assembler import (
    calculate_token_budget,
    format_context_for_llm,
    generate_rag_prompt,
)
from collectiv.rag.llm_client import complete, provider_of, validate_api_key
from collectiv.rag.retriever import RetrieverConfig, retrieve


def ask_cmd(
    question: Annotated[str, typer.Argument(help="Question to answer from the corpus.")],
    corpus: CorpusOption = DEFAULT_CORPUS,
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="LiteLLM model string (default: generation.model)."),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show the assembled prompt without calling an LLM."),
    ] = False,
) -> None:
    """Answer QUESTION using the best-matching chunks as context."""
    cfg = load_cfg()
    articles = load_articles(corpus)
    index = build_index(articles, cfg)

    config = RetrieverConfig(
        top_k=cfg.retrieval.top_k,
        max_context_tokens=cfg.retrieval.max_context_tokens,
        min_query_length=cfg.retrieval.min_query_length,
    )
    try:
        result = retrieve(question, index, config)
    except QueryError as exc:
        console.print(err_query_invalid(str(exc)))
        raise typer.Exit(1)

    if not result.chunks:
        console.print(warn_no_matches(question))
        raise typer.Exit(0)

    context = format_context_for_llm(
        [rc.chunk for rc in result.chunks], cfg.retrieval.max_context_tokens
    )
    prompt = generate_rag_prompt(question, context, site_name=cfg.site.name)
    budget = calculate_token_budget(
        query_tokens=count_tokens(question),
        context_tokens=result.total_tokens,
        max_tokens=cfg.retrieval.max_context_tokens,
    )
    console.print(
        f"[dim]{result.total_chunks} chunk(s), {budget.usage} tokens "
        f"({budget.percentage:.0f}% of budget)[/]"
    )

    if dry_run:
        console.print(Panel(escape(prompt), title="[bold]Prompt[/]", expand=False))
        return

    model_name = model or cfg.generation.model
    try:
        validate_api_key(model_name)
    except EnvironmentError:
        console.print(err_no_api_key(provider_of(model_name)))
        raise typer.Exit(1)

    with console.status(f"Asking {model_name}…"):
        try:
            answer = complete(model_name, prompt, max_tokens=cfg.generation.max_tokens)
        except Exception as exc:  # litellm raises provider-specific exception types
            console.print(err_generation_failed(str(exc)))
            raise typer.Exit(1)

    console.print(
        Panel(escape(answer.strip()) or "[dim](empty answer)[/]", title="[bold]Answer[/]")
    )
    sources = ", ".join(dict.fromkeys(rc.chunk.metadata.title for rc in result.chunks))
    console.print(f"[dim]Sources: {escape(sources)}[/]")
