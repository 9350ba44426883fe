"""collectiv chunk / retrieve commands.

  collectiv chunk ARTICLE       Show how an article is split into chunks.
  collectiv retrieve QUERY      Rank chunks across the corpus for a query.
"""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from collectiv.cli.common import (
    DEFAULT_CORPUS,
    CorpusOption,
    JsonOption,
    build_index,
    console,
    load_articles,
    load_cfg,
    preview,
    resolve_article,
)
from collectiv.cli.errors import err_query_invalid, warn_no_matches
from collectiv.errors import QueryError
from collectiv.ingest.chunker import SentenceChunker, create_rag_metadata
from collectiv.rag.retriever import RetrieverConfig, retrieve


def chunk_cmd(
    article: Annotated[str, typer.Argument(help="Article id, slug or title.")],
    corpus: CorpusOption = DEFAULT_CORPUS,
    chunk_size: Annotated[
        int | None,
        typer.Option("--chunk-size", help="Target chunk size in characters (default from config)."),
    ] = None,
    overlap_size: Annotated[
        int | None,
        typer.Option("--overlap", help="Overlap between chunks in characters (default from config)."),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Split one article into overlapping, sentence-aligned chunks."""
    cfg = load_cfg()
    articles = load_articles(corpus)
    target = resolve_article(articles, article)

    try:
        chunker = SentenceChunker(
            chunk_size=chunk_size if chunk_size is not None else cfg.chunking.chunk_size,
            overlap_size=overlap_size if overlap_size is not None else cfg.chunking.overlap_size,
        )
    except ValueError as exc:
        console.print(f"[red]Error:[/] {exc}")
        raise typer.Exit(1)

    chunks = chunker.chunk(target.id, target.content, target.title)

    if as_json:
        payload = {
            "articleId": target.id,
            "metadata": create_rag_metadata(target),
            "chunks": [c.to_dict() for c in chunks],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"{escape(target.title)} — {len(chunks)} chunk(s)")
    table.add_column("#", justify="right")
    table.add_column("Chars", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Section", style="dim")
    table.add_column("Preview")
    for c in chunks:
        m = c.metadata
        table.add_row(
            str(c.chunk_index),
            f"{m.start_char}–{m.end_char}",
            str(m.token_count),
            escape(m.section or ""),
            preview(c.content),
        )
    console.print(table)


def retrieve_cmd(
    query: Annotated[str, typer.Argument(help="Free-text query (at least 2 characters).")],
    corpus: CorpusOption = DEFAULT_CORPUS,
    top_k: Annotated[
        int | None,
        typer.Option("--top-k", "-k", help="Maximum chunks to return (default from config)."),
    ] = None,
    max_tokens: Annotated[
        int | None,
        typer.Option("--max-tokens", help="Context token budget (default from config)."),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Rank chunks across the corpus for QUERY within a token budget."""
    cfg = load_cfg()
    articles = load_articles(corpus)
    index = build_index(articles, cfg)

    config = RetrieverConfig(
        top_k=top_k if top_k is not None else cfg.retrieval.top_k,
        max_context_tokens=(
            max_tokens if max_tokens is not None else cfg.retrieval.max_context_tokens
        ),
        min_query_length=cfg.retrieval.min_query_length,
    )
    try:
        result = retrieve(query, index, config)
    except QueryError as exc:
        console.print(err_query_invalid(str(exc)))
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.chunks:
        console.print(warn_no_matches(query))
        return

    table = Table(title=f"Top {result.total_chunks} chunk(s) for '{escape(query)}'")
    table.add_column("Score", justify="right")
    table.add_column("Chunk")
    table.add_column("Tokens", justify="right")
    table.add_column("Preview")
    for rc in result.chunks:
        table.add_row(
            f"{rc.relevance_score:.2f}",
            rc.chunk.id,
            str(rc.chunk.metadata.token_count),
            preview(rc.chunk.content),
        )
    console.print(table)
    console.print(
        f"[dim]{result.total_tokens} of {result.max_context_tokens} tokens used, "
        f"{result.available_tokens} available[/]"
    )

