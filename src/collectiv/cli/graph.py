"""collectiv keywords / graph / related / backlinks commands."""

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
    console,
    load_articles,
    load_cfg,
    resolve_article,
)
from collectiv.graph.crossref import (
    build_knowledge_graph,
    find_backlinks,
    find_related_articles,
    get_recommendations,
)
from collectiv.text.analysis import extract_keywords


def keywords_cmd(
    article: Annotated[str, typer.Argument(help="Article id, slug or title.")],
    corpus: CorpusOption = DEFAULT_CORPUS,
    max_keywords: Annotated[
        int, typer.Option("--max", "-n", help="Number of keywords to extract.")
    ] = 10,
) -> None:
    """Show the most frequent keywords of an article."""
    articles = load_articles(corpus)
    target = resolve_article(articles, article)
    keywords = extract_keywords(target.content, max_keywords)
    if not keywords:
        console.print("[dim]No keywords (no words longer than 4 characters).[/]")
        return
    console.print(f"[bold]{escape(target.title)}[/]: " + ", ".join(keywords))


def graph_cmd(
    corpus: CorpusOption = DEFAULT_CORPUS,
    max_connections: Annotated[
        int | None,
        typer.Option("--max-connections", help="Cap on related edges per article."),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Build the knowledge graph and list each article's connections."""
    cfg = load_cfg()
    articles = load_articles(corpus)
    if len(articles) > 2_000:
        console.print(
            f"[yellow]Warning:[/] {len(articles):,} articles — graph building is "
            "quadratic in corpus size and may take a while."
        )
    graph = build_knowledge_graph(
        articles,
        max_connections_per_article=(
            max_connections
            if max_connections is not None
            else cfg.graph.max_connections_per_article
        ),
        threshold=cfg.graph.similarity_threshold,
    )

    if as_json:
        typer.echo(json.dumps([node.to_dict() for node in graph.values()], indent=2))
        return

    table = Table(title=f"Knowledge graph — {len(graph)} article(s)")
    table.add_column("Article")
    table.add_column("References")
    table.add_column("Related")
    for node in graph.values():
        table.add_row(
            escape(node.title),
            escape(", ".join(graph[c.target_id].title for c in node.edges("references"))),
            escape(", ".join(graph[c.target_id].title for c in node.edges("related"))),
        )
    console.print(table)


def related_cmd(
    article: Annotated[str, typer.Argument(help="Article id, slug or title.")],
    corpus: CorpusOption = DEFAULT_CORPUS,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Maximum recommendations (default from config)."),
    ] = None,
    similar: Annotated[
        bool,
        typer.Option("--similar", help="Rank by direct similarity instead of graph traversal."),
    ] = False,
) -> None:
    """Recommend articles near ARTICLE in the knowledge graph."""
    cfg = load_cfg()
    articles = load_articles(corpus)
    target = resolve_article(articles, article)
    n = limit if limit is not None else cfg.graph.recommendation_limit

    if similar:
        related = find_related_articles(
            target, articles, limit=n, threshold=cfg.graph.similarity_threshold
        )
        if not related:
            console.print(f"[dim]No articles similar to '{escape(target.title)}'.[/]")
            return
        for r in related:
            console.print(f"  {r.relevance_score:.2f}  {escape(r.title)} [dim]({r.slug})[/]")
        return

    graph = build_knowledge_graph(
        articles,
        max_connections_per_article=cfg.graph.max_connections_per_article,
        threshold=cfg.graph.similarity_threshold,
    )
    recommendations = get_recommendations(target.id, graph, limit=n)
    if not recommendations:
        console.print(f"[dim]No connected articles for '{escape(target.title)}'.[/]")
        return
    for node in recommendations:
        console.print(f"  {escape(node.title)} [dim]({node.slug})[/]")


def backlinks_cmd(
    title: Annotated[str, typer.Argument(help="Title of the referenced article.")],
    corpus: CorpusOption = DEFAULT_CORPUS,
) -> None:
    """List articles that link to TITLE with [[TITLE]]."""
    articles = load_articles(corpus)
    backlinks = find_backlinks(title, articles)
    if not backlinks:
        console.print(f"[dim]No articles link to '{escape(title)}'.[/]")
        return
    for link in backlinks:
        console.print(f"  {escape(link.title)} [dim]({link.slug})[/]")
