"""collectiv status command.

Shows a corpus overview: configuration, article/chunk/token totals, link
health (unresolved [[references]]) and a per-article table.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from collectiv.cli.common import (
    DEFAULT_CORPUS,
    CorpusOption,
    build_index,
    console,
    load_articles,
    load_cfg,
)
from collectiv.config import CollectivConfig
from collectiv.ingest.tokens import estimate_tokens
from collectiv.models import Article
from collectiv.rag.index import ChunkIndex
from collectiv.text.wikilinks import extract_internal_references

_PROJECT_CONFIG = Path("collectiv.yaml")


def status_cmd(corpus: CorpusOption = DEFAULT_CORPUS) -> None:
    """Show corpus status: articles, chunks, tokens and link health."""
    cfg = load_cfg()

    # ---- Panel 1: Project + config ----
    _show_project_panel(corpus, cfg)

    # ---- Panel 2: Corpus ----
    if not corpus.exists():
        console.print(
            Panel(
                "[yellow]No corpus found.[/]\n"
                f"  Create '{corpus}/' with Markdown articles or pass --corpus PATH.",
                title="[bold]Corpus[/]",
                expand=False,
            )
        )
        return

    articles = load_articles(corpus)
    index = build_index(articles, cfg)
    _show_corpus_panel(articles, index)

    # ---- Panel 3: Articles ----
    if articles:
        _show_articles_table(articles, index)


# ---------------------------------------------------------------------------
# Panel renderers
# ---------------------------------------------------------------------------


def _show_project_panel(corpus: Path, cfg: CollectivConfig) -> None:
    config_status = "[green]✓[/]" if _PROJECT_CONFIG.exists() else "[dim]defaults[/]"
    lines = [
        f"Site:      [bold]{cfg.site.name}[/]  [dim]{cfg.site.base_url}[/]",
        f"Corpus:    {corpus}",
        f"Config:    {_PROJECT_CONFIG} {config_status}",
        f"Chunking:  {cfg.chunking.chunk_size} chars, {cfg.chunking.overlap_size} overlap",
    ]
    console.print(Panel("\n".join(lines), title="[bold]Project[/]", expand=False))


def _show_corpus_panel(articles: list[Article], index: ChunkIndex) -> None:
    total_tokens = sum(estimate_tokens(a.content).approximate for a in articles)
    categories = Counter(a.category or "(none)" for a in articles)
    unresolved = _unresolved_references(articles)

    lines = [
        f"Articles: [bold]{len(articles)}[/]  |  "
        f"Chunks: [bold]{len(index):,}[/]  |  "
        f"Tokens: [bold]~{total_tokens:,}[/]",
    ]
    if categories:
        summary = ", ".join(f"{name} ({n})" for name, n in categories.most_common())
        lines.append(f"Categories: {escape(summary)}")
    if unresolved:
        lines.append(f"[yellow]Unresolved links:[/] {escape(', '.join(sorted(unresolved)))}")
    else:
        lines.append("[green]✓[/] All wiki links resolve")
    if not articles:
        lines.append("[dim]No articles found.[/]")

    console.print(Panel("\n".join(lines), title="[bold]Corpus[/]", expand=False))


def _show_articles_table(articles: list[Article], index: ChunkIndex) -> None:
    table = Table(show_header=True, box=None, padding=(0, 1))
    table.add_column("Id", style="bold")
    table.add_column("Title")
    table.add_column("Category", style="dim")
    table.add_column("Chunks", justify="right")
    for a in articles:
        table.add_row(
            escape(a.id),
            escape(a.title),
            escape(a.category),
            str(len(index.chunks_for(a.id))),
        )
    console.print(Panel(table, title="[bold]Articles[/]", expand=False))


def _unresolved_references(articles: list[Article]) -> set[str]:
    titles = {a.title.strip().lower() for a in articles}
    return {
        ref
        for a in articles
        for ref in extract_internal_references(a.content)
        if ref not in titles
    }
