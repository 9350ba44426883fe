"""collectiv answers / jsonld commands.

  collectiv answers ARTICLE   Answer-first summary + 40-60 word atomic answers.
  collectiv jsonld ARTICLE    Full Schema.org JSON-LD payload for the article.
"""

from __future__ import annotations

import json
from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel
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
from collectiv.schema.answers import extract_atomic_answers, generate_answer_first_summary
from collectiv.schema.jsonld import build_article_document


def answers_cmd(
    article: Annotated[str, typer.Argument(help="Article id, slug or title.")],
    corpus: CorpusOption = DEFAULT_CORPUS,
    as_json: JsonOption = False,
) -> None:
    """Extract citation-sized atomic answers from an article."""
    cfg = load_cfg()
    articles = load_articles(corpus)
    target = resolve_article(articles, article)

    summary = generate_answer_first_summary(target.content, cfg.answers.summary_words)
    answers = extract_atomic_answers(
        target.content,
        target.slug,
        min_words=cfg.answers.min_words,
        max_words=cfg.answers.max_words,
        confidence=cfg.answers.confidence,
    )

    if as_json:
        payload = {"answerFirst": summary, "atomicAnswers": [a.to_dict() for a in answers]}
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(
        Panel(escape(summary) or "[dim](no complete sentences)[/]", title="[bold]Summary[/]")
    )
    if not answers:
        console.print("[dim]No atomic answers — content too short for a 40-60 word block.[/]")
        return

    table = Table(title=f"{len(answers)} atomic answer(s)")
    table.add_column("Id", style="bold")
    table.add_column("Words", justify="right")
    table.add_column("Topics", style="dim")
    table.add_column("Answer")
    for a in answers:
        table.add_row(
            escape(a.id), str(a.word_count), escape(", ".join(a.related_topics)), escape(a.answer)
        )
    console.print(table)


def jsonld_cmd(
    article: Annotated[str, typer.Argument(help="Article id, slug or title.")],
    corpus: CorpusOption = DEFAULT_CORPUS,
) -> None:
    """Print the Schema.org JSON-LD document for an article."""
    cfg = load_cfg()
    articles = load_articles(corpus)
    target = resolve_article(articles, article)
    document = build_article_document(
        target,
        base_url=cfg.site.base_url,
        site_name=cfg.site.name,
        summary_words=cfg.answers.summary_words,
        min_words=cfg.answers.min_words,
        max_words=cfg.answers.max_words,
        confidence=cfg.answers.confidence,
    )
    typer.echo(json.dumps(document, indent=2, ensure_ascii=False))
