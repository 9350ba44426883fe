"""Shared CLI helpers: option types, config + corpus loading with friendly exits."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from collectiv.cli.errors import (
    err_article_not_found,
    err_config_invalid,
    err_corpus_invalid,
    err_no_corpus,
)
from collectiv.config import CollectivConfig, ConfigError, load_config
from collectiv.corpus import find_article, load_corpus
from collectiv.errors import ArticleNotFoundError, CorpusError
from collectiv.ingest.chunker import SentenceChunker
from collectiv.models import Article
from collectiv.rag.index import ChunkIndex

console = Console()

DEFAULT_CORPUS = Path("articles")

CorpusOption = Annotated[
    Path,
    typer.Option(
        "--corpus",
        "-c",
        help="Directory of Markdown articles, or a .json/.yaml article list.",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print machine-readable JSON instead of a table."),
]


def load_cfg() -> CollectivConfig:
    try:
        return load_config()
    except ConfigError as exc:
        console.print(err_config_invalid(str(exc)))
        raise typer.Exit(1)


def load_articles(corpus: Path) -> list[Article]:
    if not corpus.exists():
        console.print(err_no_corpus(str(corpus)))
        raise typer.Exit(1)
    try:
        return load_corpus(corpus)
    except CorpusError as exc:
        console.print(err_corpus_invalid(str(exc)))
        raise typer.Exit(1)


def resolve_article(articles: list[Article], key: str) -> Article:
    try:
        return find_article(articles, key)
    except ArticleNotFoundError:
        console.print(err_article_not_found(key, [a.id for a in articles]))
        raise typer.Exit(1)


def build_index(articles: list[Article], cfg: CollectivConfig) -> ChunkIndex:
    chunker = SentenceChunker(cfg.chunking.chunk_size, cfg.chunking.overlap_size)
    return ChunkIndex.from_articles(articles, chunker)


def preview(text: str, width: int = 60) -> str:
    flat = " ".join(text.split())
    return escape(flat if len(flat) <= width else flat[: width - 1] + "…")
