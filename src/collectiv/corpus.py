"""Article corpus loader.

A corpus is either:
  - a directory of Markdown files (*.md, *.markdown), each with optional YAML
    front matter between ``---`` lines, or
  - a single .md file, or
  - a .json / .yaml / .yml file holding a list of article mappings (or a
    mapping with an ``articles:`` list).

Front matter / mapping keys: id, title, category, keywords, slug, description,
author, url, image, created_at (or date), updated_at. A Markdown file without
an ``id`` uses its file stem; without a ``title`` it uses its first H1 heading,
then the stem.

Usage:
    articles = load_corpus(Path("articles"))
    article = find_article(articles, "quantum-computing")
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml

from collectiv.errors import ArticleNotFoundError, CorpusError
from collectiv.models import Article

logger = logging.getLogger(__name__)

_MD_EXTS = {".md", ".markdown"}
_DATA_EXTS = {".json", ".yaml", ".yml"}

_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_H1_RE = re.compile(r"^# +(.+?)\s*$", re.MULTILINE)


def load_corpus(path: Path) -> list[Article]:
    """Load every article under *path*.

    Raises:
        CorpusError: If *path* does not exist, has an unsupported type, a file
            cannot be parsed, or two articles share an id.
    """
    if not path.exists():
        raise CorpusError(f"Corpus path does not exist: '{path}'")

    if path.is_dir():
        files = sorted(p for p in path.iterdir() if p.is_file() and p.suffix.lower() in _MD_EXTS)
        articles = [parse_markdown_article(p) for p in files]
    elif path.suffix.lower() in _MD_EXTS:
        articles = [parse_markdown_article(path)]
    elif path.suffix.lower() in _DATA_EXTS:
        articles = _load_data_file(path)
    else:
        raise CorpusError(f"Unsupported corpus file type: '{path.suffix}' ({path})")

    _check_unique_ids(articles)
    logger.debug("Loaded %d article(s) from %s", len(articles), path)
    return articles


def parse_markdown_article(path: Path) -> Article:
    """Parse one Markdown file with optional YAML front matter."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CorpusError(f"Cannot read '{path}': {exc}") from exc

    meta: dict[str, Any] = {}
    body = text
    match = _FRONT_MATTER_RE.match(text)
    if match:
        try:
            loaded = yaml.safe_load(match.group(1)) or {}
        except yaml.YAMLError as exc:
            raise CorpusError(f"Invalid front matter in '{path}': {exc}") from exc
        if not isinstance(loaded, dict):
            raise CorpusError(f"Front matter in '{path}' must be a mapping.")
        meta = loaded
        body = text[match.end():]

    if "title" not in meta:
        h1 = _H1_RE.search(body)
        meta["title"] = h1.group(1) if h1 else path.stem
    meta.setdefault("id", path.stem)
    return article_from_mapping(meta, content=body.strip(), source=str(path))


def article_from_mapping(
    data: dict[str, Any],
    content: str | None = None,
    source: str = "<mapping>",
) -> Article:
    """Build an Article from a front-matter or JSON/YAML mapping."""
    if "id" not in data or "title" not in data:
        raise CorpusError(f"Article in {source} is missing 'id' or 'title'.")

    keywords = data.get("keywords") or []
    if isinstance(keywords, str):
        keywords = [k.strip() for k in keywords.split(",") if k.strip()]
    elif not isinstance(keywords, list):
        raise CorpusError(f"'keywords' in {source} must be a list or comma-separated string.")

    return Article(
        id=str(data["id"]),
        title=str(data["title"]),
        content=content if content is not None else str(data.get("content", "")),
        category=str(data.get("category") or ""),
        keywords=[str(k) for k in keywords],
        slug=str(data.get("slug") or ""),
        description=str(data.get("description") or ""),
        author=_opt_str(data.get("author")),
        url=_opt_str(data.get("url")),
        image=_opt_str(data.get("image")),
        created_at=_iso(data.get("created_at", data.get("date"))),
        updated_at=_iso(data.get("updated_at")),
    )


def find_article(articles: Sequence[Article], key: str) -> Article:
    """Look up an article by id, then slug, then case-insensitive title.

    Raises:
        ArticleNotFoundError: If nothing matches.
    """
    for article in articles:
        if article.id == key:
            return article
    for article in articles:
        if article.slug == key:
            return article
    wanted = key.strip().lower()
    for article in articles:
        if article.title.strip().lower() == wanted:
            return article
    raise ArticleNotFoundError(key)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_data_file(path: Path) -> list[Article]:
    try:
        text = path.read_text(encoding="utf-8")
        raw = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CorpusError(f"Cannot parse corpus file '{path}': {exc}") from exc

    if isinstance(raw, dict):
        raw = raw.get("articles")
    if not isinstance(raw, list):
        raise CorpusError(
            f"Corpus file '{path}' must contain a list of articles "
            "or a mapping with an 'articles' list."
        )

    articles: list[Article] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise CorpusError(f"Entry {i} in '{path}' is not a mapping.")
        articles.append(article_from_mapping(item, source=f"{path} entry {i}"))
    return articles


def _check_unique_ids(articles: Sequence[Article]) -> None:
    seen: set[str] = set()
    for article in articles:
        if article.id in seen:
            raise CorpusError(f"Duplicate article id: '{article.id}'")
        seen.add(article.id)


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


def _iso(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)
