"""Wiki-link helpers: ``[[Article Name]]`` markers and URL slugs."""

from __future__ import annotations

import re
from dataclasses import dataclass

_WIKI_LINK_RE = re.compile(r"\[\[([^\]]+)\]\]")


@dataclass
class WikiLink:
    text: str
    slug: str


def slugify(text: str) -> str:
    """Convert *text* to a URL-friendly slug.

    >>> slugify("  Quantum Computing: An Intro ")
    'quantum-computing-an-intro'
    """
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_]+", "-", slug)
    return slug.strip("-")


def extract_wiki_links(content: str) -> list[WikiLink]:
    """Return every ``[[...]]`` marker in *content*, in order, duplicates kept."""
    return [
        WikiLink(text=m.group(1), slug=slugify(m.group(1)))
        for m in _WIKI_LINK_RE.finditer(content)
    ]


def extract_internal_references(content: str) -> list[str]:
    """Return referenced article titles, lowercased and de-duplicated.

    Order is first occurrence in *content*.
    """
    references: list[str] = []
    for match in _WIKI_LINK_RE.finditer(content):
        ref = match.group(1).lower().strip()
        if ref not in references:
            references.append(ref)
    return references


def convert_wiki_links_to_markdown(content: str, base_url: str = "/article") -> str:
    """Rewrite ``[[Article Name]]`` into ``[Article Name](base_url/article-name)``."""
    base = base_url.rstrip("/")
    return _WIKI_LINK_RE.sub(
        lambda m: f"[{m.group(1)}]({base}/{slugify(m.group(1))})",
        content,
    )
