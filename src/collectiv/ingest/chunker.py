"""Sentence-window chunker with character overlap.

Strategy:
- Split the article into sentences at ``.``/``!``/``?`` followed by whitespace.
- Greedily grow a window of whole sentences while it fits in ``chunk_size``
  characters.
- When the next sentence would overflow a non-empty window, emit the window
  and start the next one ``overlap_size`` characters before its end.
- A sentence longer than ``chunk_size`` becomes its own oversized chunk; it is
  never split mid-sentence.

Every chunk's content is the exact slice ``content[start_char:end_char]`` of
the article body: the first chunk starts at 0, the last ends at
``len(content)``, and consecutive windows share exactly ``overlap_size``
characters (less only when the previous window was shorter than that).
"""

from __future__ import annotations

import bisect
import logging
import re
from typing import Any

from collectiv.ingest.base import BaseChunker, validate_sizes
from collectiv.ingest.tokens import count_tokens, estimate_tokens
from collectiv.models import Article, Chunk, ChunkMetadata
from collectiv.text.analysis import sentence_spans

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024
DEFAULT_OVERLAP_SIZE = 128

# Matches H1, H2, H3 headings at the start of a line.
_HEADING_RE = re.compile(r"^#{1,3} +(.+?)\s*$", re.MULTILINE)
_PARAGRAPH_BREAK_RE = re.compile(r"\n\n+")


class SentenceChunker(BaseChunker):
    """Config-driven wrapper around :func:`chunk_content`."""

    def chunk(self, article_id: str, content: str, title: str = "") -> list[Chunk]:
        return chunk_content(
            content,
            chunk_size=self.chunk_size,
            overlap_size=self.overlap_size,
            article_id=article_id,
            title=title,
        )


def chunk_content(
    content: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap_size: int = DEFAULT_OVERLAP_SIZE,
    article_id: str = "",
    title: str = "",
) -> list[Chunk]:
    """Split *content* into overlapping, sentence-aligned chunks.

    Raises:
        ValueError: If ``chunk_size < 1``, ``overlap_size < 0`` or
            ``overlap_size >= chunk_size``.
    """
    validate_sizes(chunk_size, overlap_size)
    if not content.strip():
        return []

    windows: list[tuple[int, int]] = []
    start = 0
    end: int | None = None

    for _, sent_end in sentence_spans(content):
        if end is None:
            end = sent_end
            continue
        if sent_end - start > chunk_size:
            windows.append((start, end))
            start = max(start, end - overlap_size)
        end = sent_end

    # Last window absorbs any trailing whitespace.
    windows.append((start, len(content)))

    sections = _Sections(content)
    chunks = [
        Chunk(
            id=f"{article_id}-chunk-{i}",
            article_id=article_id,
            chunk_index=i,
            content=content[s:e],
            metadata=ChunkMetadata(
                title=title,
                token_count=count_tokens(content[s:e]),
                start_char=s,
                end_char=e,
                section=sections.at(s),
            ),
        )
        for i, (s, e) in enumerate(windows)
    ]
    logger.debug(
        "Chunked article %r into %d chunk(s) (chunk_size=%d, overlap_size=%d)",
        article_id,
        len(chunks),
        chunk_size,
        overlap_size,
    )
    return chunks


class _Sections:
    """Looks up the nearest H1-H3 heading at or before a character offset."""

    def __init__(self, content: str) -> None:
        matches = list(_HEADING_RE.finditer(content))
        self._starts = [m.start() for m in matches]
        self._titles = [m.group(1).strip() for m in matches]

    def at(self, offset: int) -> str | None:
        i = bisect.bisect_right(self._starts, offset)
        return self._titles[i - 1] if i else None


# ------------------------------------------------------------------
# Paragraph packing
# ------------------------------------------------------------------


def optimize_for_retrieval(
    content: str,
    min_chunk_size: int = 512,
    max_chunk_size: int = 2048,
) -> list[str]:
    """Pack paragraphs into retrieval-sized pieces.

    Paragraphs (separated by blank lines) are joined until the next one would
    push a piece past *max_chunk_size* characters. Pieces shorter than
    *min_chunk_size* are then merged into the preceding piece. A paragraph
    longer than *max_chunk_size* stays whole.
    """
    if not content.strip():
        return []

    pieces: list[str] = []
    current = ""
    for paragraph in _PARAGRAPH_BREAK_RE.split(content):
        if len(current) + len(paragraph) > max_chunk_size:
            if current:
                pieces.append(current)
            current = paragraph
        else:
            current = f"{current}\n\n{paragraph}" if current else paragraph
    if current:
        pieces.append(current)

    merged: list[str] = []
    for piece in pieces:
        if len(piece) < min_chunk_size and merged:
            merged[-1] += "\n\n" + piece
        else:
            merged.append(piece)
    return merged


# ------------------------------------------------------------------
# Indexing preparation
# ------------------------------------------------------------------


def create_rag_metadata(article: Article) -> dict[str, Any]:
    """Describe *article* for a retrieval index (length, token estimate, keywords)."""
    estimate = estimate_tokens(article.content)
    return {
        "articleId": article.id,
        "title": article.title,
        "category": article.category,
        "keywords": list(article.keywords),
        "length": len(article.content),
        "estimatedTokens": estimate.approximate,
        "tokenRange": {"min": estimate.min, "max": estimate.max},
        "language": "en",
        "type": "wiki_article",
        "retrievable": True,
    }


def prepare_for_indexing(
    article: Article,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap_size: int = DEFAULT_OVERLAP_SIZE,
) -> tuple[list[Chunk], dict[str, Any]]:
    """Chunk *article* and build its index metadata in one call."""
    chunks = chunk_content(article.content, chunk_size, overlap_size, article.id, article.title)
    return chunks, create_rag_metadata(article)
