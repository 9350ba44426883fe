"""Retrieval entry points mirroring the wiki's RAG handlers.

  retrieve()        POST /api/rag/retrieve  — ranked chunks for a query within a token budget
  article_chunks()  GET  /api/rag/retrieve  — one article's chunks in order

Both accept either a caller-owned :class:`ChunkIndex` or a plain iterable of
chunks. Input-shape failures raise :class:`QueryError`; everything else
(no matches, empty corpus) yields an empty result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from collectiv.errors import QueryError
from collectiv.models import Chunk, RankedChunk, RetrievalResult
from collectiv.rag.assembler import apply_token_budget
from collectiv.rag.index import ChunkIndex
from collectiv.rag.scoring import rank_scored_chunks

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


@dataclass
class RetrieverConfig:
    """Configuration for lexical retrieval.

    Attributes:
        top_k: Maximum number of chunks to return.
        max_context_tokens: Token budget for the returned chunks.
        min_query_length: Shortest accepted query (after stripping whitespace).
        include_unmatched: Keep chunks that scored 0 when fewer than top_k matched.
    """

    top_k: int = 5
    max_context_tokens: int = 4_000
    min_query_length: int = MIN_QUERY_LENGTH
    include_unmatched: bool = False


def retrieve(
    query: str,
    source: ChunkIndex | Iterable[Chunk],
    config: RetrieverConfig | None = None,
) -> RetrievalResult:
    """Rank chunks for *query* and fit the best ones into the token budget.

    Raises:
        QueryError: If *query* is shorter than ``config.min_query_length``.
    """
    config = config or RetrieverConfig()
    _validate_query(query, config.min_query_length)

    chunks = source.all_chunks() if isinstance(source, ChunkIndex) else list(source)
    ranked = rank_scored_chunks(chunks, query, top_k=config.top_k)
    if not config.include_unmatched:
        ranked = [rc for rc in ranked if rc.relevance_score > 0]

    selected, total_tokens = apply_token_budget(
        (rc.chunk for rc in ranked), config.max_context_tokens
    )
    kept: list[RankedChunk] = ranked[: len(selected)]

    logger.debug(
        "Retrieved %d/%d chunk(s) for %r (%d tokens of %d)",
        len(kept),
        len(chunks),
        query,
        total_tokens,
        config.max_context_tokens,
    )
    return RetrievalResult(
        query=query,
        chunks=kept,
        total_tokens=total_tokens,
        max_context_tokens=config.max_context_tokens,
    )


def article_chunks(
    article_id: str,
    source: ChunkIndex | Iterable[Chunk],
    limit: int = 10,
) -> dict[str, Any]:
    """Return ``{"articleId", "chunks"}`` with up to *limit* chunks by ``chunk_index``.

    Raises:
        QueryError: If *article_id* is empty.
    """
    if not article_id or not article_id.strip():
        raise QueryError("articleId parameter required")

    if isinstance(source, ChunkIndex):
        chunks = source.chunks_for(article_id)
    else:
        chunks = sorted(
            (c for c in source if c.article_id == article_id),
            key=lambda c: c.chunk_index,
        )
    return {
        "articleId": article_id,
        "chunks": [c.to_dict() for c in chunks[: max(0, limit)]],
    }


def _validate_query(query: str, min_length: int) -> None:
    if len(query.strip()) < min_length:
        raise QueryError(f"Query must be at least {min_length} characters")
