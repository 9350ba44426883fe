"""Lexical relevance scoring and chunk ranking.

The score is raw term-frequency density: whole-word occurrences of each query
term in the text, summed and divided by the number of query terms. There is
no IDF weighting, which is fine for a small wiki corpus; callers that need
precision at scale should substitute a proper IR scorer (BM25 or dense).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from collectiv.models import Chunk, RankedChunk


def calculate_similarity_score(query: str, content: str) -> float:
    """Score *content* against *query*; 0.0 when nothing matches.

    Terms are matched case-insensitively on word boundaries.
    """
    terms = query.lower().split()
    if not terms:
        return 0.0

    matches = 0
    for term in terms:
        pattern = re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)
        matches += len(pattern.findall(content))
    return matches / max(len(terms), 1)


def score_chunks(chunks: Iterable[Chunk], query: str) -> list[RankedChunk]:
    """Attach a relevance score to every chunk, preserving input order."""
    return [
        RankedChunk(chunk=chunk, relevance_score=calculate_similarity_score(query, chunk.content))
        for chunk in chunks
    ]


def rank_scored_chunks(chunks: Iterable[Chunk], query: str, top_k: int = 5) -> list[RankedChunk]:
    """Return the *top_k* best-scoring chunks, best first.

    Equal scores keep their input order (``sorted`` is stable with
    ``reverse=True``), so chunks of one article stay in ``chunk_index`` order.
    """
    if top_k <= 0:
        return []
    scored = score_chunks(chunks, query)
    scored.sort(key=lambda rc: rc.relevance_score, reverse=True)
    return scored[:top_k]


def rank_chunks_for_query(chunks: Iterable[Chunk], query: str, top_k: int = 5) -> list[Chunk]:
    """Like :func:`rank_scored_chunks` but returns the bare chunks."""
    return [rc.chunk for rc in rank_scored_chunks(chunks, query, top_k)]
