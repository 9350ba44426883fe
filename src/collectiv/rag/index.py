"""In-memory chunk index owned by the caller.

The core keeps no state between calls. Callers that want to chunk a corpus
once and query it many times (a long-lived handler, the CLI) hold a
``ChunkIndex``. Keys are ``(article_id, chunk_index)``. Not thread-safe.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from collectiv.ingest.base import BaseChunker
from collectiv.ingest.chunker import SentenceChunker
from collectiv.models import Article, Chunk

logger = logging.getLogger(__name__)


class ChunkIndex:
    def __init__(self, chunker: BaseChunker | None = None) -> None:
        self.chunker = chunker or SentenceChunker()
        self._by_article: dict[str, list[Chunk]] = {}
        self._by_key: dict[tuple[str, int], Chunk] = {}

    @classmethod
    def from_articles(
        cls,
        articles: Iterable[Article],
        chunker: BaseChunker | None = None,
    ) -> ChunkIndex:
        index = cls(chunker)
        for article in articles:
            index.add_article(article)
        return index

    def add_article(self, article: Article) -> list[Chunk]:
        """Chunk *article* and store the result, replacing any earlier chunks."""
        self.remove_article(article.id)
        chunks = self.chunker.chunk(article.id, article.content, article.title)
        self._by_article[article.id] = chunks
        for chunk in chunks:
            self._by_key[(article.id, chunk.chunk_index)] = chunk
        logger.debug("Indexed %d chunk(s) for article %r", len(chunks), article.id)
        return chunks

    def remove_article(self, article_id: str) -> bool:
        """Drop every chunk of *article_id*. Returns True if anything was removed."""
        chunks = self._by_article.pop(article_id, None)
        if chunks is None:
            return False
        for chunk in chunks:
            self._by_key.pop((article_id, chunk.chunk_index), None)
        return True

    def get(self, article_id: str, chunk_index: int) -> Chunk | None:
        return self._by_key.get((article_id, chunk_index))

    def chunks_for(self, article_id: str, limit: int | None = None) -> list[Chunk]:
        """Chunks of *article_id* in ascending ``chunk_index`` order."""
        chunks = self._by_article.get(article_id, [])
        if limit is not None:
            chunks = chunks[: max(0, limit)]
        return list(chunks)

    def all_chunks(self) -> list[Chunk]:
        """Every chunk, grouped by article in insertion order."""
        return [c for chunks in self._by_article.values() for c in chunks]

    @property
    def article_ids(self) -> list[str]:
        return list(self._by_article)

    def __len__(self) -> int:
        return len(self._by_key)

    def __contains__(self, article_id: object) -> bool:
        return article_id in self._by_article

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.all_chunks())
