"""Base chunker interface for article content."""

from __future__ import annotations

from abc import ABC, abstractmethod

from collectiv.ingest.tokens import count_tokens
from collectiv.models import Chunk


class BaseChunker(ABC):
    """Abstract base for article chunkers.

    Sizes are in characters. ``overlap_size`` characters of every emitted
    chunk are repeated at the start of the next one, so the overlap must be
    strictly smaller than the chunk size or chunking would make no progress.
    """

    def __init__(self, chunk_size: int = 1024, overlap_size: int = 128) -> None:
        validate_sizes(chunk_size, overlap_size)
        self.chunk_size = chunk_size
        self.overlap_size = overlap_size

    @abstractmethod
    def chunk(self, article_id: str, content: str, title: str = "") -> list[Chunk]:
        """Split *content* into Chunk objects for *article_id*.

        Args:
            article_id: Id of the parent article.
            content: Full article body (plain text or Markdown).
            title: Article title, copied into every chunk's metadata.

        Returns:
            Ordered list of Chunk objects with sequential ``chunk_index``.
        """

    @staticmethod
    def count_tokens(text: str) -> int:
        return count_tokens(text)


def validate_sizes(chunk_size: int, overlap_size: int) -> None:
    """Raise ValueError unless ``0 <= overlap_size < chunk_size``."""
    if chunk_size < 1:
        raise ValueError("chunk_size must be >= 1")
    if overlap_size < 0:
        raise ValueError("overlap_size must be >= 0")
    if overlap_size >= chunk_size:
        raise ValueError(
            f"overlap_size ({overlap_size}) must be smaller than chunk_size ({chunk_size})"
        )
