"""Typed errors raised at the edges of the Collectiv core.

The pure functions in ``ingest``, ``rag``, ``graph`` and ``schema`` return
empty collections and zero scores for ordinary edge cases. These errors cover
caller input-shape failures and unreadable corpora only.
"""

from __future__ import annotations


class CollectivError(Exception):
    """Base class for Collectiv errors."""


class QueryError(CollectivError, ValueError):
    """Retrieval input failed validation (query too short, missing article id)."""


class CorpusError(CollectivError):
    """A corpus file or directory could not be read or parsed."""


class ArticleNotFoundError(CollectivError, KeyError):
    """No article with the requested id, slug or title exists in the corpus."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Article not found: '{self.key}'"
