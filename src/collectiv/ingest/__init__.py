"""Collectiv ingest pipeline — token estimation and article chunking."""

from collectiv.ingest.base import BaseChunker
from collectiv.ingest.chunker import (
    SentenceChunker,
    chunk_content,
    create_rag_metadata,
    optimize_for_retrieval,
    prepare_for_indexing,
)
from collectiv.ingest.tokens import count_tokens, estimate_tokens

__all__ = [
    "BaseChunker",
    "SentenceChunker",
    "chunk_content",
    "count_tokens",
    "create_rag_metadata",
    "estimate_tokens",
    "optimize_for_retrieval",
    "prepare_for_indexing",
]
