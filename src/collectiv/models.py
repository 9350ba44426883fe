"""Value objects shared by the Collectiv retrieval, graph and schema layers.

Every model is a plain dataclass computed per call from the caller's article
corpus. ``to_dict()`` returns the camelCase JSON shape served by the wiki's
HTTP handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from collectiv.text.wikilinks import slugify

ConnectionType = Literal["references", "related"]


@dataclass
class Article:
    """A wiki article supplied by the storage layer.

    Only ``id``, ``title`` and ``content`` are required. ``slug`` is derived
    from the title when left empty. The remaining optional fields are used
    by JSON-LD generation only.
    """

    id: str
    title: str
    content: str
    category: str = ""
    keywords: list[str] = field(default_factory=list)
    slug: str = ""
    description: str = ""
    author: str | None = None
    url: str | None = None
    image: str | None = None
    created_at: str | None = None  # ISO-8601
    updated_at: str | None = None

    def __post_init__(self) -> None:
        if not self.slug:
            self.slug = slugify(self.title)


@dataclass
class TokenEstimate:
    approximate: int
    min: int
    max: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "approximate": self.approximate,
            "range": {"min": self.min, "max": self.max},
        }


@dataclass
class ChunkMetadata:
    title: str
    token_count: int
    start_char: int
    end_char: int
    section: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "tokens": self.token_count,
            "startChar": self.start_char,
            "endChar": self.end_char,
        }
        if self.section is not None:
            data["section"] = self.section
        return data


@dataclass
class Chunk:
    id: str
    article_id: str
    chunk_index: int
    content: str
    metadata: ChunkMetadata

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "articleId": self.article_id,
            "chunkIndex": self.chunk_index,
            "content": self.content,
            "metadata": self.metadata.to_dict(),
        }


@dataclass
class RankedChunk:
    """A chunk together with its lexical relevance score for one query.

    Attributes:
        chunk: The ranked chunk.
        relevance_score: Term-frequency density (>= 0, not normalised).
    """

    chunk: Chunk
    relevance_score: float

    def to_dict(self) -> dict[str, Any]:
        data = self.chunk.to_dict()
        data["relevanceScore"] = self.relevance_score
        return data


@dataclass
class Connection:
    target_id: str
    type: ConnectionType

    def to_dict(self) -> dict[str, Any]:
        return {"nodeId": self.target_id, "type": self.type}


@dataclass
class KnowledgeGraphNode:
    id: str
    title: str
    slug: str
    connections: list[Connection] = field(default_factory=list)

    def has_edge_to(self, target_id: str) -> bool:
        return any(c.target_id == target_id for c in self.connections)

    def edges(self, type: ConnectionType) -> list[Connection]:
        return [c for c in self.connections if c.type == type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "connections": [c.to_dict() for c in self.connections],
        }


@dataclass
class RelatedArticle:
    id: str
    title: str
    slug: str
    relevance_score: float
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "relevanceScore": self.relevance_score,
        }


@dataclass
class BackLink:
    id: str
    title: str
    slug: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "slug": self.slug}


@dataclass
class AtomicAnswer:
    """A 40-60 word self-contained answer block for machine citation.

    ``confidence`` is a fixed placeholder, not a computed trust score.
    """

    id: str
    heading: str
    answer: str
    related_topics: list[str] = field(default_factory=list)
    confidence: float = 0.95

    @property
    def word_count(self) -> int:
        return len(self.answer.split())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "heading": self.heading,
            "answer": self.answer,
            "relatedTopics": list(self.related_topics),
            "confidence": self.confidence,
        }


@dataclass
class RetrievalResult:
    query: str
    chunks: list[RankedChunk] = field(default_factory=list)
    total_tokens: int = 0
    max_context_tokens: int = 4_000

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    @property
    def available_tokens(self) -> int:
        return max(0, self.max_context_tokens - self.total_tokens)

    def to_dict(self) -> dict[str, Any]:
        return {
            "query": self.query,
            "chunks": [rc.to_dict() for rc in self.chunks],
            "metadata": {
                "totalChunks": self.total_chunks,
                "totalTokens": self.total_tokens,
                "maxContextTokens": self.max_context_tokens,
                "availableTokens": self.available_tokens,
            },
        }
