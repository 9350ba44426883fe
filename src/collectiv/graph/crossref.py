"""Cross-references between articles: related articles, backlinks, knowledge graph.

Two edge types connect articles:

  related     keyword-set Jaccard similarity above a threshold (symmetric score,
              but each node keeps only its own top ``max_connections`` matches)
  references  explicit ``[[Title]]`` markers, resolved by case-insensitive
              exact title match (directional)

Building the graph scores every pair of articles, so it costs O(n²) in the
number of articles. That is fine for a wiki of a few thousand pages; larger
corpora should pre-filter candidates with an inverted index over keywords.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence

from collectiv.graph.similarity import jaccard, keyword_set
from collectiv.models import (
    Article,
    BackLink,
    Connection,
    KnowledgeGraphNode,
    RelatedArticle,
)
from collectiv.text.analysis import TextAnalyzer
from collectiv.text.wikilinks import extract_internal_references

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.1
DEFAULT_MAX_CONNECTIONS = 10

KnowledgeGraph = dict[str, KnowledgeGraphNode]


def find_related_articles(
    article: Article,
    articles: Sequence[Article],
    limit: int = 5,
    threshold: float = SIMILARITY_THRESHOLD,
    analyzer: TextAnalyzer | None = None,
) -> list[RelatedArticle]:
    """Articles whose similarity to *article* exceeds *threshold*, best first.

    Equal scores keep corpus order.
    """
    if limit <= 0:
        return []
    return _related(article, articles, limit, threshold, _KeywordCache(analyzer))


def build_knowledge_graph(
    articles: Sequence[Article],
    max_connections_per_article: int = DEFAULT_MAX_CONNECTIONS,
    threshold: float = SIMILARITY_THRESHOLD,
    analyzer: TextAnalyzer | None = None,
) -> KnowledgeGraph:
    """Build the article graph, keyed by article id in corpus order.

    Each node gets its ``related`` edges first, then ``references`` edges for
    every resolvable ``[[Title]]`` marker not already present as an edge.
    Self-edges are never created. Deterministic for a given corpus order.
    """
    graph: KnowledgeGraph = {
        a.id: KnowledgeGraphNode(id=a.id, title=a.title, slug=a.slug) for a in articles
    }
    by_title: dict[str, Article] = {}
    for a in articles:
        by_title.setdefault(a.title.strip().lower(), a)

    cache = _KeywordCache(analyzer)
    for article in articles:
        node = graph[article.id]

        if max_connections_per_article > 0:
            for related in _related(
                article, articles, max_connections_per_article, threshold, cache
            ):
                node.connections.append(Connection(target_id=related.id, type="related"))

        for ref in extract_internal_references(article.content):
            target = by_title.get(ref)
            if target is None or target.id == article.id or node.has_edge_to(target.id):
                continue
            node.connections.append(Connection(target_id=target.id, type="references"))

    logger.debug(
        "Built knowledge graph: %d node(s), %d edge(s)",
        len(graph),
        sum(len(n.connections) for n in graph.values()),
    )
    return graph


def find_backlinks(title: str, articles: Sequence[Article]) -> list[BackLink]:
    """Articles whose ``[[...]]`` references include *title* (case-insensitive)."""
    wanted = title.strip().lower()
    return [
        BackLink(id=a.id, title=a.title, slug=a.slug)
        for a in articles
        if wanted in extract_internal_references(a.content)
    ]


def get_recommendations(
    article_id: str,
    graph: KnowledgeGraph,
    limit: int = 5,
) -> list[KnowledgeGraphNode]:
    """Breadth-first neighbours of *article_id*, nearest first, at most *limit*.

    Edges of both types are followed. Only nodes reachable from the start
    node are returned; the start node itself never is.
    """
    if article_id not in graph or limit <= 0:
        return []

    found: list[KnowledgeGraphNode] = []
    visited = {article_id}
    queue = deque([article_id])

    while queue and len(found) < limit:
        node = graph.get(queue.popleft())
        if node is None:
            continue
        for connection in node.connections:
            target = connection.target_id
            if target in visited or target not in graph:
                continue
            visited.add(target)
            found.append(graph[target])
            if len(found) >= limit:
                break
            queue.append(target)

    return found


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------


class _KeywordCache:
    """Memoises keyword sets per article id for one graph build."""

    def __init__(self, analyzer: TextAnalyzer | None) -> None:
        self._analyzer = analyzer
        self._sets: dict[str, set[str]] = {}

    def get(self, article: Article) -> set[str]:
        if article.id not in self._sets:
            self._sets[article.id] = keyword_set(article.content, self._analyzer)
        return self._sets[article.id]


def _related(
    article: Article,
    articles: Sequence[Article],
    limit: int,
    threshold: float,
    cache: _KeywordCache,
) -> list[RelatedArticle]:
    own = cache.get(article)
    scored: list[RelatedArticle] = []
    for other in articles:
        if other.id == article.id:
            continue
        score = jaccard(own, cache.get(other))
        if score > threshold:
            scored.append(
                RelatedArticle(
                    id=other.id,
                    title=other.title,
                    slug=other.slug,
                    relevance_score=score,
                    description=other.description,
                )
            )
    scored.sort(key=lambda r: r.relevance_score, reverse=True)
    return scored[:limit]
