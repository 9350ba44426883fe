"""Collectiv knowledge graph — similarity, related articles, backlinks."""

from collectiv.graph.crossref import (
    KnowledgeGraph,
    build_knowledge_graph,
    find_backlinks,
    find_related_articles,
    get_recommendations,
)
from collectiv.graph.similarity import calculate_similarity, jaccard

__all__ = [
    "KnowledgeGraph",
    "build_knowledge_graph",
    "calculate_similarity",
    "find_backlinks",
    "find_related_articles",
    "get_recommendations",
    "jaccard",
]
