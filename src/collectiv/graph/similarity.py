"""Article similarity: Jaccard overlap of top-10 keyword sets."""

from __future__ import annotations

from collectiv.text.analysis import DEFAULT_ANALYZER, DEFAULT_MAX_KEYWORDS, TextAnalyzer


def jaccard(a: set[str], b: set[str]) -> float:
    """``|A∩B| / |A∪B|``; 0.0 when both sets are empty."""
    intersection = len(a & b)
    union = len(a) + len(b) - intersection
    return 0.0 if union == 0 else intersection / union


def keyword_set(content: str, analyzer: TextAnalyzer | None = None) -> set[str]:
    analyzer = analyzer or DEFAULT_ANALYZER
    return set(analyzer.extract_keywords(content, DEFAULT_MAX_KEYWORDS))


def calculate_similarity(
    content_a: str,
    content_b: str,
    analyzer: TextAnalyzer | None = None,
) -> float:
    """Similarity of two article bodies in [0, 1]."""
    return jaccard(keyword_set(content_a, analyzer), keyword_set(content_b, analyzer))
