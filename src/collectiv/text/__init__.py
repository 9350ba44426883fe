"""Collectiv text analysis — keywords, entities, sentences, wiki links."""

from collectiv.text.analysis import (
    DEFAULT_ANALYZER,
    RegexAnalyzer,
    TextAnalyzer,
    extract_entities,
    extract_keywords,
    sentence_spans,
    split_sentences,
    word_count,
)
from collectiv.text.wikilinks import (
    WikiLink,
    convert_wiki_links_to_markdown,
    extract_internal_references,
    extract_wiki_links,
    slugify,
)

__all__ = [
    "DEFAULT_ANALYZER",
    "RegexAnalyzer",
    "TextAnalyzer",
    "WikiLink",
    "convert_wiki_links_to_markdown",
    "extract_entities",
    "extract_internal_references",
    "extract_keywords",
    "extract_wiki_links",
    "sentence_spans",
    "slugify",
    "split_sentences",
    "word_count",
]
