"""Lexical text analysis: keywords, entities, sentences.

All extraction here is regex/frequency based. It is a stand-in for real NLP,
so callers that need better quality can pass their own ``TextAnalyzer`` to
the similarity, graph and atomic-answer functions.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

DEFAULT_MAX_KEYWORDS = 10

# Tokens of this length or shorter never become keywords.
_MIN_KEYWORD_EXCLUSIVE = 4

_PUNCT_RE = re.compile(r"[^\w\s]")
# Sentence = run of non-terminators followed by one or more terminators.
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
# Sentence break = terminator followed by whitespace.
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+")
_ENTITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\b([A-Z][a-z]+ [A-Z][a-z]+)\b"),  # proper nouns
    re.compile(r"\b(the [a-z]+)\b", re.IGNORECASE),  # "the" + noun
)


@runtime_checkable
class TextAnalyzer(Protocol):
    """Capability set needed by similarity, graph building and atomic answers."""

    def extract_keywords(self, content: str, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> list[str]:
        ...

    def extract_entities(self, text: str) -> list[str]:
        ...


class RegexAnalyzer:
    """Default analyzer: word-frequency keywords and regex entity patterns."""

    def extract_keywords(self, content: str, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> list[str]:
        """Return the *max_keywords* most frequent words longer than 4 characters.

        Ties keep first-seen order: dicts preserve insertion order and
        ``sorted()`` is stable, including with ``reverse=True``.
        """
        if max_keywords <= 0:
            return []
        words = _PUNCT_RE.sub("", content.lower()).split()

        frequency: dict[str, int] = {}
        for word in words:
            if len(word) > _MIN_KEYWORD_EXCLUSIVE:
                frequency[word] = frequency.get(word, 0) + 1

        ranked = sorted(frequency.items(), key=lambda kv: kv[1], reverse=True)
        return [word for word, _ in ranked[:max_keywords]]

    def extract_entities(self, text: str) -> list[str]:
        """Capitalised two-word sequences and "the <word>" phrases, lowercased."""
        entities: dict[str, None] = {}
        for pattern in _ENTITY_PATTERNS:
            for match in pattern.finditer(text):
                entities.setdefault(match.group(1).lower(), None)
        return list(entities)


DEFAULT_ANALYZER: TextAnalyzer = RegexAnalyzer()


def extract_keywords(content: str, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> list[str]:
    return DEFAULT_ANALYZER.extract_keywords(content, max_keywords)


def extract_entities(text: str) -> list[str]:
    return DEFAULT_ANALYZER.extract_entities(text)


def split_sentences(content: str) -> list[str]:
    """Split *content* into stripped sentences ending in ``.``, ``!`` or ``?``.

    Trailing text without a terminator is not a sentence and is ignored.
    """
    return [s.strip() for s in _SENTENCE_RE.findall(content) if s.strip()]


def word_count(text: str) -> int:
    return len(text.split())


def sentence_spans(content: str) -> list[tuple[int, int]]:
    """Return (start, end) offsets of each sentence in *content*.

    Sentences end at ``.``/``!``/``?`` followed by whitespace; the whitespace
    between sentences belongs to neither span. Text after the last terminator
    is a final span of its own.
    """
    spans: list[tuple[int, int]] = []
    pos = 0
    for match in _SENTENCE_BREAK_RE.finditer(content):
        if match.start() > pos:
            spans.append((pos, match.start()))
        pos = match.end()
    if pos < len(content):
        spans.append((pos, len(content)))
    return spans
