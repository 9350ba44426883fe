"""Atomic answers and answer-first summaries for machine citation.

An atomic answer is a run of whole sentences of 40-60 words that can be
quoted on its own. Sentences are packed greedily; a run that ends up outside
the word band (a short tail, or one sentence longer than the upper bound) is
dropped rather than emitted.

``related_topics`` come from the analyzer's entity heuristics and
``confidence`` is a fixed placeholder for a real E-E-A-T trust score.
"""

from __future__ import annotations

from collectiv.models import AtomicAnswer
from collectiv.text.analysis import DEFAULT_ANALYZER, TextAnalyzer, split_sentences, word_count
from collectiv.text.wikilinks import slugify

MIN_ANSWER_WORDS = 40
MAX_ANSWER_WORDS = 60
DEFAULT_CONFIDENCE = 0.95


def heading_id(heading: str) -> str:
    """Slug of *heading*, safe to use as a URL fragment."""
    return slugify(heading)


def extract_atomic_answers(
    content: str,
    heading: str,
    analyzer: TextAnalyzer | None = None,
    min_words: int = MIN_ANSWER_WORDS,
    max_words: int = MAX_ANSWER_WORDS,
    confidence: float = DEFAULT_CONFIDENCE,
) -> list[AtomicAnswer]:
    """Segment *content* into atomic answers with ids ``{heading-id}-{n}``."""
    analyzer = analyzer or DEFAULT_ANALYZER
    prefix = heading_id(heading)
    answers: list[AtomicAnswer] = []
    buffer: list[str] = []
    words = 0

    def flush() -> None:
        if not buffer or not min_words <= words <= max_words:
            return
        text = " ".join(buffer)
        answers.append(
            AtomicAnswer(
                id=f"{prefix}-{len(answers)}",
                heading=heading,
                answer=text,
                related_topics=analyzer.extract_entities(text),
                confidence=confidence,
            )
        )

    for sentence in split_sentences(content):
        n = word_count(sentence)
        if words + n > max_words and buffer:
            flush()
            buffer, words = [], 0
        buffer.append(sentence)
        words += n

    flush()
    return answers


def generate_answer_first_summary(content: str, target_word_count: int = 50) -> str:
    """Leading whole sentences of *content*, up to ``target_word_count + 10`` words."""
    limit = target_word_count + 10
    summary: list[str] = []
    words = 0
    for sentence in split_sentences(content):
        n = word_count(sentence)
        if words + n > limit:
            break
        summary.append(sentence)
        words += n
    return " ".join(summary)
