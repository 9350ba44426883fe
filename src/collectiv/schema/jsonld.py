"""Schema.org JSON-LD documents for articles (Article, BreadcrumbList, FAQPage, HowTo).

``build_article_document()`` produces the payload of the article JSON-LD
handler: article summary fields, atomic answers, and the ``@graph`` document.
Keys whose value is None are omitted, as they would be by a JSON encoder
that skips undefined fields.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any
from urllib.parse import urlsplit

from collectiv.models import Article, AtomicAnswer
from collectiv.schema.answers import (
    DEFAULT_CONFIDENCE,
    MAX_ANSWER_WORDS,
    MIN_ANSWER_WORDS,
    extract_atomic_answers,
    generate_answer_first_summary,
)
from collectiv.text.analysis import TextAnalyzer

SCHEMA_CONTEXT = "https://schema.org"
DEFAULT_BASE_URL = "http://localhost:3000"


def article_url(article: Article, base_url: str = DEFAULT_BASE_URL) -> str:
    return article.url or f"{base_url.rstrip('/')}/articles/{article.slug}"


def generate_article_schema(
    article: Article,
    base_url: str = DEFAULT_BASE_URL,
    site_name: str = "Collectiv",
    atomic_answers: Sequence[AtomicAnswer] = (),
    summary: str | None = None,
) -> dict[str, Any]:
    url = article_url(article, base_url)
    schema: dict[str, Any] = {
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
        "headline": article.title,
        "description": article.description,
        "image": article.image or f"{url}/og-image.png",
        "datePublished": article.created_at,
        "dateModified": article.updated_at,
        "author": {"@type": "Person", "name": article.author} if article.author else None,
        "publisher": {"@type": "Organization", "name": site_name},
        "mainEntity": {"@type": "Thing", "text": article.description},
        "abstract": summary or None,
        "articleBody": article.content,
        "keywords": list(article.keywords),
    }
    if atomic_answers:
        schema["hasPart"] = [
            {
                "@type": "WebPageElement",
                "@id": f"{url}#{answer.id}",
                "name": answer.heading,
                "text": answer.answer,
                "about": list(answer.related_topics),
            }
            for answer in atomic_answers
        ]
    return _compact(schema)


def generate_breadcrumbs(article: Article, base_url: str = DEFAULT_BASE_URL) -> dict[str, Any]:
    url = article_url(article, base_url)
    parts = urlsplit(url)
    home = f"{parts.scheme}://{parts.netloc}" if parts.netloc else base_url.rstrip("/")
    return {
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": 1, "name": "Home", "item": home},
            {
                "@type": "ListItem",
                "position": 2,
                "name": article.category or "Articles",
                "item": f"{home}/category/{article.category}",
            },
            {"@type": "ListItem", "position": 3, "name": article.title, "item": url},
        ],
    }


def generate_full_article_json(
    article: Article,
    atomic_answers: Sequence[AtomicAnswer] = (),
    summary: str | None = None,
    base_url: str = DEFAULT_BASE_URL,
    site_name: str = "Collectiv",
) -> dict[str, Any]:
    """Article + BreadcrumbList ``@graph`` document."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@graph": [
            generate_article_schema(article, base_url, site_name, atomic_answers, summary),
            generate_breadcrumbs(article, base_url),
        ],
    }


def generate_faq_schema(faqs: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """FAQPage from ``(question, answer)`` pairs."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": question,
                "acceptedAnswer": {"@type": "Answer", "text": answer},
            }
            for question, answer in faqs
        ],
    }


def generate_howto_schema(title: str, steps: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """HowTo from ``(name, description)`` steps, positions starting at 1."""
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "HowTo",
        "name": title,
        "step": [
            {"@type": "HowToStep", "position": i, "name": name, "text": description}
            for i, (name, description) in enumerate(steps, start=1)
        ],
    }


def build_article_document(
    article: Article,
    base_url: str = DEFAULT_BASE_URL,
    site_name: str = "Collectiv",
    summary_words: int = 50,
    analyzer: TextAnalyzer | None = None,
    min_words: int = MIN_ANSWER_WORDS,
    max_words: int = MAX_ANSWER_WORDS,
    confidence: float = DEFAULT_CONFIDENCE,
) -> dict[str, Any]:
    """Full JSON-LD handler payload for *article*.

    Atomic answers are keyed by the article slug.
    """
    answers = extract_atomic_answers(
        article.content,
        article.slug,
        analyzer=analyzer,
        min_words=min_words,
        max_words=max_words,
        confidence=confidence,
    )
    answer_first = generate_answer_first_summary(article.content, summary_words)
    url = article_url(article, base_url)
    return {
        "article": _compact(
            {
                "title": article.title,
                "slug": article.slug,
                "description": article.description,
                "answerFirst": answer_first,
                "url": url,
                "author": article.author,
                "category": article.category,
                "keywords": list(article.keywords),
                "date": _compact(
                    {"published": article.created_at, "modified": article.updated_at}
                ),
            }
        ),
        "atomicAnswers": [a.to_dict() for a in answers],
        "jsonld": generate_full_article_json(article, answers, answer_first, base_url, site_name),
        "@context": SCHEMA_CONTEXT,
        "@type": "Article",
    }


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}
