"""Tests for keyword-set Jaccard similarity."""

from __future__ import annotations

import pytest

from collectiv.graph.similarity import calculate_similarity, jaccard, keyword_set


def test_jaccard_basic():
    assert jaccard({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)


def test_jaccard_identical_and_disjoint():
    assert jaccard({"a"}, {"a"}) == 1.0
    assert jaccard({"a"}, {"b"}) == 0.0


def test_jaccard_both_empty_is_zero():
    assert jaccard(set(), set()) == 0.0


def test_keyword_set_is_top_ten(articles):
    assert len(keyword_set(articles[0].content)) == 10


def test_similarity_of_related_articles(articles):
    qc, qe, cm, bc = articles
    assert calculate_similarity(qc.content, qe.content) == pytest.approx(4 / 16)
    assert calculate_similarity(cm.content, bc.content) == pytest.approx(3 / 17)


def test_similarity_of_unrelated_articles(articles):
    qc, qe, cm, _ = articles
    assert calculate_similarity(qc.content, cm.content) == pytest.approx(1 / 19)
    assert calculate_similarity(qe.content, cm.content) == 0.0


def test_similarity_is_symmetric(articles):
    qc, qe, _, _ = articles
    assert calculate_similarity(qc.content, qe.content) == calculate_similarity(qe.content, qc.content)


def test_similarity_empty_content():
    assert calculate_similarity("", "") == 0.0
    assert calculate_similarity("", "Something substantial here.") == 0.0


def test_similarity_with_custom_analyzer():
    class FirstWord:
        def extract_keywords(self, content, max_keywords=10):
            return content.split()[:1]

        def extract_entities(self, text):
            return []

    assert calculate_similarity("same thing", "same other", analyzer=FirstWord()) == 1.0


def test_similarity_identical_content_is_one(articles):
    content = articles[2].content
    assert calculate_similarity(content, content) == 1.0
