"""Tests for the article corpus loader."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from collectiv.corpus import (
    article_from_mapping,
    find_article,
    load_corpus,
    parse_markdown_article,
)
from collectiv.errors import ArticleNotFoundError, CorpusError


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------


def test_load_corpus_directory(corpus_dir: Path, articles) -> None:
    loaded = load_corpus(corpus_dir)
    # Files are read in sorted filename order.
    assert [a.id for a in loaded] == ["bc", "cm", "qc", "qe"]
    by_id = {a.id: a for a in loaded}
    for original in articles:
        got = by_id[original.id]
        assert got.title == original.title
        assert got.content == original.content
        assert got.category == original.category
        assert got.keywords == original.keywords
        assert got.slug == original.slug


def test_load_corpus_ignores_non_markdown(corpus_dir: Path) -> None:
    (corpus_dir / "notes.txt").write_text("not an article", encoding="utf-8")
    assert len(load_corpus(corpus_dir)) == 4


def test_load_corpus_single_markdown_file(corpus_dir: Path) -> None:
    loaded = load_corpus(corpus_dir / "quantum-computing.md")
    assert [a.id for a in loaded] == ["qc"]


def test_parse_markdown_without_front_matter(tmp_path: Path) -> None:
    path = tmp_path / "bach.md"
    path.write_text("# Johann Sebastian Bach\n\nComposer of fugues.\n", encoding="utf-8")
    article = parse_markdown_article(path)
    assert article.id == "bach"
    assert article.title == "Johann Sebastian Bach"
    assert article.slug == "johann-sebastian-bach"
    assert article.content == "# Johann Sebastian Bach\n\nComposer of fugues."


def test_parse_markdown_title_falls_back_to_stem(tmp_path: Path) -> None:
    path = tmp_path / "untitled-page.md"
    path.write_text("Just a body.", encoding="utf-8")
    article = parse_markdown_article(path)
    assert article.title == "untitled-page"


def test_parse_markdown_front_matter_fields(tmp_path: Path) -> None:
    path = tmp_path / "x.md"
    path.write_text(
        "---\n"
        "id: x1\n"
        "title: Photonics\n"
        "keywords: light, lasers\n"
        "author: Ada\n"
        "date: 2024-05-01\n"
        "slug: photon-stuff\n"
        "---\n"
        "Body text.\n",
        encoding="utf-8",
    )
    article = parse_markdown_article(path)
    assert article.id == "x1"
    assert article.keywords == ["light", "lasers"]
    assert article.author == "Ada"
    assert article.created_at == "2024-05-01"
    assert article.slug == "photon-stuff"
    assert article.content == "Body text."


def test_parse_markdown_bad_front_matter(tmp_path: Path) -> None:
    path = tmp_path / "bad.md"
    path.write_text("---\ntitle: [oops\n---\nBody.\n", encoding="utf-8")
    with pytest.raises(CorpusError, match="Invalid front matter"):
        parse_markdown_article(path)


def test_parse_markdown_front_matter_not_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.md"
    path.write_text("---\n- a\n- b\n---\nBody.\n", encoding="utf-8")
    with pytest.raises(CorpusError, match="mapping"):
        parse_markdown_article(path)


# ---------------------------------------------------------------------------
# JSON / YAML
# ---------------------------------------------------------------------------


def test_load_corpus_json_list(tmp_path: Path) -> None:
    path = tmp_path / "corpus.json"
    path.write_text(
        json.dumps([{"id": "a", "title": "Alpha", "content": "Alpha body."}]),
        encoding="utf-8",
    )
    [article] = load_corpus(path)
    assert article.id == "a"
    assert article.content == "Alpha body."
    assert article.slug == "alpha"


def test_load_corpus_yaml_articles_mapping(tmp_path: Path) -> None:
    path = tmp_path / "corpus.yaml"
    path.write_text(
        yaml.safe_dump({"articles": [{"id": 1, "title": "One", "keywords": ["k"]}]}),
        encoding="utf-8",
    )
    [article] = load_corpus(path)
    assert article.id == "1"
    assert article.keywords == ["k"]
    assert article.content == ""


def test_load_corpus_json_wrong_shape(tmp_path: Path) -> None:
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps({"items": []}), encoding="utf-8")
    with pytest.raises(CorpusError, match="list of articles"):
        load_corpus(path)


def test_load_corpus_json_invalid(tmp_path: Path) -> None:
    path = tmp_path / "corpus.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(CorpusError, match="Cannot parse"):
        load_corpus(path)


def test_load_corpus_entry_not_mapping(tmp_path: Path) -> None:
    path = tmp_path / "corpus.json"
    path.write_text(json.dumps(["just a string"]), encoding="utf-8")
    with pytest.raises(CorpusError, match="Entry 0"):
        load_corpus(path)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


def test_load_corpus_missing_path(tmp_path: Path) -> None:
    with pytest.raises(CorpusError, match="does not exist"):
        load_corpus(tmp_path / "nope")


def test_load_corpus_unsupported_file(tmp_path: Path) -> None:
    path = tmp_path / "corpus.csv"
    path.write_text("id,title\n", encoding="utf-8")
    with pytest.raises(CorpusError, match="Unsupported"):
        load_corpus(path)


def test_load_corpus_duplicate_ids(tmp_path: Path) -> None:
    path = tmp_path / "corpus.json"
    path.write_text(
        json.dumps([{"id": "a", "title": "A"}, {"id": "a", "title": "B"}]),
        encoding="utf-8",
    )
    with pytest.raises(CorpusError, match="Duplicate article id: 'a'"):
        load_corpus(path)


def test_article_from_mapping_requires_id_and_title() -> None:
    with pytest.raises(CorpusError, match="missing 'id' or 'title'"):
        article_from_mapping({"title": "No id"})


def test_article_from_mapping_bad_keywords() -> None:
    with pytest.raises(CorpusError, match="keywords"):
        article_from_mapping({"id": "a", "title": "A", "keywords": 5})


# ---------------------------------------------------------------------------
# find_article
# ---------------------------------------------------------------------------


def test_find_article_by_id_slug_title(articles) -> None:
    assert find_article(articles, "qe").id == "qe"
    assert find_article(articles, "classical-music").id == "cm"
    assert find_article(articles, "  baroque COMPOSERS ").id == "bc"


def test_find_article_missing(articles) -> None:
    with pytest.raises(ArticleNotFoundError) as excinfo:
        find_article(articles, "nope")
    assert excinfo.value.key == "nope"
    assert str(excinfo.value) == "Article not found: 'nope'"
    assert isinstance(excinfo.value, KeyError)
