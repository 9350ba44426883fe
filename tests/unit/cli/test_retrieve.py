"""Tests for collectiv chunk and collectiv retrieve."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from collectiv.cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _in_tmp(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# collectiv chunk
# ---------------------------------------------------------------------------


def test_chunk_json(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["chunk", "qc", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["articleId"] == "qc"
    assert data["metadata"]["type"] == "wiki_article"
    assert [c["id"] for c in data["chunks"]] == ["qc-chunk-0"]
    assert data["chunks"][0]["metadata"]["startChar"] == 0


def test_chunk_by_slug_with_small_size(corpus_dir: Path) -> None:
    result = runner.invoke(
        app, ["chunk", "quantum-computing", "--chunk-size", "60", "--overlap", "10", "--json"]
    )
    assert result.exit_code == 0
    chunks = json.loads(result.stdout)["chunks"]
    assert len(chunks) > 1
    assert [c["chunkIndex"] for c in chunks] == list(range(len(chunks)))


def test_chunk_table(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["chunk", "Quantum Computing"])
    assert result.exit_code == 0
    assert "1 chunk(s)" in result.output


def test_chunk_invalid_sizes(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["chunk", "qc", "--chunk-size", "100", "--overlap", "100"])
    assert result.exit_code == 1
    assert "overlap_size" in result.output


def test_chunk_unknown_article(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["chunk", "nope"])
    assert result.exit_code == 1
    assert "Article 'nope' not found" in result.output


def test_chunk_no_corpus() -> None:
    result = runner.invoke(app, ["chunk", "qc"])
    assert result.exit_code == 1
    assert "No corpus found" in result.output


# ---------------------------------------------------------------------------
# collectiv retrieve
# ---------------------------------------------------------------------------


def test_retrieve_json(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["retrieve", "quantum", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["query"] == "quantum"
    assert [c["articleId"] for c in data["chunks"]] == ["qe", "qc"]
    assert data["metadata"]["totalChunks"] == 2
    assert data["metadata"]["maxContextTokens"] == 4000


def test_retrieve_top_k(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["retrieve", "quantum", "-k", "1", "--json"])
    assert result.exit_code == 0
    assert [c["articleId"] for c in json.loads(result.stdout)["chunks"]] == ["qe"]


def test_retrieve_max_tokens(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["retrieve", "quantum", "--max-tokens", "0", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["chunks"] == []
    assert data["metadata"]["availableTokens"] == 0


def test_retrieve_table(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["retrieve", "music"])
    assert result.exit_code == 0
    assert "Top 2 chunk(s)" in result.output
    assert "tokens used" in result.output


def test_retrieve_no_matches(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["retrieve", "xylophone"])
    assert result.exit_code == 0
    assert "No chunks matched" in result.output


def test_retrieve_query_too_short(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["retrieve", "q"])
    assert result.exit_code == 1
    assert "at least 2 characters" in result.output
