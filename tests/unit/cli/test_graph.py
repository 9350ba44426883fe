"""Tests for collectiv keywords, graph, related and backlinks."""

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
# collectiv keywords
# ---------------------------------------------------------------------------


def test_keywords(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["keywords", "qc", "-n", "3"])
    assert result.exit_code == 0
    assert "quantum, qubits, entanglement" in result.output


def test_keywords_none(tmp_path: Path) -> None:
    root = tmp_path / "articles"
    root.mkdir()
    (root / "tiny.md").write_text("# Tiny\n\nA cat.\n", encoding="utf-8")
    result = runner.invoke(app, ["keywords", "tiny"])
    assert result.exit_code == 0
    assert "No keywords" in result.output


# ---------------------------------------------------------------------------
# collectiv graph
# ---------------------------------------------------------------------------


def test_graph_json(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["graph", "--json"])
    assert result.exit_code == 0
    nodes = {n["id"]: n for n in json.loads(result.stdout)}
    assert set(nodes) == {"qc", "qe", "cm", "bc"}
    assert nodes["qc"]["connections"] == [{"nodeId": "qe", "type": "related"}]
    assert nodes["bc"]["connections"] == [{"nodeId": "cm", "type": "related"}]


def test_graph_max_connections_zero_keeps_references(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["graph", "--max-connections", "0", "--json"])
    assert result.exit_code == 0
    nodes = {n["id"]: n for n in json.loads(result.stdout)}
    assert nodes["qc"]["connections"] == [{"nodeId": "qe", "type": "references"}]
    assert nodes["cm"]["connections"] == []


def test_graph_table(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["graph"])
    assert result.exit_code == 0
    assert "4 article(s)" in result.output


# ---------------------------------------------------------------------------
# collectiv related
# ---------------------------------------------------------------------------


def test_related_traverses_graph(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["related", "qc"])
    assert result.exit_code == 0
    assert "Quantum Entanglement" in result.output
    assert "Classical Music" not in result.output


def test_related_similar(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["related", "cm", "--similar"])
    assert result.exit_code == 0
    assert "0.18" in result.output
    assert "Baroque Composers" in result.output


def test_related_isolated_article(corpus_dir: Path) -> None:
    (corpus_dir / "lonely.md").write_text("# Lonely\n\nZebras gallop happily.\n", encoding="utf-8")
    result = runner.invoke(app, ["related", "lonely"])
    assert result.exit_code == 0
    assert "No connected articles" in result.output


def test_related_unknown_article(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["related", "nope"])
    assert result.exit_code == 1


# ---------------------------------------------------------------------------
# collectiv backlinks
# ---------------------------------------------------------------------------


def test_backlinks(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["backlinks", "Quantum Computing"])
    assert result.exit_code == 0
    assert "Quantum Entanglement" in result.output


def test_backlinks_case_insensitive(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["backlinks", "classical music"])
    assert result.exit_code == 0
    assert "Baroque Composers" in result.output


def test_backlinks_none(corpus_dir: Path) -> None:
    result = runner.invoke(app, ["backlinks", "Baroque Composers"])
    assert result.exit_code == 0
    assert "No articles link to" in result.output
