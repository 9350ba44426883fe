"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from collectiv.models import Article

QUANTUM_COMPUTING = (
    "Quantum computers manipulate qubits. Qubits exploit superposition and "
    "entanglement. Quantum algorithms outperform classical algorithms on certain "
    "problems. See [[Quantum Entanglement]] for details."
)
QUANTUM_ENTANGLEMENT = (
    "Quantum entanglement correlates particles. Entangled qubits share quantum "
    "states. Entanglement underpins quantum computers and quantum cryptography. "
    "See [[Quantum Computing]]."
)
CLASSICAL_MUSIC = (
    "Classical music spans centuries of composition. Orchestras perform "
    "symphonies written by composers. Music theory explains harmony."
)
BAROQUE_COMPOSERS = (
    "Baroque composers wrote elaborate music. Bach and Handel shaped classical "
    "music traditions. Their symphonies and concertos influenced later composers. "
    "See [[Classical Music]]."
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the real ~/.collectiv and COLLECTIV_* env vars out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr("collectiv.config._GLOBAL_CONFIG_PATH", home / "config.yaml")
    for var in ("COLLECTIV_CHUNK_SIZE", "COLLECTIV_OVERLAP_SIZE", "COLLECTIV_GENERATION_MODEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def articles() -> list[Article]:
    """Two quantum articles and two music articles; each pair is similar and cross-linked."""
    return [
        Article(
            id="qc",
            title="Quantum Computing",
            content=QUANTUM_COMPUTING,
            category="Science",
            keywords=["quantum", "qubits"],
        ),
        Article(
            id="qe",
            title="Quantum Entanglement",
            content=QUANTUM_ENTANGLEMENT,
            category="Science",
        ),
        Article(
            id="cm",
            title="Classical Music",
            content=CLASSICAL_MUSIC,
            category="Arts",
        ),
        Article(
            id="bc",
            title="Baroque Composers",
            content=BAROQUE_COMPOSERS,
            category="Arts",
        ),
    ]


@pytest.fixture
def corpus_dir(tmp_path: Path, articles: list[Article]) -> Path:
    """The ``articles`` fixture written as Markdown files with YAML front matter."""
    root = tmp_path / "articles"
    root.mkdir()
    for a in articles:
        meta = {"id": a.id, "title": a.title, "category": a.category, "keywords": a.keywords}
        text = f"---\n{yaml.safe_dump(meta, sort_keys=False)}---\n{a.content}\n"
        (root / f"{a.slug}.md").write_text(text, encoding="utf-8")
    return root
