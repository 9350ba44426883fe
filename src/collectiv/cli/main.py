"""Collectiv CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from collectiv.cli.answers import answers_cmd, jsonld_cmd
from collectiv.cli.ask import ask_cmd
from collectiv.cli.graph import backlinks_cmd, graph_cmd, keywords_cmd, related_cmd
from collectiv.cli.retrieve import chunk_cmd, retrieve_cmd
from collectiv.cli.status import status_cmd
from collectiv.log import configure_logging


def _installed_version() -> str:
    try:
        return importlib.metadata.version("collectiv")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"collectiv {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="collectiv",
    help=(
        "Collectiv — retrieval, chunking and cross-reference toolkit for wiki articles.\n\n"
        "  collectiv retrieve  Rank article chunks for a query.\n"
        "  collectiv graph     Build the knowledge graph of related and linked articles."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Collectiv — retrieval, chunking and cross-reference toolkit."""
    configure_logging(verbose)


app.command("status")(status_cmd)
app.command("chunk")(chunk_cmd)
app.command("retrieve")(retrieve_cmd)
app.command("ask")(ask_cmd)
app.command("keywords")(keywords_cmd)
app.command("graph")(graph_cmd)
app.command("related")(related_cmd)
app.command("backlinks")(backlinks_cmd)
app.command("answers")(answers_cmd)
app.command("jsonld")(jsonld_cmd)


@app.command("version")
def version_cmd() -> None:
    """Show the installed Collectiv version."""
    typer.echo(f"collectiv {_installed_version()}")


if __name__ == "__main__":
    app()
