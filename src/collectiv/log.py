"""Logging setup for the Collectiv CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the CLI entry point.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_configured = False


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route ``collectiv.*`` log records to stderr through rich.

    INFO by default, DEBUG with *verbose*. Calling again only changes the level.
    """
    global _configured
    logger = logging.getLogger("collectiv")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if _configured:
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True
