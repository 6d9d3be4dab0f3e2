from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

# stdout carries the MCP stream; diagnostics go to stderr only.
stderr_console = Console(stderr=True)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=stderr_console, show_path=False, rich_tracebacks=True)],
        force=True,
    )
