"""Rich consoles and logger setup for the sweeptoc CLI."""
from __future__ import annotations

import logging
from rich.console import Console
from rich.logging import RichHandler

# Tables and `scan --json` lines go to stdout; logs, errors and progress go to stderr.
console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """
    Route log records to ``err_console``.

    Scan results are printed on stdout and are often piped (``--json``), so
    no log line may ever land there. Library modules only warn by default;
    ``verbose`` adds the per-call-site DEBUG trace.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=verbose)],
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
