"""Logging setup.

Log records go through a ``RichHandler`` bound to the shared console so they
interleave cleanly with the CLI's own output.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from create_velox_app.utils import console


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger once for the CLI process."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )
