"""Console output for phylo.

Listing lines and diagnostics both go to standard output as UTF-8 bytes.
Names the filesystem could not decode carry lone surrogates and are written
back as their original bytes. Log records go to stderr through rich.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

OUTPUT_ENCODING = "utf-8"

console = Console(stderr=True)


def output_text(text: str) -> None:
    """Write text exactly as given, without adding a newline."""
    data = text.encode(OUTPUT_ENCODING, errors="surrogateescape")
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def output_error(message: str) -> None:
    """Write a one-line diagnostic to standard output."""
    output_text(f"{message}\n")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
