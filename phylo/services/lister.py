"""Directory listing: one formatted line per matching entry."""

import logging
from typing import Callable, Optional

from phylo.exceptions import EnumerationError, EnumerationOpenError
from phylo.models.listing import DirectoryEntry, FormattedLine
from phylo.output import output_error, output_text
from phylo.services.find import PSEUDO_ENTRIES, find_files

logger = logging.getLogger(__name__)


def format_entry(entry: DirectoryEntry) -> Optional[str]:
    """Format one entry as a listing line, or None for ``.`` and ``..``."""
    if entry.name in PSEUDO_ENTRIES:
        return None
    return str(FormattedLine.from_entry(entry))


class DirectoryLister:
    """Lists the entries matching a pattern to an output sink."""

    def __init__(
        self,
        write: Callable[[str], None] = output_text,
        report: Callable[[str], None] = output_error,
    ):
        self._write = write
        self._report = report

    def list(self, pattern: str) -> int:
        """List every entry matching ``pattern``.

        Entries come out in the order the filesystem returns them.

        Returns:
            0 on success, 2 if the pattern cannot be opened, 3 if enumeration
            fails part way through.
        """
        try:
            handle = find_files(pattern)
        except EnumerationOpenError as e:
            logger.debug(f"Open failed for {pattern!r}: {e.error_code}")
            self._report(e.message)
            return e.exit_code

        count = 0
        try:
            with handle:
                for entry in handle:
                    line = format_entry(entry)
                    if line is None:
                        continue
                    self._write(line)
                    count += 1
        except EnumerationError as e:
            logger.warning(f"Enumeration of {pattern!r} stopped after {count} entries: {e.error_code}")
            self._report(e.message)
            return e.exit_code

        logger.debug(f"Listed {count} entries for {pattern!r}")
        return 0


_lister: Optional[DirectoryLister] = None


def get_directory_lister() -> DirectoryLister:
    """Get the shared DirectoryLister writing to the console."""
    global _lister
    if _lister is None:
        _lister = DirectoryLister()
    return _lister
