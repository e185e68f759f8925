"""Find-files primitive: enumerate the entries matching a path pattern.

Wildcards are honoured in the last path segment only. A wildcard segment is
also matched against the ``.`` and ``..`` pseudo-entries, and a pattern that
matches nothing fails to open, the same way the native facility behaves.
"""

import errno
import fnmatch
import logging
import os
import re
from typing import Iterator, Optional

from phylo.models.listing import DirectoryEntry
from phylo.exceptions import (
    EnumerationError,
    EnumerationOpenError,
    format_os_error_code,
)

logger = logging.getLogger(__name__)

_MAGIC = re.compile(r"[*?]")
PSEUDO_ENTRIES = (os.curdir, os.pardir)


def has_wildcards(segment: str) -> bool:
    return _MAGIC.search(segment) is not None


def fnmatch_segment(segment: str) -> str:
    """Escape brackets so only ``*`` and ``?`` act as wildcards."""
    return segment.replace("[", "[[]")


class FindHandle:
    """Open enumeration over the entries matching a pattern.

    Use as a context manager; the underlying directory handle is released on
    exit whether or not iteration finished.
    """

    def __init__(
        self,
        pattern: str,
        entries: Iterator[DirectoryEntry],
        scandir_it=None,
    ):
        self.pattern = pattern
        self._entries = entries
        self._scandir_it = scandir_it
        self._pending: Optional[DirectoryEntry] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _prime(self) -> bool:
        """Fetch the first entry. Returns False if nothing matched."""
        try:
            self._pending = next(self._entries)
        except StopIteration:
            return False
        return True

    def __iter__(self) -> Iterator[DirectoryEntry]:
        if self._pending is not None:
            entry, self._pending = self._pending, None
            yield entry
        yield from self._entries

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._scandir_it is not None:
            self._scandir_it.close()
        logger.debug(f"Closed find handle for {self.pattern!r}")

    def __enter__(self) -> "FindHandle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def _stat_entry(pattern: str, name: str, path: str) -> Optional[DirectoryEntry]:
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        logger.debug(f"Entry vanished during enumeration: {path}")
        return None
    except OSError as e:
        raise EnumerationError(pattern, format_os_error_code(e)) from e
    return DirectoryEntry.from_stat(name, st)


def _iter_matches(
    pattern: str,
    directory: str,
    segment: str,
    scandir_it,
) -> Iterator[DirectoryEntry]:
    segment = fnmatch_segment(segment)
    for name in PSEUDO_ENTRIES:
        if fnmatch.fnmatch(name, segment):
            entry = _stat_entry(pattern, name, os.path.join(directory, name))
            if entry is not None:
                yield entry

    while True:
        try:
            dir_entry = next(scandir_it)
        except StopIteration:
            return
        except OSError as e:
            raise EnumerationError(pattern, format_os_error_code(e)) from e

        if not fnmatch.fnmatch(dir_entry.name, segment):
            continue
        try:
            st = dir_entry.stat(follow_symlinks=False)
        except FileNotFoundError:
            logger.debug(f"Entry vanished during enumeration: {dir_entry.path}")
            continue
        except OSError as e:
            raise EnumerationError(pattern, format_os_error_code(e)) from e
        yield DirectoryEntry.from_stat(dir_entry.name, st)


def find_files(pattern: str) -> FindHandle:
    """Open an enumeration over the entries matching ``pattern``.

    Args:
        pattern: Path whose last segment may contain ``*`` or ``?``.

    Returns:
        An open FindHandle positioned before the first entry.

    Raises:
        EnumerationOpenError: If the location cannot be opened or nothing matches.
    """
    directory, segment = os.path.split(pattern)
    if not segment:
        raise EnumerationOpenError(pattern, errno.ENOENT)

    if not has_wildcards(segment):
        try:
            st = os.lstat(pattern)
        except OSError as e:
            raise EnumerationOpenError(pattern, format_os_error_code(e)) from e
        logger.debug(f"Pattern {pattern!r} names a single entry")
        return FindHandle(pattern, iter([DirectoryEntry.from_stat(segment, st)]))

    directory = directory or os.curdir
    try:
        scandir_it = os.scandir(directory)
    except OSError as e:
        raise EnumerationOpenError(pattern, format_os_error_code(e)) from e

    handle = FindHandle(
        pattern,
        _iter_matches(pattern, directory, segment, scandir_it),
        scandir_it=scandir_it,
    )
    try:
        matched = handle._prime()
    except EnumerationError as e:
        handle.close()
        raise EnumerationOpenError(pattern, e.error_code) from e

    if not matched:
        handle.close()
        raise EnumerationOpenError(pattern, errno.ENOENT)

    logger.debug(f"Opened find handle for {pattern!r} in {directory!r}")
    return handle
