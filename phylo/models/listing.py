import stat
from dataclasses import dataclass
from enum import IntFlag
from typing import List

WINDOWS_TICK = 10_000_000
SEC_TO_UNIX_EPOCH = 11_644_473_600
EPOCH_AS_FILETIME = SEC_TO_UNIX_EPOCH * WINDOWS_TICK
UINT32_MASK = 0xFFFFFFFF


def filetime_to_posix(ticks: int) -> int:
    """Convert 100ns ticks since 1601-01-01 to Unix seconds as an unsigned 32-bit value.

    Values outside the 32-bit range wrap, matching the listing format of the
    native tool.
    """
    return (ticks // WINDOWS_TICK - SEC_TO_UNIX_EPOCH) & UINT32_MASK


def ns_to_filetime(ns: int) -> int:
    """Convert nanoseconds since the Unix epoch to 100ns ticks since 1601-01-01."""
    return max(0, ns // 100 + EPOCH_AS_FILETIME)


class FileAttribute(IntFlag):
    NONE = 0
    READONLY = stat.FILE_ATTRIBUTE_READONLY
    HIDDEN = stat.FILE_ATTRIBUTE_HIDDEN
    SYSTEM = stat.FILE_ATTRIBUTE_SYSTEM
    DIRECTORY = stat.FILE_ATTRIBUTE_DIRECTORY
    ARCHIVE = stat.FILE_ATTRIBUTE_ARCHIVE
    COMPRESSED = stat.FILE_ATTRIBUTE_COMPRESSED
    ENCRYPTED = stat.FILE_ATTRIBUTE_ENCRYPTED

    def letters(self) -> str:
        """Attribute letters for the set flags, in listing order."""
        return "".join(letter for flag, letter in ATTRIBUTE_LETTERS if self & flag)

    @classmethod
    def from_letters(cls, text: str) -> "FileAttribute":
        flags = cls.NONE
        for char in text:
            flag = LETTER_ATTRIBUTES.get(char.upper())
            if flag is None:
                raise ValueError(f"Unknown attribute letter '{char}'")
            flags |= flag
        return flags


# Fixed listing order: D, R, H, S, A, C, E
ATTRIBUTE_LETTERS = [
    (FileAttribute.DIRECTORY, "D"),
    (FileAttribute.READONLY, "R"),
    (FileAttribute.HIDDEN, "H"),
    (FileAttribute.SYSTEM, "S"),
    (FileAttribute.ARCHIVE, "A"),
    (FileAttribute.COMPRESSED, "C"),
    (FileAttribute.ENCRYPTED, "E"),
]
LETTER_ATTRIBUTES = {letter: flag for flag, letter in ATTRIBUTE_LETTERS}
_KNOWN_BITS = sum(int(flag) for flag, _ in ATTRIBUTE_LETTERS)


def attributes_from_stat(name: str, st) -> FileAttribute:
    """Native attribute bits for a stat result.

    Hosts without native attribute bits get an approximation built from the
    mode bits, BSD file flags and the dot-name convention.
    """
    native = getattr(st, "st_file_attributes", None)
    if native is not None:
        return FileAttribute(native & _KNOWN_BITS)

    flags = FileAttribute.NONE
    user_flags = getattr(st, "st_flags", 0)
    if stat.S_ISDIR(st.st_mode):
        flags |= FileAttribute.DIRECTORY
    if not st.st_mode & stat.S_IWUSR:
        flags |= FileAttribute.READONLY
    if name.startswith(".") or user_flags & stat.UF_HIDDEN:
        flags |= FileAttribute.HIDDEN
    if user_flags & stat.UF_COMPRESSED:
        flags |= FileAttribute.COMPRESSED
    return flags


def _creation_ns(st) -> int:
    birthtime_ns = getattr(st, "st_birthtime_ns", None)
    if birthtime_ns is not None:
        return birthtime_ns
    birthtime = getattr(st, "st_birthtime", None)
    if birthtime is not None:
        return int(birthtime * 1_000_000_000)
    return st.st_ctime_ns


@dataclass
class DirectoryEntry:
    name: str
    attributes: FileAttribute
    creation_time: int  # 100ns ticks since 1601-01-01 UTC
    last_access_time: int
    last_write_time: int
    size: int = 0

    @property
    def is_directory(self) -> bool:
        return bool(self.attributes & FileAttribute.DIRECTORY)

    @classmethod
    def from_stat(cls, name: str, st) -> "DirectoryEntry":
        attributes = attributes_from_stat(name, st)
        size = 0 if attributes & FileAttribute.DIRECTORY else st.st_size
        return cls(
            name=name,
            attributes=attributes,
            creation_time=ns_to_filetime(_creation_ns(st)),
            last_access_time=ns_to_filetime(st.st_atime_ns),
            last_write_time=ns_to_filetime(st.st_mtime_ns),
            size=size & 0xFFFFFFFFFFFFFFFF,
        )


@dataclass
class FormattedLine:
    """One line of listing output.

    Rendered as ``<attrs>/<created>/<accessed>/<modified>/<size>/<name>``
    followed by a newline. Timestamps are Unix seconds.
    """

    attributes: str
    created: int
    accessed: int
    modified: int
    size: int
    name: str

    def __str__(self) -> str:
        return (
            f"{self.attributes}/{self.created}/{self.accessed}/"
            f"{self.modified}/{self.size}/{self.name}\n"
        )

    def has(self, attribute: FileAttribute) -> bool:
        return bool(FileAttribute.from_letters(self.attributes) & attribute)

    @classmethod
    def from_entry(cls, entry: DirectoryEntry) -> "FormattedLine":
        return cls(
            attributes=entry.attributes.letters(),
            created=filetime_to_posix(entry.creation_time),
            accessed=filetime_to_posix(entry.last_access_time),
            modified=filetime_to_posix(entry.last_write_time),
            size=entry.size,
            name=entry.name,
        )

    @classmethod
    def parse(cls, text: str) -> "FormattedLine":
        """Parse one line of listing output.

        Names never contain the separator, so everything after the fifth
        ``/`` is the name.

        Raises:
            ValueError: If the line is missing fields or a number is malformed.
        """
        parts: List[str] = text.rstrip("\r\n").split("/", 5)
        if len(parts) != 6:
            raise ValueError(f"Expected 6 fields, got {len(parts)}: {text!r}")

        attributes, created, accessed, modified, size, name = parts
        FileAttribute.from_letters(attributes)
        return cls(
            attributes=attributes,
            created=int(created),
            accessed=int(accessed),
            modified=int(modified),
            size=int(size),
            name=name,
        )


def parse_listing(text: str) -> List[FormattedLine]:
    """Parse every non-empty line of a listing."""
    return [FormattedLine.parse(line) for line in text.splitlines() if line]
