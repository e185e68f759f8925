from phylo.models.listing import (
    DirectoryEntry,
    FileAttribute,
    FormattedLine,
    filetime_to_posix,
    ns_to_filetime,
    parse_listing,
)

__all__ = [
    "DirectoryEntry", "FileAttribute", "FormattedLine",
    "filetime_to_posix", "ns_to_filetime", "parse_listing",
]
