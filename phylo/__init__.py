"""phylo - compact directory listings for scripting."""

from phylo.models.listing import (
    DirectoryEntry,
    FileAttribute,
    FormattedLine,
    parse_listing,
)
from phylo.services.find import FindHandle, find_files
from phylo.services.lister import DirectoryLister, format_entry
from phylo.exceptions import (
    PhyloException,
    UsageError,
    EnumerationOpenError,
    EnumerationError,
)

__version__ = "0.1.0"
__all__ = [
    # Models
    "DirectoryEntry",
    "FileAttribute",
    "FormattedLine",
    "parse_listing",
    # Listing
    "FindHandle",
    "find_files",
    "DirectoryLister",
    "format_entry",
    # Exceptions
    "PhyloException",
    "UsageError",
    "EnumerationOpenError",
    "EnumerationError",
]
