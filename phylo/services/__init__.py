from phylo.services.find import FindHandle, find_files
from phylo.services.lister import DirectoryLister, format_entry, get_directory_lister

__all__ = [
    "FindHandle", "find_files",
    "DirectoryLister", "format_entry", "get_directory_lister",
]
