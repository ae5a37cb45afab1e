"""
Directory entry data models for the fuzzy finder.

These types describe what a directory listing yields to the walker and
what it reports when a directory cannot be opened.
"""

from dataclasses import dataclass
from enum import Enum


class EntryType(Enum):
    """Type tag of a directory entry."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


@dataclass(frozen=True)
class DirEntry:
    """
    A single entry produced by a directory listing.

    Attributes:
        name: Entry name (a single path component)
        entry_type: Type of the entry itself, links are not resolved
        target_is_dir: For symbolic links, whether the link resolves to a directory
    """
    name: str
    entry_type: EntryType
    target_is_dir: bool = False

    @property
    def is_dir(self) -> bool:
        return self.entry_type is EntryType.DIRECTORY

    @property
    def is_link(self) -> bool:
        return self.entry_type is EntryType.SYMLINK

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith('.')


@dataclass
class ListingFailure:
    """
    Result of a directory listing that could not be opened.

    Attributes:
        path: Directory that failed to open
        reason: Human readable reason reported by the OS
    """
    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path} ({self.reason})"
