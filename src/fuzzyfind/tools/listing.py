"""
Directory listing for the fuzzy finder.

Opening a directory yields either a DirectoryListing, which lazily produces
DirEntry values in the order the OS returns them, or a ListingFailure
describing why the directory could not be opened.
"""

import os
import logging
from typing import Iterator, Union

from ..models.entries import DirEntry, EntryType, ListingFailure
from .errors import DirectoryCloseError


logger = logging.getLogger(__name__)


class DirectoryListing:
    """
    Lazy listing of a single open directory.

    Iterating yields one DirEntry per entry. The listing must be closed once
    iteration is done; a failing close raises DirectoryCloseError.
    """

    def __init__(self, path: str, scanner):
        self.path = path
        self._scanner = scanner
        self._closed = False

    def __iter__(self) -> Iterator[DirEntry]:
        for entry in self._scanner:
            yield _to_dir_entry(entry)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._scanner.close()
        except OSError as e:
            raise DirectoryCloseError(f"Closedir failure: {self.path}: {e}") from e

    def __enter__(self) -> 'DirectoryListing':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


ListingResult = Union[DirectoryListing, ListingFailure]


def open_listing(path: str) -> ListingResult:
    """
    Open a directory for listing.

    Args:
        path: Directory to open

    Returns:
        DirectoryListing on success, ListingFailure if the directory cannot be opened
    """
    try:
        scanner = os.scandir(path)
    except OSError as e:
        return ListingFailure(path=path, reason=e.strerror or str(e))
    return DirectoryListing(path, scanner)


def _to_dir_entry(entry: os.DirEntry) -> DirEntry:
    """Classify an os.DirEntry without following links."""
    entry_type = _entry_type(entry)
    target_is_dir = False
    if entry_type is EntryType.SYMLINK:
        target_is_dir = _resolves_to_dir(entry)
    return DirEntry(name=entry.name, entry_type=entry_type, target_is_dir=target_is_dir)


def _entry_type(entry: os.DirEntry) -> EntryType:
    try:
        if entry.is_symlink():
            return EntryType.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return EntryType.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return EntryType.FILE
    except OSError as e:
        logger.debug(f"Could not determine type of {entry.path}: {e}")
    return EntryType.OTHER


def _resolves_to_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=True)
    except OSError as e:
        logger.debug(f"Could not resolve {entry.path}: {e}")
        return False
