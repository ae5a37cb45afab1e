"""
Filesystem walker for the fuzzy finder.

This module incrementally matches the query against the file tree. Each
directory entry advances the query cursor for its own branch; full matches
are yielded as paths. Sections of the query followed by a '/' must match
within a single path element: "d/ex" matches "dev/example/foo" but not
"dev/eta/text".
"""

import os
import logging
from typing import Callable, Dict, Iterator

from ..models.config import SearchConfig, SEGMENT_SEPARATOR
from ..models.entries import DirEntry, EntryType, ListingFailure
from .errors import DirectoryCloseError, PathTooLongError, WalkerError
from .listing import ListingResult, open_listing
from .matcher import Matcher


logger = logging.getLogger(__name__)


def _new_stats() -> Dict[str, int]:
    return {
        'directories_traversed': 0,
        'entries_scanned': 0,
        'entries_matched': 0,
        'directories_pruned': 0,
        'errors': 0
    }


class FSWalker:
    """
    Depth-first walker guided by the query cursor.

    Entries are visited in directory listing order, which depends on the
    filesystem and is not sorted.
    """

    def __init__(self, config: SearchConfig,
                 lister: Callable[[str], ListingResult] = open_listing):
        """
        Initialize the filesystem walker.

        Args:
            config: Search configuration (query, root and flags)
            lister: Opens a directory and returns a listing or a failure
        """
        self.config = config
        self.matcher = Matcher(config)
        self._lister = lister
        self._stats = _new_stats()

    def walk_paths(self) -> Iterator[str]:
        """
        Walk the tree under the configured root and yield matching paths.

        Yields:
            Full paths of entries that satisfy the whole query

        Raises:
            PathTooLongError: If a path grows past config.max_path_length
            DirectoryCloseError: If a directory listing fails to close
        """
        root = self.config.root_prefix()
        self._check_length(root)
        logger.debug(f"Walking directory tree: {root}")
        yield from self.walk(root, 0)

    def walk(self, path: str, cursor: int) -> Iterator[str]:
        """
        Visit the entries of one directory.

        Args:
            path: Directory path, ending with a separator
            cursor: Query offset satisfied by the components of path
        """
        listing = self._lister(path)
        if isinstance(listing, ListingFailure):
            logger.warning(f"failed to open: {listing}")
            self._stats['errors'] += 1
            return

        self._stats['directories_traversed'] += 1
        expects_dir = self.config.expects_dir(cursor)
        try:
            for entry in listing:
                if self._skip(entry):
                    continue
                self._stats['entries_scanned'] += 1
                yield from self._visit(path, entry, cursor, expects_dir)
        except WalkerError:
            # The first fatal error wins; a close failure on the way out is only logged
            try:
                listing.close()
            except DirectoryCloseError as e:
                logger.error(str(e))
            raise
        except BaseException:
            listing.close()
            raise
        listing.close()

    def _skip(self, entry: DirEntry) -> bool:
        """Check if an entry is never matched (empty, hidden or an unfollowed link)."""
        name = entry.name
        if not name:
            return True
        if entry.is_hidden:
            if not self.config.dotfiles:
                return True
            if name in ('.', '..'):
                return True
        if entry.is_link and not self.config.follow_links:
            return True
        return False

    def _is_dir(self, entry: DirEntry) -> bool:
        if entry.entry_type is EntryType.SYMLINK:
            return self.config.follow_links and entry.target_is_dir
        return entry.is_dir

    def _visit(self, path: str, entry: DirEntry, cursor: int, expects_dir: bool) -> Iterator[str]:
        config = self.config
        new_cursor = self.matcher.match(entry.name, cursor)
        is_dir = self._is_dir(entry)
        new_path = path + entry.name + (os.sep if is_dir else '')
        self._check_length(new_path)

        # A directory must satisfy the pending segment up to its '/',
        # except while still at the start of the query.
        if (expects_dir and new_cursor > 0
                and config.char_at(new_cursor) != SEGMENT_SEPARATOR and is_dir):
            self._stats['directories_pruned'] += 1
            return

        if is_dir and config.char_at(new_cursor) == SEGMENT_SEPARATOR:
            new_cursor += 1

        if new_cursor == config.query_length and (is_dir or not config.only_dirs):
            self._stats['entries_matched'] += 1
            yield new_path

        if is_dir and config.recurse:
            yield from self.walk(new_path, new_cursor)

    def _check_length(self, path: str) -> None:
        if len(os.fsencode(path)) > self.config.max_path_length:
            raise PathTooLongError(path, self.config.max_path_length)

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the filesystem walking operation.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = _new_stats()
