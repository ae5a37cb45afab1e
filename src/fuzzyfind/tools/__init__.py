"""
Search tools for the fuzzy finder.

This module contains the fuzzy matcher, the directory listing and the
query-guided filesystem walker.
"""

from .errors import WalkerError, PathTooLongError, DirectoryCloseError
from .fs_walker import FSWalker
from .listing import DirectoryListing, open_listing
from .matcher import Matcher, match_chars

__all__ = [
    'WalkerError',
    'PathTooLongError',
    'DirectoryCloseError',
    'FSWalker',
    'DirectoryListing',
    'open_listing',
    'Matcher',
    'match_chars'
]
