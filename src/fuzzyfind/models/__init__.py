"""
Data models for the fuzzy finder.

This module contains the configuration value and the directory entry types
shared by the matcher and the walker.
"""

from .config import SearchConfig
from .entries import DirEntry, EntryType, ListingFailure

__all__ = ['SearchConfig', 'DirEntry', 'EntryType', 'ListingFailure']
