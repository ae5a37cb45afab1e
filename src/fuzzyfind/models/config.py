"""
Configuration data model for the fuzzy finder.

This module defines the search configuration: the query, the search root and
the option flags that steer matching and traversal. A configuration is built
once at startup and never changes for the duration of a run.
"""

import os
from typing import Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


SEGMENT_SEPARATOR = '/'

# FILENAME_MAX on glibc
DEFAULT_MAX_PATH_LENGTH = 4096


def fold_case(text: str) -> str:
    """Lowercase text one character at a time, keeping its length."""
    folded = []
    for c in text:
        lowered = c.lower()
        folded.append(lowered if len(lowered) == 1 else c)
    return ''.join(folded)


class SearchConfig(BaseModel):
    """
    Configuration for a single fuzzy search run.

    Attributes:
        query: Fuzzy query pattern (lowercased when case_insensitive is set)
        root: Directory the search starts from
        dotfiles: Whether hidden entries are visited
        only_dirs: Whether only directories are printed
        case_insensitive: Whether matching ignores case
        follow_links: Whether symbolic links are visited
        recurse: Whether the walk descends into subdirectories
        conseq_char: Character toggling consecutive-run matching
        max_path_length: Maximum length in bytes of an accumulated path
    """

    model_config = ConfigDict(frozen=True)

    query: str = Field(..., min_length=1, description="Fuzzy query pattern")
    root: str = Field("~", min_length=1, validate_default=True, description="Search root directory")
    dotfiles: bool = Field(False, description="Show dotfiles")
    only_dirs: bool = Field(False, description="Only print directories")
    case_insensitive: bool = Field(False, description="Case-insensitive matching")
    follow_links: bool = Field(False, description="Follow symbolic links")
    recurse: bool = Field(True, description="Recurse into subdirectories")
    conseq_char: str = Field("=", min_length=1, max_length=1, description="Consecutive match toggle character")
    max_path_length: int = Field(DEFAULT_MAX_PATH_LENGTH, gt=0, description="Maximum accumulated path length")

    @model_validator(mode='after')
    def normalize_query_case(self) -> 'SearchConfig':
        """Lowercase the query once when matching is case-insensitive."""
        if self.case_insensitive:
            # frozen model
            object.__setattr__(self, 'query', fold_case(self.query))
        return self

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Expand a leading ~ to the user's home directory."""
        if not v.startswith('~'):
            return v
        expanded = os.path.expanduser(v)
        if expanded.startswith('~'):
            raise ValueError("Could not determine home directory")
        return expanded

    @field_validator('conseq_char')
    @classmethod
    def validate_conseq_char(cls, v: str) -> str:
        if v == SEGMENT_SEPARATOR:
            raise ValueError(f"Consecutive match character cannot be '{SEGMENT_SEPARATOR}'")
        return v

    @property
    def query_length(self) -> int:
        return len(self.query)

    def char_at(self, cursor: int) -> str:
        """Get the query character at cursor, or an empty string past the end."""
        if 0 <= cursor < len(self.query):
            return self.query[cursor]
        return ""

    def expects_dir(self, cursor: int) -> bool:
        """Check if a segment boundary remains in the query after cursor."""
        return SEGMENT_SEPARATOR in self.query[cursor:]

    def root_prefix(self) -> str:
        """Get the root with exactly one trailing separator."""
        return self.root.rstrip(os.sep) + os.sep

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchConfig':
        """Create a SearchConfig instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the search configuration."""
        flags = [name for name in ('dotfiles', 'only_dirs', 'case_insensitive', 'follow_links')
                 if getattr(self, name)]
        if not self.recurse:
            flags.append('no_recurse')
        parts = [f"Query: '{self.query}'", f"Root: {self.root}"]
        if flags:
            parts.append(f"Flags: {', '.join(flags)}")
        return " | ".join(parts)
