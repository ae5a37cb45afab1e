"""
Fuzzy Finder - Core Package

Recursively searches a directory tree for paths whose components
match a fuzzy query pattern.
"""

__version__ = "0.1.0"
