"""
Configuration management package for the fuzzy finder.

This package loads option defaults from YAML and builds the validated
search configuration.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    create_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'load_config',
    'create_config_template'
]
