"""
YAML configuration parser for the fuzzy finder.

This module loads an optional YAML file holding default option values
(dotfiles, case sensitivity, search root, ...) and merges them with the
command-line options into a validated SearchConfig.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass, field

from pydantic import ValidationError

from ..models.config import SearchConfig


logger = logging.getLogger(__name__)

# Every SearchConfig field except the query may be given a default
DEFAULTABLE_KEYS = frozenset(SearchConfig.model_fields) - {'query'}


@dataclass
class ConfigParseResult:
    """
    Result of loading a defaults file.

    Attributes:
        defaults: Option values read from the file
        config_path: Path to the configuration file used
        is_default: Whether no file was found and built-in defaults apply
    """
    defaults: Dict[str, Any] = field(default_factory=dict)
    config_path: Optional[Path] = None
    is_default: bool = True


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML defaults parser with validation and error handling.

    Looks for a defaults file in the current directory, the home directory
    and the XDG config directory, unless an explicit path is given.
    """

    DEFAULT_CONFIG_NAMES = [
        '.fuzzyfind.yaml',
        '.fuzzyfind.yml',
        'fuzzyfind.yaml',
        'fuzzyfind.yml'
    ]

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_defaults(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load option defaults from a file.

        Args:
            config_path: Path to configuration file. If None, searches the default locations.

        Returns:
            ConfigParseResult holding the defaults and where they came from

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        if config_path:
            config_path = Path(config_path).expanduser()
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            data = self._load_yaml_file(config_path)
        else:
            config_path, data = self._find_and_load_config()
            if config_path is None:
                return ConfigParseResult()

        defaults = self._validate_defaults(data, config_path)
        self.logger.debug(f"Defaults loaded from {config_path}")
        return ConfigParseResult(defaults=defaults, config_path=config_path, is_default=False)

    def build_config(self, query: str, defaults: Optional[Dict[str, Any]] = None,
                     overrides: Optional[Dict[str, Any]] = None) -> SearchConfig:
        """
        Merge defaults and overrides into a validated SearchConfig.

        Args:
            query: Fuzzy query pattern
            defaults: Values from a defaults file
            overrides: Values from the command line, None entries are ignored

        Returns:
            Validated search configuration

        Raises:
            ConfigurationError: If the merged values are invalid
        """
        data: Dict[str, Any] = dict(defaults or {})
        data.update({k: v for k, v in (overrides or {}).items() if v is not None})
        data['query'] = query
        try:
            return SearchConfig.from_dict(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {_format_validation_error(e)}") from e

    def _search_paths(self) -> List[Path]:
        return [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'fuzzyfind',
        ]

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load the first defaults file in the search paths.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        for search_path in self._search_paths():
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.is_file():
                    self.logger.debug(f"Found configuration file: {config_file}")
                    return config_file, self._load_yaml_file(config_file)

        self.logger.debug("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)
            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def _validate_defaults(self, data: Dict[str, Any], config_path: Path) -> Dict[str, Any]:
        """
        Check that only known option keys appear and that their values validate.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        unknown = sorted(str(key) for key in data if key not in DEFAULTABLE_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys in {config_path}: {', '.join(unknown)}")

        # Validate against a placeholder query so errors point at the file
        try:
            SearchConfig.from_dict({**data, 'query': 'x'})
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed for {config_path}: {_format_validation_error(e)}"
            ) from e
        return dict(data)

    def get_config_template(self) -> str:
        """Get a commented template defaults file."""
        lines = [
            "# Fuzzy finder defaults",
            "# Command-line options override these values.",
            "",
        ]
        for name, info in SearchConfig.model_fields.items():
            if name == 'query':
                continue
            lines.append(f"# {info.description}")
            lines.append(yaml.safe_dump({name: info.default}, default_flow_style=False).strip())
            lines.append("")
        return "\n".join(lines)


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = '.'.join(str(loc) for loc in item['loc']) or 'config'
        parts.append(f"{location}: {item['msg']}")
    return '; '.join(parts)


def load_config(query: str, config_path: Optional[Union[str, Path]] = None,
                **overrides: Any) -> SearchConfig:
    """
    Convenience function to build a search configuration.

    Args:
        query: Fuzzy query pattern
        config_path: Path to a defaults file (optional)
        **overrides: Option values taking precedence over the defaults file

    Returns:
        Validated search configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser()
    result = parser.load_defaults(config_path)
    return parser.build_config(query, result.defaults, overrides)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template defaults file.

    Raises:
        ConfigurationError: If template cannot be created
    """
    template_content = ConfigParser().get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
