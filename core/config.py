"""
Configuration management for the command-line front end.

Loads optional defaults from a YAML file (promptbridge.yaml by default).
The conversion engine itself never reads configuration; the CLI turns the
values found here into converter options. Command-line flags win over
file values.

Example promptbridge.yaml:

    kiro:
      inclusion: fileMatch
      fileMatchPattern: "**/*.ts"
    cursor:
      alwaysApply: true
    conversion:
      min_quality: 80
    logging:
      level: DEBUG
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'promptbridge.yaml'

DEFAULT_CONFIG: Dict[str, Any] = {
    'cursor': {},
    'kiro': {},
    'claude': {},
    'agents.md': {},
    'conversion': {
        'min_quality': 0,
    },
    'logging': {
        'level': 'WARNING',
        'format': '%(levelname)s %(name)s: %(message)s',
    },
}


class ConfigManager:
    """
    Manages configuration loading and access.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file; None means
                promptbridge.yaml in the working directory, if present
        """
        self.config_path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_FILE)
        self._explicit = config_path is not None
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from the YAML file, falling back to defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if not self.config_path.exists():
            if self._explicit:
                logger.warning(f"Configuration file not found: {self.config_path}; using defaults")
            return

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load configuration from {self.config_path}: {e}")
            return

        if not isinstance(loaded, dict):
            logger.error(f"Configuration in {self.config_path} is not a mapping; using defaults")
            return

        for key, value in loaded.items():
            if isinstance(value, dict) and isinstance(self._config.get(key), dict):
                self._config[key].update(value)
            else:
                self._config[key] = value
        logger.info(f"Configuration loaded from {self.config_path}")

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the value (e.g., "kiro.inclusion")
            default: Default value if key is not found

        Examples:
            config.get("conversion.min_quality")  # Returns 0
            config.get("logging.level")  # Returns "WARNING"
        """
        value: Any = self._config
        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get an entire configuration section (a copy)."""
        value = self._config.get(section, {})
        return dict(value) if isinstance(value, dict) else {}

    def converter_options(self, format_name: str) -> Dict[str, Any]:
        """Default converter options for one format."""
        return self.get_section(format_name)

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    @property
    def min_quality(self) -> int:
        try:
            return int(self.get('conversion.min_quality', 0))
        except (TypeError, ValueError):
            logger.warning("conversion.min_quality is not an integer; ignoring it")
            return 0

    @property
    def log_level(self) -> str:
        return str(self.get('logging.level', 'WARNING')).upper()

    @property
    def log_format(self) -> str:
        return self.get('logging.format', DEFAULT_CONFIG['logging']['format'])
