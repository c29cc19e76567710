"""
Configuration management for NuGet Feed Tools.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .exceptions import ConfigurationError
from .logging_config import get_logger

logger = get_logger('config')


@dataclass
class FeedConfig:
    """Configuration for feed access."""
    user_agent: Optional[str] = None  # Defaults to nuget-feed-tools/<version>
    timeout: Optional[float] = None   # No timeout unless configured
    page_limit: Optional[int] = None  # Maximum OData pages to follow; None follows all


@dataclass
class ExportConfig:
    """Configuration for the lister output files."""
    output_dir: Optional[str] = None  # None means the current working directory


@dataclass
class DeletionConfig:
    """Configuration for the external delete command."""
    executable: str = "nuget"
    command_template: List[str] = field(default_factory=lambda: [
        '{executable}', 'delete', '{package}',
        '-Source', '{source}',
        '-ApiKey', '{api_key}',
        '-NonInteractive'
    ])


@dataclass
class ConsoleConfig:
    """Configuration for console presentation."""
    use_colors: Optional[bool] = None  # Auto-detect when None
    rule_width: int = 116


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    verbose: bool = False


@dataclass
class Config:
    """Main configuration class."""
    feed: FeedConfig = field(default_factory=FeedConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    deletion: DeletionConfig = field(default_factory=DeletionConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Expected type(s) for every recognised key, per section
_SECTION_SCHEMA = {
    'feed': {
        'user_agent': (str, type(None)),
        'timeout': (int, float, type(None)),
        'page_limit': (int, type(None)),
    },
    'export': {
        'output_dir': (str, type(None)),
    },
    'deletion': {
        'executable': (str,),
        'command_template': (list,),
    },
    'console': {
        'use_colors': (bool, type(None)),
        'rule_width': (int,),
    },
    'logging': {
        'level': (str,),
        'log_file': (str, type(None)),
        'verbose': (bool,),
    },
}


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Config object with loaded settings

    Raises:
        ConfigurationError: If configuration file is invalid
    """
    config = Config()

    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading configuration file: {e}")

        if config_data:
            if not isinstance(config_data, dict):
                raise ConfigurationError(
                    f"Configuration file {config_path} must contain a mapping at the top level"
                )
            _update_config_from_dict(config, config_data)
            logger.info(f"Loaded configuration from {config_path}")

    elif config_path:
        logger.warning(f"Configuration file not found: {config_path}")

    return config


def _update_config_from_dict(config: Config, config_data: Dict) -> None:
    """
    Update configuration object from dictionary data.

    Args:
        config: Config object to update
        config_data: Dictionary with configuration data

    Raises:
        ConfigurationError: If a value has the wrong type
    """
    for section_name, schema in _SECTION_SCHEMA.items():
        section_data = config_data.get(section_name)
        if section_data is None:
            continue
        if not isinstance(section_data, dict):
            raise ConfigurationError(f"Section '{section_name}' must be a mapping")

        section = getattr(config, section_name)
        for key, value in section_data.items():
            if key not in schema:
                logger.warning(f"Ignoring unknown configuration key '{section_name}.{key}'")
                continue
            # bool is an int subclass; reject it where a number is expected
            if not isinstance(value, schema[key]) or (isinstance(value, bool) and bool not in schema[key]):
                raise ConfigurationError(
                    f"Invalid value for '{section_name}.{key}': {value!r}"
                )
            setattr(section, key, value)

    for section_name in config_data:
        if section_name not in _SECTION_SCHEMA:
            logger.warning(f"Ignoring unknown configuration section '{section_name}'")

    template = config.deletion.command_template
    if not template or not all(isinstance(part, str) for part in template):
        raise ConfigurationError("'deletion.command_template' must be a non-empty list of strings")
    if '{package}' not in template:
        raise ConfigurationError("'deletion.command_template' must contain a '{package}' entry")


def get_default_config_path() -> Optional[str]:
    """
    Get the default configuration file path.

    Returns:
        Path to default config file if it exists, None otherwise
    """
    possible_paths = [
        'nuget_feed_tools.yaml',
        'nuget_feed_tools.yml',
        os.path.expanduser('~/.nuget_feed_tools.yaml'),
        os.path.expanduser('~/.nuget_feed_tools.yml'),
    ]

    for path in possible_paths:
        if os.path.exists(path):
            return path

    return None
