"""
Configuration management for word-convert.

Handles loading and managing configuration from files, environment variables,
and command-line options.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .core.document_model import OutputFormat

logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', '1', 'yes', 'on')


@dataclass
class WordConvertConfig:
    """Main configuration for word-convert."""

    # Output
    default_format: OutputFormat = OutputFormat.PLAINTEXT
    output_dir: Optional[Path] = None
    pipe_tables: bool = False

    # Extraction
    normalize_typography: bool = False

    # Input
    pandoc_path: str = "pandoc"
    max_file_size: int = 50 * 1024 * 1024  # 50 MB

    log_level: str = "WARNING"


class ConfigManager:
    """Manages word-convert configuration from multiple sources."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / '.word-convert'
        self.config_file = self.config_dir / 'config.yaml'
        self._config: Optional[WordConvertConfig] = None

    def load_config(self) -> WordConvertConfig:
        """Load configuration from all sources."""
        if self._config:
            return self._config

        # Start with defaults
        config = WordConvertConfig()

        # Load from file if it exists
        if self.config_file.exists():
            file_config = self._load_from_file()
            config = self._merge_configs(config, file_config)

        # Override with environment variables
        env_config = self._load_from_env()
        config = self._merge_configs(config, env_config)

        self._config = config
        return config

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_file, 'r') as f:
                return yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not load config file {self.config_file}: {e}")
            return {}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        output_format = os.getenv('WORD_CONVERT_FORMAT')
        if output_format:
            env_config['default_format'] = output_format.lower()

        output_dir = os.getenv('WORD_CONVERT_OUTPUT_DIR')
        if output_dir:
            env_config['output_dir'] = output_dir

        pandoc_path = os.getenv('WORD_CONVERT_PANDOC')
        if pandoc_path:
            env_config['pandoc_path'] = pandoc_path

        log_level = os.getenv('WORD_CONVERT_LOG_LEVEL')
        if log_level:
            env_config['log_level'] = log_level.upper()

        # Feature flags
        for option in ['pipe_tables', 'normalize_typography']:
            value = os.getenv(f'WORD_CONVERT_{option.upper()}')
            if value:
                env_config[option] = value.lower() in TRUE_VALUES

        return env_config

    def _merge_configs(self, base: WordConvertConfig, override: Dict[str, Any]) -> WordConvertConfig:
        """Merge a configuration dictionary into a config object."""
        if 'default_format' in override:
            try:
                base.default_format = OutputFormat(override['default_format'])
            except ValueError:
                logger.warning(f"Ignoring unknown output format: {override['default_format']}")

        if override.get('output_dir'):
            base.output_dir = Path(override['output_dir']).expanduser()

        if 'pandoc_path' in override:
            base.pandoc_path = str(override['pandoc_path'])

        if 'max_file_size' in override:
            try:
                base.max_file_size = int(override['max_file_size'])
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid max_file_size: {override['max_file_size']}")

        if 'log_level' in override:
            base.log_level = str(override['log_level']).upper()

        for option in ('pipe_tables', 'normalize_typography'):
            if option in override:
                value = override[option]
                if isinstance(value, str):
                    value = value.lower() in TRUE_VALUES
                setattr(base, option, bool(value))

        return base

    def save_config(self, config: WordConvertConfig) -> None:
        """Save configuration to file."""
        # Ensure config directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

        config_dict = {
            'default_format': config.default_format.value,
            'pipe_tables': config.pipe_tables,
            'normalize_typography': config.normalize_typography,
            'pandoc_path': config.pandoc_path,
            'max_file_size': config.max_file_size,
            'log_level': config.log_level,
        }
        if config.output_dir:
            config_dict['output_dir'] = str(config.output_dir)

        with open(self.config_file, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)

    def create_default_config(self) -> Path:
        """Create a default configuration file."""
        self.save_config(WordConvertConfig())
        return self.config_file

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about current configuration."""
        config = self.load_config()

        return {
            'config_file': str(self.config_file),
            'config_exists': self.config_file.exists(),
            'default_format': config.default_format.value,
            'output_dir': str(config.output_dir) if config.output_dir else None,
            'pandoc_path': config.pandoc_path,
            'pipe_tables': config.pipe_tables,
            'normalize_typography': config.normalize_typography,
            'log_level': config.log_level,
        }


# Global config manager instance
_config_manager: Optional[ConfigManager] = None

def get_config_manager() -> ConfigManager:
    """Get the global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager

def load_config() -> WordConvertConfig:
    """Load the current configuration."""
    return get_config_manager().load_config()
