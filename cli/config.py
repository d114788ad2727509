#!/usr/bin/env python3
"""
Configuration Management Module for the TopShot transaction CLI

Handles hierarchical configuration loading (defaults, network profiles,
config files, environment variables) for the CLI. The script generator
itself reads no configuration; the CLI resolves contract addresses here and
passes them in explicitly.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List

import yaml

from cadence.exceptions import InvalidAddressError
from cadence.values import Address

# Configuration file locations in order of precedence (highest to lowest)
CONFIG_SEARCH_PATHS = [
    Path.cwd() / '.topshot.yml',              # Project-specific YAML
    Path.cwd() / '.topshot.json',             # Project-specific JSON
    Path.home() / '.topshot' / 'config.yml',  # User global YAML
    Path.home() / '.topshot' / 'config.json', # User global JSON
]

# Environment variable prefix
ENV_PREFIX = 'TOPSHOT_'

NETWORKS = ['emulator', 'testnet', 'mainnet']
OUTPUT_FORMATS = ['table', 'json', 'yaml']

# Default configuration values
DEFAULT_CONFIG = {
    'network': 'emulator',

    # Contract deployment addresses
    'contracts': {
        'topshot': None,
        'receiver': None
    },

    # CLI behavior
    'cli': {
        'output_format': 'table',
        'verbose': 0
    }
}

# Network profiles
PROFILES = {
    'emulator': {
        'network': 'emulator',
        'contracts': {
            'topshot': 'f8d6e0586b0a20c7',
            'receiver': 'f8d6e0586b0a20c7'
        }
    },
    'testnet': {
        'network': 'testnet',
        'contracts': {'topshot': '877931736ee77cff'}
    },
    'mainnet': {
        'network': 'mainnet',
        'contracts': {'topshot': '0b2a3299cc857e29'}
    }
}


class ConfigurationManager:
    """Manages hierarchical configuration with environment variable support."""

    def __init__(self, config_file: Optional[str] = None, profile: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit configuration file path
            profile: Network profile to load (emulator, testnet, mainnet)
        """
        self.logger = logging.getLogger('topshot-cli.config')
        self.config_file = config_file
        self.profile = profile
        self._config_cache = None
        self._config_sources = []

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from all sources in hierarchical order.

        Returns:
            Merged configuration dictionary
        """
        if self._config_cache is not None:
            return self._config_cache

        configs = [DEFAULT_CONFIG]
        self._config_sources = ["defaults"]

        if self.profile:
            if self.profile not in PROFILES:
                raise ValueError(f"Unknown profile: {self.profile}")
            configs.append(PROFILES[self.profile])
            self._config_sources.append(f"profile:{self.profile}")
            self.logger.debug(f"Applied profile: {self.profile}")

        if self.config_file:
            configs.append(self._load_config_file(Path(self.config_file)))
            self._config_sources.append(f"file:{self.config_file}")
        else:
            for config_path in CONFIG_SEARCH_PATHS:
                if config_path.exists():
                    configs.append(self._load_config_file(config_path))
                    self._config_sources.append(f"file:{config_path}")
                    self.logger.debug(f"Loaded config from {config_path}")
                    break  # Use first found config file

        env_config = self._load_environment_variables()
        if env_config:
            configs.append(env_config)
            self._config_sources.append("environment")

        # Later sources override earlier ones
        self._config_cache = self._deep_merge(*configs)
        return self._config_cache

    def _load_config_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file."""
        with open(path, 'r') as f:
            if path.suffix in ['.yml', '.yaml']:
                data = yaml.safe_load(f)
            elif path.suffix == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unknown config file format: {path}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    def _load_environment_variables(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            # e.g. TOPSHOT_CONTRACTS_TOPSHOT -> {'contracts': {'topshot': value}}
            parts = key[len(ENV_PREFIX):].lower().split('_')
            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            # Addresses stay strings; hex digits must not be read as numbers
            if parts[0] == 'contracts':
                current[parts[-1]] = value
            else:
                current[parts[-1]] = self._parse_env_value(value)

        return env_config

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ['true', 'yes']:
            return True
        elif value.lower() in ['false', 'no']:
            return False

        try:
            return int(value)
        except ValueError:
            return value

    def _deep_merge(self, *dicts: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge multiple dictionaries."""
        result = {}

        for dictionary in dicts:
            for key, value in dictionary.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = self._deep_merge(result[key], value)
                elif isinstance(value, dict):
                    result[key] = self._deep_merge(value)
                else:
                    result[key] = value

        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key_path: Dot-separated path (e.g., 'contracts.topshot')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self.load()

        for key in key_path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def set(self, key_path: str, value: Any):
        """Set configuration value by dot-notation path (in memory only)."""
        current = self.load()

        keys = key_path.split('.')
        for key in keys[:-1]:
            current = current.setdefault(key, {})

        current[keys[-1]] = value

    def get_address(self, name: str) -> Optional[Address]:
        """Get a configured contract address, or None if unset."""
        value = self.get(f"contracts.{name}")
        if value is None or value == "":
            return None
        return self._parse_address(name, value)

    def _parse_address(self, name: str, value: Any) -> Address:
        # YAML and JSON read unquoted 0x... values as numbers
        if not isinstance(value, str):
            raise InvalidAddressError(
                f"Address must be a quoted hex string, got {type(value).__name__} {value!r}; "
                f"quote the value (e.g. {name}: '0x0b2a3299cc857e29')",
                f"contracts.{name}"
            )
        return Address.from_hex(value)

    def validate(self) -> List[str]:
        """
        Validate current configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        config = self.load()
        errors = []

        network = config.get('network')
        if network not in NETWORKS:
            errors.append(f"Invalid network: {network}")

        for name, value in config.get('contracts', {}).items():
            if value is None:
                continue
            try:
                self._parse_address(name, value)
            except InvalidAddressError as e:
                errors.append(f"Invalid address for contracts.{name}: {e}")

        output_format = config.get('cli', {}).get('output_format')
        if output_format not in OUTPUT_FORMATS:
            errors.append(f"Invalid output format: {output_format}")

        return errors

    def get_sources(self) -> List[str]:
        """Get list of configuration sources that were loaded."""
        self.load()
        return self._config_sources

    def reset(self):
        """Reset configuration cache."""
        self._config_cache = None
        self._config_sources = []
