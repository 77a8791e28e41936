"""
Configuration management for evm-chest
"""

import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from ..exceptions import ConfigurationError

CONFIG_FILE_NAME = "chest.yaml"
RPC_URL_ENV_VAR = "EVM_CHEST_RPC_URL"

_ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


@dataclass(frozen=True)
class ChestSettings:
    """Settings shared by every helper bound to one client"""
    rpc_url: str = "http://127.0.0.1:8545"
    request_timeout: int = 30
    default_tolerance_wei: int = 10 ** 16
    tolerance_ceiling_wei: int = 10 ** 16
    storage_from_slot: int = 0
    storage_to_slot: int = 20

    def __post_init__(self):
        if self.default_tolerance_wei < 0:
            raise ConfigurationError("default_tolerance_wei must not be negative")
        if self.tolerance_ceiling_wei <= 0:
            raise ConfigurationError("tolerance_ceiling_wei must be positive")
        if self.storage_to_slot < self.storage_from_slot:
            raise ConfigurationError(
                f"storage_to_slot ({self.storage_to_slot}) is below "
                f"storage_from_slot ({self.storage_from_slot})"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChestSettings":
        """Build settings from a flat dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key == "rpc_url":
                kwargs[key] = str(value)
                continue
            try:
                kwargs[key] = int(value)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid value for {key}: {value!r}") from e
        return cls(**kwargs)


class ConfigManager:
    """Loads ChestSettings from chest.yaml and the environment"""

    def __init__(self, config_dir: str = None, env_file: Optional[str] = ".env"):
        if config_dir is None:
            config_dir = Path(__file__).parent
        self.config_dir = Path(config_dir)
        self.env_file = env_file

        self._raw_config = None
        self._settings = None

    def load_config(self) -> Dict[str, Any]:
        """Load the YAML configuration file"""
        if self._raw_config is None:
            if self.env_file and Path(self.env_file).exists():
                load_dotenv(self.env_file)

            config_path = self.config_dir / CONFIG_FILE_NAME
            try:
                with open(config_path, 'r') as f:
                    loaded = yaml.safe_load(f)
            except FileNotFoundError as e:
                raise ConfigurationError(f"Config file not found: {config_path}") from e
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ConfigurationError(f"{config_path} must contain a mapping")
            self._raw_config = loaded

        return self._raw_config

    def get_settings(self) -> ChestSettings:
        """Get settings with environment overrides applied"""
        if self._settings is None:
            config = self.load_config()
            network = config.get('network') or {}
            assertions = config.get('assertions') or {}
            storage = config.get('storage') or {}

            flat = {
                'rpc_url': network.get('rpc_url', ChestSettings.rpc_url),
                'request_timeout': network.get('request_timeout', ChestSettings.request_timeout),
                'default_tolerance_wei': assertions.get(
                    'default_tolerance_wei', ChestSettings.default_tolerance_wei),
                'tolerance_ceiling_wei': assertions.get(
                    'tolerance_ceiling_wei', ChestSettings.tolerance_ceiling_wei),
                'storage_from_slot': storage.get('from_slot', ChestSettings.storage_from_slot),
                'storage_to_slot': storage.get('to_slot', ChestSettings.storage_to_slot),
            }
            flat = {key: self.expand_env_vars(value) if isinstance(value, str) else value
                    for key, value in flat.items()}

            rpc_override = os.getenv(RPC_URL_ENV_VAR)
            if rpc_override:
                flat['rpc_url'] = rpc_override

            self._settings = ChestSettings.from_dict(flat)

        return self._settings

    def expand_env_vars(self, text: str) -> str:
        """Expand environment variables in configuration strings"""
        def replace_env_var(match):
            var_name = match.group(1)
            return os.getenv(var_name, match.group(0))

        return _ENV_VAR_PATTERN.sub(replace_env_var, text)


# Global config manager instance
config_manager = ConfigManager()


def load_settings(config_dir: str = None) -> ChestSettings:
    """Load settings from a config directory, or the packaged defaults"""
    if config_dir is None:
        return config_manager.get_settings()
    return ConfigManager(config_dir).get_settings()


__all__ = [
    'ChestSettings',
    'ConfigManager',
    'config_manager',
    'load_settings',
    'CONFIG_FILE_NAME',
    'RPC_URL_ENV_VAR'
]
