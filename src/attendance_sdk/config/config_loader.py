"""
Configuration Loader
Loads SDK configuration from various sources
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from attendance_sdk.config.client_config import (
    ClientConfig,
    ConfigDefaults,
    ENV_VAR_MAPPING,
)
from attendance_sdk.config.config_validator import ConfigValidator
from attendance_sdk.exceptions import ConfigError


class ConfigLoader:
    """
    ConfigLoader class
    Provides multiple ways to load and merge configuration
    """

    def __init__(self) -> None:
        self._validator = ConfigValidator()

    def from_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load configuration from a JSON file

        Args:
            path: Path to JSON configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigError: If file not found or invalid JSON
        """
        file_path = Path(path).resolve()

        if not file_path.exists():
            raise ConfigError(
                f"Configuration file not found: {file_path}",
                code="CONFIG_FILE_NOT_FOUND"
            )

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file: {file_path}",
                code="CONFIG_PARSE_ERROR"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a JSON object: {file_path}",
                code="CONFIG_PARSE_ERROR"
            )
        return config

    def from_environment(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables

        Returns:
            Configuration dictionary from environment variables
        """
        config: Dict[str, Any] = {}

        for env_var, config_key in ENV_VAR_MAPPING.items():
            value = os.environ.get(env_var)
            if value is not None and value != "":
                config[config_key] = self._parse_env_value(config_key, value)

        return config

    def from_dict(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of a programmatic configuration dictionary"""
        return config.copy()

    def merge(self, *sources: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configuration sources
        Priority: later sources override earlier sources

        Args:
            sources: Configuration dictionaries in order of increasing priority

        Returns:
            Merged configuration dictionary
        """
        merged: Dict[str, Any] = {}

        for source in sources:
            merged.update(self._filter_none(source))

        return merged

    def resolve(self, config: Dict[str, Any]) -> ClientConfig:
        """
        Resolve configuration with defaults and validation

        Raises:
            ValidationError: If configuration is invalid
        """
        self._validator.validate_or_raise(config)

        # Pydantic applies the remaining defaults
        return ClientConfig(**config)

    def load(
        self,
        file: Optional[Union[str, Path]] = None,
        env: bool = True,
        config: Optional[Dict[str, Any]] = None,
    ) -> ClientConfig:
        """
        Load, merge, and resolve configuration from multiple sources

        Args:
            file: Path to JSON configuration file (optional)
            env: Whether to load from environment variables (default: True)
            config: Programmatic configuration dictionary (optional)

        Returns:
            Fully resolved ClientConfig object
        """
        sources: list[Dict[str, Any]] = []

        if file is not None:
            sources.append(self.from_file(file))

        if env:
            sources.append(self.from_environment())

        if config is not None:
            sources.append(self.from_dict(config))

        return self.resolve(self.merge(*sources))

    def create_template(self, path: Union[str, Path]) -> None:
        """
        Create a configuration template file

        The password is left blank; supply it through ATTENDANCE_PASSWORD.
        ``config_url`` holds the unresolvable placeholder and must be
        replaced with the deployment's runtime configuration URL.
        """
        template = {
            "username": "user@example.com",
            "password": "",
            "config_url": ConfigDefaults.CONFIG_URL,
            "tenant_api_path": ConfigDefaults.TENANT_API_PATH,
            "timeout": ConfigDefaults.TIMEOUT,
            "rate_limit_margin": ConfigDefaults.RATE_LIMIT_MARGIN,
            "debug": ConfigDefaults.DEBUG,
            "enable_audit_log": ConfigDefaults.ENABLE_AUDIT_LOG,
        }

        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(template, f, indent=2)

    def _parse_env_value(self, key: str, value: str) -> Any:
        """Parse environment variable value to appropriate type"""
        if key in ("debug", "enable_audit_log"):
            return value.lower() in ("true", "1", "yes")

        if key in ("timeout", "rate_limit_margin"):
            try:
                return int(value)
            except ValueError:
                return value

        return value

    def _filter_none(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Filter out None values from config dictionary"""
        return {k: v for k, v in config.items() if v is not None}
