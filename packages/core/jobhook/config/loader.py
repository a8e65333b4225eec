"""Configuration loader with YAML parsing and environment substitution.

This module provides functionality for loading notification configurations
from YAML files, with ${VAR_NAME} environment variable substitution and
validation through Pydantic models.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from jobhook.config.models import NotificationConfig
from jobhook.exceptions import ConfigurationError


class ConfigLoader:
    """Loads and parses notification configuration files.

    Supports:
    - YAML parsing
    - Environment variable substitution (${VAR_NAME}, ${VAR_NAME:-default})
    - Validation with Pydantic models

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load_file("configs/ops.yaml")
        >>> print(config.notifier.type)
        "mattermost"
    """

    def load_file(self, config_path: str | Path) -> NotificationConfig:
        """Load notification configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Validated NotificationConfig object

        Raises:
            ConfigurationError: If file not found, parsing fails, or validation fails
        """
        config_path = Path(config_path)
        raw_content = self._read_file(config_path)

        try:
            config_dict = self._parse_yaml(raw_content)
        except ConfigurationError as e:
            raise ConfigurationError(
                f"Failed to parse YAML: {e}",
                config_path=str(config_path),
            ) from e

        try:
            return NotificationConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}",
                config_path=str(config_path),
            ) from e

    def load_dict(self, config_dict: dict[str, Any]) -> NotificationConfig:
        """Load notification configuration from dictionary.

        Useful for programmatic configuration or testing.

        Raises:
            ConfigurationError: If validation fails
        """
        try:
            return NotificationConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

    def load_data_file(self, data_path: str | Path) -> dict[str, Any]:
        """Load a JSON or YAML mapping, e.g. execution data saved from a host.

        No environment substitution is applied; the content is host data.

        Raises:
            ConfigurationError: If the file is missing or not a mapping
        """
        data_path = Path(data_path)
        raw_content = self._read_file(data_path)

        try:
            data = yaml.safe_load(raw_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse data file: {e}",
                config_path=str(data_path),
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Data file must contain a mapping (dict)",
                config_path=str(data_path),
            )
        return data

    def _read_file(self, path: Path) -> str:
        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {path}",
                config_path=str(path),
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}",
                config_path=str(path),
            ) from e

    def _parse_yaml(self, yaml_content: str) -> dict[str, Any]:
        """Parse YAML after environment variable substitution.

        Raises:
            ConfigurationError: If parsing or substitution fails
        """
        content = self._substitute_env_vars(yaml_content)

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"YAML parsing failed: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML mapping (dict)")

        return config_dict

    def _substitute_env_vars(self, content: str) -> str:
        """Substitute environment variables in format ${VAR_NAME}.

        Supports:
        - ${VAR_NAME} - required variable (raises error if not set)
        - ${VAR_NAME:-default_value} - optional with default value

        Raises:
            ConfigurationError: If required variable is not set

        Example:
            Input: "webhook_url: ${MATTERMOST_WEBHOOK:-http://localhost:8065/hooks/x}"
            Output: "webhook_url: http://localhost:8065/hooks/x" (if unset)
        """

        def replace_var(match: re.Match) -> str:
            full_match = match.group(1)

            if ":-" in full_match:
                var_name, default_value = full_match.split(":-", 1)
                var_name = var_name.strip()
                default_value = default_value.strip()
            else:
                var_name = full_match.strip()
                default_value = None

            value = os.environ.get(var_name)

            if value is None:
                if default_value is not None:
                    return default_value
                raise ConfigurationError(
                    f"Required environment variable not set: {var_name}",
                    field=f"${{{var_name}}}",
                )

            return value

        pattern = r"\$\{([^}]+)\}"
        return re.sub(pattern, replace_var, content)
