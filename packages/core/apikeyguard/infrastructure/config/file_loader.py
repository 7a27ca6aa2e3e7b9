"""Configuration file loader for YAML and JSON files."""

import json
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from apikeyguard.infrastructure.config.settings import GuardSettings


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error message.
            field: Optional field name that failed validation.
        """
        self.message = message
        self.field = field
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return error message with field name if available."""
        if self.field:
            return f"Configuration error in field '{self.field}': {self.message}"
        return self.message


class ConfigurationFileLoader:
    """Loads apikeyguard settings from YAML or JSON files.

    The file holds a flat mapping of GuardSettings fields, for example:

    ```yaml
    base_url: https://api.example.com/v1
    filters:
      - logging
      - api_key_query
    encryption_key_iterations: 2048
    ```
    """

    def __init__(self, config_file_path: str | Path | None = None) -> None:
        """Initialize ConfigurationFileLoader.

        Args:
            config_file_path: Path to configuration file. If None, attempts to
                            load from APIKEYGUARD_CONFIG_FILE environment variable.

        Raises:
            ConfigurationError: If no path is available or the file does not exist.
        """
        if config_file_path is None:
            config_file_path = os.getenv("APIKEYGUARD_CONFIG_FILE")
            if not config_file_path:
                raise ConfigurationError(
                    "Configuration file path not provided and APIKEYGUARD_CONFIG_FILE "
                    "environment variable is not set"
                )

        self._config_path = Path(config_file_path)
        if not self._config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {self._config_path}")

        # Validate file path to prevent directory traversal
        try:
            self._config_path.resolve().relative_to(Path.cwd().resolve())
        except ValueError:
            if not self._config_path.is_absolute():
                raise ConfigurationError(
                    f"Configuration file path must be within current directory or absolute: {self._config_path}"
                ) from None

    @property
    def path(self) -> Path:
        return self._config_path

    def load(self) -> dict[str, Any]:
        """Load raw configuration from file.

        Automatically detects file format (YAML or JSON) based on file extension.

        Returns:
            Dictionary containing configuration data.

        Raises:
            ConfigurationError: If file format is invalid or file cannot be parsed.
        """
        suffix = self._config_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            return self._load_yaml()
        elif suffix == ".json":
            return self._load_json()
        else:
            raise ConfigurationError(
                f"Unsupported configuration file format: {suffix}. "
                "Supported formats: .yaml, .yml, .json"
            )

    def load_settings(self) -> GuardSettings:
        """Load the file and validate it into GuardSettings.

        Values not present in the file fall back to environment variables and
        then to defaults.

        Raises:
            ConfigurationError: If the file is invalid.
        """
        config = self.load()
        self.parse_filters(config)
        try:
            return GuardSettings.from_dict(config)
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            raise ConfigurationError(first.get("msg", str(e)), field=field) from e

    def parse_filters(self, config: dict[str, Any]) -> list[str]:
        """Parse the filter list from loaded configuration.

        Args:
            config: Configuration dictionary loaded from file.

        Returns:
            Filter names in execution order (empty when not configured).

        Raises:
            ConfigurationError: If the filter list is invalid.
        """
        filters_config = config.get("filters", [])
        if not isinstance(filters_config, list):
            raise ConfigurationError("Configuration 'filters' must be a list", field="filters")

        parsed_filters = []
        for idx, name in enumerate(filters_config):
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(
                    f"Filter at index {idx} must be a non-empty string",
                    field=f"filters[{idx}]",
                )
            parsed_filters.append(name.strip())
        return parsed_filters

    def _load_yaml(self) -> dict[str, Any]:
        """Load configuration from YAML file.

        Raises:
            ConfigurationError: If YAML file is invalid or cannot be parsed.
        """
        try:
            with self._config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
                if data is None:
                    return {}
                if not isinstance(data, dict):
                    raise ConfigurationError("YAML file must contain a dictionary/mapping")
                return data
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML format: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}") from e

    def _load_json(self) -> dict[str, Any]:
        """Load configuration from JSON file.

        Raises:
            ConfigurationError: If JSON file is invalid or cannot be parsed.
        """
        try:
            with self._config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
                if not isinstance(data, dict):
                    raise ConfigurationError("JSON file must contain an object")
                return data
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON format: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}") from e
