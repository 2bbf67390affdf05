"""
Manages loading and validation of the optional INI configuration file that
holds defaults for the reachability checker.
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from trackpage.exceptions import ConfigurationError
from trackpage.models.config import CheckConfig

log = logging.getLogger(__name__)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "trackpage"


def get_default_config_file() -> Path:
    return get_config_dir() / "config.ini"


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path, required: bool = False):
        """
        Args:
            config_file_path: Location of the INI file.
            required: If True, a missing file is an error instead of meaning
                "use the built-in defaults".
        """
        self.config_file_path = Path(config_file_path)
        self.required = required
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> CheckConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated CheckConfig object.

        Raises:
            ConfigurationError: If a required file is missing, the file cannot be
            parsed, or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e
            config_from_file = self._get_config_as_dict()
            log.debug(f"Loaded check settings from '{self.config_file_path}'.")
        elif self.required:
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'."
            )

        # Override with CLI options
        if cli_options:
            config_from_file.update(
                {key: value for key, value in cli_options.items() if value is not None}
            )

        try:
            return CheckConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the known keys of the 'DEFAULT' section into a dictionary."""
        section = self._parser["DEFAULT"]
        unknown = set(section) - CheckConfig.get_ini_keys()
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown configuration keys: "
                f"{', '.join(sorted(unknown))}[/yellow]"
            )

        config: dict[str, Any] = {}
        try:
            if (timeout := section.get("timeout", "").strip()):
                config["timeout"] = float(timeout)
            if (max_concurrent := section.get("max_concurrent", "").strip()):
                config["max_concurrent"] = int(max_concurrent)
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric value in configuration: {e}") from e
        if (method := section.get("method", "").strip()):
            config["method"] = method
        if (user_agent := section.get("user_agent", "").strip()):
            config["user_agent"] = user_agent
        return config
