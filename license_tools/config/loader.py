"""Locating and loading the license-tools configuration."""
from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from license_tools.exceptions import ConfigurationError
from license_tools.models.config import LicenseToolsConfig
from license_tools.yaml_io import format_validation_errors, read_yaml_file

# Searched in the working directory, first match wins
CONFIG_FILE_NAMES = (".license-tools.yaml", ".license-tools.yml")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the first configuration file found in ``start_dir``.

    Args:
        start_dir: Directory to search. Defaults to the working directory.
    """
    search_dir = start_dir or Path.cwd()
    return next(
        (search_dir / name for name in CONFIG_FILE_NAMES if (search_dir / name).exists()),
        None,
    )


def load_config_file(path: Path) -> LicenseToolsConfig:
    """Load and validate a configuration file.

    An empty file, or one holding only comments, gives the defaults.

    Raises:
        ConfigurationError: If the file is unreadable, not YAML, not a
            mapping, or has unknown or invalid options.
    """
    data = read_yaml_file(path, ConfigurationError, "configuration file")
    if data is None:
        return LicenseToolsConfig()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        return LicenseToolsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {format_validation_errors(e)}"
        ) from e


def load_config(config_path: str | None = None) -> LicenseToolsConfig:
    """Load the configuration for a run.

    Order: the explicit ``config_path``, then a configuration file in the
    working directory, then the built-in defaults.

    Raises:
        ConfigurationError: If the selected file is invalid.
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None:
        return LicenseToolsConfig()
    return load_config_file(path)
