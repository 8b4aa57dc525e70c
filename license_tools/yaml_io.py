"""Reading YAML documents and reporting their validation errors."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from license_tools.exceptions import LicenseToolsError


def read_yaml_file(
    path: Path, error_class: type[LicenseToolsError], label: str
) -> Any:
    """Read and parse a YAML file. JSON documents are accepted too.

    Args:
        path: File to read.
        error_class: Exception type raised on failure.
        label: What the file is, for error messages.

    Returns:
        The parsed document, or None if the file is empty or only comments.

    Raises:
        error_class: If the file cannot be read or is not valid YAML.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise error_class(f"Cannot read {label} '{path}': {e}") from e

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise error_class(f"Invalid YAML syntax in {label} '{path}': {e}") from e


def format_validation_errors(error: ValidationError) -> str:
    """Join Pydantic errors into ``location: message`` pairs.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )
