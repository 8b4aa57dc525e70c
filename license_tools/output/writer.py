"""Writing rendered reports to disk."""
from __future__ import annotations

from pathlib import Path
from typing import Union

import structlog

from license_tools.exceptions import ReportError

logger = structlog.get_logger(__name__)


def write_report(content: str, directory: Union[str, Path], filename: str) -> Path:
    """Write report content, creating the output directory if needed.

    Args:
        content: Rendered report.
        directory: Output directory.
        filename: Report file name.

    Returns:
        Path of the written file.

    Raises:
        ReportError: If the file cannot be written.
    """
    output_dir = Path(directory)
    file_path = output_dir / filename

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        if file_path.exists():
            logger.debug("overwriting existing report", path=str(file_path))
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportError(f"Cannot write to file '{file_path}': {e}") from e

    logger.info("render", path=str(file_path))
    return file_path
