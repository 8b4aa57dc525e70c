"""Structured logging setup for license-tools."""
from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from rich.console import Console


class RichConsoleRenderer:
    """Render structlog events on a Rich console.

    Events are printed as ``level event key=value ...`` with colors per
    level. Output goes to stderr so reports written to stdout stay clean.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console if console is not None else Console(stderr=True)
        self._level_styles = {
            "debug": "dim",
            "info": "green",
            "warning": "yellow",
            "error": "bold red",
            "critical": "bold magenta",
        }

    def __call__(self, logger: Any, name: str, event_dict: dict[str, Any]) -> str:
        event = event_dict.pop("event", "")
        log_level = event_dict.pop("level", "info")
        event_dict.pop("logger", None)
        event_dict.pop("timestamp", None)
        exception = event_dict.pop("exception", None)

        level_style = self._level_styles.get(log_level, "white")
        parts = [f"[{level_style}]{log_level:<8}[/{level_style}]", str(event)]
        for key, value in event_dict.items():
            parts.append(f"[cyan]{key}[/cyan]=[green]{value!s}[/green]")

        message = " ".join(parts)
        if exception:
            message += f"\n[red]{exception}[/red]"

        self._console.print(message, highlight=False)
        raise structlog.DropEvent


def setup_logging(level: str = "INFO", console: Console | None = None) -> None:
    """Configure structured logging for the command line.

    Args:
        level: Minimum log level name.
        console: Optional Rich Console to render to (defaults to stderr).
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if os.getenv("ENV") == "production":
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [RichConsoleRenderer(console)]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
