"""CLI entry point for license-tools."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from license_tools import __version__
from license_tools.analysis.reconcile import ReconciliationResult
from license_tools.config import load_config
from license_tools.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_tools.exceptions import LicenseCheckError, LicenseToolsError
from license_tools.logging import setup_logging
from license_tools.models.config import LicenseToolsConfig
from license_tools.tasks import (
    check_licenses,
    generate_license_json,
    generate_license_page,
)

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)


def _run_options(command: Callable[..., None]) -> Callable[..., None]:
    """Attach the --config, --verbose and --quiet options to a command."""
    options = [
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Path to configuration file.",
        ),
        click.option(
            "--verbose",
            "-v",
            "verbose_flag",
            is_flag=True,
            default=False,
            help="Show debug logging.",
        ),
        click.option(
            "--quiet",
            "-q",
            "quiet_flag",
            is_flag=True,
            default=False,
            help="Show warnings and errors only.",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """License Tools - Keep a license manifest in sync with your dependencies.

    Compares the dependencies your build resolves with the hand-maintained
    license manifest, rewrites the manifest when they drift apart, and
    renders license reports as HTML and JSON.

    \b
    Examples:
        license-tools check-licenses
        license-tools generate-license-page
        license-tools generate-license-json --config .license-tools.yaml
    """
    pass


@main.command("check-licenses")
@_run_options
def check_licenses_command(
    config_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Check whether dependency licenses are listed in the manifest.

    Missing libraries are appended with placeholder fields and libraries
    that are no longer used are removed. Exits with status 1 when the
    manifest had to be rewritten.

    \b
    Examples:
        license-tools check-licenses
        license-tools check-licenses --config custom-config.yaml
    """
    config = _prepare(config_path, verbose_flag, quiet_flag)

    try:
        result = check_licenses(config)
    except LicenseToolsError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    _display_check_result(result, config)
    if not result.is_ok:
        sys.exit(EXIT_ISSUES)
    sys.exit(EXIT_SUCCESS)


@main.command("generate-license-page")
@_run_options
def generate_license_page_command(
    config_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Check licenses, then render the HTML license page.

    \b
    Examples:
        license-tools generate-license-page
        license-tools generate-license-page --config custom-config.yaml
    """
    config = _prepare(config_path, verbose_flag, quiet_flag)
    _run_report(lambda: generate_license_page(config))


@main.command("generate-license-json")
@_run_options
def generate_license_json_command(
    config_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
) -> None:
    """Check licenses, then render the JSON license report.

    \b
    Examples:
        license-tools generate-license-json
        license-tools generate-license-json --config custom-config.yaml
    """
    config = _prepare(config_path, verbose_flag, quiet_flag)
    _run_report(lambda: generate_license_json(config))


def _prepare(
    config_path: str | None, verbose_flag: bool, quiet_flag: bool
) -> LicenseToolsConfig:
    """Validate flags, configure logging and load configuration."""
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")

    if quiet_flag:
        level = "WARNING"
    elif verbose_flag:
        level = "DEBUG"
    else:
        level = "INFO"
    setup_logging(level)

    try:
        return load_config(config_path)
    except LicenseToolsError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


def _run_report(generate: Callable[[], Path]) -> None:
    """Run a report task and exit with the matching status."""
    try:
        path = generate()
    except LicenseCheckError as e:
        _display_error(e)
        sys.exit(EXIT_ISSUES)
    except LicenseToolsError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    _console.print(f"[green]Report written to {escape(str(path))}[/green]")
    sys.exit(EXIT_SUCCESS)


def _display_check_result(
    result: ReconciliationResult, config: LicenseToolsConfig
) -> None:
    """Summarize a manifest check for the user."""
    if result.is_ok:
        _console.print("[green]checkLicenses: ok[/green]")
        return

    manifest = escape(config.licenses_yaml)
    if result.undocumented:
        _console.print(
            f"[yellow]Libraries not listed in {manifest} "
            f"(added with placeholders):[/yellow]"
        )
        for record in result.undocumented:
            _console.print(f"  + {escape(str(record.artifact_id))}")
    if result.stale:
        _console.print(
            f"[yellow]Libraries listed in {manifest} but no longer used "
            f"(removed):[/yellow]"
        )
        for record in result.stale:
            _console.print(f"  - {escape(str(record.artifact_id))}")


def _display_error(error: LicenseToolsError) -> None:
    """Display error message to user on stderr.

    Args:
        error: The exception that occurred.
    """
    error_type = type(error).__name__
    _error_console.print(
        f"[red bold]Error: {error_type}:[/red bold] {escape(str(error))}",
        highlight=False,
    )


if __name__ == "__main__":
    main()
