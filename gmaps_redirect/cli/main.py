"""
Command line interface for gmaps-redirect.
"""

from __future__ import annotations

import json
import webbrowser
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from gmaps_redirect.config import Settings, load_settings
from gmaps_redirect.services.logging import configure_logging, stop_logging
from gmaps_redirect.workflow import LinkHandler

app = typer.Typer(
    name="gmaps-redirect",
    help="Resolve Google Maps short and share links to geo: coordinates",
)


def _settings(
    config_path: Optional[Path],
    timeout: Optional[float] = None,
    max_redirects: Optional[int] = None,
    verbose: Optional[bool] = None,
) -> Settings:
    overrides: dict[str, object] = {}
    if timeout is not None:
        overrides["request_timeout"] = timeout
    if max_redirects is not None:
        overrides["max_redirects"] = max_redirects
    if verbose is not None:
        overrides["verbose"] = verbose
    try:
        return load_settings(config_path, overrides=overrides or None)
    except ValidationError as exc:
        typer.echo(f"error: invalid settings\n{exc}", err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def resolve(
    url: str = typer.Argument(..., help="Map link to resolve."),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=False,
        help="Optional YAML settings override.",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds before a single request is abandoned.",
    ),
    max_redirects: Optional[int] = typer.Option(
        None,
        "--max-redirects",
        help="Number of redirects followed before giving up.",
    ),
    open_location: bool = typer.Option(
        False,
        "--open/--no-open",
        help="Open the resolved geo: reference with the system handler.",
    ),
    show_trace: bool = typer.Option(
        True,
        "--trace/--no-trace",
        help="Print the resolution trace to stderr.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the full outcome as JSON instead of the bare geo: reference.",
    ),
    verbose: Optional[bool] = typer.Option(
        None,
        "--verbose/--quiet",
        help="Toggle debug logging on the console.",
    ),
) -> None:
    """Resolve a map link and print its geo: reference."""

    settings = _settings(config_path, timeout, max_redirects, verbose)
    configure_logging(
        log_to_file=settings.log_to_file,
        log_file=settings.log_file,
        log_to_console=settings.log_to_console,
        verbose=settings.verbose,
    )

    def _open(uri: str) -> None:
        if not json_output:
            typer.echo(uri)
        if open_location:
            webbrowser.open(uri)

    def _fail(message: str) -> None:
        typer.echo(f"error: {message}", err=True)

    def _trace(text: str) -> None:
        if show_trace:
            typer.echo(text, err=True)

    try:
        with LinkHandler(
            settings,
            open_location=_open,
            report_failure=_fail,
            publish_trace=_trace,
        ) as handler:
            outcome = handler.handle(url)
    finally:
        stop_logging()

    if outcome is None:
        typer.echo("error: empty link", err=True)
        raise typer.Exit(code=2)
    if json_output:
        typer.echo(json.dumps(outcome.to_dict()))
    if not outcome.resolved:
        raise typer.Exit(code=1)


@app.command("settings")
def show_settings(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=False,
        help="Optional YAML settings override.",
    ),
) -> None:
    """Print resolved settings for debugging."""
    settings = _settings(config_path)
    for key, value in settings.model_dump().items():
        typer.echo(f"{key}: {value}")


def main_cli() -> None:
    """Allow `python -m gmaps_redirect` execution."""
    app()


if __name__ == "__main__":
    main_cli()
