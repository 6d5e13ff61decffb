"""CLI application for contentful-provisioner."""

from __future__ import annotations

import logging
import os
import sys

import typer

from contentful_provisioner import __version__

app = typer.Typer(
    name="contentful-provisioner",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"contentful-provisioner {__version__}")
        raise typer.Exit


_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_LOG_ENV = "CONTENTFUL_LOG"
_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _log_level(verbose: int) -> int | None:
    """Level from ``CONTENTFUL_LOG`` if set, else from the ``-v`` count; None leaves logging alone."""
    env_level = os.environ.get(_LOG_ENV, "").upper()
    if env_level:
        level = logging.getLevelNamesMapping().get(env_level)
        if level is None:
            typer.echo(
                f"WARNING: ignoring invalid {_LOG_ENV} level {env_level!r}; using INFO",
                err=True,
            )
            return logging.INFO
        return level
    if verbose <= 0:
        return None
    return _VERBOSITY_LEVELS[min(verbose, len(_VERBOSITY_LEVELS) - 1)]


def _configure_logging(verbose: int) -> None:
    level = _log_level(verbose)
    if level is None:
        return
    logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT, stream=sys.stderr, force=True)
    logging.getLogger("contentful_provisioner").setLevel(level)


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log verbosity (-v info, -vv debug).",
    ),
) -> None:
    """Terraform-style state management for Contentful spaces and API keys."""
    _ = version
    _configure_logging(verbose)


# Register commands after app is created to avoid circular imports.
from contentful_provisioner.cli import commands as _commands  # noqa: E402, F401
