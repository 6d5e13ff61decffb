"""Map exceptions to clean stderr messages and exit codes."""

from __future__ import annotations

import typer

from contentful_provisioner.client.errors import ContentfulError, NotFoundError
from contentful_provisioner.config.loader import ConfigError
from contentful_provisioner.core.state import StateError
from contentful_provisioner.engine.errors import (
    EngineError,
    ImportFormatError,
    ImportNotFoundError,
)

# Checked in order; the first matching prefix wins.
_PREFIXES: tuple[tuple[type[Exception], str], ...] = (
    (ConfigError, "Configuration error"),
    (StateError, "State error"),
    (ImportFormatError, "Import failed"),
    (ImportNotFoundError, "Import failed"),
    (NotFoundError, "Not found in Contentful"),
    (ContentfulError, "Contentful API error"),
    (EngineError, "Error"),
)


def handle_error(exc: Exception, *, color: bool = True) -> int:
    """Print *exc* to stderr without a traceback and return exit code 1."""
    prefix = next((p for cls, p in _PREFIXES if isinstance(exc, cls)), "Error")
    lines = [f"{prefix}: {exc}"]
    if isinstance(exc, ContentfulError) and exc.request_id:
        lines.append(f"  Request ID: {exc.request_id}")

    fg = typer.colors.RED if color else None
    for line in lines:
        typer.echo(typer.style(line, fg=fg), err=True)
    return 1
