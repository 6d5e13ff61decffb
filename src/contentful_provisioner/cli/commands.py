"""CLI command implementations."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated

import typer

from contentful_provisioner.cli import app
from contentful_provisioner.cli.errors import handle_error
from contentful_provisioner.config.loader import DEFAULT_CONFIG_FILE

ConfigPath = Annotated[
    Path,
    typer.Option("--config", "-c", help="Path to the configuration file."),
]

NoColor = Annotated[
    bool,
    typer.Option("--no-color", help="Disable colored output."),
]

AutoApprove = Annotated[
    bool,
    typer.Option("--auto-approve", help="Skip interactive approval."),
]

_DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILE)


def _use_color(no_color: bool) -> bool:
    """Determine whether to use color output."""
    return not (no_color or os.environ.get("NO_COLOR"))


@app.command(name="import")
def import_cmd(
    resource_type: Annotated[
        str, typer.Argument(help="Resource type, e.g. contentful_space or contentful_apikey.")
    ],
    name: Annotated[str, typer.Argument(help="Local resource name.")],
    import_id: Annotated[
        str, typer.Argument(help="Remote id: spaceId for spaces, spaceId/keyId for API keys.")
    ],
    config: ConfigPath = _DEFAULT_CONFIG,
    no_color: NoColor = False,
) -> None:
    """Adopt an existing Contentful entity into state."""
    from contentful_provisioner.cli.formatting import format_instance, styler
    from contentful_provisioner.config import import_resource, load

    color = _use_color(no_color)
    try:
        cfg = load(config)
        inst = import_resource(cfg, resource_type, name, import_id)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(styler(color)(f"{inst.address}: Import complete.", fg="green"))
    typer.echo()
    typer.echo(format_instance(inst, color=color))


@app.command(name="refresh")
def refresh_cmd(
    config: ConfigPath = _DEFAULT_CONFIG,
    auto_approve: AutoApprove = False,
    no_color: NoColor = False,
) -> None:
    """Refresh state from Contentful."""
    from contentful_provisioner.cli.formatting import (
        changes_summary,
        format_changes,
        format_refresh_summary,
    )
    from contentful_provisioner.config import load, save_state
    from contentful_provisioner.config import refresh as refresh_fn

    color = _use_color(no_color)
    try:
        cfg = load(config)
        changes, state = refresh_fn(cfg)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    if not changes:
        typer.echo("No changes. State is up-to-date with Contentful.")
        raise typer.Exit(0)

    typer.echo(format_changes(changes, color=color))
    typer.echo()
    typer.echo(format_refresh_summary(changes_summary(changes), color=color))
    typer.echo()

    if not auto_approve:
        try:
            typer.confirm("Do you want to update the state file?", abort=True)
        except typer.Abort as e:
            typer.echo("Refresh canceled.", err=True)
            raise typer.Exit(1) from e

    save_state(cfg, state)
    count = len(state.resources)
    typer.echo(f"State refreshed. {count} resource{'s' if count != 1 else ''} tracked.")


@app.command()
def drift(
    config: ConfigPath = _DEFAULT_CONFIG,
    no_color: NoColor = False,
) -> None:
    """Show drift between state and Contentful. Exits 2 when drift is found."""
    from contentful_provisioner.cli.formatting import format_changes
    from contentful_provisioner.config import drift as drift_fn
    from contentful_provisioner.config import load

    color = _use_color(no_color)
    try:
        cfg = load(config)
        changes = drift_fn(cfg)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    if not changes:
        typer.echo("No drift detected. State is up-to-date with Contentful.")
        raise typer.Exit(0)

    typer.echo("Drift detected:\n")
    typer.echo(format_changes(changes, color=color))
    raise typer.Exit(2)


@app.command()
def show(
    address: Annotated[
        str | None, typer.Argument(help="Only show this resource address.")
    ] = None,
    config: ConfigPath = _DEFAULT_CONFIG,
    no_color: NoColor = False,
) -> None:
    """Show tracked records from the state file."""
    from contentful_provisioner.cli.formatting import format_instance
    from contentful_provisioner.config import load
    from contentful_provisioner.core.state import State
    from contentful_provisioner.engine.errors import ResourceNotTrackedError

    color = _use_color(no_color)
    try:
        cfg = load(config)
        state = State.load_or_create(cfg.state_path)
        if address is not None and address not in state.resources:
            raise ResourceNotTrackedError(address)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    instances = [state.resources[address]] if address is not None else state.sorted_instances()
    if not instances:
        typer.echo("No resources tracked.")
        return
    typer.echo("\n\n".join(format_instance(i, color=color) for i in instances))


@app.command()
def forget(
    address: Annotated[str, typer.Argument(help="Resource address to remove from state.")],
    config: ConfigPath = _DEFAULT_CONFIG,
    no_color: NoColor = False,
) -> None:
    """Stop tracking a record without deleting it in Contentful."""
    from contentful_provisioner.config import forget as forget_fn
    from contentful_provisioner.config import load

    color = _use_color(no_color)
    try:
        cfg = load(config)
        inst = forget_fn(cfg, address)
    except Exception as exc:
        raise typer.Exit(handle_error(exc, color=color)) from exc

    typer.echo(f"Removed {inst.address} from state.")
