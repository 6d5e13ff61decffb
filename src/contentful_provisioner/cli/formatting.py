"""Drift and state output rendering (Terraform-style)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

import typer

from contentful_provisioner.engine.types import Action

if TYPE_CHECKING:
    from collections.abc import Callable

    from contentful_provisioner.core.state import ResourceInstance
    from contentful_provisioner.engine.types import ResourceChange


class _ActionStyle(NamedTuple):
    color: str
    symbol: str


_ACTION_STYLES: dict[Action, _ActionStyle] = {
    Action.UPDATE: _ActionStyle("yellow", "~"),
    Action.DELETE: _ActionStyle("red", "-"),
}

_ACTION_DESC: dict[Action, str] = {
    Action.UPDATE: "has changed",
    Action.DELETE: "has been deleted",
}

# Never printed in full.
_SENSITIVE_ATTRS = frozenset({"access_token"})


def styler(color: bool) -> Callable[..., str]:
    """Return ``typer.style`` when *color* is True, otherwise a passthrough."""
    if color:
        return typer.style
    return lambda text, **_kw: text


def _align_values(items: dict[str, str]) -> list[tuple[str, str]]:
    """Right-pad keys so ``=`` signs align."""
    if not items:
        return []
    max_key = max(len(k) for k in items)
    return [(k.ljust(max_key), v) for k, v in items.items()]


def _format_value(key: str, value: Any) -> str:
    if key in _SENSITIVE_ATTRS and value:
        return "(sensitive value)"
    if isinstance(value, str):
        return f'"{value}"'
    if value is None:
        return "null"
    return str(value)


def _change_attrs(change: ResourceChange) -> dict[str, str]:
    """Extract displayable ``key → formatted value`` pairs from a change."""
    return {
        k: f"{_format_value(k, c.before)} -> {_format_value(k, c.after)}"
        for k, c in change.diff.items()
    }


def _resource_block(
    address: str,
    resource_type: str,
    attrs: dict[str, str],
    *,
    symbol: str,
    style: Callable[..., str],
    **sc: Any,
) -> list[str]:
    name = address.split(".", 1)[1] if "." in address else address
    prefix = f"{symbol} " if symbol.strip() else ""
    return [
        style(f'  {prefix}resource "{resource_type}" "{name}" {{', **sc),
        *[style(f"      {prefix}{k} = {v}", **sc) for k, v in _align_values(attrs)],
        style("    }", **sc),
    ]


def format_change(change: ResourceChange, *, color: bool = True) -> str:
    """Render a single ResourceChange as a Terraform-style block."""
    style = styler(color)
    action_style = _ACTION_STYLES[change.action]
    sc = {"fg": action_style.color}
    lines = [
        style(f"  # {change.address} {_ACTION_DESC[change.action]}", bold=True, **sc),
        *_resource_block(
            change.address,
            change.resource_type,
            _change_attrs(change),
            symbol=action_style.symbol,
            style=style,
            **sc,
        ),
    ]
    return "\n".join(lines)


def format_changes(changes: list[ResourceChange], *, color: bool = True) -> str:
    """Render a list of changes as Terraform-style diff blocks."""
    if not changes:
        return "No changes. State is up-to-date with Contentful."
    return "\n\n".join(format_change(c, color=color) for c in changes)


def format_instance(inst: ResourceInstance, *, color: bool = True) -> str:
    """Render a tracked record like ``terraform state show``."""
    style = styler(color)
    attrs = {k: _format_value(k, v) for k, v in sorted(inst.attributes.items())}
    lines = [
        style(f"# {inst.address}:", bold=True),
        *_resource_block(inst.address, inst.resource_type, attrs, symbol=" ", style=style),
    ]
    return "\n".join(lines)


def changes_summary(changes: list[ResourceChange]) -> dict[str, int]:
    """Count changes by action type (update/delete)."""
    summary = {action.value: 0 for action in Action}
    for c in changes:
        summary[c.action.value] += 1
    return summary


def format_refresh_summary(summary: dict[str, int], *, color: bool = True) -> str:
    """Render ``Refresh: 1 changed, 0 removed.``"""
    style = styler(color)
    parts = [
        style(f"{n} {verb}", fg=fg) if n and color else f"{n} {verb}"
        for n, verb, fg in (
            (summary.get("update", 0), "changed", "yellow"),
            (summary.get("delete", 0), "removed", "red"),
        )
    ]
    return f"Refresh: {', '.join(parts)}."
