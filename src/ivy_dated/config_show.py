"""Rendering of the merged configuration for the ``config`` subcommand.

Contents
--------
* :func:`display_config` – prints configuration as TOML-like text or JSON

The CLI delegates here so that ``cli.py`` only deals with argument parsing.
"""

from __future__ import annotations

import json
from typing import Any

import click

from .config import get_config


def _format_value(value: Any) -> str:
    """Render a scalar or container the way it would appear in TOML."""
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _echo_section(name: str, data: Any) -> None:
    click.echo(f"\n[{name}]")
    if not isinstance(data, dict):
        click.echo(f"  {data}")
        return
    for key, value in data.items():
        click.echo(f"  {key} = {_format_value(value)}")


def _missing_section(section: str) -> None:
    click.echo(f"Section '{section}' not found or empty", err=True)
    raise SystemExit(1)


def display_config(*, format: str = "human", section: str | None = None) -> None:
    """Print the configuration merged from all layers.

    Args:
        format: ``"human"`` for TOML-like output, ``"json"`` for JSON.
        section: Only print this section, e.g. ``"registry"``.

    Side Effects:
        Writes to stdout via click.echo(). Raises SystemExit(1) if the
        requested section doesn't exist.

    Example:
        >>> display_config(section="registry")  # doctest: +SKIP
        [registry]
          search_url = "https://search.maven.org/solrsearch/select"
          timeout = 30.0
    """
    config = get_config()
    as_json = format.lower() == "json"

    if section:
        data = config.get(section, default={})
        if not data:
            _missing_section(section)
        if as_json:
            click.echo(json.dumps({section: data}, indent=2))
        else:
            _echo_section(section, data)
        return

    if as_json:
        click.echo(config.to_json(indent=2))
        return
    merged: dict[str, Any] = config.as_dict()
    for name, data in merged.items():
        _echo_section(name, data)


__all__ = [
    "display_config",
]
