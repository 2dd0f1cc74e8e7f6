"""Static package metadata surfaced to CLI commands and documentation.

Purpose
-------
Expose the distribution metadata and the configuration identifiers used by
lib_layered_config in one place, so the CLI, the config loader and the
``info`` command agree on names.

Contents
--------
* Module-level constants describing the distribution.
* ``LAYEREDCONF_*`` identifiers consumed by :mod:`ivy_dated.config`.
* :func:`print_info` rendering the constants for the ``info`` command.
"""

from __future__ import annotations

import click

name = "ivy_dated"
title = "How dated are your Ivy dependencies?"
version = "0.1.0"
author = "ivy-dated contributors"
shell_command = "ivy-dated"

# Identifiers that determine the platform specific config directories
LAYEREDCONF_VENDOR = "ivy-dated"
LAYEREDCONF_APP = "ivy-dated"
LAYEREDCONF_SLUG = "ivy-dated"


def print_info() -> None:
    """Print the summarised metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for ivy_dated:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    click.echo(f"Info for {name}:\n")
    for label, value in fields:
        click.echo(f"    {label.ljust(pad)} = {value}")
