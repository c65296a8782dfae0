"""Command registration helpers for the CLI."""

from __future__ import annotations

import click

from . import brand, config, evaluate, plugins


def register_all(main: click.Group) -> None:
    """Attach every built-in command to the root group."""
    evaluate.register(main)
    config.register(main)
    plugins.register(main)
    brand.register(main)
