"""Plugin inspection commands."""

from __future__ import annotations

from typing import Any, Dict

import click

from ...service import BrandGuardianService
from ..utils import render, run_with_service


def register(main: click.Group) -> None:
    @main.group()
    def plugins() -> None:
        """Inspect registered plugins."""

    @plugins.command("list")
    @click.option("--format", "fmt", type=click.Choice(["text", "json"]), default="text")
    @click.pass_context
    def list_plugins(ctx: click.Context, fmt: str) -> None:
        """List registered plugins and the output formats they provide."""

        async def action(service: BrandGuardianService) -> Dict[str, Any]:
            manager = service.plugin_manager
            if manager is None:
                return {"plugins": [], "formats": []}
            return {"plugins": manager.list_plugins(), "formats": manager.list_formats()}

        data = run_with_service(ctx, action)
        if fmt == "json":
            click.echo(render(data, "json"))
            return

        if not data["plugins"]:
            click.echo("No plugins registered")
            return
        for plugin in data["plugins"]:
            click.echo(
                f"{plugin['id']} v{plugin['version']} [{', '.join(plugin['roles'])}]"
                f" - {plugin['description']}"
            )
        click.echo(f"\nOutput formats: {', '.join(data['formats']) or 'none'}")
