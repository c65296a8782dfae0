"""Brand schema commands."""

from __future__ import annotations

import asyncio

import click

from ...exceptions import BrandGuardianError
from ...repository.brand_repository import FileBrandSchemaRepository
from ..utils import describe_error


def register(main: click.Group) -> None:
    @main.command("validate-brand")
    @click.argument("file", type=click.Path(exists=True, dir_okay=False))
    @click.pass_context
    def validate_brand(ctx: click.Context, file: str) -> None:
        """Validate a JSON/YAML brand schema FILE."""
        repository = FileBrandSchemaRepository(file)
        try:
            brand = asyncio.run(repository.load())
        except BrandGuardianError as exc:
            click.echo(f"✗ Brand schema invalid: {describe_error(exc)}")
            ctx.exit(1)

        click.echo(f"✓ Brand schema valid: {brand.name}")
        click.echo(f"  Primary tone: {brand.tone_guidelines.primary_tone}")
        click.echo(f"  Terminology rules: {len(brand.terminology_guidelines.terms)}")
        click.echo(f"  Contextual adjustments: {len(brand.contextual_adjustments)}")
