"""Configuration-related CLI commands."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import click

from ...application.models import ConfigUpdateRequest
from ...config.manager import ConfigManager
from ...exceptions import ConfigurationError
from ...logging import get_logger
from ...service import BrandGuardianService
from ..utils import CLIError, get_settings, render, run_with_service


def parse_risk_options(values: Tuple[str, ...]) -> Dict[str, str]:
    """Parse repeated ``CATEGORY=LEVEL`` options."""
    tolerances: Dict[str, str] = {}
    for value in values:
        category, sep, level = value.partition("=")
        if not sep or not category.strip() or not level.strip():
            raise CLIError(f"Invalid risk tolerance '{value}', expected CATEGORY=LEVEL")
        tolerances[category.strip()] = level.strip().upper()
    return tolerances


def register(main: click.Group) -> None:
    """Attach the ``config`` command group to the root CLI."""

    @main.group()
    def config() -> None:
        """Inspect and update the evaluation configuration."""

    @config.command("show")
    @click.option("--format", "fmt", type=click.Choice(["json", "yaml"]), default="yaml")
    @click.pass_context
    def show_config(ctx: click.Context, fmt: str) -> None:
        """Display the active configuration."""
        settings = get_settings(ctx)
        try:
            config_manager = ConfigManager(settings.config_path)
        except ConfigurationError as exc:
            raise CLIError(exc.message) from exc
        click.echo(render(config_manager.get_config_dict(), fmt))

    @config.command("update")
    @click.option("--category", "categories", multiple=True, help="Category to evaluate")
    @click.option("--sensitive-keyword", "sensitive_keywords", multiple=True)
    @click.option("--allowed-topic", "allowed_topics", multiple=True)
    @click.option("--blocked-topic", "blocked_topics", multiple=True)
    @click.option("--risk", "risks", multiple=True, help="Tolerance as CATEGORY=LEVEL")
    @click.option("--tone-weight", type=float)
    @click.option("--voice-weight", type=float)
    @click.option("--terminology-weight", type=float)
    @click.option(
        "--save",
        "save_path",
        type=click.Path(dir_okay=False),
        help="Write the updated configuration to this YAML file",
    )
    @click.pass_context
    def update_config(
        ctx: click.Context,
        categories: Tuple[str, ...],
        sensitive_keywords: Tuple[str, ...],
        allowed_topics: Tuple[str, ...],
        blocked_topics: Tuple[str, ...],
        risks: Tuple[str, ...],
        tone_weight: Optional[float],
        voice_weight: Optional[float],
        terminology_weight: Optional[float],
        save_path: Optional[str],
    ) -> None:
        """Validate and apply a configuration update.

        Without ``--save`` (or a configured config path) the update only
        lives for this invocation, which makes it a validation dry run.
        """
        logger = get_logger(__name__)
        request = ConfigUpdateRequest(
            categories=list(categories) or None,
            sensitive_keywords=list(sensitive_keywords) or None,
            allowed_topics=list(allowed_topics) or None,
            blocked_topics=list(blocked_topics) or None,
            risk_tolerances=parse_risk_options(risks) or None,
            tone_weight=tone_weight,
            voice_weight=voice_weight,
            terminology_weight=terminology_weight,
        )

        async def action(service: BrandGuardianService):
            result = await service.update_config.execute(request)
            saved = None
            if result.success and (save_path or service.config_manager.config_path):
                saved = service.config_manager.save_config(save_path)
            return result, saved

        result, saved = run_with_service(ctx, action)
        if not result.success:
            logger.error("Configuration update rejected", reason=result.message)
            raise CLIError(result.message)

        click.echo(f"✓ {result.message}")
        click.echo(f"  Updated fields: {', '.join(result.updated_fields)}")
        if saved:
            click.echo(f"  Saved to {saved}")
