"""Root Click group for the Brand Guardian CLI."""

from __future__ import annotations

from typing import Any, Dict, Optional

import click

from ..config.settings import ServiceSettings
from ..logging import get_logger, setup_logging
from .commands import register_all


@click.group()
@click.option(
    "--config", "-c", type=click.Path(exists=False), help="Configuration file path"
)
@click.option(
    "--brand", "-b", type=click.Path(exists=True, dir_okay=False), help="Brand schema file"
)
@click.option(
    "--plugins-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory containing plugin manifests",
)
@click.option("--no-plugins", is_flag=True, help="Disable the plugin pipeline")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
)
@click.pass_context
def main(
    ctx: click.Context,
    config: Optional[str],
    brand: Optional[str],
    plugins_dir: Optional[str],
    no_plugins: bool,
    log_level: Optional[str],
) -> None:
    """Brand Guardian - brand safety and brand compliance evaluation."""
    ctx.ensure_object(dict)

    overrides: Dict[str, Any] = {}
    if config:
        overrides["config_path"] = config
    if brand:
        overrides["brand_schema_path"] = brand
    if plugins_dir:
        overrides["plugins_dir"] = plugins_dir
    if no_plugins:
        overrides["enable_plugins"] = False
    if log_level:
        overrides["log_level"] = log_level
    settings = ServiceSettings(**overrides)
    ctx.obj["settings"] = settings

    setup_logging(
        log_level=settings.log_level.value,
        log_format=settings.log_format,
        log_file=settings.log_file,
        enable_privacy_filter=True,
    )

    logger = get_logger(__name__)
    logger.debug(
        "Brand Guardian CLI initialized",
        config_path=settings.config_path,
        brand_schema_path=settings.brand_schema_path,
        plugins_enabled=settings.enable_plugins,
    )


register_all(main)


if __name__ == "__main__":  # pragma: no cover
    main()  # pylint: disable=no-value-for-parameter
