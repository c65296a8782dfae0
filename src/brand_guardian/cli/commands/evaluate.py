"""Single and batch evaluation commands."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple

import click
from pydantic import ValidationError as PydanticValidationError

from ...application.models import CombinedOptions, EvaluationMode, EvaluationRequest
from ...exceptions import PluginError
from ...service import BrandGuardianService
from ..utils import CLIError, load_data_file, run_with_service, write_output

MODES = [mode.value for mode in EvaluationMode]


def _options(
    safety_weight: Optional[float], brand_weight: Optional[float], skip_plugins: bool
) -> CombinedOptions:
    return CombinedOptions(
        safety_weight=safety_weight,
        brand_weight=brand_weight,
        run_plugins=not skip_plugins,
        enrich=not skip_plugins,
    )


async def _format(service: BrandGuardianService, data: Dict[str, Any], fmt: str) -> str:
    if service.plugin_manager is not None and fmt in service.plugin_manager.list_formats():
        return await service.plugin_manager.format_result(data, fmt)
    if fmt == "json":
        return json.dumps(data, indent=2, default=str)
    raise PluginError(f"No formatter available for format: {fmt}", details={"format": fmt})


def register(main: click.Group) -> None:
    """Attach evaluation commands to the root CLI."""

    @main.command()
    @click.argument("text")
    @click.option(
        "--mode", type=click.Choice(MODES), default=EvaluationMode.COMBINED.value, show_default=True
    )
    @click.option("--context", type=str, help="Publishing context, e.g. social-media")
    @click.option("--safety-weight", type=float, help="Safety weight for the combined score")
    @click.option("--brand-weight", type=float, help="Brand weight for the combined score")
    @click.option("--format", "fmt", default="json", show_default=True, help="Output format")
    @click.option("--skip-plugins", is_flag=True, help="Skip enrichment and plugin evaluations")
    @click.option(
        "--fail-on-issues",
        is_flag=True,
        help="Exit with status 2 when the content is not compliant",
    )
    @click.pass_context
    def evaluate(
        ctx: click.Context,
        text: str,
        mode: str,
        context: Optional[str],
        safety_weight: Optional[float],
        brand_weight: Optional[float],
        fmt: str,
        skip_plugins: bool,
        fail_on_issues: bool,
    ) -> None:
        """Evaluate TEXT for brand safety and/or brand compliance."""
        selected = EvaluationMode(mode)

        async def action(service: BrandGuardianService) -> Tuple[str, bool]:
            if selected is EvaluationMode.SAFETY:
                safety = await service.safety.execute(text, context)
                data, passed = safety.to_dict(), safety.is_safe
            elif selected is EvaluationMode.COMPLIANCE:
                compliance = await service.compliance.execute(text, context)
                data, passed = compliance.to_dict(), compliance.is_compliant
            else:
                result = await service.combined.execute(
                    text, context, options=_options(safety_weight, brand_weight, skip_plugins)
                )
                data, passed = result.to_dict(), result.is_compliant
            return await _format(service, data, fmt), passed

        output, passed = run_with_service(ctx, action)
        click.echo(output)
        if fail_on_issues and not passed:
            ctx.exit(2)

    @main.command()
    @click.argument("file", type=click.Path(exists=True, dir_okay=False))
    @click.option(
        "--mode", type=click.Choice(MODES), default=EvaluationMode.COMBINED.value, show_default=True
    )
    @click.option("--safety-weight", type=float)
    @click.option("--brand-weight", type=float)
    @click.option("--skip-plugins", is_flag=True)
    @click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write results here")
    @click.pass_context
    def batch(
        ctx: click.Context,
        file: str,
        mode: str,
        safety_weight: Optional[float],
        brand_weight: Optional[float],
        skip_plugins: bool,
        output: Optional[str],
    ) -> None:
        """Evaluate every item in a JSON/YAML FILE.

        The file holds a list of items, or a mapping with an ``items`` list;
        each item has ``content`` and optional ``id``, ``context`` and
        ``metadata``.
        """
        raw = load_data_file(file)
        if isinstance(raw, dict):
            raw = raw.get("items")
        if not isinstance(raw, list):
            raise CLIError("Batch file must contain a list of items")
        try:
            items = [EvaluationRequest.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            raise CLIError(f"Invalid batch item: {exc.errors()[0]['msg']}") from exc

        options = _options(safety_weight, brand_weight, skip_plugins)

        async def action(service: BrandGuardianService) -> Dict[str, Any]:
            result = await service.batch.execute(items, EvaluationMode(mode), options)
            return result.to_dict()

        data = run_with_service(ctx, action)
        write_output(json.dumps(data, indent=2, default=str), output)
        summary = data["summary"]
        click.echo(
            f"Processed {data['total_items']} item(s): {data['success_count']} succeeded, "
            f"{data['error_count']} failed, success rate {summary['success_rate']:.1f}%",
            err=True,
        )
