"""Shared helpers for the CLI commands."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar, Union, cast

import click
import yaml

from ..config.settings import ServiceSettings
from ..exceptions import BrandGuardianError, ValidationError
from ..service import BrandGuardianService, create_service

T = TypeVar("T")


class CLIError(click.ClickException):
    """CLI error rendered by click with a non-zero exit code."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def get_settings(ctx: click.Context) -> ServiceSettings:
    """Return the settings stored on the click context."""
    return cast(ServiceSettings, ctx.obj["settings"])


def describe_error(exc: BrandGuardianError) -> str:
    message = exc.message
    if isinstance(exc, ValidationError) and exc.field_errors:
        fields = "; ".join(f"{name}: {error}" for name, error in exc.field_errors.items())
        message = f"{message} ({fields})"
    return message


def run_with_service(
    ctx: click.Context, action: Callable[[BrandGuardianService], Awaitable[T]]
) -> T:
    """Build and start a service, run ``action`` against it, then shut it down."""
    settings = get_settings(ctx)

    async def runner() -> T:
        service = create_service(settings)
        await service.start(
            load_builtins=settings.load_builtin_plugins,
            plugins_dir=settings.plugins_dir,
        )
        try:
            return await action(service)
        finally:
            await service.shutdown()

    try:
        return asyncio.run(runner())
    except BrandGuardianError as exc:
        raise CLIError(describe_error(exc)) from exc


def load_data_file(file_path: Union[str, Path]) -> Any:
    """Load a JSON or YAML file."""
    path = Path(file_path)
    if not path.exists():
        raise CLIError(f"File not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(f)
            return json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise CLIError(f"Invalid data in {path}: {e}")
    except OSError as e:
        raise CLIError(f"Error reading {path}: {e}")


def render(data: Dict[str, Any], fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    return json.dumps(data, indent=2, default=str)


def write_output(content: str, output_path: Optional[Union[str, Path]] = None) -> None:
    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content + "\n", encoding="utf-8")
        click.echo(f"Output written to {path}", err=True)
    else:
        click.echo(content)


__all__ = [
    "CLIError",
    "describe_error",
    "get_settings",
    "load_data_file",
    "render",
    "run_with_service",
    "write_output",
]
