#!/usr/bin/env python3
"""
Template Component Validation and Rendering CLI

Validates template component source files and renders them into standalone
HTML documents using the rendering context.

Commands:
    validate - Check a component file against the source denylist
    render   - Render a component file (plus optional customizations) to HTML

Examples:\n

    render_template.py validate templates/minimal.jsx

    render_template.py render templates/minimal.jsx -c jane.yaml -o outs/preview.html
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.portfolio import load_customizations
from folio.contexts.rendering import RenderContext, TemplateRenderEngine
from folio.contexts.rendering.logger import setup_rendering_logger
from folio.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    help="Validate and render portfolio template components",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _read_component(component_file: Path) -> str:
    if not component_file.exists():
        typer.secho(f"Error: Component file not found: {component_file}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return component_file.read_text(encoding="utf-8")


def _echo_errors(errors: list) -> None:
    typer.echo("\nErrors:")
    for error in errors:
        typer.secho(f"  - {error}", fg=typer.colors.RED)


@app.command("validate")
def validate_command(
    component_file: Annotated[Path, typer.Argument(help="Component source file (.jsx/.tsx/.js)")],
):
    """
    Validate a component source file.

    Exits with code 1 when any rule matches.
    """
    code = _read_component(component_file)
    result = TemplateRenderEngine.validate_code(code)

    if result.is_valid:
        typer.secho("✓ Component is valid", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(
            f"✗ Validation failed with {len(result.errors)} errors", fg=typer.colors.RED, bold=True
        )
        _echo_errors(result.errors)

    raise typer.Exit(code=0 if result.is_valid else 1)


@app.command("render")
def render_command(
    component_file: Annotated[Path, typer.Argument(help="Component source file (.jsx/.tsx/.js)")],
    customizations_file: Annotated[
        Optional[Path],
        typer.Option("--customizations", "-c", help="YAML file of field overrides"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output HTML path (default: next to component)"),
    ] = None,
):
    """
    Render a component file into a standalone HTML document.

    Examples:\n

        $ render_template.py render minimal.jsx

        $ render_template.py render minimal.jsx -c jane.yaml -o outs/jane.html
    """
    code = _read_component(component_file)

    customizations = {}
    if customizations_file is not None:
        try:
            customizations = load_customizations(customizations_file)
        except (OSError, ValueError) as e:
            typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    log_file = setup_rendering_logger(LOGS_PATH / f"render_{now()}")

    engine = TemplateRenderEngine()
    result = engine.render(RenderContext(component_code=code, customizations=customizations))

    if not result.success:
        typer.secho(
            f"\n✗ Render rejected with {len(result.errors)} errors", fg=typer.colors.RED, bold=True
        )
        _echo_errors(result.errors)
        raise typer.Exit(code=1)

    output = output or component_file.with_suffix(".html")
    engine.publisher.save(result.preview_url, output)
    engine.release_preview_url(result.preview_url)

    typer.secho("\n✓ Render succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Fields: {len(customizations)}")
    typer.echo(f"  HTML: {output}")
    typer.echo(f"  Log: {log_file}")
    raise typer.Exit(code=0)


if __name__ == "__main__":
    app()
