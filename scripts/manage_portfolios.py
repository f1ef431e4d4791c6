#!/usr/bin/env python3
"""
Portfolio Store Management CLI

Manages templates, portfolios, and customizations in the portfolio database
(PORTFOLIO_DB_PATH) and renders portfolio previews to HTML.

Commands:
    init             - Create the database schema
    add-template     - Store a template from a component file
    list-templates   - List stored templates
    list-categories  - List template catalog categories
    create-portfolio - Create a portfolio for a user
    customize        - Set one field override (or load a YAML file of them)
    preview          - Render a portfolio to an HTML file

Examples:\n

    manage_portfolios.py init

    manage_portfolios.py add-template "Minimal Dark" templates/minimal.jsx --publish

    manage_portfolios.py create-portfolio user-1 minimal-dark "Jane Doe"

    manage_portfolios.py customize user-1 jane-doe heading "Hello"

    manage_portfolios.py preview user-1 jane-doe -o outs/jane.html
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.portfolio import PortfolioDatabase, load_customizations, preview_portfolio
from folio.contexts.portfolio.exceptions import (
    DuplicateSlugError,
    InvalidCustomizationError,
    RecordNotFoundError,
    TemplateValidationError,
)
from folio.contexts.portfolio.logger import setup_portfolio_logger
from folio.contexts.rendering import TemplateRenderEngine
from folio.utils.text_processing import truncate_display
from folio.utils.timestamp import format_timestamp, now

load_dotenv()
PORTFOLIO_DB_PATH = Path(os.getenv("PORTFOLIO_DB_PATH", "outs/portfolio.db"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

# Store errors reported to the user instead of raised
STORE_ERRORS = (
    RecordNotFoundError,
    DuplicateSlugError,
    TemplateValidationError,
    InvalidCustomizationError,
    ValueError,
)

app = typer.Typer(
    help="Manage portfolio templates, portfolios, and customizations",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _open_db() -> PortfolioDatabase:
    try:
        return PortfolioDatabase(PORTFOLIO_DB_PATH)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}\nRun 'manage_portfolios.py init' first.\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command("init")
def init_command():
    """Create the portfolio database (existing data is kept)."""
    PortfolioDatabase.initialize(PORTFOLIO_DB_PATH).close()
    typer.secho(f"✓ Database ready: {PORTFOLIO_DB_PATH}", fg=typer.colors.GREEN, bold=True)


@app.command("add-template")
def add_template_command(
    name: Annotated[str, typer.Argument(help="Template display name")],
    component_file: Annotated[Path, typer.Argument(help="Component source file")],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Slug (default: from name)")] = None,
    category: Annotated[str, typer.Option("--category", help="Catalog category")] = "general",
    description: Annotated[str, typer.Option("--description", help="Catalog description")] = "",
    thumbnail: Annotated[Optional[str], typer.Option("--thumbnail", help="Thumbnail URL")] = None,
    publish: Annotated[bool, typer.Option("--publish", help="Publish in the catalog")] = False,
):
    """Store a template after validating its component source."""
    code = component_file.read_text(encoding="utf-8")

    with _open_db() as db:
        try:
            template = db.create_template(
                name,
                code,
                slug=slug,
                description=description,
                category=category,
                thumbnail=thumbnail,
                published=publish,
            )
        except STORE_ERRORS as e:
            _fail(e)

    typer.secho(f"✓ Template '{template.slug}' stored (id {template.id})", fg=typer.colors.GREEN, bold=True)


@app.command("list-templates")
def list_templates_command(
    published: Annotated[bool, typer.Option("--published", help="Only published templates")] = False,
    category: Annotated[Optional[str], typer.Option("--category", help="Filter by category")] = None,
):
    """List stored templates, newest first."""
    with _open_db() as db:
        templates = db.list_templates(published_only=published, category=category)

    if not templates:
        typer.echo("No templates found.")
        return

    for template in templates:
        status = "published" if template.published else "draft"
        typer.echo(
            f"  {template.id:>4}  {template.slug:<24} {template.category:<12} {status:<9} "
            f"{format_timestamp(template.updated_at)}  {truncate_display(template.description, 40)}"
        )


@app.command("list-categories")
def list_categories_command(
    published: Annotated[bool, typer.Option("--published", help="Only categories with published templates")] = False,
):
    """List template catalog categories."""
    with _open_db() as db:
        categories = db.list_categories(published_only=published)

    if not categories:
        typer.echo("No categories found.")
        return

    for category in categories:
        typer.echo(f"  {category}")


@app.command("create-portfolio")
def create_portfolio_command(
    user_id: Annotated[str, typer.Argument(help="Owner user id")],
    template_slug: Annotated[str, typer.Argument(help="Template slug")],
    title: Annotated[str, typer.Argument(help="Portfolio title")],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Slug (default: from title)")] = None,
):
    """Create a portfolio for a user from a template."""
    with _open_db() as db:
        try:
            template = db.get_template_by_slug(template_slug)
            portfolio = db.create_portfolio(user_id, template.id, title, slug=slug)
        except STORE_ERRORS as e:
            _fail(e)

    typer.secho(f"✓ Portfolio '{portfolio.slug}' created (id {portfolio.id})", fg=typer.colors.GREEN, bold=True)


@app.command("customize")
def customize_command(
    user_id: Annotated[str, typer.Argument(help="Owner user id")],
    portfolio_slug: Annotated[str, typer.Argument(help="Portfolio slug")],
    field_name: Annotated[Optional[str], typer.Argument(help="Field name")] = None,
    field_value: Annotated[Optional[str], typer.Argument(help="Field value")] = None,
    field_type: Annotated[str, typer.Option("--type", "-t", help="Field type")] = "text",
    from_file: Annotated[
        Optional[Path], typer.Option("--from-file", "-f", help="YAML file of field overrides")
    ] = None,
):
    """
    Set field overrides for a portfolio.

    Examples:\n

        $ manage_portfolios.py customize user-1 jane-doe heading "Hello"

        $ manage_portfolios.py customize user-1 jane-doe -f jane.yaml
    """
    if from_file is None and (field_name is None or field_value is None):
        _fail(ValueError("Give FIELD_NAME and FIELD_VALUE, or --from-file"))

    with _open_db() as db:
        try:
            portfolio = db.get_portfolio_by_slug(user_id, portfolio_slug)
            fields = load_customizations(from_file) if from_file else {field_name: field_value}
            for name, value in fields.items():
                db.set_customization(portfolio.id, name, value, field_type=field_type)
        except STORE_ERRORS as e:
            _fail(e)

    typer.secho(f"✓ {len(fields)} field(s) set on '{portfolio_slug}'", fg=typer.colors.GREEN, bold=True)


@app.command("preview")
def preview_command(
    user_id: Annotated[str, typer.Argument(help="Owner user id")],
    portfolio_slug: Annotated[str, typer.Argument(help="Portfolio slug")],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Output HTML path")
    ] = None,
):
    """Render a portfolio to an HTML file."""
    log_file = setup_portfolio_logger(LOGS_PATH / f"preview_{now()}")
    engine = TemplateRenderEngine()

    with _open_db() as db:
        try:
            result = preview_portfolio(db, user_id, portfolio_slug, engine=engine)
        except STORE_ERRORS as e:
            _fail(e)

    if not result.success:
        typer.secho(f"\n✗ Preview rejected with {len(result.errors)} errors", fg=typer.colors.RED, bold=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    output = output or Path(f"{portfolio_slug}.html")
    engine.publisher.save(result.preview_url, output)
    engine.release_preview_url(result.preview_url)

    typer.secho("\n✓ Preview rendered", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  HTML: {output}")
    typer.echo(f"  Log: {log_file}")


if __name__ == "__main__":
    app()
