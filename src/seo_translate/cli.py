"""
Command-line interface for SEO Translate.

Provides commands for translating pages, generating SEO fields, shortening
over-long values, and checking titles for cannibalization.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import GeminiConfig, SeoFieldLimits
from .gemini_client import GeminiClient, GenerationError, TransportError
from .models import SimilarityResult, ValidationResult
from .prompts import PromptBuilder
from .providers import GeminiTranslationProvider, SeoGeminiProvider
from .seo_validation import validate
from .similarity import DEFAULT_THRESHOLD, check_similarity

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _read_titles(path: Path) -> list[str]:
    """One title per line; blank lines ignored."""
    return [line.strip() for line in _read_text(path).splitlines() if line.strip()]


def _fail(label: str, error: Exception) -> None:
    console.print(f"[red]{label}:[/red] {error}")
    if isinstance(error, TransportError) and error.status_code is not None:
        console.print(f"[dim]HTTP status: {error.status_code}[/dim]")
    sys.exit(1)


@click.group()
@click.option(
    "--api-key",
    type=str,
    envvar="GEMINI_API_KEY",
    help="Gemini API key. Can also be set via GEMINI_API_KEY env var.",
)
@click.option(
    "--model",
    type=str,
    default=None,
    help="Gemini model id (default: gemini-2.0-flash).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.pass_context
def main(ctx: click.Context, api_key: Optional[str], model: Optional[str], verbose: bool) -> None:
    """
    SEO Translate - AI translation and SEO fields for multilingual sites.

    Examples:

        seo-translate translate --title "Hola" --content-file page.html --language en

        seo-translate seo --title "Guide" --content-file page.html --existing-titles titles.txt
    """
    _configure_logging(verbose)
    overrides = {}
    if api_key:
        overrides["api_key"] = api_key
    if model:
        overrides["model"] = model
    ctx.obj = {"overrides": overrides, "verbose": verbose}


def _client(ctx: click.Context) -> GeminiClient:
    try:
        config = GeminiConfig.from_env(**ctx.obj["overrides"])
    except ValueError as e:
        _fail("Configuration error", e)
    return GeminiClient(config)


@main.command()
@click.option("--title", required=True, help="Page title in the source language.")
@click.option(
    "--content-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="File with the page content (text or HTML).",
)
@click.option("--language", "-l", default="es", show_default=True, help="Target language code.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def translate(ctx: click.Context, title: str, content_file: Path, language: str, as_json: bool) -> None:
    """Translate a page's title and content."""
    provider = GeminiTranslationProvider(_client(ctx))
    builder = PromptBuilder(title=title, content=_read_text(content_file), language=language)

    try:
        with console.status("[bold green]Translating..."):
            result = provider.translate(builder)
    except GenerationError as e:
        _fail("Translation error", e)

    if as_json:
        click.echo(json.dumps({"title": result.title, "content": result.content}, ensure_ascii=False))
        return

    console.print(Panel.fit(f"[bold]{result.title}[/bold]", title=f"Title ({language})", border_style="blue"))
    console.print(result.content)


@main.command()
@click.option("--title", required=True, help="Page title.")
@click.option(
    "--content-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="File with the page content.",
)
@click.option("--language", "-l", default="es", show_default=True, help="Language of the SEO fields.")
@click.option(
    "--existing-titles",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File with existing SEO titles (one per line) to check for cannibalization.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print raw JSON.")
@click.pass_context
def seo(
    ctx: click.Context,
    title: str,
    content_file: Path,
    language: str,
    existing_titles: Optional[Path],
    as_json: bool,
) -> None:
    """Generate seo_title, seo_description and og_title for a page."""
    provider = SeoGeminiProvider(_client(ctx))
    content = _read_text(content_file)
    builder = PromptBuilder(title=title, content=content, language=language)

    try:
        with console.status("[bold green]Generating SEO fields..."):
            fields = provider.generate_seo_fields(builder)
        resolution = None
        if existing_titles:
            with console.status("[bold green]Checking title similarity..."):
                resolution = provider.resolve_title_cannibalization(
                    fields.seo_title, _read_titles(existing_titles), content, language=language
                )
    except GenerationError as e:
        _fail("SEO generation error", e)

    validation = provider.validate_seo_content(fields.as_dict())

    if as_json:
        payload = {
            "fields": fields.as_dict(),
            "validation": {
                "valid": validation.valid,
                "warnings": validation.warnings,
                "recommendations": validation.recommendations,
            },
        }
        if resolution is not None:
            payload["similarity"] = {
                "is_similar": resolution.similarity.is_similar,
                "similarity_score": resolution.similarity.similarity_score,
                "similar_titles": resolution.similarity.similar_titles,
                "alternatives": resolution.alternatives,
            }
        click.echo(json.dumps(payload, ensure_ascii=False))
        return

    table = Table(title="Generated SEO Fields", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Length", justify="right")
    for name, value in fields.as_dict().items():
        table.add_row(name, value, f"{len(value)}/{provider.seo_limits[name]}")
    console.print(table)

    _display_validation(validation)
    if resolution is not None:
        _display_similarity(resolution.similarity)
        for alt in resolution.alternatives:
            console.print(f"  [green]-[/green] {alt}")


@main.command()
@click.argument("text")
@click.option(
    "--type",
    "kind",
    type=click.Choice(["title", "description"]),
    default="title",
    show_default=True,
    help="What kind of text is being shortened.",
)
@click.option("--max-length", type=int, default=None, help="Maximum characters (default: the SEO limit).")
@click.pass_context
def shorten(ctx: click.Context, text: str, kind: str, max_length: Optional[int]) -> None:
    """Ask the model for a shorter version of TEXT."""
    provider = SeoGeminiProvider(_client(ctx))
    if max_length is None:
        max_length = provider.limits.seo_title if kind == "title" else provider.limits.seo_description

    try:
        with console.status("[bold green]Shortening..."):
            shortened = provider.generate_shorter_version(text, kind, max_length)
    except GenerationError as e:
        _fail("Shortening error", e)

    click.echo(shortened)


@main.command()
@click.argument("title")
@click.option(
    "--existing-titles",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="File with existing titles, one per line.",
)
@click.option(
    "--threshold",
    type=click.FloatRange(0.0, 1.0),
    default=DEFAULT_THRESHOLD,
    show_default=True,
    help="Similarity score that counts as a collision.",
)
def similarity(title: str, existing_titles: Path, threshold: float) -> None:
    """Check TITLE against existing titles (offline, no API call)."""
    result = check_similarity(title, _read_titles(existing_titles), threshold)
    _display_similarity(result)
    if result.is_similar:
        sys.exit(2)


@main.command(name="validate")
@click.option("--seo-title", default=None, help="SEO title to check.")
@click.option("--seo-description", default=None, help="Meta description to check.")
@click.option("--og-title", default=None, help="Open Graph title to check.")
def validate_command(
    seo_title: Optional[str],
    seo_description: Optional[str],
    og_title: Optional[str],
) -> None:
    """Check SEO fields against their character limits (offline)."""
    fields = {
        name: value
        for name, value in (
            ("seo_title", seo_title),
            ("seo_description", seo_description),
            ("og_title", og_title),
        )
        if value is not None
    }
    if not fields:
        console.print("[red]Error:[/red] Provide at least one field to validate")
        sys.exit(1)

    result = validate(fields, SeoFieldLimits().as_mapping())
    _display_validation(result)
    if not result.valid:
        sys.exit(2)


def _display_validation(result: ValidationResult) -> None:
    """Display validation warnings and recommendations."""
    if result.valid and not result.recommendations:
        console.print("[green]All fields within limits.[/green]")
    for warning in result.warnings:
        console.print(f"[red]Warning:[/red] {warning}")
    for recommendation in result.recommendations:
        console.print(f"[yellow]Recommendation:[/yellow] {recommendation}")


def _display_similarity(result: SimilarityResult) -> None:
    """Display a similarity check result."""
    status = "[red]similar[/red]" if result.is_similar else "[green]unique[/green]"
    console.print(f"Title is {status} (max score {result.similarity_score:.2f})")
    for title in result.similar_titles:
        console.print(f"  [yellow]~[/yellow] {title}")


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
