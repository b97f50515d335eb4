"""
Intent command-line interface.

``intent compile``   compile a design system to CSS and an AI manifest
``intent validate``  validate the schema and, optionally, extracted usages
``intent generate``  print the AI manifest or an assistant prompt
``intent themes``    list themes or print a resolved theme's CSS variables
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.markup import escape

from intent.core.compiler import compile_design_system
from intent.core.config_loader import load_design_system, load_themes, load_usages
from intent.core.css_generator import generate_theme_css
from intent.core.errors import IntentError
from intent.core.ir import DesignSystemConfig, ValidationIssue
from intent.core.manifest import generate_ai_manifest, generate_ai_prompt
from intent.core.validator import validate_all_usages, validate_schema
from intent.themes import ThemeRegistry, apply_theme, get_default_registry

from .utils import console, fail, print_issues, setup_logging, version_callback

logger = logging.getLogger(__name__)

CSS_FILE = "intent.css"
MANIFEST_FILE = "ai-manifest.json"

app = typer.Typer(
    help="Intent: schema-first style compiler for design systems",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Intent CLI main callback for global options."""
    setup_logging(verbose)


def _load_config(path: Path) -> DesignSystemConfig:
    try:
        return load_design_system(path)
    except IntentError as e:
        raise fail(e) from e


def _theme_registry(themes_file: Path | None) -> ThemeRegistry:
    registry = ThemeRegistry(get_default_registry().all())
    if themes_file is not None:
        try:
            for theme in load_themes(themes_file):
                registry.register(theme)
        except IntentError as e:
            raise fail(e) from e
    return registry


def _manifest_json(config: DesignSystemConfig) -> str:
    manifest = generate_ai_manifest(config)
    return json.dumps(manifest.model_dump(by_alias=True, exclude_none=True), indent=2)


# =============================================================================
# compile
# =============================================================================


@app.command(name="compile")
def compile_command(
    config_path: Path = typer.Argument(
        Path("."), help="Config file, or a directory containing intent.config.yaml"
    ),
    out_dir: Path = typer.Option(Path("dist"), "--out", "-o", help="Output directory"),
    minify: bool = typer.Option(False, "--minify", help="Minify the generated CSS"),
    strict: bool = typer.Option(False, "--strict", help="Fail on schema warnings"),
    prefix: str | None = typer.Option(None, "--prefix", help="Override the CSS prefix"),
    theme: str | None = typer.Option(None, "--theme", "-t", help="Theme to apply"),
    themes_file: Path | None = typer.Option(None, "--themes", help="Theme definitions file"),
) -> None:
    """Compile a design system to intent.css and ai-manifest.json."""
    config = _load_config(config_path)

    if theme:
        try:
            resolved = _theme_registry(themes_file).resolve(theme)
            config = apply_theme(config, resolved)
        except IntentError as e:
            raise fail(e) from e

    result = compile_design_system(
        config, minify=minify, css_prefix=prefix, strict=strict or None
    )

    for warning in result.warnings:
        console.print(f"[yellow]warning[/yellow] {escape(warning)}", highlight=False)
    for error in result.errors:
        console.print(f"[red]error[/red] {escape(error)}", highlight=False)

    if not result.css:
        console.print("[red]Compilation failed[/red]")
        raise typer.Exit(code=1)

    out_dir.mkdir(parents=True, exist_ok=True)
    css_path = out_dir / CSS_FILE
    manifest_path = out_dir / MANIFEST_FILE
    css_path.write_text(result.css, encoding="utf-8")
    manifest_path.write_text(
        json.dumps(result.manifest.model_dump(by_alias=True, exclude_none=True), indent=2),
        encoding="utf-8",
    )

    console.print(f"[green]✓[/green] Wrote {css_path}", highlight=False)
    console.print(f"[green]✓[/green] Wrote {manifest_path}", highlight=False)
    if not result.success:
        raise typer.Exit(code=1)


# =============================================================================
# validate
# =============================================================================


@app.command(name="validate")
def validate_command(
    config_path: Path = typer.Argument(
        Path("."), help="Config file, or a directory containing intent.config.yaml"
    ),
    usages: Path | None = typer.Option(
        None, "--usages", "-u", help="Extracted usages file (JSON or YAML)"
    ),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors"),
) -> None:
    """Validate the design system schema and, optionally, component usages."""
    config = _load_config(config_path)

    schema_result = validate_schema(config, strict=strict or None)
    print_issues(schema_result.issues, "Schema")
    valid = schema_result.valid
    issues: list[ValidationIssue] = list(schema_result.issues)

    if usages is not None:
        try:
            batches = load_usages(usages)
        except IntentError as e:
            raise fail(e) from e
        usage_result = validate_all_usages(config, batches, strict=strict or None)
        print_issues(usage_result.issues, "Usages")
        valid = valid and usage_result.valid
        issues.extend(usage_result.issues)

    errors = sum(1 for i in issues if i.severity == "error")
    warnings = sum(1 for i in issues if i.severity == "warning")
    if not valid:
        console.print(f"[red]✗ Invalid[/red]: {errors} error(s), {warnings} warning(s)")
        raise typer.Exit(code=1)
    console.print(f"[green]✓ Valid[/green]: {errors} error(s), {warnings} warning(s)")


# =============================================================================
# generate
# =============================================================================


@app.command(name="generate")
def generate_command(
    config_path: Path = typer.Argument(
        Path("."), help="Config file, or a directory containing intent.config.yaml"
    ),
    prompt: bool = typer.Option(False, "--prompt", help="Emit a markdown prompt instead of JSON"),
    component: str | None = typer.Option(
        None, "--component", "-c", help="Focus the prompt on one component"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write to a file"),
) -> None:
    """Print the AI manifest (JSON) or an assistant prompt (markdown)."""
    config = _load_config(config_path)

    if component and config.get_component(component) is None:
        raise fail(f'Unknown component "{component}"')

    if prompt:
        text = generate_ai_prompt(generate_ai_manifest(config), component=component)
    else:
        text = _manifest_json(config)

    if output is not None:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]✓[/green] Wrote {output}", highlight=False)
    else:
        typer.echo(text)


# =============================================================================
# themes
# =============================================================================


@app.command(name="themes")
def themes_command(
    name: str | None = typer.Argument(None, help="Theme to resolve"),
    themes_file: Path | None = typer.Option(None, "--themes", help="Theme definitions file"),
) -> None:
    """List available themes, or print a resolved theme's CSS variables."""
    registry = _theme_registry(themes_file)

    if name is None:
        for theme in registry.all():
            parents = f" (extends {', '.join(theme.parents)})" if theme.parents else ""
            typer.echo(f"{theme.name}{parents}")
        return

    try:
        resolved = registry.resolve(name)
    except IntentError as e:
        raise fail(e) from e
    typer.echo(generate_theme_css(resolved))


def main() -> None:
    app()
