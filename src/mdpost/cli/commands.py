"""CLI command implementations"""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpost.config import Settings, load_config
from mdpost.core.errors import MdpostError
from mdpost.core.export import build_sidecar
from mdpost.core.parse import load_document
from mdpost.core.pipeline import run_build, run_check
from mdpost.core.render import render_html


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _load(path: str, settings: Settings):
    try:
        return load_document(Path(path), settings.parser_config)
    except MdpostError as e:
        _fail(f"Cannot read {path}", e)
    except (UnicodeDecodeError, OSError) as e:
        _fail(f"Cannot open {path}", e)


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Post file or directory (default: content_dir)")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Check front matter, dates, code fences, and the render round-trip of every post."""
    settings = _settings(overrides={"parser_config": parser})
    target = path or settings.content_dir
    if not Path(target).exists():
        _fail(f"Path not found: {target}")

    issues = run_check(target, settings)
    for issue in issues:
        typer.echo(str(issue))
    if issues:
        typer.echo(f"Found {len(issues)} issue(s).")
        raise typer.Exit(1)
    typer.echo("All posts OK.")


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Post file or directory (default: content_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="Output format: html or md")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Render every post to the output directory with a JSON metadata sidecar."""
    settings = _settings(overrides={"output_dir": out, "output_format": fmt, "parser_config": parser})
    target = path or settings.content_dir
    if not Path(target).exists():
        _fail(f"Path not found: {target}")

    try:
        results = run_build(target, settings)
    except RuntimeError as e:
        _fail(str(e))
    for slug, out_path in results:
        typer.echo(f"  {slug} -> {out_path}")
    typer.echo(f"Built {len(results)} post(s) to {settings.output_dir}/")


def show_cmd(
    path: Annotated[str, typer.Argument(help="Post file")],
    ):
    """Print a post's parsed metadata and block outline as JSON."""
    settings = _settings()
    doc = _load(path, settings)
    typer.echo(json.dumps(build_sidecar(doc), indent=2, ensure_ascii=False))


def render_cmd(
    path: Annotated[str, typer.Argument(help="Post file")],
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    ):
    """Print a post body rendered as an HTML fragment."""
    settings = _settings(overrides={"parser_config": parser})
    doc = _load(path, settings)
    typer.echo(render_html(doc.body, settings.parser_config), nl=False)
