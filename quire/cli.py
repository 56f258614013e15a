"""Quire CLI - render templates from the command line.

Commands:
    render   - Render a view (optionally inside a layout) to stdout
    partials - List the globally loaded partials
"""

import json
import sys
from pathlib import Path
from typing import Any, Optional, Tuple

import click
from jinja2 import TemplateError

from . import __version__
from .config import load_options
from .engine import TemplateEngine
from .faults import Fault
from .options import TemplateOptions, with_dev, with_extension, with_partials, with_root
from .store import DirectoryStore


def error(message: str) -> None:
    """Print error message in red."""
    click.echo(click.style(message, fg="red"), err=True)


def _build_engine(
    directory: str,
    config: Optional[str],
    root: Optional[str],
    partials: Optional[str],
    ext: Optional[str],
    dev: bool,
) -> TemplateEngine:
    options: TemplateOptions = load_options(config)
    extra = []
    if root is not None:
        extra.append(with_root(root))
    if partials is not None:
        extra.append(with_partials(partials))
    if ext is not None:
        extra.append(with_extension(ext))
    if dev:
        extra.append(with_dev(True))
    return TemplateEngine(DirectoryStore(directory), *extra, config=options)


def _parse_data(raw: Optional[str]) -> Any:
    """Parse --data: inline JSON, or @path to a JSON file."""
    if not raw:
        return None
    if raw.startswith("@"):
        raw = Path(raw[1:]).read_text()
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--data")


def store_options(fn):
    """Options shared by every command that builds an engine."""
    decorators = [
        click.option("--dir", "directory", default=".", show_default=True,
                     type=click.Path(exists=True, file_okay=False), help="Store base directory"),
        click.option("--config", "config", type=click.Path(exists=True, dir_okay=False),
                     help="YAML or JSON config file"),
        click.option("--root", help="Views root inside the store"),
        click.option("--partials", help="Global partials root inside the store"),
        click.option("--ext", help="Template file extension"),
        click.option("--dev", is_flag=True, help="Development mode"),
    ]
    for decorator in reversed(decorators):
        fn = decorator(fn)
    return fn


@click.group()
@click.version_option(version=__version__, prog_name="quire")
def cli():
    """Compose documents from views, layouts and partials."""


@cli.command("render")
@click.argument("view")
@click.option("--layout", "-l", default="", help="Layout template")
@click.option("--partial", "-p", "partial_names", multiple=True, help="Explicit partial (repeatable)")
@click.option("--data", "-d", help="Template data as JSON, or @file.json")
@store_options
def render_cmd(
    view: str,
    layout: str,
    partial_names: Tuple[str, ...],
    data: Optional[str],
    directory: str,
    config: Optional[str],
    root: Optional[str],
    partials: Optional[str],
    ext: Optional[str],
    dev: bool,
):
    """
    Render VIEW to stdout.

    Examples:
      quire render pages/home --dir assets --root views --layout layout
      quire render pages/home --data '{"title": "Hi"}'
    """
    payload = _parse_data(data)
    try:
        engine = _build_engine(directory, config, root, partials, ext, dev)
        engine.load()
        click.echo(engine.compile(view, layout, payload, list(partial_names)), nl=False)
    except (Fault, TemplateError) as e:
        error(f"✗ {e}")
        sys.exit(1)


@cli.command("partials")
@store_options
def partials_cmd(
    directory: str,
    config: Optional[str],
    root: Optional[str],
    partials: Optional[str],
    ext: Optional[str],
    dev: bool,
):
    """List globally loaded partials."""
    try:
        engine = _build_engine(directory, config, root, partials, ext, dev)
        engine.load()
    except (Fault, TemplateError) as e:
        error(f"✗ {e}")
        sys.exit(1)

    for name in engine.partial_names():
        click.echo(name)


def main():
    cli()


if __name__ == "__main__":
    main()
