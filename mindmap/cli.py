"""CLI entrypoint for mindmap."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import load_config
from .graph.store import GraphFileError

INPUT_PATH = click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path)
OUT_PATH = click.Path(dir_okay=False, path_type=Path)


def _setup_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
    )


@click.group()
@click.version_option(__version__, prog_name="mindmap")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="TOML file with a [layout] table overriding layout constants",
)
@click.option("--verbose", is_flag=True, help="Log layout decisions and degradations")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """mindmap - Importance-weighted concept map layout.

    INPUT files hold one relation per line, written as {Concept A}(WW){Concept B}
    with WW a weight from 1 to 99. Files ending in .json are read as saved graphs.
    """
    ctx.ensure_object(dict)
    _setup_logging(verbose)
    try:
        ctx.obj["config"] = load_config(config_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@cli.command()
@click.argument("input_path", metavar="INPUT", type=INPUT_PATH)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["html", "svg", "json", "md", "rich"]),
    default="html",
    show_default=True,
    help="Output format (json writes the saved-graph format)",
)
@click.option("--out", type=OUT_PATH, default=None, help="Write output to a file")
@click.option("--select", "select", type=str, default=None, metavar="NODE", help="Render with NODE selected")
@click.option("--title", type=str, default=None, help="Title (defaults to the input file name)")
@click.pass_context
def render(
    ctx: click.Context,
    input_path: Path,
    fmt: str,
    out: Path | None,
    select: str | None,
    title: str | None,
) -> None:
    """Lay out a concept map and render it.

    Examples:

        mindmap render ideas.txt --out ideas.html

        mindmap render ideas.txt --format json --out ideas.json

        mindmap render ideas.json --format svg --select "self-worth"
    """
    from .commands.render_cmd import run_render

    try:
        exit_code = run_render(input_path, fmt=fmt, out=out, select=select, title=title, config=ctx.obj["config"])
    except GraphFileError as e:
        raise click.ClickException(f"Error loading file: {e}") from e
    sys.exit(exit_code)


@cli.command()
@click.argument("input_path", metavar="INPUT", type=INPUT_PATH)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "md", "json"]),
    default="rich",
    show_default=True,
    help="Output format",
)
@click.option("--out", type=OUT_PATH, default=None, help="Write output to a file")
@click.option("--top", type=int, default=25, show_default=True, help="How many nodes to list")
@click.pass_context
def inspect(ctx: click.Context, input_path: Path, fmt: str, out: Path | None, top: int) -> None:
    """Show importance scores and tiers, most important first."""
    from .commands.render_cmd import run_inspect

    try:
        exit_code = run_inspect(input_path, fmt=fmt, out=out, top=top, config=ctx.obj["config"])
    except GraphFileError as e:
        raise click.ClickException(f"Error loading file: {e}") from e
    sys.exit(exit_code)


@cli.command()
@click.argument("input_path", metavar="INPUT", type=INPUT_PATH)
@click.argument("node")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["md", "json"]),
    default="md",
    show_default=True,
    help="Output format",
)
@click.option("--out", type=OUT_PATH, default=None, help="Write output to a file")
@click.pass_context
def highlight(ctx: click.Context, input_path: Path, node: str, fmt: str, out: Path | None) -> None:
    """Show which nodes and edges NODE's selection tags, by hop distance."""
    from .commands.render_cmd import run_highlight

    try:
        exit_code = run_highlight(input_path, node, fmt=fmt, out=out, config=ctx.obj["config"])
    except GraphFileError as e:
        raise click.ClickException(f"Error loading file: {e}") from e
    sys.exit(exit_code)


@cli.command()
@click.argument("input_path", metavar="INPUT", type=INPUT_PATH)
@click.option("--out", type=OUT_PATH, required=True, help="File to (re)write on every change")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["html", "svg", "json", "md"]),
    default="html",
    show_default=True,
    help="Output format",
)
@click.pass_context
def watch(ctx: click.Context, input_path: Path, out: Path, fmt: str) -> None:
    """Re-render INPUT to --out whenever it changes.

    Runs until Ctrl+C.

    Examples:

        mindmap watch ideas.txt --out ideas.html
    """
    from .commands.watch_cmd import run_watch

    run_watch(input_path, out=out, fmt=fmt, config=ctx.obj["config"])


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
