"""Watch command - rebuild the rendered map whenever the source changes."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..watcher import run_watch_loop
from .render_cmd import run_render

logger = logging.getLogger(__name__)


def run_watch(
    input_path: Path,
    *,
    out: Path,
    fmt: str = "html",
    config: LayoutConfig = DEFAULT_CONFIG,
) -> None:
    """
    Render `input_path` to `out`, then re-render on every content change.

    This is a blocking command that runs until interrupted (Ctrl+C). A bad
    save (e.g. invalid JSON) is reported and the previous output is kept.
    """
    console = Console(stderr=True)
    render_count = 0

    def render(path: Path) -> None:
        nonlocal render_count
        timestamp = datetime.now().strftime("%H:%M:%S")
        try:
            run_render(path, fmt=fmt, out=out, config=config)
        except (ValueError, OSError) as e:
            logger.warning("Render failed for %s: %s", path, e)
            console.print(f"[dim]{timestamp}[/dim] [red]Render failed:[/red] {e}")
            return
        render_count += 1

    console.print(f"[bold]Watching[/bold] {input_path}")
    console.print(f"  Output: {out} ({fmt})")
    console.print()
    console.print("[dim]Press Ctrl+C to stop watching[/dim]")
    console.print()

    render(input_path)

    run_watch_loop(input_path, render)
    console.print()
    console.print(f"[bold]Stopped.[/bold] Rendered {render_count} times.")
