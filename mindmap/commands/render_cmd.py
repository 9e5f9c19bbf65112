"""Render, inspect and highlight commands."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..graph.store import GraphFileError, dumps_graph
from ..render import print_rich, summarize, to_html, to_markdown, to_svg
from ..session import Session


def open_session(input_path: Path, *, config: LayoutConfig = DEFAULT_CONFIG) -> Session:
    """Build a laid-out session from relation text or a saved `.json` graph.

    Raises GraphFileError for invalid saved graphs and undecodable text.
    """
    session = Session(config=config)
    if input_path.suffix.lower() == ".json":
        session.load(input_path)
    else:
        try:
            text = input_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise GraphFileError(f"Relation file is not valid UTF-8: {input_path}") from e
        session.parse(text)
    return session


def _emit(text: str, out: Path | None, console: Console, what: str) -> None:
    if out:
        out.write_text(text, encoding="utf-8")
        console.print(f"Wrote {what} to {out}", style="green")
    else:
        print(text, end="" if text.endswith("\n") else "\n")


def run_render(
    input_path: Path,
    *,
    fmt: str = "html",
    out: Path | None = None,
    select: str | None = None,
    title: str | None = None,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> int:
    """Lay out the graph and write it as html|svg|json|md|rich."""
    console = Console(stderr=True)

    session = open_session(input_path, config=config)
    if select is not None:
        if select not in session.graph:
            console.print(f"Unknown node: {select}", style="red")
            return 1
        session.select(select)

    title = title or input_path.stem

    if fmt == "rich":
        payload = summarize(session, title=title, top=len(session.graph.nodes))
        if out:
            rich_console = Console(record=True)
            print_rich(payload, console=rich_console)
            out.write_text(rich_console.export_text(), encoding="utf-8")
            console.print(f"Wrote graph output to {out}", style="green")
        else:
            print_rich(payload, console=Console())
        return 0

    text: str
    if fmt == "json":
        text = dumps_graph(session.graph)
    elif fmt == "svg":
        text = to_svg(session, title=title)
    elif fmt == "md":
        text = to_markdown(summarize(session, title=title, top=len(session.graph.nodes)))
    else:
        text = to_html(session, title=title)

    _emit(text, out, console, "graph output")
    return 0


def run_inspect(
    input_path: Path,
    *,
    fmt: str = "rich",
    out: Path | None = None,
    top: int = 25,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> int:
    """Report importance scores and tiers, most important first."""
    console = Console(stderr=True)

    session = open_session(input_path, config=config)
    payload = summarize(session, title=f"Importance: {input_path.name}", top=top)

    if fmt == "rich":
        if out:
            rich_console = Console(record=True)
            print_rich(payload, console=rich_console)
            out.write_text(rich_console.export_text(), encoding="utf-8")
            console.print(f"Wrote importance report to {out}", style="green")
        else:
            print_rich(payload, console=Console())
        return 0

    if fmt == "json":
        text = json.dumps(payload, indent=2, sort_keys=True) + "\n"
    else:
        text = to_markdown(payload)

    _emit(text, out, console, "importance report")
    return 0


def run_highlight(
    input_path: Path,
    node: str,
    *,
    fmt: str = "md",
    out: Path | None = None,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> int:
    """Print the degree tags produced by selecting `node`."""
    console = Console(stderr=True)

    session = open_session(input_path, config=config)
    if node not in session.graph:
        console.print(f"Unknown node: {node}", style="red")
        return 1

    session.select(node)
    snapshot = session.highlight.snapshot()
    payload = {**snapshot, "connected_nodes": session.connected_nodes}

    if fmt == "json":
        text = json.dumps(payload, indent=2, sort_keys=True) + "\n"
    else:
        lines = [f"## Highlight: `{node}`", ""]
        lines.append(f"- Connected: {', '.join(f'`{n}`' for n in payload['connected_nodes']) or 'none'}")
        lines.append("")
        lines.append("| Node | Tag |")
        lines.append("|---|---|")
        for node_id, tag in snapshot["nodes"].items():
            lines.append(f"| `{node_id}` | {tag} |")
        lines.append("")
        lines.append("| Edge | Tag |")
        lines.append("|---|---|")
        for edge_id, tag in snapshot["edges"].items():
            lines.append(f"| `{edge_id}` | {tag} |")
        text = "\n".join(lines) + "\n"

    _emit(text, out, console, "highlight report")
    return 0
