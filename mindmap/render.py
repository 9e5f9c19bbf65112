"""SVG/HTML/Markdown/rich renderings of a laid-out session."""

from __future__ import annotations

import html
import json

from rich.console import Console
from rich.table import Table

from .highlight import highlight_map
from .models import HighlightTag
from .session import Session

BG = "#0f1115"
TEXT = "#e6e6e6"
NODE_FILL = "#666666"
NODE_BORDER = "#3a4154"

TIER_BORDERS = {0: "#f8c291", 1: "#8ecae6", 2: "#5b6782", 3: "#3a4154"}

TAG_STYLES = {
    HighlightTag.SELECTED: {"fill": "#f8c291", "stroke": "#e55039", "opacity": "1"},
    HighlightTag.DEGREE_1: {"fill": "#78e08f", "stroke": "#78e08f", "opacity": "1"},
    HighlightTag.DEGREE_2: {"fill": "#38ada9", "stroke": "#38ada9", "opacity": "0.7"},
    HighlightTag.DEGREE_3: {"fill": "#3c6382", "stroke": "#3c6382", "opacity": "0.4"},
}


def _map_range(value: float, lo: float, hi: float, out_lo: float, out_hi: float) -> float:
    """Linear map of `value` from [lo, hi] onto [out_lo, out_hi], clamped."""
    if hi <= lo:
        return out_lo
    t = min(1.0, max(0.0, (value - lo) / (hi - lo)))
    return out_lo + (out_hi - out_lo) * t


def _edge_color(weight: int) -> str:
    level = int(_map_range(weight, 1, 99, 0x55, 0xEE))
    return f"#{level:02x}{level:02x}{level:02x}"


def node_radius(normalized: float) -> float:
    return 14.0 + 14.0 * normalized


def _tag_css() -> str:
    return "".join(
        f".node.{tag.value} circle {{ fill: {s['fill']}; stroke: {s['stroke']}; opacity: {s['opacity']}; }}\n"
        f".edge.{tag.value} line {{ stroke: {s['stroke']}; opacity: {s['opacity']}; }}\n"
        for tag, s in TAG_STYLES.items()
    ) + ".node.selected circle { stroke-width: 3; }\n.node.selected text { font-weight: bold; }\n"


def to_svg(session: Session, *, title: str, margin: float = 60.0) -> str:
    """Render current positions, tiers and highlight tags as standalone SVG."""
    engine = session.engine
    graph = session.graph
    scores = session.scores
    tiers = session.tiers
    node_tags = session.highlight.node_tags
    edge_tags = session.highlight.edge_tags

    positions = {n: engine.position(n) for n in graph.nodes}
    positions = {n: p for n, p in positions.items() if p is not None}

    if positions:
        xs = [p[0] for p in positions.values()]
        ys = [p[1] for p in positions.values()]
        min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    else:
        min_x = max_x = min_y = max_y = 0.0
    width = max(max_x - min_x, 1.0) + margin * 2
    height = max(max_y - min_y, 1.0) + margin * 2 + 30
    ox = margin - min_x
    oy = margin + 30 - min_y

    def esc(s: str) -> str:
        return html.escape(s, quote=True)

    parts: list[str] = []
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:.0f}" height="{height:.0f}" '
        f'viewBox="0 0 {width:.0f} {height:.0f}" style="background:{BG}">'
    )
    parts.append(f"<style>\n{_tag_css()}</style>")
    parts.append(
        f'<text x="{margin:.0f}" y="28" fill="{TEXT}" font-family="Helvetica" font-size="16">{esc(title)}</text>'
    )

    # Edges first (under nodes)
    edge_ids = graph.edge_ids()
    parts.append('<g id="edges" stroke-linecap="round" fill="none">')
    for index, edge in enumerate(graph.edges):
        if edge.source not in positions or edge.target not in positions:
            continue
        x1, y1 = positions[edge.source]
        x2, y2 = positions[edge.target]
        x1, y1, x2, y2 = x1 + ox, y1 + oy, x2 + ox, y2 + oy
        tag = edge_tags.get(index, HighlightTag.NONE)
        sw = _map_range(edge.weight, 1, 99, 2, 12)
        parts.append(
            f'<g class="edge {tag.value}" data-edge="{esc(edge_ids[index])}">'
            f'<line x1="{x1:.1f}" y1="{y1:.1f}" x2="{x2:.1f}" y2="{y2:.1f}" '
            f'stroke="{_edge_color(edge.weight)}" stroke-width="{sw:.1f}" opacity="0.8"/>'
            f'<text x="{(x1 + x2) / 2:.1f}" y="{(y1 + y2) / 2:.1f}" fill="{TEXT}" font-family="Helvetica" '
            f'font-size="10" text-anchor="middle">{edge.weight}</text></g>'
        )
    parts.append("</g>")

    # Nodes
    parts.append('<g id="nodes">')
    for node_id in graph.nodes:
        if node_id not in positions:
            continue
        x, y = positions[node_id]
        x, y = x + ox, y + oy
        score = scores.get(node_id)
        r = node_radius(score.normalized if score else 0.5)
        tier = tiers.get(node_id, 3)
        tag = node_tags.get(node_id, HighlightTag.NONE)
        parts.append(
            f'<g class="node tier-{tier} {tag.value}" data-node="{esc(node_id)}">'
            f'<circle cx="{x:.1f}" cy="{y:.1f}" r="{r:.1f}" fill="{NODE_FILL}" '
            f'stroke="{TIER_BORDERS[tier]}" stroke-width="1.5"/>'
            f'<text x="{x:.1f}" y="{(y + r + 14):.1f}" fill="{TEXT}" font-family="Helvetica" '
            f'font-size="12" text-anchor="middle">{esc(node_id)}</text></g>'
        )
    parts.append("</g>")
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def _script_json(data: object) -> str:
    return json.dumps(data, ensure_ascii=False, sort_keys=True).replace("</", "<\\/")


def wrap_html(svg: str, *, title: str, highlights: dict[str, dict] | None = None) -> str:
    """Wrap SVG in a standalone page with pan/zoom and click-to-highlight."""
    t = html.escape(title, quote=True)
    return (
        "<!doctype html>\n"
        "<html>\n"
        "<head>\n"
        f"  <meta charset=\"utf-8\" />\n  <title>{t}</title>\n"
        "  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />\n"
        "  <style>\n"
        "    html, body { height: 100%; }\n"
        "    body { margin: 0; background: #0f1115; color: #e6e6e6; font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; }\n"
        "    .wrap { padding: 12px; height: 100vh; box-sizing: border-box; display: flex; flex-direction: column; }\n"
        "    .toolbar { display: flex; gap: 8px; align-items: center; margin: 0 0 10px 0; }\n"
        "    .btn { background: #1b1f2a; color: #e6e6e6; border: 1px solid #3a4154; border-radius: 8px; padding: 6px 10px; cursor: pointer; }\n"
        "    .btn:hover { border-color: #5b6782; }\n"
        "    .hint { color: #9aa4b2; font-size: 12px; }\n"
        "    .viewport { border: 1px solid #3a4154; border-radius: 10px; overflow: hidden; flex: 1; min-height: 0; }\n"
        "    .info { margin-top: 8px; font-size: 13px; color: #9aa4b2; min-height: 18px; }\n"
        "    svg { width: 100%; height: 100%; display: block; touch-action: none; user-select: none; }\n"
        "    .node { cursor: pointer; }\n"
        "  </style>\n"
        "</head>\n"
        "<body>\n"
        "  <div class=\"wrap\">\n"
        "    <div class=\"toolbar\">\n"
        "      <button class=\"btn\" id=\"resetBtn\" type=\"button\">Reset</button>\n"
        "      <button class=\"btn\" id=\"zoomInBtn\" type=\"button\">Zoom +</button>\n"
        "      <button class=\"btn\" id=\"zoomOutBtn\" type=\"button\">Zoom -</button>\n"
        "      <span class=\"hint\">Drag to pan • Scroll to zoom • Click a node to highlight its neighborhood</span>\n"
        "    </div>\n"
        "    <div class=\"viewport\" id=\"viewport\">\n"
        f"{svg}\n"
        "    </div>\n"
        "    <div class=\"info\" id=\"info\">Click a node to see its connections</div>\n"
        "  </div>\n"
        f"  <script id=\"highlights\" type=\"application/json\">{_script_json(highlights or {})}</script>\n"
        "  <script>\n"
        "    (function () {\n"
        "      const viewportEl = document.getElementById('viewport');\n"
        "      const infoEl = document.getElementById('info');\n"
        "      const svg = viewportEl.querySelector('svg');\n"
        "      if (!svg) return;\n"
        "      const highlights = JSON.parse(document.getElementById('highlights').textContent || '{}');\n"
        "      const TAGS = ['selected', 'degree-1', 'degree-2', 'degree-3'];\n"
        "\n"
        "      const vb = svg.viewBox.baseVal;\n"
        "      const initial = { x: vb.x, y: vb.y, width: vb.width, height: vb.height };\n"
        "\n"
        "      const clamp = (v, min, max) => Math.max(min, Math.min(max, v));\n"
        "      const zoomAt = (clientX, clientY, factor) => {\n"
        "        const rect = svg.getBoundingClientRect();\n"
        "        const px = (clientX - rect.left) / rect.width;\n"
        "        const py = (clientY - rect.top) / rect.height;\n"
        "        const newW = clamp(vb.width / factor, initial.width / 3.0, initial.width / 0.1);\n"
        "        const newH = newW * (initial.height / initial.width);\n"
        "        vb.x += (vb.width - newW) * px;\n"
        "        vb.y += (vb.height - newH) * py;\n"
        "        vb.width = newW;\n"
        "        vb.height = newH;\n"
        "      };\n"
        "\n"
        "      const clearTags = () => {\n"
        "        svg.querySelectorAll('.node, .edge').forEach((el) => {\n"
        "          TAGS.forEach((tag) => el.classList.remove(tag));\n"
        "          el.classList.add('none');\n"
        "        });\n"
        "      };\n"
        "      const select = (nodeId) => {\n"
        "        clearTags();\n"
        "        if (nodeId === null || !highlights[nodeId]) {\n"
        "          infoEl.textContent = 'Click a node to see its connections';\n"
        "          return;\n"
        "        }\n"
        "        const entry = highlights[nodeId];\n"
        "        const apply = (attr, tags) => {\n"
        "          Object.entries(tags).forEach(([id, tag]) => {\n"
        "            svg.querySelectorAll(`[${attr}]`).forEach((el) => {\n"
        "              if (el.getAttribute(attr) === id) { el.classList.remove('none'); el.classList.add(tag); }\n"
        "            });\n"
        "          });\n"
        "        };\n"
        "        apply('data-node', entry.nodes);\n"
        "        apply('data-edge', entry.edges);\n"
        "        const direct = Object.entries(entry.nodes).filter(([, tag]) => tag === 'degree-1').map(([id]) => id);\n"
        "        infoEl.textContent = `${nodeId}: ${direct.length ? direct.join(', ') : 'no connections'}`;\n"
        "      };\n"
        "\n"
        "      let isPanning = false;\n"
        "      let moved = false;\n"
        "      let start = { x: 0, y: 0, vbX: 0, vbY: 0 };\n"
        "\n"
        "      svg.addEventListener('pointerdown', (e) => {\n"
        "        isPanning = true;\n"
        "        moved = false;\n"
        "        start = { x: e.clientX, y: e.clientY, vbX: vb.x, vbY: vb.y };\n"
        "      });\n"
        "      svg.addEventListener('pointerup', (e) => {\n"
        "        isPanning = false;\n"
        "        if (moved) return;\n"
        "        const nodeEl = e.target.closest('[data-node]');\n"
        "        select(nodeEl ? nodeEl.getAttribute('data-node') : null);\n"
        "      });\n"
        "      svg.addEventListener('pointercancel', () => { isPanning = false; });\n"
        "      svg.addEventListener('pointermove', (e) => {\n"
        "        if (!isPanning) return;\n"
        "        if (Math.abs(e.clientX - start.x) + Math.abs(e.clientY - start.y) > 3) moved = true;\n"
        "        const rect = svg.getBoundingClientRect();\n"
        "        const dx = (e.clientX - start.x) * (vb.width / rect.width);\n"
        "        const dy = (e.clientY - start.y) * (vb.height / rect.height);\n"
        "        vb.x = start.vbX - dx;\n"
        "        vb.y = start.vbY - dy;\n"
        "      });\n"
        "\n"
        "      svg.addEventListener('wheel', (e) => {\n"
        "        e.preventDefault();\n"
        "        zoomAt(e.clientX, e.clientY, e.deltaY > 0 ? 1 / 1.15 : 1.15);\n"
        "      }, { passive: false });\n"
        "\n"
        "      const reset = () => {\n"
        "        vb.x = initial.x;\n"
        "        vb.y = initial.y;\n"
        "        vb.width = initial.width;\n"
        "        vb.height = initial.height;\n"
        "      };\n"
        "      const center = () => {\n"
        "        const rect = svg.getBoundingClientRect();\n"
        "        return [rect.left + rect.width / 2, rect.top + rect.height / 2];\n"
        "      };\n"
        "      svg.addEventListener('dblclick', reset);\n"
        "      document.getElementById('resetBtn')?.addEventListener('click', reset);\n"
        "      document.getElementById('zoomInBtn')?.addEventListener('click', () => zoomAt(...center(), 1.2));\n"
        "      document.getElementById('zoomOutBtn')?.addEventListener('click', () => zoomAt(...center(), 0.8));\n"
        "    })();\n"
        "  </script>\n"
        "</body>\n"
        "</html>\n"
    )


def to_html(session: Session, *, title: str) -> str:
    svg = to_svg(session, title=title)
    return wrap_html(svg, title=title, highlights=highlight_map(session.graph, max_depth=session.config.max_depth))


def summarize(session: Session, *, title: str, top: int) -> dict:
    """Scores, tiers and (if any) the current highlight, as plain data."""
    rows = []
    for node_id, tier in session.tiers.items():
        score = session.scores[node_id]
        rows.append({"name": node_id, "tier": tier, **score.to_dict()})

    payload = {
        "title": title,
        "strategy": session.layout.strategy if session.layout else None,
        "node_count": len(session.graph.nodes),
        "edge_count": len(session.graph.edges),
        "tier_sizes": {str(t): sum(1 for v in session.tiers.values() if v == t) for t in range(4)},
        "nodes": rows[: max(0, top)],
    }
    if session.selected is not None:
        payload["highlight"] = session.highlight.snapshot()
        payload["connected_nodes"] = session.connected_nodes
    return payload


def to_markdown(payload: dict) -> str:
    lines: list[str] = []
    lines.append(f"## {payload['title']}")
    lines.append("")
    lines.append(f"- Nodes: {payload['node_count']}")
    lines.append(f"- Edges: {payload['edge_count']}")
    lines.append(f"- Layout strategy: `{payload['strategy']}`")
    sizes = payload["tier_sizes"]
    lines.append(f"- Tier sizes: {', '.join(f'{k}: {v}' for k, v in sizes.items())}")
    lines.append("")

    lines.append("### Importance")
    lines.append("")
    lines.append("| Node | Tier | Degree | Total weight | Avg weight | Betweenness | Composite | Normalized |")
    lines.append("|---|---:|---:|---:|---:|---:|---:|---:|")
    for r in payload["nodes"]:
        lines.append(
            f"| `{r['name']}` | {r['tier']} | {r['degree']} | {r['total_weight']} | {r['avg_weight']} "
            f"| {r['betweenness']} | {r['composite_score']} | {r['normalized']} |"
        )
    lines.append("")

    highlight = payload.get("highlight")
    if highlight:
        lines.append(f"### Highlight: `{highlight['selected']}`")
        lines.append("")
        lines.append("| Element | Tag |")
        lines.append("|---|---|")
        for node_id, tag in highlight["nodes"].items():
            lines.append(f"| `{node_id}` | {tag} |")
        for edge_id, tag in highlight["edges"].items():
            lines.append(f"| `{edge_id}` | {tag} |")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def print_rich(payload: dict, *, console: Console) -> None:
    console.print(f"[bold]{payload['title']}[/bold]")
    console.print(
        f"Nodes: {payload['node_count']}  Edges: {payload['edge_count']}  Strategy: {payload['strategy']}"
    )
    console.print()

    t = Table(title="Importance", show_header=True, header_style="bold")
    t.add_column("Node", style="cyan", no_wrap=True)
    t.add_column("Tier", justify="right")
    t.add_column("Degree", justify="right")
    t.add_column("Avg weight", justify="right")
    t.add_column("Betweenness", justify="right")
    t.add_column("Composite", justify="right")
    t.add_column("Normalized", justify="right")
    for r in payload["nodes"]:
        t.add_row(
            str(r["name"]),
            str(r["tier"]),
            str(r["degree"]),
            str(r["avg_weight"]),
            str(r["betweenness"]),
            str(r["composite_score"]),
            str(r["normalized"]),
        )
    console.print(t)

    highlight = payload.get("highlight")
    if highlight:
        console.print()
        h = Table(title=f"Highlight from {highlight['selected']}", show_header=True, header_style="bold")
        h.add_column("Node", style="cyan", no_wrap=True)
        h.add_column("Tag")
        for node_id, tag in highlight["nodes"].items():
            h.add_row(node_id, tag)
        console.print(h)
