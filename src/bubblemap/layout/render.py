"""SVG document and pyvis HTML rendering of a laid out scene."""

import base64
import html
import math
from pathlib import Path

from ..config import LayoutConfig
from .scene import Scene
from .size import Bubble

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"


def _attr(value: str) -> str:
    """Escape a value for use inside a double-quoted XML attribute."""
    return html.escape(value, quote=True)


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _defs(config: LayoutConfig) -> str:
    """Shadow filter plus one horizontal gradient per palette entry."""
    parts = [
        "  <defs>",
        '    <filter id="softShadow" x="-50%" y="-50%" width="200%" height="200%">',
        '      <feDropShadow dx="0" dy="2" stdDeviation="4" flood-opacity="0.22"/>',
        "    </filter>",
    ]
    for i, (start, end) in enumerate(config.palette):
        parts.extend(
            [
                f'    <linearGradient id="grad-{i}" x1="0%" y1="0%" x2="100%" y2="0%">',
                f'      <stop offset="0%" stop-color="{_attr(start)}" stop-opacity="0.96"/>',
                f'      <stop offset="100%" stop-color="{_attr(end)}" stop-opacity="0.96"/>',
                "    </linearGradient>",
            ]
        )
    parts.append("  </defs>")
    return "\n".join(parts)


def _label(bubble: Bubble, config: LayoutConfig) -> str:
    """Centred multi-line <text> element; the block is centred vertically."""
    first_dy = -(len(bubble.lines) - 1) * config.line_height / 2
    tspans = []
    for i, line in enumerate(bubble.lines):
        dy = first_dy if i == 0 else config.line_height
        tspans.append(f'<tspan x="0" dy="{_fmt(dy)}">{html.escape(line, quote=False)}</tspan>')
    return (
        f'<text text-anchor="middle" dominant-baseline="middle" fill="#fff" '
        f'font-family="{_attr(config.font_family)}" font-weight="{config.font_weight}" '
        f'font-size="{config.font_size}">{"".join(tspans)}</text>'
    )


def _bubble_group(bubble: Bubble, config: LayoutConfig) -> str:
    r = _fmt(bubble.radius)
    branch = bubble.branch_index % len(config.palette)
    return "\n".join(
        [
            f'  <g id="node-{bubble.id}" transform="translate({_fmt(bubble.x)}, {_fmt(bubble.y)})" '
            'filter="url(#softShadow)">',
            f'    <circle r="{_fmt(bubble.radius + 3)}" fill="white" opacity="0.35"/>',
            f'    <circle r="{r}" fill="url(#grad-{branch})"/>',
            f'    <circle r="{r}" fill="#fff" opacity="0.06"/>',
            f'    <circle r="{r}" fill="none" stroke="rgba(255,255,255,0.35)" stroke-width="1.2"/>',
            f"    {_label(bubble, config)}",
            "  </g>",
        ]
    )


def render_svg(scene: Scene) -> str:
    """Serialize the scene as a standalone SVG document.

    The font family is embedded in a <style> block so the file renders the
    same outside the tool. Links are emitted before bubbles so they sit
    underneath them.

    Args:
        scene: Laid out scene.

    Returns:
        SVG markup.
    """
    config = scene.config
    parts = [
        f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}" width="{scene.width}" '
        f'height="{scene.height}" viewBox="{scene.view_box}" role="img">',
        f"  <style>text {{ font-family: {html.escape(config.font_family, quote=False)}; }}</style>",
        _defs(config),
    ]

    for link in scene.links:
        parts.append(
            f'  <path id="link-{link.id}" d="{link.path_d}" fill="none" '
            f'stroke="{_attr(link.stroke)}" stroke-width="{_fmt(link.stroke_width)}" opacity="0.9"/>'
        )

    for bubble in scene.bubbles:
        parts.append(_bubble_group(bubble, config))

    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def _create_bubble_image(bubble: Bubble, config: LayoutConfig) -> str:
    """Render a single bubble as an SVG data URL for use as a pyvis node image."""
    size = math.ceil(bubble.radius * 2 + 8)
    branch = bubble.branch_index % len(config.palette)
    start, end = config.palette[branch]
    centered = Bubble(
        id=bubble.id,
        label=bubble.label,
        x=0.0,
        y=0.0,
        radius=bubble.radius,
        depth=bubble.depth,
        branch_index=0,
        lines=bubble.lines,
    )
    single = config.replace(palette=((start, end),))
    svg = "\n".join(
        [
            f'<svg xmlns="{SVG_NS}" width="{size}" height="{size}" '
            f'viewBox="{_fmt(-size / 2)} {_fmt(-size / 2)} {size} {size}">',
            _defs(single),
            _bubble_group(centered, single),
            "</svg>",
        ]
    )
    encoded = base64.b64encode(svg.encode()).decode()
    return f"data:image/svg+xml;base64,{encoded}"


def render_html(scene: Scene, output_path: Path) -> None:
    """Write an interactive pyvis page showing the scene at its fixed positions.

    Args:
        scene: Laid out scene.
        output_path: Path to write the HTML file.
    """
    from pyvis.network import Network

    config = scene.config

    # Physics disabled: positions come from the scene
    net = Network(
        height="100vh",
        width="100%",
        bgcolor="#ffffff",
        directed=False,
        cdn_resources="remote",
    )
    net.toggle_physics(False)

    for bubble in scene.bubbles:
        net.add_node(
            bubble.id,
            label=" ",  # Space to suppress default label
            title=bubble.label,
            x=bubble.x,
            y=bubble.y,
            fixed=True,
            shape="image",
            image=_create_bubble_image(bubble, config),
            size=bubble.radius,
            font={"size": 0},
        )

    for link in scene.links:
        net.add_edge(
            link.source,
            link.target,
            color=link.stroke,
            width=link.stroke_width,
        )

    net.set_options("""
    {
        "physics": {"enabled": false},
        "interaction": {
            "navigationButtons": true,
            "zoomView": true,
            "dragView": true,
            "hover": true,
            "selectConnectedEdges": true,
            "tooltipDelay": 100
        },
        "edges": {
            "smooth": {"type": "curvedCW", "roundness": 0.15},
            "selectionWidth": 1.5,
            "hoverWidth": 1.5
        }
    }
    """)

    net.save_graph(str(output_path))

    _inject_highlight_script(output_path)


def _inject_highlight_script(output_file: Path) -> None:
    """Inject JavaScript that fades every bubble outside the selected node's branch."""
    with open(output_file, "r") as f:
        page = f.read()

    # Node ids encode the path from the root, so "0-2-1" belongs to branch "0-2"
    custom_script = f"""
    <script type="text/javascript">
    document.addEventListener('DOMContentLoaded', function() {{
        setTimeout(function() {{
            if (typeof network === 'undefined') return;
            function branchOf(id) {{
                var parts = String(id).split('-');
                return parts.length < 2 ? null : parts.slice(0, 2).join('-');
            }}
            network.on('selectNode', function(params) {{
                var branch = branchOf(params.nodes[0]);
                nodes.update(nodes.get().map(function(n) {{
                    var b = branchOf(n.id);
                    var keep = branch === null || b === null || b === branch;
                    return {{id: n.id, opacity: keep ? 1.0 : 0.25}};
                }}));
            }});
            network.on('deselectNode', function() {{
                nodes.update(nodes.get().map(function(n) {{
                    return {{id: n.id, opacity: 1.0}};
                }}));
            }});
        }}, 500);
    }});
    </script>
    """

    # Insert before closing body tag
    page = page.replace("</body>", custom_script + "</body>")

    with open(output_file, "w") as f:
        f.write(page)
