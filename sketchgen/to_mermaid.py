"""Generate Mermaid code from a graph document."""

from __future__ import annotations

from typing import Any, Dict, List

from .utils import escape_label, node_keys, orientation_to_mermaid


def _mermaid_shape(key: str, node: Dict[str, Any]) -> str:
    label = escape_label(node.get("label", node.get("id"))).replace('"', "#quot;")
    shape = (node.get("shape") or "rectangle").lower()
    if shape == "circle":
        return f'{key}(("{label}"))'
    if shape == "diamond":
        return f'{key}{{"{label}"}}'
    if shape == "hexagon":
        return f'{key}{{{{"{label}"}}}}'
    return f'{key}["{label}"]'


def _style_line(key: str, node: Dict[str, Any]) -> str:
    style_parts: List[str] = []
    if node.get("fill"):
        style_parts.append(f'fill:{node["fill"]}')
    if node.get("stroke"):
        style_parts.append(f'stroke:{node["stroke"]}')
    if node.get("strokeWidth") is not None:
        style_parts.append(f'stroke-width:{node["strokeWidth"]}px')
    if not style_parts:
        return ""
    return f"style {key} " + ",".join(style_parts)


def generate_mermaid(document: Dict[str, Any]) -> str:
    nodes: List[Dict[str, Any]] = document.get("nodes", [])
    edges: List[Dict[str, Any]] = document.get("edges", [])
    orientation = orientation_to_mermaid(document.get("orientation", "TB"))
    keys = node_keys(document)

    lines: List[str] = [f"flowchart {orientation}"]
    styles: List[str] = []

    for node in nodes:
        key = keys[node["id"]]
        lines.append(f"  {_mermaid_shape(key, node)}")
        style = _style_line(key, node)
        if style:
            styles.append(f"  {style}")

    for edge in edges:
        src = keys.get(edge.get("source"))
        dst = keys.get(edge.get("target"))
        if not src or not dst:
            continue
        label = edge.get("label")
        if label:
            lines.append(f"  {src} -->|{escape_label(label).replace('|', '#124;')}| {dst}")
        else:
            lines.append(f"  {src} --> {dst}")

    lines.extend(styles)
    return "\n".join(lines) + "\n"
