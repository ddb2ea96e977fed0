"""Shared helpers for graph document to code generators."""

from __future__ import annotations

from typing import Any, Dict, Optional

# Layout kinds understood by ``=layout(kind)`` and the Graphviz engine each
# one is handed to.
LAYOUT_ENGINES: Dict[str, str] = {
    "decision": "dot",
    "tree": "dot",
    "list": "dot",
    "circle": "circo",
    "grid": "osage",
}


class UnknownLayoutError(ValueError):
    """Raised when a layout kind has no registered engine."""


def layout_engine(kind: Optional[str]) -> str:
    if not kind:
        return "dot"
    engine = LAYOUT_ENGINES.get(kind.strip().lower())
    if engine is None:
        known = ", ".join(sorted(LAYOUT_ENGINES))
        raise UnknownLayoutError(f"Unknown layout '{kind}' (expected one of: {known})")
    return engine


def shape_map_to_dot(shape: Optional[str]) -> str:
    mapping = {
        "rectangle": "box",
        "square": "square",
        "circle": "circle",
        "diamond": "diamond",
        "star": "star",
        "pentagon": "pentagon",
        "hexagon": "hexagon",
    }
    return mapping.get((shape or "rectangle").lower(), "box")


def orientation_to_rankdir(value: Optional[str]) -> str:
    mapping = {"TB": "TB", "BT": "BT", "LR": "LR", "RL": "RL"}
    return mapping.get((value or "TB").upper(), "TB")


def orientation_to_mermaid(value: Optional[str]) -> str:
    return orientation_to_rankdir(value)


def escape_label(text: Optional[str]) -> str:
    return (text or "").replace("\n", "\\n")


def node_key(node: Dict[str, Any]) -> str:
    """Identifier-safe name for a node, built from its numeric id."""

    numeric_id = node.get("numericId")
    if numeric_id is None:
        return str(node.get("id", "node"))
    return f"n{numeric_id}"


def node_keys(document: Dict[str, Any]) -> Dict[str, str]:
    return {node["id"]: node_key(node) for node in document.get("nodes", []) if node.get("id") is not None}
