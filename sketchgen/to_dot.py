"""Generate Graphviz DOT code from a graph document."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import graphviz

from .utils import escape_label, layout_engine, node_keys, orientation_to_rankdir, shape_map_to_dot


def _node_attrs(node: Dict[str, Any]) -> Dict[str, str]:
    attrs: Dict[str, str] = {
        "label": escape_label(node.get("label", node.get("id"))),
        "shape": shape_map_to_dot(node.get("shape")),
    }
    if node.get("stroke"):
        attrs["color"] = str(node["stroke"])
    if node.get("fill"):
        attrs["style"] = "filled"
        attrs["fillcolor"] = str(node["fill"])
    if node.get("strokeWidth") is not None:
        attrs["penwidth"] = str(node["strokeWidth"])
    return attrs


def build_digraph(document: Dict[str, Any], layout: Optional[str] = None) -> graphviz.Digraph:
    """Build a :class:`graphviz.Digraph` for ``document``.

    ``layout`` (or the document's own ``layout`` entry, set by an executed
    ``=layout(...)`` command) selects the Graphviz engine.
    """

    nodes: List[Dict[str, Any]] = document.get("nodes", [])
    edges: List[Dict[str, Any]] = document.get("edges", [])
    engine = layout_engine(layout or document.get("layout"))

    graph = graphviz.Digraph(name="sketch", comment=document.get("title"), engine=engine)
    graph.attr(rankdir=orientation_to_rankdir(document.get("orientation")), layout=engine)

    keys = node_keys(document)
    for node in nodes:
        graph.node(keys[node["id"]], **_node_attrs(node))

    for edge in edges:
        src = keys.get(edge.get("source"))
        dst = keys.get(edge.get("target"))
        if not src or not dst:
            continue
        attrs: Dict[str, str] = {}
        if edge.get("label"):
            attrs["label"] = escape_label(edge["label"])
        graph.edge(src, dst, **attrs)
    return graph


def generate_dot(document: Dict[str, Any], layout: Optional[str] = None) -> str:
    return build_digraph(document, layout=layout).source
