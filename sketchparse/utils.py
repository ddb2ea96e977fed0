"""Shared utilities and lightweight data models for the sketch compiler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Union

DEFAULT_SHAPE = "rectangle"
DEFAULT_ORIENTATION = "TB"
BASE_SHAPE_KEYWORDS = ("circle", "square", "rectangle", "diamond")
EXTENDED_SHAPE_KEYWORDS = BASE_SHAPE_KEYWORDS + ("star", "pentagon", "hexagon")

FORWARD = "forward"
BACKWARD = "backward"
BIDIRECTIONAL = "bidirectional"


@dataclass
class SketchNode:
    label: str
    numeric_id: int
    shape: str = DEFAULT_SHAPE
    order: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.label,
            "label": self.label,
            "shape": self.shape,
            "numericId": self.numeric_id,
            "order": self.order,
        }


@dataclass
class SketchEdge:
    edge_id: str
    source: str
    target: str
    label: Optional[str] = None

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    def to_dict(self) -> Dict[str, object]:
        entry: Dict[str, object] = {
            "id": self.edge_id,
            "source": self.source,
            "target": self.target,
        }
        if self.label:
            entry["label"] = self.label
        return entry


@dataclass(frozen=True)
class Arrow:
    """One arrow occurrence inside a structural line."""

    position: int
    length: int
    direction: str
    label: Optional[str] = None
    raw: str = ""

    @property
    def end(self) -> int:
        return self.position + self.length


@dataclass(frozen=True)
class SelectNode:
    """``@ref [fill:#hex border:#hex width:N]``"""

    command_type: ClassVar[str] = "select"

    ref: str
    params: str = ""
    raw: str = ""
    line: int = 0

    def to_dict(self) -> Dict[str, object]:
        entry: Dict[str, object] = {"type": self.command_type, "ref": self.ref}
        if self.params:
            entry["params"] = self.params
        return entry


@dataclass(frozen=True)
class Rename:
    """``=rename(old_ref, new label)``"""

    command_type: ClassVar[str] = "rename"

    old_ref: str
    new_label: str
    raw: str = ""
    line: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.command_type, "oldRef": self.old_ref, "newLabel": self.new_label}


@dataclass(frozen=True)
class Layout:
    """``=layout(kind)``"""

    command_type: ClassVar[str] = "layout"

    kind: str
    raw: str = ""
    line: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {"type": self.command_type, "kind": self.kind}


Command = Union[SelectNode, Rename, Layout]


@dataclass(frozen=True)
class LineError:
    """A structural line that could not be compiled."""

    line: int
    text: str
    message: str

    def to_dict(self) -> Dict[str, object]:
        return {"line": self.line, "text": self.text, "message": self.message}


@dataclass
class ParseResult:
    nodes: List[SketchNode] = field(default_factory=list)
    edges: List[SketchEdge] = field(default_factory=list)
    commands: List[Command] = field(default_factory=list)
    errors: List[LineError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def node_order(self) -> List[str]:
        return [node.label for node in sorted(self.nodes, key=lambda node: node.order)]

    def find_node(self, label: str) -> Optional[SketchNode]:
        for node in self.nodes:
            if node.label == label:
                return node
        return None

    def to_dict(self) -> Dict[str, object]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "commands": [command.to_dict() for command in self.commands],
        }


def normalize_sketch(text: str) -> str:
    """Normalize newlines and drop a leading byte-order mark."""

    clean = text.replace("\r\n", "\n").replace("\r", "\n")
    if clean.startswith("\ufeff"):
        clean = clean[1:]
    return clean


def build_graph_document(
    title: str,
    result: ParseResult,
    orientation: Optional[str] = None,
    extras: Optional[Dict[str, object]] = None,
) -> Dict[str, object]:
    """
    Convert a parse result to the JSON document handed to renderers:

    - Top-level: title, orientation, nodes, edges, commands
    - Nodes: id, label, shape, numericId, order
    - Edges: id, source, target, label
    - Optional: warnings, errors, plus any non-None ``extras``
    """

    document: Dict[str, object] = {
        "title": title or "Untitled",
        "orientation": orientation or DEFAULT_ORIENTATION,
    }
    document.update(result.to_dict())
    if result.warnings:
        document["warnings"] = list(result.warnings)
    if result.errors:
        document["errors"] = [error.to_dict() for error in result.errors]
    if extras:
        for key, value in extras.items():
            if value is not None:
                document[key] = value
    return document
