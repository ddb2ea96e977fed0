"""Per-parse edge registry."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .arrows import edge_specs
from .utils import Arrow, SketchEdge

logger = logging.getLogger(__name__)


class EdgeRegistry:
    """Append-only list of edges; repeating a statement repeats the edge."""

    def __init__(self) -> None:
        self._edges: List[SketchEdge] = []

    def __len__(self) -> int:
        return len(self._edges)

    @property
    def edges(self) -> List[SketchEdge]:
        return list(self._edges)

    def create_edge(self, source: str, target: str, label: Optional[str] = None) -> SketchEdge:
        edge = SketchEdge(
            edge_id=f"{source}-{target}-{len(self._edges)}",
            source=source,
            target=target,
            label=label,
        )
        self._edges.append(edge)
        logger.debug("Created edge %s -> %s%s", source, target, f" ({label})" if label else "")
        return edge

    def create_edges_from_arrows(
        self, arrows: Sequence[Arrow], labels: Sequence[Optional[str]]
    ) -> List[SketchEdge]:
        """Build edges for one line.

        ``labels[i]`` and ``labels[i + 1]`` are the operands of ``arrows[i]``;
        an arrow with a missing operand produces no edge.
        """

        created: List[SketchEdge] = []
        for index, arrow in enumerate(arrows):
            left = labels[index] if index < len(labels) else None
            right = labels[index + 1] if index + 1 < len(labels) else None
            if not left or not right:
                continue
            for source, target, label in edge_specs(arrow, left, right):
                created.append(self.create_edge(source, target, label))
        return created
