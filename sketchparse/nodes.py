"""Per-parse node registry with shape inference."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .identifiers import IdentifierManager, is_reference
from .utils import BASE_SHAPE_KEYWORDS, DEFAULT_SHAPE, EXTENDED_SHAPE_KEYWORDS, SketchNode

logger = logging.getLogger(__name__)


def infer_shape(label: str, extended: bool = True) -> str:
    """Return the shape a label asks for; only an exact keyword counts."""

    keywords = EXTENDED_SHAPE_KEYWORDS if extended else BASE_SHAPE_KEYWORDS
    lowered = label.strip().lower()
    return lowered if lowered in keywords else DEFAULT_SHAPE


class NodeRegistry:
    """Deduplicate nodes by label for a single parse."""

    def __init__(self, identifiers: IdentifierManager, extended_shapes: bool = True) -> None:
        self._identifiers = identifiers
        self._extended_shapes = extended_shapes
        self._nodes: Dict[str, SketchNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, label: object) -> bool:
        return label in self._nodes

    @property
    def nodes(self) -> List[SketchNode]:
        return list(self._nodes.values())

    @property
    def node_order(self) -> List[str]:
        return list(self._nodes)

    def get(self, label: str) -> Optional[SketchNode]:
        return self._nodes.get(label)

    def resolve(self, raw_label: str) -> str:
        """Trim ``raw_label`` and follow a ``:N`` reference without creating anything."""

        label = raw_label.strip()
        if is_reference(label):
            label = self._identifiers.resolve_reference(label)
        return label

    def ensure_node(self, raw_label: str) -> str:
        return self.add(self.resolve(raw_label))

    def add(self, label: str) -> str:
        """Register an already-resolved label."""

        if label in self._nodes:
            return label
        shape = infer_shape(label, self._extended_shapes)
        node = SketchNode(
            label=label,
            numeric_id=self._identifiers.assign_id(label),
            shape=shape,
            order=len(self._nodes),
        )
        self._nodes[label] = node
        logger.debug("Created node %r (shape=%s, order=%d)", label, shape, node.order)
        return label
