"""Arrow tokenizer for structural sketch lines."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .utils import BACKWARD, BIDIRECTIONAL, FORWARD, Arrow

logger = logging.getLogger(__name__)

# Alternation order is the precedence: a labeled bidirectional arrow must
# never be consumed as "<-" followed by a forward arrow.
ARROW_PATTERN = re.compile(
    r"<-(?P<bilabel>[^<>]+)->"
    r"|<->"
    r"|-(?P<label>[^-<>]+)->"
    r"|->"
    r"|<-"
)

EdgeSpec = Tuple[str, str, Optional[str]]


def _clean_edge_label(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    value = text.strip()
    return value or None


class ArrowTokenizer:
    """Find arrows in one line and the node segments between them."""

    def tokenize(self, line: str) -> List[Arrow]:
        arrows: List[Arrow] = []
        for match in ARROW_PATTERN.finditer(line):
            raw = match.group(0)
            if match.group("bilabel") is not None:
                direction = BIDIRECTIONAL
                label = _clean_edge_label(match.group("bilabel"))
            elif match.group("label") is not None:
                direction = FORWARD
                label = _clean_edge_label(match.group("label"))
            elif raw == "<->":
                direction, label = BIDIRECTIONAL, None
            elif raw == "<-":
                direction, label = BACKWARD, None
            else:
                direction, label = FORWARD, None
            arrows.append(
                Arrow(
                    position=match.start(),
                    length=len(raw),
                    direction=direction,
                    label=label,
                    raw=raw,
                )
            )
        return arrows

    def split(self, line: str) -> Tuple[List[str], List[Arrow]]:
        """Return the ``len(arrows) + 1`` trimmed segments around each arrow.

        Empty segments are kept as ``""`` so segment ``i`` and ``i + 1`` are
        always the operands of arrow ``i``.
        """

        arrows = self.tokenize(line)
        if not arrows:
            return [line.strip()], []
        segments: List[str] = []
        last_index = 0
        for arrow in arrows:
            segments.append(line[last_index:arrow.position].strip())
            last_index = arrow.end
        segments.append(line[last_index:].strip())
        return segments, arrows


def edge_specs(arrow: Arrow, left: str, right: str) -> List[EdgeSpec]:
    """Translate one arrow between ``left`` and ``right`` into directed edges."""

    if arrow.direction == FORWARD:
        return [(left, right, arrow.label)]
    if arrow.direction == BACKWARD:
        return [(right, left, arrow.label)]
    if arrow.direction == BIDIRECTIONAL:
        return [(left, right, arrow.label), (right, left, arrow.label)]
    logger.warning("Unknown arrow direction %r", arrow.direction)
    return []
