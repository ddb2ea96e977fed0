"""Compile sketch text into nodes, edges and commands.

Syntax:

- each line is one statement
- ``A -> B``, ``A <- B``, ``A <-> B`` and chains such as ``A -> B -> C``
- labeled arrows: ``A -yes-> B``, ``A <-maybe-> B``
- quoted labels may span lines: ``"Multi\\nLine" -> B``
- a line without arrows is a standalone node
- ``:N`` refers to the node that was given numeric id ``N``
- commands: ``@ref [fill:#hex border:#hex width:N]``, ``=rename(ref, label)``,
  ``=layout(kind)``
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .arrows import ArrowTokenizer
from .commands import CommandExtractor
from .edges import EdgeRegistry
from .errors import UnresolvedReferenceError
from .identifiers import IdentifierManager
from .interpreter import CommandInterpreter, CommandSink
from .nodes import NodeRegistry
from .quoted_strings import QuotedStringExtractor, QuotedText
from .utils import LineError, ParseResult, build_graph_document, normalize_sketch

logger = logging.getLogger(__name__)


class SyntaxManager:
    """Owns the identifier mapping and runs the parse pipeline.

    Node and edge registries are rebuilt on every :meth:`parse`; the
    :class:`IdentifierManager` is kept, which is what makes ``:N`` stable
    while the text grows. One manager serves one document; it must not be
    used from several threads at once without external locking.
    """

    def __init__(
        self,
        identifiers: Optional[IdentifierManager] = None,
        extended_shapes: bool = True,
        strict: bool = False,
    ) -> None:
        self.identifiers = identifiers if identifiers is not None else IdentifierManager()
        self.extended_shapes = extended_shapes
        self.strict = strict
        self.quoted_strings = QuotedStringExtractor()
        self.command_extractor = CommandExtractor()
        self.tokenizer = ArrowTokenizer()
        self.interpreter = CommandInterpreter()
        self._last_result = ParseResult()

    @property
    def node_order(self) -> List[str]:
        return self._last_result.node_order

    @property
    def last_result(self) -> ParseResult:
        return self._last_result

    def parse(self, text: str) -> ParseResult:
        quoted = self.quoted_strings.extract(normalize_sketch(text))
        commands, structural = self.command_extractor.extract(quoted.masked, quoted)

        nodes = NodeRegistry(self.identifiers, extended_shapes=self.extended_shapes)
        edges = EdgeRegistry()
        result = ParseResult(commands=commands)

        line_no = 1
        for line in structural.split("\n"):
            span = quoted.restore(line).count("\n")
            if line.strip():
                try:
                    self._parse_line(line, line_no, quoted, nodes, edges, result)
                except UnresolvedReferenceError as exc:
                    if self.strict:
                        raise
                    logger.warning("Line %d skipped: %s", line_no, exc)
                    result.errors.append(
                        LineError(line=line_no, text=quoted.restore(line).strip(), message=str(exc))
                    )
            line_no += 1 + span

        result.nodes = nodes.nodes
        result.edges = edges.edges
        logger.debug(
            "Parsed %d node(s), %d edge(s), %d command(s)",
            len(result.nodes),
            len(result.edges),
            len(result.commands),
        )
        self._last_result = result
        return result

    def _parse_line(
        self,
        line: str,
        line_no: int,
        quoted: QuotedText,
        nodes: NodeRegistry,
        edges: EdgeRegistry,
        result: ParseResult,
    ) -> None:
        segments, arrows = self.tokenizer.split(line)
        if not arrows:
            label = self._segment_label(segments[0], quoted, nodes)
            if label:
                nodes.add(label)
            else:
                result.warnings.append(f"line {line_no}: empty label ignored")
            return

        # Resolve every operand before creating anything so a bad reference
        # leaves no partial line behind.
        labels: List[Optional[str]] = []
        for segment in segments:
            label = self._segment_label(segment, quoted, nodes) if segment else ""
            labels.append(label or None)

        for index, arrow in enumerate(arrows):
            if not labels[index] or not labels[index + 1]:
                result.warnings.append(
                    f"line {line_no}: dangling arrow '{arrow.raw}' at column {arrow.position + 1}"
                )
        for label in labels:
            if label:
                nodes.add(label)
        edges.create_edges_from_arrows(arrows, labels)

    @staticmethod
    def _segment_label(segment: str, quoted: QuotedText, nodes: NodeRegistry) -> str:
        # a quoted segment is a literal label, never a :N reference
        if quoted.is_placeholder(segment):
            return quoted.restore(segment).strip()
        return nodes.resolve(quoted.restore(segment))

    def execute_commands(self, sink: CommandSink, result: Optional[ParseResult] = None) -> List[bool]:
        """Run the commands of ``result`` (default: the last parse) through ``sink``."""

        target = result if result is not None else self._last_result
        return self.interpreter.execute_all(target.commands, target.nodes, sink)

    def clear_id_mappings(self) -> None:
        """Forget every numeric id; call only when the canvas is cleared."""

        self.identifiers.clear()
        logger.debug("Id mappings cleared")


def parse_sketch_code(
    code: str,
    source_id: str,
    manager: Optional[SyntaxManager] = None,
    orientation: Optional[str] = None,
) -> Dict[str, object]:
    """Parse sketch text into the graph document consumed by generators.

    Args:
        code: Sketch text
        source_id: Identifier for the diagram, used as the document title
        manager: Optional long-lived manager whose numeric ids should be reused
        orientation: Optional orientation hint (TB, LR, ...)

    Returns:
        Dict containing nodes, edges, commands and any warnings/errors
    """

    manager = manager if manager is not None else SyntaxManager()
    result = manager.parse(code)
    return build_graph_document(source_id, result, orientation=orientation)
