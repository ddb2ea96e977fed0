"""Execute extracted commands against the nodes of a parse result."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple

from .commands import parse_style_params
from .errors import CommandNotFoundError, MalformedCommandError, SketchSyntaxError
from .identifiers import reference_number
from .utils import Command, Layout, Rename, SelectNode, SketchNode

logger = logging.getLogger(__name__)


class CommandSink(Protocol):
    """Hooks the rendering layer exposes to the interpreter."""

    def on_select_node(self, node: SketchNode) -> None: ...

    def on_open_style_inspector(self, node: SketchNode) -> None: ...

    def on_apply_style(self, node_id: str, styles: Dict[str, object]) -> None: ...

    def on_rename_node(self, node_id: str, new_label: str) -> None: ...

    def on_apply_layout(self, kind: str, nodes: Sequence[SketchNode]) -> None: ...

    def on_error(self, message: str) -> None: ...


class NullCommandSink:
    """A sink that ignores every hook; subclass and override what you need."""

    def on_select_node(self, node: SketchNode) -> None:
        pass

    def on_open_style_inspector(self, node: SketchNode) -> None:
        pass

    def on_apply_style(self, node_id: str, styles: Dict[str, object]) -> None:
        pass

    def on_rename_node(self, node_id: str, new_label: str) -> None:
        pass

    def on_apply_layout(self, kind: str, nodes: Sequence[SketchNode]) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass


class RecordingCommandSink(NullCommandSink):
    """Record each hook call as an ``(action, *args)`` tuple."""

    def __init__(self) -> None:
        self.actions: List[Tuple[Any, ...]] = []

    @property
    def errors(self) -> List[str]:
        return [action[1] for action in self.actions if action[0] == "error"]

    def on_select_node(self, node: SketchNode) -> None:
        self.actions.append(("select", node.label))

    def on_open_style_inspector(self, node: SketchNode) -> None:
        self.actions.append(("inspect", node.label))

    def on_apply_style(self, node_id: str, styles: Dict[str, object]) -> None:
        self.actions.append(("style", node_id, dict(styles)))

    def on_rename_node(self, node_id: str, new_label: str) -> None:
        self.actions.append(("rename", node_id, new_label))

    def on_apply_layout(self, kind: str, nodes: Sequence[SketchNode]) -> None:
        self.actions.append(("layout", kind, [node.label for node in nodes]))

    def on_error(self, message: str) -> None:
        self.actions.append(("error", message))


def find_node(ref: str, nodes: Sequence[SketchNode]) -> Optional[SketchNode]:
    """Match ``:N`` against numeric ids, anything else case-insensitively by label."""

    ref = ref.strip()
    numeric_id = reference_number(ref)
    if numeric_id is not None:
        return next((node for node in nodes if node.numeric_id == numeric_id), None)
    lowered = ref.lower()
    return next((node for node in nodes if node.label.lower() == lowered), None)


def _require_node(ref: str, nodes: Sequence[SketchNode]) -> SketchNode:
    node = find_node(ref, nodes)
    if node is None:
        raise CommandNotFoundError(ref)
    return node


class CommandInterpreter:
    """Dispatch commands to a :class:`CommandSink`.

    Failures are reported through ``sink.on_error`` and signalled by a
    ``False`` return value; nothing is raised to the caller.
    """

    def execute(self, command: Command, nodes: Sequence[SketchNode], sink: CommandSink) -> bool:
        logger.debug("Executing %s command %r", command.command_type, command.raw)
        try:
            if isinstance(command, SelectNode):
                self._select(command, nodes, sink)
            elif isinstance(command, Rename):
                self._rename(command, nodes, sink)
            elif isinstance(command, Layout):
                sink.on_apply_layout(command.kind, nodes)
            else:
                raise MalformedCommandError(f"Unknown command: {command!r}")
        except SketchSyntaxError as exc:
            logger.warning("Command %r failed: %s", command.raw, exc)
            sink.on_error(str(exc))
            return False
        return True

    def execute_all(
        self, commands: Sequence[Command], nodes: Sequence[SketchNode], sink: CommandSink
    ) -> List[bool]:
        return [self.execute(command, nodes, sink) for command in commands]

    def _select(self, command: SelectNode, nodes: Sequence[SketchNode], sink: CommandSink) -> None:
        node = _require_node(command.ref, nodes)
        sink.on_select_node(node)
        styles = parse_style_params(command.params)
        if styles:
            sink.on_apply_style(node.label, styles)
        sink.on_open_style_inspector(node)

    def _rename(self, command: Rename, nodes: Sequence[SketchNode], sink: CommandSink) -> None:
        node = _require_node(command.old_ref, nodes)
        if not command.new_label:
            raise MalformedCommandError("New label is required for rename command")
        sink.on_rename_node(node.label, command.new_label)


class DocumentCommandSink(RecordingCommandSink):
    """Fold command effects into a graph document.

    Renames only change a node's ``label``; its ``id`` stays the label it was
    parsed under.
    """

    def __init__(self, document: Dict[str, Any]) -> None:
        super().__init__()
        self.document = document
        self._nodes: Dict[str, Dict[str, Any]] = {
            node["id"]: node for node in document.get("nodes", []) if isinstance(node, dict)
        }

    def on_apply_style(self, node_id: str, styles: Dict[str, object]) -> None:
        super().on_apply_style(node_id, styles)
        node = self._nodes.get(node_id)
        if node is not None:
            node.update(styles)

    def on_rename_node(self, node_id: str, new_label: str) -> None:
        super().on_rename_node(node_id, new_label)
        node = self._nodes.get(node_id)
        if node is not None:
            node["label"] = new_label

    def on_apply_layout(self, kind: str, nodes: Sequence[SketchNode]) -> None:
        super().on_apply_layout(kind, nodes)
        self.document["layout"] = kind

    def on_error(self, message: str) -> None:
        super().on_error(message)
        self.document.setdefault("warnings", []).append(f"command_failed: {message}")
