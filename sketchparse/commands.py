"""Pull ``@ref`` and ``=name(args)`` command lines out of sketch text."""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional, Tuple

from .quoted_strings import QuotedText
from .utils import Command, Layout, Rename, SelectNode

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = "tree"

_AT_COMMAND_PATTERN = re.compile(r"^@(\S+)(.*)$")
_EQUALS_COMMAND_PATTERN = re.compile(r"^=(\w+)\s*\(([^)]*)\)$")
_FILL_PATTERN = re.compile(r"fill:\s*([#\w]+)")
_BORDER_PATTERN = re.compile(r"border:\s*([#\w]+)")
_WIDTH_PATTERN = re.compile(r"width:\s*(\d+)")

CommandFactory = Callable[[List[str], str, int], Command]


def _build_rename(args: List[str], raw: str, line: int) -> Command:
    old_ref = args[0] if args else ""
    new_label = args[1] if len(args) > 1 else ""
    return Rename(old_ref=old_ref, new_label=new_label, raw=raw, line=line)


def _build_layout(args: List[str], raw: str, line: int) -> Command:
    kind = args[0] if args and args[0] else DEFAULT_LAYOUT
    return Layout(kind=kind, raw=raw, line=line)


COMMAND_FACTORIES: Dict[str, CommandFactory] = {
    "rename": _build_rename,
    "layout": _build_layout,
}


def split_arguments(args_text: str) -> List[str]:
    return [arg.strip() for arg in args_text.split(",")]


def parse_style_params(params: str) -> Dict[str, object]:
    """Extract ``fill:``, ``border:`` and ``width:`` settings from ``params``.

    Keys follow the graph document vocabulary: ``fill``, ``stroke`` and
    ``strokeWidth``.
    """

    styles: Dict[str, object] = {}
    if not params:
        return styles
    fill_match = _FILL_PATTERN.search(params)
    border_match = _BORDER_PATTERN.search(params)
    width_match = _WIDTH_PATTERN.search(params)
    if fill_match:
        styles["fill"] = fill_match.group(1)
    if border_match:
        styles["stroke"] = border_match.group(1)
    if width_match:
        styles["strokeWidth"] = int(width_match.group(1))
    return styles


class CommandExtractor:
    """Split sketch text into command records and the remaining structural text.

    Command lines are blanked rather than dropped so the structural text keeps
    one entry per input line.
    """

    def detect(self, line: str, quoted: Optional[QuotedText] = None, line_no: int = 0) -> Optional[Command]:
        trimmed = line.strip()
        if not trimmed:
            return None
        restore = quoted.restore if quoted is not None else (lambda text: text)

        equals_match = _EQUALS_COMMAND_PATTERN.match(trimmed)
        if equals_match:
            name = equals_match.group(1)
            factory = COMMAND_FACTORIES.get(name)
            if factory is not None:
                args = [restore(arg) for arg in split_arguments(equals_match.group(2))]
                return factory(args, restore(trimmed), line_no)
            logger.debug("Unknown command '=%s' treated as structural text", name)

        at_match = _AT_COMMAND_PATTERN.match(trimmed)
        if at_match:
            return SelectNode(
                ref=restore(at_match.group(1)),
                params=restore(at_match.group(2).strip()),
                raw=restore(trimmed),
                line=line_no,
            )
        return None

    def extract(self, text: str, quoted: Optional[QuotedText] = None) -> Tuple[List[Command], str]:
        commands: List[Command] = []
        structural_lines: List[str] = []
        line_no = 1
        for line in text.split("\n"):
            span = quoted.restore(line).count("\n") if quoted is not None else 0
            command = self.detect(line, quoted, line_no)
            if command is not None:
                logger.debug("Line %d: %s command %r", line_no, command.command_type, command.raw)
                commands.append(command)
                # one blank line per source line the command covered
                structural_lines.append("\n" * span)
            else:
                structural_lines.append(line)
            line_no += 1 + span
        return commands, "\n".join(structural_lines)
