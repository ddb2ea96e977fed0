"""Sketch compiler package exports."""

from .errors import (
    CommandNotFoundError,
    MalformedCommandError,
    SketchSyntaxError,
    UnresolvedReferenceError,
)
from .identifiers import IdentifierManager
from .interpreter import (
    CommandInterpreter,
    CommandSink,
    DocumentCommandSink,
    NullCommandSink,
    RecordingCommandSink,
)
from .syntax_manager import SyntaxManager, parse_sketch_code
from .utils import Layout, ParseResult, Rename, SelectNode, SketchEdge, SketchNode

__all__ = [
    "CommandInterpreter",
    "CommandNotFoundError",
    "CommandSink",
    "DocumentCommandSink",
    "IdentifierManager",
    "Layout",
    "MalformedCommandError",
    "NullCommandSink",
    "ParseResult",
    "RecordingCommandSink",
    "Rename",
    "SelectNode",
    "SketchEdge",
    "SketchNode",
    "SketchSyntaxError",
    "SyntaxManager",
    "UnresolvedReferenceError",
    "parse_sketch_code",
]
