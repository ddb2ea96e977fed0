"""Exception hierarchy shared by the sketch compiler."""

from __future__ import annotations


class SketchSyntaxError(ValueError):
    """Base class for problems found while compiling sketch text."""


class UnresolvedReferenceError(SketchSyntaxError):
    """Raised when a ``:N`` reference does not name an assigned numeric id."""

    def __init__(self, ref: str, message: str) -> None:
        super().__init__(message)
        self.ref = ref


class CommandNotFoundError(SketchSyntaxError):
    """Raised when a command refers to a node that is not on the canvas."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Node '{ref}' not found")
        self.ref = ref


class MalformedCommandError(SketchSyntaxError):
    """Raised when a command is missing a required argument."""
