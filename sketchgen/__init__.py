"""Generator package exports."""

from .to_dot import generate_dot
from .to_mermaid import generate_mermaid
from .utils import LAYOUT_ENGINES, UnknownLayoutError, layout_engine

__all__ = [
    "generate_dot",
    "generate_mermaid",
    "LAYOUT_ENGINES",
    "UnknownLayoutError",
    "layout_engine",
]
