"""Render a graph document produced by ``convert.py`` as DOT or Mermaid."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sketchgen import LAYOUT_ENGINES, UnknownLayoutError, generate_dot, generate_mermaid


def render(document: Dict[str, Any], fmt: str, layout: Optional[str] = None) -> str:
    if fmt == "mermaid":
        return generate_mermaid(document)
    return generate_dot(document, layout=layout)


def read_document(source: str) -> Dict[str, Any]:
    """Load a document from a path, or from stdin when ``source`` is ``-``."""
    if source == "-":
        return json.load(sys.stdin)
    with Path(source).open("r", encoding="utf-8") as handle:
        return json.load(handle)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a sketch graph document as diagram code.")
    parser.add_argument("--in", dest="input_path", required=True, help="Graph JSON file, or - for stdin")
    parser.add_argument("--fmt", dest="format", required=True, choices=["dot", "mermaid"], help="Output format")
    parser.add_argument(
        "--layout",
        choices=sorted(LAYOUT_ENGINES),
        help="Layout kind for DOT output; overrides the document's own layout",
    )
    parser.add_argument("--orientation", choices=["TB", "BT", "LR", "RL"], help="Override the document orientation")
    parser.add_argument("--out", dest="output_path", help="Write the code here instead of stdout")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    document = read_document(args.input_path)
    if args.orientation:
        document["orientation"] = args.orientation

    try:
        code = render(document, args.format, layout=args.layout)
    except UnknownLayoutError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.output_path:
        Path(args.output_path).write_text(code, encoding="utf-8")
    else:
        sys.stdout.write(code)
    return 0


if __name__ == "__main__":
    sys.exit(main())
