#!/usr/bin/env python3
"""
Sketch-to-graph converter.

Compiles arrow-notation sketch text (``A -yes-> B``, ``@A fill:#f00``,
``=layout(tree)``) into a JSON graph document, optionally executing the
commands it contains and emitting Graphviz DOT / Mermaid side files.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from sketchgen import UnknownLayoutError, generate_dot, generate_mermaid
from sketchparse import DocumentCommandSink, IdentifierManager, SyntaxManager
from sketchparse.utils import build_graph_document

logger = logging.getLogger("convert")

SKETCH_PATTERNS = ("*.sketch", "*.txt")
EMIT_SUFFIXES = {"dot": ".dot", "mermaid": ".mmd"}


def load_identifiers(ids_path: Optional[Path], clear: bool = False) -> IdentifierManager:
    """Load a saved id mapping so ``:N`` references survive between runs."""
    if ids_path is None or clear or not ids_path.exists():
        return IdentifierManager()
    with open(ids_path, encoding='utf-8') as f:
        return IdentifierManager.from_dict(json.load(f))


def save_identifiers(ids_path: Path, identifiers: IdentifierManager) -> None:
    ids_path.parent.mkdir(parents=True, exist_ok=True)
    with open(ids_path, 'w', encoding='utf-8') as f:
        json.dump(identifiers.to_dict(), f, ensure_ascii=False, indent=2)


def emit_code(document: Dict[str, Any], fmt: str) -> str:
    """Render ``document`` as DOT or Mermaid; a rejected layout falls back to the default engine."""
    if fmt == 'mermaid':
        return generate_mermaid(document)
    try:
        return generate_dot(document)
    except UnknownLayoutError as e:
        document.setdefault("warnings", []).append(f"layout_rejected: {e}")
        return generate_dot({**document, "layout": None})


def convert_file(
    input_path: Path,
    output_path: Optional[Path] = None,
    manager: Optional[SyntaxManager] = None,
    emit: Optional[str] = None,
    run_commands: bool = False,
) -> Dict[str, Any]:
    """
    Convert a single sketch file to a graph document.

    Args:
        input_path: Path to input sketch file
        output_path: Path to output JSON file (default: same name with .json)
        manager: Syntax manager to parse with; reuse one to keep numeric ids stable
        emit: Optional side-file format (dot/mermaid)
        run_commands: Execute the sketch's commands and record their outcome

    Returns:
        Graph document as dictionary
    """
    code = input_path.read_text(encoding='utf-8')
    manager = manager or SyntaxManager()

    if not output_path:
        output_path = input_path.with_suffix('.json')

    result = manager.parse(code)
    document = build_graph_document(input_path.stem, result)

    if run_commands and result.commands:
        sink = DocumentCommandSink(document)
        manager.execute_commands(sink, result)
        document["actions"] = [list(action) for action in sink.actions]

    output_path.parent.mkdir(parents=True, exist_ok=True)

    if emit:
        side_path = output_path.with_suffix(EMIT_SUFFIXES[emit])
        side_path.write_text(emit_code(document, emit), encoding='utf-8')

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(document, f, ensure_ascii=False, indent=2)

    return document


def batch_convert(
    input_dir: Path,
    output_dir: Path,
    emit: Optional[str] = None,
    run_commands: bool = False,
    strict: bool = False,
) -> Dict[str, Any]:
    """
    Batch convert all sketches in a directory.

    Every file is its own document, so each one gets a fresh id mapping.

    Returns:
        Summary statistics
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    input_files = sorted({path for pattern in SKETCH_PATTERNS for path in input_dir.glob(pattern)})

    if not input_files:
        print(f"No sketch files found in {input_dir}")
        return {"stats": {"total": 0, "success": 0, "failed": 0, "empty": 0}, "results": []}

    stats = {"total": 0, "success": 0, "failed": 0, "empty": 0}
    results = []

    print(f"Found {len(input_files)} sketch files")
    print("=" * 70)

    for input_file in input_files:
        file_id = input_file.stem
        stats["total"] += 1

        print(f"\n[{stats['total']}] Processing: {file_id}")

        try:
            code = input_file.read_text(encoding='utf-8')

            if not code.strip():
                print(f"  ⊘ Skipped: empty file")
                stats["empty"] += 1
                continue

            json_path = output_dir / f"{file_id}.json"
            document = convert_file(
                input_file,
                json_path,
                manager=SyntaxManager(strict=strict),
                emit=emit,
                run_commands=run_commands,
            )

            node_count = len(document["nodes"])
            edge_count = len(document["edges"])
            command_count = len(document["commands"])
            error_count = len(document.get("errors", []))

            if node_count == 0:
                status = "⊘ Empty"
                stats["empty"] += 1
            else:
                status = "✓ Success"
                stats["success"] += 1

            print(f"  Nodes: {node_count}, Edges: {edge_count}, Commands: {command_count}")
            if error_count:
                print(f"  Skipped lines: {error_count}")
            print(f"  {status}")

            results.append({
                "id": file_id,
                "nodes": node_count,
                "edges": edge_count,
                "commands": command_count,
                "errors": error_count,
            })

        except Exception as e:
            logger.debug("Conversion of %s failed", input_file, exc_info=True)
            print(f"  ✗ Failed: {e}")
            stats["failed"] += 1

    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Total: {stats['total']}, Success: {stats['success']}, Failed: {stats['failed']}, Empty: {stats['empty']}")

    summary = {"stats": stats, "results": results}
    summary_file = output_dir / "conversion_summary.json"
    with open(summary_file, 'w', encoding='utf-8') as f:
        json.dump(summary, f, ensure_ascii=False, indent=2)

    print(f"\nOutput: {output_dir}")
    print(f"Summary: {summary_file}")

    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Convert sketch text to graph JSON',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Convert single file
  python convert.py flow.sketch -o flow.json

  # Keep :N references stable across runs
  python convert.py flow.sketch --ids .sketch-ids.json

  # Execute @/=rename/=layout commands and emit Graphviz DOT
  python convert.py flow.sketch --run-commands --emit dot

  # Batch convert directory
  python convert.py --batch sketches/ -o output/
        '''
    )

    parser.add_argument('input', type=Path, help='Input file or directory')
    parser.add_argument('-o', '--output', type=Path, help='Output file or directory')
    parser.add_argument('-b', '--batch', action='store_true',
                        help='Batch convert all sketch files in input directory')
    parser.add_argument('--emit', choices=sorted(EMIT_SUFFIXES),
                        help='Also write DOT or Mermaid code next to the JSON output')
    parser.add_argument('--run-commands', action='store_true',
                        help='Execute commands and fold their effects into the document')
    parser.add_argument('--ids', type=Path,
                        help='JSON file holding the numeric id mapping (single-file mode)')
    parser.add_argument('--clear-ids', action='store_true',
                        help='Start from an empty id mapping even if --ids exists')
    parser.add_argument('--strict', action='store_true',
                        help='Fail on the first unresolved :N reference instead of skipping the line')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(name)s - %(levelname)s - %(message)s',
    )

    try:
        if args.batch:
            if not args.input.is_dir():
                print(f"Error: {args.input} is not a directory", file=sys.stderr)
                return 1

            output_dir = args.output or (args.input / "output")
            batch_convert(args.input, output_dir, emit=args.emit,
                          run_commands=args.run_commands, strict=args.strict)
        else:
            if not args.input.is_file():
                print(f"Error: {args.input} is not a file", file=sys.stderr)
                return 1

            identifiers = load_identifiers(args.ids, clear=args.clear_ids)
            manager = SyntaxManager(identifiers=identifiers, strict=args.strict)
            document = convert_file(args.input, args.output, manager=manager,
                                    emit=args.emit, run_commands=args.run_commands)
            if args.ids:
                save_identifiers(args.ids, manager.identifiers)

            print(f"\n✓ Converted {args.input}")
            print(f"  Nodes: {len(document['nodes'])}")
            print(f"  Edges: {len(document['edges'])}")
            print(f"  Commands: {len(document['commands'])}")
            for error in document.get("errors", []):
                print(f"  ⚠ line {error['line']}: {error['message']}")

            output_file = args.output or args.input.with_suffix('.json')
            print(f"  Output: {output_file}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
