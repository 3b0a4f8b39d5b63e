#!/usr/bin/env python3
"""
CommonJS dependency graph CLI

Walks the require() graph of a JavaScript entry file and prints every
reachable module with its discovery id.
"""

import argparse
import logging
import sys
from pathlib import Path

from exporters import to_ascii, to_json, to_listing, to_mermaid
from scanner.builder import build_graph
from scanner.errors import DependencyGraphError, ParseError
from scanner.resolver import DEFAULT_EXTENSION

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="cjs-depgraph",
        description="List the modules reachable through require() from a JavaScript entry file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cjs-depgraph src/index.js                  # id and path of every module
  cjs-depgraph src/index.js -f tree          # Dependency tree
  cjs-depgraph src/index.js -f json -o deps.json
  cjs-depgraph src/index.js -f mermaid --orientation TD
  cjs-depgraph src/index.js -vv              # Debug logging on stderr
        """,
    )

    parser.add_argument(
        "entry",
        help="Entry JavaScript file",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["list", "tree", "json", "mermaid"],
        default="list",
        help="Output format (default: list)",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display (default: the entry file's directory)",
    )

    parser.add_argument(
        "--absolute",
        action="store_true",
        help="Display absolute canonical paths",
    )

    parser.add_argument(
        "--hide-external",
        action="store_true",
        help="Hide bare package specifiers (e.g. 'lodash') from tree, json and mermaid output",
    )

    # Tree-specific options
    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="Tree output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    # Mermaid-specific options
    parser.add_argument(
        "--orientation",
        choices=["LR", "TD", "TB", "RL", "BT"],
        default="LR",
        help="Mermaid flowchart orientation (default: LR)",
    )

    # Resolution options
    parser.add_argument(
        "--extension",
        default=DEFAULT_EXTENSION,
        help=f"Extension inferred for specifiers without one (default: {DEFAULT_EXTENSION})",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for info, -vv for debug)",
    )

    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by the -v count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    entry = Path(parsed.entry)

    extension = parsed.extension
    if not extension.startswith("."):
        extension = "." + extension

    # Build the graph
    try:
        registry = build_graph(entry, extension=extension)
    except ParseError as e:
        for diagnostic in e.diagnostics:
            print(diagnostic, file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DependencyGraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.absolute:
        base = None
    elif parsed.relative_to:
        base = Path(parsed.relative_to).resolve()
    else:
        base = registry.entry.canonical_path.parent

    include_external = not parsed.hide_external

    # Generate output
    if parsed.format == "tree":
        output = to_ascii(
            registry=registry,
            base=base,
            style=parsed.ascii_style,
            include_external=include_external,
        )
    elif parsed.format == "json":
        output = to_json(
            registry=registry,
            base=base,
            include_external=include_external,
        )
    elif parsed.format == "mermaid":
        output = to_mermaid(
            registry=registry,
            orientation=parsed.orientation,
            base=base,
            include_external=include_external,
        )
    else:  # list (default)
        output = to_listing(registry=registry, base=base)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
