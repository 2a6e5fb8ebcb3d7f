# Copyright (c) 2026 Huecast
# SPDX-License-Identifier: MIT

"""
Command-line layout generator.

Reads type declarations from a JSON schema file and writes a Python module
that installs their ``ArrayCast`` descriptors::

    python -m huecast.derive colors.json -o colors_cast.py

Every diagnostic is printed to stderr. If there are any, nothing is written
and the exit status is 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from huecast.derive.array_cast import derive, render_module
from huecast.derive.schema import load_declarations

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m huecast.derive",
        description="Generate ArrayCast layout descriptors from a schema file.",
    )
    parser.add_argument("schema", type=Path, help="JSON schema file with type declarations")
    parser.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Write the generated module here (default: stdout)",
    )
    parser.add_argument(
        "--internal", action="store_true",
        help="Address the descriptor definition like the library's own types",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        declarations = load_declarations(args.schema)
    except (OSError, ValueError) as e:
        print(f"error: cannot read {args.schema}: {e}", file=sys.stderr)
        return 2

    results = [derive(decl, internal=args.internal) for decl in declarations]
    diagnostics = [d for result in results for d in result.diagnostics]
    for diagnostic in diagnostics:
        print(diagnostic, file=sys.stderr)
    if diagnostics:
        print(
            f"error: {len(diagnostics)} diagnostic(s), no output written",
            file=sys.stderr,
        )
        return 1

    source = render_module(result.implementation for result in results)
    if args.output is None:
        sys.stdout.write(source)
    else:
        args.output.write_text(source, encoding="utf-8")
        logger.info("Wrote %d descriptor(s) to %s", len(results), args.output)
    return 0
