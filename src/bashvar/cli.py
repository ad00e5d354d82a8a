"""Command-line front end: ``bashvar [FILE ...]``.

Also runnable as ``python -m bashvar``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import IO

from . import __version__
from .model import Absent, Value, _AbsentType, VInteger, VMapping, VSequence, VText, to_python
from .parser import load


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value | _AbsentType) -> str:
    """Format a single value for compact one-line display."""
    if value is Absent:
        return "Absent"
    if isinstance(value, VText):
        return json.dumps(value.value, ensure_ascii=False)
    if isinstance(value, VInteger):
        return str(value.value)
    if isinstance(value, VSequence):
        return "[" + ", ".join(_fmt_inline(v) for v in value.items) + "]"
    if isinstance(value, VMapping):
        inner = ", ".join(
            f"{json.dumps(k, ensure_ascii=False)}: {_fmt_inline(v)}"
            for k, v in value.entries.items()
        )
        return "{" + inner + "}"
    return repr(value)


def _show_vars(variables: dict[str, Value], dest: IO[str]) -> None:
    """Print one ``NAME : value`` line per variable."""
    if not variables:
        print("  (no variables defined)", file=dest)
        return
    width = max(len(k) for k in variables)
    for name, value in variables.items():
        print(f"  {name:<{width}} : {_fmt_inline(value)}", file=dest)


def _show_json(variables: dict[str, Value], dest: IO[str]) -> None:
    print(json.dumps(to_python(variables), indent=2, ensure_ascii=False), file=dest)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bashvar",
        description="Convert `declare -p` output into structured data.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"bashvar {__version__}")
    parser.add_argument("files", nargs="*", metavar="FILE", help="input files (default: standard input; '-' also reads it)")
    parser.add_argument("--format", "-f", choices=("json", "inspect"), default="json", help="output format (default: json)")
    parser.add_argument("--max-index", type=int, default=None, help="skip indexed-array elements above this subscript (default: no limit)")
    parser.add_argument("--verbose", "-v", action="store_true", help="log skipped lines and values to stderr")
    return parser


def _read_sources(files: list[str], max_index: int | None) -> dict[str, Value]:
    """Parse every source in order; later declarations win."""
    variables: dict[str, Value] = {}
    for path in files or ["-"]:
        if path == "-":
            # raw bytes; parse() decodes them with replacement characters
            stdin = getattr(sys.stdin, "buffer", sys.stdin)
            variables.update(load(stdin, max_index=max_index))
            continue
        with open(path, "rb") as fh:
            variables.update(load(fh, max_index=max_index))
    return variables


def main(argv: list[str] | None = None) -> int:
    """``bashvar`` console script."""
    args = create_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        variables = _read_sources(args.files, args.max_index)
    except OSError as exc:
        print(f"Error reading '{exc.filename}': {exc.strerror}", file=sys.stderr)
        return 1

    if args.format == "inspect":
        _show_vars(variables, sys.stdout)
    else:
        _show_json(variables, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
