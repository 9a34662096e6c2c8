import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from partialfn.clause import Clause
from partialfn.compiler import find_satisfying
from partialfn.config import Settings
from partialfn.load import load_clauses_from_file
from partialfn.outcome import Matched, Unmatched
from partialfn.render import render_clauses

logger = logging.getLogger(__name__)


def parse_input(text: str) -> Any:
    """Parse a probe input as JSON, falling back to the raw string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def handle_show(files: Sequence[str], out: TextIO) -> int:
    """Render the clause list of each file."""
    failed = False
    for path in files:
        clauses = load_clauses_from_file(path)
        match clauses:
            case str(err):
                print(f"{path}: {err}", file=sys.stderr)
                failed = True
            case _:
                out.write(render_clauses(clauses, title=path))
    return 1 if failed else 0


def _table_row(
    clauses: tuple[Clause, ...], arg: Any, *, show_bindings: bool
) -> tuple[str, str]:
    found = find_satisfying(clauses, arg)
    if found is None:
        return "no", repr(Unmatched(arg))
    index, bindings = found
    text = repr(Matched(clauses[index].apply(bindings)))
    if show_bindings:
        text += f"  [clause {index + 1}, {dict(bindings)}]"
    return "yes", text


def _table_rows(
    clauses: tuple[Clause, ...],
    inputs: Sequence[Any],
    *,
    show_bindings: bool,
) -> list[tuple[str, str, str]]:
    """One search per input. Exceptions from clause code become error rows."""
    rows = []
    for arg in inputs:
        try:
            defined, text = _table_row(clauses, arg, show_bindings=show_bindings)
        except Exception as e:
            logger.debug("Clause code raised on %r", arg, exc_info=True)
            defined, text = "error", f"{type(e).__name__}: {e}"
        rows.append((json.dumps(arg), defined, text))
    return rows


def handle_probe(
    path: str,
    raw_inputs: Sequence[str],
    out: TextIO,
    *,
    show_bindings: bool,
) -> int:
    """Evaluate a file's partial function on each input and print a table.

    Exceptions raised by clause code are shown in the row; the exit code is
    then 1.
    """
    clauses = load_clauses_from_file(path)
    match clauses:
        case str(err):
            print(f"{path}: {err}", file=sys.stderr)
            return 1
        case _:
            pass

    rows = _table_rows(
        clauses,
        [parse_input(t) for t in raw_inputs],
        show_bindings=show_bindings,
    )
    width = max([len("Input")] + [len(r[0]) for r in rows])

    out.write(f"  {'Input':<{width}} │ Defined │ Outcome\n")
    out.write(f"  {'─' * width}─┼─────────┼─{'─' * 20}\n")
    for arg_text, defined, outcome_text in rows:
        out.write(f"  {arg_text:<{width}} │ {defined:<7} │ {outcome_text}\n")
    return 1 if any(r[1] == "error" for r in rows) else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="partialfn",
        description="Inspect and probe partial functions defined in clause files",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: show
    show_parser = subparsers.add_parser(
        "show",
        help="Print the clause list defined by one or more .py files.",
    )
    show_parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="Clause .py file(s) exposing a *_clauses() factory.",
    )

    # Command: probe
    probe_parser = subparsers.add_parser(
        "probe",
        help="Compile a clause file and evaluate it on the given inputs.",
    )
    probe_parser.add_argument("file", metavar="FILE", help="Clause .py file.")
    probe_parser.add_argument(
        "--input",
        "-i",
        dest="inputs",
        action="append",
        required=True,
        metavar="JSON",
        help="Input value as JSON (non-JSON text is used as a string). Repeatable.",
    )
    probe_parser.add_argument(
        "--bindings",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the satisfying clause and its bindings (default: PARTIALFN_SHOW_BINDINGS).",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level_number,
        format="%(levelname)s %(name)s: %(message)s",
    )

    match args.command:
        case "show":
            return handle_show(args.files, sys.stdout)
        case "probe":
            show_bindings = settings.show_bindings if args.bindings is None else args.bindings
            return handle_probe(args.file, args.inputs, sys.stdout, show_bindings=show_bindings)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
