"""Command-line interface for spin_converter.

WHY: Users need a simple way to spin scripts from the terminal, either
to get the literate document (for editing or version control) or to go
straight to a knitted report. The CLI wires the pattern options, the
format choice, and the knit/report flags into spin().

HOW: argparse accepts one or more scripts and the spin() flags. Each
script is spun in turn. With --stdout the document is printed instead of
written, and nothing is knitted. Status messages go to stderr.

RULES:
- Positional: one or more script paths
- --format is case-insensitive; unknown names and invalid --doc,
  --inline or --comment patterns fail before any work
- --knit/--no-knit and --report/--no-report mirror spin() arguments
- --precious/--no-precious default to spin()'s own rule
- --stdout prints the document(s) to stdout; implies no knitting
- Errors print "Error: ..." to stderr and exit 1; the first failing
  script stops the run
"""

from __future__ import annotations

import argparse
import logging
import re
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

from spin_converter.config import (
    DEFAULT_COMMENT,
    DEFAULT_DOC_PATTERN,
    DEFAULT_FORMAT,
    DEFAULT_INLINE_PATTERN,
    LOG_LEVEL,
)
from spin_converter.core.errors import SpinError
from spin_converter.core.ir import DelimiterPair
from spin_converter.formats import FORMATS, get_format
from spin_converter.source import read_source_lines
from spin_converter.spin import SpinOptions, spin, spin_lines


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so --stdout can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _options_from_args(args: argparse.Namespace) -> SpinOptions:
    return SpinOptions(
        doc=args.doc,
        inline=args.inline,
        comment=DelimiterPair(*args.comment),
    )


def _spin_to_stdout(script: Path, args: argparse.Namespace) -> None:
    lines = read_source_lines(script)
    document = spin_lines(
        lines,
        args.format,
        _options_from_args(args),
        report=args.report,
    )
    print("\n".join(document))


def _spin_file(script: Path, args: argparse.Namespace) -> None:
    _status("Spinning {} ({})...".format(script, get_format(args.format).name))
    result = spin(
        script,
        knit=args.knit,
        report=args.report,
        format=args.format,
        options=_options_from_args(args),
        precious=args.precious,
    )
    if result is None:
        _status("  No report produced for this format")
    elif isinstance(result, Path):
        _status("  Output: {}".format(result))
    else:
        print(result)


def _run(args: argparse.Namespace) -> int:
    """Spin every script named on the command line.

    Returns:
        Process exit code.
    """
    try:
        get_format(args.format)
    except SpinError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    for pattern in (args.doc, args.inline, *args.comment):
        try:
            re.compile(pattern)
        except re.error as e:
            print("Error: invalid pattern {!r}: {}".format(pattern, e), file=sys.stderr)
            return 1

    for name in args.scripts:
        script = Path(name)
        if not script.is_file():
            print("Error: File not found: {}".format(script), file=sys.stderr)
            return 1
        try:
            if args.stdout:
                _spin_to_stdout(script, args)
            else:
                _spin_file(script, args)
        except SpinError as e:
            print("Error: {}: {}".format(script, e), file=sys.stderr)
            return 1
        except subprocess.CalledProcessError as e:
            print("Error: knitting {} failed (exit {})".format(script, e.returncode),
                  file=sys.stderr)
            if e.stderr:
                print(e.stderr, file=sys.stderr)
            return 1
        except FileNotFoundError as e:
            print("Error: {}".format(e), file=sys.stderr)
            return 1
        except UnicodeDecodeError as e:
            print("Error: {} is not valid UTF-8: {}".format(script, e), file=sys.stderr)
            return 1

    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without spinning anything.
    """
    parser = argparse.ArgumentParser(
        prog="spin_converter",
        description="Spin commented R scripts into literate documents "
                    "(R Markdown, Sweave, R HTML, R LaTeX, R reST) and optionally knit them.",
    )

    parser.add_argument(
        "scripts",
        nargs="+",
        help="Path(s) to the R script(s) to spin.",
    )

    parser.add_argument(
        "--format",
        default=DEFAULT_FORMAT,
        help="Output format, case-insensitive. Available: {} (default: %(default)s).".format(
            ", ".join(fmt.name for fmt in FORMATS.values())
        ),
    )

    parser.add_argument(
        "--knit",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Compile the document with knitr after conversion (default: %(default)s).",
    )

    parser.add_argument(
        "--report",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Produce a report: HTML for Rmd, PDF for Rnw/Rtex (default: %(default)s).",
    )

    parser.add_argument(
        "--precious",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Keep the intermediate document after knitting "
             "(default: keep only when not knitting).",
    )

    parser.add_argument(
        "--doc",
        default=DEFAULT_DOC_PATTERN,
        help="Regular expression identifying documentation lines (default: %(default)s).",
    )

    parser.add_argument(
        "--inline",
        default=DEFAULT_INLINE_PATTERN,
        help="Regular expression identifying inline expressions (default: %(default)s).",
    )

    parser.add_argument(
        "--comment",
        nargs=2,
        metavar=("START", "END"),
        default=list(DEFAULT_COMMENT),
        help="Regular expressions for comment start and end delimiters.",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the spun document(s) to stdout instead of writing files.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log each conversion stage.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_run(args))


if __name__ == "__main__":
    main()
