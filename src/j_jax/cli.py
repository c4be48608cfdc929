"""J language interpreter: interactive session and transcript checking."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from .evaluator import Session
from .transcript import PROMPT, diff_transcript, rerun, update_file


def repl(session: Session, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
    """Read and evaluate lines until end of input or Ctrl-C."""
    out = sys.stdout if stdout is None else stdout
    while True:
        try:
            if stdin is None:
                line = input(PROMPT)
            else:
                out.write(PROMPT)
                line = stdin.readline()
                if not line:
                    raise EOFError
        except (EOFError, KeyboardInterrupt):
            out.write("\n")
            break
        output = session.eval_text(line.rstrip("\n"))
        if output:
            out.write(output + "\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="j-jax", description=__doc__)
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-D",
        "--check",
        metavar="FILE",
        type=Path,
        help="re-run a transcript and print a diff of changed output",
    )
    group.add_argument(
        "--rerun",
        metavar="FILE",
        type=Path,
        help="re-run a transcript and print it with fresh output",
    )
    group.add_argument(
        "-M",
        "--update",
        metavar="FILE",
        type=Path,
        help="re-run a transcript and rewrite it in place (old text kept as FILE.old)",
    )
    parser.add_argument(
        "--max-width",
        type=int,
        default=None,
        help="cut printed lists longer than this many characters",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="maximum parenthesis nesting depth (at most 256)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    session = Session(max_depth=args.max_depth, max_width=args.max_width)

    if args.check is not None:
        diff = diff_transcript(args.check.read_text(encoding="utf-8"), name=str(args.check), session=session)
        sys.stdout.write(diff)
        return 1 if diff else 0

    if args.rerun is not None:
        sys.stdout.write(rerun(args.rerun.read_text(encoding="utf-8"), session))
        return 0

    if args.update is not None:
        update_file(args.update, session)
        return 0

    repl(session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
