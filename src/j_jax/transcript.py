"""Re-run J session transcripts and report how their output changed.

A transcript is the text of a J session: each input line carries the
three-space J prompt and is followed by its output, if any, flush left.
"""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Final

from .evaluator import Session

PROMPT: Final[str] = "   "


def rerun(text: str, session: Session | None = None) -> str:
    """Evaluate every prompted line again and rebuild the transcript around fresh output."""
    session = Session() if session is None else session
    lines: list[str] = []
    for line in text.splitlines():
        if line.startswith(PROMPT):
            lines.append(line)
            output = session.eval_text(line[len(PROMPT) :])
            if output:
                lines.append(output)
        elif not line.strip():
            lines.append("")
        # Anything else is old output and is replaced by the fresh result.
    return "".join(f"{line}\n" for line in lines)


def diff_transcript(text: str, *, name: str = "transcript", session: Session | None = None) -> str:
    """Unified diff from ``text`` to its rerun; empty when the transcript is up to date."""
    fresh = rerun(text, session)
    return "".join(
        difflib.unified_diff(
            text.splitlines(keepends=True),
            fresh.splitlines(keepends=True),
            fromfile=name,
            tofile=f"{name}.new",
        )
    )


def update_file(path: Path, session: Session | None = None) -> bool:
    """Rewrite a transcript file in place, keeping the old text as ``<name>.old``.

    Returns whether anything changed.
    """
    text = path.read_text(encoding="utf-8")
    fresh = rerun(text, session)
    if fresh == text:
        return False
    path.replace(path.with_name(f"{path.name}.old"))
    path.write_text(fresh, encoding="utf-8")
    return True
