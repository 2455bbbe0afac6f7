"""Inline expression rewriting.

WHY: A short expression whose value belongs in the prose (a count, a
date) is written on its own line as ``((expr))``. It must come out as
the target format's inline-evaluation syntax and sit in the surrounding
prose rather than in a code chunk.

HOW: Every line fully matching the inline pattern is rewritten with the
format's inline template. A parallel list of flags records which lines
were rewritten; the classifier treats flagged lines as documentation.

RULES:
- Only whole-line matches are rewritten
- The template's ``\\1`` receives the captured expression text
- Lines that do not match are returned unchanged
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from spin_converter.formats.base import FormatPattern


def rewrite_inline(
    lines: Sequence[str],
    pattern: str,
    fmt: FormatPattern,
) -> Tuple[List[str], List[bool]]:
    """Rewrite inline-expression lines into the format's inline syntax.

    Args:
        lines: Post-strip line sequence.
        pattern: Regex with one capture group for the expression.
        fmt: Active format; supplies ``inline_template``.

    Returns:
        ``(rewritten_lines, flags)`` where ``flags[i]`` is True for every
        line that was rewritten.
    """
    inline_re = re.compile(pattern)
    rewritten: List[str] = []
    flags: List[bool] = []

    for line in lines:
        if inline_re.search(line):
            rewritten.append(inline_re.sub(fmt.inline_template, line))
            flags.append(True)
        else:
            rewritten.append(line)
            flags.append(False)

    return rewritten, flags
