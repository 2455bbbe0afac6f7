"""Line classification and block segmentation.

WHY: Prose and code render differently, and code renders a whole chunk
at a time. Before rendering, every line needs a kind, and same-kind
neighbours need to be grouped into blocks.

HOW: classify_lines() tags each line DOCUMENTATION when it matches the
documentation pattern or was produced by the inline rewriter, CODE
otherwise. segment_blocks() walks the tagged lines once and starts a
new Block whenever the kind changes.

RULES:
- Inline-rewritten lines are documentation, wherever they appear
- inline_flags, when given, has exactly one flag per line
- Blocks are maximal runs; adjacent blocks never share a kind
- Concatenating all blocks' lines reproduces the input exactly
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from spin_converter.core.ir import Block, ClassifiedLine, LineKind


def classify_lines(
    lines: Sequence[str],
    doc_pattern: str,
    inline_flags: Optional[Sequence[bool]] = None,
) -> List[ClassifiedLine]:
    """Tag every line as documentation or code.

    Args:
        lines: Post-strip, post-inline-rewrite lines.
        doc_pattern: Regex identifying documentation lines.
        inline_flags: Per-line flags from rewrite_inline(), or None.

    Returns:
        One ClassifiedLine per input line, numbered from 1.

    Raises:
        ValueError: If ``inline_flags`` and ``lines`` differ in length.
    """
    doc_re = re.compile(doc_pattern)
    if inline_flags is None:
        inline_flags = [False] * len(lines)
    elif len(inline_flags) != len(lines):
        raise ValueError(
            "Got {} inline flag(s) for {} line(s)".format(len(inline_flags), len(lines))
        )

    classified: List[ClassifiedLine] = []
    for number, (text, inline) in enumerate(zip(lines, inline_flags), start=1):
        is_doc = inline or doc_re.search(text) is not None
        kind = LineKind.DOCUMENTATION if is_doc else LineKind.CODE
        classified.append(ClassifiedLine(number=number, text=text, kind=kind))
    return classified


def segment_blocks(classified: Sequence[ClassifiedLine]) -> List[Block]:
    """Group classified lines into maximal same-kind blocks, in order."""
    blocks: List[Block] = []
    current: Optional[Block] = None

    for line in classified:
        if current is None or line.kind is not current.kind:
            current = Block(kind=line.kind)
            blocks.append(current)
        current.lines.append(line)

    return blocks
