"""Block rendering: documentation and code blocks to output lines.

WHY: This is where the script turns into a literate document. Prose
loses its comment marker; code is trimmed, given a chunk header, and
wrapped in the target format's chunk tokens.

HOW: render_block() dispatches on the block kind. Documentation lines
have the first documentation-marker match removed. Code blocks go
through trim → option-header rewrite → default-header synthesis → wrap.
render_blocks() concatenates the output of every block in order.

RULES:
- Code blocks that are empty after trimming produce no output at all
- Every option-marker line becomes ``chunk_open + options + chunk_open_close``
- Option text is the line minus its marker and any trailing dash run
- A code block whose first line is not a chunk header gets a default one
- Code output is ``"", header, code..., chunk_close, ""``
- Nothing here branches on the format name; only FormatPattern tokens
"""

from __future__ import annotations

import re
from typing import List, Sequence

from spin_converter.config import OPTION_MARKER_PATTERN
from spin_converter.core.ir import Block
from spin_converter.formats.base import FormatPattern

# Marker plus following whitespace, or a trailing run of dashes
_OPTION_STRIP_RE = re.compile(OPTION_MARKER_PATTERN + r"\s*|\s*-*\s*$")
_OPTION_MARKER_RE = re.compile(OPTION_MARKER_PATTERN)


def strip_blank_edges(lines: Sequence[str]) -> List[str]:
    """Drop leading and trailing whitespace-only lines."""
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return list(lines[start:end])


def chunk_options(line: str) -> str:
    """Extract the option text from a chunk option line.

    ``"#+ fig-1, echo=FALSE"`` → ``"fig-1, echo=FALSE"``;
    ``"# ---- setup ----"`` → ``"setup"``.
    """
    return _OPTION_STRIP_RE.sub("", line)


def render_documentation(lines: Sequence[str], doc_pattern: str) -> List[str]:
    """Remove the leading documentation marker from each line."""
    doc_re = re.compile(doc_pattern)
    return [doc_re.sub("", line, count=1) for line in lines]


def render_code(lines: Sequence[str], fmt: FormatPattern) -> List[str]:
    """Wrap a run of code lines as a chunk of the given format.

    Returns an empty list when the block holds nothing but blank lines.
    """
    code = strip_blank_edges(lines)
    if not code:
        return []

    code = [
        fmt.chunk_header(chunk_options(line)) if _OPTION_MARKER_RE.search(line) else line
        for line in code
    ]

    if not fmt.chunk_header_re.search(code[0]):
        code.insert(0, fmt.chunk_header())

    return ["", *code, fmt.chunk_close, ""]


def render_block(block: Block, fmt: FormatPattern, doc_pattern: str) -> List[str]:
    """Render one block to output lines."""
    if block.is_documentation:
        return render_documentation(block.texts, doc_pattern)
    return render_code(block.texts, fmt)


def render_blocks(
    blocks: Sequence[Block],
    fmt: FormatPattern,
    doc_pattern: str,
) -> List[str]:
    """Render every block and concatenate the output, in block order."""
    output: List[str] = []
    for block in blocks:
        output.extend(render_block(block, fmt, doc_pattern))
    return output
