"""Intermediate representation for the spin pipeline.

WHY: The conversion is a chain of small passes (strip, rewrite, classify,
segment, render). Each pass needs to agree on what a classified line and a
block look like. Keeping those shapes in one module decouples the passes
from each other, the same way the formats are decoupled from the renderer.

HOW: Four small value types:
  DelimiterPair : start/end regexes bounding a comment span
  LineKind      : DOCUMENTATION or CODE
  ClassifiedLine: one input line with its 1-based number and kind
  Block         : a maximal run of same-kind lines

RULES:
- Everything here is created and consumed within one conversion
- Blocks partition the post-strip lines exactly, in input order
- Line numbers are 1-based positions in the post-strip sequence
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class DelimiterPair:
    """Start and end regular expressions identifying a comment span.

    RULES:
    - Both are matched from the start of a line (``re.search`` with the
      pattern's own anchors)
    - The number of start matches must equal the number of end matches
    """

    start: str
    end: str


class LineKind(enum.Enum):
    """What a line becomes in the output document."""

    DOCUMENTATION = "documentation"
    CODE = "code"


@dataclass(frozen=True)
class ClassifiedLine:
    """A single input line tagged with its kind."""

    number: int
    text: str
    kind: LineKind


@dataclass
class Block:
    """A maximal contiguous run of lines sharing the same kind.

    WHY: Documentation and code render differently, and code is rendered a
    chunk at a time (trim, header, wrap), so the renderer works on runs,
    not on single lines.

    RULES:
    - Every member line has the block's kind
    - Two adjacent blocks never share a kind
    """

    kind: LineKind
    lines: List[ClassifiedLine] = field(default_factory=list)

    @property
    def texts(self) -> List[str]:
        """The member lines as plain strings."""
        return [line.text for line in self.lines]

    @property
    def is_documentation(self) -> bool:
        return self.kind is LineKind.DOCUMENTATION
