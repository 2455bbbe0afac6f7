"""Comment span removal.

WHY: Script authors sometimes want lines that neither run as code nor
appear as prose (scratch work, notes to self). Wrapping them in a
``/* ... */`` pair removes them before any other pass sees them.

HOW: Collect every line index matching the start pattern and every line
index matching the end pattern. Pair them positionally, take the union
of the inclusive index ranges, and drop those indices.

RULES:
- Start and end match counts must be equal, else MalformedCommentSpan
- Pairing is positional: the i-th start pairs with the i-th end
- No nesting is inferred; overlapping ranges are removed once
- A line matching both patterns is both a start and an end
- Surviving lines keep their relative order
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence, Set

from spin_converter.core.errors import MalformedCommentSpan
from spin_converter.core.ir import DelimiterPair

logger = logging.getLogger(__name__)


def strip_comments(lines: Sequence[str], delimiters: DelimiterPair) -> List[str]:
    """Remove every line inside a start/end delimiter pair.

    Args:
        lines: The full input line sequence.
        delimiters: Start and end regular expressions.

    Returns:
        The input lines with all comment spans excised.

    Raises:
        MalformedCommentSpan: If start and end match counts differ.
    """
    start_re = re.compile(delimiters.start)
    end_re = re.compile(delimiters.end)

    starts = [i for i, line in enumerate(lines) if start_re.search(line)]
    ends = [i for i, line in enumerate(lines) if end_re.search(line)]
    if len(starts) != len(ends):
        raise MalformedCommentSpan(len(starts), len(ends))

    if not starts:
        return list(lines)

    removed: Set[int] = set()
    for start, end in zip(starts, ends):
        step = 1 if end >= start else -1
        removed.update(range(start, end + step, step))

    logger.debug("Removing %d comment line(s) in %d span(s)", len(removed), len(starts))
    return [line for i, line in enumerate(lines) if i not in removed]
