"""Document finalization for standalone LaTeX formats.

WHY: Rnw and Rtex documents only compile when they declare a document
class. A script whose prose never mentions one should still produce a
document that compiles without further edits.

HOW: Search the rendered lines for a ``\\documentclass`` declaration.
If none is found and the format is standalone, wrap the lines in a
minimal article preamble and a closing ``\\end{document}``.

RULES:
- Non-standalone formats are returned unchanged
- Any line may carry the declaration, not only the first
- The input list is never modified
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from spin_converter.config import DEFAULT_POSTAMBLE, DEFAULT_PREAMBLE, DOCUMENT_CLASS_PATTERN
from spin_converter.formats.base import FormatPattern

logger = logging.getLogger(__name__)

_DOCUMENT_CLASS_RE = re.compile(DOCUMENT_CLASS_PATTERN)


def has_document_class(lines: Sequence[str]) -> bool:
    return any(_DOCUMENT_CLASS_RE.search(line) for line in lines)


def finalize_document(lines: Sequence[str], fmt: FormatPattern) -> List[str]:
    """Make a standalone document complete if it lacks a document class."""
    if not fmt.standalone or has_document_class(lines):
        return list(lines)

    logger.debug("No document class found; adding default %s preamble", fmt.name)
    return [*DEFAULT_PREAMBLE, *lines, *DEFAULT_POSTAMBLE]
