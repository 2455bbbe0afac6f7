"""Format token set shared by every target markup.

WHY: The five literate formats differ only in a handful of literal
tokens: how a chunk opens, what terminates the chunk-open line, how a
chunk closes, and how an inline expression is written. Keeping those
tokens as data lets the block renderer stay format-agnostic.

HOW: FormatPattern is a frozen dataclass. The renderer reads the tokens;
nothing in the core branches on the format name.

RULES:
- inline_template is a ``re`` replacement template with exactly one
  ``\\1`` reference to the captured expression
- extension includes the leading dot and is used for the intermediate file
- standalone formats need a document class to compile on their own
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class FormatPattern:
    """The literal tokens that render chunks and inline expressions.

    Attributes:
        name: Canonical format name, e.g. ``"Rmd"``.
        extension: File extension of the produced document, e.g. ``".Rmd"``.
        chunk_open: Token that starts a chunk-open line.
        chunk_open_close: Token that terminates a chunk-open line (may be empty).
        chunk_close: The line that closes a chunk.
        inline_template: Replacement template for inline expressions.
        output_mode: knitr output mode while this format is being knitted.
        standalone: True for LaTeX formats that need ``\\documentclass``.
    """

    name: str
    extension: str
    chunk_open: str
    chunk_open_close: str
    chunk_close: str
    inline_template: str
    output_mode: str = ""
    standalone: bool = False

    def chunk_header(self, options: str = "") -> str:
        """Build a chunk-open line carrying ``options``."""
        return "{}{}{}".format(self.chunk_open, options, self.chunk_open_close)

    @property
    def chunk_header_re(self) -> "re.Pattern[str]":
        """Regex matching any complete chunk-open line for this format."""
        return re.compile(
            "^{}.*{}$".format(re.escape(self.chunk_open), re.escape(self.chunk_open_close))
        )
