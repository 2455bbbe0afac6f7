"""Target format registry: the complete renderer configuration surface.

WHY: The pipeline, CLI and child delegation all need a single lookup to
turn a user-supplied format name into its token set. A central dict
makes the token table easy to audit and extending it a one-line change.

HOW: FORMATS maps lowercase names to FormatPattern instances.
get_format() does the case-insensitive lookup and raises
UnsupportedFormat for anything else.

RULES:
- Keys are lowercase; lookups are case-insensitive
- Values are frozen FormatPattern instances, safe to share
- Inline templates are ``re`` replacement strings (literal backslashes
  are doubled)
"""

from __future__ import annotations

from typing import Dict

from spin_converter.core.errors import UnsupportedFormat
from spin_converter.formats.base import FormatPattern

FORMATS: Dict[str, FormatPattern] = {
    "rmd": FormatPattern(
        name="Rmd",
        output_mode="markdown",
        extension=".Rmd",
        chunk_open="```{r ",
        chunk_open_close="}",
        chunk_close="```",
        inline_template=r"`r \1`",
    ),
    "rnw": FormatPattern(
        name="Rnw",
        output_mode="latex",
        extension=".Rnw",
        chunk_open="<<",
        chunk_open_close=">>=",
        chunk_close="@",
        inline_template=r"\\Sexpr{\1}",
        standalone=True,
    ),
    "rhtml": FormatPattern(
        name="Rhtml",
        output_mode="html",
        extension=".Rhtml",
        chunk_open="<!--begin.rcode ",
        chunk_open_close="",
        chunk_close="end.rcode-->",
        inline_template=r"<!--rinline \1 -->",
    ),
    "rtex": FormatPattern(
        name="Rtex",
        output_mode="latex",
        extension=".Rtex",
        chunk_open="% begin.rcode ",
        chunk_open_close="",
        chunk_close="% end.rcode",
        inline_template=r"\\rinline{\1}",
        standalone=True,
    ),
    "rrst": FormatPattern(
        name="Rrst",
        output_mode="rst",
        extension=".Rrst",
        chunk_open=".. {r ",
        chunk_open_close="}",
        chunk_close=".. ..",
        inline_template=r":r:`\1`",
    ),
}


def get_format(name: str) -> FormatPattern:
    """Look up a format by name, ignoring case.

    Raises:
        UnsupportedFormat: If ``name`` is not one of the registered formats.
    """
    try:
        return FORMATS[name.lower()]
    except KeyError:
        available = ", ".join(fmt.name for fmt in FORMATS.values())
        raise UnsupportedFormat(
            "Unknown format '{}'. Available: {}".format(name, available)
        ) from None
