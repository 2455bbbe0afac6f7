"""Default line patterns, knitr output modes, and .env loading.

WHY: A script is only spun correctly if every pass agrees on what marks
prose, an inline expression, a comment span and a chunk header. Those
regexes, the LaTeX preamble, and the knitr output-mode table live here
so the passes themselves carry no hard-coded markup.

HOW: python-dotenv loads the .env file on import. Patterns and tables
are module-level constants. Runtime defaults (format, Rscript binary,
R environment, log level) come from SPIN_* environment variables.

RULES:
- DEFAULT_DOC_PATTERN follows the roxygen convention (``#'``)
- DEFAULT_INLINE_PATTERN matches ``((expr))`` alone on a line
- DEFAULT_COMMENT follows C comment delimiters at line start/end
- OUTPUT_FORMAT_MAP only covers the knitr modes that have a spin format
"""

from __future__ import annotations

import os
from typing import Dict, Tuple

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Default line patterns
# ---------------------------------------------------------------------------

DEFAULT_DOC_PATTERN = r"^#+'[ ]?"
"""Documentation lines: one or more ``#`` then ``'`` and an optional space."""

DEFAULT_INLINE_PATTERN = r"^[(][(](.+)[)][)][ ]*$"
"""Inline expressions: ``((expr))`` on a line of its own."""

DEFAULT_COMMENT: Tuple[str, str] = (r"^[# ]*/[*]", r"^.*[*]/ *$")
"""Comment span delimiters: ``/*`` at line start, ``*/`` at line end."""

OPTION_MARKER_PATTERN = r"^#+(\+|-| ----+| @knitr)"
"""Chunk option lines: ``#+``, ``#-``, ``# ----``, ``# @knitr``."""

DOCUMENT_CLASS_PATTERN = r"^\s*\\documentclass"

DEFAULT_PREAMBLE = ("\\documentclass{article}", "\\begin{document}")
DEFAULT_POSTAMBLE = ("\\end{document}",)

# ---------------------------------------------------------------------------
# Ambient knitr output mode -> spin format
# ---------------------------------------------------------------------------

OUTPUT_FORMAT_MAP: Dict[str, str] = {
    "latex": "Rnw",
    "sweave": "Rnw",
    "listings": "Rnw",
    "html": "Rhtml",
    "markdown": "Rmd",
}

# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

DEFAULT_FORMAT = os.getenv("SPIN_DEFAULT_FORMAT", "Rmd")
RSCRIPT_BINARY = os.getenv("SPIN_RSCRIPT", "Rscript")
R_ENVIR = os.getenv("SPIN_R_ENVIR", "globalenv()")
LOG_LEVEL = os.getenv("SPIN_LOG_LEVEL", "WARNING").upper()
