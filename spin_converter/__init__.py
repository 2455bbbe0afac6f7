"""spin_converter: spin commented R scripts into literate documents.

WHY: Writing a report as a plain R script is convenient (it runs as-is,
diffs cleanly, and works in any editor), but publishing it needs a
literate document where prose and code chunks are marked up for knitr.
This package converts one into the other: roxygen-style ``#'`` comments
become prose, everything else becomes code chunks.

HOW: Five-stage pipeline: strip comment spans, rewrite inline
expressions, classify and segment lines, render blocks with a format's
tokens, finalize the document. The result can be returned, written next
to the script, or handed to knitr.

RULES:
- All formats share one pipeline; a format is only a token table
- The conversion never executes code; knitting is delegated
- Adding a format = one new entry in formats.FORMATS
"""

__version__ = "0.1.0"
