"""The spin pipeline: commented script in, literate document out.

WHY: This module is the one place that knows the order of the passes
and what to do with the result: return it, write it next to the
script, or hand it to knitr. Everything else is either a pure pass
(core/) or a collaborator (source.py, knitting/).

HOW: spin_lines() is the pure conversion:
  strip comments → rewrite inline expressions → classify + segment →
  render blocks → finalize (when ``report`` is set)
spin() wraps it with input acquisition, the intermediate file, and the
knit/report flag combination.

RULES:
- Input is ``text`` when given, else the lines of the file ``hair``
- File input always writes ``<stem><format extension>`` next to the script
- knit=False returns that path (file input) or the document text
- knit=True, report=True: Rmd → knit_html; Rnw/Rtex from a file → knit_pdf;
  anything else is not knitted and the result is None
- knit=True, report=False: knit
- The intermediate file is removed after knitting unless ``precious``;
  precious defaults to ``not knit and text is None``
- Knitter failures propagate unchanged and leave the intermediate file
- While knitting, a ConversionContext with in_progress=True is current
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from spin_converter.config import (
    DEFAULT_COMMENT,
    DEFAULT_DOC_PATTERN,
    DEFAULT_FORMAT,
    DEFAULT_INLINE_PATTERN,
)
from spin_converter.context import ConversionContext, conversion_scope
from spin_converter.core.blocks import render_blocks
from spin_converter.core.comments import strip_comments
from spin_converter.core.finalizer import finalize_document
from spin_converter.core.inline import rewrite_inline
from spin_converter.core.ir import DelimiterPair
from spin_converter.core.segmenter import classify_lines, segment_blocks
from spin_converter.formats import get_format
from spin_converter.formats.base import FormatPattern
from spin_converter.knitting import BaseKnitter, KnitSource, default_knitter
from spin_converter.source import (
    output_path_for,
    read_source_lines,
    split_lines,
    write_document,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpinOptions:
    """Line patterns that drive the conversion.

    Attributes:
        doc: Regex identifying documentation lines; the match is stripped.
        inline: Regex for inline-expression lines, one capture group.
        comment: Start/end delimiters of comment spans.
    """

    doc: str = DEFAULT_DOC_PATTERN
    inline: str = DEFAULT_INLINE_PATTERN
    comment: DelimiterPair = field(default_factory=lambda: DelimiterPair(*DEFAULT_COMMENT))


def _resolve_format(fmt: Union[str, FormatPattern]) -> FormatPattern:
    return fmt if isinstance(fmt, FormatPattern) else get_format(fmt)


def spin_lines(
    lines: Sequence[str],
    fmt: Union[str, FormatPattern] = DEFAULT_FORMAT,
    options: Optional[SpinOptions] = None,
    report: bool = True,
) -> List[str]:
    """Convert script lines into literate-document lines.

    Args:
        lines: The script, one string per line.
        fmt: Target format name (case-insensitive) or FormatPattern.
        options: Line patterns; defaults to roxygen-style documentation,
                 ``((expr))`` inline expressions and ``/* */`` comments.
        report: When True, standalone LaTeX formats get a default
                preamble if they declare no document class.

    Returns:
        The rendered document lines.

    Raises:
        MalformedCommentSpan: If comment delimiters are unpaired.
        UnsupportedFormat: If ``fmt`` names an unknown format.
    """
    pattern = _resolve_format(fmt)
    options = options or SpinOptions()

    stripped = strip_comments(lines, options.comment)
    rewritten, inline_flags = rewrite_inline(stripped, options.inline, pattern)
    blocks = segment_blocks(classify_lines(rewritten, options.doc, inline_flags))
    logger.debug(
        "Spinning %d line(s) into %d block(s) as %s",
        len(rewritten), len(blocks), pattern.name,
    )

    document = render_blocks(blocks, pattern, options.doc)
    if report:
        document = finalize_document(document, pattern)
    return document


def spin(
    hair: Optional[Union[str, Path]] = None,
    *,
    text: Optional[Union[str, Iterable[str]]] = None,
    knit: bool = True,
    report: bool = True,
    format: Union[str, FormatPattern] = DEFAULT_FORMAT,
    options: Optional[SpinOptions] = None,
    precious: Optional[bool] = None,
    knitter: Optional[BaseKnitter] = None,
    envir: Optional[str] = None,
) -> Optional[KnitSource]:
    """Spin an R script into a literate document, and optionally knit it.

    Args:
        hair: Path to the R script. Ignored when ``text`` is given.
        text: The script itself, as one string or an iterable of lines.
        knit: Whether to compile the document after conversion.
        report: Whether to produce a report (HTML for Rmd, PDF for
                Rnw/Rtex) rather than plain ``knit`` output.
        format: Output format: Rmd, Rnw, Rhtml, Rtex or Rrst.
        options: Line patterns; see SpinOptions.
        precious: Keep the intermediate document after knitting.
        knitter: Backend for knitting; defaults to RscriptKnitter.
        envir: Evaluation environment handle passed to the knitter.

    Returns:
        With knit=False: the written document path (file input) or the
        document text (text input). With knit=True: whatever the knitter
        returned, or None when nothing was knitted.

    Raises:
        ValueError: If neither ``hair`` nor ``text`` is given.
        MalformedCommentSpan: If comment delimiters are unpaired.
        UnsupportedFormat: If ``format`` is unknown.
    """
    pattern = _resolve_format(format)

    if text is not None:
        lines = split_lines(text)
    elif hair is not None:
        lines = read_source_lines(hair)
    else:
        raise ValueError("spin() needs either a script path or text")

    if precious is None:
        precious = not knit and text is None

    document = spin_lines(lines, pattern, options, report=report)

    outsrc: Optional[Path] = None
    if text is None:
        outsrc = write_document(document, output_path_for(hair, pattern.extension))

    if not knit:
        return outsrc if outsrc is not None else "\n".join(document)

    knitter = knitter or default_knitter()
    source: KnitSource = outsrc if outsrc is not None else "\n".join(document)
    context = ConversionContext(
        in_progress=True,
        output_format=pattern.output_mode,
        knitter=knitter,
        envir=envir,
    )

    result: Optional[KnitSource] = None
    with conversion_scope(context):
        if not report:
            result = knitter.knit(source, envir)
        elif pattern.name == "Rmd":
            result = knitter.knit_html(source, envir)
        elif outsrc is not None and pattern.standalone:
            result = knitter.knit_pdf(outsrc, envir)
        else:
            logger.info("No report step for %s; skipping knit", pattern.name)

    if not precious and outsrc is not None:
        outsrc.unlink()
        logger.info("Removed intermediate document %s", outsrc)

    return result
