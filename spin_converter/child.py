"""Spinning child scripts from inside a running conversion.

WHY: A large report is often split across scripts. The main script
pulls a child in with spin_child(): when the main script is being
knitted, the child must be spun and knitted into the same document;
when the main script is simply run, the child should simply run too.

HOW: The ConversionContext (explicit, or the current one) decides.
Outside a conversion the child is executed directly by the knitter's
``source``. Inside one, the format is taken from the argument or mapped
from the context's output mode, the child is spun as text without a
report wrapper, and knitted as a child document.

RULES:
- Not in progress → knitter.source(input)
- In progress → format = explicit, else OUTPUT_FORMAT_MAP[output mode]
- A missing or unmapped output mode raises UnsupportedFormat
- The child is spun with knit=False and report=False (no preamble)
- The context's knitter and envir are reused for the child
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from spin_converter.config import OUTPUT_FORMAT_MAP
from spin_converter.context import ConversionContext, current_context
from spin_converter.core.errors import UnsupportedFormat
from spin_converter.knitting import BaseKnitter, default_knitter
from spin_converter.source import read_source_lines
from spin_converter.spin import spin

logger = logging.getLogger(__name__)


def guess_format(context: ConversionContext) -> str:
    """Map the context's knitr output mode to a spin format name.

    Raises:
        UnsupportedFormat: If there is no output mode, or it has no
            corresponding spin format.
    """
    mode = context.output_format
    if mode is None:
        raise UnsupportedFormat(
            "spin_child() must be called in a knitting process "
            "(no output format available)"
        )
    try:
        return OUTPUT_FORMAT_MAP[mode]
    except KeyError:
        raise UnsupportedFormat(
            "The document format '{}' is not supported yet".format(mode)
        ) from None


def spin_child(
    input: Union[str, Path],
    format: Optional[str] = None,
    context: Optional[ConversionContext] = None,
) -> str:
    """Spin and knit a child script, or just run it.

    Args:
        input: Path to the child R script.
        format: Spin format for the child; guessed from the context when
                omitted.
        context: Run-state; defaults to the current context.

    Returns:
        The knitted child text, or the output of running the script.
    """
    context = context or current_context()
    knitter: BaseKnitter = context.knitter or default_knitter()
    path = Path(input)

    if not context.in_progress:
        logger.info("No conversion in progress; running %s directly", path)
        return knitter.source(path, context.envir)

    fmt = format or guess_format(context)
    logger.info("Spinning child %s as %s", path, fmt)
    text = spin(
        text=read_source_lines(path),
        knit=False,
        report=False,
        format=fmt,
    )
    return knitter.knit_child(text, context.envir)
