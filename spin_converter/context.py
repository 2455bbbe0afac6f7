"""Conversion run-state: is a knit in progress, and in which output mode?

WHY: spin_child() behaves differently inside and outside a running
conversion. Instead of a process-wide flag, the run-state travels in an
explicit ConversionContext. Callers can pass it down directly; when they
do not, the context of the current task is used, so nested and parallel
conversions each see their own state.

HOW: ConversionContext is a frozen dataclass. A ContextVar holds the
context of the current thread/task. conversion_scope() installs a
context for the duration of a ``with`` block and restores the previous
one afterwards, even on error.

RULES:
- The default context is "not in progress", no output mode, no knitter
- Scopes nest; leaving a scope restores exactly the outer context
- ContextVar values are per-thread and per-asyncio-task
"""

from __future__ import annotations

import contextlib
import contextvars
from dataclasses import dataclass
from typing import Iterator, Optional

from spin_converter.knitting.base import BaseKnitter


@dataclass(frozen=True)
class ConversionContext:
    """State of the conversion a piece of code is running under.

    Attributes:
        in_progress: True while a spun document is being knitted.
        output_format: knitr output mode of that document
                       (``"markdown"``, ``"latex"``, ``"html"``, ...).
        knitter: The knitter doing the work, reused for child documents.
        envir: Evaluation environment handle passed to the knitter.
    """

    in_progress: bool = False
    output_format: Optional[str] = None
    knitter: Optional[BaseKnitter] = None
    envir: Optional[str] = None


_CURRENT: contextvars.ContextVar[ConversionContext] = contextvars.ContextVar(
    "spin_conversion_context", default=ConversionContext()
)


def current_context() -> ConversionContext:
    """Return the context of the current thread or task."""
    return _CURRENT.get()


@contextlib.contextmanager
def conversion_scope(context: ConversionContext) -> Iterator[ConversionContext]:
    """Make ``context`` current for the body of a ``with`` block."""
    token = _CURRENT.set(context)
    try:
        yield context
    finally:
        _CURRENT.reset(token)
