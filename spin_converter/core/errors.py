"""Exceptions raised by the spin pipeline.

WHY: Callers (CLI, child delegation, library users) need to tell a broken
input script apart from a bad format name and from a failure in the
downstream knitter. Only the first two originate here; knitter failures
propagate unchanged.

RULES:
- Both concrete errors subclass ValueError, so callers that treat
  configuration problems as ValueError keep working
- Both are fatal for the conversion; there is no partial output
"""

from __future__ import annotations


class SpinError(Exception):
    """Base class for errors raised by the conversion itself."""


class MalformedCommentSpan(SpinError, ValueError):
    """Comment start and end delimiters do not come in pairs."""

    def __init__(self, starts: int, ends: int) -> None:
        self.starts = starts
        self.ends = ends
        super().__init__(
            "Comments must be put in pairs of start and end delimiters "
            "(found {} start and {} end)".format(starts, ends)
        )


class UnsupportedFormat(SpinError, ValueError):
    """The requested (or ambient) format cannot be mapped to a known format."""
