"""Knitter backends: the downstream rendering collaborators.

WHY: The pipeline hands finished documents to knitr but must not depend
on how knitr is reached. Keeping backends behind one interface keeps the
pipeline testable with a fake and leaves room for other backends.

HOW: base.py defines BaseKnitter and KnitSource; rscript.py implements
it over the Rscript executable. default_knitter() returns the backend
used when callers do not supply one.

RULES:
- Every backend is importable without side effects
- Rendering failures are never caught here
"""

from __future__ import annotations

from spin_converter.knitting.base import BaseKnitter, KnitSource
from spin_converter.knitting.rscript import RscriptKnitter

__all__ = ["BaseKnitter", "KnitSource", "RscriptKnitter", "default_knitter"]


def default_knitter() -> BaseKnitter:
    """Return a knitter configured from the environment."""
    return RscriptKnitter()
