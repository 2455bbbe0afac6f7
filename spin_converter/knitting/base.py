"""Abstract knitter: the downstream rendering collaborator.

WHY: spin only re-templates text; compiling the literate document
(evaluating chunks, producing HTML or PDF) belongs to knitr. The
pipeline talks to knitr through this interface so it can be swapped for
a fake in tests or another backend later.

HOW: BaseKnitter is an ABC with one method per knitr entry point spin
uses. Sources are either a Path (a document on disk) or a str (the
document text itself).

RULES:
- Implementations must not catch or translate rendering failures
- ``envir`` is an opaque evaluation-context handle passed through as-is
- Methods given a Path return the Path of the produced artifact;
  methods given text return the produced text
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

KnitSource = Union[Path, str]
"""A document on disk (Path) or the document text itself (str)."""


class BaseKnitter(ABC):
    """Abstract base for knitr backends.

    To add a backend:
    1. Subclass BaseKnitter in a new module under knitting/
    2. Implement every abstract method
    3. Pass an instance to spin() / spin_child()
    """

    @abstractmethod
    def knit(self, source: KnitSource, envir: Optional[str] = None) -> KnitSource:
        """Knit a document into its output markup (e.g. Rmd → md)."""

    @abstractmethod
    def knit_html(self, source: KnitSource, envir: Optional[str] = None) -> KnitSource:
        """Knit an R Markdown document and convert it to HTML."""

    @abstractmethod
    def knit_pdf(self, source: Path, envir: Optional[str] = None) -> Path:
        """Knit a LaTeX-based document and compile it to PDF."""

    @abstractmethod
    def knit_child(self, text: str, envir: Optional[str] = None) -> str:
        """Knit document text as a child of the running document."""

    @abstractmethod
    def source(self, path: Path, envir: Optional[str] = None) -> str:
        """Run a script directly, without any conversion."""
