"""Shared test fixtures for the spin_converter test suite.

WHY: Several test modules need the same sample script and a knitter that
does not require R. Centralizing them here keeps every test on the same
input and the same fake backend.

HOW: SAMPLE_SCRIPT exercises every line kind (documentation, chunk
options, code, comment span, inline expression). RecordingKnitter
implements BaseKnitter by recording each call together with the
conversion context current at call time.

RULES:
- RecordingKnitter never runs R; return values are predictable strings
  or paths derived from the input
- Scripts written to disk use tmp_path for isolation
"""

from pathlib import Path
from typing import Any, List, Optional, Tuple

import pytest

from spin_converter.context import ConversionContext, current_context
from spin_converter.knitting.base import BaseKnitter, KnitSource


SAMPLE_SCRIPT: List[str] = [
    "#' # A tiny report",
    "#'",
    "#' Some prose before the first chunk.",
    "",
    "#+ setup, echo=FALSE",
    "x <- 1:10",
    "",
    "# /*",
    "#' this never shows up",
    "stop('nor does this')",
    "# */",
    "#' The mean is",
    "((mean(x)))",
    "",
    "# ---- plot ----",
    "plot(x)",
]


class RecordingKnitter(BaseKnitter):
    """Fake knitter that records calls instead of running R."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any, Optional[str], ConversionContext]] = []

    def _record(self, method: str, source: Any, envir: Optional[str]) -> None:
        self.calls.append((method, source, envir, current_context()))

    def knit(self, source: KnitSource, envir: Optional[str] = None) -> KnitSource:
        self._record("knit", source, envir)
        if isinstance(source, Path):
            return source.with_suffix(".md")
        return "knitted:" + source

    def knit_html(self, source: KnitSource, envir: Optional[str] = None) -> KnitSource:
        self._record("knit_html", source, envir)
        if isinstance(source, Path):
            return source.with_suffix(".html")
        return "<html>" + source + "</html>"

    def knit_pdf(self, source: Path, envir: Optional[str] = None) -> Path:
        self._record("knit_pdf", source, envir)
        return source.with_suffix(".pdf")

    def knit_child(self, text: str, envir: Optional[str] = None) -> str:
        self._record("knit_child", text, envir)
        return "child:" + text

    def source(self, path: Path, envir: Optional[str] = None) -> str:
        self._record("source", path, envir)
        return "sourced:" + path.name

    @property
    def methods(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def knitter():
    """A fresh RecordingKnitter."""
    return RecordingKnitter()


@pytest.fixture
def sample_lines():
    """The sample script as a list of lines."""
    return list(SAMPLE_SCRIPT)


@pytest.fixture
def sample_script(tmp_path):
    """The sample script written to ``report.R`` in a temp directory."""
    path = tmp_path / "report.R"
    path.write_text("\n".join(SAMPLE_SCRIPT) + "\n", encoding="utf-8")
    return path
