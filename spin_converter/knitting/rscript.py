"""knitr backend that shells out to ``Rscript``.

WHY: knitr lives in R. The simplest dependable bridge is one
``Rscript -e`` call per operation: no embedded interpreter, no state
shared between calls.

HOW: Each method builds a short R expression around the matching knitr
function, runs it with subprocess.run(check=True), and reads the result
from stdout. Paths and file names are embedded as JSON string literals,
which R parses as ordinary strings. Text sources are written to a file
in a private temporary directory for the duration of the call.

RULES:
- Rscript is run in the source document's directory so knitr writes its
  output next to the input
- Each text call gets its own temporary directory (parallel-safe)
- CalledProcessError and FileNotFoundError propagate unchanged
- quiet=TRUE everywhere, so stdout carries only the result
"""

from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

from spin_converter.config import R_ENVIR, RSCRIPT_BINARY
from spin_converter.knitting.base import BaseKnitter, KnitSource

logger = logging.getLogger(__name__)


def _r_string(value: str) -> str:
    """Quote a Python string as an R string literal."""
    return json.dumps(value)


class RscriptKnitter(BaseKnitter):
    """Knitter that runs knitr through the ``Rscript`` executable.

    Args:
        rscript: Path or name of the Rscript binary.
        envir: Default R expression for the evaluation environment, used
               when a call does not pass its own.
    """

    def __init__(self, rscript: str = RSCRIPT_BINARY, envir: str = R_ENVIR) -> None:
        self.rscript = rscript
        self.envir = envir

    # ------------------------------------------------------------------
    # Process plumbing
    # ------------------------------------------------------------------

    def _run(self, expression: str, cwd: Optional[Path] = None) -> str:
        command: List[str] = [self.rscript, "-e", expression]
        logger.info("Running %s in %s", self.rscript, cwd or Path.cwd())
        logger.debug("R expression: %s", expression)
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            check=True,
            capture_output=True,
            text=True,
        )
        return completed.stdout.strip()

    def _knit_path(self, function: str, path: Path, envir: Optional[str]) -> Path:
        """Run ``knitr::<function>`` on a file; return the produced file."""
        path = Path(path).resolve()
        expression = "cat(knitr::{}({}, envir = {}, quiet = TRUE))".format(
            function, _r_string(path.name), envir or self.envir,
        )
        output = self._run(expression, cwd=path.parent)
        return path.parent / output

    def _knit_text(self, function: str, text: str, envir: Optional[str]) -> str:
        """Run ``knitr::<function>`` on document text; return the knitted text."""
        with tempfile.TemporaryDirectory(prefix="spin-") as tmp:
            text_path = Path(tmp) / "input.txt"
            text_path.write_text(text, encoding="utf-8")
            expression = (
                "cat(knitr::{}(text = readLines({}, encoding = \"UTF-8\"), "
                "envir = {}, quiet = TRUE), sep = \"\\n\")"
            ).format(function, _r_string(str(text_path)), envir or self.envir)
            return self._run(expression, cwd=Path(tmp))

    def _knit(self, function: str, source: KnitSource, envir: Optional[str]) -> KnitSource:
        if isinstance(source, Path):
            return self._knit_path(function, source, envir)
        return self._knit_text(function, source, envir)

    # ------------------------------------------------------------------
    # BaseKnitter interface
    # ------------------------------------------------------------------

    def knit(self, source: KnitSource, envir: Optional[str] = None) -> KnitSource:
        return self._knit("knit", source, envir)

    def knit_html(self, source: KnitSource, envir: Optional[str] = None) -> KnitSource:
        return self._knit("knit2html", source, envir)

    def knit_pdf(self, source: Path, envir: Optional[str] = None) -> Path:
        return self._knit_path("knit2pdf", source, envir)

    def knit_child(self, text: str, envir: Optional[str] = None) -> str:
        return self._knit_text("knit_child", text, envir)

    def source(self, path: Path, envir: Optional[str] = None) -> str:
        path = Path(path).resolve()
        expression = "sys.source({}, envir = {})".format(
            _r_string(path.name), envir or self.envir,
        )
        return self._run(expression, cwd=path.parent)
