"""Reading scripts and naming the documents spun from them.

WHY: The conversion core works on lists of lines and never touches the
file system. Something has to turn a script path or a blob of text into
lines, and decide where the intermediate document goes.

HOW: read_source_lines() reads a UTF-8 file, split_lines() splits text
(or flattens a list of possibly multi-line strings), output_path_for()
swaps the script's extension for the format's, and write_document()
writes the lines back out.

RULES:
- Only \\n, \\r\\n and \\r end a line; other separators stay in the text
- A trailing newline does not produce an extra empty line
- The output document sits next to the script, same stem
- Documents are written as UTF-8 with a trailing newline
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)


def _split_text(text: str) -> List[str]:
    # Only line endings break lines; form feeds, U+2028 etc. stay in the text.
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


def split_lines(text: Union[str, Iterable[str]]) -> List[str]:
    """Split text into lines.

    Accepts either one string or an iterable of strings, any of which may
    itself contain newlines.
    """
    chunks = [text] if isinstance(text, str) else list(text)
    lines: List[str] = []
    for chunk in chunks:
        lines.extend(_split_text(chunk))
    return lines


def read_source_lines(path: Union[str, Path]) -> List[str]:
    """Read a script file as a list of lines.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    text = Path(path).read_text(encoding="utf-8")
    return _split_text(text) if text else []


def output_path_for(script: Union[str, Path], extension: str) -> Path:
    """Path of the document spun from ``script``, e.g. ``a.R`` → ``a.Rmd``."""
    return Path(script).with_suffix(extension)


def write_document(lines: List[str], path: Path) -> Path:
    """Write document lines to ``path`` and return it."""
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Wrote %s (%d lines)", path, len(lines))
    return path
