"""Core conversion passes and intermediate representation.

WHY: The core package holds the format-agnostic heart of spin: the
passes that turn a commented script into literate-document lines. It
has no file I/O and never calls R.

HOW: ir.py defines the value types, comments.py strips comment spans,
inline.py rewrites inline expressions, segmenter.py classifies and
groups lines, blocks.py renders blocks, finalizer.py completes LaTeX
documents. errors.py holds the exceptions they raise.

RULES:
- Every pass is a pure function of its inputs
- Format specifics come only from FormatPattern tokens
- Passes run strictly in order; none looks back at an earlier stage
"""
