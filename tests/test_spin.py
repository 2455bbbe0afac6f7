"""Tests for the spin pipeline and the spin() entry point.

WHY: spin() is what users call. It must chain the passes in order,
produce exactly the documented output for the reference scenarios, and
apply the knit/report/precious flag combination faithfully: which file
is written, what is returned, which knitter method runs, and whether the
intermediate document survives.

HOW: spin_lines() is checked against full expected documents. spin() is
exercised with text and file input and the RecordingKnitter fixture,
which also captures the conversion context active during knitting.

RULES:
- No test runs R; knitting always goes through RecordingKnitter
- File input lives in tmp_path
"""

from pathlib import Path

import pytest

from spin_converter.context import current_context
from spin_converter.core.errors import MalformedCommentSpan, UnsupportedFormat
from spin_converter.core.ir import DelimiterPair
from spin_converter.formats import get_format
from spin_converter.spin import SpinOptions, spin, spin_lines

SAMPLE_RMD = [
    "# A tiny report",
    "",
    "Some prose before the first chunk.",
    "",
    "```{r setup, echo=FALSE}",
    "x <- 1:10",
    "```",
    "",
    "The mean is",
    "`r mean(x)`",
    "",
    "```{r plot}",
    "plot(x)",
    "```",
    "",
]


class TestReferenceScenarios:
    """Worked examples with exact expected output."""

    def test_hello_bye(self):
        lines = ["#' hello", "#+ opt=1", "1+1", "#' bye"]
        assert spin_lines(lines, "Rmd") == [
            "hello", "", "```{r opt=1}", "1+1", "```", "", "bye",
        ]

    def test_inline_rnw(self):
        document = spin_lines(["((x+1))"], "Rnw", report=False)
        assert document == ["\\Sexpr{x+1}"]

    def test_inline_between_code_is_prose(self):
        document = spin_lines(["a <- 1", "((a))", "b <- 2"], "Rmd")
        assert document == [
            "", "```{r }", "a <- 1", "```", "",
            "`r a`",
            "", "```{r }", "b <- 2", "```", "",
        ]

    def test_sample_script(self, sample_lines):
        assert spin_lines(sample_lines, "Rmd") == SAMPLE_RMD

    def test_sample_script_rnw_is_complete_document(self, sample_lines):
        document = spin_lines(sample_lines, "Rnw")
        assert document[:2] == ["\\documentclass{article}", "\\begin{document}"]
        assert document[-1] == "\\end{document}"
        assert "<<setup, echo=FALSE>>=" in document
        assert "\\Sexpr{mean(x)}" in document

    def test_format_pattern_accepted_directly(self):
        assert spin_lines(["x"], get_format("Rrst")) == ["", ".. {r }", "x", ".. ..", ""]


class TestEdgeCases:
    """Empty, docs-only and code-only inputs are valid."""

    def test_empty_input(self):
        assert spin_lines([], "Rmd") == []

    def test_docs_only_round_trip(self):
        lines = ["#' first", "#' second line", "#'", "#' last"]
        assert spin_lines(lines, "Rmd") == ["first", "second line", "", "last"]

    def test_code_only(self):
        assert spin_lines(["a", "b"], "Rhtml") == [
            "", "<!--begin.rcode ", "a", "b", "end.rcode-->", "",
        ]

    def test_report_false_skips_preamble(self):
        assert spin_lines(["#' hi"], "Rtex", report=False) == ["hi"]

    def test_comment_spans_removed_before_classification(self):
        lines = ["#' a", "/*", "#' gone", "*/", "#' b"]
        assert spin_lines(lines, "Rmd") == ["a", "b"]


class TestOptions:
    """Custom doc, inline and comment patterns."""

    def test_custom_doc_pattern(self):
        options = SpinOptions(doc=r"^##\s*")
        assert spin_lines(["## prose", "x"], "Rmd", options) == [
            "prose", "", "```{r }", "x", "```", "",
        ]

    def test_custom_comment_delimiters(self):
        options = SpinOptions(comment=DelimiterPair(start=r"^# <<<", end=r"^# >>>"))
        assert spin_lines(["#' a", "# <<<", "junk", "# >>>", "#' b"], "Rmd", options) == ["a", "b"]

    def test_custom_inline_pattern(self):
        options = SpinOptions(inline=r"^[{][{](.+)[}][}][ ]*$")
        assert spin_lines(["{{n}}"], "Rmd", options) == ["`r n`"]


class TestErrors:

    def test_unpaired_comment(self):
        with pytest.raises(MalformedCommentSpan):
            spin_lines(["# /*", "# /*", "# */"], "Rmd")

    def test_unknown_format(self):
        with pytest.raises(UnsupportedFormat):
            spin_lines(["x"], "Rpy")

    def test_spin_needs_input(self):
        with pytest.raises(ValueError, match="script path or text"):
            spin(knit=False)


class TestSpinWithoutKnitting:
    """knit=False returns the document text or the written path."""

    def test_text_input_returns_text(self):
        result = spin(text="#' hello\n1+1\n", knit=False)
        assert result == "hello\n\n```{r }\n1+1\n```\n"

    def test_text_as_list_of_lines(self):
        result = spin(text=["#' a", "#' b\n#' c"], knit=False, format="rmd")
        assert result == "a\nb\nc"

    def test_form_feed_in_prose_is_not_a_line_break(self):
        assert spin(text="#' a\x0cb\n", knit=False) == "a\x0cb"

    def test_file_input_writes_document(self, sample_script):
        result = spin(sample_script, knit=False)
        expected_path = sample_script.with_suffix(".Rmd")
        assert result == expected_path
        assert expected_path.read_text(encoding="utf-8") == "\n".join(SAMPLE_RMD) + "\n"

    @pytest.mark.parametrize("fmt", ["Rnw", "Rhtml", "Rtex", "Rrst"])
    def test_file_extension_follows_format(self, sample_script, fmt):
        result = spin(sample_script, knit=False, format=fmt)
        assert result == sample_script.with_suffix("." + fmt)
        assert result.is_file()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            spin(tmp_path / "nope.R", knit=False)


class TestSpinWithKnitting:
    """knit=True hands the document to the knitter per format and report flag."""

    def test_rmd_report_knits_html_and_removes_intermediate(self, sample_script, knitter):
        result = spin(sample_script, knitter=knitter)
        rmd = sample_script.with_suffix(".Rmd")
        assert knitter.methods == ["knit_html"]
        assert knitter.calls[0][1] == rmd
        assert result == sample_script.with_suffix(".html")
        assert not rmd.exists()

    def test_precious_keeps_intermediate(self, sample_script, knitter):
        spin(sample_script, knitter=knitter, precious=True)
        assert sample_script.with_suffix(".Rmd").is_file()

    @pytest.mark.parametrize("fmt", ["Rnw", "Rtex"])
    def test_latex_report_from_file_knits_pdf(self, sample_script, knitter, fmt):
        result = spin(sample_script, format=fmt, knitter=knitter)
        assert knitter.methods == ["knit_pdf"]
        assert result == sample_script.with_suffix(".pdf")

    def test_latex_report_from_text_is_not_knitted(self, knitter):
        assert spin(text="x", format="Rnw", knitter=knitter) is None
        assert knitter.methods == []

    @pytest.mark.parametrize("fmt", ["Rhtml", "Rrst"])
    def test_other_reports_not_knitted_but_cleaned_up(self, sample_script, knitter, fmt):
        assert spin(sample_script, format=fmt, knitter=knitter) is None
        assert knitter.methods == []
        assert not sample_script.with_suffix("." + fmt).exists()

    def test_rmd_report_from_text(self, knitter):
        result = spin(text="#' hi", knitter=knitter)
        assert result == "<html>hi</html>"
        assert knitter.calls[0][1] == "hi"

    def test_no_report_knits_plainly(self, knitter):
        result = spin(text="#' hi", format="Rnw", report=False, knitter=knitter)
        assert knitter.methods == ["knit"]
        assert result == "knitted:hi"

    def test_envir_passed_through(self, knitter):
        spin(text="x", report=False, knitter=knitter, envir="new.env()")
        assert knitter.calls[0][2] == "new.env()"

    def test_context_active_while_knitting(self, sample_script, knitter):
        spin(sample_script, format="Rmd", knitter=knitter)
        context = knitter.calls[0][3]
        assert context.in_progress
        assert context.output_format == "markdown"
        assert context.knitter is knitter
        assert not current_context().in_progress

    def test_knitter_failure_propagates_and_keeps_file(self, sample_script, knitter):
        def boom(source, envir=None):
            raise RuntimeError("pandoc exploded")

        knitter.knit_html = boom
        with pytest.raises(RuntimeError, match="pandoc exploded"):
            spin(sample_script, knitter=knitter)
        assert sample_script.with_suffix(".Rmd").is_file()
        assert not current_context().in_progress
