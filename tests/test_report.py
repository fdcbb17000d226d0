"""Tests for folio.report — stderr summaries."""

from __future__ import annotations

from pathlib import Path

from folio.content.validate import CheckResult, Issue
from folio.export.listing import ExportedFile, ExportResult
from folio.report import format_issue, print_build_report, print_check_report, print_error


class TestFormatIssue:
    """format_issue — one line per issue."""

    def test_contains_location_and_code(self) -> None:
        line = format_issue(Issue(Path("a.md"), "empty-body", "document body is empty", line=5))
        assert "a.md:5" in line
        assert "document body is empty" in line
        assert "[empty-body]" in line


class TestPrintCheckReport:
    """print_check_report — summary counts."""

    def test_clean(self, capsys) -> None:
        print_check_report(CheckResult(issues=(), files_checked=1))
        err = capsys.readouterr().err
        assert "1 file checked" in err
        assert "0 errors" in err
        assert "0 warnings" in err

    def test_lists_issues(self, capsys) -> None:
        issues = (
            Issue(Path("a.md"), "missing-date", "missing required field 'date'", line=2),
            Issue(Path("b.md"), "non-canonical", "not canonical", severity="warning", line=1),
        )
        print_check_report(CheckResult(issues=issues, files_checked=2))
        err = capsys.readouterr().err
        assert "1 error" in err
        assert "1 warning" in err
        assert "[missing-date]" in err
        assert "[non-canonical]" in err


class TestPrintBuildReport:
    """print_build_report — export summary."""

    def test_summary(self, capsys) -> None:
        listing = ExportedFile("/index.json", Path("/out/index.json"), "listing", 120, 1.0)
        result = ExportResult(
            files=(listing,),
            total_documents=1,
            drafts_skipped=2,
            duration_ms=3.0,
            output_dir=Path("/out"),
        )
        print_build_report(result)
        err = capsys.readouterr().err
        assert "1 document exported" in err
        assert "2 drafts skipped" in err
        assert "/index.json" in err
        assert "/out" in err


class TestPrintError:
    def test_prefix(self, capsys) -> None:
        print_error("boom")
        assert capsys.readouterr().err.strip().endswith("boom")
