"""Testy generatora raportu (validator.report)."""

from __future__ import annotations

import json

from doc_model.documents import SourceLocation
from doc_model.issues import IssueCategory, error, unreadable_file, warning
from validator.report import (
    build_report,
    category_summary,
    describe_category,
    render_json,
    render_text,
)
from validator.types import EXIT_ERRORS, EXIT_OK


def _issues():
    return [
        warning(IssueCategory.ORPHANED_HEADING, SourceLocation(("b.md",), 4), "orphan"),
        error(IssueCategory.DANGLING_REFERENCE, SourceLocation(("a.md",), 9), "dangling"),
        warning(IssueCategory.MISSING_CODE_LANGUAGE, SourceLocation(("a.md",), 9), "bare"),
        error(IssueCategory.DUPLICATE_HEADING_ID, SourceLocation(("a.md",), 2), "dup",
              related=(SourceLocation(("b.md",), 1), SourceLocation(("a.md",), 2))),
    ]


def test_issues_sorted_by_path_line_category():
    report = build_report(_issues())
    keys = [(i.location.path, i.location.line, i.category.value) for i in report.issues]
    assert keys == [
        (("a.md",), 2, "DuplicateHeadingID"),
        (("a.md",), 9, "DanglingReference"),
        (("a.md",), 9, "MissingCodeLanguage"),
        (("b.md",), 4, "OrphanedHeading"),
    ]


def test_ordering_independent_of_input_order():
    assert build_report(_issues()).issues == build_report(list(reversed(_issues()))).issues


def test_warnings_only_report_is_valid():
    report = build_report([
        warning(IssueCategory.MISSING_CODE_LANGUAGE, SourceLocation(("a.md",), 1), "bare"),
    ])
    assert report.is_valid
    assert report.exit_status == EXIT_OK


def test_errors_make_report_invalid():
    report = build_report(_issues())
    assert not report.is_valid
    assert report.exit_status == EXIT_ERRORS
    assert len(report.errors) == 2
    assert len(report.warnings) == 2


def test_render_json():
    report = build_report(_issues(), documents=2, references=5)
    data = json.loads(render_json(report))
    assert data["is_valid"] is False
    assert data["exit_status"] == 1
    assert data["documents"] == 2
    assert data["issues"][0] == {
        "path": "a.md",
        "line": 2,
        "severity": "error",
        "category": "DuplicateHeadingID",
        "message": "dup",
    }


def test_render_text_groups_by_document():
    text = render_text(build_report(_issues(), documents=2))
    lines = text.splitlines()
    assert lines[0] == "a.md"
    assert "b.md" in lines
    assert "↳ b.md:1" in text
    # lokalizacja samej diagnostyki nie jest powtarzana jako powiązana
    assert "↳ a.md:2" not in text
    assert lines[-1] == "FAILED"


def test_render_text_clean_report():
    text = render_text(build_report([], documents=3))
    assert text.endswith("OK\n")
    assert "w 3 dokumencie(-ach)" in text


def test_category_summary_and_descriptions():
    rows = category_summary(build_report(_issues()))
    assert rows[0] == (IssueCategory.DUPLICATE_HEADING_ID, 1, 0)
    assert {c for c, _, _ in rows} == {
        IssueCategory.DUPLICATE_HEADING_ID,
        IssueCategory.ORPHANED_HEADING,
        IssueCategory.DANGLING_REFERENCE,
        IssueCategory.MISSING_CODE_LANGUAGE,
    }
    for category in IssueCategory:
        assert describe_category(category)


def test_unreadable_file_issue_covers_whole_file():
    issue = unreadable_file(("bin.md",), "binary content")
    assert issue.location.line == 0
    assert issue.is_error
