"""Testy całego potoku walidacji (validator.pipeline)."""

from __future__ import annotations

import pytest

from doc_model.issues import IssueCategory, Severity
from md_parser.loader import collect_sources
from validator import (
    EXIT_ERRORS,
    EXIT_OK,
    RunAborted,
    ValidatorConfig,
    analyze_corpus,
    validate_corpus,
)
from validator.report import render_text

from conftest import CLEAN_CORPUS, make_sources


def test_clean_corpus_has_no_issues():
    report = validate_corpus(make_sources(CLEAN_CORPUS))
    assert report.issues == []
    assert report.is_valid
    assert report.exit_status == EXIT_OK
    assert report.documents == 2
    assert report.references == 3


def test_cross_document_reference_resolves():
    analysis = analyze_corpus(make_sources(CLEAN_CORPUS))
    (ref,) = [r for r in analysis.references if r.target_path == (11, 2)]
    assert ref.location.path == ("Concurrency.md",)
    assert ref.resolved_target.title == "REST APIs and Async/Await"
    assert ref.resolved_target.doc_path == ("Networking.md",)


def test_duplicate_id_across_documents():
    report = validate_corpus(make_sources({
        "A.md": "# 12 Part A\n\n## 12.7 Tasks\n",
        "B.md": "# 13 Part B\n## 12.7 Tasks again\n",
    }))
    dups = [i for i in report.issues if i.category is IssueCategory.DUPLICATE_HEADING_ID]
    (dup,) = dups
    assert dup.location.path == ("B.md",)
    assert {str(loc) for loc in dup.related} == {"A.md:3", "B.md:2"}
    assert report.exit_status == EXIT_ERRORS


def test_missing_code_language_is_only_a_warning():
    report = validate_corpus(make_sources({
        "a.md": "# 1 Intro\n\n```\nlet x = 1\n```\n",
    }))
    (issue,) = report.issues
    assert issue.category is IssueCategory.MISSING_CODE_LANGUAGE
    assert issue.severity is Severity.WARNING
    assert report.exit_status == EXIT_OK


def test_dangling_reference_fails_run():
    report = validate_corpus(make_sources({
        "a.md": "# 1 Intro\n\nFor more, see 99.9.\n",
    }))
    (issue,) = report.issues
    assert issue.category is IssueCategory.DANGLING_REFERENCE
    assert issue.location.line == 3
    assert report.exit_status == EXIT_ERRORS


def test_unreadable_file_above_threshold_aborts():
    sources = make_sources({
        "a.md": "# 1 Intro\n",
        "bin.md": b"\x00\x01\x02binary",
    })
    with pytest.raises(RunAborted) as exc:
        validate_corpus(sources, ValidatorConfig(max_unreadable_files=0))
    assert exc.value.threshold == 0
    (issue,) = exc.value.unreadable
    assert issue.location.path == ("bin.md",)
    assert "too many unreadable files" in str(exc.value)


def test_unreadable_file_under_threshold_is_reported():
    report = validate_corpus(make_sources({
        "a.md": "# 1 Intro\n\n(see 1)\n",
        "bad.md": b"\xff\xfe\xfd",
    }))
    (issue,) = report.issues
    assert issue.category is IssueCategory.UNREADABLE_FILE
    assert issue.location.path == ("bad.md",)
    assert report.documents == 1
    assert report.exit_status == EXIT_ERRORS


def test_report_is_deterministic():
    files = {
        "z.md": "# 2 Z\n## 2.2 B\n## 2.1 A\n```\nx\n```\n(see 9)\n",
        "a.md": "# 2 Dup\n## 5.1 Orphan\nsee \"nothing here\"\n",
        "m.md": "[gone](missing.md)\n",
    }
    first = render_text(validate_corpus(make_sources(files), ValidatorConfig(max_workers=1)))
    second = render_text(validate_corpus(make_sources(dict(reversed(files.items())))))
    assert first == second


def test_every_reference_is_resolved_or_dangling():
    files = dict(CLEAN_CORPUS)
    files["Extra.md"] = "# 20 Extra\nsee 11.2, (see 404) and see \"Actors\"\n"
    analysis = analyze_corpus(make_sources(files))
    dangling = {
        i.location for i in analysis.issues
        if i.category is IssueCategory.DANGLING_REFERENCE
    }
    unresolved = {r.location for r in analysis.references if r.resolved_target is None}
    assert unresolved == dangling
    assert sum(r.resolved_target is None for r in analysis.references) == 1


def test_corpus_from_disk(write_corpus):
    root = write_corpus(CLEAN_CORPUS)
    report = validate_corpus(collect_sources([root]))
    assert report.documents == 2
    assert report.is_valid


def test_strict_numbering_flags_arity():
    sources = make_sources({"a.md": "## 1 Intro\n"})
    assert validate_corpus(sources).issues == []
    strict = validate_corpus(sources, ValidatorConfig(strict_numbering=True))
    (issue,) = strict.issues
    assert issue.category is IssueCategory.NON_MONOTONIC_NUMBERING
    assert issue.severity is Severity.ERROR


def test_overlong_numerals_do_not_abort_run():
    digits = "9" * 5000
    report = validate_corpus(make_sources({
        "a.md": f"# 1 Intro\n\n# {digits} Huge\n\nsee {digits} and see 1.{digits}\n",
    }))
    assert report.documents == 1
    assert report.references == 0
    assert report.issues == []
