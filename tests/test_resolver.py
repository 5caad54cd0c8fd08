"""Testy wykrywania i rozwiązywania odwołań (reference_patterns, resolver)."""

from __future__ import annotations

import re
import textwrap

from doc_model.issues import IssueCategory, Severity
from md_parser.parser import parse_text
from md_parser.reference_patterns import ReferencePattern, blank_inline_code, find_references
from validator.heading_index import HeadingIndex
from validator.resolver import ReferenceResolver


def _docs(files: dict[str, str]):
    return [parse_text(tuple(name.split("/")), textwrap.dedent(text)) for name, text in files.items()]


# ---------------------------------------------------------------------------
# Gramatyka odwołań
# ---------------------------------------------------------------------------

def test_numeric_reference_forms():
    refs = find_references(("a.md",), 3, "Details (see 11.2), (cf. 4) and § 7.1.2.")
    assert [r.target_path for r in refs] == [(11, 2), (4,), (7, 1, 2)]
    assert all(r.location.line == 3 for r in refs)


def test_numeric_reference_with_quoted_title():
    (ref,) = find_references(("a.md",), 1, 'See also 11.2 "REST APIs" for more.')
    assert ref.target_path == (11, 2)
    assert ref.target_title == "REST APIs"


def test_title_only_reference_with_curly_quotes():
    (ref,) = find_references(("a.md",), 1, "Please see “Using Async/Await”.")
    assert ref.target_path is None
    assert ref.target_title == "Using Async/Await"


def test_version_numbers_are_not_references():
    assert find_references(("a.md",), 1, "Requires Swift 5.9 and iOS 17.2.") == []
    assert find_references(("a.md",), 1, "oversee 3 teams") == []
    assert find_references(("a.md",), 1, "see 11.2x") == []


def test_inline_code_is_blanked():
    line = "Call `see 4.4` but see 5.1"
    assert blank_inline_code(line) == "Call " + " " * len("`see 4.4`") + " but see 5.1"
    (ref,) = find_references(("a.md",), 1, line)
    assert ref.target_path == (5, 1)


def test_custom_grammar():
    pattern = ReferencePattern(name="chapter", regex=re.compile(r"chapter\s+(?P<path>\d+)", re.I))
    (ref,) = find_references(("a.md",), 1, "Read Chapter 9 first.", [pattern])
    assert ref.target_path == (9,)


# ---------------------------------------------------------------------------
# Rozwiązywanie
# ---------------------------------------------------------------------------

def test_numeric_reference_resolves_to_heading():
    docs = _docs({
        "Networking.md": """\
            # 11 Networking
            ## 11.2 REST APIs and Async/Await
            """,
        "Other.md": """\
            # 12 Other
            Background (see 11.2).
            """,
    })
    resolver = ReferenceResolver(HeadingIndex.from_documents(docs))
    refs, issues = resolver.resolve_document(docs[1])

    (ref,) = refs
    assert issues == []
    assert ref.resolved_target.title == "REST APIs and Async/Await"
    assert ref.resolved_target.doc_path == ("Networking.md",)


def test_title_fallback_when_number_missing():
    docs = _docs({
        "a.md": """\
            # 1 Intro
            ## 1.1 Decoding JSON
            See 9.9 "decoding json" for details.
            """,
    })
    resolver = ReferenceResolver(HeadingIndex.from_documents(docs))
    (ref,), issues = resolver.resolve_document(docs[0])
    assert issues == []
    assert ref.resolved_target.numeric_path == (1, 1)


def test_unresolved_reference_stays_dangling():
    docs = _docs({"a.md": "# 1 Intro\nsee 99.9\n"})
    resolver = ReferenceResolver(HeadingIndex.from_documents(docs))
    (ref,), issues = resolver.resolve_document(docs[0])
    assert ref.resolved_target is None
    assert issues == []


def test_ambiguous_title_resolves_deterministically():
    docs = _docs({
        "z.md": "# 2 Networking Basics\n",
        "a.md": "# 1 Networking Advanced\nsee \"networking\"\n",
    })
    resolver = ReferenceResolver(HeadingIndex.from_documents(docs))
    (ref,), (issue,) = resolver.resolve_document(docs[1])

    # pierwszy w kolejności (ścieżka dokumentu, linia) — a.md przed z.md
    assert ref.resolved_target.doc_path == ("a.md",)
    assert issue.category is IssueCategory.AMBIGUOUS_REFERENCE
    assert issue.severity is Severity.WARNING
    assert len(issue.related) == 2


def test_unique_exact_title_beats_substring_matches():
    docs = _docs({
        "a.md": "# 1 Actors\n## 1.1 Actors and Sendable\nsee \"actors\"\n",
    })
    resolver = ReferenceResolver(HeadingIndex.from_documents(docs))
    (ref,), issues = resolver.resolve_document(docs[0])
    assert issues == []
    assert ref.resolved_target.numeric_path == (1,)


def test_references_in_headings_and_code_are_ignored():
    docs = _docs({
        "a.md": """\
            # 1 Intro (see 5.5)
            ```
            see 6.6
            ```
            """,
    })
    resolver = ReferenceResolver(HeadingIndex.from_documents(docs))
    assert resolver.scan(docs[0]) == []


def test_bare_integer_after_cue_is_prose():
    assert find_references(("a.md",), 1, "You will see 2 warnings.") == []
    assert find_references(("a.md",), 1, "Refer to 3 examples below.") == []


def test_single_number_with_section_sign_or_parentheses():
    refs = find_references(("a.md",), 1, "Covered in § 4 and later (see also 12).")
    assert [r.target_path for r in refs] == [(4,), (12,)]


def test_overlong_number_is_not_a_reference():
    digits = "9" * 5000
    assert find_references(("a.md",), 1, f"see {digits}") == []
    assert find_references(("a.md",), 1, f"see 1.{digits}") == []


def test_custom_grammar_with_non_numeric_path_is_skipped():
    pattern = ReferencePattern(name="loose", regex=re.compile(r"part\s+(?P<path>\S+)", re.I))
    line = f"Read part IV then part {'7' * 20} then part 2.1 too"
    refs = find_references(("a.md",), 1, line, [pattern])
    assert [r.target_path for r in refs] == [(2, 1)]
