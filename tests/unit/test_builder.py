"""Tests for outline tree assembly."""

from orgtree.core.lexer.classifier import classify_lines, split_lines
from orgtree.core.settings.collector import collect_settings
from orgtree.core.tree.builder import OutlineResult, build_outline
from orgtree.errors import DiagnosticKind
from orgtree.models.node import Headline


def _build(text: str) -> OutlineResult:
    lines = split_lines(text)
    settings, _ = collect_settings(classify_lines(lines))
    return build_outline(classify_lines(lines), settings)


def _assert_levels_increase(headline: Headline) -> None:
    for child in headline.children:
        assert child.level > headline.level
        _assert_levels_increase(child)


def test_nesting_follows_levels() -> None:
    result = _build("* A\n** B\n*** C\n** D\n* E\n")
    a, e = result.headlines
    assert [h.title for h in a.children] == ["B", "D"]
    assert a.children[0].children[0].title == "C"
    assert e.children == ()


def test_skipped_levels_attach_to_nearest_shallower_headline() -> None:
    result = _build("* A\n*** C\n** B\n")
    (a,) = result.headlines
    assert [h.title for h in a.children] == ["C", "B"]
    for root in result.headlines:
        _assert_levels_increase(root)


def test_deeper_first_headline_is_a_root() -> None:
    result = _build("** Deep\n* Shallow\n")
    assert [h.title for h in result.headlines] == ["Deep", "Shallow"]


def test_body_excludes_nested_headlines() -> None:
    result = _build("* A\nbody of a\n** B\nbody of b\nmore b\n* C\n")
    a, _c = result.headlines
    assert a.body == "body of a"
    assert a.children[0].body == "body of b\nmore b"


def test_preamble_collects_lines_before_first_headline() -> None:
    result = _build("#+TITLE: x\nintro\n\n* A\n")
    assert result.preamble == "#+TITLE: x\nintro\n"


def test_planning_directly_after_headline_attaches() -> None:
    result = _build("* A\nSCHEDULED: <2025-08-26 Tue>\nbody\n")
    (a,) = result.headlines
    assert a.planning is not None
    assert a.planning.scheduled is not None
    assert a.body == "body"
    assert result.diagnostics == ()


def test_planning_after_blank_line_is_orphan() -> None:
    result = _build("* A\n\nSCHEDULED: <2025-08-26 Tue>\n")
    (a,) = result.headlines
    assert a.planning is None
    assert a.body == "\nSCHEDULED: <2025-08-26 Tue>"
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.ORPHAN_PLANNING_LINE]
    assert result.diagnostics[0].line_number == 3


def test_second_planning_line_is_orphan() -> None:
    result = _build("* A\nSCHEDULED: <2025-08-26 Tue>\nDEADLINE: <2025-08-29 Fri>\n")
    (a,) = result.headlines
    assert a.planning is not None and a.planning.deadline is None
    assert a.body == "DEADLINE: <2025-08-29 Fri>"
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.ORPHAN_PLANNING_LINE]


def test_planning_in_preamble_is_orphan() -> None:
    result = _build("DEADLINE: <2025-08-29 Fri>\n* A\n")
    assert result.preamble == "DEADLINE: <2025-08-29 Fri>"
    assert result.diagnostics[0].kind is DiagnosticKind.ORPHAN_PLANNING_LINE


def test_malformed_planning_line_stays_in_body() -> None:
    result = _build("* A\nSCHEDULED: <2025-99-99 Xyz>\n")
    (a,) = result.headlines
    assert a.planning is None
    assert a.body == "SCHEDULED: <2025-99-99 Xyz>"
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.MALFORMED_TIMESTAMP]


def test_line_numbers_are_recorded() -> None:
    result = _build("intro\n* A\n** B\n")
    (a,) = result.headlines
    assert a.line_number == 2
    assert a.children[0].line_number == 3


def test_property_drawer_after_headline() -> None:
    result = _build("* A\n:PROPERTIES:\n:ID: 1234\n:Owner:  Sam \n:EMPTY:\n:END:\nbody\n")
    (a,) = result.headlines
    assert a.properties == (("ID", "1234"), ("Owner", "Sam"), ("EMPTY", ""))
    assert a.body == "body"
    assert result.diagnostics == ()


def test_property_drawer_after_planning_line() -> None:
    result = _build("* A\nDEADLINE: <2025-08-29 Fri>\n  :PROPERTIES:\n  :ID: x\n  :END:\n")
    (a,) = result.headlines
    assert a.planning is not None
    assert a.properties == (("ID", "x"),)
    assert a.body == ""


def test_drawer_not_directly_below_headline_is_body_text() -> None:
    result = _build("* A\ntext\n:PROPERTIES:\n:ID: x\n:END:\n")
    (a,) = result.headlines
    assert a.properties == ()
    assert a.body == "text\n:PROPERTIES:\n:ID: x\n:END:"


def test_non_property_lines_in_drawer_are_dropped() -> None:
    result = _build("* A\n:PROPERTIES:\n:ID: x\nstray text\n\n:END:\n")
    (a,) = result.headlines
    assert a.properties == (("ID", "x"),)
    assert a.body == ""


def test_unclosed_drawer_at_end_of_document_stays_in_body() -> None:
    result = _build("* A\n:PROPERTIES:\n:ID: x\n")
    (a,) = result.headlines
    assert a.properties == ()
    assert a.body == ":PROPERTIES:\n:ID: x"
    assert [(d.kind, d.line_number) for d in result.diagnostics] == [
        (DiagnosticKind.UNCLOSED_PROPERTY_DRAWER, 2)
    ]


def test_headline_cuts_unclosed_drawer_short() -> None:
    result = _build("* A\n:PROPERTIES:\n:ID: x\n** B\n:END:\n")
    (a,) = result.headlines
    assert a.properties == ()
    assert a.body == ":PROPERTIES:\n:ID: x"
    assert a.children[0].title == "B"
    assert a.children[0].body == ":END:"
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.UNCLOSED_PROPERTY_DRAWER]
