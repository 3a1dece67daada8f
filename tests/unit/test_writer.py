"""Tests for rendering trees back to Org text."""

from orgtree import Document, Headline, parse_document
from orgtree.core.timestamp.parser import parse_timestamp
from orgtree.core.tree.navigation import iter_headlines
from orgtree.core.tree.writer import (
    render_document,
    render_headline,
    render_subtree,
    render_timestamp,
)


def _semantics(h: Headline) -> tuple:
    return (h.level, h.todo_keyword, h.priority, h.tags, h.title, h.planning, h.properties)


def test_render_timestamp() -> None:
    for text in (
        "<2025-08-26 Tue>",
        "[2025-08-20 Wed 10:15]",
        "<2025-08-26 Tue 09:00-11:30 +1w -2d>",
        "<2025-08-26 Tue %%(diary-float t 4 2)>",
    ):
        assert render_timestamp(parse_timestamp(text)) == text


def test_render_headline_omits_implicit_priority() -> None:
    doc = parse_document("* TODO [#A] Finish report :work:urgent:\n** Plan the trip :travel:\n")
    report = doc.headlines[0]
    assert render_headline(report) == "* TODO [#A] Finish report :work:urgent:"
    assert render_headline(report.children[0]) == "** Plan the trip :travel:"


def test_render_subtree_with_depth_limit(sample_document: Document) -> None:
    text = render_subtree(sample_document.headlines[0], max_depth=1, include_body=False)
    assert text.splitlines() == [
        "* TODO [#A] Finish report :work:urgent:",
        "** NEXT Collect figures",
        "** DONE Outline",
    ]


def test_render_subtree_includes_planning_and_body(sample_document: Document) -> None:
    text = render_subtree(sample_document.headlines[0], max_depth=0)
    assert text.splitlines() == [
        "* TODO [#A] Finish report :work:urgent:",
        "SCHEDULED: <2025-08-26 Tue> DEADLINE: <2025-08-29 Fri 17:00>",
        "Draft is in the shared folder.",
    ]


def test_document_round_trip_preserves_semantics(sample_document: Document) -> None:
    reparsed = parse_document(render_document(sample_document))
    assert [_semantics(h) for h in iter_headlines(reparsed)] == [
        _semantics(h) for h in iter_headlines(sample_document)
    ]
    assert reparsed.file_tags == sample_document.file_tags
    assert reparsed.todo_config == sample_document.todo_config


def test_round_trip_of_edge_headlines() -> None:
    source = "* \n* :only:tags:\n* [#D] not a cookie\n* TODO\n* TODO  [#A] spaced cookie\n"
    doc = parse_document(source)
    reparsed = parse_document(render_document(doc))
    assert [_semantics(h) for h in reparsed.headlines] == [_semantics(h) for h in doc.headlines]
    spaced = doc.headlines[-1]
    assert (spaced.priority, spaced.title) == ("B", "[#A] spaced cookie")
    assert render_headline(spaced) == "* TODO  [#A] spaced cookie"


def test_property_drawer_round_trip() -> None:
    source = "* A\nSCHEDULED: <2025-08-26 Tue>\n:PROPERTIES:\n:ID: 42\n:NOTE:\n:END:\ntext\n"
    doc = parse_document(source)
    assert render_document(doc) == source
    reparsed = parse_document(render_document(doc))
    assert reparsed.headlines[0].properties == (("ID", "42"), ("NOTE", ""))
