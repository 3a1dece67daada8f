"""Tests for property drawer lines."""

import pytest

from orgtree.core.properties.drawer import is_drawer_end, is_drawer_start, parse_property_line


def test_drawer_delimiters() -> None:
    assert is_drawer_start("  :PROPERTIES:  ")
    assert is_drawer_start(":properties:")
    assert is_drawer_end(":END:")
    assert not is_drawer_start(":PROPERTIES: extra")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (":ID: 1234", ("ID", "1234")),
        ("  :Effort:   1:30  ", ("Effort", "1:30")),
        (":CATEGORY:", ("CATEGORY", "")),
        ("no colon", None),
        (":ID:value", None),
        (":: empty key", None),
    ],
)
def test_parse_property_line(text: str, expected: tuple[str, str] | None) -> None:
    assert parse_property_line(text) == expected
