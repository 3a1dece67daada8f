"""Recognize the lines of a headline's ``:PROPERTIES:`` drawer."""

import re

_PROPERTY_RE = re.compile(r"^\s*:([^\s:]+):(?:\s+(.*?))?\s*$")

DRAWER_START = ":PROPERTIES:"
DRAWER_END = ":END:"


def is_drawer_start(text: str) -> bool:
    return text.strip().upper() == DRAWER_START


def is_drawer_end(text: str) -> bool:
    return text.strip().upper() == DRAWER_END


def parse_property_line(text: str) -> tuple[str, str] | None:
    """Parse ``:KEY: value`` into ``(key, value)``.

    The value may be empty (``:KEY:``). Returns None for anything else.
    """
    m = _PROPERTY_RE.match(text)
    if m is None:
        return None
    return m.group(1), m.group(2) or ""
