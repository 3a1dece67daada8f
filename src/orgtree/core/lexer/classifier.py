"""Split an Org document into typed lines."""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

from orgtree.config import PLANNING_KEYWORDS

_SETTING_RE = re.compile(r"^\s*#\+([A-Za-z_][A-Za-z0-9_-]*):\s*(.*?)\s*$")
_HEADLINE_RE = re.compile(r"^(\*+)\s(.*)$")
_PLANNING_RE = re.compile(rf"^\s*(?:{'|'.join(PLANNING_KEYWORDS)}):")


class LineKind(Enum):
    HEADLINE = "headline"
    PLANNING = "planning"
    SETTING = "setting"
    BLANK = "blank"
    PLAIN = "plain"


@dataclass(frozen=True)
class Line:
    """A classified source line.

    ``level``/``rest`` are set for headlines, ``key``/``value`` for settings.
    ``rest`` is the headline text after the stars and their separating
    whitespace.
    """

    kind: LineKind
    number: int
    text: str
    level: int = 0
    rest: str = ""
    key: str = ""
    value: str = ""


def split_lines(text: str) -> list[str]:
    """Split a text blob into lines without line terminators.

    Only ``\\n`` (or ``\\r\\n``) ends a line. Form feeds, U+2028 and the other
    characters ``str.splitlines`` would also break on stay inside the line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def classify_line(text: str, number: int) -> Line:
    """Classify a single line. ``number`` is its 1-based position."""
    # A setting is anchored to the literal "#+" prefix, so it wins over everything else.
    m = _SETTING_RE.match(text)
    if m:
        return Line(
            kind=LineKind.SETTING,
            number=number,
            text=text,
            key=m.group(1).upper(),
            value=m.group(2) or "",
        )

    m = _HEADLINE_RE.match(text)
    if m:
        return Line(
            kind=LineKind.HEADLINE,
            number=number,
            text=text,
            level=len(m.group(1)),
            rest=m.group(2).lstrip(),
        )

    if _PLANNING_RE.match(text):
        return Line(kind=LineKind.PLANNING, number=number, text=text, rest=text.strip())

    if not text.strip():
        return Line(kind=LineKind.BLANK, number=number, text=text)

    return Line(kind=LineKind.PLAIN, number=number, text=text)


def classify_lines(lines: Iterable[str]) -> Iterator[Line]:
    """Lazily classify ``lines``, numbering them from 1."""
    for number, text in enumerate(lines, start=1):
        yield classify_line(text, number)
