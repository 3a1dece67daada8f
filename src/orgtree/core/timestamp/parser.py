"""Parse Org timestamps.

Grammar inside the delimiters::

    YYYY-MM-DD DAYNAME [HH:MM[-HH:MM]] [repeater or diary text]

``<...>`` marks an active timestamp, ``[...]`` an inactive one. Anything after
the date and optional time is kept verbatim and never interpreted, so
``+1w``, ``.+3d -2d`` and ``%%(diary-float t 4 2)`` all round-trip unchanged.
"""

import re
from datetime import date, time

from orgtree.errors import TimestampError
from orgtree.models.node import Timestamp

_DELIMITERS = {"<": ">", "[": "]"}

_SPAN_RE = re.compile(r"<[^<>\n]*>|\[[^\[\]\n]*\]")

_BODY_RE = re.compile(
    r"""
    ^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})
    \s+(?P<weekday>[^\W\d_][^\s]*)
    (?:\s+(?P<start>\d{1,2}:\d{2})(?:-(?P<end>\d{1,2}:\d{2}))?(?=\s|$))?
    (?:\s+(?P<extra>.*?))?
    \s*$
    """,
    re.VERBOSE,
)


def _parse_time(text: str, raw: str) -> time:
    hour, minute = text.split(":")
    try:
        return time(int(hour), int(minute))
    except ValueError as e:
        msg = f"Invalid time {text!r} in timestamp {raw!r}"
        raise TimestampError(msg) from e


def parse_timestamp(text: str) -> Timestamp:
    """Parse a delimited timestamp such as ``<2025-08-26 Tue 09:00>``.

    Args:
        text: The timestamp including its ``<>`` or ``[]`` delimiters.
            Surrounding whitespace is ignored.

    Returns:
        The parsed Timestamp. The weekday label is stored as written and is
        not checked against the date.

    Raises:
        TimestampError: If the delimiters, date, day name or time do not
            follow the grammar, or the date/time does not exist.
    """
    raw = text.strip()
    if len(raw) < 2 or _DELIMITERS.get(raw[0]) != raw[-1]:
        msg = f"Timestamp must be enclosed in <> or []: {text!r}"
        raise TimestampError(msg)

    m = _BODY_RE.match(raw[1:-1].strip())
    if m is None:
        msg = f"Invalid timestamp {raw!r}"
        raise TimestampError(msg)

    try:
        day = date(int(m.group("year")), int(m.group("month")), int(m.group("day")))
    except ValueError as e:
        msg = f"Invalid date in timestamp {raw!r}"
        raise TimestampError(msg) from e

    start = _parse_time(m.group("start"), raw) if m.group("start") else None
    end = _parse_time(m.group("end"), raw) if m.group("end") else None

    return Timestamp(
        is_active=raw[0] == "<",
        date=day,
        weekday=m.group("weekday"),
        start_time=start,
        end_time=end,
        repeater_or_diary=m.group("extra") or None,
        raw=raw,
    )


def find_timestamp(text: str) -> re.Match[str] | None:
    """Find the first ``<...>`` or ``[...]`` span in ``text``.

    The span is only a candidate: pass ``match.group()`` to parse_timestamp.
    """
    return _SPAN_RE.search(text)
