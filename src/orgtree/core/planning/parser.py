"""Parse SCHEDULED/DEADLINE/CLOSED planning lines."""

import re

from orgtree.config import PLANNING_KEYWORDS
from orgtree.core.timestamp.parser import find_timestamp, parse_timestamp
from orgtree.errors import Diagnostic, DiagnosticKind, TimestampError
from orgtree.models.node import PlanningInfo, Timestamp

_KEYWORD_RE = re.compile(rf"\b({'|'.join(PLANNING_KEYWORDS)}):")


def parse_planning(
    text: str, *, line_number: int = 0
) -> tuple[PlanningInfo | None, list[Diagnostic]]:
    """Parse a planning line such as ``SCHEDULED: <2025-08-26 Tue> DEADLINE: <...>``.

    Each keyword takes the first delimited timestamp between it and the next
    keyword. When a keyword repeats, the last occurrence decides: if it is
    malformed the field is left empty, even after an earlier valid one.

    Returns:
        Tuple of (PlanningInfo, diagnostics). PlanningInfo is None when no
        field could be filled, in which case the caller keeps the line as text.
    """
    diagnostics: list[Diagnostic] = []
    found: dict[str, Timestamp] = {}

    matches = list(_KEYWORD_RE.finditer(text))
    for i, m in enumerate(matches):
        keyword = m.group(1)
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        segment = text[m.end() : end]

        span = find_timestamp(segment)
        if span is None:
            found.pop(keyword, None)
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.MALFORMED_TIMESTAMP,
                    line_number,
                    f"{keyword}: has no timestamp",
                )
            )
            continue

        try:
            found[keyword] = parse_timestamp(span.group())
        except TimestampError as e:
            found.pop(keyword, None)
            diagnostics.append(
                Diagnostic(DiagnosticKind.MALFORMED_TIMESTAMP, line_number, f"{keyword}: {e}")
            )

    if not found:
        return None, diagnostics

    planning = PlanningInfo(
        scheduled=found.get("SCHEDULED"),
        deadline=found.get("DEADLINE"),
        closed=found.get("CLOSED"),
    )
    return planning, diagnostics
