"""Render headline trees back to Org text."""

import io
import re

from orgtree.models.node import Document, Headline, PlanningInfo, Timestamp

# A title that merely starts with a cookie; one space after a keyword would turn it into one.
_COOKIE_LIKE_RE = re.compile(r"^\[#[A-Za-z0-9]+\](?=\s|$)")


def render_timestamp(timestamp: Timestamp) -> str:
    """Render a timestamp, e.g. ``<2025-08-26 Tue 10:00-11:00 +1w>``."""
    parts = [timestamp.date.isoformat(), timestamp.weekday]
    if timestamp.start_time is not None:
        clock = timestamp.start_time.strftime("%H:%M")
        if timestamp.end_time is not None:
            clock += "-" + timestamp.end_time.strftime("%H:%M")
        parts.append(clock)
    if timestamp.repeater_or_diary:
        parts.append(timestamp.repeater_or_diary)
    open_char, close_char = ("<", ">") if timestamp.is_active else ("[", "]")
    return f"{open_char}{' '.join(parts)}{close_char}"


def render_planning(planning: PlanningInfo) -> str:
    """Render a planning line (without indentation)."""
    fields = [
        ("SCHEDULED", planning.scheduled),
        ("DEADLINE", planning.deadline),
        ("CLOSED", planning.closed),
    ]
    return " ".join(f"{name}: {render_timestamp(ts)}" for name, ts in fields if ts is not None)


def render_properties(properties: tuple[tuple[str, str], ...]) -> list[str]:
    """Render a property drawer, one line per property, in stored order."""
    if not properties:
        return []
    lines = [":PROPERTIES:"]
    lines.extend(f":{key}: {value}" if value else f":{key}:" for key, value in properties)
    lines.append(":END:")
    return lines


def render_headline(headline: Headline) -> str:
    """Render the headline line itself.

    The priority cookie is written only when the source had one.
    """
    parts = ["*" * headline.level]
    if headline.todo_keyword:
        keyword = headline.todo_keyword
        if not headline.has_priority_cookie and _COOKIE_LIKE_RE.match(headline.title):
            keyword += " "
        parts.append(keyword)
    if headline.has_priority_cookie:
        parts.append(f"[#{headline.priority}]")
    if headline.title:
        parts.append(headline.title)
    if headline.tags:
        parts.append(":" + ":".join(headline.tags) + ":")
    if len(parts) == 1:
        return parts[0] + " "
    return " ".join(parts)


def render_subtree(
    headline: Headline,
    *,
    max_depth: int | None = None,
    include_body: bool = True,
) -> str:
    """Render a headline and its descendants as Org text.

    Args:
        headline: The root headline to start rendering from.
        max_depth: Max levels below the start headline to include (None = unlimited).
        include_body: Whether to include planning lines, property drawers
            and section bodies.

    Returns:
        Org text, one line per headline/body line, newline-terminated.
    """
    out = io.StringIO()
    todo: list[tuple[Headline, int]] = [(headline, 0)]
    while todo:
        node, depth = todo.pop()
        out.write(render_headline(node) + "\n")
        if include_body:
            if node.planning is not None:
                out.write(render_planning(node.planning) + "\n")
            for line in render_properties(node.properties):
                out.write(line + "\n")
            if node.body:
                out.write(node.body + "\n")
        if max_depth is not None and depth >= max_depth:
            continue
        todo.extend((child, depth + 1) for child in reversed(node.children))
    return out.getvalue()


def render_document(document: Document) -> str:
    """Render a whole document: preamble, then every root subtree."""
    out = io.StringIO()
    if document.preamble:
        out.write(document.preamble + "\n")
    for headline in document.headlines:
        out.write(render_subtree(headline))
    return out.getvalue()
