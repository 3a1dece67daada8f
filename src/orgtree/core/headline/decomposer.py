"""Decompose a headline into TODO keyword, priority, title and tags."""

import re
from dataclasses import dataclass

from loguru import logger

from orgtree.errors import Diagnostic, DiagnosticKind
from orgtree.models.node import PriorityRange, TodoConfig, TodoSequence

_FIRST_TOKEN_RE = re.compile(r"^(\S+)(\s*)(.*)$", re.DOTALL)
_COOKIE_RE = re.compile(r"^\[#([A-Za-z0-9]+)\](?=\s|$)")
_TAGS_RE = re.compile(r"(?:^|\s)(:(?:[\w@#%]+:)+)\s*$")
_KEYWORD_LIKE_RE = re.compile(r"^[A-Z]{2,}(?:[-_][A-Z]+)*$")


@dataclass(frozen=True)
class HeadlineParts:
    """The components of one headline's text."""

    title: str
    priority: str
    todo_keyword: str | None = None
    todo_sequence: TodoSequence | None = None
    is_done: bool = False
    has_priority_cookie: bool = False
    tags: tuple[str, ...] = ()


def split_tags(text: str) -> tuple[str, tuple[str, ...]]:
    """Split a trailing ``:tag1:tag2:`` run off ``text``.

    The run must be preceded by whitespace or start the text. Returns the
    text without the run (right-stripped) and the tags in written order,
    de-duplicated.
    """
    m = _TAGS_RE.search(text)
    if m is None:
        return text.rstrip(), ()
    tags = dict.fromkeys(t for t in m.group(1).split(":") if t)
    return text[: m.start()].rstrip(), tuple(tags)


def decompose_headline(
    rest: str,
    *,
    todo_config: TodoConfig,
    priority_range: PriorityRange,
    line_number: int = 0,
    warn_unknown_keywords: bool = True,
) -> tuple[HeadlineParts, list[Diagnostic]]:
    """Extract keyword, priority cookie, tags and title, left to right.

    Args:
        rest: Headline text after the stars and the separating whitespace.
        todo_config: Keyword sequences in effect; matching is case-sensitive.
        priority_range: Allowed cookie values and the default priority.
        line_number: Source line, used for diagnostics.
        warn_unknown_keywords: Report leading all-caps words that are not
            configured keywords.

    Returns:
        Tuple of (HeadlineParts, diagnostics).
    """
    diagnostics: list[Diagnostic] = []
    text = rest
    todo_keyword: str | None = None
    sequence: TodoSequence | None = None
    separator: str | None = None

    m = _FIRST_TOKEN_RE.match(text)
    if m:
        token = m.group(1)
        sequence = todo_config.lookup(token)
        if sequence is not None:
            todo_keyword = token
            separator = m.group(2)
            text = m.group(3)
        elif warn_unknown_keywords and _KEYWORD_LIKE_RE.match(token):
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.UNKNOWN_TODO_KEYWORD,
                    line_number,
                    f"{token!r} is not a configured TODO keyword; kept in the title",
                )
            )

    priority = priority_range.default
    has_cookie = False
    # After a keyword the cookie must follow exactly one space.
    if separator is None or separator == " ":
        c = _COOKIE_RE.match(text)
        if c:
            if priority_range.contains(c.group(1)):
                priority = c.group(1)
                has_cookie = True
                text = text[c.end() :]
            else:
                logger.debug(
                    "Line {}: cookie {!r} outside {}..{}, kept as text",
                    line_number,
                    c.group(0),
                    priority_range.highest,
                    priority_range.lowest,
                )

    title, tags = split_tags(text)
    parts = HeadlineParts(
        title=title.strip(),
        priority=priority,
        todo_keyword=todo_keyword,
        todo_sequence=sequence,
        is_done=sequence.is_done(todo_keyword) if sequence and todo_keyword else False,
        has_priority_cookie=has_cookie,
        tags=tags,
    )
    return parts, diagnostics
