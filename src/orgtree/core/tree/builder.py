"""Assemble classified lines into a headline tree."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger

from orgtree.core.headline.decomposer import HeadlineParts, decompose_headline
from orgtree.core.lexer.classifier import Line, LineKind
from orgtree.core.planning.parser import parse_planning
from orgtree.core.properties.drawer import is_drawer_end, is_drawer_start, parse_property_line
from orgtree.core.settings.collector import ParserSettings
from orgtree.errors import Diagnostic, DiagnosticKind
from orgtree.models.node import Headline, PlanningInfo


@dataclass
class _Draft:
    """A headline while its section is still open."""

    level: int
    line_number: int
    parts: HeadlineParts
    planning: PlanningInfo | None = None
    properties: list[tuple[str, str]] = field(default_factory=list)
    body: list[str] = field(default_factory=list)
    children: list["_Draft"] = field(default_factory=list)

    def freeze(self) -> Headline:
        p = self.parts
        return Headline(
            level=self.level,
            title=p.title,
            priority=p.priority,
            todo_keyword=p.todo_keyword,
            todo_sequence=p.todo_sequence,
            is_done=p.is_done,
            has_priority_cookie=p.has_priority_cookie,
            tags=p.tags,
            planning=self.planning,
            properties=tuple(self.properties),
            body="\n".join(self.body),
            children=tuple(child.freeze() for child in self.children),
            line_number=self.line_number,
        )


@dataclass(frozen=True)
class OutlineResult:
    """Output of build_outline."""

    preamble: str
    headlines: tuple[Headline, ...]
    diagnostics: tuple[Diagnostic, ...] = ()


def _close_drawer(draft: _Draft, drawer: list[Line]) -> None:
    """Store the properties of a drawer whose ``:END:`` line was reached."""
    for line in drawer[1:]:
        prop = parse_property_line(line.text)
        if prop is not None:
            draft.properties.append(prop)
        elif line.kind is not LineKind.BLANK:
            logger.debug("Line {}: not a property, dropped from drawer", line.number)


def _abandon_drawer(draft: _Draft, drawer: list[Line]) -> Diagnostic:
    """Return the lines of a drawer that never closed to the section body."""
    draft.body.extend(line.text for line in drawer)
    return Diagnostic(
        DiagnosticKind.UNCLOSED_PROPERTY_DRAWER,
        drawer[0].number,
        "Property drawer has no :END: line; kept as text",
    )


def build_outline(
    lines: Iterable[Line],
    settings: ParserSettings,
    *,
    warn_unknown_keywords: bool = True,
) -> OutlineResult:
    """Build the headline tree in a single forward pass.

    A headline becomes a child of the nearest preceding headline with a
    strictly smaller level. Every non-headline line goes, verbatim, to the
    body of the innermost open headline, or to the preamble before the first
    headline. Only a planning line directly below its headline is parsed as
    planning; any other planning line stays in the body. A ``:PROPERTIES:``
    drawer directly below the headline (or below its planning line) fills
    ``Headline.properties``; a drawer cut short by a headline or the end of
    the document stays in the body.

    Args:
        lines: Classified lines of the whole document.
        settings: Configuration resolved by collect_settings.
        warn_unknown_keywords: Passed to decompose_headline.

    Returns:
        OutlineResult with the preamble, root headlines and diagnostics.
    """
    roots: list[_Draft] = []
    stack: list[_Draft] = []
    preamble: list[str] = []
    diagnostics: list[Diagnostic] = []
    planning_eligible = False
    drawer_eligible = False
    drawer: list[Line] | None = None
    headline_count = 0

    for line in lines:
        if drawer is not None:
            if line.kind is not LineKind.HEADLINE:
                if is_drawer_end(line.text):
                    _close_drawer(stack[-1], drawer)
                    drawer = None
                else:
                    drawer.append(line)
                continue
            diagnostics.append(_abandon_drawer(stack[-1], drawer))
            drawer = None

        if line.kind is LineKind.HEADLINE:
            while stack and stack[-1].level >= line.level:
                stack.pop()

            parts, problems = decompose_headline(
                line.rest,
                todo_config=settings.todo_config,
                priority_range=settings.priority_range,
                line_number=line.number,
                warn_unknown_keywords=warn_unknown_keywords,
            )
            diagnostics.extend(problems)

            draft = _Draft(level=line.level, line_number=line.number, parts=parts)
            if stack:
                stack[-1].children.append(draft)
            else:
                roots.append(draft)
            stack.append(draft)
            planning_eligible = drawer_eligible = True
            headline_count += 1
            continue

        if line.kind is LineKind.PLANNING:
            if planning_eligible:
                planning_eligible = False
                planning, problems = parse_planning(line.rest, line_number=line.number)
                diagnostics.extend(problems)
                if planning is not None:
                    stack[-1].planning = planning
                    continue
            else:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.ORPHAN_PLANNING_LINE,
                        line.number,
                        "Planning line does not directly follow a headline; kept as text",
                    )
                )

        if drawer_eligible and line.kind is LineKind.PLAIN and is_drawer_start(line.text):
            planning_eligible = drawer_eligible = False
            drawer = [line]
            continue

        planning_eligible = drawer_eligible = False
        if stack:
            stack[-1].body.append(line.text)
        else:
            preamble.append(line.text)

    if drawer is not None:
        diagnostics.append(_abandon_drawer(stack[-1], drawer))

    logger.debug(
        "Built outline: {} headline(s), {} root(s)", headline_count, len(roots)
    )
    return OutlineResult(
        preamble="\n".join(preamble),
        headlines=tuple(draft.freeze() for draft in roots),
        diagnostics=tuple(diagnostics),
    )
