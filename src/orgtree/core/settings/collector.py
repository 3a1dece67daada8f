"""Collect in-buffer settings into the configuration used by the tree builder."""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger

from orgtree.config import (
    DEFAULT_PRIORITY_RANGE,
    DEFAULT_TODO_SEQUENCE,
    FILETAGS_SETTING_KEY,
    PRIORITIES_SETTING_KEY,
    TODO_DIVIDER,
    TODO_SETTING_KEYS,
)
from orgtree.core.lexer.classifier import Line, LineKind
from orgtree.errors import Diagnostic, DiagnosticKind
from orgtree.models.node import PriorityRange, TodoConfig, TodoSequence

# "DONE(d!)" -> "DONE": fast-access key and logging annotations.
_KEYWORD_ANNOTATION_RE = re.compile(r"^(.+?)\(.*\)$")


@dataclass(frozen=True)
class ParserSettings:
    """File-wide configuration resolved before the tree is built."""

    todo_config: TodoConfig
    priority_range: PriorityRange
    file_tags: tuple[str, ...] = ()
    keywords: tuple[tuple[str, str], ...] = ()


def _strip_annotation(token: str) -> str:
    m = _KEYWORD_ANNOTATION_RE.match(token)
    return m.group(1) if m else token


def parse_todo_value(value: str) -> TodoSequence:
    """Parse the value of a ``#+TODO:`` line into a sequence.

    Keywords before ``|`` are active and keywords after it are done. Without a
    divider the last keyword is the only done state. Only the first divider
    counts; any further ``|`` tokens are dropped.

    Raises:
        ValueError: If the value names no keywords.
    """
    tokens = value.split()
    if TODO_DIVIDER in tokens:
        idx = tokens.index(TODO_DIVIDER)
        active = tokens[:idx]
        done = [t for t in tokens[idx + 1 :] if t != TODO_DIVIDER]
    else:
        active, done = tokens[:-1], tokens[-1:]

    active = [_strip_annotation(t) for t in active]
    done = [_strip_annotation(t) for t in done]
    if not active and not done:
        msg = f"No TODO keywords in {value!r}"
        raise ValueError(msg)
    return TodoSequence(active_keywords=tuple(active), done_keywords=tuple(done))


def parse_filetags_value(value: str) -> list[str]:
    """Split ``:a:b:`` or ``a b`` into tag names."""
    return [t for t in re.split(r"[:\s]+", value) if t]


def parse_priorities_value(value: str) -> PriorityRange:
    """Parse ``HIGHEST LOWEST DEFAULT``.

    Raises:
        ValueError: If there are not exactly three tokens, they mix letters
            and numbers, or the default lies outside highest..lowest.
    """
    tokens = value.split()
    if len(tokens) != 3:
        msg = f"Expected 3 tokens (highest lowest default), got {len(tokens)}: {value!r}"
        raise ValueError(msg)

    highest, lowest, default = tokens
    if not (all(t.isdecimal() for t in tokens) or all(len(t) == 1 and t.isalpha() for t in tokens)):
        msg = f"Priorities must be all single letters or all numbers: {value!r}"
        raise ValueError(msg)

    return PriorityRange(highest=highest, lowest=lowest, default=default)


def collect_settings(
    lines: Iterable[Line],
    *,
    default_sequences: tuple[TodoSequence, ...] = (DEFAULT_TODO_SEQUENCE,),
    default_priority_range: PriorityRange = DEFAULT_PRIORITY_RANGE,
) -> tuple[ParserSettings, list[Diagnostic]]:
    """Merge every setting line in the document, wherever it appears.

    Args:
        lines: Classified lines of the whole document.
        default_sequences: TODO sequences used when no ``#+TODO:`` or
            ``#+SEQ_TODO:`` line is present.
        default_priority_range: Range used until a valid ``#+PRIORITIES:``
            line is seen.

    Returns:
        Tuple of (ParserSettings, diagnostics for malformed setting lines).
    """
    sequences: list[TodoSequence] = []
    priority_range = default_priority_range
    file_tags: dict[str, None] = {}
    keywords: list[tuple[str, str]] = []
    diagnostics: list[Diagnostic] = []

    for line in lines:
        if line.kind is not LineKind.SETTING:
            continue

        if line.key in TODO_SETTING_KEYS:
            if not line.value:
                continue
            if line.value.split().count(TODO_DIVIDER) > 1:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.MALFORMED_TODO_SETTING,
                        line.number,
                        f"More than one '|' divider in {line.value!r}; using the first",
                    )
                )
            try:
                sequences.append(parse_todo_value(line.value))
            except ValueError as e:
                diagnostics.append(
                    Diagnostic(DiagnosticKind.MALFORMED_TODO_SETTING, line.number, str(e))
                )
        elif line.key == FILETAGS_SETTING_KEY:
            for tag in parse_filetags_value(line.value):
                file_tags.setdefault(tag, None)
        elif line.key == PRIORITIES_SETTING_KEY:
            try:
                priority_range = parse_priorities_value(line.value)
            except ValueError as e:
                diagnostics.append(
                    Diagnostic(DiagnosticKind.MALFORMED_PRIORITY_SETTING, line.number, str(e))
                )
        else:
            keywords.append((line.key, line.value))

    todo_config = TodoConfig(sequences=tuple(sequences) if sequences else default_sequences)
    logger.debug(
        "Settings: {} TODO sequence(s), priorities {}..{} (default {}), file tags {}",
        len(todo_config.sequences),
        priority_range.highest,
        priority_range.lowest,
        priority_range.default,
        list(file_tags),
    )
    settings = ParserSettings(
        todo_config=todo_config,
        priority_range=priority_range,
        file_tags=tuple(file_tags),
        keywords=tuple(keywords),
    )
    return settings, diagnostics
