"""Domain models for parsed Org documents."""

from dataclasses import dataclass
from datetime import date, time

from orgtree.errors import Diagnostic


@dataclass(frozen=True)
class Timestamp:
    """An Org timestamp such as ``<2025-08-26 Tue 10:00-11:30 +1w>``."""

    is_active: bool
    date: date
    weekday: str
    start_time: time | None = None
    end_time: time | None = None
    repeater_or_diary: str | None = None
    raw: str = ""

    @property
    def has_time(self) -> bool:
        return self.start_time is not None

    @property
    def is_range(self) -> bool:
        return self.end_time is not None

    @property
    def is_point(self) -> bool:
        """True for a plain point in time: no end time and no repeater/diary text."""
        return self.end_time is None and self.repeater_or_diary is None


@dataclass(frozen=True)
class PlanningInfo:
    """SCHEDULED/DEADLINE/CLOSED timestamps attached to a headline."""

    scheduled: Timestamp | None = None
    deadline: Timestamp | None = None
    closed: Timestamp | None = None


@dataclass(frozen=True)
class TodoSequence:
    """One TODO workflow: active states, then done states."""

    active_keywords: tuple[str, ...]
    done_keywords: tuple[str, ...]

    @property
    def keywords(self) -> tuple[str, ...]:
        return self.active_keywords + self.done_keywords

    def contains(self, keyword: str) -> bool:
        return keyword in self.active_keywords or keyword in self.done_keywords

    def is_done(self, keyword: str) -> bool:
        return keyword in self.done_keywords


@dataclass(frozen=True)
class TodoConfig:
    """All TODO workflows in effect for a document."""

    sequences: tuple[TodoSequence, ...]

    @property
    def keywords(self) -> tuple[str, ...]:
        """Every configured keyword, in configuration order, without duplicates."""
        seen: dict[str, None] = {}
        for seq in self.sequences:
            for keyword in seq.keywords:
                seen.setdefault(keyword, None)
        return tuple(seen)

    def lookup(self, keyword: str) -> TodoSequence | None:
        """Return the first sequence that declares ``keyword``."""
        for seq in self.sequences:
            if seq.contains(keyword):
                return seq
        return None


@dataclass(frozen=True)
class PriorityRange:
    """Allowed priority cookies, from ``highest`` to ``lowest``.

    Letters are ranked by character code. When all three bounds are decimal
    numbers the range is numeric (``#+PRIORITIES: 1 10 5``).

    Raises:
        ValueError: If ``highest`` ranks below ``lowest``, or ``default`` lies
            outside highest..lowest. Bounds that mix letters and numbers fail
            the same way, since they cannot be ranked against each other.
    """

    highest: str = "A"
    lowest: str = "C"
    default: str = "B"

    def __post_init__(self) -> None:
        if not self.contains(self.highest):
            msg = f"Highest priority {self.highest!r} ranks below lowest {self.lowest!r}"
            raise ValueError(msg)
        if not self.contains(self.default):
            msg = f"Default priority {self.default!r} is outside {self.highest}..{self.lowest}"
            raise ValueError(msg)

    @property
    def is_numeric(self) -> bool:
        return all(v.isdecimal() for v in (self.highest, self.lowest, self.default))

    def rank(self, value: str) -> int | None:
        """Return a sortable rank for ``value`` (smaller is more important).

        Returns None when ``value`` is not comparable within this range.
        """
        if self.is_numeric:
            return int(value) if value.isdecimal() else None
        if len(value) != 1 or value.isdecimal():
            return None
        return ord(value)

    def contains(self, value: str) -> bool:
        rank = self.rank(value)
        if rank is None:
            return False
        highest = self.rank(self.highest)
        lowest = self.rank(self.lowest)
        if highest is None or lowest is None:
            return False
        return highest <= rank <= lowest


@dataclass(frozen=True)
class Headline:
    """A single node in an Org outline tree."""

    level: int
    title: str
    priority: str
    todo_keyword: str | None = None
    todo_sequence: TodoSequence | None = None
    is_done: bool = False
    has_priority_cookie: bool = False
    tags: tuple[str, ...] = ()
    effective_tags: tuple[str, ...] = ()
    planning: PlanningInfo | None = None
    properties: tuple[tuple[str, str], ...] = ()
    body: str = ""
    children: tuple["Headline", ...] = ()
    line_number: int = 0

    @property
    def is_todo(self) -> bool:
        """True when the headline carries an active (not done) keyword."""
        return self.todo_keyword is not None and not self.is_done

    def get_property(self, key: str) -> str | None:
        """Return the last value of drawer property ``key`` (case-insensitive)."""
        key = key.upper()
        found: str | None = None
        for k, value in self.properties:
            if k.upper() == key:
                found = value
        return found


@dataclass(frozen=True)
class Document:
    """A parsed Org document."""

    headlines: tuple[Headline, ...]
    todo_config: TodoConfig
    priority_range: PriorityRange
    file_tags: tuple[str, ...] = ()
    keywords: tuple[tuple[str, str], ...] = ()
    preamble: str = ""
    diagnostics: tuple[Diagnostic, ...] = ()

    def keyword(self, key: str) -> str | None:
        """Return the last value of an uninterpreted ``#+KEY:`` line, if any."""
        key = key.upper()
        found: str | None = None
        for k, value in self.keywords:
            if k == key:
                found = value
        return found


@dataclass(frozen=True)
class Breadcrumb:
    """A single ancestor in a breadcrumb trail."""

    title: str
    level: int
