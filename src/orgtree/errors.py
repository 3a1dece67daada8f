"""Exceptions and non-fatal diagnostics."""

from dataclasses import dataclass
from enum import StrEnum


class OrgTreeError(Exception):
    """Base class for orgtree errors."""


class OrgParseError(OrgTreeError, ValueError):
    """Input that cannot be split into lines at all."""


class TimestampError(OrgTreeError, ValueError):
    """A delimited span that does not follow the timestamp grammar."""


class DiagnosticKind(StrEnum):
    MALFORMED_TIMESTAMP = "malformed-timestamp"
    MALFORMED_PRIORITY_SETTING = "malformed-priority-setting"
    MALFORMED_TODO_SETTING = "malformed-todo-setting"
    UNKNOWN_TODO_KEYWORD = "unknown-todo-keyword"
    ORPHAN_PLANNING_LINE = "orphan-planning-line"
    UNCLOSED_PROPERTY_DRAWER = "unclosed-property-drawer"


@dataclass(frozen=True)
class Diagnostic:
    """A recoverable problem found while parsing.

    The offending fragment is kept as plain text; the diagnostic only
    reports where and why.
    """

    kind: DiagnosticKind
    line_number: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line_number}: [{self.kind}] {self.message}"
