"""Parse Org-mode outlines into immutable, queryable trees."""

from loguru import logger

from orgtree.config import ParseOptions
from orgtree.core.timestamp.parser import parse_timestamp
from orgtree.core.tree.tags import resolve_tags
from orgtree.errors import Diagnostic, DiagnosticKind, OrgParseError, OrgTreeError, TimestampError
from orgtree.models.node import (
    Document,
    Headline,
    PlanningInfo,
    PriorityRange,
    Timestamp,
    TodoConfig,
    TodoSequence,
)
from orgtree.parser import parse_document

# Library code stays quiet unless the application opts in (see configure_logging).
logger.disable("orgtree")

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "Document",
    "Headline",
    "OrgParseError",
    "OrgTreeError",
    "ParseOptions",
    "PlanningInfo",
    "PriorityRange",
    "Timestamp",
    "TimestampError",
    "TodoConfig",
    "TodoSequence",
    "parse_document",
    "parse_timestamp",
    "resolve_tags",
]
