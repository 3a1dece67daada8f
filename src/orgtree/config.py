"""Built-in defaults and caller-supplied parse options."""

from dataclasses import dataclass

from orgtree.models.node import PriorityRange, TodoSequence

# Used when a document declares no #+TODO:/#+SEQ_TODO: line.
DEFAULT_TODO_SEQUENCE = TodoSequence(active_keywords=("TODO",), done_keywords=("DONE",))

# Used when a document declares no #+PRIORITIES: line.
DEFAULT_PRIORITY_RANGE = PriorityRange(highest="A", lowest="C", default="B")

PLANNING_KEYWORDS: tuple[str, ...] = ("SCHEDULED", "DEADLINE", "CLOSED")

TODO_SETTING_KEYS: frozenset[str] = frozenset({"TODO", "SEQ_TODO"})
FILETAGS_SETTING_KEY = "FILETAGS"
PRIORITIES_SETTING_KEY = "PRIORITIES"

TODO_DIVIDER = "|"


@dataclass(frozen=True)
class ParseOptions:
    """Options for a single parse call.

    ``todo_sequences`` and ``priority_range`` play the role of the editor-wide
    defaults: in-buffer settings replace them for that document.
    """

    todo_sequences: tuple[TodoSequence, ...] = (DEFAULT_TODO_SEQUENCE,)
    priority_range: PriorityRange = DEFAULT_PRIORITY_RANGE
    resolve_tags: bool = True
    warn_unknown_keywords: bool = True
