"""Parse Org text into a Document."""

from collections.abc import Sequence

from loguru import logger

from orgtree.config import ParseOptions
from orgtree.core.lexer.classifier import classify_lines, split_lines
from orgtree.core.settings.collector import collect_settings
from orgtree.core.tree.builder import build_outline
from orgtree.core.tree.tags import resolve_tags
from orgtree.errors import OrgParseError
from orgtree.models.node import Document


def _as_lines(source: str | Sequence[str]) -> list[str]:
    if isinstance(source, str):
        return split_lines(source)
    if isinstance(source, Sequence) and all(isinstance(line, str) for line in source):
        return list(source)
    msg = f"Expected a string or a sequence of strings, got {type(source).__name__}"
    raise OrgParseError(msg)


def parse_document(
    source: str | Sequence[str],
    options: ParseOptions | None = None,
) -> Document:
    """Parse an Org document.

    Settings are collected in a first pass over the whole text, so their
    position relative to headlines does not matter. The tree is then built in
    a second pass. Local problems never abort the parse; they are reported
    on ``Document.diagnostics``.

    Args:
        source: The full document text, or its lines without terminators.
        options: Defaults for TODO keywords and priorities, and whether to
            resolve inherited tags.

    Returns:
        The parsed Document.

    Raises:
        OrgParseError: If ``source`` is neither a string nor a sequence of strings.
    """
    options = options or ParseOptions()
    lines = _as_lines(source)

    settings, setting_problems = collect_settings(
        classify_lines(lines),
        default_sequences=options.todo_sequences,
        default_priority_range=options.priority_range,
    )
    outline = build_outline(
        classify_lines(lines),
        settings,
        warn_unknown_keywords=options.warn_unknown_keywords,
    )

    diagnostics = tuple(
        sorted((*setting_problems, *outline.diagnostics), key=lambda d: d.line_number)
    )
    for diagnostic in diagnostics:
        logger.debug("{}", diagnostic)

    document = Document(
        headlines=outline.headlines,
        todo_config=settings.todo_config,
        priority_range=settings.priority_range,
        file_tags=settings.file_tags,
        keywords=settings.keywords,
        preamble=outline.preamble,
        diagnostics=diagnostics,
    )
    if options.resolve_tags:
        document = resolve_tags(document)

    logger.debug("Parsed {} line(s), {} diagnostic(s)", len(lines), len(diagnostics))
    return document
