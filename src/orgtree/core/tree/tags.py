"""Compute inherited tags."""

from dataclasses import replace

from orgtree.models.node import Document, Headline


def merge_tags(*groups: tuple[str, ...]) -> tuple[str, ...]:
    """Ordered union of tag groups, keeping the first occurrence of each tag."""
    return tuple(dict.fromkeys(tag for group in groups for tag in group))


def _resolve(headline: Headline, inherited: tuple[str, ...]) -> Headline:
    effective = merge_tags(inherited, headline.tags)
    children = tuple(_resolve(child, effective) for child in headline.children)
    return replace(headline, effective_tags=effective, children=children)


def resolve_tags(document: Document) -> Document:
    """Return a copy of ``document`` with ``effective_tags`` filled in.

    Effective tags are the file tags, then each ancestor's own tags from the
    root down, then the headline's own tags, without duplicates.
    """
    headlines = tuple(_resolve(h, document.file_tags) for h in document.headlines)
    return replace(document, headlines=headlines)
