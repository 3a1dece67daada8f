"""Tree navigation: traversal, lookup, breadcrumbs, siblings."""

from collections.abc import Callable, Iterator, Sequence

from orgtree.models.node import Breadcrumb, Document, Headline


def iter_headlines(document: Document) -> Iterator[Headline]:
    """Yield every headline in document order (pre-order)."""
    todo = list(reversed(document.headlines))
    while todo:
        headline = todo.pop()
        yield headline
        todo.extend(reversed(headline.children))


def _find_path(document: Document, target: Headline) -> list[Headline] | None:
    """Return the chain root..target, matching ``target`` by identity."""

    def walk(nodes: Sequence[Headline], trail: list[Headline]) -> list[Headline] | None:
        for node in nodes:
            if node is target:
                return [*trail, node]
            found = walk(node.children, [*trail, node])
            if found is not None:
                return found
        return None

    return walk(document.headlines, [])


def find_by_path(document: Document, titles: Sequence[str]) -> Headline | None:
    """Find a headline by the titles leading to it from the root.

    The first matching sibling is followed at each level.
    """
    if not titles:
        return None
    nodes: Sequence[Headline] = document.headlines
    current: Headline | None = None
    for title in titles:
        current = next((h for h in nodes if h.title == title), None)
        if current is None:
            return None
        nodes = current.children
    return current


def find_all(document: Document, predicate: Callable[[Headline], bool]) -> tuple[Headline, ...]:
    """Return all headlines matching ``predicate``, in document order."""
    return tuple(h for h in iter_headlines(document) if predicate(h))


def find_todos(
    document: Document,
    *,
    done: bool | None = None,
    keyword: str | None = None,
) -> tuple[Headline, ...]:
    """Return headlines carrying a TODO keyword.

    Args:
        document: The parsed document.
        done: If set, keep only done (True) or only open (False) entries.
        keyword: If set, keep only entries with exactly this keyword.
    """

    def matches(h: Headline) -> bool:
        if h.todo_keyword is None:
            return False
        if done is not None and h.is_done != done:
            return False
        return keyword is None or h.todo_keyword == keyword

    return find_all(document, matches)


def get_breadcrumbs(document: Document, headline: Headline) -> tuple[Breadcrumb, ...]:
    """Get ancestor breadcrumbs for a headline.

    Returns breadcrumbs in order from root to immediate parent (excludes the
    headline itself). Empty if the headline is a root or not in the document.
    """
    path = _find_path(document, headline)
    if path is None:
        return ()
    return tuple(Breadcrumb(title=h.title, level=h.level) for h in path[:-1])


def get_parent(document: Document, headline: Headline) -> Headline | None:
    path = _find_path(document, headline)
    if path is None or len(path) < 2:
        return None
    return path[-2]


def get_siblings(
    document: Document,
    headline: Headline,
    *,
    count: int = 3,
) -> tuple[tuple[Headline, ...], tuple[Headline, ...]]:
    """Get up to ``count`` siblings before and after a headline.

    Returns (siblings_before, siblings_after) tuples, both in document order.
    """
    parent = get_parent(document, headline)
    siblings = parent.children if parent is not None else document.headlines
    index = next((i for i, h in enumerate(siblings) if h is headline), None)
    if index is None:
        return (), ()
    return siblings[max(0, index - count) : index], siblings[index + 1 : index + 1 + count]


def get_children(headline: Headline, *, limit: int = 50) -> tuple[Headline, ...]:
    """Get direct children of a headline, in document order."""
    return headline.children[:limit]
