"""Ancestor, descendant, sibling and spouse queries over a built family graph."""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from kinlayout.graph import FamilyGraph
from kinlayout.models import Person

DEFAULT_MAX_DEPTH = 10

TRAVERSAL_KINDS = ("ancestors", "descendants", "siblings", "spouses", "parents", "children")


def walk(
    start: str,
    neighbours: Callable[[str], Iterable[str]],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Iterator[tuple[str, int]]:
    """
    Breadth-first walk from ``start``, generation by generation.

    Yields (node, depth) in level order, closest first. Each node is yielded
    at most once and ``start`` is never yielded, so the walk terminates on
    cyclic input. Nodes deeper than ``max_depth`` are not visited.
    """
    seen: set[str] = {start}
    frontier = [start]
    for depth in range(1, max_depth + 1):
        next_frontier: list[str] = []
        for node in frontier:
            for nb in neighbours(node):
                if nb in seen:
                    continue
                seen.add(nb)
                next_frontier.append(nb)
                yield nb, depth
        frontier = next_frontier
        if not frontier:
            break


def _records(graph: FamilyGraph, ids: Iterable[str]) -> list[Person]:
    # Forward-referenced ids have no record to return
    return [graph.persons[pid] for pid in ids if pid in graph.persons]


def ancestor_ids(graph: FamilyGraph, person_id: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[str]:
    return [pid for pid, _ in walk(person_id, graph.parents, max_depth)]


def descendant_ids(graph: FamilyGraph, person_id: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[str]:
    return [pid for pid, _ in walk(person_id, graph.children, max_depth)]


def sibling_ids(graph: FamilyGraph, person_id: str, include_recorded: bool = False) -> list[str]:
    """
    Children of any of the person's parents, excluding the person.

    Siblinghood is derived from shared parents only. Explicit sibling records
    are appended after the derived ones when ``include_recorded`` is set.
    """
    out: dict[str, None] = {}
    for parent in graph.parents(person_id):
        for child in graph.children(parent):
            if child != person_id:
                out.setdefault(child)
    if include_recorded:
        for sibling in graph.recorded_siblings(person_id):
            out.setdefault(sibling)
    return list(out)


def ancestors_of(graph: FamilyGraph, person_id: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Person]:
    """Ancestors in level order (parents, grandparents, ...), each at most once."""
    return _records(graph, ancestor_ids(graph, person_id, max_depth))


def descendants_of(graph: FamilyGraph, person_id: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Person]:
    """Descendants in level order (children, grandchildren, ...), each at most once."""
    return _records(graph, descendant_ids(graph, person_id, max_depth))


def siblings_of(graph: FamilyGraph, person_id: str, include_recorded: bool = False) -> list[Person]:
    return _records(graph, sibling_ids(graph, person_id, include_recorded))


def spouses_of(graph: FamilyGraph, person_id: str) -> list[Person]:
    return _records(graph, (link.spouse_id for link in graph.spouses(person_id)))


def parents_of(graph: FamilyGraph, person_id: str) -> list[Person]:
    return _records(graph, graph.parents(person_id))


def children_of(graph: FamilyGraph, person_id: str) -> list[Person]:
    return _records(graph, graph.children(person_id))


def traverse(
    graph: FamilyGraph, person_id: str, kind: str, max_depth: int | None = None
) -> list[Person]:
    """
    Dispatch a traversal query by kind.

    An unknown person id yields an empty list. ``max_depth`` only applies to
    ancestors and descendants.
    """
    if kind not in TRAVERSAL_KINDS:
        raise ValueError(f"Unknown traversal kind: {kind!r}")

    depth = DEFAULT_MAX_DEPTH if max_depth is None else max_depth
    if kind == "ancestors":
        return ancestors_of(graph, person_id, depth)
    if kind == "descendants":
        return descendants_of(graph, person_id, depth)
    if kind == "siblings":
        return siblings_of(graph, person_id)
    if kind == "spouses":
        return spouses_of(graph, person_id)
    if kind == "parents":
        return parents_of(graph, person_id)
    return children_of(graph, person_id)


@dataclass
class FamilyView:
    person: Person | None
    parents: list[Person] = field(default_factory=list)
    children: list[Person] = field(default_factory=list)
    spouses: list[Person] = field(default_factory=list)
    siblings: list[Person] = field(default_factory=list)
    ancestors: list[Person] = field(default_factory=list)
    descendants: list[Person] = field(default_factory=list)


def family_of(
    graph: FamilyGraph,
    person_id: str,
    ancestor_generations: int = 3,
    descendant_generations: int = 3,
) -> FamilyView:
    """Bundle a person's immediate family with a few generations either way."""
    return FamilyView(
        person=graph.person(person_id),
        parents=parents_of(graph, person_id),
        children=children_of(graph, person_id),
        spouses=spouses_of(graph, person_id),
        siblings=siblings_of(graph, person_id),
        ancestors=ancestors_of(graph, person_id, ancestor_generations),
        descendants=descendants_of(graph, person_id, descendant_generations),
    )
