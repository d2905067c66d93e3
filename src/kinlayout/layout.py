"""Hierarchical family tree layout.

Positions are computed in three passes over the graph:

1. claim: a depth-first walk from the root decides which person places whom.
   Each person claims its unplaced spouses (drawn beside it) and its unplaced
   children (drawn below it). The claims form a spanning tree of family units.
2. measure: a post-order pass over that tree computes every unit's subtree
   width once.
3. place: a pre-order pass assigns coordinates, centring each unit's
   children under its footprint.

Persons the root never reaches go to an overflow row below the deepest
generation used.
"""

import dataclasses
import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from kinlayout.dates import parse_date_string, year_of
from kinlayout.errors import UnknownRootPerson
from kinlayout.graph import FamilyGraph
from kinlayout.models import (
    EDGE_PARENT_CHILD,
    EDGE_SPOUSE,
    LayoutEdge,
    LayoutOptions,
    LayoutResult,
    Person,
    Position,
    Relationship,
    SpouseLink,
)
from kinlayout.traversal import descendant_ids

logger = logging.getLogger(__name__)


@dataclass
class _Unit:
    person_id: str
    spouses: list[SpouseLink]
    children: list[tuple[str, str]] = field(default_factory=list)  # (parent_id, child_id)


# ============================================================================
# Root selection
# ============================================================================


def _birth_key(person: Person) -> tuple[bool, str]:
    # Undated persons sort after dated ones
    iso = parse_date_string(person.birth_date)
    return (iso is None, iso or "")


def select_root(
    graph: FamilyGraph, persons: Sequence[Person], options: LayoutOptions
) -> str | None:
    """
    Pick the person anchoring generation 0.

    An explicit ``options.root_id`` must be in ``persons``, otherwise
    UnknownRootPerson is raised. Without one, ``options.root_policy`` chooses
    among persons with no recorded parents, falling back to the first person.
    """
    if options.root_id is not None:
        if not any(p.id == options.root_id for p in persons):
            raise UnknownRootPerson(options.root_id)
        return options.root_id

    if not persons:
        return None
    if options.root_policy == "first":
        return persons[0].id

    parentless = [p for p in persons if not graph.parents(p.id)]
    if not parentless:
        return persons[0].id

    # min() keeps the first of equal keys, so ties go to input order
    if options.root_policy == "earliest_birth":
        return min(parentless, key=_birth_key).id

    bound = len(graph.children_of) + 1
    return min(parentless, key=lambda p: -len(descendant_ids(graph, p.id, bound))).id


# ============================================================================
# Pass 1: claim
# ============================================================================


def _claim(
    graph: FamilyGraph, root_id: str, known: set[str], include_spouse_children: bool
) -> dict[str, _Unit]:
    """Return family units keyed by person id, in placement (pre-)order."""
    units: dict[str, _Unit] = {}
    claimed: set[str] = set()

    def open_unit(pid: str) -> _Unit:
        claimed.add(pid)
        spouses = [
            link
            for link in graph.spouses(pid)
            if link.spouse_id in known and link.spouse_id not in claimed
        ]
        claimed.update(link.spouse_id for link in spouses)
        unit = _Unit(pid, spouses)
        units[pid] = unit
        return unit

    def candidates(unit: _Unit) -> Iterator[tuple[str, str]]:
        for child in graph.children(unit.person_id):
            yield unit.person_id, child
        if include_spouse_children:
            for link in unit.spouses:
                for child in graph.children(link.spouse_id):
                    yield link.spouse_id, child

    root = open_unit(root_id)
    stack = [(root, candidates(root))]
    while stack:
        unit, pending = stack[-1]
        for parent_id, child_id in pending:
            if child_id in known and child_id not in claimed:
                unit.children.append((parent_id, child_id))
                child = open_unit(child_id)
                stack.append((child, candidates(child)))
                break
        else:
            stack.pop()

    return units


# ============================================================================
# Pass 2: measure
# ============================================================================


def _own_width(unit: _Unit, options: LayoutOptions) -> float:
    return options.node_width + len(unit.spouses) * (options.node_width + options.spouse_gap)


def _children_width(unit: _Unit, widths: dict[str, float], options: LayoutOptions) -> float:
    if not unit.children:
        return 0.0
    total = sum(widths[child] for _, child in unit.children)
    return total + (len(unit.children) - 1) * options.sibling_gap


def _measure(units: dict[str, _Unit], options: LayoutOptions) -> dict[str, float]:
    widths: dict[str, float] = {}
    # Children are opened after their parent, so reversed pre-order is bottom-up
    for pid in reversed(list(units)):
        unit = units[pid]
        widths[pid] = max(_own_width(unit, options), _children_width(unit, widths, options))
    return widths


# ============================================================================
# Pass 3: place
# ============================================================================


def _spouse_metadata(rel: Relationship) -> dict:
    return {
        "marriage_year": year_of(rel.marriage_date),
        "is_divorced": bool(rel.divorce_date),
    }


def _place(
    units: dict[str, _Unit],
    widths: dict[str, float],
    root_id: str,
    options: LayoutOptions,
) -> tuple[dict[str, Position], list[LayoutEdge], int]:
    positions: dict[str, Position] = {}
    edges: list[LayoutEdge] = []
    deepest = 0
    step = options.node_width + options.spouse_gap

    stack = [(root_id, 0.0, 0)]
    while stack:
        pid, left, level = stack.pop()
        unit = units[pid]
        width = widths[pid]
        deepest = max(deepest, level)
        y = level * options.generation_height

        # Person and spouses form a block centred in the footprint
        x = left + (width - _own_width(unit, options)) / 2 + options.node_width / 2
        positions[pid] = Position(x, y)
        for i, link in enumerate(unit.spouses, start=1):
            positions[link.spouse_id] = Position(x + i * step, y)
            edges.append(
                LayoutEdge(pid, link.spouse_id, EDGE_SPOUSE, _spouse_metadata(link.relationship))
            )

        child_left = left + (width - _children_width(unit, widths, options)) / 2
        pending = []
        for parent_id, child_id in unit.children:
            edges.append(LayoutEdge(parent_id, child_id, EDGE_PARENT_CHILD))
            pending.append((child_id, child_left, level + 1))
            child_left += widths[child_id] + options.sibling_gap
        stack.extend(reversed(pending))

    return positions, edges, deepest


# ============================================================================
# Entry point
# ============================================================================


def layout(
    graph: FamilyGraph,
    persons: Sequence[Person] | None = None,
    options: LayoutOptions | None = None,
    **overrides,
) -> LayoutResult:
    """
    Compute a position for every person in ``persons``.

    ``persons`` defaults to the persons the graph was built from. Keyword
    overrides are applied on top of ``options`` (e.g. ``root_id="p1"``).
    Malformed input (orphans, cycles, disconnected branches) never raises;
    only an explicit root id missing from ``persons`` does.
    """
    options = options or LayoutOptions()
    if overrides:
        options = dataclasses.replace(options, **overrides)

    if persons is None:
        persons = list(graph.persons.values())
    else:
        unique: dict[str, Person] = {}
        for person in persons:
            unique.setdefault(person.id, person)
        persons = list(unique.values())

    root_id = select_root(graph, persons, options)
    if root_id is None:
        return LayoutResult(positions={}, edges=[], node_width=options.node_width)

    known = {p.id for p in persons}
    units = _claim(graph, root_id, known, options.include_spouse_children)
    widths = _measure(units, options)
    positions, edges, deepest = _place(units, widths, root_id, options)

    overflow_ids = [p.id for p in persons if p.id not in positions]
    overflow_y = (deepest + 2) * options.generation_height
    x = options.node_width / 2
    for pid in overflow_ids:
        positions[pid] = Position(x, overflow_y)
        x += options.node_width + options.sibling_gap

    if options.direction == "rtl":
        positions = {pid: Position(-p.x, p.y) for pid, p in positions.items()}

    logger.debug(
        "Laid out %d persons from root %s: %d edges, %d generations, %d in overflow row",
        len(positions),
        root_id,
        len(edges),
        deepest + 1,
        len(overflow_ids),
    )
    return LayoutResult(
        positions=positions,
        edges=edges,
        root_id=root_id,
        overflow_ids=overflow_ids,
        node_width=options.node_width,
    )
