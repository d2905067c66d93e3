"""Relationship graph building: flat relationship records to adjacency maps."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

import networkx as nx

from kinlayout.errors import InvalidRelationshipType
from kinlayout.models import (
    PARENT,
    RELATIONSHIP_TYPES,
    SIBLING,
    SPOUSE,
    Person,
    Relationship,
    SpouseLink,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FamilyGraph:
    """
    Immutable adjacency structures for one tree.

    Every map is keyed by person id and holds tuples in first-occurrence order.
    Ids may reference persons that were never loaded (forward references);
    they appear in the maps but not in ``persons``.
    """

    persons: Mapping[str, Person]
    children_of: Mapping[str, tuple[str, ...]]
    parents_of: Mapping[str, tuple[str, ...]]
    spouses_of: Mapping[str, tuple[SpouseLink, ...]]
    siblings_of: Mapping[str, tuple[str, ...]]

    @property
    def person_ids(self) -> list[str]:
        return list(self.persons)

    def person(self, person_id: str) -> Person | None:
        return self.persons.get(person_id)

    def has_person(self, person_id: str) -> bool:
        return person_id in self.persons

    def knows(self, person_id: str) -> bool:
        """True if the id has a person record or appears in any relationship."""
        return (
            person_id in self.persons
            or person_id in self.children_of
            or person_id in self.parents_of
            or person_id in self.spouses_of
            or person_id in self.siblings_of
        )

    def children(self, person_id: str) -> tuple[str, ...]:
        return self.children_of.get(person_id, ())

    def parents(self, person_id: str) -> tuple[str, ...]:
        return self.parents_of.get(person_id, ())

    def spouses(self, person_id: str) -> tuple[SpouseLink, ...]:
        return self.spouses_of.get(person_id, ())

    def recorded_siblings(self, person_id: str) -> tuple[str, ...]:
        return self.siblings_of.get(person_id, ())


def _freeze(adjacency: dict[str, list]) -> Mapping[str, tuple]:
    return MappingProxyType({key: tuple(values) for key, values in adjacency.items()})


def build_graph(
    persons: Iterable[Person], relationships: Iterable[Relationship]
) -> FamilyGraph:
    """
    Build the adjacency maps for a family graph.

    Raises InvalidRelationshipType for a type outside parent/spouse/sibling.
    Duplicate records between the same pair are collapsed; self-links are
    skipped. Neither is an error.
    """
    person_map: dict[str, Person] = {}
    for person in persons:
        if person.id in person_map:
            logger.warning("Duplicate person ID %s; keeping first record", person.id)
            continue
        person_map[person.id] = person

    children_of: dict[str, list[str]] = {}
    parents_of: dict[str, list[str]] = {}
    spouses_of: dict[str, list[SpouseLink]] = {}
    siblings_of: dict[str, list[str]] = {}

    # Seen (personId, relatedId) pairs per map, for de-duplication
    seen: dict[str, set[tuple[str, str]]] = {PARENT: set(), SPOUSE: set(), SIBLING: set()}

    for rel in relationships:
        if rel.relationship_type not in RELATIONSHIP_TYPES:
            raise InvalidRelationshipType(rel)

        a, b = rel.person1_id, rel.person2_id
        if a == b:
            logger.warning("Skipping %s relationship of %s to itself", rel.relationship_type, a)
            continue

        if rel.relationship_type == PARENT:
            if (a, b) in seen[PARENT]:
                continue
            seen[PARENT].add((a, b))
            children_of.setdefault(a, []).append(b)
            parents_of.setdefault(b, []).append(a)

        elif rel.relationship_type == SPOUSE:
            pair = tuple(sorted((a, b)))
            if pair in seen[SPOUSE]:
                continue
            seen[SPOUSE].add(pair)
            spouses_of.setdefault(a, []).append(SpouseLink(b, rel))
            spouses_of.setdefault(b, []).append(SpouseLink(a, rel))

        else:
            pair = tuple(sorted((a, b)))
            if pair in seen[SIBLING]:
                continue
            seen[SIBLING].add(pair)
            siblings_of.setdefault(a, []).append(b)
            siblings_of.setdefault(b, []).append(a)

    graph = FamilyGraph(
        persons=MappingProxyType(person_map),
        children_of=_freeze(children_of),
        parents_of=_freeze(parents_of),
        spouses_of=_freeze(spouses_of),
        siblings_of=_freeze(siblings_of),
    )
    logger.debug(
        "Built family graph: %d persons, %d parent links, %d spouse pairs, %d sibling pairs",
        len(person_map),
        len(seen[PARENT]),
        len(seen[SPOUSE]),
        len(seen[SIBLING]),
    )
    return graph


def to_networkx(graph: FamilyGraph) -> nx.DiGraph:
    """
    Export the family graph as a NetworkX directed graph.

    Parent edges point parent -> child. Spouse and sibling edges are added in
    both directions so either endpoint sees them as successors. Forward
    referenced ids become attribute-less nodes.
    """
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid clashing with renderers
    for pid, person in graph.persons.items():
        G.add_node(
            pid,
            person_name=person.name,
            gender=person.gender,
            birth_date=person.birth_date,
            death_date=person.death_date,
            is_living=person.is_living,
        )

    for parent, children in graph.children_of.items():
        for child in children:
            G.add_edge(parent, child, relationship_type=PARENT)

    for pid, links in graph.spouses_of.items():
        for link in links:
            if G.has_edge(pid, link.spouse_id):
                continue
            G.add_edge(
                pid,
                link.spouse_id,
                relationship_type=SPOUSE,
                marriage_date=link.relationship.marriage_date,
                divorce_date=link.relationship.divorce_date,
            )

    for pid, siblings in graph.siblings_of.items():
        for sibling in siblings:
            if not G.has_edge(pid, sibling):
                G.add_edge(pid, sibling, relationship_type=SIBLING)

    return G
