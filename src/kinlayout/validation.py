"""Structural diagnostics for a built family graph."""

import networkx as nx

from kinlayout.dates import parse_date_string
from kinlayout.graph import FamilyGraph

MIN_PARENT_AGE_YEARS = 12


def _label(graph: FamilyGraph, person_id: str) -> str:
    person = graph.person(person_id)
    return person.name if person else person_id


def validate_graph(graph: FamilyGraph) -> list[str]:
    """
    Check the family graph for:
    - Cycles in parent-child relationships
    - Relationships referencing persons that were never loaded
    - Impossible ages (child born before parent, parent too young)
    - Death before birth

    Returns a list of warning messages. Nothing here is fatal: the traversal
    and layout engines tolerate every issue reported.
    """
    warnings: list[str] = []

    # Parent-only graph for cycle detection
    parent_graph = nx.DiGraph(
        [(parent, child) for parent, children in graph.children_of.items() for child in children]
    )
    try:
        cycle = nx.find_cycle(parent_graph, orientation="original")
        cycle_nodes = [edge[0] for edge in cycle]
        warnings.append(f"Cycle detected in parent-child relationships: {cycle_nodes}")
    except nx.NetworkXNoCycle:
        pass

    referenced: dict[str, None] = {}
    for adjacency in (graph.children_of, graph.parents_of, graph.spouses_of, graph.siblings_of):
        for pid in adjacency:
            referenced.setdefault(pid)
    missing = [pid for pid in referenced if not graph.has_person(pid)]
    if missing:
        warnings.append(f"Relationships reference unknown persons: {missing}")

    for parent, children in graph.children_of.items():
        parent_birth = parse_date_string(getattr(graph.person(parent), "birth_date", None))
        if not parent_birth:
            continue
        for child in children:
            child_birth = parse_date_string(getattr(graph.person(child), "birth_date", None))
            if not child_birth:
                continue

            # ISO dates compare correctly as strings
            if child_birth < parent_birth:
                warnings.append(
                    f"Impossible: {_label(graph, child)} born before parent "
                    f"{_label(graph, parent)}"
                )
            elif int(child_birth[:4]) - int(parent_birth[:4]) < MIN_PARENT_AGE_YEARS:
                warnings.append(
                    f"Suspicious: {_label(graph, parent)} was less than "
                    f"{MIN_PARENT_AGE_YEARS} years old when {_label(graph, child)} was born"
                )

    for person in graph.persons.values():
        birth = parse_date_string(person.birth_date)
        death = parse_date_string(person.death_date)
        if birth and death and death < birth:
            warnings.append(f"Impossible: {person.name} died before being born")

    return warnings
