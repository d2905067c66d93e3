from __future__ import annotations

import pytest

from kinlayout.graph import build_graph
from kinlayout.models import Relationship
from kinlayout.traversal import (
    ancestors_of,
    descendants_of,
    family_of,
    siblings_of,
    spouses_of,
    traverse,
    walk,
)

from factories import parent, spouse


def _ids(persons) -> list[str]:
    return [p.id for p in persons]


def test_walk_yields_level_order_without_start() -> None:
    edges = {"A": ["B", "C"], "B": ["D"], "C": ["D", "E"]}

    out = list(walk("A", lambda n: edges.get(n, []), max_depth=5))
    assert out == [("B", 1), ("C", 1), ("D", 2), ("E", 2)]


def test_walk_respects_depth_cap() -> None:
    edges = {"A": ["B"], "B": ["C"], "C": ["D"]}

    assert list(walk("A", lambda n: edges.get(n, []), max_depth=2)) == [("B", 1), ("C", 2)]
    assert list(walk("A", lambda n: edges.get(n, []), max_depth=0)) == []


def test_siblings_exclude_the_person(make_people) -> None:
    people = make_people("A", "B", "C")
    graph = build_graph(people.values(), [parent("A", "B"), parent("A", "C")])

    assert siblings_of(graph, "B") == [people["C"]]
    assert siblings_of(graph, "A") == []


def test_half_siblings_are_deduplicated_across_parents(make_people) -> None:
    people = make_people("F", "M", "M2", "A", "B", "C")
    graph = build_graph(
        people.values(),
        [
            parent("F", "A"),
            parent("M", "A"),
            parent("F", "B"),
            parent("M", "B"),
            parent("M", "C"),
        ],
    )

    assert _ids(siblings_of(graph, "A")) == ["B", "C"]


def test_recorded_siblings_only_on_request(make_people) -> None:
    people = make_people("A", "B", "C")
    graph = build_graph(
        people.values(),
        [Relationship("B", "C", "sibling")],
    )

    assert siblings_of(graph, "B") == []
    assert siblings_of(graph, "B", include_recorded=True) == [people["C"]]


def test_ancestors_are_level_ordered(make_people) -> None:
    people = make_people("K", "F", "M", "GF", "GM")
    graph = build_graph(
        people.values(),
        [parent("GF", "F"), parent("GM", "M"), parent("F", "K"), parent("M", "K")],
    )

    assert _ids(ancestors_of(graph, "K")) == ["F", "M", "GF", "GM"]


def test_pedigree_collapse_returns_shared_ancestor_once(make_people) -> None:
    # K's parents F and M each descend from the same great-grandparent S
    people = make_people("K", "F", "M", "G1", "G2", "S")
    graph = build_graph(
        people.values(),
        [
            parent("F", "K"),
            parent("M", "K"),
            parent("G1", "F"),
            parent("G2", "M"),
            parent("S", "G1"),
            parent("S", "G2"),
        ],
    )

    ancestors = _ids(ancestors_of(graph, "K"))
    assert ancestors == ["F", "M", "G1", "G2", "S"]
    assert ancestors.count("S") == 1


def test_cycles_terminate_without_duplicates(make_people) -> None:
    people = make_people("A", "B")
    graph = build_graph(people.values(), [parent("A", "B"), parent("B", "A")])

    assert ancestors_of(graph, "A") == [people["B"]]
    assert descendants_of(graph, "A") == [people["B"]]


def test_descendants_respect_max_depth(make_people) -> None:
    people = make_people("A", "B", "C", "D")
    graph = build_graph(
        people.values(),
        [parent("A", "B"), parent("B", "C"), parent("C", "D")],
    )

    assert _ids(descendants_of(graph, "A", max_depth=2)) == ["B", "C"]
    assert _ids(descendants_of(graph, "A")) == ["B", "C", "D"]


def test_unloaded_ids_are_walked_through_but_not_returned(make_people) -> None:
    people = make_people("A", "G")
    graph = build_graph(people.values(), [parent("U", "A"), parent("G", "U")])

    assert ancestors_of(graph, "A") == [people["G"]]


def test_unknown_person_yields_empty_results(make_people) -> None:
    people = make_people("A", "B")
    graph = build_graph(people.values(), [parent("A", "B")])

    for kind in ("ancestors", "descendants", "siblings", "spouses", "parents", "children"):
        assert traverse(graph, "nobody", kind) == []


def test_spouses_lookup_returns_records_by_identity(make_people) -> None:
    people = make_people("A", "B", "C")
    graph = build_graph(people.values(), [spouse("A", "B"), spouse("C", "A")])

    result = spouses_of(graph, "A")
    assert result == [people["B"], people["C"]]
    assert result[0] is people["B"]


def test_traverse_dispatches_by_kind(make_people) -> None:
    people = make_people("A", "B", "C")
    graph = build_graph(people.values(), [parent("A", "B"), parent("B", "C")])

    assert _ids(traverse(graph, "C", "ancestors")) == ["B", "A"]
    assert _ids(traverse(graph, "C", "ancestors", max_depth=1)) == ["B"]
    assert _ids(traverse(graph, "A", "descendants")) == ["B", "C"]
    assert _ids(traverse(graph, "B", "parents")) == ["A"]
    assert _ids(traverse(graph, "B", "children")) == ["C"]


def test_traverse_rejects_unknown_kind(make_people) -> None:
    graph = build_graph(make_people("A").values(), [])

    with pytest.raises(ValueError):
        traverse(graph, "A", "cousins")


def test_family_of_bundles_immediate_family(make_people) -> None:
    people = make_people("GP", "F", "M", "K", "S", "KC")
    graph = build_graph(
        people.values(),
        [
            parent("GP", "F"),
            parent("F", "K"),
            parent("M", "K"),
            parent("F", "S"),
            spouse("F", "M"),
            parent("K", "KC"),
        ],
    )

    view = family_of(graph, "K")
    assert view.person is people["K"]
    assert _ids(view.parents) == ["F", "M"]
    assert _ids(view.siblings) == ["S"]
    assert _ids(view.children) == ["KC"]
    assert _ids(view.ancestors) == ["F", "M", "GP"]
    assert _ids(view.descendants) == ["KC"]
    assert view.spouses == []
