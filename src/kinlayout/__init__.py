"""Family graph traversal and hierarchical tree layout."""

from kinlayout.errors import InvalidRelationshipType, KinshipError, UnknownRootPerson
from kinlayout.graph import FamilyGraph, build_graph, to_networkx
from kinlayout.layout import layout, select_root
from kinlayout.models import (
    LayoutEdge,
    LayoutOptions,
    LayoutResult,
    Person,
    Position,
    Relationship,
    SpouseLink,
)
from kinlayout.traversal import (
    FamilyView,
    ancestors_of,
    children_of,
    descendants_of,
    family_of,
    parents_of,
    siblings_of,
    spouses_of,
    traverse,
)
from kinlayout.validation import validate_graph

__all__ = [
    "FamilyGraph",
    "FamilyView",
    "InvalidRelationshipType",
    "KinshipError",
    "LayoutEdge",
    "LayoutOptions",
    "LayoutResult",
    "Person",
    "Position",
    "Relationship",
    "SpouseLink",
    "UnknownRootPerson",
    "ancestors_of",
    "build_graph",
    "children_of",
    "descendants_of",
    "family_of",
    "layout",
    "parents_of",
    "select_root",
    "siblings_of",
    "spouses_of",
    "to_networkx",
    "traverse",
    "validate_graph",
]
