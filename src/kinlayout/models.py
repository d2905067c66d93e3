"""Data classes for family tree entities and layout output."""

from dataclasses import dataclass, field
from typing import Any

PARENT = "parent"
SPOUSE = "spouse"
SIBLING = "sibling"

RELATIONSHIP_TYPES = frozenset({PARENT, SPOUSE, SIBLING})

EDGE_PARENT_CHILD = "parentChild"
EDGE_SPOUSE = "spouse"


@dataclass(frozen=True, eq=False)
class Person:
    id: str
    name: str
    given_name: str | None = None
    surname: str | None = None
    gender: str | None = None  # "male" / "female"
    birth_date: str | None = None  # free-form, see dates.parse_date_string
    death_date: str | None = None
    is_living: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict)  # opaque payload


@dataclass(frozen=True)
class Relationship:
    person1_id: str
    person2_id: str
    relationship_type: str  # parent (person1 -> person2), spouse, sibling
    marriage_date: str | None = None
    divorce_date: str | None = None
    id: str | None = None


@dataclass(frozen=True)
class SpouseLink:
    spouse_id: str
    relationship: Relationship


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class LayoutEdge:
    source: str
    target: str
    kind: str  # parentChild, spouse
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"from": self.source, "to": self.target, "kind": self.kind}
        if self.metadata is not None:
            out["metadata"] = dict(self.metadata)
        return out


ROOT_POLICIES = ("earliest_birth", "largest_subtree", "first")
DIRECTIONS = ("ltr", "rtl")


@dataclass(frozen=True)
class LayoutOptions:
    """
    Tunable layout constants, all in abstract layout units.

    The caller scales units to pixels (or whatever the renderer uses).
    """

    root_id: str | None = None
    node_width: float = 1.0
    generation_height: float = 1.0
    sibling_gap: float = 0.5
    spouse_gap: float = 0.25
    root_policy: str = "earliest_birth"
    include_spouse_children: bool = True
    direction: str = "ltr"

    def __post_init__(self):
        if self.node_width <= 0:
            raise ValueError(f"node_width must be positive, got {self.node_width}")
        if self.generation_height <= 0:
            raise ValueError(
                f"generation_height must be positive, got {self.generation_height}"
            )
        if self.sibling_gap < 0 or self.spouse_gap < 0:
            raise ValueError("sibling_gap and spouse_gap must not be negative")
        if self.root_policy not in ROOT_POLICIES:
            raise ValueError(f"Unknown root policy: {self.root_policy!r}")
        if self.direction not in DIRECTIONS:
            raise ValueError(f"Unknown layout direction: {self.direction!r}")


@dataclass
class LayoutResult:
    positions: dict[str, Position]
    edges: list[LayoutEdge]
    root_id: str | None = None
    overflow_ids: list[str] = field(default_factory=list)
    node_width: float = 1.0

    def bounds(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) of the node footprints."""
        if not self.positions:
            return (0.0, 0.0, 0.0, 0.0)
        half = self.node_width / 2
        xs = [p.x for p in self.positions.values()]
        ys = [p.y for p in self.positions.values()]
        return (min(xs) - half, min(ys), max(xs) + half, max(ys))

    def to_dict(self) -> dict[str, Any]:
        return {
            "positions": {pid: {"x": p.x, "y": p.y} for pid, p in self.positions.items()},
            "edges": [e.to_dict() for e in self.edges],
        }
