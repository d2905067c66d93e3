"""Structural errors raised by the graph builder and layout engine."""

from kinlayout.models import Relationship


class KinshipError(Exception):
    """Base class for kinlayout errors."""


class InvalidRelationshipType(KinshipError, ValueError):
    def __init__(self, relationship: Relationship):
        self.relationship = relationship
        self.relationship_type = relationship.relationship_type
        super().__init__(
            f"Invalid relationship type {self.relationship_type!r} between "
            f"{relationship.person1_id} and {relationship.person2_id}"
        )


class UnknownRootPerson(KinshipError, LookupError):
    def __init__(self, person_id: str):
        self.person_id = person_id
        super().__init__(f"Person ID {person_id} not found in person list")
