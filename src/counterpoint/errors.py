"""Exceptions raised by graph store and snapshot operations."""


class CounterpointError(Exception):
    """Base exception for transit map operations."""

    pass


class DuplicateEntityError(CounterpointError):
    """Raised when an entity id is already on the map."""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Entity '{entity_id}' is already on the map")


class UnknownEntityError(CounterpointError):
    """Raised when an operation references an entity that is not on the map."""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Unknown entity: {entity_id}")


class MalformedSnapshotError(CounterpointError):
    """Raised when a serialized snapshot is missing required structure."""

    pass
