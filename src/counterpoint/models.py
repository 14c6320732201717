"""
Data models for the transit map.

This module contains the value types shared by every stage of the pipeline:
stations (entities), lines (relationships) and whole-graph snapshots. All
entity and relationship types are frozen; the graph store replaces them
instead of mutating them, which keeps snapshots independent.

Classes:
    LineType: Closed enumeration of relationship types.
    RelationshipMetadata: Display-only data attached to a relationship.
    Relationship: A typed connection between two entities.
    PotentialConnection: A connection to an entity not yet on the map.
    Entity: A station on the grid.
    GraphSnapshot: Deep, independent copy of the whole graph.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class LineType(Enum):
    """Relationship types. Each type is drawn as its own colored line."""

    MEMBERSHIP = "membership"
    STUDIO = "studio"
    WRITING = "writing"
    LABEL = "label"
    FEATURE = "feature"
    COVER = "cover"
    INFLUENCE = "influence"


@dataclass(frozen=True)
class RelationshipMetadata:
    """
    Display-only data for a relationship.

    Routing and bundling never read these fields.

    Attributes:
        role: Role label (e.g. "Guitarist", "Co-Writer").
        years: Year or period string.
        titles: Ordered titles of shared works or releases.
    """

    role: Optional[str] = None
    years: Optional[str] = None
    titles: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Relationship:
    """
    A typed connection between two entities.

    Stored with a direction (source -> target) but treated as undirected for
    bundling and route finding.
    """

    source: str
    target: str
    type: LineType
    metadata: RelationshipMetadata = field(default_factory=RelationshipMetadata)

    @property
    def pair(self) -> Tuple[str, str]:
        """Endpoint ids in sorted order."""
        return tuple(sorted((self.source, self.target)))

    def touches(self, entity_id: str) -> bool:
        """Whether either endpoint is the given entity."""
        return self.source == entity_id or self.target == entity_id

    def other_end(self, entity_id: str) -> Optional[str]:
        """The endpoint opposite to entity_id, or None if not incident."""
        if self.source == entity_id:
            return self.target
        if self.target == entity_id:
            return self.source
        return None


@dataclass(frozen=True)
class PotentialConnection:
    """A classified connection whose target is not on the map yet."""

    target_id: str
    target_name: str
    type: LineType
    metadata: RelationshipMetadata = field(default_factory=RelationshipMetadata)


@dataclass(frozen=True)
class Entity:
    """
    A station on the grid.

    Attributes:
        id: Stable external identifier.
        name: Display name.
        category: Entity kind reported by the data source (e.g. "group").
        origin_year: Optional year used only for layout ordering.
        x: Grid column, assigned by the layout engine.
        y: Grid row, assigned by the layout engine.
        hub: Hub-weighted cell computed once when the entity was inserted.
        potential_connections: Connections to entities not yet on the map.
        extra: Opaque display data (genres, images, links).
    """

    id: str
    name: str
    category: str = "artist"
    origin_year: Optional[int] = None
    x: int = 0
    y: int = 0
    hub: Tuple[int, int] = (0, 0)
    potential_connections: Tuple[PotentialConnection, ...] = ()
    extra: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def position(self) -> Tuple[int, int]:
        """Grid cell as an (x, y) tuple."""
        return (self.x, self.y)


@dataclass
class GraphSnapshot:
    """
    Complete graph state.

    Entity iteration order carries no meaning; relationship order is
    insertion order and drives bundle index assignment.
    """

    entities: Dict[str, Entity] = field(default_factory=dict)
    relationships: List[Relationship] = field(default_factory=list)

    def copy(self) -> "GraphSnapshot":
        """Return a deep, independent copy."""
        return GraphSnapshot(
            entities=copy.deepcopy(self.entities),
            relationships=copy.deepcopy(self.relationships),
        )

    def is_empty(self) -> bool:
        """Whether the snapshot holds no entities and no relationships."""
        return not self.entities and not self.relationships
