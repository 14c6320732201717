"""
Graph module for the transit map.

Owns the entity/relationship collection and its invariants. Every mutation
goes through GraphStore; callers receive independent copies through
snapshots.
"""

import copy
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import networkx as nx

from .errors import DuplicateEntityError, UnknownEntityError
from .models import Entity, GraphSnapshot, LineType, Relationship

logger = logging.getLogger(__name__)


class GraphStore:
    """Entity and relationship store for the transit map."""

    def __init__(self, snapshot: Optional[GraphSnapshot] = None):
        self._entities: Dict[str, Entity] = {}
        self._relationships: List[Relationship] = []
        if snapshot is not None:
            self.restore(snapshot)

    @property
    def entities(self) -> Mapping[str, Entity]:
        """Read-only view of entities keyed by id."""
        return dict(self._entities)

    @property
    def relationships(self) -> List[Relationship]:
        """Relationships in insertion order (a copy of the list)."""
        return list(self._relationships)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def get_entity(self, entity_id: str) -> Optional[Entity]:
        """Return the entity with this id, or None."""
        return self._entities.get(entity_id)

    def add_entity(
        self, entity: Entity, relationships: Iterable[Relationship] = ()
    ) -> None:
        """
        Insert an entity and append the relationships discovered with it.

        Args:
            entity: The new entity
            relationships: Relationships to append after the existing ones

        Raises:
            DuplicateEntityError: If the id is already present. Nothing is
                changed in that case.
        """
        if entity.id in self._entities:
            raise DuplicateEntityError(entity.id)

        new_relationships = list(relationships)
        self._entities[entity.id] = entity
        self._relationships.extend(new_relationships)
        logger.info(
            "Added entity %s with %d relationships", entity.id, len(new_relationships)
        )

    def add_relationships(self, relationships: Iterable[Relationship]) -> None:
        """Append relationships without touching entities."""
        self._relationships.extend(relationships)

    def replace_entity(self, entity: Entity) -> None:
        """
        Replace an existing entity with a new value.

        Raises:
            UnknownEntityError: If no entity with this id exists.
        """
        if entity.id not in self._entities:
            raise UnknownEntityError(entity.id)
        self._entities[entity.id] = entity

    def remove_entity(self, entity_id: str) -> bool:
        """
        Remove an entity and every relationship naming it.

        Returns:
            True if the entity existed, False if this was a no-op
        """
        if entity_id not in self._entities:
            logger.debug("Ignoring removal of unknown entity %s", entity_id)
            return False

        del self._entities[entity_id]
        before = len(self._relationships)
        self._relationships = [
            rel for rel in self._relationships if not rel.touches(entity_id)
        ]
        logger.info(
            "Removed entity %s and %d relationships",
            entity_id,
            before - len(self._relationships),
        )
        return True

    def clear(self) -> None:
        """Remove all entities and relationships."""
        self._entities = {}
        self._relationships = []

    def set_positions(self, positions: Mapping[str, Tuple[int, int]]) -> None:
        """Apply grid positions by replacing the affected entities."""
        for entity_id, (x, y) in positions.items():
            entity = self._entities.get(entity_id)
            if entity is not None:
                self._entities[entity_id] = replace(entity, x=x, y=y)

    def has_pair(
        self, a: str, b: str, line_type: Optional[LineType] = None
    ) -> bool:
        """Whether a relationship joins a and b (in either direction)."""
        pair = tuple(sorted((a, b)))
        return any(
            rel.pair == pair and (line_type is None or rel.type == line_type)
            for rel in self._relationships
        )

    def get_snapshot(self) -> GraphSnapshot:
        """Return a deep copy of the current state."""
        return GraphSnapshot(
            entities=copy.deepcopy(self._entities),
            relationships=copy.deepcopy(self._relationships),
        )

    def restore(self, snapshot: GraphSnapshot) -> None:
        """Replace the current state with a deep copy of snapshot."""
        self._entities = copy.deepcopy(dict(snapshot.entities))
        self._relationships = copy.deepcopy(list(snapshot.relationships))

    def to_networkx(self) -> nx.MultiGraph:
        """
        Build an undirected multigraph view of the store.

        Every entity becomes a node and every relationship between two known
        entities becomes an edge keyed by its index in the relationship list,
        with the relationship stored under the "relationship" attribute.
        """
        graph = nx.MultiGraph()
        graph.add_nodes_from(self._entities)
        for index, rel in enumerate(self._relationships):
            if rel.source in self._entities and rel.target in self._entities:
                graph.add_edge(rel.source, rel.target, key=index, relationship=rel)
        return graph
