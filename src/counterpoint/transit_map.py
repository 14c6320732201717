"""
Main transit map module.

Combines the graph store, layout, edit history, route finding and viewport
into the editing session a user interacts with.
"""

import logging
from dataclasses import replace
from typing import Collection, Iterable, List, Optional, Tuple

from .constants import (
    DEFAULT_ORIGIN_YEAR,
    DEFAULT_SCREEN_HEIGHT,
    DEFAULT_SCREEN_WIDTH,
    GRID_SIZE,
    HISTORY_CAPACITY,
    LINE_GAP,
    MAX_ROUTE_DEPTH,
    MAX_SUGGESTIONS,
)
from .graph import GraphStore
from .history import EditHistory
from .layout import SpiralLayout, hub_position
from .models import Entity, GraphSnapshot, LineType, Relationship
from .pathfinding import RouteStep, find_route
from .router import grid_to_pixel
from .scene import Scene, build_scene
from .snapshot import dumps, loads
from .suggestions import Suggestion, suggest
from .viewport import ViewportController

logger = logging.getLogger(__name__)


class TransitMap:
    """
    An editable transit map of entities and relationships.

    Example:
        >>> transit = TransitMap()
        >>> transit.add_entity(Entity(id="a", name="A", origin_year=1960))
        True
        >>> transit.store.get_entity("a").position
        (0, 0)
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        line_gap: float = LINE_GAP,
        max_route_depth: int = MAX_ROUTE_DEPTH,
        history_capacity: int = HISTORY_CAPACITY,
        screen_width: float = DEFAULT_SCREEN_WIDTH,
        screen_height: float = DEFAULT_SCREEN_HEIGHT,
        default_year: int = DEFAULT_ORIGIN_YEAR,
        auto_fit: bool = True,
        snapshot: Optional[GraphSnapshot] = None,
    ):
        """
        Initialize the transit map.

        Args:
            grid_size: Pixels per grid cell
            line_gap: Spacing between parallel lines
            max_route_depth: Maximum number of relationships in a route
            history_capacity: Number of undo steps kept
            screen_width: Drawing surface width in screen pixels
            screen_height: Drawing surface height in screen pixels
            default_year: Layout year for entities without one
            auto_fit: Whether to fit the viewport after adding entities
            snapshot: Optional initial graph state
        """
        self.grid_size = grid_size
        self.line_gap = line_gap
        self.max_route_depth = max_route_depth
        self.auto_fit = auto_fit

        self.store = GraphStore(snapshot)
        self.history = EditHistory(self.store, capacity=history_capacity)
        self.layout_engine = SpiralLayout(default_year=default_year)
        self.viewport = ViewportController(screen_width, screen_height)

        self.selected_entity: Optional[str] = None
        self.selected_relationship: Optional[Relationship] = None
        self.start_id: Optional[str] = None
        self.end_id: Optional[str] = None
        self.last_error: Optional[str] = None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_entity(
        self, entity: Entity, relationships: Iterable[Relationship] = ()
    ) -> bool:
        """
        Add a new station with the relationships discovered alongside it.

        The hub position is computed from these relationships and the
        entity's potential connections, then frozen on the entity, then the whole map is laid out again.

        Returns:
            False if the entity is already on the map (nothing changes)
        """
        if entity.id in self.store:
            self.last_error = f"'{entity.name}' is already on the map"
            logger.warning("Skipping duplicate entity %s", entity.id)
            return False

        self.last_error = None
        self.history.push()

        relationships = list(relationships)
        hub = hub_position(relationships, entity.potential_connections)
        self.store.add_entity(
            replace(entity, hub=hub, x=hub[0], y=hub[1]), relationships
        )
        self.relayout()
        return True

    def explore(
        self,
        anchor_id: str,
        entities: Iterable[Entity],
        relationships: Iterable[Relationship],
        derived: Iterable[Relationship] = (),
    ) -> int:
        """
        Add a batch of entities and relationships discovered from an anchor.

        Entities already on the map are skipped. A relationship is dropped
        when its pair already has a relationship of the same type, or, for
        relationships touching the anchor, any relationship at all.

        Derived relationships (shared writing credits, shared labels) are
        inferred rather than reported by the data source. They are only
        dropped when their pair already has a relationship of the same
        type, even when they touch the anchor.

        Args:
            anchor_id: The station the batch was discovered from
            entities: New entities in the batch
            relationships: Relationships reported for the batch
            derived: Relationships inferred from shared works or labels

        Returns:
            Number of relationships added (0 if the anchor is unknown)
        """
        if anchor_id not in self.store:
            self.last_error = f"Unknown entity: {anchor_id}"
            logger.debug("Ignoring explore from unknown entity %s", anchor_id)
            return 0

        self.last_error = None
        self.history.push()

        relationships = list(relationships)
        for entity in entities:
            if entity.id in self.store:
                continue
            own = [rel for rel in relationships if rel.touches(entity.id)]
            hub = hub_position(own, entity.potential_connections)
            self.store.add_entity(replace(entity, hub=hub, x=hub[0], y=hub[1]))

        accepted: List[Relationship] = []
        for rel in relationships:
            if self._is_duplicate(rel, anchor_id, accepted):
                continue
            accepted.append(rel)

        derived = list(derived)
        for rel in derived:
            if self._has_typed_pair(rel, accepted):
                continue
            accepted.append(rel)

        self.store.add_relationships(accepted)
        self.relayout()
        logger.info(
            "Explored %s: %d relationships added, %d duplicates dropped",
            anchor_id,
            len(accepted),
            len(relationships) + len(derived) - len(accepted),
        )
        return len(accepted)

    def _is_duplicate(
        self, rel: Relationship, anchor_id: str, pending: List[Relationship]
    ) -> bool:
        if rel.touches(anchor_id):
            return self.store.has_pair(rel.source, rel.target) or any(
                p.pair == rel.pair for p in pending
            )
        return self._has_typed_pair(rel, pending)

    def _has_typed_pair(
        self, rel: Relationship, pending: List[Relationship]
    ) -> bool:
        return self.store.has_pair(rel.source, rel.target, rel.type) or any(
            p.pair == rel.pair and p.type == rel.type for p in pending
        )

    def refresh_entity(
        self, entity: Entity, relationships: Iterable[Relationship] = ()
    ) -> bool:
        """
        Replace an entity's display data with fresh values.

        Coordinates and the frozen hub are kept. New relationships are added
        only for pairs that are not already connected.

        Returns:
            False if the entity is not on the map
        """
        current = self.store.get_entity(entity.id)
        if current is None:
            self.last_error = f"Unknown entity: {entity.id}"
            return False

        self.last_error = None
        self.history.push()
        self.store.replace_entity(
            replace(entity, x=current.x, y=current.y, hub=current.hub)
        )

        accepted: List[Relationship] = []
        for rel in relationships:
            if self.store.has_pair(rel.source, rel.target):
                continue
            if any(p.pair == rel.pair for p in accepted):
                continue
            accepted.append(rel)
        self.store.add_relationships(accepted)
        return True

    def remove_entity(self, entity_id: str) -> bool:
        """
        Remove a station and every line touching it.

        Returns:
            False if the entity was not on the map (nothing changes)
        """
        if entity_id not in self.store:
            return False

        self.history.push()
        self.store.remove_entity(entity_id)

        if self.selected_entity == entity_id:
            self.selected_entity = None
        if self.start_id == entity_id:
            self.start_id = None
        if self.end_id == entity_id:
            self.end_id = None
        if (
            self.selected_relationship is not None
            and self.selected_relationship.touches(entity_id)
        ):
            self.selected_relationship = None
        return True

    def clear(self) -> None:
        """Remove everything from the map."""
        self.history.push()
        self.store.clear()
        self.clear_selection()
        self.start_id = None
        self.end_id = None

    def relayout(self) -> None:
        """Lay out every station again and optionally refit the viewport."""
        result = self.layout_engine.layout(self.store.entities.values())
        self.store.set_positions(result.positions)
        if self.auto_fit:
            self.fit_to_content()

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    def undo(self) -> bool:
        """Undo the last change. Selections are cleared."""
        if not self.history.undo():
            return False
        self.clear_selection()
        return True

    def redo(self) -> bool:
        """Redo the last undone change. Selections are cleared."""
        if not self.history.redo():
            return False
        self.clear_selection()
        return True

    # -------------------------------------------------------------------------
    # Selection & routes
    # -------------------------------------------------------------------------

    def clear_selection(self) -> None:
        self.selected_entity = None
        self.selected_relationship = None

    def select_entity(self, entity_id: Optional[str]) -> bool:
        """Select a station, or clear with None. Unknown ids are ignored."""
        if entity_id is not None and entity_id not in self.store:
            return False
        self.selected_entity = entity_id
        return True

    def select_relationship(self, relationship: Optional[Relationship]) -> None:
        """Select a line; selecting the selected line again deselects it."""
        if relationship is not None and relationship is self.selected_relationship:
            relationship = None
        self.selected_relationship = relationship

    def set_route_endpoints(
        self, start_id: Optional[str], end_id: Optional[str]
    ) -> Optional[List[RouteStep]]:
        """Set the route start and end stations and return the new route."""
        self.start_id = start_id
        self.end_id = end_id
        return self.route

    @property
    def route(self) -> Optional[List[RouteStep]]:
        """Shortest route between the start and end stations, if any."""
        return find_route(self.store, self.start_id, self.end_id, self.max_route_depth)

    def find_route(
        self, start_id: str, end_id: str, max_depth: Optional[int] = None
    ) -> Optional[List[RouteStep]]:
        """Find a route between any two stations."""
        if max_depth is None:
            max_depth = self.max_route_depth
        return find_route(self.store, start_id, end_id, max_depth)

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def station_positions(self) -> List[Tuple[int, int]]:
        """World pixel position of every station."""
        return [
            grid_to_pixel(entity.x, entity.y, self.grid_size)
            for entity in self.store.entities.values()
        ]

    def fit_to_content(self, aspect_ratio: Optional[float] = None) -> None:
        """Fit the viewport around every station."""
        self.viewport.fit_to_content(self.station_positions(), aspect_ratio)

    def navigate_minimap(self, local_x: float, local_y: float) -> bool:
        """Center the viewport on a mini-map point."""
        return self.viewport.navigate_minimap(
            local_x, local_y, self.station_positions()
        )

    def scene(self, visible_types: Optional[Collection[LineType]] = None) -> Scene:
        """Build the drawable scene for the current state."""
        return build_scene(
            self.store,
            route=self.route,
            selected=self.selected_relationship,
            selected_entity=self.selected_entity,
            start_id=self.start_id,
            end_id=self.end_id,
            visible_types=visible_types,
            grid_size=self.grid_size,
            gap=self.line_gap,
        )

    def suggestions(self, limit: int = MAX_SUGGESTIONS) -> List[Suggestion]:
        """Off-map entities most referenced by stations on the map."""
        return suggest(self.store.entities, limit)

    # -------------------------------------------------------------------------
    # Persistence boundary
    # -------------------------------------------------------------------------

    def to_json(self) -> str:
        """Serialize the current graph."""
        return dumps(self.store.get_snapshot())

    def load_json(self, text: str) -> None:
        """
        Replace the graph with a serialized snapshot.

        Malformed input loads as an empty graph. History and selections are
        reset.
        """
        self.store.restore(loads(text))
        self.history.clear()
        self.clear_selection()
        self.start_id = None
        self.end_id = None
