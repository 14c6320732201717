"""
Layout module for placing stations on the transit map grid.

Two placement steps:
- Hub placement: a weighted average of fixed hub cells, computed once per
  entity at insertion time from the relationships it arrived with.
- Spiral layout: a full, deterministic re-layout of every entity along a
  widening rectangular spiral, ordered by origin year.

The spiral layout is recomputed from scratch on every insertion, so earlier
stations may move when new ones arrive.
"""

import logging
import math
from dataclasses import dataclass, field
from itertools import chain
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .constants import DEFAULT_ORIGIN_YEAR, HUBS, SPIRAL_DIRECTIONS
from .models import Entity, LineType, PotentialConnection, Relationship

logger = logging.getLogger(__name__)

# Hub each weighted relationship type is attracted to
HUB_FOR_TYPE = {
    LineType.MEMBERSHIP: "personnel",
    LineType.STUDIO: "studio",
    LineType.WRITING: "writing",
    LineType.LABEL: "label",
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def hub_position(
    relationships: Iterable[Relationship],
    potential_connections: Iterable[PotentialConnection] = (),
) -> Tuple[int, int]:
    """
    Compute the hub-weighted grid cell for a new entity.

    Each membership / studio / writing / label connection adds one unit of
    weight to its hub, whether it leads to a station on the map or off it.
    Other types add nothing.

    Args:
        relationships: The relationships the entity was inserted with
        potential_connections: The entity's connections to entities not on
            the map yet

    Returns:
        (x, y) rounded to the nearest cell, or (0, 0) with no weighted
        relationships
    """
    weights = {hub: 0 for hub in HUBS}
    for conn in chain(relationships, potential_connections):
        hub = HUB_FOR_TYPE.get(conn.type)
        if hub is not None:
            weights[hub] += 1

    total = sum(weights.values())
    if total == 0:
        return (0, 0)

    x = sum(weights[hub] / total * HUBS[hub][0] for hub in HUBS)
    y = sum(weights[hub] / total * HUBS[hub][1] for hub in HUBS)
    return (_round_half_up(x), _round_half_up(y))


def spiral_cells() -> Iterator[Tuple[int, int]]:
    """
    Yield grid cells along the outward rectangular spiral.

    Starts at the origin and walks east, south, west, north. Horizontal steps
    cover two cells. The number of steps per direction grows by one after
    every second turn.
    """
    x, y = 0, 0
    direction = 0
    steps_in_direction = 0
    steps_before_turn = 1
    turns = 0

    while True:
        yield (x, y)
        dx, dy = SPIRAL_DIRECTIONS[direction]
        x += dx
        y += dy
        steps_in_direction += 1

        if steps_in_direction >= steps_before_turn:
            steps_in_direction = 0
            direction = (direction + 1) % len(SPIRAL_DIRECTIONS)
            turns += 1
            # One ring completed every two turns
            if turns % 2 == 0:
                steps_before_turn += 1


@dataclass
class LayoutResult:
    """Result of the spiral layout."""

    positions: Dict[str, Tuple[int, int]] = field(default_factory=dict)
    order: List[str] = field(default_factory=list)  # Placement order


class SpiralLayout:
    """
    Spiral grid layout.

    Entities are sorted by origin year (missing years sort as
    default_year) and each takes the next unoccupied spiral cell.
    """

    def __init__(self, default_year: int = DEFAULT_ORIGIN_YEAR):
        self.default_year = default_year

    def sort_key(self, entity: Entity) -> int:
        """Year used to order an entity."""
        if entity.origin_year is None:
            return self.default_year
        return entity.origin_year

    def layout(self, entities: Iterable[Entity]) -> LayoutResult:
        """
        Compute grid positions for the full entity set.

        Args:
            entities: Every entity on the map. Ties in year keep input order.

        Returns:
            LayoutResult with one distinct cell per entity
        """
        ordered = sorted(entities, key=self.sort_key)
        result = LayoutResult()
        occupied: Set[Tuple[int, int]] = set()
        cells = spiral_cells()

        for entity in ordered:
            cell = next(cells)
            while cell in occupied:
                cell = next(cells)
            occupied.add(cell)
            result.positions[entity.id] = cell
            result.order.append(entity.id)

        logger.debug("Laid out %d entities", len(result.order))
        return result


def compute_layout(
    entities: Iterable[Entity], default_year: Optional[int] = None
) -> Dict[str, Tuple[int, int]]:
    """
    Convenience function returning only the id -> (x, y) mapping.

    Args:
        entities: Every entity on the map
        default_year: Year for entities without one (defaults to 1970)
    """
    if default_year is None:
        default_year = DEFAULT_ORIGIN_YEAR
    return SpiralLayout(default_year=default_year).layout(entities).positions
