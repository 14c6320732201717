"""
Scene building for the rendering layer.

Combines bundling, line routing and route/selection state into a flat
description of what to draw. The scene carries geometry and boolean state
only; colors and stroke widths are left to the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import Collection, List, Optional

from .bundling import line_offsets
from .constants import GRID_SIZE, LINE_GAP
from .graph import GraphStore
from .models import Entity, LineType, Relationship
from .pathfinding import RouteStep, route_entities, route_pairs
from .router import grid_to_pixel, octilinear_path

logger = logging.getLogger(__name__)


@dataclass
class LineState:
    """A relationship ready to draw."""

    relationship: Relationship
    path: str
    offset: float
    in_route: bool = False
    selected: bool = False
    dimmed: bool = False


@dataclass
class StationState:
    """An entity ready to draw."""

    entity: Entity
    pixel_x: int
    pixel_y: int
    selected: bool = False
    start: bool = False
    end: bool = False
    in_route: bool = False


@dataclass
class Scene:
    """Everything the rendering layer needs for one frame."""

    lines: List[LineState] = field(default_factory=list)
    stations: List[StationState] = field(default_factory=list)


def build_scene(
    graph: GraphStore,
    route: Optional[List[RouteStep]] = None,
    selected: Optional[Relationship] = None,
    selected_entity: Optional[str] = None,
    start_id: Optional[str] = None,
    end_id: Optional[str] = None,
    visible_types: Optional[Collection[LineType]] = None,
    grid_size: int = GRID_SIZE,
    gap: float = LINE_GAP,
) -> Scene:
    """
    Build the drawable scene for the current graph.

    Bundle positions are computed over every relationship, so hiding a line
    type does not shift the remaining lines. Relationships with an endpoint
    that is not on the map are skipped.

    Args:
        graph: The graph store
        route: Current route, if any
        selected: The selected relationship (matched by identity)
        selected_entity: Id of the selected station
        start_id: Id of the route start station
        end_id: Id of the route end station
        visible_types: Line types to draw (all when None)
        grid_size: Pixels per grid cell
        gap: Spacing between parallel lines

    Returns:
        Scene with lines in relationship order and stations in entity order
    """
    entities = graph.entities
    on_route_pairs = route_pairs(route)
    on_route_entities = route_entities(route)
    scene = Scene()

    for line in line_offsets(graph.relationships, gap):
        rel = line.relationship
        if visible_types is not None and rel.type not in visible_types:
            continue
        source = entities.get(rel.source)
        target = entities.get(rel.target)
        if source is None or target is None:
            continue

        x1, y1 = grid_to_pixel(source.x, source.y, grid_size)
        x2, y2 = grid_to_pixel(target.x, target.y, grid_size)
        is_selected = selected is not None and rel is selected

        scene.lines.append(
            LineState(
                relationship=rel,
                path=octilinear_path(x1, y1, x2, y2, line.offset),
                offset=line.offset,
                in_route=rel.pair in on_route_pairs,
                selected=is_selected,
                dimmed=selected is not None and not is_selected,
            )
        )

    for entity in entities.values():
        pixel_x, pixel_y = grid_to_pixel(entity.x, entity.y, grid_size)
        scene.stations.append(
            StationState(
                entity=entity,
                pixel_x=pixel_x,
                pixel_y=pixel_y,
                selected=entity.id == selected_entity,
                start=entity.id == start_id,
                end=entity.id == end_id,
                in_route=entity.id in on_route_entities,
            )
        )

    logger.debug(
        "Built scene with %d lines and %d stations",
        len(scene.lines),
        len(scene.stations),
    )
    return scene
