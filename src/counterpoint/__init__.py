"""
Counterpoint - transit-style maps of artist relationships

Lays out artists as stations on a grid, routes their relationships as
octilinear colored lines, and finds routes between any two stations.

Example:
    >>> from counterpoint import Entity, LineType, Relationship, TransitMap
    >>> transit = TransitMap()
    >>> transit.add_entity(Entity(id="a", name="A", origin_year=1960))
    True
    >>> transit.add_entity(
    ...     Entity(id="b", name="B", origin_year=1965),
    ...     [Relationship("b", "a", LineType.MEMBERSHIP)],
    ... )
    True
    >>> len(transit.find_route("a", "b"))
    1
"""

from .bundling import bundle, bundle_key, bundle_offset, line_offsets, type_offset
from .errors import (
    CounterpointError,
    DuplicateEntityError,
    MalformedSnapshotError,
    UnknownEntityError,
)
from .graph import GraphStore
from .history import EditHistory
from .layout import LayoutResult, SpiralLayout, compute_layout, hub_position
from .models import (
    Entity,
    GraphSnapshot,
    LineType,
    PotentialConnection,
    Relationship,
    RelationshipMetadata,
)
from .pathfinding import RouteStep, find_route
from .router import OctilinearRoute, grid_to_pixel, octilinear_path, route_points
from .scene import LineState, Scene, StationState, build_scene
from .scheduler import RequestScheduler
from .snapshot import dumps, loads, snapshot_from_dict, snapshot_to_dict
from .suggestions import Suggestion, suggest
from .transit_map import TransitMap
from .viewport import MiniMap, Viewport, ViewportController, content_bounds

__version__ = "0.1.0"

__all__ = [
    # Main API
    "TransitMap",
    # Models
    "Entity",
    "Relationship",
    "RelationshipMetadata",
    "PotentialConnection",
    "LineType",
    "GraphSnapshot",
    # Errors
    "CounterpointError",
    "DuplicateEntityError",
    "UnknownEntityError",
    "MalformedSnapshotError",
    # Graph store & history
    "GraphStore",
    "EditHistory",
    # Layout
    "SpiralLayout",
    "LayoutResult",
    "compute_layout",
    "hub_position",
    # Bundling & routing
    "bundle",
    "bundle_key",
    "bundle_offset",
    "type_offset",
    "line_offsets",
    "OctilinearRoute",
    "octilinear_path",
    "route_points",
    "grid_to_pixel",
    # Route finding
    "RouteStep",
    "find_route",
    # Viewport
    "Viewport",
    "ViewportController",
    "MiniMap",
    "content_bounds",
    # Scene
    "Scene",
    "LineState",
    "StationState",
    "build_scene",
    # Suggestions
    "Suggestion",
    "suggest",
    # Persistence boundary
    "snapshot_to_dict",
    "snapshot_from_dict",
    "dumps",
    "loads",
    # Acquisition support
    "RequestScheduler",
]
