"""
Route finding between two stations.

Enumerates every simple path of at most max_depth relationships over the
undirected view of the graph and keeps the one with the fewest edges. The
enumeration is exponential in the branching factor; graphs here hold tens
to low hundreds of stations, and max_depth bounds the work.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set, Tuple

import networkx as nx

from .constants import MAX_ROUTE_DEPTH
from .graph import GraphStore
from .models import Relationship

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteStep:
    """One hop of a route: the relationship taken and the entity reached."""

    relationship: Relationship
    next_entity_id: str


def find_route(
    graph: GraphStore,
    start_id: Optional[str],
    end_id: Optional[str],
    max_depth: int = MAX_ROUTE_DEPTH,
) -> Optional[List[RouteStep]]:
    """
    Find the route with the fewest relationships between two entities.

    Ties keep the first path discovered when relationships are traversed in
    insertion order.

    Args:
        graph: The graph store to search
        start_id: Entity the route starts at
        end_id: Entity the route ends at
        max_depth: Maximum number of relationships in the route

    Returns:
        Ordered list of RouteStep, or None when start and end are the same,
        either entity is unknown, or no route exists within max_depth
    """
    if not start_id or not end_id or start_id == end_id:
        return None
    if start_id not in graph or end_id not in graph:
        logger.debug("No route: unknown endpoint %s or %s", start_id, end_id)
        return None

    multigraph = graph.to_networkx()
    best: Optional[List[Tuple[str, str, int]]] = None
    for edge_path in nx.all_simple_edge_paths(
        multigraph, start_id, end_id, cutoff=max_depth
    ):
        if best is None or len(edge_path) < len(best):
            best = edge_path

    if best is None:
        logger.debug("No route from %s to %s within %d", start_id, end_id, max_depth)
        return None

    steps = []
    for u, v, key in best:
        relationship = multigraph.edges[u, v, key]["relationship"]
        steps.append(RouteStep(relationship=relationship, next_entity_id=v))
    return steps


def route_entities(route: Optional[Iterable[RouteStep]]) -> Set[str]:
    """Ids of the entities reached by a route (the start is not included)."""
    if not route:
        return set()
    return {step.next_entity_id for step in route}


def route_pairs(route: Optional[Iterable[RouteStep]]) -> Set[Tuple[str, str]]:
    """Unordered endpoint pairs of every relationship on a route."""
    if not route:
        return set()
    return {step.relationship.pair for step in route}
