"""
Line routing module for the transit map.

Converts two station positions plus a perpendicular offset into an
octilinear path: every segment is horizontal, vertical or at 45 degrees.
Paths are emitted as SVG move/line commands. The same arguments always
produce the same string.
"""

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .constants import GRID_SIZE, PATH_TOLERANCE

Point = Tuple[float, float]

SQRT2 = math.sqrt(2)


def grid_to_pixel(grid_x: int, grid_y: int, grid_size: int = GRID_SIZE) -> Tuple[int, int]:
    """Convert a grid cell to world pixel coordinates."""
    return (grid_x * grid_size, grid_y * grid_size)


def format_number(value: float) -> str:
    """Format a coordinate: integral values without a decimal point."""
    if value == 0:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass
class OctilinearRoute:
    """A routed line as a list of points."""

    points: List[Point] = field(default_factory=list)

    @property
    def length(self) -> float:
        """Total length of the polyline."""
        return path_length(self.points)

    def to_svg(self) -> str:
        """Render as an SVG path string ("M x y L x y ...")."""
        commands = []
        for i, (x, y) in enumerate(self.points):
            command = "M" if i == 0 else "L"
            commands.append(f"{command} {format_number(x)} {format_number(y)}")
        return " ".join(commands)


def route_points(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    offset: float,
    tolerance: float = PATH_TOLERANCE,
) -> List[Point]:
    """
    Compute the points of an octilinear line between two stations.

    Near-horizontal, near-vertical and near-diagonal lines are a single
    segment shifted by offset. Everything else gets exactly one elbow: a
    diagonal leaving the start, then a horizontal run when the horizontal
    extent dominates, or a vertical run otherwise.

    Args:
        x1, y1: Start station in world pixels
        x2, y2: End station in world pixels
        offset: Perpendicular offset for bundled lines
        tolerance: Band for classifying a segment as straight

    Returns:
        List of (x, y) points, two or three long
    """
    dx = x2 - x1
    dy = y2 - y1
    adx = abs(dx)
    ady = abs(dy)

    if ady < tolerance:
        return [(x1, y1 + offset), (x2, y2 + offset)]

    if adx < tolerance:
        return [(x1 + offset, y1), (x2 + offset, y2)]

    if abs(adx - ady) < tolerance:
        length = math.hypot(dx, dy)
        perp_x = (-dy / length) * offset
        perp_y = (dx / length) * offset
        return [(x1 + perp_x, y1 + perp_y), (x2 + perp_x, y2 + perp_y)]

    sign_x = 1 if dx > 0 else -1
    sign_y = 1 if dy > 0 else -1

    # Offset start point, perpendicular to the leaving diagonal
    p1x = x1 + (-sign_y / SQRT2) * offset
    p1y = y1 + (sign_x / SQRT2) * offset
    slope = sign_y / sign_x

    if adx > ady:
        # Diagonal, then horizontal into the end station
        p2y = y2 + offset
        corner_x = p1x + (p2y - p1y) / slope
        return [(p1x, p1y), (corner_x, p2y), (x2, p2y)]

    # Diagonal, then vertical into the end station
    p2x = x2 - offset
    corner_y = p1y + slope * (p2x - p1x)
    return [(p1x, p1y), (p2x, corner_y), (p2x, y2)]


def route_line(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    offset: float = 0,
    tolerance: float = PATH_TOLERANCE,
) -> OctilinearRoute:
    """Route a line and wrap the points in an OctilinearRoute."""
    return OctilinearRoute(points=route_points(x1, y1, x2, y2, offset, tolerance))


def octilinear_path(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    offset: float = 0,
    tolerance: float = PATH_TOLERANCE,
) -> str:
    """
    Generate an SVG path string for an octilinear line.

    Example:
        >>> octilinear_path(0, 0, 300, 150, 0)
        'M 0 0 L 150 150 L 300 150'
    """
    return route_line(x1, y1, x2, y2, offset, tolerance).to_svg()


def path_length(points: Sequence[Point]) -> float:
    """Length of a polyline through the given points."""
    return sum(
        math.hypot(bx - ax, by - ay)
        for (ax, ay), (bx, by) in zip(points, points[1:])
    )
