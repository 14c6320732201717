"""
Viewport control for the transit map.

Maintains the world-space window shown on screen (pan, cursor-anchored
zoom, fit to content) and the mini-map projection used to jump around a
large map.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .constants import (
    DEFAULT_SCREEN_HEIGHT,
    DEFAULT_SCREEN_WIDTH,
    EMPTY_VIEWPORT,
    FIT_MIN_HEIGHT,
    FIT_MIN_WIDTH,
    FIT_PADDING,
    MINIMAP_HEIGHT,
    MINIMAP_MIN_SIZE,
    MINIMAP_PADDING,
    MINIMAP_WIDTH,
    ZOOM_IN_FACTOR,
    ZOOM_OUT_FACTOR,
)

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


@dataclass
class Viewport:
    """A rectangular window in world coordinates."""

    x: float = 0
    y: float = 0
    width: float = DEFAULT_SCREEN_WIDTH
    height: float = DEFAULT_SCREEN_HEIGHT

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def contains(self, world_x: float, world_y: float) -> bool:
        """Whether a world point lies inside the window."""
        return (
            self.x <= world_x <= self.x + self.width
            and self.y <= world_y <= self.y + self.height
        )


def content_bounds(
    positions: Iterable[Point],
    padding: float = MINIMAP_PADDING,
    min_size: float = MINIMAP_MIN_SIZE,
) -> Optional[Viewport]:
    """
    Bounding box of all station positions, padded.

    Used as the mini-map's world window.

    Returns:
        The padded bounds, or None when there are no positions
    """
    positions = list(positions)
    if not positions:
        return None

    min_x = min(x for x, _ in positions)
    max_x = max(x for x, _ in positions)
    min_y = min(y for _, y in positions)
    max_y = max(y for _, y in positions)

    return Viewport(
        x=min_x - padding,
        y=min_y - padding,
        width=max(max_x - min_x + padding * 2, min_size),
        height=max(max_y - min_y + padding * 2, min_size),
    )


@dataclass
class MiniMap:
    """Fixed-size overview showing the full content bounds."""

    width: float = MINIMAP_WIDTH
    height: float = MINIMAP_HEIGHT

    def to_world(self, local_x: float, local_y: float, bounds: Viewport) -> Point:
        """Convert a point in mini-map pixels to world coordinates."""
        fraction_x = local_x / self.width
        fraction_y = local_y / self.height
        return (
            bounds.x + fraction_x * bounds.width,
            bounds.y + fraction_y * bounds.height,
        )


class ViewportController:
    """
    Pan, zoom and fit the main viewport.

    Example:
        >>> controller = ViewportController(screen_width=800, screen_height=600)
        >>> controller.pan(10, 0)
        >>> controller.viewport.x
        -10.0
    """

    def __init__(
        self,
        screen_width: float = DEFAULT_SCREEN_WIDTH,
        screen_height: float = DEFAULT_SCREEN_HEIGHT,
        pan_speed: float = 1.0,
        minimap: Optional[MiniMap] = None,
    ):
        """
        Initialize the controller.

        Args:
            screen_width: Width of the drawing surface in screen pixels
            screen_height: Height of the drawing surface in screen pixels
            pan_speed: Multiplier applied to drag distances
            minimap: Mini-map geometry (defaults to 150x100)
        """
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.pan_speed = pan_speed
        self.minimap = minimap or MiniMap()
        self.viewport = Viewport(0, 0, screen_width, screen_height)

    @property
    def aspect_ratio(self) -> float:
        return self.screen_width / self.screen_height

    def resize(self, screen_width: float, screen_height: float) -> None:
        """Update the drawing surface size."""
        self.screen_width = screen_width
        self.screen_height = screen_height

    def pan(self, dx: float, dy: float) -> None:
        """Drag the canvas by (dx, dy); content follows the cursor."""
        self.viewport = Viewport(
            x=self.viewport.x - dx * self.pan_speed,
            y=self.viewport.y - dy * self.pan_speed,
            width=self.viewport.width,
            height=self.viewport.height,
        )

    def zoom(self, cursor_x: float, cursor_y: float, factor: float) -> None:
        """
        Scale the window by factor, keeping the world point under the cursor.

        Args:
            cursor_x: Cursor x in screen pixels
            cursor_y: Cursor y in screen pixels
            factor: Greater than 1 zooms out, less than 1 zooms in
        """
        old = self.viewport
        new_width = old.width * factor
        new_height = old.height * factor
        self.viewport = Viewport(
            x=old.x + (cursor_x / self.screen_width) * (old.width - new_width),
            y=old.y + (cursor_y / self.screen_height) * (old.height - new_height),
            width=new_width,
            height=new_height,
        )

    def wheel(self, cursor_x: float, cursor_y: float, delta_y: float) -> None:
        """Zoom one notch for a mouse wheel event."""
        factor = ZOOM_OUT_FACTOR if delta_y > 0 else ZOOM_IN_FACTOR
        self.zoom(cursor_x, cursor_y, factor)

    def screen_to_world(self, screen_x: float, screen_y: float) -> Point:
        """Convert screen pixels to world coordinates."""
        return (
            self.viewport.x + screen_x / self.screen_width * self.viewport.width,
            self.viewport.y + screen_y / self.screen_height * self.viewport.height,
        )

    def fit_to_content(
        self, positions: Iterable[Point], aspect_ratio: Optional[float] = None
    ) -> Viewport:
        """
        Fit the window around every station.

        The bounding box is padded, then the shorter dimension is widened to
        match the aspect ratio with the extra space split evenly.

        Args:
            positions: Station positions in world pixels
            aspect_ratio: Target width / height (defaults to the screen's)

        Returns:
            The new viewport
        """
        positions = list(positions)
        if not positions:
            self.viewport = Viewport(*EMPTY_VIEWPORT)
            return self.viewport

        if aspect_ratio is None:
            aspect_ratio = self.aspect_ratio

        min_x = min(x for x, _ in positions)
        max_x = max(x for x, _ in positions)
        min_y = min(y for _, y in positions)
        max_y = max(y for _, y in positions)

        width = max(max_x - min_x + FIT_PADDING * 2, FIT_MIN_WIDTH)
        height = max(max_y - min_y + FIT_PADDING * 2, FIT_MIN_HEIGHT)

        final_width = width
        final_height = height
        if width / height > aspect_ratio:
            final_height = width / aspect_ratio
        else:
            final_width = height * aspect_ratio

        self.viewport = Viewport(
            x=min_x - FIT_PADDING - (final_width - width) / 2,
            y=min_y - FIT_PADDING - (final_height - height) / 2,
            width=final_width,
            height=final_height,
        )
        logger.debug("Fitted viewport to %d stations: %s", len(positions), self.viewport)
        return self.viewport

    def center_on(self, world_x: float, world_y: float) -> None:
        """Move the window so that its center is the given world point."""
        self.viewport = Viewport(
            x=world_x - self.viewport.width / 2,
            y=world_y - self.viewport.height / 2,
            width=self.viewport.width,
            height=self.viewport.height,
        )

    def navigate_minimap(
        self, local_x: float, local_y: float, positions: Iterable[Point]
    ) -> bool:
        """
        Re-center the main window on a mini-map click or drag point.

        Args:
            local_x: X in mini-map pixels
            local_y: Y in mini-map pixels
            positions: Station positions in world pixels

        Returns:
            False if there is no content (and so no mini-map)
        """
        bounds = content_bounds(positions)
        if bounds is None:
            return False
        self.center_on(*self.minimap.to_world(local_x, local_y, bounds))
        return True
