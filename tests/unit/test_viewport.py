"""Unit tests for the viewport module."""

import pytest

from counterpoint.viewport import (
    MiniMap,
    Viewport,
    ViewportController,
    content_bounds,
)


@pytest.fixture
def controller():
    return ViewportController(screen_width=800, screen_height=600)


def as_tuple(viewport):
    return (viewport.x, viewport.y, viewport.width, viewport.height)


class TestViewport:
    """Tests for the Viewport value."""

    def test_center_and_contains(self):
        """Center and containment use world coordinates."""
        viewport = Viewport(-100, -50, 200, 100)
        assert viewport.center == (0, 0)
        assert viewport.contains(0, 0)
        assert viewport.contains(100, 50)
        assert not viewport.contains(101, 0)


class TestPanAndZoom:
    """Tests for pan and zoom."""

    def test_initial_viewport(self, controller):
        """The initial window matches the screen."""
        assert as_tuple(controller.viewport) == (0, 0, 800, 600)
        assert controller.aspect_ratio == pytest.approx(4 / 3)

    def test_pan(self, controller):
        """Dragging moves the window opposite to the drag."""
        controller.pan(10, 20)
        assert as_tuple(controller.viewport) == (-10, -20, 800, 600)

    def test_pan_speed(self):
        """Pan speed scales drag distances."""
        controller = ViewportController(pan_speed=2.0)
        controller.pan(5, -5)
        assert (controller.viewport.x, controller.viewport.y) == (-10, 10)

    def test_zoom_about_center(self, controller):
        """Zooming in at the screen center keeps the center fixed."""
        controller.zoom(400, 300, 0.5)
        assert as_tuple(controller.viewport) == (200, 150, 400, 300)

    def test_zoom_keeps_cursor_point(self, controller):
        """The world point under the cursor does not move."""
        controller.pan(-37, 12)
        before = controller.screen_to_world(120, 450)
        controller.zoom(120, 450, 1.1)
        after = controller.screen_to_world(120, 450)
        assert after == pytest.approx(before)

    def test_wheel(self, controller):
        """Wheel down zooms out by 1.1, wheel up zooms in by 0.9."""
        controller.wheel(0, 0, 100)
        assert controller.viewport.width == pytest.approx(880)
        controller.wheel(0, 0, -100)
        assert controller.viewport.width == pytest.approx(792)

    def test_resize(self, controller):
        """Resize changes the aspect ratio."""
        controller.resize(1000, 500)
        assert controller.aspect_ratio == 2


class TestFitToContent:
    """Tests for fit_to_content."""

    def test_empty(self, controller):
        """No content gives the default window."""
        viewport = controller.fit_to_content([])
        assert as_tuple(viewport) == (-400, -300, 800, 600)

    def test_single_point(self, controller):
        """A single station is centered in a minimum-size window."""
        viewport = controller.fit_to_content([(0, 0)])
        assert as_tuple(viewport) == pytest.approx((-300, -225, 600, 450))

    def test_aspect_ratio_is_matched(self, controller):
        """The result always has the requested aspect ratio."""
        positions = [(0, 0), (1500, 150), (-300, 600)]
        viewport = controller.fit_to_content(positions)
        assert viewport.width / viewport.height == pytest.approx(4 / 3)

        viewport = controller.fit_to_content(positions, aspect_ratio=0.5)
        assert viewport.width / viewport.height == pytest.approx(0.5)

    def test_every_station_is_visible(self, controller):
        """Every station lies inside the fitted window."""
        positions = [(0, 0), (1500, 150), (-300, 600), (450, -900)]
        viewport = controller.fit_to_content(positions)
        for x, y in positions:
            assert viewport.contains(x, y)


class TestMiniMap:
    """Tests for content bounds and mini-map navigation."""

    def test_content_bounds(self):
        """Bounds are padded and at least two cells wide."""
        assert content_bounds([]) is None
        assert as_tuple(content_bounds([(0, 0)])) == (-150, -150, 300, 300)
        assert as_tuple(content_bounds([(0, 0), (300, 150)])) == (
            -150,
            -150,
            600,
            450,
        )

    def test_to_world(self):
        """Mini-map pixels map proportionally into the bounds."""
        bounds = Viewport(-150, -150, 300, 300)
        minimap = MiniMap()
        assert minimap.to_world(75, 50, bounds) == (0, 0)
        assert minimap.to_world(0, 0, bounds) == (-150, -150)
        assert minimap.to_world(150, 100, bounds) == (150, 150)

    def test_navigate(self, controller):
        """Clicking the mini-map centers the main window there."""
        assert controller.navigate_minimap(75, 50, [(0, 0)]) is True
        assert as_tuple(controller.viewport) == (-400, -300, 800, 600)

    def test_navigate_without_content(self, controller):
        """Without content there is nothing to navigate."""
        assert controller.navigate_minimap(75, 50, []) is False
        assert as_tuple(controller.viewport) == (0, 0, 800, 600)
