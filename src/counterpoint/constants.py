"""
Layout, routing and viewport constants for the transit map.

All distances are in world pixels unless noted. Grid coordinates are
converted to pixels by multiplying with GRID_SIZE.
"""

# =============================================================================
# GRID & LINES
# =============================================================================

# Size of one grid cell in pixels
GRID_SIZE = 150

# Gap between parallel lines in a bundle
LINE_GAP = 12

# Band within which a segment counts as horizontal, vertical or diagonal
PATH_TOLERANCE = 5

# =============================================================================
# HUB PLACEMENT
# =============================================================================

# Attractor cells, one per weighted relationship category
HUBS = {
    "personnel": (-3, -2),  # Northwest - band district
    "studio": (4, 2),  # Southeast - recording district
    "writing": (-4, 3),  # Southwest - songwriting district
    "label": (5, -3),  # Northeast - business district
}

# Year used for ordering entities that have no origin year
DEFAULT_ORIGIN_YEAR = 1970

# Spiral walk: (dx, dy) per step, east / south / west / north.
# Horizontal steps cover two cells so the map spreads wider than tall.
SPIRAL_DIRECTIONS = ((2, 0), (0, 1), (-2, 0), (0, -1))

# =============================================================================
# ROUTE FINDING & HISTORY
# =============================================================================

# Maximum number of relationships in a route
MAX_ROUTE_DEPTH = 6

# Maximum number of snapshots kept for undo
HISTORY_CAPACITY = 50

# Number of suggested entities returned
MAX_SUGGESTIONS = 5

# =============================================================================
# VIEWPORT
# =============================================================================

DEFAULT_SCREEN_WIDTH = 800
DEFAULT_SCREEN_HEIGHT = 600

# Viewport used when there is nothing to fit
EMPTY_VIEWPORT = (-400, -300, 800, 600)

# Padding and minimum size used by fit-to-content
FIT_PADDING = GRID_SIZE * 1.5
FIT_MIN_WIDTH = 400
FIT_MIN_HEIGHT = 300

# Padding and minimum size of the mini-map content bounds
MINIMAP_PADDING = GRID_SIZE
MINIMAP_MIN_SIZE = GRID_SIZE * 2
MINIMAP_WIDTH = 150
MINIMAP_HEIGHT = 100

# Zoom factors applied per wheel notch
ZOOM_OUT_FACTOR = 1.1
ZOOM_IN_FACTOR = 0.9

# Minimum seconds between acquisition requests
REQUEST_INTERVAL = 1.0
