"""Default settings for blockbuild.

Users can override these in their project's settings.py file.

Example:
    # In your project's settings.py:
    from blockbuild.conf import global_settings

    USER_ID = "alice"
    ITEM_CATALOG = {**global_settings.ITEM_CATALOG, "glass": 12}
"""

# Window settings
SCREEN_WIDTH = 1280
"""Width of the game window in pixels."""

SCREEN_HEIGHT = 720
"""Height of the game window in pixels."""

WINDOW_TITLE = "Block Build"
"""Title displayed in the window title bar."""

BACKGROUND_COLOR = (174, 203, 255)
"""Sky color behind the build area."""

# Asset settings
ASSETS_HANDLE = "game_assets"
"""Resource handle name for asset loading."""

# Hotbar and inventory layout
UI_SCALE = 0.16
"""Scale applied to the hotbar and inventory panel artwork."""

HOTBAR_SLOTS = 14
"""Number of linear hotbar slots."""

HOTBAR_LEFT = 10
"""Distance in pixels from the left edge of the window to the hotbar."""

HOTBAR_BOTTOM = 10
"""Distance in pixels from the bottom edge of the window to the hotbar."""

HOTBAR_IMAGE_WIDTH = 5268
"""Unscaled width of the hotbar artwork."""

HOTBAR_IMAGE_HEIGHT = 636
"""Unscaled height of the hotbar artwork."""

HOTBAR_SLOT_INSET = 20
"""Horizontal inset of the first hotbar slot inside the artwork."""

INVENTORY_GRID_ROWS = 3
"""Number of rows in the inventory grid."""

INVENTORY_GRID_COLS = 14
"""Number of columns in the inventory grid."""

INVENTORY_IMAGE_HEIGHT = 1356
"""Unscaled height of the inventory panel artwork (width matches the hotbar)."""

INVENTORY_GAP = 10
"""Vertical gap in pixels between the hotbar and the inventory panel."""

INVENTORY_INSET_X = 22
"""Horizontal inset of the first grid cell inside the panel."""

INVENTORY_INSET_Y = 17
"""Vertical inset of the first grid cell inside the panel."""

TOOLBAR_BUTTON_IMAGE_SIZE = 636
"""Unscaled size of the square build, remove and inventory button artwork."""

TOOLBAR_GAP = 35
"""Horizontal gap in pixels between toolbar buttons."""

TOOLBAR_RIGHT_MARGIN = 20
"""Distance in pixels from the right edge of the window to the last toolbar button."""

# Build area
BUILD_CELL_SIZE = 32
"""Size in pixels of one block cell in the build area."""

BUILD_COLUMNS = 40
"""Number of block columns in the build area."""

BUILD_ROWS = 18
"""Number of block rows in the build area."""

BUILD_ORIGIN_X = 0
"""Screen x of the build area's left edge."""

BUILD_ORIGIN_Y = 144
"""Screen y of the build area's bottom edge (above the hotbar)."""

DEFAULT_GROUND = ["grass", "dirt", "dirt"]
"""Block types of the default map's ground strip, top row first."""

BLOCK_COLORS = {
    "dirt": (134, 96, 67),
    "grass": (95, 159, 53),
    "stone": (125, 125, 125),
    "wood": (160, 120, 70),
    "sand": (219, 207, 163),
}
"""Fallback fill colors for block types without an icon texture."""

# Economy
ITEM_CATALOG = {
    "dirt": 5,
    "grass": 5,
    "stone": 10,
    "wood": 8,
    "sand": 4,
}
"""Purchasable item types mapped to their price."""

# Persistence
USER_ID = "local"
"""Document id of the player; supplied by the authentication layer in production."""

DEFAULT_MAP_NAME = "default"
"""Name given to the first map of a new or migrated user document."""

DOCUMENT_STORE = "blockbuild.stores.json_file.JsonFileDocumentStore"
"""Dotted path of the document store class."""

DOCUMENT_STORE_ROOT = "userdata"
"""Directory used by file-backed document stores."""

DOCUMENT_COLLECTION = "users"
"""Collection holding one document per user."""

# Notifications
NOTIFICATION_DURATION = 4.0
"""Seconds a toast notification stays on screen."""

# Installed systems
INSTALLED_SYSTEMS = [
    "blockbuild.systems.build",
    "blockbuild.systems.items",
    "blockbuild.systems.sync",
    "blockbuild.systems.notification",
]
"""List of module paths to import for system registration.

Users can add custom systems by extending this list in their settings.py:

Example:
    INSTALLED_SYSTEMS = [
        *global_settings.INSTALLED_SYSTEMS,
        "myproject.systems.weather",
    ]
"""
