"""Helper functions for block textures and drawing."""

import logging

import arcade
from PIL import Image

from blockbuild.conf import settings
from blockbuild.constants import asset_path

logger = logging.getLogger(__name__)

FALLBACK_COLOR = (255, 0, 255)
FALLBACK_SIZE = 16

_textures: dict[str, arcade.Texture] = {}


def block_texture(block_type: str) -> arcade.Texture:
    """Get the texture for a block type.

    Loads ``images/blocks/<block_type>.png`` from the assets handle. When the file
    is missing, a solid texture in the type's BLOCK_COLORS color is generated
    instead. Results are cached per type.

    Args:
        block_type: Block/item type (e.g. "dirt").

    Returns:
        The texture to draw for this type.
    """
    texture = _textures.get(block_type)
    if texture is not None:
        return texture

    try:
        texture = arcade.load_texture(asset_path(f"images/blocks/{block_type}.png"))
        logger.debug("Loaded block texture: %s", block_type)
    except (FileNotFoundError, KeyError, OSError):
        color = settings.BLOCK_COLORS.get(block_type, FALLBACK_COLOR)
        image = Image.new("RGBA", (FALLBACK_SIZE, FALLBACK_SIZE), (*color, 255))
        texture = arcade.Texture(image, hash=f"block_fallback_{block_type}")
        logger.debug("Using fallback color for block texture: %s", block_type)

    _textures[block_type] = texture
    return texture


def draw_block(block_type: str, center_x: float, center_y: float, size: float) -> None:
    """Draw a square block icon centered on a point."""
    half = size / 2
    arcade.draw_texture_rect(
        block_texture(block_type),
        arcade.LRBT(center_x - half, center_x + half, center_y - half, center_y + half),
    )


def clear_texture_cache() -> None:
    """Forget cached block textures (e.g. after the assets handle changed)."""
    _textures.clear()
