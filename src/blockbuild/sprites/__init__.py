"""Block textures and drawing helpers."""

from blockbuild.sprites.helpers import block_texture, clear_texture_cache, draw_block

__all__ = ["block_texture", "clear_texture_cache", "draw_block"]
