"""CHIP-8 monochrome framebuffer.

The framebuffer is a ``(SCREEN_WIDTH, SCREEN_HEIGHT)`` boolean array indexed
``[x, y]``. Sprites are eight pixels wide, one byte per row with the most
significant bit leftmost, and wrap around both screen edges.
"""

import jax.numpy as jnp

from chippy.constants import SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH

# Pre-computed coordinate grids for display operations
xx, yy = jnp.meshgrid(jnp.arange(SCREEN_WIDTH), jnp.arange(SCREEN_HEIGHT), indexing='ij')


def create_display() -> jnp.ndarray:
    return jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Turn every pixel off."""
    return jnp.zeros_like(display)


def draw(display: jnp.ndarray, x: int, y: int, rows) -> tuple[jnp.ndarray, bool]:
    """XOR a sprite onto the framebuffer with its top-left corner at (x, y).

    Args:
        display: Current framebuffer
        x: Column of the sprite's left edge, taken modulo the screen width
        y: Row of the sprite's top edge, taken modulo the screen height
        rows: Sprite bytes, one per row

    Returns:
        Tuple of the new framebuffer and the collision flag, which is True iff
        a lit sprite pixel landed on an already lit pixel.
    """
    rows = jnp.asarray(rows, dtype=jnp.uint8).reshape(-1)
    height = rows.shape[0]
    if height == 0:
        return display, False

    col_offset = (xx - int(x) % SCREEN_WIDTH) % SCREEN_WIDTH
    row_offset = (yy - int(y) % SCREEN_HEIGHT) % SCREEN_HEIGHT
    in_sprite = (col_offset < SPRITE_WIDTH) & (row_offset < height)

    sprite_bytes = rows[jnp.clip(row_offset, 0, height - 1)]
    shift = SPRITE_WIDTH - 1 - jnp.clip(col_offset, 0, SPRITE_WIDTH - 1)
    sprite = (((sprite_bytes >> shift) & 1) == 1) & in_sprite

    collision = bool(jnp.any(display & sprite))
    return jnp.astype(display ^ sprite, jnp.bool_), collision
