"""CHIP-8 hexadecimal keypad."""

from typing import Optional

import jax.numpy as jnp

from chippy.constants import NUM_KEYS


def is_held(keypad: jnp.ndarray, key: int) -> bool:
    """Whether ``key`` is currently held. Only the low nibble is used."""
    return bool(keypad[int(key) & 0xF])


def currently_held(keypad: jnp.ndarray) -> Optional[int]:
    """Lowest-numbered held key, or ``None`` if nothing is held."""
    if not bool(jnp.any(keypad)):
        return None
    return int(jnp.argmax(keypad))


def press(keypad: jnp.ndarray, key: int) -> jnp.ndarray:
    return keypad.at[int(key) & 0xF].set(True)


def release(keypad: jnp.ndarray, key: int) -> jnp.ndarray:
    return keypad.at[int(key) & 0xF].set(False)


def from_keys(keys) -> jnp.ndarray:
    """Build a keypad array with the given keys held."""
    keypad = jnp.zeros(NUM_KEYS, dtype=jnp.bool_)
    for key in keys:
        keypad = press(keypad, key)
    return keypad
