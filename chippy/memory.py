"""Bounds-checked access to the 4KB address space."""

import jax.numpy as jnp

from chippy.constants import MEMORY_SIZE
from chippy.errors import MemoryAccessError


def check_range(address: int, length: int = 1) -> int:
    """Validate ``[address, address + length)`` and return the start address.

    Raises:
        MemoryAccessError: If any byte of the range lies outside memory.
    """
    address = int(address)
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryAccessError(address, length)
    return address


def read_block(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    start = check_range(address, length)
    return memory[start:start + length]


def write_block(memory: jnp.ndarray, address: int, values) -> jnp.ndarray:
    values = jnp.asarray(values, dtype=jnp.uint8).reshape(-1)
    start = check_range(address, values.shape[0])
    return memory.at[start:start + values.shape[0]].set(values)


def read_word(memory: jnp.ndarray, address: int) -> int:
    """Big-endian 16-bit read."""
    high, low = read_block(memory, address, 2)
    return (int(high) << 8) | int(low)
