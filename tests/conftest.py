"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chippy import create_state, decode, execute
from chippy.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def quiet_logger():
    """Logger that only reports critical messages."""
    return ConsoleLogger("Test", log_level="CRITICAL", use_colors=False)


def run_opcode(state, word):
    """Decode and execute ``word`` as if fetched at ``state.pc``, committing the next PC."""
    state, pc = execute(state, decode(word))
    return state.replace(pc=jnp.astype(pc, jnp.uint16))


def next_pc_of(state, word):
    """Next program counter after executing ``word`` at ``state.pc``."""
    _, pc = execute(state, decode(word))
    return pc


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. ``set_registers(state, V1=0x10)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def program(*words):
    """Assemble 16-bit words into ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
