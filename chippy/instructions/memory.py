"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chippy.constants import BYTE_MASK
from chippy.state import EmulatorState
from chippy.isa import LoadByte, AddByte, LoadIndex, Random
from chippy.instructions import next_pc


def execute_set(state: EmulatorState, instruction: LoadByte) -> tuple[EmulatorState, int]:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.byte)), next_pc(state)


def execute_add(state: EmulatorState, instruction: AddByte) -> tuple[EmulatorState, int]:
    """7XNN - Add NN to VX. Wraps, VF is left alone."""
    result = (int(state.V[instruction.x]) + instruction.byte) & BYTE_MASK
    return state.replace(V=state.V.at[instruction.x].set(result)), next_pc(state)


def execute_set_index(state: EmulatorState, instruction: LoadIndex) -> tuple[EmulatorState, int]:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.address, jnp.uint16)), next_pc(state)


def execute_random(state: EmulatorState, instruction: Random) -> tuple[EmulatorState, int]:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = int(jax.random.randint(subkey, shape=(), minval=0, maxval=256))
    return (
        state.replace(V=state.V.at[instruction.x].set(random_value & instruction.byte), rng=key),
        next_pc(state),
    )
