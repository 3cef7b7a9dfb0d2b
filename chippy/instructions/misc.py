"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chippy import keypad
from chippy.constants import FONT_START, FONT_GLYPH_SIZE, WORD_MASK
from chippy.state import EmulatorState
from chippy import isa
from chippy.memory import read_block, write_block
from chippy.instructions import next_pc


def execute_get_delay_timer(state: EmulatorState, instruction: isa.LoadDelayTimer) -> tuple[EmulatorState, int]:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer)), next_pc(state)


def execute_set_delay_timer(state: EmulatorState, instruction: isa.SetDelayTimer) -> tuple[EmulatorState, int]:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x]), next_pc(state)


def execute_set_sound_timer(state: EmulatorState, instruction: isa.SetSoundTimer) -> tuple[EmulatorState, int]:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x]), next_pc(state)


def execute_add_to_index(state: EmulatorState, instruction: isa.AddIndex) -> tuple[EmulatorState, int]:
    """FX1E - Add VX to I register (16-bit wrap, VF unchanged)."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & WORD_MASK
    return state.replace(I=jnp.astype(new_i, jnp.uint16)), next_pc(state)


def execute_wait_for_key(state: EmulatorState, instruction: isa.WaitForKeyPress) -> tuple[EmulatorState, int]:
    """FX0A - Wait for key press (blocking).

    With no key held the program counter stays put, so the same instruction
    runs again on the next cycle.
    """
    pressed_key = keypad.currently_held(state.keypad)
    if pressed_key is None:
        return state, int(state.pc)
    return state.replace(V=state.V.at[instruction.x].set(pressed_key)), next_pc(state)


def execute_font_character(state: EmulatorState, instruction: isa.LoadFontGlyph) -> tuple[EmulatorState, int]:
    """FX29 - Set I to location of sprite for digit VX (low nibble)."""
    digit = int(state.V[instruction.x]) & 0xF
    font_address = FONT_START + digit * FONT_GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16)), next_pc(state)


def execute_bcd_conversion(state: EmulatorState, instruction: isa.StoreBCD) -> tuple[EmulatorState, int]:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = [value // 100, (value // 10) % 10, value % 10]
    return state.replace(memory=write_block(state.memory, state.I, digits)), next_pc(state)


def execute_store_registers(state: EmulatorState, instruction: isa.StoreRegisters) -> tuple[EmulatorState, int]:
    """FX55 - Store V0 through VX in memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    new_memory = write_block(state.memory, state.I, state.V[:count])
    new_i = (int(state.I) + count) & WORD_MASK
    return state.replace(memory=new_memory, I=jnp.astype(new_i, jnp.uint16)), next_pc(state)


def execute_load_registers(state: EmulatorState, instruction: isa.LoadRegisters) -> tuple[EmulatorState, int]:
    """FX65 - Load V0 through VX from memory starting at I, then I += X + 1."""
    count = instruction.x + 1
    values = read_block(state.memory, state.I, count)
    new_i = (int(state.I) + count) & WORD_MASK
    return state.replace(V=state.V.at[:count].set(values), I=jnp.astype(new_i, jnp.uint16)), next_pc(state)
