"""Main CHIP-8 emulator execution engine."""

from typing import Optional

import jax.numpy as jnp
from chippy import isa
from chippy.state import EmulatorState
from chippy.decode import decode
from chippy.constants import PROGRAM_START, MAX_ROM_SIZE
from chippy.errors import RomLoadError, UnrecognizedOpcodeError
from chippy.memory import read_word, write_block
from chippy.instructions.system import execute_clear_screen, execute_return
from chippy.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chippy.instructions.alu import ALU_OPERATIONS, execute_alu_operation
from chippy.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chippy.instructions.display import execute_display
from chippy.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)


HANDLERS = {
    isa.ClearScreen: execute_clear_screen,
    isa.Return: execute_return,
    isa.Jump: execute_jump,
    isa.Call: execute_call,
    isa.SkipIfEqualsByte: execute_skip_if_equal_immediate,
    isa.SkipIfNotEqualsByte: execute_skip_if_not_equal_immediate,
    isa.SkipIfEqual: execute_skip_if_equal_register,
    isa.LoadByte: execute_set,
    isa.AddByte: execute_add,
    **{operation: execute_alu_operation for operation in ALU_OPERATIONS},
    isa.SkipIfNotEqual: execute_skip_if_not_equal_register,
    isa.LoadIndex: execute_set_index,
    isa.JumpOffset: execute_jump_with_offset,
    isa.Random: execute_random,
    isa.Draw: execute_display,
    isa.SkipIfKeyHeld: execute_skip_if_key,
    isa.SkipIfKeyNotHeld: execute_skip_if_not_key,
    isa.LoadDelayTimer: execute_get_delay_timer,
    isa.WaitForKeyPress: execute_wait_for_key,
    isa.SetDelayTimer: execute_set_delay_timer,
    isa.SetSoundTimer: execute_set_sound_timer,
    isa.AddIndex: execute_add_to_index,
    isa.LoadFontGlyph: execute_font_character,
    isa.StoreBCD: execute_bcd_conversion,
    isa.StoreRegisters: execute_store_registers,
    isa.LoadRegisters: execute_load_registers,
}


def execute(state: EmulatorState, instruction: isa.Instruction) -> tuple[EmulatorState, int]:
    """Execute single decoded CHIP-8 instruction.

    Args:
        state: State with ``pc`` pointing at the instruction being executed
        instruction: Decoded instruction

    Returns:
        Tuple of the updated state and the address of the next instruction.
        ``state.pc`` itself is left for the caller to commit.

    Raises:
        StackOverflowError: On a call with a full stack.
        StackUnderflowError: On a return with an empty stack.
        MemoryAccessError: When I points outside memory for the accessed range.
    """
    return HANDLERS[type(instruction)](state, instruction)


def fetch(state: EmulatorState) -> int:
    """Fetch the 16-bit word at the program counter (high byte first)."""
    return read_word(state.memory, state.pc)


def try_step(state: EmulatorState) -> tuple[EmulatorState, Optional[isa.Instruction]]:
    """Run one fetch/decode/execute cycle.

    Returns:
        Tuple of the new state and the executed instruction. An unknown word
        yields the unchanged state and ``None``.
    """
    instruction = decode(fetch(state))
    if instruction is None:
        return state, None
    state, pc = execute(state, instruction)
    return state.replace(pc=jnp.astype(pc, jnp.uint16)), instruction


def step(state: EmulatorState) -> EmulatorState:
    """Run one cycle, raising on an unknown instruction word.

    Raises:
        UnrecognizedOpcodeError: If the fetched word does not decode. The
            state is left as it was.
    """
    new_state, instruction = try_step(state)
    if instruction is None:
        raise UnrecognizedOpcodeError(fetch(state), int(state.pc))
    return new_state


def load_rom_bytes(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Copy ROM bytes into CHIP-8 memory starting at 0x200."""
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomLoadError(
            f"ROM is {len(rom_data)} bytes, at most {MAX_ROM_SIZE} fit in memory",
            size=len(rom_data),
        )
    if not rom_data:
        return state
    return state.replace(memory=write_block(state.memory, PROGRAM_START, list(rom_data)))


def read_rom(filename: str) -> bytes:
    try:
        with open(filename, 'rb') as f:
            return f.read()
    except OSError as e:
        raise RomLoadError(f"Cannot read ROM {filename!r}: {e}") from e


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    return load_rom_bytes(state, read_rom(filename))
