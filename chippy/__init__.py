"""CHIP-8 virtual machine package."""

from chippy.state import EmulatorState, StackState, create_state, tick_timers
from chippy.opcode import Opcode
from chippy.emulator import execute, fetch, step, try_step, load_rom, load_rom_bytes
from chippy.decode import decode, encode, disassemble
from chippy.isa import INSTRUCTION_TYPES, Instruction, mnemonic
from chippy.config import EmulatorConfig
from chippy.runner import Chip8Runner
from chippy.errors import (
    Chip8Error, RomLoadError, UnrecognizedOpcodeError, StackOverflowError,
    StackUnderflowError, MemoryAccessError,
)
from chippy.constants import *
from chippy.rendering import chip8_display_to_rgb, create_color_scheme, display_to_text

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "tick_timers",
    "Opcode",
    "fetch",
    "execute",
    "step",
    "try_step",
    "load_rom",
    "load_rom_bytes",
    "decode",
    "encode",
    "disassemble",
    "INSTRUCTION_TYPES",
    "Instruction",
    "mnemonic",
    "EmulatorConfig",
    "Chip8Runner",
    "Chip8Error",
    "RomLoadError",
    "UnrecognizedOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "MemoryAccessError",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "STACK_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "display_to_text",
]
