"""CHIP-8 instruction set.

Each instruction is a frozen dataclass carrying only the operands it needs.
Instances are produced by :func:`chippy.decode.decode` and consumed by
:func:`chippy.emulator.execute`. Operand names are shared across variants:

* ``x``, ``y``: register indices (0-15)
* ``byte``: 8-bit immediate
* ``address``: 12-bit address
* ``height``: sprite height in rows (0-15)

Note:
    All constructors are keyword-only (``Jump(address=0x200)``).
"""

import dataclasses

from chex import dataclass


# System (0x0xxx)

@dataclass(frozen=True)
class ClearScreen:
    """00E0 - Clear display."""


@dataclass(frozen=True)
class Return:
    """00EE - Return from subroutine."""


# Control flow

@dataclass(frozen=True)
class Jump:
    """1NNN - Jump to address NNN."""
    address: int


@dataclass(frozen=True)
class Call:
    """2NNN - Call subroutine at NNN."""
    address: int


@dataclass(frozen=True)
class SkipIfEqualsByte:
    """3XNN - Skip next instruction if VX == NN."""
    x: int
    byte: int


@dataclass(frozen=True)
class SkipIfNotEqualsByte:
    """4XNN - Skip next instruction if VX != NN."""
    x: int
    byte: int


@dataclass(frozen=True)
class SkipIfEqual:
    """5XY0 - Skip next instruction if VX == VY."""
    x: int
    y: int


@dataclass(frozen=True)
class SkipIfNotEqual:
    """9XY0 - Skip next instruction if VX != VY."""
    x: int
    y: int


@dataclass(frozen=True)
class JumpOffset:
    """BNNN - Jump to address NNN + V0."""
    address: int


@dataclass(frozen=True)
class SkipIfKeyHeld:
    """EX9E - Skip next instruction if key VX is held."""
    x: int


@dataclass(frozen=True)
class SkipIfKeyNotHeld:
    """EXA1 - Skip next instruction if key VX is not held."""
    x: int


# Registers and memory

@dataclass(frozen=True)
class LoadByte:
    """6XNN - Set VX = NN."""
    x: int
    byte: int


@dataclass(frozen=True)
class AddByte:
    """7XNN - Add NN to VX (no carry flag)."""
    x: int
    byte: int


@dataclass(frozen=True)
class LoadIndex:
    """ANNN - Set I = NNN."""
    address: int


@dataclass(frozen=True)
class Random:
    """CXNN - Set VX = random byte & NN."""
    x: int
    byte: int


# ALU (0x8xxx)

@dataclass(frozen=True)
class Move:
    """8XY0 - VX = VY."""
    x: int
    y: int


@dataclass(frozen=True)
class Or:
    """8XY1 - VX |= VY."""
    x: int
    y: int


@dataclass(frozen=True)
class And:
    """8XY2 - VX &= VY."""
    x: int
    y: int


@dataclass(frozen=True)
class Xor:
    """8XY3 - VX ^= VY."""
    x: int
    y: int


@dataclass(frozen=True)
class Add:
    """8XY4 - VX += VY, VF = carry."""
    x: int
    y: int


@dataclass(frozen=True)
class Sub:
    """8XY5 - VX -= VY, VF = not borrow."""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftRight:
    """8XY6 - VF = VX & 1, VX >>= 1."""
    x: int


@dataclass(frozen=True)
class SubReversed:
    """8XY7 - VX = VY - VX, VF = not borrow."""
    x: int
    y: int


@dataclass(frozen=True)
class ShiftLeft:
    """8XYE - VF = VX >> 7, VX <<= 1."""
    x: int


# Display

@dataclass(frozen=True)
class Draw:
    """DXYN - Draw N-row sprite from memory[I] at (VX, VY)."""
    x: int
    y: int
    height: int


# Timers, keypad, index and bulk memory (0xFxxx)

@dataclass(frozen=True)
class LoadDelayTimer:
    """FX07 - VX = delay timer."""
    x: int


@dataclass(frozen=True)
class WaitForKeyPress:
    """FX0A - Wait for a key press, store it in VX."""
    x: int


@dataclass(frozen=True)
class SetDelayTimer:
    """FX15 - Delay timer = VX."""
    x: int


@dataclass(frozen=True)
class SetSoundTimer:
    """FX18 - Sound timer = VX."""
    x: int


@dataclass(frozen=True)
class AddIndex:
    """FX1E - I += VX."""
    x: int


@dataclass(frozen=True)
class LoadFontGlyph:
    """FX29 - I = address of font glyph for digit VX."""
    x: int


@dataclass(frozen=True)
class StoreBCD:
    """FX33 - Store BCD of VX at I, I+1, I+2."""
    x: int


@dataclass(frozen=True)
class StoreRegisters:
    """FX55 - Store V0..VX at I, then I += X + 1."""
    x: int


@dataclass(frozen=True)
class LoadRegisters:
    """FX65 - Load V0..VX from I, then I += X + 1."""
    x: int


INSTRUCTION_TYPES = (
    ClearScreen, Return, Jump, Call,
    SkipIfEqualsByte, SkipIfNotEqualsByte, SkipIfEqual, LoadByte, AddByte,
    Move, Or, And, Xor, Add, Sub, ShiftRight, SubReversed, ShiftLeft,
    SkipIfNotEqual, LoadIndex, JumpOffset, Random, Draw,
    SkipIfKeyHeld, SkipIfKeyNotHeld,
    LoadDelayTimer, WaitForKeyPress, SetDelayTimer, SetSoundTimer,
    AddIndex, LoadFontGlyph, StoreBCD, StoreRegisters, LoadRegisters,
)

Instruction = (
    ClearScreen | Return | Jump | Call
    | SkipIfEqualsByte | SkipIfNotEqualsByte | SkipIfEqual | LoadByte | AddByte
    | Move | Or | And | Xor | Add | Sub | ShiftRight | SubReversed | ShiftLeft
    | SkipIfNotEqual | LoadIndex | JumpOffset | Random | Draw
    | SkipIfKeyHeld | SkipIfKeyNotHeld
    | LoadDelayTimer | WaitForKeyPress | SetDelayTimer | SetSoundTimer
    | AddIndex | LoadFontGlyph | StoreBCD | StoreRegisters | LoadRegisters
)


_MNEMONICS = {
    ClearScreen: "CLS",
    Return: "RET",
    Jump: "JP 0x{address:03X}",
    Call: "CALL 0x{address:03X}",
    SkipIfEqualsByte: "SE V{x:X}, 0x{byte:02X}",
    SkipIfNotEqualsByte: "SNE V{x:X}, 0x{byte:02X}",
    SkipIfEqual: "SE V{x:X}, V{y:X}",
    LoadByte: "LD V{x:X}, 0x{byte:02X}",
    AddByte: "ADD V{x:X}, 0x{byte:02X}",
    Move: "LD V{x:X}, V{y:X}",
    Or: "OR V{x:X}, V{y:X}",
    And: "AND V{x:X}, V{y:X}",
    Xor: "XOR V{x:X}, V{y:X}",
    Add: "ADD V{x:X}, V{y:X}",
    Sub: "SUB V{x:X}, V{y:X}",
    ShiftRight: "SHR V{x:X}",
    SubReversed: "SUBN V{x:X}, V{y:X}",
    ShiftLeft: "SHL V{x:X}",
    SkipIfNotEqual: "SNE V{x:X}, V{y:X}",
    LoadIndex: "LD I, 0x{address:03X}",
    JumpOffset: "JP V0, 0x{address:03X}",
    Random: "RND V{x:X}, 0x{byte:02X}",
    Draw: "DRW V{x:X}, V{y:X}, {height}",
    SkipIfKeyHeld: "SKP V{x:X}",
    SkipIfKeyNotHeld: "SKNP V{x:X}",
    LoadDelayTimer: "LD V{x:X}, DT",
    WaitForKeyPress: "LD V{x:X}, K",
    SetDelayTimer: "LD DT, V{x:X}",
    SetSoundTimer: "LD ST, V{x:X}",
    AddIndex: "ADD I, V{x:X}",
    LoadFontGlyph: "LD F, V{x:X}",
    StoreBCD: "LD B, V{x:X}",
    StoreRegisters: "LD [I], V{x:X}",
    LoadRegisters: "LD V{x:X}, [I]",
}


def operands(instruction: Instruction) -> dict[str, int]:
    """Operand fields of an instruction as a plain dict."""
    return {field.name: getattr(instruction, field.name) for field in dataclasses.fields(instruction)}


def mnemonic(instruction: Instruction) -> str:
    """Assembler-style text for an instruction, e.g. ``LD V1, 0x2A``."""
    return _MNEMONICS[type(instruction)].format(**operands(instruction))
