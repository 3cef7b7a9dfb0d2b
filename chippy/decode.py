"""CHIP-8 instruction decoding."""

from typing import Iterator, Optional

from chippy import isa
from chippy.constants import PROGRAM_START, WORD_MASK
from chippy.opcode import Opcode


def _decode_system(op: Opcode) -> Optional[isa.Instruction]:
    if op.raw == 0x00E0:
        return isa.ClearScreen()
    if op.raw == 0x00EE:
        return isa.Return()
    return None


_ALU_OPERATIONS = {
    0x0: isa.Move,
    0x1: isa.Or,
    0x2: isa.And,
    0x3: isa.Xor,
    0x4: isa.Add,
    0x5: isa.Sub,
    0x7: isa.SubReversed,
}


def _decode_alu(op: Opcode) -> Optional[isa.Instruction]:
    if op.n == 0x6:
        return isa.ShiftRight(x=op.x)
    if op.n == 0xE:
        return isa.ShiftLeft(x=op.x)
    operation = _ALU_OPERATIONS.get(op.n)
    if operation is None:
        return None
    return operation(x=op.x, y=op.y)


_KEY_OPERATIONS = {
    0x9E: isa.SkipIfKeyHeld,
    0xA1: isa.SkipIfKeyNotHeld,
}

_MISC_OPERATIONS = {
    0x07: isa.LoadDelayTimer,
    0x0A: isa.WaitForKeyPress,
    0x15: isa.SetDelayTimer,
    0x18: isa.SetSoundTimer,
    0x1E: isa.AddIndex,
    0x29: isa.LoadFontGlyph,
    0x33: isa.StoreBCD,
    0x55: isa.StoreRegisters,
    0x65: isa.LoadRegisters,
}


def _decode_by_byte(table):
    def decode_group(op: Opcode) -> Optional[isa.Instruction]:
        operation = table.get(op.nn)
        if operation is None:
            return None
        return operation(x=op.x)
    return decode_group


def _decode_register_pair(operation):
    def decode_group(op: Opcode) -> Optional[isa.Instruction]:
        if op.n != 0:
            return None
        return operation(x=op.x, y=op.y)
    return decode_group


_GROUPS = [
    _decode_system,
    lambda op: isa.Jump(address=op.nnn),
    lambda op: isa.Call(address=op.nnn),
    lambda op: isa.SkipIfEqualsByte(x=op.x, byte=op.nn),
    lambda op: isa.SkipIfNotEqualsByte(x=op.x, byte=op.nn),
    _decode_register_pair(isa.SkipIfEqual),
    lambda op: isa.LoadByte(x=op.x, byte=op.nn),
    lambda op: isa.AddByte(x=op.x, byte=op.nn),
    _decode_alu,
    _decode_register_pair(isa.SkipIfNotEqual),
    lambda op: isa.LoadIndex(address=op.nnn),
    lambda op: isa.JumpOffset(address=op.nnn),
    lambda op: isa.Random(x=op.x, byte=op.nn),
    lambda op: isa.Draw(x=op.x, y=op.y, height=op.n),
    _decode_by_byte(_KEY_OPERATIONS),
    _decode_by_byte(_MISC_OPERATIONS),
]


def decode(instruction: int | Opcode) -> Optional[isa.Instruction]:
    """Decode a 16-bit word into an instruction.

    Dispatches on the first nibble, then on the last nibble (8XYN) or last
    byte (00NN, EXNN, FXNN) for the packed groups.

    Returns:
        The decoded instruction, or ``None`` if the word is not a known
        CHIP-8 instruction.
    """
    if not isinstance(instruction, Opcode):
        instruction = Opcode(raw=int(instruction) & WORD_MASK)
    return _GROUPS[instruction.group](instruction)


# Opcode templates: (base word, operand name -> bit shift)
_ENCODINGS = {
    isa.ClearScreen: (0x00E0, {}),
    isa.Return: (0x00EE, {}),
    isa.Jump: (0x1000, {"address": 0}),
    isa.Call: (0x2000, {"address": 0}),
    isa.SkipIfEqualsByte: (0x3000, {"x": 8, "byte": 0}),
    isa.SkipIfNotEqualsByte: (0x4000, {"x": 8, "byte": 0}),
    isa.SkipIfEqual: (0x5000, {"x": 8, "y": 4}),
    isa.LoadByte: (0x6000, {"x": 8, "byte": 0}),
    isa.AddByte: (0x7000, {"x": 8, "byte": 0}),
    isa.Move: (0x8000, {"x": 8, "y": 4}),
    isa.Or: (0x8001, {"x": 8, "y": 4}),
    isa.And: (0x8002, {"x": 8, "y": 4}),
    isa.Xor: (0x8003, {"x": 8, "y": 4}),
    isa.Add: (0x8004, {"x": 8, "y": 4}),
    isa.Sub: (0x8005, {"x": 8, "y": 4}),
    isa.ShiftRight: (0x8006, {"x": 8}),
    isa.SubReversed: (0x8007, {"x": 8, "y": 4}),
    isa.ShiftLeft: (0x800E, {"x": 8}),
    isa.SkipIfNotEqual: (0x9000, {"x": 8, "y": 4}),
    isa.LoadIndex: (0xA000, {"address": 0}),
    isa.JumpOffset: (0xB000, {"address": 0}),
    isa.Random: (0xC000, {"x": 8, "byte": 0}),
    isa.Draw: (0xD000, {"x": 8, "y": 4, "height": 0}),
    isa.SkipIfKeyHeld: (0xE09E, {"x": 8}),
    isa.SkipIfKeyNotHeld: (0xE0A1, {"x": 8}),
    isa.LoadDelayTimer: (0xF007, {"x": 8}),
    isa.WaitForKeyPress: (0xF00A, {"x": 8}),
    isa.SetDelayTimer: (0xF015, {"x": 8}),
    isa.SetSoundTimer: (0xF018, {"x": 8}),
    isa.AddIndex: (0xF01E, {"x": 8}),
    isa.LoadFontGlyph: (0xF029, {"x": 8}),
    isa.StoreBCD: (0xF033, {"x": 8}),
    isa.StoreRegisters: (0xF055, {"x": 8}),
    isa.LoadRegisters: (0xF065, {"x": 8}),
}

_FIELD_MASKS = {"x": 0xF, "y": 0xF, "height": 0xF, "byte": 0xFF, "address": 0xFFF}


def encode(instruction: isa.Instruction) -> int:
    """Encode an instruction back to its canonical 16-bit word.

    Shift instructions encode with a zero Y nibble.
    """
    base, shifts = _ENCODINGS[type(instruction)]
    word = base
    for name, shift in shifts.items():
        word |= (getattr(instruction, name) & _FIELD_MASKS[name]) << shift
    return word


def disassemble(
    rom: bytes, origin: int = PROGRAM_START
) -> Iterator[tuple[int, int, Optional[isa.Instruction]]]:
    """Walk a ROM two bytes at a time.

    Yields ``(address, word, instruction)`` where ``instruction`` is ``None``
    for data or unknown words. A trailing odd byte is ignored.
    """
    for offset in range(0, len(rom) - 1, 2):
        word = Opcode.from_bytes(rom[offset], rom[offset + 1])
        yield origin + offset, word.raw, decode(word)
