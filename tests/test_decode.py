"""Tests for opcode fields and instruction decoding."""

import pytest
from chippy import decode, encode, disassemble, mnemonic, Opcode, INSTRUCTION_TYPES
from chippy import isa
from conftest import program


class TestOpcodeFields:
    """Test operand extraction."""

    def test_fields(self):
        op = Opcode(raw=0xABCD)
        assert op.group == 0xA
        assert op.x == 0xB
        assert op.y == 0xC
        assert op.n == 0xD
        assert op.nn == 0xCD
        assert op.nnn == 0xBCD

    def test_from_bytes(self):
        op = Opcode.from_bytes(0x12, 0x34)
        assert op.raw == 0x1234
        assert int(op) == 0x1234

    def test_masked_to_16_bits(self):
        op = Opcode(raw=0x100E0)
        assert op.raw == 0x00E0
        assert decode(op) == isa.ClearScreen()
        assert decode(op) == decode(0x100E0)


DECODE_TABLE = [
    (0x00E0, isa.ClearScreen()),
    (0x00EE, isa.Return()),
    (0x1234, isa.Jump(address=0x234)),
    (0x2ABC, isa.Call(address=0xABC)),
    (0x3A42, isa.SkipIfEqualsByte(x=0xA, byte=0x42)),
    (0x4B17, isa.SkipIfNotEqualsByte(x=0xB, byte=0x17)),
    (0x5120, isa.SkipIfEqual(x=1, y=2)),
    (0x63FF, isa.LoadByte(x=3, byte=0xFF)),
    (0x7401, isa.AddByte(x=4, byte=0x01)),
    (0x8120, isa.Move(x=1, y=2)),
    (0x8121, isa.Or(x=1, y=2)),
    (0x8122, isa.And(x=1, y=2)),
    (0x8123, isa.Xor(x=1, y=2)),
    (0x8124, isa.Add(x=1, y=2)),
    (0x8125, isa.Sub(x=1, y=2)),
    (0x8106, isa.ShiftRight(x=1)),
    (0x8127, isa.SubReversed(x=1, y=2)),
    (0x810E, isa.ShiftLeft(x=1)),
    (0x9AB0, isa.SkipIfNotEqual(x=0xA, y=0xB)),
    (0xA300, isa.LoadIndex(address=0x300)),
    (0xB250, isa.JumpOffset(address=0x250)),
    (0xC70F, isa.Random(x=7, byte=0x0F)),
    (0xD125, isa.Draw(x=1, y=2, height=5)),
    (0xE59E, isa.SkipIfKeyHeld(x=5)),
    (0xE5A1, isa.SkipIfKeyNotHeld(x=5)),
    (0xF207, isa.LoadDelayTimer(x=2)),
    (0xF30A, isa.WaitForKeyPress(x=3)),
    (0xF415, isa.SetDelayTimer(x=4)),
    (0xF518, isa.SetSoundTimer(x=5)),
    (0xF61E, isa.AddIndex(x=6)),
    (0xF729, isa.LoadFontGlyph(x=7)),
    (0xF833, isa.StoreBCD(x=8)),
    (0xF955, isa.StoreRegisters(x=9)),
    (0xFA65, isa.LoadRegisters(x=0xA)),
]


class TestDecode:
    """Test the decoder against the instruction table."""

    @pytest.mark.parametrize("word,expected", DECODE_TABLE)
    def test_decode_table(self, word, expected):
        assert decode(word) == expected
        assert type(decode(word)) is type(expected)

    def test_table_covers_every_instruction(self):
        assert {type(expected) for _, expected in DECODE_TABLE} == set(INSTRUCTION_TYPES)

    @pytest.mark.parametrize("word", [
        0x0000, 0x00E1, 0x00EF, 0x0123, 0x0FFF,
        0x5121, 0x512F, 0x9AB1,
        0x8128, 0x812F,
        0xE19F, 0xE1A0, 0xE100,
        0xF000, 0xF108, 0xF156, 0xF1FF,
    ])
    def test_unrecognized(self, word):
        assert decode(word) is None

    def test_decode_accepts_opcode(self):
        assert decode(Opcode(raw=0x6A05)) == isa.LoadByte(x=0xA, byte=0x05)

    def test_decode_is_total(self):
        """Every 16-bit word decodes to one known variant or None."""
        for word in range(0x10000):
            instruction = decode(word)
            assert instruction is None or type(instruction) in INSTRUCTION_TYPES

    def test_decode_is_pure(self):
        assert decode(0xD125) == decode(0xD125)
        assert decode(0x2ABC) != decode(0x1ABC)

    def test_shift_ignores_y(self):
        assert decode(0x81F6) == isa.ShiftRight(x=1)
        assert decode(0x81FE) == isa.ShiftLeft(x=1)


class TestEncode:
    """Test the inverse mapping."""

    @pytest.mark.parametrize("word,instruction", DECODE_TABLE)
    def test_encode_table(self, word, instruction):
        assert encode(instruction) == word

    def test_shift_encodes_zero_y(self):
        assert encode(decode(0x81F6)) == 0x8106


class TestDisassembly:
    """Test mnemonics and ROM listings."""

    @pytest.mark.parametrize("word,text", [
        (0x00E0, "CLS"),
        (0x2ABC, "CALL 0xABC"),
        (0x6A2A, "LD VA, 0x2A"),
        (0x8124, "ADD V1, V2"),
        (0xD125, "DRW V1, V2, 5"),
        (0xF30A, "LD V3, K"),
        (0xF955, "LD [I], V9"),
    ])
    def test_mnemonic(self, word, text):
        assert mnemonic(decode(word)) == text

    def test_every_instruction_has_a_mnemonic(self):
        for _, instruction in DECODE_TABLE:
            assert mnemonic(instruction)

    def test_disassemble(self):
        rom = program(0x6001, 0x0000, 0x1200) + b"\xAA"
        listing = list(disassemble(rom))

        assert listing == [
            (0x200, 0x6001, isa.LoadByte(x=0, byte=1)),
            (0x202, 0x0000, None),
            (0x204, 0x1200, isa.Jump(address=0x200)),
        ]
