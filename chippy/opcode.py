"""Raw CHIP-8 opcode word and its operand fields."""

from chex import dataclass

from chippy.constants import WORD_MASK


@dataclass(frozen=True)
class Opcode:
    """16-bit instruction word as fetched from memory (high byte first).

    The word is masked to 16 bits on construction. Every accessor is a plain
    mask/shift, so any 16-bit value has well-defined fields whether or not it
    names a real instruction.
    """
    raw: int

    def __post_init__(self):
        object.__setattr__(self, "raw", int(self.raw) & WORD_MASK)

    @classmethod
    def from_bytes(cls, high: int, low: int) -> "Opcode":
        return cls(raw=(int(high) << 8) | int(low))

    @property
    def group(self) -> int:
        """First nibble."""
        return (self.raw & 0xF000) >> 12

    @property
    def x(self) -> int:
        """Second nibble (VX register)."""
        return (self.raw & 0x0F00) >> 8

    @property
    def y(self) -> int:
        """Third nibble (VY register)."""
        return (self.raw & 0x00F0) >> 4

    @property
    def n(self) -> int:
        """Fourth nibble (4-bit immediate)."""
        return self.raw & 0x000F

    @property
    def nn(self) -> int:
        """Last byte (8-bit immediate)."""
        return self.raw & 0x00FF

    @property
    def nnn(self) -> int:
        """Last 12 bits (12-bit address)."""
        return self.raw & 0x0FFF

    def __int__(self) -> int:
        return self.raw
