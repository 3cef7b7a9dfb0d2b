"""Exceptions raised by the CHIP-8 virtual machine."""


class Chip8Error(Exception):
    """Base class for all emulator errors."""


class RomLoadError(Chip8Error):
    """ROM could not be read or does not fit in program memory."""

    def __init__(self, message: str, size: int | None = None):
        super().__init__(message)
        self.size = size


class UnrecognizedOpcodeError(Chip8Error):
    """Fetched word does not decode to any known instruction."""

    def __init__(self, opcode: int, address: int):
        super().__init__(f"Unrecognized opcode 0x{opcode:04X} at 0x{address:03X}")
        self.opcode = opcode
        self.address = address


class StackOverflowError(Chip8Error):
    """Subroutine call nested deeper than the call stack allows."""

    def __init__(self, depth: int):
        super().__init__(f"Call stack overflow (depth {depth})")
        self.depth = depth


class StackUnderflowError(Chip8Error):
    """Return executed with an empty call stack."""

    def __init__(self):
        super().__init__("Return with empty call stack")
        self.depth = 0


class MemoryAccessError(Chip8Error):
    """Access outside the 4KB address space."""

    def __init__(self, address: int, length: int = 1):
        super().__init__(
            f"Memory access out of range: 0x{address:04X}..0x{address + length - 1:04X}"
        )
        self.address = address
        self.length = length
