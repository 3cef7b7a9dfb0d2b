"""CHIP-8 ALU operations (8xxx)."""

from typing import Optional

from chippy.constants import BYTE_MASK, FLAG_REGISTER
from chippy.state import EmulatorState
from chippy import isa
from chippy.instructions import next_pc


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & BYTE_MASK, int(result > BYTE_MASK)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY5 - Subtract: VX -= VY, VF = 1 when no borrow."""
    return (vx - vy) & BYTE_MASK, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 when no borrow."""
    return (vy - vx) & BYTE_MASK, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & BYTE_MASK, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    isa.Move: alu_set,
    isa.Or: alu_or,
    isa.And: alu_and,
    isa.Xor: alu_xor,
    isa.Add: alu_add,
    isa.Sub: alu_sub_xy,
    isa.ShiftRight: alu_shift_right,
    isa.SubReversed: alu_sub_yx,
    isa.ShiftLeft: alu_shift_left,
}


def execute_alu_operation(state: EmulatorState, instruction) -> tuple[EmulatorState, int]:
    """8XYN - ALU operations dispatcher.

    The result is written before the flag, so VF always ends up holding the
    flag when it is also the destination. Shifts only read VX.
    """
    vx = int(state.V[instruction.x])
    vy = int(state.V[getattr(instruction, "y", instruction.x)])

    result, vf = ALU_OPERATIONS[type(instruction)](vx, vy)

    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V), next_pc(state)
