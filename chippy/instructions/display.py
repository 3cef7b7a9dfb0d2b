"""CHIP-8 display operations."""

from chippy import display
from chippy.constants import FLAG_REGISTER
from chippy.state import EmulatorState
from chippy.isa import Draw
from chippy.memory import read_block
from chippy.instructions import next_pc


def execute_display(state: EmulatorState, instruction: Draw) -> tuple[EmulatorState, int]:
    """DXYN - Draw sprite at (VX, VY) with height N, VF = collision."""
    rows = read_block(state.memory, state.I, instruction.height) if instruction.height else []
    new_display, collision = display.draw(
        state.display, int(state.V[instruction.x]), int(state.V[instruction.y]), rows
    )
    return (
        state.replace(display=new_display, V=state.V.at[FLAG_REGISTER].set(int(collision))),
        next_pc(state),
    )
