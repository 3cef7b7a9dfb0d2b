"""CHIP-8 system instructions (0x0xxx)."""

from chippy import display
from chippy.state import EmulatorState
from chippy.isa import ClearScreen, Return
from chippy.stack import pop
from chippy.instructions import next_pc


def execute_clear_screen(state: EmulatorState, instruction: ClearScreen) -> tuple[EmulatorState, int]:
    """00E0 - Clear display."""
    return state.replace(display=display.clear(state.display)), next_pc(state)


def execute_return(state: EmulatorState, instruction: Return) -> tuple[EmulatorState, int]:
    """00EE - Return from subroutine.

    The stack holds the address of the call itself, so execution resumes one
    instruction past it.
    """
    stack, address = pop(state.stack)
    return state.replace(stack=stack), address + 2
