"""Instruction handlers, grouped by family.

Every handler takes ``(state, instruction)`` and returns the updated state
together with the address of the next instruction to fetch.
"""

from chippy.constants import INSTRUCTION_SIZE, WORD_MASK
from chippy.state import EmulatorState


def next_pc(state: EmulatorState, instructions: int = 1) -> int:
    """Address ``instructions`` words after the current one."""
    return (int(state.pc) + INSTRUCTION_SIZE * instructions) & WORD_MASK
