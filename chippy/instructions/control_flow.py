"""CHIP-8 control flow instructions."""

from chippy import keypad
from chippy.constants import WORD_MASK
from chippy.state import EmulatorState
from chippy.isa import Jump, Call, JumpOffset
from chippy.stack import push
from chippy.instructions import next_pc


def execute_jump(state: EmulatorState, instruction: Jump) -> tuple[EmulatorState, int]:
    """1NNN - Jump to address NNN."""
    return state, instruction.address


def execute_call(state: EmulatorState, instruction: Call) -> tuple[EmulatorState, int]:
    """2NNN - Call subroutine at NNN.

    Pushes the address of this call instruction, not the one after it.
    """
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def execute_jump_with_offset(state: EmulatorState, instruction: JumpOffset) -> tuple[EmulatorState, int]:
    """BNNN - Jump to address NNN + V0."""
    return state, (instruction.address + int(state.V[0])) & WORD_MASK


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction) -> tuple[EmulatorState, int]:
        if condition_fn(state, instruction):
            return state, next_pc(state, 2)
        return state, next_pc(state)
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.byte
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.byte
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)

execute_skip_if_key = make_skip_instruction(
    lambda state, inst: keypad.is_held(state.keypad, state.V[inst.x])
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not keypad.is_held(state.keypad, state.V[inst.x])
)
