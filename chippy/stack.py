"""CHIP-8 stack operations."""

import jax.numpy as jnp
from chippy.constants import ADDRESS_MASK
from chippy.errors import StackOverflowError, StackUnderflowError
from chippy.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack.

    Raises:
        StackOverflowError: If every slot is already in use.
    """
    if stack.depth >= stack.data.shape[0]:
        raise StackOverflowError(stack.depth + 1)
    masked_address = int(address) & ADDRESS_MASK
    new_data = stack.data.at[stack.depth].set(masked_address)
    return stack.replace(data=new_data, pointer=stack.depth + 1)


def pop(stack: StackState) -> tuple[StackState, int]:
    """Pop address from stack.

    Raises:
        StackUnderflowError: If the stack is empty.
    """
    if stack.depth == 0:
        raise StackUnderflowError()
    new_pointer = stack.depth - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
