"""Call stack operations."""

import jax.numpy as jnp
from octavm.constants import STACK_SIZE
from octavm.errors import StackOverflow, StackUnderflow
from octavm.state import StackState


def push(stack: StackState, address: jnp.ndarray, opcode: int) -> StackState:
    """Push a return address; the stack holds at most STACK_SIZE entries."""
    if stack.pointer >= STACK_SIZE:
        raise StackOverflow(opcode, stack.pointer)
    new_data = stack.data.at[stack.pointer].set(jnp.astype(address, jnp.uint16))
    return stack.replace(data=new_data, pointer=stack.pointer + 1)


def pop(stack: StackState, opcode: int) -> tuple[StackState, jnp.ndarray]:
    """Pop the most recent return address."""
    if stack.pointer <= 0:
        raise StackUnderflow(opcode)
    new_pointer = stack.pointer - 1
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address
