"""System instructions (0x0xxx)."""

import jax.numpy as jnp
from octavm.state import MachineState
from octavm.decode import DecodedInstruction
from octavm.errors import UnknownOpcode
from octavm.stack import pop


def execute_clear_screen(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display), draw_flag=True)


def execute_return(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack, instruction.raw)
    return state.replace(stack=stack, pc=address)


SYSTEM_INSTRUCTIONS = {
    0x00E0: execute_clear_screen,
    0x00EE: execute_return,
}


def execute_system_instruction(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """Dispatch system instructions on the full opcode."""
    handler = SYSTEM_INSTRUCTIONS.get(instruction.raw)
    if handler is None:
        raise UnknownOpcode(instruction.raw)
    return handler(state, instruction)
