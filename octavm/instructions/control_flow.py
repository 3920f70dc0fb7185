"""Control flow instructions."""

import jax.numpy as jnp
from octavm.state import MachineState
from octavm.decode import DecodedInstruction
from octavm.errors import UnknownOpcode
from octavm.stack import push


def execute_jump(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.asarray(instruction.nnn, dtype=jnp.uint16))


def execute_call(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """2NNN - Call subroutine at NNN."""
    # pc already points at the instruction after the call
    state = state.replace(stack=push(state.stack, state.pc, instruction.raw))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: MachineState, instruction: DecodedInstruction) -> MachineState:
        condition = condition_fn(state, instruction)
        return state.replace(pc=jnp.where(condition, state.pc + 2, state.pc))
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] == state.V[inst.y]
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: state.V[inst.x] != state.V[inst.y]
)

execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: state.keypad[state.V[inst.x] & 0xF]
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: ~state.keypad[state.V[inst.x] & 0xF]
)


def execute_jump_with_offset(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = instruction.nnn + jnp.astype(state.V[0], jnp.uint16)
    return state.replace(pc=jump_address)


KEY_INSTRUCTIONS = {
    0x9E: execute_skip_if_key_pressed,
    0xA1: execute_skip_if_key_not_pressed,
}


def execute_skip_if_key(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """EX9E/EXA1 - Skip if key pressed/not pressed."""
    handler = KEY_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnknownOpcode(instruction.raw)
    return handler(state, instruction)
