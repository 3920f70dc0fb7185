"""ALU operations (8xxx).

Each operation maps (VX, VY) to (new VX, new VF). A VF of ``None`` means the
operation leaves the flag register alone.
"""

import jax.numpy as jnp
from octavm.constants import FLAG_REGISTER
from octavm.state import MachineState
from octavm.decode import DecodedInstruction
from octavm.errors import UnknownOpcode


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, VF = carry."""
    result = jnp.astype(vx, jnp.int32) + vy
    carry = jnp.astype(result > 255, jnp.uint8)
    return jnp.astype(result & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx, vy):
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    no_borrow = jnp.astype(vx >= vy, jnp.uint8)
    result = (vx - vy) & 0xFF
    return result, no_borrow


def alu_shift_right(vx, vy):
    """8XY6 - Shift right: VX >>= 1, VF = bit shifted out."""
    shifted_bit = vx & 1
    result = vx >> 1
    return result, shifted_bit


def alu_sub_yx(vx, vy):
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    no_borrow = jnp.astype(vy >= vx, jnp.uint8)
    result = (vy - vx) & 0xFF
    return result, no_borrow


def alu_shift_left(vx, vy):
    """8XYE - Shift left: VX <<= 1, VF = bit shifted out."""
    shifted_bit = (vx & 0x80) >> 7
    result = (vx << 1) & 0xFF
    return result, shifted_bit


ALU_OPERATIONS = {
    0x0: alu_set,
    0x1: alu_or,
    0x2: alu_and,
    0x3: alu_xor,
    0x4: alu_add,
    0x5: alu_sub_xy,
    0x6: alu_shift_right,
    0x7: alu_sub_yx,
    0xE: alu_shift_left,
}


def execute_alu_operation(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """8XYN - ALU operations dispatcher."""
    operation = ALU_OPERATIONS.get(instruction.n)
    if operation is None:
        raise UnknownOpcode(instruction.raw)

    result, vf = operation(state.V[instruction.x], state.V[instruction.y])

    new_V = state.V.at[instruction.x].set(jnp.astype(result, jnp.uint8))
    if vf is not None:
        # Flag is written last, so it wins when X is VF
        new_V = new_V.at[FLAG_REGISTER].set(jnp.astype(vf, jnp.uint8))
    return state.replace(V=new_V)
