"""Register and index operations."""

import jax
import jax.numpy as jnp
from octavm.state import MachineState
from octavm.decode import DecodedInstruction


def execute_set(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.nn))


def execute_add(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """7XNN - Add NN to VX, wrapping at 8 bits without touching VF."""
    return state.replace(V=state.V.at[instruction.x].add(instruction.nn))


def execute_set_index(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.asarray(instruction.nnn, dtype=jnp.uint16))


def execute_random(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    masked = jnp.astype(random_value & instruction.nn, jnp.uint8)
    return state.replace(V=state.V.at[instruction.x].set(masked), rng=key)
