"""Virtual machine state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from octavm.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, DISPLAY_SIZE,
    NUM_REGISTERS, NUM_KEYS, STACK_SIZE,
)
from octavm.errors import MemoryOutOfBounds


@dataclass
class StackState:
    """Call stack of return addresses."""
    data: jnp.ndarray
    pointer: int = 0


class MachineState(PyTreeNode):
    """Complete machine state, replaced rather than mutated by every operation."""
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    I: jnp.ndarray
    V: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    display: jnp.ndarray  # row-major, cell (y * SCREEN_WIDTH) + x
    keypad: jnp.ndarray
    draw_flag: bool = False
    wrap_sprites: bool = field(pytree_node=False, default=True)


def initialize(rng: jax.Array = jax.random.PRNGKey(0), wrap_sprites: bool = True) -> MachineState:
    """Create a zeroed machine with the font set loaded and PC at the program start."""
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    memory = memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(jnp.array(FONT_DATA, dtype=jnp.uint8))
    return MachineState(
        rng=rng,
        memory=memory,
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        I=jnp.zeros((), dtype=jnp.uint16),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        stack=StackState(data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16)),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        display=jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        draw_flag=False,
        wrap_sprites=wrap_sprites,
    )


def reset(state: MachineState) -> MachineState:
    """Re-initialize, keeping the random key and configuration."""
    return initialize(state.rng, wrap_sprites=state.wrap_sprites)


def check_memory_range(address: int, length: int, opcode: Optional[int]) -> None:
    """Raise MemoryOutOfBounds unless [address, address + length) lies in memory."""
    if address < 0 or address + length > MEMORY_SIZE:
        raise MemoryOutOfBounds(opcode, address, length)
