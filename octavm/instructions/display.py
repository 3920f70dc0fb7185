"""Display operations."""

import jax.numpy as jnp
from octavm.state import MachineState, check_memory_range
from octavm.decode import DecodedInstruction
from octavm.errors import OutOfBoundsDraw
from octavm.constants import SCREEN_WIDTH, SCREEN_HEIGHT, DISPLAY_SIZE, SPRITE_WIDTH, FLAG_REGISTER

# Bit shift for each sprite column, most significant bit first
COLUMN_SHIFTS = (SPRITE_WIDTH - 1) - jnp.arange(SPRITE_WIDTH, dtype=jnp.uint8)


def sprite_cells(origin_x: int, origin_y: int, height: int, wrap: bool):
    """Framebuffer cell index and visibility for every pixel of a sprite.

    Returns two (height, 8) arrays. With ``wrap`` every pixel is folded back
    onto the screen; otherwise pixels past the right or bottom edge are marked
    invisible and their index is pushed out of range.
    """
    xs = origin_x + jnp.arange(SPRITE_WIDTH)
    ys = origin_y + jnp.arange(height)
    if wrap:
        xs = xs % SCREEN_WIDTH
        ys = ys % SCREEN_HEIGHT
    visible = (xs[None, :] < SCREEN_WIDTH) & (ys[:, None] < SCREEN_HEIGHT)
    cells = ys[:, None] * SCREEN_WIDTH + xs[None, :]
    return jnp.where(visible, cells, DISPLAY_SIZE), visible


def execute_display(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """DXYN - XOR-draw an N-row sprite from memory[I] at (VX, VY); VF = collision."""
    height = instruction.n
    address = int(state.I)
    check_memory_range(address, height, instruction.raw)

    origin_x = int(state.V[instruction.x])
    origin_y = int(state.V[instruction.y])

    rows = state.memory[address:address + height]
    bits = (rows[:, None] >> COLUMN_SHIFTS[None, :]) & 1
    cells, visible = sprite_cells(origin_x, origin_y, height, state.wrap_sprites)

    if bool(jnp.any((bits == 1) & ~visible)):
        raise OutOfBoundsDraw(instruction.raw, origin_x, origin_y, height)

    sprite = jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8).at[cells.ravel()].max(bits.ravel(), mode="drop")
    collision = jnp.any(state.display & sprite)

    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(jnp.astype(collision, jnp.uint8)),
        draw_flag=True,
    )
