"""Host-facing helpers for the keypad and framebuffer.

The host owns input polling, rendering and frame pacing. It writes key
transitions into the state before each step and reads the framebuffer back
whenever the redraw flag is set.
"""

from typing import Optional, Sequence

import jax.numpy as jnp
from octavm.state import MachineState
from octavm.constants import NUM_KEYS, SCREEN_WIDTH, SCREEN_HEIGHT


def _check_key(key: int):
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key code must be in [0, {NUM_KEYS - 1}], got {key}")


def press_key(state: MachineState, key: int) -> MachineState:
    """Mark ``key`` as held down."""
    _check_key(key)
    return state.replace(keypad=state.keypad.at[key].set(True))


def release_key(state: MachineState, key: int) -> MachineState:
    """Mark ``key`` as released."""
    _check_key(key)
    return state.replace(keypad=state.keypad.at[key].set(False))


def set_keypad(state: MachineState, pressed: Sequence[bool]) -> MachineState:
    """Replace the whole keypad with a snapshot of 16 key states."""
    keypad = jnp.asarray(pressed, dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Keypad snapshot must have {NUM_KEYS} entries, got shape {keypad.shape}")
    return state.replace(keypad=keypad)


def framebuffer_rows(state: MachineState) -> jnp.ndarray:
    """Framebuffer as a (32, 64) array indexed [y, x]."""
    return state.display.reshape(SCREEN_HEIGHT, SCREEN_WIDTH)


def consume_frame(state: MachineState) -> tuple[MachineState, Optional[jnp.ndarray]]:
    """Read and clear the redraw flag.

    Returns the state with the flag cleared and the (32, 64) frame to render,
    or the unchanged state and ``None`` when nothing was drawn since the last call.
    """
    if not state.draw_flag:
        return state, None
    return state.replace(draw_flag=False), framebuffer_rows(state)


def sound_active(state: MachineState) -> bool:
    """Whether the host should be sounding its tone."""
    return bool(state.sound_timer > 0)
