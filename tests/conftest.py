"""Test configuration and fixtures for the virtual machine tests."""

import pytest
import jax.numpy as jnp
from octavm import initialize, load_program


@pytest.fixture
def fresh_state():
    """Provide a fresh machine state for each test."""
    return initialize()


@pytest.fixture
def strict_state():
    """Provide a fresh state that rejects sprites leaving the screen."""
    return initialize(wrap_sprites=False)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def load_words(state, *words):
    """Helper to load a program given as 16-bit opcodes."""
    program = b"".join(word.to_bytes(2, "big") for word in words)
    return load_program(state, program)


def pixel(state, x, y):
    """Framebuffer cell at column x, row y."""
    return int(state.display[y * 64 + x])
