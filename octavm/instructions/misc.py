"""Miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from octavm.state import MachineState, check_memory_range
from octavm.decode import DecodedInstruction
from octavm.errors import UnknownOpcode
from octavm.constants import FONT_START, FONT_GLYPH_SIZE


def execute_get_delay_timer(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_wait_for_key(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX0A - Wait for key press.

    While no key is down the PC is rewound onto this instruction, so the host
    keeps stepping it until a pressed key shows up in the keypad. The lowest
    pressed key code is then stored in VX.
    """
    key_pressed = jnp.any(state.keypad)
    pressed_key = jnp.astype(jnp.argmax(state.keypad), jnp.uint8)
    return state.replace(
        V=jnp.where(key_pressed, state.V.at[instruction.x].set(pressed_key), state.V),
        pc=jnp.where(key_pressed, state.pc, state.pc - 2),
    )


def execute_set_delay_timer(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX1E - Add VX to I register (VF untouched)."""
    return state.replace(I=state.I + jnp.astype(state.V[instruction.x], jnp.uint16))


def execute_font_character(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + jnp.astype(state.V[instruction.x], jnp.uint16) * FONT_GLYPH_SIZE
    return state.replace(I=font_address)


def execute_bcd_conversion(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    address = int(state.I)
    check_memory_range(address, 3, instruction.raw)

    value = state.V[instruction.x]
    digits = jnp.array([
        value // 100,
        (value // 10) % 10,
        value % 10
    ], dtype=jnp.uint8)

    return state.replace(memory=state.memory.at[address:address + 3].set(digits))


def execute_store_registers(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX55 - Store V0 through VX in memory starting at I."""
    address = int(state.I)
    count = instruction.x + 1
    check_memory_range(address, count, instruction.raw)
    return state.replace(memory=state.memory.at[address:address + count].set(state.V[:count]))


def execute_load_registers(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """FX65 - Load V0 through VX from memory starting at I."""
    address = int(state.I)
    count = instruction.x + 1
    check_memory_range(address, count, instruction.raw)
    return state.replace(V=state.V.at[:count].set(state.memory[address:address + count]))


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: MachineState, instruction: DecodedInstruction) -> MachineState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnknownOpcode(instruction.raw)
    return handler(state, instruction)
