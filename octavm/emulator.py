"""Fetch-decode-execute engine and program loading."""

import os
from typing import Optional

import jax.numpy as jnp
from tqdm import tqdm

from octavm.state import MachineState, check_memory_range
from octavm.decode import decode
from octavm.constants import PROGRAM_START, MAX_PROGRAM_SIZE
from octavm.errors import ExecutionError, ImageTooLarge, ReadError
from octavm.logging import ConsoleLogger, TraceLogger
from octavm.instructions.system import execute_system_instruction
from octavm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from octavm.instructions.alu import execute_alu_operation
from octavm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from octavm.instructions.display import execute_display
from octavm.instructions.misc import execute_misc_instruction


# Indexed by the top nibble of the opcode
INSTRUCTION_FAMILIES = [
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
]


def execute(state: MachineState, instruction: int) -> MachineState:
    """Execute a single instruction on a state whose PC already points past it."""
    decoded_instruction = decode(instruction)
    return INSTRUCTION_FAMILIES[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> jnp.uint16:
    """Pack two bytes into uint16."""
    return (high.astype(jnp.uint16) << 8) | low.astype(jnp.uint16)


def fetch(state: MachineState) -> tuple[MachineState, jnp.uint16]:
    """Fetch next instruction from memory and advance PC past it."""
    pc = int(state.pc)
    check_memory_range(pc, 2, None)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def decay_timers(state: MachineState) -> MachineState:
    """Count both timers down by one, stopping at zero."""
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def step(state: MachineState, logger: Optional[TraceLogger] = None) -> MachineState:
    """Run one fetch-decode-execute cycle followed by timer decay.

    On failure the error propagates and the caller keeps the state it passed
    in: PC stays on the failing instruction and the timers are not decayed.
    """
    pc = int(state.pc)
    try:
        new_state, instruction = fetch(state)
        new_state = execute(new_state, int(instruction))
    except ExecutionError as error:
        if logger is not None:
            logger.log_error(pc, error, state)
        raise
    if logger is not None:
        logger.log_instruction(pc, decode(instruction), new_state)
    return decay_timers(new_state)


def run(state: MachineState, num_cycles: int, logger: Optional[TraceLogger] = None,
        progress: bool = False) -> MachineState:
    """Step the machine ``num_cycles`` times."""
    cycles = range(num_cycles)
    if progress:
        cycles = tqdm(cycles, desc="Running", unit="cycle")
    for _ in cycles:
        state = step(state, logger)
    return state


def load_program(state: MachineState, program: bytes) -> MachineState:
    """Copy a program image into memory starting at PROGRAM_START."""
    if len(program) > MAX_PROGRAM_SIZE:
        raise ImageTooLarge(len(program), MAX_PROGRAM_SIZE)
    if not program:
        return state
    rom_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array)
    return state.replace(memory=new_memory)


def read_image(filename: str) -> bytes:
    """Read a complete program image from disk."""
    try:
        expected_size = os.path.getsize(filename)
        with open(filename, 'rb') as f:
            rom_data = f.read()
    except OSError as e:
        raise ReadError(filename, e.strerror or str(e)) from e
    if len(rom_data) != expected_size:
        raise ReadError(filename, f"read {len(rom_data)} of {expected_size} bytes")
    return rom_data


def load_rom(state: MachineState, filename: str, logger: Optional[ConsoleLogger] = None) -> MachineState:
    """Read a program image from disk and load it at PROGRAM_START."""
    rom_data = read_image(filename)
    if logger is not None:
        logger.info(f"Loading ROM: {filename} ({len(rom_data)} bytes)")
    return load_program(state, rom_data)
