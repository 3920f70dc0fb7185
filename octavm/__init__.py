"""Byte-code virtual machine for the CHIP-8 instruction set."""

from octavm.state import MachineState, StackState, initialize, reset
from octavm.emulator import execute, fetch, step, run, decay_timers, load_program, load_rom, read_image
from octavm.decode import DecodedInstruction, decode
from octavm.errors import (
    MachineError, LoadError, ImageTooLarge, ReadError, ExecutionError,
    UnknownOpcode, StackOverflow, StackUnderflow, OutOfBoundsDraw, MemoryOutOfBounds,
)
from octavm.interface import press_key, release_key, set_keypad, consume_frame, framebuffer_rows, sound_active
from octavm.constants import *

__all__ = [
    "MachineState",
    "StackState",
    "initialize",
    "reset",
    "fetch",
    "execute",
    "step",
    "run",
    "decay_timers",
    "load_program",
    "load_rom",
    "read_image",
    "DecodedInstruction",
    "decode",
    "MachineError",
    "LoadError",
    "ImageTooLarge",
    "ReadError",
    "ExecutionError",
    "UnknownOpcode",
    "StackOverflow",
    "StackUnderflow",
    "OutOfBoundsDraw",
    "MemoryOutOfBounds",
    "press_key",
    "release_key",
    "set_keypad",
    "consume_frame",
    "framebuffer_rows",
    "sound_active",
    "PROGRAM_START",
    "FONT_START",
    "FONT_DATA",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "DISPLAY_SIZE",
    "MEMORY_SIZE",
    "MAX_PROGRAM_SIZE",
    "STACK_SIZE",
]
