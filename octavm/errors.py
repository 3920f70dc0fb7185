"""Errors raised while loading or running a program."""

from typing import Optional


class MachineError(Exception):
    """Base error for virtual machine failures."""


class LoadError(MachineError):
    """Raised when a program image cannot be placed into memory."""


class ImageTooLarge(LoadError):
    """Program image does not fit above the reserved interpreter area."""

    def __init__(self, size: int, limit: int):
        super().__init__(f"Program image is {size} bytes, limit is {limit}")
        self.size = size
        self.limit = limit


class ReadError(LoadError):
    """Program image could not be read completely from its source."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
        self.reason = reason


class ExecutionError(MachineError):
    """Raised by a single instruction; the state before it stays valid."""

    def __init__(self, opcode: Optional[int], message: str):
        location = f"0x{opcode:04X}" if opcode is not None else "fetch"
        super().__init__(f"{location}: {message}")
        self.opcode = opcode


class UnknownOpcode(ExecutionError):
    def __init__(self, opcode: int):
        super().__init__(opcode, "unknown opcode")


class StackOverflow(ExecutionError):
    def __init__(self, opcode: int, depth: int):
        super().__init__(opcode, f"call stack is full ({depth} entries)")
        self.depth = depth


class StackUnderflow(ExecutionError):
    def __init__(self, opcode: int):
        super().__init__(opcode, "return with an empty call stack")


class OutOfBoundsDraw(ExecutionError):
    """A set sprite pixel lands outside the framebuffer."""

    def __init__(self, opcode: int, x: int, y: int, height: int):
        super().__init__(opcode, f"sprite of height {height} at ({x}, {y}) leaves the screen")
        self.x = x
        self.y = y
        self.height = height


class MemoryOutOfBounds(ExecutionError):
    """An instruction addresses bytes past the end of memory."""

    def __init__(self, opcode: Optional[int], address: int, length: int):
        super().__init__(opcode, f"access of {length} byte(s) at 0x{address:X} is outside memory")
        self.address = address
        self.length = length
