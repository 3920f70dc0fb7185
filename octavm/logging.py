"""Console logging utilities for octavm.

Provides a level-filtered console logger and a trace logger that prints one
diagnostic line per executed instruction. Trace lines are an observability
aid only and carry no stable format.
"""

import time
import sys
from typing import Optional

from octavm.decode import DecodedInstruction, format_instruction


LEVEL_RANK = {"DEBUG": 0, "INFO": 1, "WARNING": 2, "ERROR": 3}

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
}
RESET_COLOR = "\033[0m"


class ConsoleLogger:
    """Console logger for loading and runtime messages."""

    def __init__(
        self,
        name: str = "octavm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _should_log(self, level: str) -> bool:
        # Unknown levels rank as INFO
        return LEVEL_RANK.get(level, 1) >= LEVEL_RANK.get(self.log_level, 1)

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{LEVEL_COLORS[level]}{level_str}{RESET_COLOR}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Print ``message`` when ``level`` passes the logger's threshold."""
        if self._should_log(level):
            print(self._format_message(level, message), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class TraceLogger(ConsoleLogger):
    """Logger that traces executed instructions and execution errors."""

    def __init__(
        self,
        name: str = "trace",
        log_level: str = "DEBUG",
        use_colors: bool = False,
        show_timestamps: bool = False,
    ):
        super().__init__(name, log_level, use_colors, show_timestamps)
        self.instruction_count = 0

    def log_instruction(self, pc: int, instruction: DecodedInstruction, state):
        """Log one executed instruction with the state it produced."""
        self.instruction_count += 1
        if not self._should_log("DEBUG"):
            return
        registers = " ".join(f"{int(v):02X}" for v in state.V)
        self.debug(
            f"0x{pc:03X}: {format_instruction(instruction)} | "
            f"PC={int(state.pc):03X} I={int(state.I):03X} V=[{registers}]"
        )

    def log_error(self, pc: int, error: Exception, state: Optional[object] = None):
        """Log an instruction that failed; the machine stays at ``pc``."""
        message = f"0x{pc:03X}: {error}"
        if state is not None:
            message += f" (stack depth {state.stack.pointer})"
        self.error(message)
