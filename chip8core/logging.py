"""Console logging utilities for the CHIP-8 interpreter.

This module provides a levelled console logger, an execution logger that
traces instructions and faults for the fetch loop, and a real-time tqdm
progress bar for long headless runs.
"""

import time
import sys
from typing import Optional, TextIO

from tqdm import tqdm

from chip8core.disassemble import disassemble
from chip8core.errors import FatalError
from chip8core.state import EmulatorState


class ConsoleLogger:
    """Console logger with level filtering, colours and timestamps."""

    level_order = {
        "DEBUG": 0,
        "INFO": 1,
        "WARNING": 2,
        "ERROR": 3,
        "CRITICAL": 4,
    }

    def __init__(
        self,
        name: str = "CHIP-8",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        if log_level.upper() not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order)}"
            )
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream
        target = stream or sys.stdout
        self.use_colors = use_colors and hasattr(target, "isatty") and target.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {}
        )

    def is_enabled_for(self, level: str) -> bool:
        """Check if messages at ``level`` would be emitted."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{self.colors.get(level, '')}{level_str}{self.colors['RESET']}"
        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = level.upper()
        if self.is_enabled_for(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class ExecutionLogger(ConsoleLogger):
    """Logger for the fetch-decode-execute loop."""

    def __init__(self, name: str = "Interpreter", **kwargs):
        super().__init__(name, **kwargs)

    def log_instruction(self, address: int, instruction: int):
        """Trace one executed instruction at DEBUG level."""
        # Disassembly is skipped entirely unless tracing is on
        if self.is_enabled_for("DEBUG"):
            self.debug(f"0x{address:03X}: {instruction:04X}  {disassemble(instruction)}")

    def log_fault(self, error: FatalError):
        """Report a fault that halts the run."""
        message = f"{type(error).__name__}: {error}"
        if error.instruction is not None:
            message += f" [{disassemble(error.instruction)}]"
        self.error(message)

    def log_key_wait(self, state: EmulatorState):
        self.info(f"Waiting for key press into V{int(state.key_register):X}")

    def log_run_end(self, state: EmulatorState, executed: int):
        elapsed = time.time() - self.start_time
        self.info(
            f"Executed {executed} instructions in {elapsed:.2f}s, "
            f"pc=0x{int(state.pc):03X} I=0x{int(state.I):03X} "
            f"DT={int(state.delay_timer)} ST={int(state.sound_timer)}"
        )


def build_progress_bar(total: int, desc: Optional[str] = None, enabled: bool = True, **kwargs) -> tqdm:
    """Build a tqdm progress bar counting executed instructions.

    Extra keyword arguments go to tqdm; ``disable`` and ``unit`` are fixed
    here (use ``enabled`` to switch the bar off).
    """
    reserved = sorted(set(kwargs) & {"disable", "unit"})
    if reserved:
        raise TypeError(f"build_progress_bar() does not accept {reserved}; use enabled= instead of disable=")
    if desc is None:
        desc = f"Running ({total:,} instructions)"
    return tqdm(total=total, desc=desc, unit="instr", disable=not enabled, **kwargs)
