"""Console logging utilities for chip8vm.

A small logger with level filtering, colors and elapsed-time stamps, plus an
instruction tracer built on top of it for following program execution, and
a tqdm progress bar for long headless runs.
"""

import time
import sys
from typing import Any, Dict, Optional

from tqdm import tqdm

from chip8vm.disassemble import disassemble


class ConsoleLogger:
    """Flexible console logger with level filtering and formatters."""

    def __init__(
        self,
        name: str = "chip8vm",
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
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def is_enabled_for(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self.is_enabled_for(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        """Log debug message."""
        self.log("DEBUG", message)

    def info(self, message: str):
        """Log info message."""
        self.log("INFO", message)

    def warning(self, message: str):
        """Log warning message."""
        self.log("WARNING", message)

    def error(self, message: str):
        """Log error message."""
        self.log("ERROR", message)

    def critical(self, message: str):
        """Log critical message."""
        self.log("CRITICAL", message)


class InstructionTracer(ConsoleLogger):
    """Logger that records executed instructions at DEBUG level."""

    def __init__(self, name: str = "trace", history_size: int = 64, **kwargs):
        kwargs.setdefault("log_level", "DEBUG")
        super().__init__(name, **kwargs)
        self.history_size = history_size
        self.history: list[tuple[int, int]] = []
        self.count = 0

    def trace(self, pc: int, word: int):
        """Record and log the instruction ``word`` fetched from ``pc``."""
        self.count += 1
        self.history.append((pc, word))
        if len(self.history) > self.history_size:
            self.history.pop(0)
        if self.is_enabled_for("DEBUG"):
            self.debug(format_trace_line(pc, word))

    def dump_history(self, level: str = "INFO"):
        """Log the most recent instructions, oldest first."""
        self.log(level, f"Last {len(self.history)} of {self.count} instructions:")
        for pc, word in self.history:
            self.log(level, "  " + format_trace_line(pc, word))


def format_trace_line(pc: int, word: int) -> str:
    return f"0x{pc:03X}  {word:04X}  {disassemble(word)}"


def log_state_summary(logger: ConsoleLogger, summary: Dict[str, Any], level: str = "INFO"):
    """Log a mapping of register/timer values in a compact block."""
    logger.log(level, "=" * 60)
    for key, value in summary.items():
        if isinstance(value, int):
            logger.log(level, f"  {key:>6s}: 0x{value:04X} ({value})")
        else:
            logger.log(level, f"  {key:>6s}: {value}")
    logger.log(level, "=" * 60)


def build_progress_bar(n: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """Build tqdm progress bar for ``n`` emulator ticks."""
    if desc is None:
        desc = f"Running ({n:,} ticks)"

    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)

    return tqdm(total=n, desc=desc, unit="tick", **kwargs)
