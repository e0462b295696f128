"""CHIP-8 execution errors.

All errors are recoverable: the engine raises them out of ``tick`` and
``handle_opcode`` without touching its stored state, so the host can halt,
skip the faulting instruction or reset.
"""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all emulator errors."""

    #: Address of the faulting instruction, filled in by the engine on tick.
    pc: Optional[int] = None


class InvalidOpcode(Chip8Error):
    """Unrecognized instruction word (top-level or sub-opcode)."""

    def __init__(self, word: int):
        self.word = int(word)
        super().__init__(f"Invalid opcode 0x{self.word:04X}")


class StackUnderflow(Chip8Error):
    """Return executed with an empty call stack."""

    def __init__(self):
        super().__init__("Return with empty call stack")


class StackOverflow(Chip8Error):
    """Call executed with the call stack already full."""

    def __init__(self, depth: int):
        self.depth = int(depth)
        super().__init__(f"Call stack overflow (max depth {self.depth})")


class MemoryOutOfBounds(Chip8Error):
    """Memory access past the end of the 4 KiB address space."""

    def __init__(self, address: int, length: int = 1):
        self.address = int(address)
        self.length = int(length)
        super().__init__(
            f"Memory access 0x{self.address:04X}+{self.length} out of bounds"
        )
