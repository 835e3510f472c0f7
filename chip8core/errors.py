"""CHIP-8 interpreter error types."""

from typing import Optional


class Chip8Error(Exception):
    """Base class for all interpreter errors."""


class RomTooLarge(Chip8Error):
    """ROM image does not fit between the program start and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"ROM is {size} bytes but only {capacity} bytes fit in memory")


class FatalError(Chip8Error):
    """Fault that halts the fetch-decode-execute loop.

    Attributes:
        pc: Address of the faulting instruction.
        instruction: Raw 16-bit instruction word, or None if the fault
            happened before a word could be fetched.
    """

    def __init__(self, message: str, pc: int, instruction: Optional[int] = None):
        self.pc = pc
        self.instruction = instruction
        detail = f"pc=0x{pc:03X}"
        if instruction is not None:
            detail += f", instruction=0x{instruction:04X}"
        super().__init__(f"{message} ({detail})")


class StackOverflow(FatalError):
    """Subroutine call with all stack slots in use."""


class StackUnderflow(FatalError):
    """Return with an empty call stack."""


class UnsupportedOpcode(FatalError):
    """Valid instruction that the interpreter deliberately does not implement."""


class UnknownOpcode(FatalError):
    """Instruction word that matches no known encoding."""


class MemoryAccessError(FatalError):
    """Read or write outside the 4 KiB address space."""
