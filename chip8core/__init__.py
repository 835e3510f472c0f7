"""CHIP-8 interpreter package."""

from chip8core.config import Quirks
from chip8core.state import EmulatorState, StackState, RunState, create_state
from chip8core.emulator import execute, fetch, step, tick, run, load_rom, load_rom_file
from chip8core.decode import DecodedInstruction, Op, decode, identify
from chip8core.disassemble import disassemble
from chip8core.keypad import press_key, release_key, set_keypad, pressed_keys
from chip8core.errors import (
    Chip8Error, RomTooLarge, FatalError, StackOverflow, StackUnderflow,
    UnsupportedOpcode, UnknownOpcode, MemoryAccessError,
)
from chip8core.constants import (
    MEMORY_SIZE, PROGRAM_START, ROM_CAPACITY, FONT_START, FONT_DATA, GLYPH_SIZE,
    SCREEN_WIDTH, SCREEN_HEIGHT, STACK_SIZE,
)
from chip8core.rendering import display_to_text

__all__ = [
    "Quirks",
    "EmulatorState",
    "StackState",
    "RunState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "tick",
    "run",
    "load_rom",
    "load_rom_file",
    "DecodedInstruction",
    "Op",
    "decode",
    "identify",
    "disassemble",
    "press_key",
    "release_key",
    "set_keypad",
    "pressed_keys",
    "Chip8Error",
    "RomTooLarge",
    "FatalError",
    "StackOverflow",
    "StackUnderflow",
    "UnsupportedOpcode",
    "UnknownOpcode",
    "MemoryAccessError",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "ROM_CAPACITY",
    "FONT_START",
    "FONT_DATA",
    "GLYPH_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "display_to_text",
]
