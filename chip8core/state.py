"""CHIP-8 emulator state structures."""

import enum
from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8core.config import Quirks
from chip8core.constants import (
    MEMORY_SIZE, PROGRAM_START, FONT_START, FONT_DATA, SCREEN_WIDTH, SCREEN_HEIGHT,
    STACK_SIZE, NUM_REGISTERS, NUM_KEYS,
)
from chip8core.errors import MemoryAccessError


class RunState(enum.Enum):
    """Fetch loop state."""
    RUNNING = "running"
    AWAITING_KEY = "awaiting_key"


@dataclass
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray
    pointer: jnp.ndarray


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.Array
    memory: jnp.ndarray
    pc: jnp.ndarray
    display: jnp.ndarray
    stack: StackState
    delay_timer: jnp.ndarray
    sound_timer: jnp.ndarray
    keypad: jnp.ndarray
    V: jnp.ndarray
    I: jnp.ndarray
    awaiting_key: jnp.ndarray
    key_register: jnp.ndarray
    quirks: Quirks = field(pytree_node=False, default=Quirks())

    @property
    def run_state(self) -> RunState:
        return RunState.AWAITING_KEY if bool(self.awaiting_key) else RunState.RUNNING

    @property
    def instruction_address(self) -> int:
        """Address of the instruction being executed (PC has already moved past it)."""
        return (int(self.pc) - 2) & 0xFFFF


def create_state(rng: Optional[jax.Array] = None, quirks: Quirks = Quirks()) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    if rng is None:
        rng = jax.random.PRNGKey(0)
    memory = jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8)
    memory = memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(jnp.array(FONT_DATA, dtype=jnp.uint8))
    return EmulatorState(
        rng=rng,
        memory=memory,
        pc=jnp.asarray(PROGRAM_START, dtype=jnp.uint16),
        display=jnp.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=jnp.bool_),
        stack=StackState(
            data=jnp.zeros(STACK_SIZE, dtype=jnp.uint16),
            pointer=jnp.zeros((), dtype=jnp.uint8),
        ),
        delay_timer=jnp.zeros((), dtype=jnp.uint8),
        sound_timer=jnp.zeros((), dtype=jnp.uint8),
        keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_),
        V=jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8),
        I=jnp.zeros((), dtype=jnp.uint16),
        awaiting_key=jnp.zeros((), dtype=jnp.bool_),
        key_register=jnp.zeros((), dtype=jnp.uint8),
        quirks=quirks,
    )


def check_memory_range(start: int, length: int, pc: int, instruction: Optional[int] = None) -> None:
    """Raise MemoryAccessError unless [start, start + length) lies inside memory."""
    if start < 0 or start + length > MEMORY_SIZE:
        raise MemoryAccessError(
            f"access to 0x{start:04X}..0x{start + length - 1:04X} is outside memory",
            pc, instruction,
        )


def check_memory_write(start: int, length: int, pc: int, instruction: Optional[int] = None) -> None:
    """Like check_memory_range, and also reject writes into the font glyphs."""
    check_memory_range(start, length, pc, instruction)
    font_end = FONT_START + len(FONT_DATA)
    if start < font_end and start + length > FONT_START:
        raise MemoryAccessError(
            f"write to 0x{start:04X}..0x{start + length - 1:04X} overlaps font data "
            f"at 0x{FONT_START:04X}..0x{font_end - 1:04X}",
            pc, instruction,
        )
