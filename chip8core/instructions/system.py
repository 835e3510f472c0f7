"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8core.state import EmulatorState
from chip8core.decode import DecodedInstruction
from chip8core.errors import StackUnderflow, UnsupportedOpcode
from chip8core.stack import is_empty, pop


def execute_machine_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """0NNN - Call machine language routine at NNN (not supported)."""
    raise UnsupportedOpcode(
        f"machine language routine at 0x{instruction.nnn:03X} cannot be executed",
        state.instruction_address, instruction.raw,
    )


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    if is_empty(state.stack):
        raise StackUnderflow("return with empty call stack", state.instruction_address, instruction.raw)
    stack, address = pop(state.stack)
    return state.replace(stack=stack, pc=address)
