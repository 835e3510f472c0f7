"""Main CHIP-8 emulator execution engine."""

from typing import Callable, Optional

import jax.numpy as jnp
from chip8core.state import EmulatorState, RunState, check_memory_range
from chip8core.decode import DecodedInstruction, Op, decode
from chip8core.constants import PROGRAM_START, ROM_CAPACITY
from chip8core.errors import FatalError, RomTooLarge, UnknownOpcode
from chip8core.logging import ExecutionLogger, build_progress_bar
from chip8core.instructions.system import execute_machine_call, execute_clear_screen, execute_return
from chip8core.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from chip8core.instructions.alu import execute_alu_operation
from chip8core.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8core.instructions.display import execute_display
from chip8core.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]

# Every Op except UNKNOWN has exactly one handler
HANDLERS: dict[Op, Handler] = {
    Op.MACHINE_CALL: execute_machine_call,
    Op.CLEAR_SCREEN: execute_clear_screen,
    Op.RETURN: execute_return,
    Op.JUMP: execute_jump,
    Op.CALL: execute_call,
    Op.SKIP_IF_EQUAL_IMMEDIATE: execute_skip_if_equal_immediate,
    Op.SKIP_IF_NOT_EQUAL_IMMEDIATE: execute_skip_if_not_equal_immediate,
    Op.SKIP_IF_EQUAL_REGISTER: execute_skip_if_equal_register,
    Op.SET: execute_set,
    Op.ADD: execute_add,
    Op.ALU_SET: execute_alu_operation,
    Op.ALU_OR: execute_alu_operation,
    Op.ALU_AND: execute_alu_operation,
    Op.ALU_XOR: execute_alu_operation,
    Op.ALU_ADD: execute_alu_operation,
    Op.ALU_SUB_XY: execute_alu_operation,
    Op.ALU_SHIFT_RIGHT: execute_alu_operation,
    Op.ALU_SUB_YX: execute_alu_operation,
    Op.ALU_SHIFT_LEFT: execute_alu_operation,
    Op.SKIP_IF_NOT_EQUAL_REGISTER: execute_skip_if_not_equal_register,
    Op.SET_INDEX: execute_set_index,
    Op.JUMP_WITH_OFFSET: execute_jump_with_offset,
    Op.RANDOM: execute_random,
    Op.DISPLAY: execute_display,
    Op.SKIP_IF_KEY: execute_skip_if_key,
    Op.SKIP_IF_NOT_KEY: execute_skip_if_not_key,
    Op.GET_DELAY_TIMER: execute_get_delay_timer,
    Op.WAIT_FOR_KEY: execute_wait_for_key,
    Op.SET_DELAY_TIMER: execute_set_delay_timer,
    Op.SET_SOUND_TIMER: execute_set_sound_timer,
    Op.ADD_TO_INDEX: execute_add_to_index,
    Op.FONT_CHARACTER: execute_font_character,
    Op.BCD_CONVERSION: execute_bcd_conversion,
    Op.STORE_REGISTERS: execute_store_registers,
    Op.LOAD_REGISTERS: execute_load_registers,
}


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Expects PC to already point past the instruction, as left by ``fetch``.
    """
    decoded_instruction = decode(instruction)
    if decoded_instruction.op is Op.UNKNOWN:
        raise UnknownOpcode(
            "no instruction matches this encoding", state.instruction_address, decoded_instruction.raw
        )
    return HANDLERS[decoded_instruction.op](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a 16-bit word, most significant byte first."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC by 2."""
    pc = int(state.pc)
    check_memory_range(pc, 2, pc)
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=jnp.asarray(pc + 2, dtype=jnp.uint16)), instruction


def step(state: EmulatorState, logger: Optional[ExecutionLogger] = None) -> EmulatorState:
    """Run one fetch-decode-execute cycle.

    While the machine awaits a key press the state is returned unchanged.
    """
    if state.run_state is RunState.AWAITING_KEY:
        return state
    address = int(state.pc)
    state, instruction = fetch(state)
    if logger is not None:
        logger.log_instruction(address, instruction)
    return execute(state, instruction)


def tick(state: EmulatorState) -> EmulatorState:
    """Decrement delay and sound timers by one, stopping at zero.

    Called by the host at its own cadence (60 Hz on real hardware).
    """
    return state.replace(
        delay_timer=jnp.where(state.delay_timer > 0, state.delay_timer - 1, state.delay_timer),
        sound_timer=jnp.where(state.sound_timer > 0, state.sound_timer - 1, state.sound_timer),
    )


def run(
    state: EmulatorState,
    num_instructions: int,
    instructions_per_tick: Optional[int] = None,
    logger: Optional[ExecutionLogger] = None,
    show_progress: bool = False,
) -> EmulatorState:
    """Execute up to ``num_instructions`` instructions.

    Args:
        state: Starting emulator state
        num_instructions: Maximum number of instructions to execute
        instructions_per_tick: If given, timers tick after every this many
            executed instructions (e.g. 700 Hz CPU / 60 Hz timers ~ 11)
        logger: Receives instruction traces, faults and a run summary
        show_progress: Display a tqdm progress bar

    Returns:
        Final state. The run stops early when the machine starts waiting for
        a key; fatal faults are logged and re-raised.
    """
    if instructions_per_tick is not None and instructions_per_tick <= 0:
        raise ValueError(f"instructions_per_tick must be positive, got {instructions_per_tick}")

    executed = 0
    with build_progress_bar(num_instructions, enabled=show_progress) as progress:
        while executed < num_instructions:
            if state.run_state is RunState.AWAITING_KEY:
                if logger is not None:
                    logger.log_key_wait(state)
                break
            try:
                state = step(state, logger)
            except FatalError as error:
                if logger is not None:
                    logger.log_fault(error)
                raise
            executed += 1
            progress.update(1)
            if instructions_per_tick and executed % instructions_per_tick == 0:
                state = tick(state)

    if logger is not None:
        logger.log_run_end(state, executed)
    return state


def load_rom(state: EmulatorState, rom_data: bytes) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    if len(rom_data) > ROM_CAPACITY:
        raise RomTooLarge(len(rom_data), ROM_CAPACITY)
    if not rom_data:
        return state
    rom_array = jnp.array(list(rom_data), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(rom_data)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom_file(state: EmulatorState, filename: str) -> EmulatorState:
    """Read a ROM image from disk and load it at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_rom(state, rom_data)
