"""CHIP-8 ALU operations (8xxx)."""

from typing import Callable, Optional

import jax.numpy as jnp
from chip8core.constants import FLAG_REGISTER
from chip8core.state import EmulatorState
from chip8core.decode import DecodedInstruction, Op

# (vx, vy) -> (result, flag); a flag of None leaves VF untouched
AluOperation = Callable[[jnp.ndarray, jnp.ndarray], tuple[jnp.ndarray, Optional[jnp.ndarray]]]


def alu_set(vx, vy):
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx, vy):
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx, vy):
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx, vy):
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx, vy):
    """8XY4 - Add: VX += VY, VF = carry."""
    result = jnp.astype(vx, jnp.int32) + vy
    carry = jnp.astype(result > 0xFF, jnp.uint8)
    return jnp.astype(result & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx, vy):
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    no_borrow = jnp.astype(vx >= vy, jnp.uint8)
    result = (jnp.astype(vx, jnp.int32) - vy) & 0xFF
    return jnp.astype(result, jnp.uint8), no_borrow


def alu_sub_yx(vx, vy):
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    no_borrow = jnp.astype(vy >= vx, jnp.uint8)
    result = (jnp.astype(vy, jnp.int32) - vx) & 0xFF
    return jnp.astype(result, jnp.uint8), no_borrow


def alu_shift_right(value, _):
    """8XY6 - Shift right by one, VF = bit shifted out."""
    shifted_bit = jnp.astype(value & 1, jnp.uint8)
    return jnp.astype(value >> 1, jnp.uint8), shifted_bit


def alu_shift_left(value, _):
    """8XYE - Shift left by one, VF = bit shifted out."""
    shifted_bit = jnp.astype((value & 0x80) >> 7, jnp.uint8)
    return jnp.astype((jnp.astype(value, jnp.int32) << 1) & 0xFF, jnp.uint8), shifted_bit


ALU_OPERATIONS: dict[Op, AluOperation] = {
    Op.ALU_SET: alu_set,
    Op.ALU_OR: alu_or,
    Op.ALU_AND: alu_and,
    Op.ALU_XOR: alu_xor,
    Op.ALU_ADD: alu_add,
    Op.ALU_SUB_XY: alu_sub_xy,
    Op.ALU_SHIFT_RIGHT: alu_shift_right,
    Op.ALU_SUB_YX: alu_sub_yx,
    Op.ALU_SHIFT_LEFT: alu_shift_left,
}

SHIFT_OPERATIONS = (Op.ALU_SHIFT_RIGHT, Op.ALU_SHIFT_LEFT)


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]

    if instruction.op in SHIFT_OPERATIONS and state.quirks.shift_uses_vy:
        vx = vy

    result, vf = ALU_OPERATIONS[instruction.op](vx, vy)

    # VF is written last so the flag wins when X is F
    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
