"""Tests for instruction decoding."""

import pytest
from chip8core import decode, identify, Op


def test_decode_operands():
    decoded = decode(0xD123)
    assert decoded.raw == 0xD123
    assert decoded.opcode == 0xD
    assert decoded.x == 0x1
    assert decoded.y == 0x2
    assert decoded.n == 0x3
    assert decoded.nn == 0x23
    assert decoded.nnn == 0x123
    assert decoded.op is Op.DISPLAY


@pytest.mark.parametrize("instruction, op", [
    (0x0123, Op.MACHINE_CALL),
    (0x00E0, Op.CLEAR_SCREEN),
    (0x00EE, Op.RETURN),
    (0x1234, Op.JUMP),
    (0x2345, Op.CALL),
    (0x3456, Op.SKIP_IF_EQUAL_IMMEDIATE),
    (0x4567, Op.SKIP_IF_NOT_EQUAL_IMMEDIATE),
    (0x5670, Op.SKIP_IF_EQUAL_REGISTER),
    (0x6789, Op.SET),
    (0x789A, Op.ADD),
    (0x8AB0, Op.ALU_SET),
    (0x8AB1, Op.ALU_OR),
    (0x8AB2, Op.ALU_AND),
    (0x8AB3, Op.ALU_XOR),
    (0x8AB4, Op.ALU_ADD),
    (0x8AB5, Op.ALU_SUB_XY),
    (0x8AB6, Op.ALU_SHIFT_RIGHT),
    (0x8AB7, Op.ALU_SUB_YX),
    (0x8ABE, Op.ALU_SHIFT_LEFT),
    (0x9AB0, Op.SKIP_IF_NOT_EQUAL_REGISTER),
    (0xABCD, Op.SET_INDEX),
    (0xBCDE, Op.JUMP_WITH_OFFSET),
    (0xCDEF, Op.RANDOM),
    (0xDEF1, Op.DISPLAY),
    (0xE19E, Op.SKIP_IF_KEY),
    (0xE1A1, Op.SKIP_IF_NOT_KEY),
    (0xF107, Op.GET_DELAY_TIMER),
    (0xF10A, Op.WAIT_FOR_KEY),
    (0xF115, Op.SET_DELAY_TIMER),
    (0xF118, Op.SET_SOUND_TIMER),
    (0xF11E, Op.ADD_TO_INDEX),
    (0xF129, Op.FONT_CHARACTER),
    (0xF133, Op.BCD_CONVERSION),
    (0xF155, Op.STORE_REGISTERS),
    (0xF165, Op.LOAD_REGISTERS),
])
def test_identify_every_instruction(instruction, op):
    assert identify(instruction) is op


def test_every_op_has_a_case():
    """35 instructions plus UNKNOWN."""
    assert len(Op) == 36


@pytest.mark.parametrize("instruction", [0x5671, 0x9AB8, 0x8AB8, 0x8ABF, 0xE100, 0xF1A0])
def test_identify_unknown(instruction):
    assert identify(instruction) is Op.UNKNOWN


def test_decode_accepts_array_scalars(fresh_state):
    decoded = decode(fresh_state.memory[0] * 0 + 0x12)
    assert decoded.op is Op.MACHINE_CALL
    assert decoded.nnn == 0x12
